"""
Copyright (C) 2025 Yunis <schnackus>,
                   Patrick Pedersen <ctx.xda@gmail.com>,
                   TuDo Makerspace

This program is free software: you can redistribute it and/or modify it under
the terms of the GNU General Public License as published by the Free Software
Foundation, either version 3 of the License, or (at your option) any later
version.

This program is distributed in the hope that it will be useful, but WITHOUT
ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
FOR A PARTICULAR PURPOSE. See the GNU General Public License for more
details.

You should have received a copy of the GNU General Public License along with
this program. If not, see <https://www.gnu.org/licenses/>.
"""

"""
gen_wav.py - write sine wave WAV files for testing the converter

Integer PCM goes through pydub, float output is written as a plain
format-tag-3 RIFF file since pydub only handles integer samples.

Usage:  gen-wav -c 2 -b 16 -s 44100 -d 1 tests/fixtures/stereo_16bit.wav
"""

import argparse
import struct
from pathlib import Path
from typing import Union

import numpy as np
from pydub import AudioSegment

from .decoder import WAVE_FORMAT_IEEE_FLOAT, sample_dtype

INT_BIT_DEPTHS = (8, 16, 32)  # sample widths pydub can export


def amplitude(bits_per_sample: int) -> float:
    """Peak value of the signed type bucket for *bits_per_sample*."""
    return float(np.iinfo(sample_dtype(bits_per_sample)).max)


def sine_samples(
    sample_rate: int, bits_per_sample: int, pitch: float = 440.0, duration: float = 1.0
) -> np.ndarray:
    count = int(sample_rate * duration)
    t = np.arange(count, dtype=np.float64)
    wave = amplitude(bits_per_sample) * np.sin(2 * np.pi * pitch * t / sample_rate)
    # astype truncates toward zero
    return wave.astype(np.int64).astype(sample_dtype(bits_per_sample))


def write_float_wav(path: Union[str, Path], samples: np.ndarray, sample_rate: int, channels: int) -> None:
    data = np.asarray(samples, dtype="<f4").tobytes()
    block_align = 4 * channels
    fmt = struct.pack(
        "<HHIIHH",
        WAVE_FORMAT_IEEE_FLOAT,
        channels,
        sample_rate,
        sample_rate * block_align,
        block_align,
        32,
    )
    with open(path, "wb") as f:
        f.write(struct.pack("<4sI4s", b"RIFF", 4 + 8 + len(fmt) + 8 + len(data), b"WAVE"))
        f.write(struct.pack("<4sI", b"fmt ", len(fmt)) + fmt)
        f.write(struct.pack("<4sI", b"data", len(data)) + data)


def generate_wav(
    path: Union[str, Path],
    sample_rate: int = 44100,
    channels: int = 1,
    bits_per_sample: int = 16,
    pitch: float = 440.0,
    duration: float = 1.0,
    sample_format: str = "int",
) -> None:
    """Write a sine wave, the same value on every channel of a frame."""
    if sample_format == "float":
        if bits_per_sample != 32:
            raise ValueError("Float WAV files must be 32-bit")
        count = int(sample_rate * duration)
        t = np.arange(count, dtype=np.float64)
        wave = np.sin(2 * np.pi * pitch * t / sample_rate)
        write_float_wav(path, np.repeat(wave, channels), sample_rate, channels)
        return

    if bits_per_sample not in INT_BIT_DEPTHS:
        raise ValueError(
            f"{bits_per_sample}-bit integer output is not supported; use one of {INT_BIT_DEPTHS}"
        )
    samples = sine_samples(sample_rate, bits_per_sample, pitch, duration)
    width = bits_per_sample // 8
    frames = np.repeat(samples, channels).astype(f"<i{width}")
    audio = AudioSegment(
        data=frames.tobytes(),
        sample_width=width,
        frame_rate=sample_rate,
        channels=channels,
    )
    # pydub stores 8-bit audio signed and converts it to unsigned on export
    audio.export(str(path), format="wav").close()


def main() -> None:
    ap = argparse.ArgumentParser(
        description="Generate a sine wave WAV file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("output", type=Path, help="Path to the output WAV file")
    ap.add_argument("-s", "--sample-rate", type=int, default=44100, help="Sample rate in Hz")
    ap.add_argument("-c", "--channels", type=int, default=1, help="Number of channels")
    ap.add_argument("-b", "--bits-per-sample", type=int, default=16, help="Bits per sample")
    ap.add_argument("-p", "--pitch", type=float, default=440.0, help="Pitch in Hz")
    ap.add_argument("-d", "--duration", type=float, default=1.0, help="Duration in seconds")
    ap.add_argument(
        "-F", "--sample-format", choices=["int", "float"], default="int", help="Sample format"
    )
    args = ap.parse_args()

    try:
        generate_wav(
            args.output,
            sample_rate=args.sample_rate,
            channels=args.channels,
            bits_per_sample=args.bits_per_sample,
            pitch=args.pitch,
            duration=args.duration,
            sample_format=args.sample_format,
        )
    except ValueError as err:
        ap.error(str(err))
    print(f"Wrote {args.output} ({args.channels} ch, {args.bits_per_sample}-bit {args.sample_format}, {args.sample_rate} Hz)")


if __name__ == "__main__":
    main()
