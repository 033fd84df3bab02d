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

""" Single WAV to C array conversion """

from pathlib import Path
from typing import BinaryIO, Tuple, Union

from .decoder import AudioFormat, SampleEncoding, WavDecoder
from .errors import UnsupportedBitDepth
from .serializer import RenderedOutput, SerializationOptions, render

MAX_BITS_PER_SAMPLE = 32


def default_array_name(path: Union[str, Path]) -> str:
    """Input file stem, lowercased ASCII."""
    stem = Path(path).stem
    return "".join(c.lower() if c.isascii() else c for c in stem)


def convert(
    stream: BinaryIO,
    options: SerializationOptions,
    max_bits_per_sample: int = MAX_BITS_PER_SAMPLE,
) -> Tuple[AudioFormat, RenderedOutput]:
    """
    Decode the WAV in *stream* and render it.

    *max_bits_per_sample* narrows the accepted bit depth, e.g. 16 for targets
    that only play 16-bit audio. Nothing is rendered unless every check passes.
    """
    decoder = WavDecoder(stream)
    fmt = decoder.read_format()
    if (
        fmt.encoding is SampleEncoding.INTEGER
        and fmt.bits_per_sample > max_bits_per_sample
    ):
        raise UnsupportedBitDepth(fmt.bits_per_sample, limit=max_bits_per_sample)
    samples = decoder.decode_samples(fmt)
    return fmt, render(samples, fmt, options)
