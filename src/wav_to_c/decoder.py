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

""" RIFF/WAVE parsing and integer PCM sample decoding """

import struct
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Iterator, Optional, Tuple

import numpy as np

from .errors import (
    MalformedContainer,
    UnsupportedBitDepth,
    UnsupportedChannelLayout,
    UnsupportedEncoding,
)

#################################################################################
# Container layout
#################################################################################

RIFF_HEADER = struct.Struct("<4sI4s")
CHUNK_HEADER = struct.Struct("<4sI")
FMT_CHUNK = struct.Struct("<HHIIHH")
FMT_EXTENSIBLE = struct.Struct("<HHIH14s")  # cbSize, valid bits, mask, sub format

WAVE_FORMAT_PCM = 0x0001
WAVE_FORMAT_IEEE_FLOAT = 0x0003
WAVE_FORMAT_EXTENSIBLE = 0xFFFE

# Trailing 14 bytes shared by the KSDATAFORMAT_SUBTYPE_* GUIDs
KSDATAFORMAT_GUID_TAIL = b"\x00\x00\x00\x00\x10\x00\x80\x00\x00\xaa\x00\x38\x9b\x71"

MAX_CONTAINER_BYTES = 4


class SampleEncoding(Enum):
    INTEGER = "integer"
    FLOAT = "float"


_ENCODINGS = {
    WAVE_FORMAT_PCM: SampleEncoding.INTEGER,
    WAVE_FORMAT_IEEE_FLOAT: SampleEncoding.FLOAT,
}


@dataclass(frozen=True)
class AudioFormat:
    """Format metadata read from the ``fmt `` chunk."""

    sample_rate: int
    channel_count: int
    bits_per_sample: int
    encoding: SampleEncoding = SampleEncoding.INTEGER
    block_align: int = 0  # 0 = tightly packed

    @property
    def container_bytes(self) -> int:
        """Bytes one sample of one channel occupies in the data chunk."""
        if self.block_align:
            return self.block_align // max(self.channel_count, 1)
        return (self.bits_per_sample + 7) // 8

    def summary(self) -> str:
        return (
            f"Sample rate: {self.sample_rate} Hz, "
            f"Channels: {self.channel_count}, "
            f"Bits per sample: {self.bits_per_sample}"
        )


def sample_dtype(bits_per_sample: int) -> np.dtype:
    """Signed integer type wide enough for *bits_per_sample*."""
    if 0 < bits_per_sample <= 8:
        return np.dtype(np.int8)
    if 8 < bits_per_sample <= 16:
        return np.dtype(np.int16)
    if 16 < bits_per_sample <= 32:
        return np.dtype(np.int32)
    raise UnsupportedBitDepth(bits_per_sample)


#################################################################################
# Decoder
#################################################################################


def _iter_chunks(raw: memoryview, offset: int) -> Iterator[Tuple[bytes, memoryview]]:
    while offset < len(raw):
        if len(raw) - offset < CHUNK_HEADER.size:
            raise MalformedContainer(f"Truncated chunk header at offset {offset}")
        chunk_id, size = CHUNK_HEADER.unpack_from(raw, offset)
        offset += CHUNK_HEADER.size
        remaining = len(raw) - offset
        if size > remaining:
            raise MalformedContainer(
                f"Chunk {chunk_id!r} declares {size} bytes but only {remaining} remain"
            )
        yield chunk_id, raw[offset : offset + size]
        offset += size + (size & 1)  # chunks are word aligned


def _parse_fmt(body: memoryview) -> AudioFormat:
    if len(body) < FMT_CHUNK.size:
        raise MalformedContainer(f"fmt chunk is {len(body)} bytes; expected at least 16")
    tag, channels, rate, _byte_rate, block_align, bits = FMT_CHUNK.unpack_from(body)

    if tag == WAVE_FORMAT_EXTENSIBLE:
        if len(body) < FMT_CHUNK.size + FMT_EXTENSIBLE.size:
            raise MalformedContainer("Truncated WAVE_FORMAT_EXTENSIBLE fmt chunk")
        _cb_size, valid_bits, _mask, sub_tag, guid_tail = FMT_EXTENSIBLE.unpack_from(
            body, FMT_CHUNK.size
        )
        if guid_tail != KSDATAFORMAT_GUID_TAIL:
            raise UnsupportedEncoding(tag)
        tag = sub_tag
        if valid_bits:
            bits = valid_bits

    if tag not in _ENCODINGS:
        raise UnsupportedEncoding(tag)
    if rate == 0:
        raise MalformedContainer("Sample rate is 0 Hz")

    return AudioFormat(
        sample_rate=rate,
        channel_count=channels,
        bits_per_sample=bits,
        encoding=_ENCODINGS[tag],
        block_align=block_align,
    )


def _unpack_container(data: memoryview, width: int) -> np.ndarray:
    """Little-endian samples of *width* bytes as an int32 array."""
    if width == 1:
        # 8-bit WAV is unsigned with a 128 offset
        return np.frombuffer(data, dtype=np.uint8).astype(np.int32) - 128
    if width == 2:
        return np.frombuffer(data, dtype="<i2").astype(np.int32)
    if width == 3:
        b = np.frombuffer(data, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        values = b[:, 0] | (b[:, 1] << 8) | (b[:, 2] << 16)
        return (values ^ 0x800000) - 0x800000
    return np.frombuffer(data, dtype="<i4").astype(np.int32)


def downmix(interleaved: np.ndarray) -> np.ndarray:
    """Average left/right pairs, truncating toward zero."""
    pairs = interleaved.astype(np.int64).reshape(-1, 2)
    total = pairs[:, 0] + pairs[:, 1]
    return np.sign(total) * (np.abs(total) // 2)


class WavDecoder:
    """
    Decode an in-memory copy of a WAV stream.

    ``read_format`` parses the chunk structure; ``decode_samples`` validates
    the format and returns one signed integer per frame, stereo merged to mono.
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._data: Optional[memoryview] = None

    def read_format(self) -> AudioFormat:
        raw = memoryview(self._stream.read())
        if len(raw) < RIFF_HEADER.size:
            raise MalformedContainer("File is too short to be a WAV file")
        riff, _riff_size, wave = RIFF_HEADER.unpack_from(raw)
        if riff != b"RIFF" or wave != b"WAVE":
            raise MalformedContainer("Missing RIFF/WAVE header")

        fmt = None
        for chunk_id, body in _iter_chunks(raw, RIFF_HEADER.size):
            if chunk_id == b"fmt " and fmt is None:
                fmt = _parse_fmt(body)
            elif chunk_id == b"data":
                if fmt is None:
                    raise MalformedContainer("data chunk precedes fmt chunk")
                self._data = body
                return fmt

        if fmt is None:
            raise MalformedContainer("Missing fmt chunk")
        raise MalformedContainer("Missing data chunk")

    def decode_samples(self, fmt: AudioFormat) -> np.ndarray:
        if fmt.encoding is not SampleEncoding.INTEGER:
            raise UnsupportedEncoding(fmt.encoding.value)
        dtype = sample_dtype(fmt.bits_per_sample)
        if fmt.channel_count not in (1, 2):
            raise UnsupportedChannelLayout(fmt.channel_count)

        if fmt.block_align and fmt.block_align % fmt.channel_count:
            raise MalformedContainer(
                f"Block align {fmt.block_align} does not split into "
                f"{fmt.channel_count} channels"
            )
        width = fmt.container_bytes
        if width * 8 < fmt.bits_per_sample or width > MAX_CONTAINER_BYTES:
            raise MalformedContainer(
                f"{width}-byte sample container cannot hold "
                f"{fmt.bits_per_sample}-bit samples"
            )

        if self._data is None:
            self.read_format()
        frame_bytes = width * fmt.channel_count
        if len(self._data) % frame_bytes:
            raise MalformedContainer(
                f"data chunk of {len(self._data)} bytes is not a whole number "
                f"of {frame_bytes}-byte frames"
            )

        values = _unpack_container(self._data, width)
        shift = width * 8 - fmt.bits_per_sample
        if shift:
            # samples are left-justified within their container
            values = values >> shift
        if fmt.channel_count == 2:
            values = downmix(values)

        samples = values.astype(dtype)
        samples.setflags(write=False)
        return samples


def decode(stream: BinaryIO) -> Tuple[AudioFormat, np.ndarray]:
    decoder = WavDecoder(stream)
    fmt = decoder.read_format()
    return fmt, decoder.decode_samples(fmt)
