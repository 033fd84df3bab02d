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

""" Failure kinds raised by the conversion pipeline """

from pathlib import Path
from typing import Optional, Union


class WavToCError(Exception):
    """Base class for every failure the converter reports."""


class MalformedContainer(WavToCError):
    """The RIFF/WAVE structure is invalid or truncated."""


class UnsupportedEncoding(WavToCError):
    """The samples are not integer PCM."""

    def __init__(self, encoding: Union[str, int]):
        self.encoding = encoding
        if isinstance(encoding, int):
            msg = f"Unsupported WAV format tag 0x{encoding:04x}; only PCM is supported"
        else:
            msg = f"Only integer PCM audio is supported (got {encoding})"
        super().__init__(msg)


class UnsupportedBitDepth(WavToCError):
    def __init__(self, bits_per_sample: int, limit: Optional[int] = None):
        self.bits_per_sample = bits_per_sample
        self.limit = limit
        if limit is None:
            msg = f"Unsupported bit depth {bits_per_sample}; expected 1 to 32 bits"
        else:
            msg = (
                f"Bit depth {bits_per_sample} exceeds the configured "
                f"limit of {limit} bits"
            )
        super().__init__(msg)


class UnsupportedChannelLayout(WavToCError):
    def __init__(self, channel_count: int):
        self.channel_count = channel_count
        super().__init__(
            f"Only mono or stereo audio is supported (got {channel_count} channels)"
        )


class SampleCountExceeded(WavToCError):
    """More frames were decoded than the configured maximum allows."""

    def __init__(self, actual: int, maximum: int):
        self.actual = actual
        self.maximum = maximum
        super().__init__(f"Too many samples ({actual}), maximum is {maximum}")


class DestinationConflict(WavToCError):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Output file already exists: {self.path}")


class InvalidArrayName(WavToCError):
    def __init__(self, raw_name: str):
        self.raw_name = raw_name
        super().__init__(
            f"Array name {raw_name!r} has no letters or underscores left after sanitizing"
        )


class InputNotFound(WavToCError):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Input file does not exist: {self.path}")
