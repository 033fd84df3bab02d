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

""" Convert PCM WAV files into C arrays for firmware """

__version__ = "0.3.0"
TOOL_NAME = "wav-to-c"

from .errors import (
    WavToCError,
    MalformedContainer,
    UnsupportedEncoding,
    UnsupportedBitDepth,
    UnsupportedChannelLayout,
    SampleCountExceeded,
    DestinationConflict,
    InvalidArrayName,
    InputNotFound,
)
from .decoder import AudioFormat, SampleEncoding, WavDecoder, decode
from .serializer import (
    NumericBase,
    RenderedOutput,
    SerializationOptions,
    check_bounds,
    render,
    sanitize_identifier,
)
from .convert import convert

__all__ = [
    "__version__",
    "TOOL_NAME",
    "WavToCError",
    "MalformedContainer",
    "UnsupportedEncoding",
    "UnsupportedBitDepth",
    "UnsupportedChannelLayout",
    "SampleCountExceeded",
    "DestinationConflict",
    "InvalidArrayName",
    "InputNotFound",
    "AudioFormat",
    "SampleEncoding",
    "WavDecoder",
    "decode",
    "NumericBase",
    "RenderedOutput",
    "SerializationOptions",
    "check_bounds",
    "render",
    "sanitize_identifier",
    "convert",
]
