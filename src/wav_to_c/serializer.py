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

""" Render decoded samples as a C array and companion header """

import string
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from . import TOOL_NAME, __version__
from .decoder import AudioFormat, sample_dtype
from .errors import InvalidArrayName, SampleCountExceeded

SAMPLES_PER_LINE = 8
SIZE_SUFFIX = "_SAMPLE_NO"

_IDENTIFIER_CHARS = frozenset(string.ascii_letters + "_")

_C_TYPES = {
    np.dtype(np.int8): "int8_t",
    np.dtype(np.int16): "int16_t",
    np.dtype(np.int32): "int32_t",
}


class NumericBase(Enum):
    DECIMAL = "base10"
    HEX = "base16"


@dataclass(frozen=True)
class SerializationOptions:
    array_name: str
    max_samples: Optional[int] = None
    emit_comment: bool = True
    numeric_base: NumericBase = NumericBase.DECIMAL
    prefix_text: Optional[str] = None
    emit_header: bool = False
    source_name: str = ""


@dataclass(frozen=True)
class RenderedOutput:
    body: str
    header: Optional[str] = None


#################################################################################
# Helpers
#################################################################################


def sanitize_identifier(raw_name: str) -> str:
    """
    Turn *raw_name* into a C identifier.

    Whitespace is trimmed, inner spaces become underscores and anything that
    is not an ASCII letter or underscore is dropped. Digits are removed
    wherever they appear, not only at the start.
    """
    name = raw_name.strip().replace(" ", "_")
    name = "".join(c for c in name if c in _IDENTIFIER_CHARS)
    if not name:
        raise InvalidArrayName(raw_name)
    return name


def c_type_for(bits_per_sample: int) -> str:
    return _C_TYPES[sample_dtype(bits_per_sample)]


def _literals(samples: np.ndarray, base: NumericBase, bits_per_sample: int) -> List[str]:
    """
    Sample literals in buffer order.

    Hex values are the two's complement at the width of the C type, so -1 is
    ``0xff`` for 8-bit audio and ``0xffff`` for 16-bit audio.
    """
    if base is NumericBase.HEX:
        width = sample_dtype(bits_per_sample).itemsize
        unsigned = samples.astype(sample_dtype(bits_per_sample)).view(f"u{width}")
        return [f"{v:#x}" for v in unsigned.tolist()]
    return [str(v) for v in samples.tolist()]


def check_bounds(samples: np.ndarray, options: SerializationOptions) -> None:
    if options.max_samples is not None and len(samples) > options.max_samples:
        raise SampleCountExceeded(len(samples), options.max_samples)


def _comment(fmt: AudioFormat, options: SerializationOptions) -> str:
    lines = [
        "/*",
        f" * Generated by {TOOL_NAME} v{__version__} from {options.source_name}",
        f" * {fmt.summary()}",
    ]
    if fmt.channel_count == 2:
        lines.append(" * Stereo channels merged into mono")
    lines.append(" */")
    return "\n".join(lines) + "\n\n"


def _header(name: str, c_type: str, count: int) -> str:
    size_symbol = name.upper() + SIZE_SUFFIX
    return (
        "#pragma once\n"
        "\n"
        "#include <stdint.h>\n"
        "\n"
        f"#define {size_symbol} {count}\n"
        "\n"
        f"extern const {c_type} {name}[{size_symbol}];\n"
    )


#################################################################################
# Rendering
#################################################################################


def render(
    samples: np.ndarray, fmt: AudioFormat, options: SerializationOptions
) -> RenderedOutput:
    """Render *samples* as C source; raises before producing any text."""
    samples = np.asarray(samples)
    check_bounds(samples, options)
    name = sanitize_identifier(options.array_name)
    c_type = c_type_for(fmt.bits_per_sample)
    literals = _literals(samples, options.numeric_base, fmt.bits_per_sample)

    parts = []
    if options.emit_comment:
        parts.append(_comment(fmt, options))
    if options.prefix_text is not None:
        parts.append(options.prefix_text + "\n\n")
    parts.append(f"#define {name.upper()}{SIZE_SUFFIX} {len(literals)}\n\n")
    parts.append(f"const {c_type} {name}[] = {{")
    for i in range(0, len(literals), SAMPLES_PER_LINE):
        row = literals[i : i + SAMPLES_PER_LINE]
        parts.append("\n\t" + "".join(f" {v}," for v in row))
    parts.append("\n};")

    header = _header(name, c_type, len(literals)) if options.emit_header else None
    return RenderedOutput(body="".join(parts), header=header)
