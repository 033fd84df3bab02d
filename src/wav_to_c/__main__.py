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

""" Command line front end: wav-to-c input.wav -o sound.c """

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .convert import MAX_BITS_PER_SAMPLE, convert, default_array_name
from .errors import DestinationConflict, InputNotFound, WavToCError
from .serializer import NumericBase, SerializationOptions

logger = logging.getLogger("wav_to_c")

# ------------------ tweakables ------------------
MAX_SAMPLES = 220_000  # ~5 s of 16-bit 44.1 kHz audio, ~440 kB
LOG_ENV = "WAV_TO_C_LOG"  # default log level when -v is not given
LOG_FORMAT = "%(levelname)s: %(message)s"
# ------------------------------------------------


def setup_logging(verbose: int) -> None:
    if verbose == 0:
        level = getattr(logging, os.environ.get(LOG_ENV, "WARNING").upper(), logging.WARNING)
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="wav-to-c",
        description="Convert a PCM .wav file to a C array for embedded systems",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("input", type=Path, help="Path to the input .wav file")
    ap.add_argument(
        "-a",
        "--array-name",
        help="Name of the array (default: input file name without extension)",
    )
    ap.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    ap.add_argument(
        "-f",
        "--format",
        choices=[b.value for b in NumericBase],
        default=NumericBase.DECIMAL.value,
        help="Number format for the array values",
    )
    ap.add_argument(
        "-m",
        "--max-samples",
        type=int,
        default=MAX_SAMPLES,
        help="Refuse inputs with more samples than this (0 disables the check)",
    )
    ap.add_argument(
        "-n", "--no-comment", action="store_true", help="Omit the file information comment"
    )
    prefix = ap.add_mutually_exclusive_group()
    prefix.add_argument(
        "-H", "--prefix-file", type=Path, help="File whose contents go before the array"
    )
    prefix.add_argument("-p", "--prefix", help="Text to put before the array")
    ap.add_argument(
        "--header",
        action="store_true",
        help="Also write an extern declaration to <output>.h (requires --output)",
    )
    ap.add_argument(
        "--max-bits",
        type=int,
        choices=[8, 16, 24, 32],
        default=MAX_BITS_PER_SAMPLE,
        help="Highest accepted bit depth",
    )
    ap.add_argument("--force", action="store_true", help="Overwrite existing output files")
    ap.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="More log output (-v info, -vv debug)",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = ap.parse_args(argv)
    if args.header:
        if args.output is None:
            ap.error("--header requires --output")
        if args.output.suffix == ".h":
            ap.error("--header needs an --output path that does not end in .h")
    if args.max_samples < 0:
        ap.error("--max-samples must not be negative")
    return args


def _write(path: Path, text: str) -> None:
    with open(path, "w", newline="\n") as f:
        f.write(text if text.endswith("\n") else text + "\n")
    logger.info("Output written to: %s", path)


def run(args: argparse.Namespace) -> None:
    if not args.input.exists():
        raise InputNotFound(args.input)

    header_path = args.output.with_suffix(".h") if args.header else None
    if not args.force:
        for dest in (args.output, header_path):
            if dest is not None and dest.exists():
                raise DestinationConflict(dest)

    prefix = args.prefix
    if args.prefix_file is not None:
        prefix = args.prefix_file.read_text()

    options = SerializationOptions(
        array_name=args.array_name or default_array_name(args.input),
        max_samples=args.max_samples or None,
        emit_comment=not args.no_comment,
        numeric_base=NumericBase(args.format),
        prefix_text=prefix,
        emit_header=args.header,
        source_name=args.input.name,
    )

    logger.info("Processing file: %s", args.input.name)
    with open(args.input, "rb") as f:
        fmt, rendered = convert(f, options, max_bits_per_sample=args.max_bits)
    logger.info("%s", fmt.summary())
    if fmt.channel_count == 2:
        logger.warning("Merging stereo channels into mono.")

    if args.output is None:
        print(rendered.body)
        return
    _write(args.output, rendered.body)
    if header_path is not None:
        _write(header_path, rendered.header)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)
    try:
        run(args)
    except (WavToCError, OSError) as err:
        logger.error("%s", err)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
