#!/usr/bin/env python3

"""
Read an arbitrary-sized bitfield from a file at any bit offset.

    itty-bitty archive.gz 0 16                # gzip magic: 0x1f8b
    itty-bitty -e lsb -f decimal archive.gz -- -32 32   # gzip ISIZE
    itty-bitty -f hex-ascii firmware.bin 0x100:0 0x40:0
"""

import argparse
import contextlib
import mmap
import os
import sys

import colorama

from bitrange import describe, resolve
from bitslice import BitOrder, extract
from colors import hi_secondary, log_info
from numerals import IttyBittyError, parse_length, parse_offset
from render import OutputFormat, RenderContext, format_value

__version__ = "0.1.0"

ORDER_NAMES = {
    "msb": BitOrder.MSB,
    "most-significant-first": BitOrder.MSB,
    "lsb": BitOrder.LSB,
    "least-significant-first": BitOrder.LSB,
}


@contextlib.contextmanager
def open_buffer(path):
    """Maps the whole file read-only. An empty file gives an empty buffer."""
    with open(path, "rb") as f:
        if os.fstat(f.fileno()).st_size == 0:
            yield b""
            return
        with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as buffer:
            yield buffer


def build_parser():
    parser = argparse.ArgumentParser(
        prog="itty-bitty",
        description="Read an arbitrary-sized bitfield from a file at any bit offset",
        epilog=(
            "OFFSET and LENGTH count bits; BYTES:BITS (or BYTES.BITS) counts "
            "bytes plus 0-7 bits. Hex is written 0x1A, $1A or 1Ah. A negative "
            "OFFSET counts back from the end of the file; put `--` before "
            "offsets such as -0x20 or -4:3."
        ),
    )
    parser.add_argument("file", help="Input file path")
    parser.add_argument(
        "offset", help="Bit offset (negative = from end of file, -32 is the last 32 bits)"
    )
    parser.add_argument("length", help="Number of bits to read")
    parser.add_argument(
        "-e",
        "--order",
        choices=list(ORDER_NAMES),
        default="msb",
        help="Bit order (msb = most significant bit first, lsb = least significant bit first)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.HEX.value,
        help="Output format",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show offset info (both from start and from end) on stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def read_field(path, offset_token, length_token, order, fmt, verbose=False):
    offset = parse_offset(offset_token)
    length = parse_length(length_token)

    with open_buffer(path) as buffer:
        file_size_bits = len(buffer) * 8
        bit_range = resolve(file_size_bits, offset, length)
        if verbose:
            for line in describe(file_size_bits, offset_token, offset, bit_range):
                print(line, file=sys.stderr)
        value = extract(buffer, bit_range.start_bit, bit_range.end_bit, order)

    context = None
    if fmt is OutputFormat.HEX_ASCII:
        context = RenderContext.for_dump(
            bit_range.start_bit, (bit_range.bit_count + 7) // 8
        )
    log_info(f"{path}: read {bit_range.bit_count} bits at {bit_range.start_bit}")
    return format_value(value, bit_range.bit_count, fmt, context)


def main(argv=None):
    args = build_parser().parse_args(argv)
    colorama.just_fix_windows_console()

    try:
        text = read_field(
            args.file,
            args.offset,
            args.length,
            ORDER_NAMES[args.order],
            OutputFormat(args.format),
            args.verbose,
        )
    except IttyBittyError as e:
        print(f"itty-bitty: {hi_secondary(e)}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"itty-bitty: {hi_secondary(e)}", file=sys.stderr)
        return 1

    sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
