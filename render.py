#!/usr/bin/env python3

import enum
import os
import sys
from dataclasses import dataclass

from bitslice import chunks, to_padded_bytes
from colors import blank_cell, log_debug

DEFAULT_COLUMNS = 80

# Widest first. Every candidate is a power of two or the sum of two.
ROW_WIDTHS = (64, 48, 32, 24, 16, 12, 8)
MIN_ROW_WIDTH = 8


class OutputFormat(enum.Enum):
    DECIMAL = "decimal"
    HEX = "hex"
    BINARY = "binary"
    ASCII = "ascii"
    HEX_ASCII = "hex-ascii"


@dataclass(frozen=True)
class RenderContext:
    terminal_width: int
    start_byte_offset: int
    offset_field_width: int
    row_width_bytes: int

    @classmethod
    def for_dump(cls, start_bit, byte_count, terminal_width=None):
        if terminal_width is None:
            terminal_width = terminal_columns()
        start_byte = start_bit // 8
        offset_width = len(f"{start_byte + byte_count:x}")
        row_width = choose_row_width(terminal_width, offset_width)
        return cls(terminal_width, start_byte, offset_width, row_width)


def terminal_columns() -> int:
    for stream in (sys.stdout, sys.stderr):
        try:
            return os.get_terminal_size(stream.fileno()).columns
        except (AttributeError, OSError, ValueError):
            continue
    return DEFAULT_COLUMNS


def is_round_width(n: int) -> bool:
    if n <= 0:
        return False
    # Clearing the lowest set bit leaves zero or a single power of two.
    rest = n & (n - 1)
    return rest == 0 or rest & (rest - 1) == 0


def choose_row_width(terminal_width: int, offset_width: int) -> int:
    # Each byte takes "xx " plus one ASCII cell.
    budget = (terminal_width - offset_width - 5) // 4
    for width in ROW_WIDTHS:
        if width <= budget and is_round_width(width):
            return width
    return MIN_ROW_WIDTH


def ascii_cell(byte: int) -> str:
    if 0x20 <= byte < 0x7F:
        return chr(byte)
    return blank_cell()


def ascii_text(data: bytes) -> str:
    return "".join(ascii_cell(b) for b in data)


def hexdump(data: bytes, context: RenderContext) -> str:
    lines = []
    width = context.row_width_bytes
    for i, row in enumerate(chunks(data, width)):
        offset = context.start_byte_offset + i * width
        hex_cells = "".join(f"{b:02x} " for b in row)
        pad = "   " * (width - len(row))
        lines.append(
            f"{offset:0{context.offset_field_width}x}: {hex_cells}{pad}| {ascii_text(row)}\n"
        )
    return "".join(lines)


def format_value(value: int, bit_width: int, fmt: OutputFormat, context=None) -> str:
    """The complete text for one value, including the trailing newline."""
    if fmt is OutputFormat.DECIMAL:
        return f"{value}\n"
    if fmt is OutputFormat.HEX:
        return f"{value:#x}\n"
    if fmt is OutputFormat.BINARY:
        return f"{value:#b}\n"

    data = to_padded_bytes(value, bit_width)
    if fmt is OutputFormat.ASCII:
        return ascii_text(data) + "\n"

    if context is None:
        context = RenderContext.for_dump(0, len(data))
    log_debug(
        f"hexdump: {context.terminal_width} columns, "
        f"{context.row_width_bytes} bytes per row"
    )
    return hexdump(data, context)


def render(value: int, bit_width: int, fmt: OutputFormat, context=None, out=None):
    text = format_value(value, bit_width, fmt, context)
    (out or sys.stdout).write(text)
    return text
