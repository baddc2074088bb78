#!/usr/bin/env python3

"""
Reads an arbitrary bit span out of a byte buffer into an int.

Bit positions are absolute within the buffer. With `BitOrder.MSB` bit 0 is
the most significant bit of byte 0 and the span is read as a big-endian bit
string. With `BitOrder.LSB` bit 0 is the least significant bit of byte 0 and
the first bit of the span becomes bit 0 of the result, so byte-aligned spans
read as little-endian integers.
"""

import enum
from typing import Iterator

from colors import log_debug


class BitOrder(enum.Enum):
    MSB = "msb"
    LSB = "lsb"


def chunks(lst, n):
    """Expand successive n-sized chunks from lst."""
    return [lst[i : i + n] for i in range(0, len(lst), n)]


def bit_at(buffer, pos: int, order: BitOrder) -> int:
    byte = buffer[pos // 8]
    if order is BitOrder.MSB:
        return (byte >> (7 - pos % 8)) & 1
    return (byte >> (pos % 8)) & 1


def iter_bits(buffer, start_bit: int, end_bit: int, order: BitOrder) -> Iterator[int]:
    for pos in range(start_bit, end_bit):
        yield bit_at(buffer, pos, order)


def bit_string(buffer, start_bit: int, end_bit: int, order: BitOrder) -> str:
    return "".join(str(bit) for bit in iter_bits(buffer, start_bit, end_bit, order))


def extract_bitwise(buffer, start_bit: int, end_bit: int, order: BitOrder) -> int:
    """One bit at a time. Slow, but the reference `extract` must agree with."""
    n = end_bit - start_bit
    if n <= 0:
        return 0

    if order is BitOrder.LSB:
        value = 0
        for i, bit in enumerate(iter_bits(buffer, start_bit, end_bit, order)):
            if bit:
                value |= 1 << i
        return value

    num_bytes = (n + 7) // 8
    out = bytearray(num_bytes)
    # Right-align the span, zero bits fill the top of the first byte.
    padding = num_bytes * 8 - n
    for i, bit in enumerate(iter_bits(buffer, start_bit, end_bit, order)):
        if bit:
            abs_pos = padding + i
            out[abs_pos // 8] |= 1 << (7 - abs_pos % 8)
    return int.from_bytes(out, "big")


def extract(buffer, start_bit: int, end_bit: int, order: BitOrder) -> int:
    """
    Copies the whole bytes covering the span in one go and trims the partial
    bits at both ends with a shift and a mask.
    """
    n = end_bit - start_bit
    if n <= 0:
        return 0

    first_byte = start_bit // 8
    last_byte = (end_bit + 7) // 8
    block = bytes(buffer[first_byte:last_byte])
    log_debug(f"extract: {n} bits from bytes [{first_byte}, {last_byte}) {order.value}")

    mask = (1 << n) - 1
    if order is BitOrder.MSB:
        return (int.from_bytes(block, "big") >> (last_byte * 8 - end_bit)) & mask
    return (int.from_bytes(block, "little") >> (start_bit % 8)) & mask


def to_padded_bytes(value: int, bit_width: int) -> bytes:
    """Big-endian bytes of value, left-padded with zeros to cover bit_width."""
    num_bytes = max((bit_width + 7) // 8, (value.bit_length() + 7) // 8)
    return value.to_bytes(num_bytes, "big")
