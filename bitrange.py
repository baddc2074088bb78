#!/usr/bin/env python3

from dataclasses import dataclass
from typing import List

from colors import hi_primary, hi_secondary, hibold, log_debug
from numerals import IttyBittyError, Length, Offset


class RangeError(IttyBittyError):
    pass


class EmptyRange(RangeError):
    def __init__(self):
        super().__init__("Must read at least 1 bit")


class NegativeOffsetOutOfBounds(RangeError):
    def __init__(self, requested, available):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Negative offset -{requested} exceeds file size ({available} bits)"
        )


class RangeExceedsFile(RangeError):
    def __init__(self, needed_bit, file_size_bytes, file_size_bits, excess_bits):
        self.needed_bit = needed_bit
        self.file_size_bytes = file_size_bytes
        self.file_size_bits = file_size_bits
        self.excess_bits = excess_bits
        super().__init__(
            f"Requested range exceeds file size: need bit {needed_bit}, "
            f"but file is {file_size_bytes} bytes ({file_size_bits} bits), "
            f"{excess_bits} bits past end"
        )


@dataclass(frozen=True)
class BitRange:
    start_bit: int
    end_bit: int

    @property
    def bit_count(self) -> int:
        return self.end_bit - self.start_bit

    @property
    def start_byte(self) -> int:
        return self.start_bit // 8


def resolve(file_size_bits: int, offset: Offset, length: Length) -> BitRange:
    if length.bits == 0:
        raise EmptyRange()

    total = offset.to_signed_bit_count()
    if total < 0:
        from_end = -total
        if from_end > file_size_bits:
            raise NegativeOffsetOutOfBounds(from_end, file_size_bits)
        start_bit = file_size_bits - from_end
    else:
        start_bit = total

    end_bit = start_bit + length.bits
    if end_bit > file_size_bits:
        raise RangeExceedsFile(
            end_bit - 1, file_size_bits // 8, file_size_bits, end_bit - file_size_bits
        )

    log_debug(f"resolve: offset={total} length={length.bits} -> [{start_bit}, {end_bit})")
    return BitRange(start_bit, end_bit)


def describe(
    file_size_bits: int, token: str, offset: Offset, bit_range: BitRange
) -> List[str]:
    """Lines for the verbose report, both from-start and from-end forms."""
    from_end = file_size_bits - bit_range.start_bit
    sign = "-" if offset.is_negative else ""
    return [
        f"File: {hibold(file_size_bits // 8)} bytes ({hibold(file_size_bits)} bits)",
        f"Offset: {token} = {sign}{hi_primary(offset.bytes)} bytes "
        f"+ {hi_secondary(offset.bits)} bits = {hibold(offset.to_signed_bit_count())} bits",
        f"Reading {hibold(bit_range.bit_count)} bits at offset {hibold(bit_range.start_bit)} "
        f"(byte {hi_primary(bit_range.start_bit // 8)}, +{hi_secondary(bit_range.start_bit % 8)} bits) "
        f"= -{hibold(from_end)} from end",
    ]
