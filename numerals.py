#!/usr/bin/env python3

"""
Offset and length tokens.

A token is an optional sign, a number and an optional bit suffix:

    123        123 bits
    0x1A:3     26 bytes + 3 bits = 211 bits
    $1a.3      same, `$` hex prefix and `.` separator
    1Ah:3      same, `h` hex suffix
    -32        32 bits back from the end of the file (offsets only)
    1_000      thousands separators `,` `_` `'` are ignored

Without a `:` or `.` separator the whole number counts bits, not bytes.
"""

import re
from dataclasses import dataclass

THOUSANDS_SEPARATORS = ",_'"
BIT_SEPARATORS = ":."

DECIMAL_DIGITS = re.compile("[0-9]+")
HEX_DIGITS = re.compile("[0-9a-fA-F]+")


class IttyBittyError(Exception):
    pass


class ParseError(IttyBittyError):
    def __init__(self, token, reason):
        self.token = token
        self.reason = reason
        super().__init__(f"Cannot parse {token!r}: {reason}")


class InvalidBitOffset(ParseError):
    def __init__(self, token, bit):
        self.bit = bit
        super().__init__(token, f"bit offset {bit} is outside 0-7")


@dataclass(frozen=True)
class Offset:
    bytes: int
    bits: int
    is_negative: bool = False

    @property
    def magnitude_bits(self) -> int:
        return self.bytes * 8 + self.bits

    @property
    def total_bits(self) -> int:
        return self.magnitude_bits

    def to_signed_bit_count(self) -> int:
        if self.is_negative:
            return -self.magnitude_bits
        return self.magnitude_bits

    def canonical(self) -> str:
        return ("-" if self.is_negative else "") + str(self.magnitude_bits)

    @classmethod
    def from_bits(cls, magnitude: int, is_negative: bool = False) -> "Offset":
        n_bytes, n_bits = divmod(magnitude, 8)
        return cls(n_bytes, n_bits, is_negative)


@dataclass(frozen=True)
class Length:
    bits: int

    @property
    def total_bits(self) -> int:
        return self.bits

    def canonical(self) -> str:
        return str(self.bits)


def strip_separators(text: str) -> str:
    for sep in THOUSANDS_SEPARATORS:
        text = text.replace(sep, "")
    return text


def parse_number(token: str, text: str) -> int:
    # Hex forms are checked in priority order, first match wins.
    if text[:2] in ("0x", "0X"):
        digits, base, pattern = text[2:], 16, HEX_DIGITS
    elif text.startswith("$"):
        digits, base, pattern = text[1:], 16, HEX_DIGITS
    elif text[-1:] in ("h", "H"):
        digits, base, pattern = text[:-1], 16, HEX_DIGITS
    else:
        digits, base, pattern = text, 10, DECIMAL_DIGITS

    if not digits:
        raise ParseError(token, "missing digits")
    if not pattern.fullmatch(digits):
        kind = "hexadecimal" if base == 16 else "decimal"
        raise ParseError(token, f"invalid {kind} number {digits!r}")

    return int(digits, base)


def parse_bit_suffix(token: str, text: str) -> int:
    if not DECIMAL_DIGITS.fullmatch(text):
        raise ParseError(token, f"invalid bit offset {text!r}")
    bit = int(text, 10)
    if bit > 7:
        raise InvalidBitOffset(token, bit)
    return bit


def split_token(token: str, allow_negative: bool):
    """
    Returns `(is_negative, number, bit_suffix)`, where `bit_suffix` is
    None if the token has no byte:bit separator.
    """
    text = token.strip()
    if not text:
        raise ParseError(token, "empty token")

    is_negative = False
    if text.startswith("-"):
        if not allow_negative:
            raise ParseError(token, "length cannot be negative")
        is_negative = True
        text = text[1:].lstrip()

    text = strip_separators(text)

    bit_suffix = None
    for i, c in enumerate(text):
        if c in BIT_SEPARATORS:
            text, bit_suffix = text[:i], text[i + 1 :]
            break

    return is_negative, text, bit_suffix


def parse_bit_count(token: str, allow_negative: bool):
    is_negative, text, bit_suffix = split_token(token, allow_negative)
    number = parse_number(token, text)
    if bit_suffix is None:
        return is_negative, divmod(number, 8)
    return is_negative, (number, parse_bit_suffix(token, bit_suffix))


def parse_offset(token: str) -> Offset:
    is_negative, (n_bytes, n_bits) = parse_bit_count(token, allow_negative=True)
    return Offset(n_bytes, n_bits, is_negative)


def parse_length(token: str) -> Length:
    _, (n_bytes, n_bits) = parse_bit_count(token, allow_negative=False)
    return Length(n_bytes * 8 + n_bits)
