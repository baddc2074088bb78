import io
import os

import pytest

import render
from colors import blank_cell
from render import (
    OutputFormat,
    RenderContext,
    ascii_cell,
    choose_row_width,
    format_value,
    hexdump,
    is_round_width,
    terminal_columns,
)


@pytest.mark.parametrize(
    "fmt,expected",
    [
        (OutputFormat.DECIMAL, "8075\n"),
        (OutputFormat.HEX, "0x1f8b\n"),
        (OutputFormat.BINARY, "0b1111110001011\n"),
    ],
)
def test_numeric_formats(fmt, expected):
    assert format_value(0x1F8B, 16, fmt) == expected


def test_zero():
    assert format_value(0, 8, OutputFormat.HEX) == "0x0\n"
    assert format_value(0, 8, OutputFormat.BINARY) == "0b0\n"
    assert format_value(0, 8, OutputFormat.DECIMAL) == "0\n"


def test_ascii():
    value = int.from_bytes(b"Hi there!", "big")
    assert format_value(value, 72, OutputFormat.ASCII) == "Hi there!\n"


def test_ascii_keeps_leading_zero_bytes():
    assert format_value(0x41, 16, OutputFormat.ASCII) == blank_cell() + "A\n"


def test_ascii_cell():
    assert ascii_cell(0x20) == " "
    assert ascii_cell(ord("~")) == "~"
    assert ascii_cell(0x7F) == blank_cell()
    assert ascii_cell(0x0A) == blank_cell()
    assert ascii_cell(0xE9) == blank_cell()


@pytest.mark.parametrize("n", [1, 2, 3, 8, 12, 24, 48, 64, 96])
def test_round_widths(n):
    assert is_round_width(n)


@pytest.mark.parametrize("n", [0, 7, 11, 13, 56])
def test_not_round_widths(n):
    assert not is_round_width(n)


@pytest.mark.parametrize(
    "columns,offset_width,expected",
    [
        (80, 4, 16),
        (110, 2, 24),
        (60, 2, 12),
        (200, 4, 32),
        (220, 4, 48),
        (300, 4, 64),
        (40, 4, 8),
        (10, 4, 8),
    ],
)
def test_choose_row_width(columns, offset_width, expected):
    assert choose_row_width(columns, offset_width) == expected


def test_context_for_dump():
    context = RenderContext.for_dump(0x100 * 8 + 3, 0x20, terminal_width=80)
    assert context.start_byte_offset == 0x100
    assert context.offset_field_width == 3
    assert context.row_width_bytes == 16


def test_hexdump_rows():
    data = b"ABCDEFGHIJKLMNOPQRST"
    text = hexdump(data, RenderContext(80, 0, 2, 16))
    lines = text.splitlines()
    assert lines[0] == (
        "00: 41 42 43 44 45 46 47 48 49 4a 4b 4c 4d 4e 4f 50 | ABCDEFGHIJKLMNOP"
    )
    assert lines[1] == "10: 51 52 53 54 " + "   " * 12 + "| QRST"
    assert text.endswith("\n")


def test_hexdump_offsets_start_at_byte():
    text = hexdump(b"\x00" * 9, RenderContext(80, 0x1F0, 3, 8))
    lines = text.splitlines()
    assert lines[0].startswith("1f0: 00 ")
    assert lines[1].startswith("1f8: 00 " + "   " * 7 + "| ")
    assert lines[1].endswith(blank_cell())


def test_hex_ascii_format_uses_context():
    value = int.from_bytes(b"\x00PK", "big")
    text = format_value(value, 24, OutputFormat.HEX_ASCII, RenderContext(80, 0, 1, 8))
    assert text == "0: 00 50 4b " + "   " * 5 + "| " + blank_cell() + "PK\n"


class FakeTerminal:
    def fileno(self):
        return 1


def test_terminal_columns_from_stdout(monkeypatch):
    monkeypatch.setattr(render.sys, "stdout", FakeTerminal())
    monkeypatch.setattr(render.os, "get_terminal_size", lambda fd: os.terminal_size((132, 40)))
    assert terminal_columns() == 132


def test_terminal_columns_falls_back_to_stderr(monkeypatch):
    calls = []

    def fake_size(fd):
        calls.append(fd)
        if len(calls) == 1:
            raise OSError("not a terminal")
        return os.terminal_size((100, 30))

    monkeypatch.setattr(render.sys, "stdout", FakeTerminal())
    monkeypatch.setattr(render.sys, "stderr", FakeTerminal())
    monkeypatch.setattr(render.os, "get_terminal_size", fake_size)
    assert terminal_columns() == 100
    assert len(calls) == 2


def test_terminal_columns_default(monkeypatch):
    def no_terminal(fd):
        raise OSError("not a terminal")

    monkeypatch.setattr(render.sys, "stdout", FakeTerminal())
    monkeypatch.setattr(render.sys, "stderr", FakeTerminal())
    monkeypatch.setattr(render.os, "get_terminal_size", no_terminal)
    assert terminal_columns() == render.DEFAULT_COLUMNS


def test_render_writes_once():
    out = io.StringIO()
    text = render.render(42, 8, OutputFormat.DECIMAL, out=out)
    assert out.getvalue() == text == "42\n"
