"""Conversion of embedded ANSI escape sequences into styled text."""

from __future__ import annotations

import re

from rich.ansi import AnsiDecoder
from rich.text import Text

ESCAPE_PATTERN = re.compile(r"\x1b")


def has_escapes(raw: str) -> bool:
    return ESCAPE_PATTERN.search(raw) is not None


def split_lines(raw: str) -> list[str]:
    """Split *raw* into lines, ignoring a single trailing newline."""
    if not raw:
        return []
    lines = raw.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def normalize_ansi(raw: str) -> list[Text]:
    """Return one :class:`Text` per line of *raw* with escapes turned into spans.

    The line count is unchanged and every escape sequence is removed, so
    the plain text of each line is exactly what a terminal would show.
    SGR state carries over from one line to the next the way a terminal
    keeps it.
    """
    lines = split_lines(raw)
    if not has_escapes(raw):
        return [Text(line) for line in lines]
    decoder = AnsiDecoder()
    return [decoder.decode_line(line) for line in lines]
