"""Shared helpers: placeholder text, errors and a column-aligning writer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

NONE_TEXT = "<None>"


class InvalidError(ValueError):
    """Raised when a request or its input is not valid."""


def none(s: str) -> str:
    """Return ``<None>`` for an empty string, otherwise the string itself."""
    return s if s else NONE_TEXT


@dataclass
class _Cell:
    text: str
    width: int


class TabWriter:
    """Buffer tab-separated text and write it out with aligned columns.

    A cell is text terminated by a tab; the last cell of a line is not part
    of any column. Consecutive lines sharing a column form a block, and each
    column in a block is as wide as its widest cell plus ``padding``.
    With ``filter_html`` set, ``<...>`` tags count as zero width and
    ``&...;`` entities as one character.
    """

    def __init__(self, out: TextIO, padding: int = 3, filter_html: bool = False):
        self._out = out
        self._padding = padding
        self._filter_html = filter_html
        self._chunks: list[str] = []

    def __enter__(self) -> TabWriter:
        return self

    def __exit__(self, *exc_info) -> None:
        self.flush()

    def write(self, text: str) -> int:
        """Buffer ``text``; nothing reaches the output before :meth:`flush`."""
        self._chunks.append(text)
        return len(text)

    def flush(self) -> None:
        """Format all buffered text and write it to the output."""
        text = "".join(self._chunks)
        self._chunks.clear()
        if text:
            self._out.write(self._format(self._parse(text)))
        flush = getattr(self._out, "flush", None)
        if callable(flush):
            flush()

    def _parse(self, text: str) -> list[list[_Cell]]:
        lines: list[list[_Cell]] = [[]]
        parts: list[str] = []
        width = 0
        i = 0
        while i < len(text):
            ch = text[i]
            if ch in "\t\n":
                lines[-1].append(_Cell("".join(parts), width))
                parts, width = [], 0
                if ch == "\n":
                    lines.append([])
                i += 1
            elif self._filter_html and ch in "<&":
                end = text.find(">" if ch == "<" else ";", i + 1)
                stop = len(text) if end < 0 else end + 1
                parts.append(text[i:stop])
                width += 1 if ch == "&" else 0
                i = stop
            else:
                parts.append(ch)
                width += 1
                i += 1
        lines[-1].append(_Cell("".join(parts), width))
        return lines

    def _format(self, lines: list[list[_Cell]]) -> str:
        pieces: list[str] = []
        widths: list[int] = []

        def write_lines(start: int, end: int) -> None:
            for index in range(start, end):
                for column, cell in enumerate(lines[index]):
                    pieces.append(cell.text)
                    if column < len(widths):
                        pieces.append(" " * (widths[column] - cell.width))
                if index + 1 < len(lines):
                    pieces.append("\n")

        def format_block(line0: int, line1: int) -> None:
            column = len(widths)
            this = line0
            while this < line1:
                if column >= len(lines[this]) - 1:
                    this += 1
                    continue
                write_lines(line0, this)
                line0 = this
                width = 0
                while this < line1 and column < len(lines[this]) - 1:
                    width = max(width, lines[this][column].width + self._padding)
                    this += 1
                widths.append(width)
                format_block(line0, this)
                widths.pop()
                line0 = this
            write_lines(line0, line1)

        format_block(0, len(lines))
        return "".join(pieces)