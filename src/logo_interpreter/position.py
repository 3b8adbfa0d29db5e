from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Represents a position in Logo source code.

    Attributes:
        origin: Name of the source the position belongs to (a file name or "<string>").
        line: Line number, 1-indexed.
        column: Column number, 1-indexed.
        offset: Character offset into the source, 0-indexed.
    """
    origin: str
    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        return f"{self.origin}:{self.line}:{self.column}"


class LineIndex:
    """Converts character offsets of one source string into Positions."""

    def __init__(self, text: str, origin: str = "<string>"):
        self.text = text
        self.origin = origin
        self._line_starts = [0]
        for i, ch in enumerate(text):
            if ch == '\n':
                self._line_starts.append(i + 1)

    def position(self, offset: int) -> Position:
        """Return the Position of a character offset (clamped to the text)."""
        offset = max(0, min(offset, len(self.text)))
        line_idx = bisect_right(self._line_starts, offset) - 1
        column = offset - self._line_starts[line_idx] + 1
        return Position(origin=self.origin, line=line_idx + 1, column=column, offset=offset)

    def line_text(self, line: int) -> str | None:
        """Return the text of a 1-indexed line without its newline."""
        if not 1 <= line <= len(self._line_starts):
            return None
        start = self._line_starts[line - 1]
        end = self.text.find('\n', start)
        if end < 0:
            end = len(self.text)
        return self.text[start:end]


# vim: set ts=4 sw=4 expandtab:
