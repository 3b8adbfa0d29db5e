"""Drawing sinks: where the interpreter sends the lines the turtle draws."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Protocol

from .turtle_state import LineSegment, PenColor, Point


class DrawingSink(Protocol):
    """Receives line segments in the order they are drawn.

    Implementations are free to clip against the canvas, buffer, or write
    straight to an image file. Any exception raised here aborts the run.
    """

    def emit_segment(self, start: Point, end: Point, color: PenColor) -> None: ...


@dataclass
class RecordingSink:
    """A sink that keeps every emitted segment in memory."""
    segments: list[LineSegment] = field(default_factory=list)

    def emit_segment(self, start: Point, end: Point, color: PenColor) -> None:
        self.segments.append(LineSegment(start=start, end=end, color=color))

    def __iter__(self) -> Iterator[LineSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)


# vim: set ts=4 sw=4 expandtab:
