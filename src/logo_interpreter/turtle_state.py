"""The turtle: the drawing cursor a Logo program steers.

Coordinate convention: the y axis points up and headings are measured in
degrees clockwise from the +y axis, so heading 0 faces up and heading 90
faces right. Moving `d` units at heading `h` changes the position by
(d * sin(h), d * cos(h)).

Bounds policy: positions are unconstrained. Nothing here clips to or
checks against the canvas; that is left to the drawing sink.
"""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Optional, Protocol


class TurtleError(ValueError):
    """Raised for turtle parameters outside their valid range."""
    pass


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __iter__(self):
        return iter((self.x, self.y))


@dataclass(frozen=True)
class PenColor:
    """An RGB pen colour, optionally remembering the palette index it came from.

    Attributes:
        red, green, blue: Channels in the range 0-255.
        index: Palette index, or None for colours set directly as RGB.
    """
    red: int
    green: int
    blue: int
    index: Optional[int] = None

    def as_hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


# UCB Logo's 16 colour palette, addressed by SETPENCOLOR.
PALETTE: tuple[tuple[str, tuple[int, int, int]], ...] = (
    ("black", (0, 0, 0)),
    ("blue", (0, 0, 255)),
    ("green", (0, 255, 0)),
    ("cyan", (0, 255, 255)),
    ("red", (255, 0, 0)),
    ("magenta", (255, 0, 255)),
    ("yellow", (255, 255, 0)),
    ("white", (255, 255, 255)),
    ("brown", (155, 96, 59)),
    ("tan", (197, 136, 18)),
    ("forest", (100, 162, 64)),
    ("aqua", (120, 187, 187)),
    ("salmon", (255, 149, 119)),
    ("purple", (144, 113, 208)),
    ("orange", (255, 163, 0)),
    ("grey", (183, 183, 183)),
)

DEFAULT_PEN_COLOR_INDEX = 0


def palette_color(index: float) -> PenColor:
    """Return the palette colour for a whole-number index in 0-15."""
    if not float(index).is_integer() or not 0 <= index < len(PALETTE):
        raise TurtleError(f"pen colour index {index} is not a whole number in 0-{len(PALETTE) - 1}")
    idx = int(index)
    red, green, blue = PALETTE[idx][1]
    return PenColor(red, green, blue, index=idx)


def rgb_color(red: float, green: float, blue: float) -> PenColor:
    """Return a colour from three channels, each in 0-255."""
    for channel in (red, green, blue):
        if not 0 <= channel <= 255:
            raise TurtleError(f"colour channel {channel} is outside 0-255")
    return PenColor(round(red), round(green), round(blue))


def normalize_heading(degrees: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    if not math.isfinite(degrees):
        raise TurtleError(f"heading must be a finite number, got {degrees}")
    heading = math.fmod(degrees, 360.0)
    if heading < 0:
        heading += 360.0
    # fmod of a tiny negative angle plus 360 rounds to exactly 360.
    if heading >= 360.0:
        heading = 0.0
    return heading


class PenState(enum.Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class LineSegment:
    """A straight line drawn by the turtle."""
    start: Point
    end: Point
    color: PenColor


class TurtleOperations(Protocol):
    """The operations the interpreter needs from a turtle.

    Move operations return the LineSegment they drew, or None when the pen
    is up.
    """

    @property
    def x(self) -> float: ...

    @property
    def y(self) -> float: ...

    @property
    def heading(self) -> float: ...

    @property
    def pen_color(self) -> PenColor: ...

    def move_forward(self, distance: float) -> Optional[LineSegment]: ...

    def move_backward(self, distance: float) -> Optional[LineSegment]: ...

    def turn(self, degrees: float) -> None: ...

    def set_heading(self, degrees: float) -> None: ...

    def set_position(self, x: float, y: float) -> Optional[LineSegment]: ...

    def pen_up(self) -> None: ...

    def pen_down(self) -> None: ...

    def set_pen_color(self, color: PenColor) -> None: ...


@dataclass
class Turtle:
    """The default turtle implementation.

    Starts at the origin facing up with the pen down and the pen colour set
    to palette entry 0.
    """
    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0
    pen_state: PenState = PenState.DOWN
    pen_color: PenColor = field(default_factory=lambda: palette_color(DEFAULT_PEN_COLOR_INDEX))

    def __post_init__(self):
        self.heading = normalize_heading(self.heading)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_pen_down(self) -> bool:
        return self.pen_state is PenState.DOWN

    def move_forward(self, distance: float) -> Optional[LineSegment]:
        radians = math.radians(self.heading)
        return self.set_position(
            self.x + distance * math.sin(radians),
            self.y + distance * math.cos(radians),
        )

    def move_backward(self, distance: float) -> Optional[LineSegment]:
        return self.move_forward(-distance)

    def turn(self, degrees: float) -> None:
        self.heading = normalize_heading(self.heading + degrees)

    def set_heading(self, degrees: float) -> None:
        self.heading = normalize_heading(degrees)

    def set_position(self, x: float, y: float) -> Optional[LineSegment]:
        if not (math.isfinite(x) and math.isfinite(y)):
            raise TurtleError(f"position out of range: ({x}, {y})")
        start = self.position
        self.x, self.y = x, y
        if not self.is_pen_down:
            return None
        return LineSegment(start=start, end=self.position, color=self.pen_color)

    def pen_up(self) -> None:
        self.pen_state = PenState.UP

    def pen_down(self) -> None:
        self.pen_state = PenState.DOWN

    def set_pen_color(self, color: PenColor) -> None:
        self.pen_color = color


# vim: set ts=4 sw=4 expandtab:
