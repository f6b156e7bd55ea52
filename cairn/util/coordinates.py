"""Geometry primitives for tile space: positions, rectangles and directions."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

import tcod.los

from cairn.types import StepOffset, TileCoord


@dataclass(frozen=True)
class Position:
    """Integer tile position (or offset) with vector arithmetic."""

    x: TileCoord
    y: TileCoord

    def __add__(self, other: Position) -> Position:
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Position) -> Position:
        return Position(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Position:
        return Position(-self.x, -self.y)

    def __iter__(self) -> Iterator[TileCoord]:
        yield self.x
        yield self.y

    @property
    def length_squared(self) -> int:
        return self.x * self.x + self.y * self.y

    def line_to(self, other: Position) -> PositionLine:
        """Digital line from this position to ``other``, both endpoints included."""
        return PositionLine(self, other)


class PositionLine:
    """Lazy, restartable sequence of the tiles on a Bresenham line.

    Nothing is rasterized until iteration starts, and every iteration
    rasterizes afresh, so the same line object can be walked repeatedly.
    """

    def __init__(self, start: Position, end: Position) -> None:
        self.start = start
        self.end = end

    def __iter__(self) -> Iterator[Position]:
        points = tcod.los.bresenham(
            (self.start.x, self.start.y), (self.end.x, self.end.y)
        )
        for x, y in points.tolist():
            yield Position(x, y)

    def __len__(self) -> int:
        diff = self.end - self.start
        return max(abs(diff.x), abs(diff.y)) + 1

    def __repr__(self) -> str:
        return f"PositionLine(start={self.start}, end={self.end})"


class Direction(IntEnum):
    """The eight compass steps, numbered on a 3x3 grid with the centre left out.

    The ordinal encodes the offset: ``(ordinal % 3 - 1, ordinal // 3 - 1)``.
    Y grows southward.
    """

    NORTH_WEST = 0
    NORTH = 1
    NORTH_EAST = 2
    WEST = 3
    EAST = 5
    SOUTH_WEST = 6
    SOUTH = 7
    SOUTH_EAST = 8

    @property
    def step(self) -> StepOffset:
        return (self.value % 3 - 1, self.value // 3 - 1)  # type: ignore[return-value]

    @property
    def offset(self) -> Position:
        dx, dy = self.step
        return Position(dx, dy)

    @property
    def opposite(self) -> Direction:
        return Direction(8 - self.value)


class Rect:
    """Rectangle/bounding box in tile coordinates.

    ``x2``/``y2`` are exclusive, so a Rect(0, 0, 5, 5) covers x and y in 0..4.
    """

    def __init__(self, x: TileCoord, y: TileCoord, w: TileCoord, h: TileCoord) -> None:
        self.x1: TileCoord = x
        self.y1: TileCoord = y
        self.x2: TileCoord = x + w
        self.y2: TileCoord = y + h

    @classmethod
    def from_bounds(
        cls, x1: TileCoord, y1: TileCoord, x2: TileCoord, y2: TileCoord
    ) -> Rect:
        """Create a Rect from corner coordinates (x1, y1, x2, y2)."""
        return cls(x1, y1, x2 - x1, y2 - y1)

    @property
    def width(self) -> TileCoord:
        return self.x2 - self.x1

    @property
    def height(self) -> TileCoord:
        return self.y2 - self.y1

    @property
    def area(self) -> int:
        return max(self.width, 0) * max(self.height, 0)

    @property
    def top_left(self) -> Position:
        return Position(self.x1, self.y1)

    def __add__(self, offset: Position) -> Rect:
        return Rect(self.x1 + offset.x, self.y1 + offset.y, self.width, self.height)

    def __sub__(self, offset: Position) -> Rect:
        return Rect(self.x1 - offset.x, self.y1 - offset.y, self.width, self.height)

    def translate(self, dx: TileCoord, dy: TileCoord) -> Rect:
        return self + Position(dx, dy)

    def inset(self, amount: int) -> Rect:
        """Shrink by ``amount`` on every side."""
        return Rect(
            self.x1 + amount,
            self.y1 + amount,
            self.width - 2 * amount,
            self.height - 2 * amount,
        )

    def clip(self, bounds: Rect) -> Rect:
        """Intersection with ``bounds``; may be empty (zero area)."""
        x1 = max(self.x1, bounds.x1)
        y1 = max(self.y1, bounds.y1)
        x2 = max(min(self.x2, bounds.x2), x1)
        y2 = max(min(self.y2, bounds.y2), y1)
        return Rect.from_bounds(x1, y1, x2, y2)

    def contains(self, pos: Position) -> bool:
        return self.x1 <= pos.x < self.x2 and self.y1 <= pos.y < self.y2

    def intersects(self, other: Rect) -> bool:
        """True when the two rects share at least one tile."""
        return (
            self.x1 < other.x2
            and self.x2 > other.x1
            and self.y1 < other.y2
            and self.y2 > other.y1
        )

    def slices(self) -> tuple[slice, slice]:
        """Index expression for an ``[x, y]`` numpy grid."""
        return slice(self.x1, self.x2), slice(self.y1, self.y2)

    def positions(self) -> Iterator[Position]:
        """Every position inside the rect, row by row."""
        for y in range(self.y1, self.y2):
            for x in range(self.x1, self.x2):
                yield Position(x, y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return (self.x1, self.y1, self.x2, self.y2) == (
            other.x1,
            other.y1,
            other.x2,
            other.y2,
        )

    def __hash__(self) -> int:
        return hash((self.x1, self.y1, self.x2, self.y2))

    def __repr__(self) -> str:
        return f"Rect(x1={self.x1}, y1={self.y1}, x2={self.x2}, y2={self.y2})"
