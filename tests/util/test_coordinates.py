from __future__ import annotations

import pytest

from cairn.util.coordinates import Direction, Position, Rect

# =============================================================================
# Position
# =============================================================================


def test_position_arithmetic() -> None:
    a = Position(5, 3)
    b = Position(2, 7)
    assert a + b == Position(7, 10)
    assert a - b == Position(3, -4)
    assert -a == Position(-5, -3)


def test_position_length_squared() -> None:
    assert Position(3, 4).length_squared == 25
    assert Position(-3, -4).length_squared == 25
    assert Position(0, 0).length_squared == 0


def test_position_unpacks_like_a_tuple() -> None:
    x, y = Position(8, 9)
    assert (x, y) == (8, 9)


def test_line_includes_both_endpoints() -> None:
    points = list(Position(3, 5).line_to(Position(7, 7)))
    assert points[0] == Position(3, 5)
    assert points[-1] == Position(7, 7)
    assert points == [
        Position(3, 5),
        Position(4, 5),
        Position(5, 6),
        Position(6, 6),
        Position(7, 7),
    ]


def test_line_is_restartable() -> None:
    """Iterating the same line twice yields the same points."""
    line = Position(0, 0).line_to(Position(6, -2))
    assert list(line) == list(line)
    assert len(line) == len(list(line))


def test_line_steps_are_single_tiles() -> None:
    points = list(Position(-4, 2).line_to(Position(5, -3)))
    for a, b in zip(points, points[1:], strict=False):
        step = b - a
        assert max(abs(step.x), abs(step.y)) == 1


def test_line_to_self_is_single_point() -> None:
    assert list(Position(2, 2).line_to(Position(2, 2))) == [Position(2, 2)]


# =============================================================================
# Direction
# =============================================================================


@pytest.mark.parametrize(
    ("direction", "offset"),
    [
        (Direction.NORTH_WEST, Position(-1, -1)),
        (Direction.NORTH, Position(0, -1)),
        (Direction.NORTH_EAST, Position(1, -1)),
        (Direction.WEST, Position(-1, 0)),
        (Direction.EAST, Position(1, 0)),
        (Direction.SOUTH_WEST, Position(-1, 1)),
        (Direction.SOUTH, Position(0, 1)),
        (Direction.SOUTH_EAST, Position(1, 1)),
    ],
)
def test_direction_offsets(direction: Direction, offset: Position) -> None:
    assert direction.offset == offset


def test_direction_has_no_centre() -> None:
    assert len(Direction) == 8
    assert all(d.offset != Position(0, 0) for d in Direction)


def test_direction_opposite() -> None:
    for d in Direction:
        assert d.opposite.offset == -d.offset


# =============================================================================
# Rect
# =============================================================================


def test_rect_bounds_and_size() -> None:
    r = Rect(2, 3, 5, 4)
    assert (r.x1, r.y1, r.x2, r.y2) == (2, 3, 7, 7)
    assert r.width == 5
    assert r.height == 4
    assert r.area == 20
    assert r.top_left == Position(2, 3)


def test_rect_translation_keeps_size() -> None:
    r = Rect(10, 20, 4, 6)
    local = r - r.top_left
    assert local == Rect(0, 0, 4, 6)
    assert local + Position(10, 20) == r
    assert r.translate(-1, 1) == Rect(9, 21, 4, 6)


def test_rect_inset() -> None:
    assert Rect(0, 0, 5, 5).inset(1) == Rect(1, 1, 3, 3)


def test_rect_contains_is_half_open() -> None:
    r = Rect(0, 0, 3, 3)
    assert r.contains(Position(0, 0))
    assert r.contains(Position(2, 2))
    assert not r.contains(Position(3, 2))
    assert not r.contains(Position(-1, 0))


def test_rect_clip() -> None:
    bounds = Rect(0, 0, 5, 5)
    assert Rect(3, 3, 4, 4).clip(bounds) == Rect(3, 3, 2, 2)
    assert Rect(8, 8, 2, 2).clip(bounds).area == 0


def test_rect_intersects_needs_a_shared_tile() -> None:
    r = Rect(0, 0, 2, 2)
    assert r.intersects(Rect(1, 1, 2, 2))
    assert r.intersects(Rect(0, 0, 1, 1))
    assert not Rect(0, 0, 1, 1).intersects(Rect(1, 0, 1, 1))
    assert not r.intersects(Rect(0, 2, 2, 2))
    assert not r.intersects(Rect(2, 2, 1, 1))


def test_rect_positions_cover_area() -> None:
    r = Rect(1, 1, 3, 2)
    positions = list(r.positions())
    assert len(positions) == r.area
    assert all(r.contains(p) for p in positions)
