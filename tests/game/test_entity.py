from __future__ import annotations

from cairn.environment.tile import TileState
from cairn.game.entity import Entity
from cairn.util.coordinates import Direction, Position
from tests.helpers import make_walled_room


def test_place_moves_between_tiles() -> None:
    room = make_walled_room(5, 5)
    a = room[Position(1, 1)]
    b = room[Position(2, 2)]
    entity = Entity()

    entity.place(a)
    entity.place(b)

    assert entity.tile is b
    assert entity not in a
    assert entity in b


def test_can_move_only_onto_floor() -> None:
    room = make_walled_room(5, 5)
    entity = Entity()
    entity.place(room[Position(1, 1)])

    assert entity.can_move(Direction.EAST)
    assert entity.can_move(Direction.SOUTH_EAST)
    assert not entity.can_move(Direction.NORTH)
    assert not entity.can_move(Direction.WEST)


def test_move_updates_tile_membership() -> None:
    room = make_walled_room(5, 5)
    entity = Entity()
    entity.place(room[Position(1, 1)])

    assert entity.move(Direction.SOUTH)
    assert entity.tile is room[Position(1, 2)]
    assert entity not in room[Position(1, 1)]
    assert not entity.move(Direction.WEST)
    assert entity.tile is room[Position(1, 2)]


def test_unplaced_entity_cannot_move() -> None:
    entity = Entity()
    assert not entity.can_move(Direction.NORTH)
    assert not entity.move(Direction.NORTH)


def test_remove_takes_entity_off_level() -> None:
    room = make_walled_room(5, 5)
    tile = room[Position(2, 2)]
    entity = Entity()
    entity.place(tile)

    entity.remove()

    assert entity.tile is None
    assert tile.entity_count == 0


def test_entity_cannot_enter_void() -> None:
    room = make_walled_room(5, 5)
    tile = room[Position(2, 2)]
    tile.state = TileState.VOID
    entity = Entity()

    assert not entity.place(tile)
    assert entity not in tile
    assert entity.tile is None


def test_rejected_move_keeps_entity_on_its_tile() -> None:
    room = make_walled_room(5, 5)
    start = room[Position(2, 2)]
    void = room[Position(3, 2)]
    void.state = TileState.VOID
    entity = Entity()
    entity.place(start)

    assert not entity.place(void)
    assert entity.tile is start
    assert entity in start
    assert entity.move(Direction.NORTH)
    assert entity.tile is room[Position(2, 1)]
