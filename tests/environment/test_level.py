from __future__ import annotations

from cairn.environment.level import Level
from cairn.environment.tile import VOID_TILE
from cairn.util.coordinates import Direction, Position, Rect
from tests.helpers import RecordingEntity, WanderingEntity


def test_create_room_registers_with_level() -> None:
    level = Level()
    room = level.create_room(Rect(0, 0, 4, 4))
    assert level.rooms == [room]


def test_get_tile_finds_room_by_absolute_position() -> None:
    level = Level()
    first = level.create_room(Rect(0, 0, 4, 4))
    second = level.create_room(Rect(10, 0, 4, 4))

    assert level.get_tile(Position(1, 1)) is first[Position(1, 1)]
    assert level.get_tile(Position(12, 3)) is second[Position(2, 3)]
    assert level.get_tile(Position(7, 2)) is VOID_TILE


def test_think_visits_every_tile_once_per_tick() -> None:
    level = Level()
    room = level.create_room(Rect(0, 0, 5, 5))
    room.create_floor(room.local_rect)
    log: list[str] = []
    RecordingEntity("a", log).place(room[Position(1, 1)])
    RecordingEntity("b", log).place(room[Position(3, 3)])

    level.think()
    level.think()

    assert log == ["a", "b", "a", "b"]
    assert level.tick_count == 2


def test_tile_pass_completes_before_next_tile() -> None:
    """Entities removed while their tile thinks never get a later turn."""
    level = Level()
    room = level.create_room(Rect(0, 0, 5, 1))
    room.create_floor(room.local_rect)
    log: list[str] = []

    class Hunter(RecordingEntity):
        def __init__(self, name: str, prey: RecordingEntity) -> None:
            super().__init__(name, log)
            self.prey = prey

        def think(self) -> None:
            super().think()
            self.prey.remove()

    prey = RecordingEntity("prey", log)
    prey.place(room[Position(0, 0)])
    Hunter("hunter", prey).place(room[Position(0, 0)])

    level.think()

    assert log == ["hunter"]
    assert room[Position(0, 0)].entity_count == 1


def test_entity_moving_ahead_thinks_once_per_tick() -> None:
    """Stepping onto a tile visited later in the tick does not earn a second turn."""
    level = Level()
    room = level.create_room(Rect(0, 0, 6, 1))
    room.create_floor(room.local_rect)
    log: list[str] = []
    wanderer = WanderingEntity("w", log, Direction.EAST)
    wanderer.place(room[Position(0, 0)])

    level.think()

    assert log == ["w"]
    assert wanderer.tile is room[Position(1, 0)]

    level.think()

    assert log == ["w", "w"]
    assert wanderer.tile is room[Position(2, 0)]


def test_entity_moving_south_between_rows_thinks_once() -> None:
    level = Level()
    room = level.create_room(Rect(0, 0, 1, 5))
    room.create_floor(room.local_rect)
    log: list[str] = []
    wanderer = WanderingEntity("w", log, Direction.SOUTH)
    wanderer.place(room[Position(0, 0)])

    level.think()

    assert log == ["w"]
    assert wanderer.tile is room[Position(0, 1)]
