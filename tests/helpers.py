"""Shared builders for spatial and generation tests."""

from __future__ import annotations

from cairn.environment.level import Level
from cairn.environment.room import Room
from cairn.environment.tile import TileState
from cairn.game.entity import Entity
from cairn.util.coordinates import Direction, Rect


def make_open_room(width: int = 7, height: int = 7, x: int = 0, y: int = 0) -> Room:
    """A room of pure floor, no walls."""
    room = Level().create_room(Rect(x, y, width, height))
    room.create_floor(room.local_rect)
    return room


def make_walled_room(width: int = 7, height: int = 7, x: int = 0, y: int = 0) -> Room:
    """A wall ring around a floor interior."""
    room = Level().create_room(Rect(x, y, width, height))
    room.create_wall(room.local_rect)
    room.create_floor(room.local_rect.inset(1))
    return room


def states_as_text(room: Room) -> list[str]:
    """Render a room as rows of '#' (wall), '.' (floor) and ' ' (void)."""
    glyphs = {TileState.WALL: "#", TileState.FLOOR: ".", TileState.VOID: " "}
    return [
        "".join(glyphs[TileState(room.states[x, y])] for x in range(room.width))
        for y in range(room.height)
    ]


class RecordingEntity(Entity):
    """Entity that appends its name to a shared log whenever it thinks."""

    def __init__(self, name: str, log: list[str]) -> None:
        super().__init__(name)
        self.log = log

    def think(self) -> None:
        self.log.append(self.name)


class WanderingEntity(RecordingEntity):
    """Records its think, then steps one tile in ``direction``."""

    def __init__(
        self, name: str, log: list[str], direction: Direction = Direction.EAST
    ) -> None:
        super().__init__(name, log)
        self.direction = direction

    def think(self) -> None:
        super().think()
        self.move(self.direction)
