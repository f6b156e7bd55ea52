from __future__ import annotations

import logging
from collections.abc import Iterator

from cairn.util.coordinates import Position, Rect

from .room import Room
from .tile import VOID_TILE, Tile

logger = logging.getLogger(__name__)


class Level:
    """A collection of rooms sharing one absolute coordinate space.

    Rooms are created through the level so layouts never construct rooms
    that the level does not know about.
    """

    def __init__(self) -> None:
        self._rooms: list[Room] = []
        self.tick_count = 0

    @property
    def rooms(self) -> list[Room]:
        return list(self._rooms)

    def create_room(self, rect: Rect) -> Room:
        room = Room(rect)
        self._rooms.append(room)
        logger.debug(f"Created room {rect!r} ({len(self._rooms)} rooms in level)")
        return room

    def get_tile(self, world_pos: Position) -> Tile:
        """First tile found at ``world_pos`` across all rooms, else VOID_TILE."""
        for room in self._rooms:
            if room.rect.contains(world_pos):
                return room.tile_at(world_pos)
        return VOID_TILE

    def tiles(self) -> Iterator[Tile]:
        for room in self._rooms:
            yield from room

    def think(self) -> None:
        """Advance the simulation by one tick.

        Occupants are captured for the whole level before anyone thinks, so
        an entity that moves onto a tile visited later in the tick does not
        think twice. Each tile's pass completes, including any removals it
        causes, before the next tile is visited.
        """
        occupants = [pair for room in self._rooms for pair in room.occupants()]
        for tile, entities in occupants:
            tile.think(entities)
        self.tick_count += 1
