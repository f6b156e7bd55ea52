from __future__ import annotations

import logging
from collections.abc import Iterator

import numpy as np

from cairn.util.coordinates import Position, Rect

from .tile import VOID_TILE, Entity, Tile, TileState

logger = logging.getLogger(__name__)


class Room:
    """A rectangular grid of tiles placed in a level.

    Tile states are stored in ``states``, a uint8 array of shape
    (width, height) indexed ``[x, y]`` in room-relative coordinates. Every
    tile starts out VOID until a layout carves walls and floors into it.
    """

    def __init__(self, rect: Rect) -> None:
        if rect.width <= 0 or rect.height <= 0:
            raise ValueError(f"Room needs a positive size, got {rect!r}")

        self.rect = rect
        self.states = np.full(
            (rect.width, rect.height),
            fill_value=TileState.VOID,
            dtype=np.uint8,
            order="F",
        )
        self._tiles = [
            [Tile(self, Position(x, y)) for y in range(rect.height)]
            for x in range(rect.width)
        ]

    @property
    def width(self) -> int:
        return self.rect.width

    @property
    def height(self) -> int:
        return self.rect.height

    @property
    def left(self) -> int:
        return self.rect.x1

    @property
    def top(self) -> int:
        return self.rect.y1

    @property
    def local_rect(self) -> Rect:
        """The room's own rectangle moved to the origin."""
        return self.rect - self.rect.top_left

    def contains(self, relative_pos: Position) -> bool:
        return 0 <= relative_pos.x < self.width and 0 <= relative_pos.y < self.height

    def __getitem__(self, relative_pos: Position) -> Tile:
        """Tile at a room-relative position, VOID_TILE when outside the room."""
        if not self.contains(relative_pos):
            return VOID_TILE
        return self._tiles[relative_pos.x][relative_pos.y]

    def tile_at(self, world_pos: Position) -> Tile:
        """Tile at an absolute level position, VOID_TILE when outside the room."""
        return self[world_pos - self.rect.top_left]

    def __iter__(self) -> Iterator[Tile]:
        for y in range(self.height):
            for x in range(self.width):
                yield self._tiles[x][y]

    # -------------------------------------------------------------------------
    # Carving
    # -------------------------------------------------------------------------

    def _carve(self, rect: Rect, state: TileState) -> None:
        area = rect.clip(self.local_rect)
        if area != rect:
            logger.debug(f"Clipped {rect!r} to {area!r} inside room {self.rect!r}")
        if area.area == 0:
            return
        self.states[area.slices()] = state

    def create_wall(self, rect: Rect) -> None:
        """Set every tile of the room-relative ``rect`` to WALL."""
        self._carve(rect, TileState.WALL)

    def create_floor(self, rect: Rect) -> None:
        """Set every tile of the room-relative ``rect`` to FLOOR."""
        self._carve(rect, TileState.FLOOR)

    def clear(self, rect: Rect) -> None:
        """Return the room-relative ``rect`` to VOID, evicting its entities."""
        area = rect.clip(self.local_rect)
        for pos in area.positions():
            self[pos].state = TileState.VOID

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def state_map(self) -> np.ndarray:
        """Read-only view of the state grid for display consumers."""
        view = self.states.view()
        view.flags.writeable = False
        return view

    @property
    def floor_mask(self) -> np.ndarray:
        """Boolean array of shape (width, height), True where the tile is FLOOR."""
        return self.states == TileState.FLOOR

    def entities(self) -> Iterator[Entity]:
        for tile in self:
            yield from tile

    def occupants(self) -> list[tuple[Tile, list[Entity]]]:
        """Snapshot of every occupied tile with the entities on it, row by row."""
        return [(tile, tile.entities) for tile in self if tile.entity_count]

    def think(self) -> None:
        for tile, entities in self.occupants():
            tile.think(entities)

    def __repr__(self) -> str:
        return f"Room(rect={self.rect!r})"
