"""Minimal entity layer: placement and movement between tiles.

The tile keeps its own consistency checks (see ``Tile.add_entity`` and
``Tile.remove_entity``); an Entity satisfies them by updating its own
reference first and only then notifying the new and old tiles.
"""

from __future__ import annotations

import logging

from cairn.environment.tile import Tile, TileState
from cairn.util.coordinates import Direction

logger = logging.getLogger(__name__)


class Entity:
    """Something that stands on a tile and gets a think step each tick."""

    def __init__(self, name: str = "entity") -> None:
        self.name = name
        self._tile: Tile | None = None

    @property
    def tile(self) -> Tile | None:
        return self._tile

    def place(self, tile: Tile | None) -> bool:
        """Move onto ``tile`` (or off the level when ``None``).

        Returns False, leaving the entity where it was, when the tile refuses
        it (a void tile).
        """
        old = self._tile
        if old is tile:
            return True
        self._tile = tile
        if tile is not None:
            tile.add_entity(self)
            if self not in tile:
                logger.debug(f"{self.name} could not enter {tile!r}")
                self._tile = old
                return False
        if old is not None:
            old.remove_entity(self)
        return True

    def remove(self) -> None:
        self.place(None)

    def can_move(self, direction: Direction) -> bool:
        if self._tile is None:
            return False
        return self._tile.get_neighbour(direction).state == TileState.FLOOR

    def move(self, direction: Direction) -> bool:
        """Step one tile in ``direction`` when the destination is floor."""
        if not self.can_move(direction):
            return False
        assert self._tile is not None
        return self.place(self._tile.get_neighbour(direction))

    def think(self) -> None:
        """Per-tick behaviour; the base entity does nothing."""

    def __repr__(self) -> str:
        return f"Entity(name={self.name!r})"
