"""Tiles: the individual cells of a room.

A Tile's state lives in its owning Room's numpy grid; the Tile object adds
the room-relative position and the ordered set of entities standing on it.
Rooms create and own their tiles, so the Tile only keeps a plain back
reference to the Room.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

from cairn import config
from cairn.util.coordinates import Direction, Position

if TYPE_CHECKING:
    from .room import Room

logger = logging.getLogger(__name__)


class TileState(IntEnum):
    VOID = 0
    WALL = 1
    FLOOR = 2


class Entity(Protocol):
    """What the spatial model needs from anything standing on a tile."""

    @property
    def tile(self) -> Tile | None: ...

    def think(self) -> None: ...


class Tile:
    """A single cell of a Room."""

    def __init__(self, room: Room | None, relative_position: Position) -> None:
        self.room = room
        self.relative_position = relative_position
        # Dict keys give unique membership with insertion order preserved.
        self._entities: dict[Entity, None] = {}

    # -------------------------------------------------------------------------
    # Position
    # -------------------------------------------------------------------------

    @property
    def relative_x(self) -> int:
        return self.relative_position.x

    @property
    def relative_y(self) -> int:
        return self.relative_position.y

    @property
    def position(self) -> Position:
        """Absolute position in the level."""
        if self.room is None:
            return self.relative_position
        return self.room.rect.top_left + self.relative_position

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> TileState:
        assert self.room is not None
        return TileState(self.room.states[self.relative_x, self.relative_y])

    @state.setter
    def state(self, value: TileState) -> None:
        assert self.room is not None
        if value == TileState.VOID:
            self.evict_all()
        self.room.states[self.relative_x, self.relative_y] = value

    @property
    def is_floor(self) -> bool:
        return self.state == TileState.FLOOR

    # -------------------------------------------------------------------------
    # Entities
    # -------------------------------------------------------------------------

    @property
    def entities(self) -> list[Entity]:
        return list(self._entities)

    @property
    def entity_count(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities))

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities

    def add_entity(self, entity: Entity) -> None:
        """Start tracking ``entity``.

        Only accepted once the entity already points at this tile; anything
        else is ignored, as is any insertion into a void tile.
        """
        if self.state == TileState.VOID:
            return
        if entity.tile is not self:
            return
        if entity in self._entities:
            return
        self._entities[entity] = None

    def remove_entity(self, entity: Entity) -> None:
        """Stop tracking ``entity`` once it has moved its reference elsewhere."""
        if entity.tile is self:
            return
        self._entities.pop(entity, None)

    def evict_all(self) -> None:
        if self._entities:
            logger.debug(
                f"Evicting {len(self._entities)} entities from void tile "
                f"{self.relative_position}"
            )
        self._entities.clear()

    # -------------------------------------------------------------------------
    # Neighbours & visibility
    # -------------------------------------------------------------------------

    def get_neighbour(self, offset: Direction | Position) -> Tile:
        """The tile one step in ``offset`` (or at a relative offset) from here.

        Returns VOID_TILE when the neighbour falls outside the room.
        """
        if isinstance(offset, Direction):
            offset = offset.offset
        if self.room is None:
            return VOID_TILE
        return self.room[self.relative_position + offset]

    def is_visible_from(
        self, observer: Position, max_radius: int = config.DEFAULT_VISIBILITY_RADIUS
    ) -> bool:
        """Line-of-sight test from ``observer`` to this tile.

        Only FLOOR is transparent. The destination itself is never checked,
        so walls facing the observer count as visible.
        """
        target = self.position
        if (target - observer).length_squared > max_radius * max_radius:
            return False
        if self.room is None:
            return False

        room = self.room
        origin = room.rect.top_left
        return all(
            point == target or room[point - origin].state == TileState.FLOOR
            for point in observer.line_to(target)
        )

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    def think(self, entities: Sequence[Entity] | None = None) -> None:
        """Run one think pass over ``entities`` (default: current occupants).

        Entities are visited newest first, and any that left the tile earlier
        in the pass are skipped.
        """
        snapshot = list(self._entities) if entities is None else list(entities)
        for entity in reversed(snapshot):
            if entity in self._entities:
                entity.think()

    def __repr__(self) -> str:
        return (
            f"Tile(relative_position={self.relative_position}, "
            f"state={self.state.name})"
        )


class _VoidTile(Tile):
    """Immutable sentinel returned for lookups outside a room."""

    def __init__(self) -> None:
        super().__init__(None, Position(0, 0))

    @property
    def state(self) -> TileState:
        return TileState.VOID

    @state.setter
    def state(self, value: TileState) -> None:
        raise AttributeError("The void tile is immutable")

    def __repr__(self) -> str:
        return "VOID_TILE"


VOID_TILE: Tile = _VoidTile()
