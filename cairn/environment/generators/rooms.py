"""Room generators and the room layout workers they delegate to."""

from __future__ import annotations

import abc
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cairn import config
from cairn.util import rng

from .definitions import GenerationWorker, Generator, register_worker

if TYPE_CHECKING:
    from cairn.environment.level import Level
    from cairn.environment.room import Room
    from cairn.util.coordinates import Rect
    from cairn.util.rng import RNG

    from .nodes import NodeSource

logger = logging.getLogger(__name__)

_rng = rng.get(config.ROOM_LAYOUT_RNG_DOMAIN)


@dataclass
class RoomLayout(GenerationWorker, abc.ABC):
    """Strategy that materializes rooms for a target rectangle.

    Layouts receive the level to create rooms in, the absolute rectangle to
    fill, and door rectangles relative to that rectangle. They return every
    room they created; the default layout creates exactly one.
    """

    worker_kind = "RoomLayout"

    @abc.abstractmethod
    def generate(
        self, level: Level, rect: Rect, doors: Sequence[Rect], rand: RNG
    ) -> list[Room]:
        raise NotImplementedError


@register_worker("Default")
@dataclass
class Default(RoomLayout):
    """A wall ring around a floor interior, with doors punched through."""

    def generate(
        self, level: Level, rect: Rect, doors: Sequence[Rect], rand: RNG
    ) -> list[Room]:
        room = level.create_room(rect)
        rect = rect - rect.top_left

        room.create_wall(rect)
        room.create_floor(rect.inset(config.ROOM_WALL_THICKNESS))

        for door in doors:
            room.create_floor(door)

        return [room]


@dataclass
class RoomGenerator(Generator):
    """Generator kind for room definitions.

    Attributes:
        room_layout: Layout worker; overridden by a ``RoomLayout`` child.
    """

    room_layout: RoomLayout = field(default_factory=Default)

    def on_load_from_definition(self, node: NodeSource) -> None:
        self.room_layout = self.load_worker(node, self.room_layout)

    def generate(
        self,
        level: Level,
        rect: Rect,
        doors: Sequence[Rect] = (),
        rand: RNG | None = None,
    ) -> list[Room]:
        rooms = self.room_layout.generate(
            level, rect, doors, rand if rand is not None else _rng
        )
        logger.debug(
            f"{type(self.room_layout).__name__} produced {len(rooms)} room(s) "
            f"for {rect!r}"
        )
        return rooms
