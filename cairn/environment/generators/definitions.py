"""Inheritance-aware definitions for generators.

A definition is a named configuration node describing one generator (for
example one kind of room). Definitions may name a ``base`` definition from
the same collection; loading a definition applies every node along its
inheritance chain, root first, to one freshly built generator, so that each
level can override or extend what its ancestors configured.

Generators are composed of workers: pluggable strategy objects such as a
room layout. A definition can swap a worker's implementation by naming a
registered class, and can tweak the worker's fields either way:

    <room name="Cell" base="Room" width="5">
        <RoomLayout class="Default" />
    </room>

Loading is lazy. ``DefinitionCollection.resolve`` loads a definition (and
its ancestors) on first access and hands back the same generator on every
later call.
"""

from __future__ import annotations

import abc
import dataclasses
import inspect
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, ClassVar, Generic, TypeVar

from cairn import config
from cairn.types import DefinitionName, WorkerClassName

from .nodes import NodeSource

logger = logging.getLogger(__name__)

W = TypeVar("W", bound="GenerationWorker")
T = TypeVar("T", bound="Generator")


class ConfigurationError(Exception):
    """Raised when generator definitions are malformed.

    Covers missing or duplicate names, unknown or cyclic bases, unknown or
    unconstructible worker classes, and field values that cannot be parsed.
    These abort loading of the affected definition.
    """

    pass


class UnknownDefinitionError(LookupError):
    """Raised when resolving a name that was never registered."""

    def __init__(self, name: DefinitionName) -> None:
        super().__init__(f"No definition named {name!r}")
        self.name = name


# =============================================================================
# FIELD LOADING
# =============================================================================

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0"})


def _parse_value(raw: str, current: Any, field_name: str) -> Any:
    """Parse ``raw`` into the type of the field's current value."""
    try:
        # bool first: bool is a subclass of int.
        if isinstance(current, bool):
            lowered = raw.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
            raise ValueError(f"not a boolean: {raw!r}")
        if isinstance(current, int):
            return int(raw)
        if isinstance(current, float):
            return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid value {raw!r} for field {field_name!r}: {e}"
        ) from e
    return raw


def _raw_value(node: NodeSource, name: str) -> str | None:
    if node.has_attribute(name):
        return node.get_attribute(name)
    if node.has_child(name):
        return node.get_child(name).text
    return None


def load_properties(target: Any, node: NodeSource) -> None:
    """Copy scalar dataclass fields of ``target`` from ``node``.

    A field is read from an attribute of the same name, or failing that from
    the text of a child element of the same name. Workers and private fields
    are left alone, as are the resolver's own attributes (name, base, class).
    """
    for field in dataclasses.fields(target):
        if field.name.startswith("_") or not field.init:
            continue
        if field.name in config.RESERVED_DEFINITION_ATTRIBUTES:
            continue

        current = getattr(target, field.name)
        if isinstance(current, GenerationWorker):
            continue

        raw = _raw_value(node, field.name)
        if raw is None:
            continue
        setattr(target, field.name, _parse_value(raw, current, field.name))


# =============================================================================
# WORKERS
# =============================================================================

# worker_kind -> implementation name -> class
_worker_registry: dict[str, dict[WorkerClassName, type[GenerationWorker]]] = {}


@dataclass
class GenerationWorker:
    """A pluggable piece of a generator, configured from a child element.

    Each worker family sets ``worker_kind``, which is both the tag of the
    child element it is configured from and the namespace its
    implementations are registered under.
    """

    worker_kind: ClassVar[str] = ""

    def load_from_definition(self, node: NodeSource) -> None:
        load_properties(self, node)


def _qualified_name(kind: str, name: WorkerClassName) -> str:
    return f"{kind}s.{name}"


def register_worker(
    name: WorkerClassName,
) -> Callable[[type[W]], type[W]]:
    """Class decorator registering a worker implementation under ``name``.

    Raises:
        ValueError: If the family already has an implementation by that name.
    """

    def decorator(cls: type[W]) -> type[W]:
        kind = cls.worker_kind
        if not kind:
            raise ValueError(f"{cls.__name__} does not belong to a worker family")
        implementations = _worker_registry.setdefault(kind, {})
        if name in implementations:
            raise ValueError(
                f"Worker '{_qualified_name(kind, name)}' is already registered."
            )
        implementations[name] = cls
        return cls

    return decorator


def get_worker_class(kind: str, name: WorkerClassName) -> type[GenerationWorker]:
    try:
        return _worker_registry[kind][name]
    except KeyError:
        raise ConfigurationError(
            f"Invalid {kind} type specified: '{_qualified_name(kind, name)}'"
        ) from None


def create_worker(cls: type[W]) -> W:
    """Default-construct a worker, refusing classes that need arguments."""
    try:
        inspect.signature(cls).bind()
    except TypeError as e:
        raise ConfigurationError(
            f"{cls.worker_kind} type {cls.__name__} has no valid constructor: {e}"
        ) from e
    return cls()


def load_worker_from_definition(
    node: NodeSource, fallback: W
) -> W:
    """Configure a worker from the child of ``node`` named after its family.

    When that child names a ``class`` other than the fallback's own, a new
    instance of the named implementation replaces the fallback before its
    fields are loaded. Without a matching child, ``fallback`` is returned
    untouched.
    """
    kind = fallback.worker_kind
    if not node.has_child(kind):
        return fallback

    sub = node.get_child(kind)
    class_name = sub.get_attribute(config.WORKER_CLASS_ATTRIBUTE)
    if class_name is not None:
        worker_cls = get_worker_class(kind, class_name)
        if type(fallback) is not worker_cls:
            logger.debug(
                f"Replacing {type(fallback).__name__} with "
                f"{_qualified_name(kind, class_name)}"
            )
            fallback = create_worker(worker_cls)

    fallback.load_from_definition(sub)
    return fallback


# =============================================================================
# GENERATORS & DEFINITIONS
# =============================================================================


@dataclass
class Generator(abc.ABC):
    """Base class for anything composed from a chain of definitions."""

    def load_from_definition(self, node: NodeSource) -> None:
        """Apply one definition node on top of what is already configured."""
        load_properties(self, node)
        self.on_load_from_definition(node)

    def load_worker(self, node: NodeSource, fallback: W) -> W:
        return load_worker_from_definition(node, fallback)

    @abc.abstractmethod
    def on_load_from_definition(self, node: NodeSource) -> None:
        """Load workers (and anything beyond scalar fields) from ``node``."""
        raise NotImplementedError


class LoadState(Enum):
    UNLOADED = auto()
    LOADING = auto()
    LOADED = auto()


class Definition(Generic[T]):
    """One registered node plus the generator it composes into."""

    def __init__(
        self, name: DefinitionName, base_name: DefinitionName | None, node: NodeSource
    ) -> None:
        self.name = name
        self.base_name = base_name
        self.node = node
        self.state = LoadState.UNLOADED
        self.generator: T | None = None

    @property
    def has_base(self) -> bool:
        return self.base_name is not None

    @property
    def loaded(self) -> bool:
        return self.state is LoadState.LOADED

    def __repr__(self) -> str:
        return (
            f"Definition(name={self.name!r}, base_name={self.base_name!r}, "
            f"state={self.state.name})"
        )


class DefinitionCollection(Generic[T]):
    """All definitions of one generator kind, keyed by name.

    Example:
        rooms = DefinitionCollection(RoomGenerator)
        rooms.register(DefinitionNode.from_mapping({"name": "Room"}))
        rooms.register(DefinitionNode.from_mapping({"name": "Cell", "base": "Room"}))
        cell = rooms.resolve("Cell")
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._definitions: dict[DefinitionName, Definition[T]] = {}

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, node: NodeSource) -> Definition[T]:
        """Add an unloaded definition built from ``node``.

        Raises:
            ConfigurationError: If the node has no name, or the name is taken.
        """
        name = node.get_attribute(config.DEFINITION_NAME_ATTRIBUTE)
        if not name:
            raise ConfigurationError(
                f"Definition node <{node.tag}> is missing the required "
                f"'{config.DEFINITION_NAME_ATTRIBUTE}' attribute"
            )
        if name in self._definitions:
            raise ConfigurationError(f"Definition {name!r} is already registered")

        base_name = node.get_attribute(config.DEFINITION_BASE_ATTRIBUTE) or None
        definition: Definition[T] = Definition(name, base_name, node)
        self._definitions[name] = definition
        logger.debug(f"Registered definition {name!r} (base={base_name!r})")
        return definition

    def register_all(self, nodes: Iterable[NodeSource]) -> None:
        for node in nodes:
            self.register(node)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_definition(self, name: DefinitionName) -> Definition[T]:
        """The (possibly unloaded) definition for ``name``."""
        try:
            return self._definitions[name]
        except KeyError:
            raise UnknownDefinitionError(name) from None

    def resolve(self, name: DefinitionName) -> T:
        """The fully loaded generator for ``name``, loading it if needed.

        Raises:
            UnknownDefinitionError: If ``name`` was never registered.
            ConfigurationError: If the definition or its chain is malformed.
        """
        definition = self.get_definition(name)
        if not definition.loaded:
            self.load(definition)
        assert definition.generator is not None
        return definition.generator

    def __getitem__(self, name: DefinitionName) -> T:
        return self.resolve(name)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def names(self) -> list[DefinitionName]:
        return list(self._definitions)

    def definitions(self) -> list[Definition[T]]:
        return list(self._definitions.values())

    def __iter__(self) -> Iterator[T]:
        """Resolved generators in registration order."""
        for name in list(self._definitions):
            yield self.resolve(name)

    # -------------------------------------------------------------------------
    # Inheritance
    # -------------------------------------------------------------------------

    def _base_of(self, definition: Definition[T]) -> Definition[T] | None:
        if definition.base_name is None:
            return None
        base = self._definitions.get(definition.base_name)
        if base is None:
            raise ConfigurationError(
                f"Definition {definition.name!r} has unknown base "
                f"{definition.base_name!r}"
            )
        return base

    def inheritance_chain(self, definition: Definition[T]) -> list[Definition[T]]:
        """Root ancestor first, ``definition`` itself last.

        Raises:
            ConfigurationError: If a base is missing or the chain loops.
        """
        lineage: list[Definition[T]] = []
        current: Definition[T] | None = definition
        while current is not None:
            if current in lineage:
                cycle = " -> ".join(d.name for d in [*lineage, current])
                raise ConfigurationError(f"Cyclic definition inheritance: {cycle}")
            lineage.append(current)
            current = self._base_of(current)
        lineage.reverse()
        return lineage

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self, definition: Definition[T]) -> None:
        """Compose ``definition``'s generator from its whole chain, once.

        Calling this again after a successful load does nothing. On failure
        the definition is left unloaded and the error propagates.
        """
        if definition.state is LoadState.LOADED:
            return
        if definition.state is LoadState.LOADING:
            raise ConfigurationError(
                f"Definition {definition.name!r} was re-entered while loading"
            )

        definition.state = LoadState.LOADING
        try:
            chain = self.inheritance_chain(definition)
            for ancestor in chain[:-1]:
                self.load(ancestor)

            generator = self._factory()
            for member in chain:
                logger.debug(
                    f"Applying {member.name!r} to definition {definition.name!r}"
                )
                generator.load_from_definition(member.node)
        except Exception:
            definition.state = LoadState.UNLOADED
            logger.error(f"Failed to load definition {definition.name!r}")
            raise

        definition.generator = generator
        definition.state = LoadState.LOADED
        logger.info(
            f"Loaded definition {definition.name!r} "
            f"({' -> '.join(member.name for member in chain)})"
        )

    def load_all(self) -> None:
        """Load every registered definition, surfacing the first error."""
        for definition in list(self._definitions.values()):
            self.load(definition)
