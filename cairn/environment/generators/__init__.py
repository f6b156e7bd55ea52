"""World generation for Cairn.

This package provides:
- DefinitionCollection: lazily loaded, inheritable generator definitions
- DefinitionNode: configuration nodes built from mappings or XML elements
- RoomGenerator: the generator kind for rooms, composed of a RoomLayout worker
- Default: the rectangular wall-ring room layout
"""

from .definitions import (
    ConfigurationError,
    Definition,
    DefinitionCollection,
    GenerationWorker,
    Generator,
    LoadState,
    UnknownDefinitionError,
    load_properties,
    load_worker_from_definition,
    register_worker,
)
from .nodes import DefinitionNode, NodeSource
from .rooms import Default, RoomGenerator, RoomLayout

__all__ = [
    "ConfigurationError",
    "Default",
    "Definition",
    "DefinitionCollection",
    "DefinitionNode",
    "GenerationWorker",
    "Generator",
    "LoadState",
    "NodeSource",
    "RoomGenerator",
    "RoomLayout",
    "UnknownDefinitionError",
    "load_properties",
    "load_worker_from_definition",
    "register_worker",
]
