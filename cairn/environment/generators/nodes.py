"""Configuration nodes consumed by the definition resolver.

The resolver never parses files itself. It only needs something that can
answer "get/has attribute" and "get/has child element" questions, which is
what ``NodeSource`` describes. ``DefinitionNode`` is the concrete node used
throughout the package and can be built from plain mappings (e.g. loaded
from JSON or TOML) or from ``xml.etree.ElementTree`` elements.

Mapping layout:
    {
        "name": "Cell",
        "base": "Room",
        "width": 7,                          # scalar -> attribute
        "RoomLayout": {"class": "Default"},  # mapping -> child element
    }
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element


class NodeSource(Protocol):
    """Structural interface the resolver relies on."""

    @property
    def tag(self) -> str: ...

    @property
    def text(self) -> str | None: ...

    def has_attribute(self, name: str) -> bool: ...

    def get_attribute(self, name: str) -> str | None: ...

    def has_child(self, name: str) -> bool: ...

    def get_child(self, name: str) -> NodeSource: ...


class DefinitionNode:
    """An immutable tree of string attributes and named child nodes."""

    def __init__(
        self,
        tag: str,
        attributes: Mapping[str, str] | None = None,
        children: list[DefinitionNode] | None = None,
        text: str | None = None,
    ) -> None:
        self._tag = tag
        self._attributes = dict(attributes or {})
        self._children = list(children or [])
        self._text = text

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], tag: str = "definition"
    ) -> DefinitionNode:
        """Build a node from a mapping.

        Nested mappings become child elements; everything else becomes a
        string attribute. Booleans are stored as "true"/"false".
        """
        attributes: dict[str, str] = {}
        children: list[DefinitionNode] = []
        for key, value in data.items():
            if isinstance(value, Mapping):
                children.append(cls.from_mapping(value, tag=key))
            elif isinstance(value, bool):
                attributes[key] = "true" if value else "false"
            elif value is not None:
                attributes[key] = str(value)
        return cls(tag, attributes, children)

    @classmethod
    def from_element(cls, element: Element) -> DefinitionNode:
        text = element.text.strip() if element.text and element.text.strip() else None
        return cls(
            element.tag,
            dict(element.attrib),
            [cls.from_element(child) for child in element],
            text,
        )

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def text(self) -> str | None:
        return self._text

    @property
    def attributes(self) -> dict[str, str]:
        return dict(self._attributes)

    def has_attribute(self, name: str) -> bool:
        return name in self._attributes

    def get_attribute(self, name: str) -> str | None:
        return self._attributes.get(name)

    def has_child(self, name: str) -> bool:
        return any(child.tag == name for child in self._children)

    def get_child(self, name: str) -> DefinitionNode:
        """First child with tag ``name``.

        Raises:
            KeyError: If there is no such child.
        """
        for child in self._children:
            if child.tag == name:
                return child
        raise KeyError(name)

    def children(self) -> Iterator[DefinitionNode]:
        return iter(self._children)

    def __repr__(self) -> str:
        return f"DefinitionNode(tag={self._tag!r}, attributes={self._attributes!r})"
