# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""XmlConfigNode - one element of an XML configuration tree."""

from __future__ import annotations

from typing import Iterator

from .exceptions import InvalidArgumentError


class XmlConfigNode:
    """An element in an XML configuration tree.

    Each node has:
    - name: The element name, unique among its siblings
    - value: Optional text content
    - children: Child nodes in insertion order

    A node can carry both a value and children: key ``'a'`` and key
    ``'a:b'`` map to the same ``a`` element.

    Nodes do not reference their parent. The tree builder resolves parents
    through its own path index.

    Example:
        >>> node = XmlConfigNode('database')
        >>> node.add_child('host', 'localhost')
        XmlConfigNode('host', value='localhost')
        >>> node.get_child('host').value
        'localhost'
    """

    __slots__ = ('name', 'value', '_children')

    def __init__(self, name: str, value: str | None = None) -> None:
        """Initialize an XmlConfigNode.

        Args:
            name: The element name. Required, non-empty.
            value: Optional text content.

        Raises:
            InvalidArgumentError: If name is empty or None.
        """
        if not name:
            raise InvalidArgumentError("A node requires a non-empty name")
        self.name = name
        self.value = value
        self._children: dict[str, XmlConfigNode] = {}

    def __repr__(self) -> str:
        if self._children:
            return f"XmlConfigNode({self.name!r}, value={self.value!r}, children={len(self)})"
        return f"XmlConfigNode({self.name!r}, value={self.value!r})"

    def __len__(self) -> int:
        """Return the number of direct children."""
        return len(self._children)

    def __iter__(self) -> Iterator[XmlConfigNode]:
        """Iterate over direct children in insertion order."""
        return iter(self._children.values())

    def __contains__(self, name: str) -> bool:
        return name in self._children

    @property
    def children(self) -> list[XmlConfigNode]:
        """Direct children in insertion order."""
        return list(self._children.values())

    @property
    def has_children(self) -> bool:
        return bool(self._children)

    @property
    def has_value(self) -> bool:
        """True if the node carries non-empty text."""
        return bool(self.value)

    def get_child(self, name: str) -> XmlConfigNode | None:
        """Return the child called ``name``, or None."""
        return self._children.get(name)

    def add_child(self, name: str, value: str | None = None) -> XmlConfigNode:
        """Append a new child node.

        Args:
            name: Child element name.
            value: Optional text content.

        Returns:
            The new child.

        Raises:
            InvalidArgumentError: If a child with the same name exists.
        """
        if name in self._children:
            raise InvalidArgumentError(
                f"'{self.name}' already has a child named '{name}'"
            )
        child = XmlConfigNode(name, value)
        self._children[name] = child
        return child

    def walk(self, _prefix: str = '', delimiter: str = ':') -> Iterator[tuple[str, XmlConfigNode]]:
        """Yield ``(path, node)`` for every descendant, depth-first.

        Paths are relative to this node and use ``delimiter``.

        Example:
            >>> for path, node in root.walk():
            ...     print(path, node.value)
        """
        for child in self._children.values():
            path = f"{_prefix}{delimiter}{child.name}" if _prefix else child.name
            yield path, child
            yield from child.walk(path, delimiter)
