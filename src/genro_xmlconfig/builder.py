# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""XmlTreeBuilder - folds a flat configuration mapping into a node tree.

Each key is split on the delimiter and resolved from the root down,
creating placeholder nodes for path segments that are not keys
themselves. A later entry overwrites the value of a node created earlier
as a placeholder; a placeholder resolution never clears a value.

Example:
    >>> root = XmlTreeBuilder().build({'a:b': '1', 'a:c': '2', 'a': 'x'})
    >>> a = root.get_child('a')
    >>> a.value, [child.name for child in a]
    ('x', ['b', 'c'])
"""

from __future__ import annotations

import logging
from typing import Mapping

from .exceptions import InvalidArgumentError
from .node import XmlConfigNode
from .path import KEY_DELIMITER, split_key

logger = logging.getLogger(__name__)

DEFAULT_ROOT_NAME = 'configuration'


class XmlTreeBuilder:
    """Build an XmlConfigNode tree from a ``key -> value`` mapping.

    Attributes:
        root_name: Name of the synthetic root element.
        delimiter: Key segment delimiter.
    """

    __slots__ = ('root_name', 'delimiter')

    def __init__(
        self,
        root_name: str | None = None,
        delimiter: str = KEY_DELIMITER,
    ) -> None:
        self.root_name = root_name or DEFAULT_ROOT_NAME
        self.delimiter = delimiter

    def build(self, data: Mapping[str, str | None]) -> XmlConfigNode:
        """Build the tree for the whole mapping.

        Args:
            data: Ordered mapping of delimited keys to values. None values
                create the node without setting text.

        Returns:
            The root node, named ``root_name``, without a value.

        Raises:
            InvalidArgumentError: If data is None.
            InvalidKeyError: If a key is empty or malformed.
        """
        if data is None:
            raise InvalidArgumentError("data is required to build a tree")

        root = XmlConfigNode(self.root_name)
        index: dict[str, XmlConfigNode] = {}
        for key, value in data.items():
            self._resolve(root, index, key, value)

        logger.debug("Built '%s' tree from %d keys (%d nodes)", root.name, len(data), len(index))
        return root

    def _resolve(
        self,
        root: XmlConfigNode,
        index: dict[str, XmlConfigNode],
        path: str,
        value: str | None,
    ) -> XmlConfigNode:
        """Return the node for ``path``, creating it and its ancestors.

        Args:
            root: Root of the tree being built.
            index: Nodes already resolved in this build, by full path.
            path: Delimited key.
            value: Value to set, or None when resolving an ancestor.
        """
        parent_path, name = split_key(path, self.delimiter)

        node = index.get(path)
        if node is None:
            if parent_path is None:
                parent = root
            else:
                parent = self._resolve(root, index, parent_path, None)

            node = parent.add_child(name, value)
            index[path] = node
            return node

        if value is not None:
            node.value = value
        return node
