# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""WritableXmlConfigurationProvider - write-through XML configuration.

The provider owns the flat ``key -> value`` mapping loaded from an XML
file. Every ``set`` updates the mapping and then rewrites the whole file
from the entire mapping: the file is truncated and the full document is
written again, with no diffing against what was there before.

Known limitations:
    - ``set`` is not atomic. The document is serialized in memory first,
      so an invalid key or value leaves the file untouched, but an I/O
      error while writing can leave it truncated or partially written.
      Either way the mapping keeps the new value.
    - There is no locking. Concurrent ``set`` calls on one provider can
      interleave their writes; callers sharing a provider across threads
      must serialize access themselves.

Example:
    >>> source = WritableXmlConfigurationSource(
    ...     XmlConfigurationWriter(write_comment=False),
    ...     FileStreamProvider(),
    ...     path='/etc/myapp/settings.xml',
    ... )
    >>> provider = source.build()
    >>> provider.load()
    >>> provider.set('database:host', 'localhost')
"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, Any, Iterator

from .exceptions import InvalidArgumentError, ResourceWriteError
from .parsers import parse_xml_file
from .path import KEY_DELIMITER

if TYPE_CHECKING:
    from .source import WritableXmlConfigurationSource

logger = logging.getLogger(__name__)


def _child_key_order(segment: str) -> tuple[int, int, str]:
    """Sort numeric segments first, numerically, then the rest by name."""
    if segment.isdigit():
        return 0, int(segment), ''
    return 1, 0, segment


class WritableXmlConfigurationProvider:
    """Configuration provider that persists every change to its XML file.

    Attributes:
        source: The source this provider was built from.
        data: The authoritative ``key -> value`` mapping.
    """

    def __init__(self, source: WritableXmlConfigurationSource) -> None:
        if source is None:
            raise InvalidArgumentError("source is required")
        self.source = source
        self.writer = source.writer
        self.stream_provider = source.stream_provider
        self.data: dict[str, str | None] = {}

    def __repr__(self) -> str:
        return f"WritableXmlConfigurationProvider({self.source.path!r}, keys={len(self.data)})"

    # ==================== Read side ====================

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __contains__(self, key: str) -> bool:
        return key in self.data

    def __getitem__(self, key: str) -> str | None:
        return self.data[key]

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if missing."""
        return self.data.get(key, default)

    def keys(self) -> list[str]:
        return list(self.data)

    def get_child_keys(self, parent_path: str | None = None) -> list[str]:
        """Return the distinct segments directly below ``parent_path``.

        Args:
            parent_path: Delimited key of the parent. None for top level.

        Returns:
            Sorted segment names, numeric segments first.

        Example:
            >>> provider.data = {'db:host': 'h', 'db:port': '1', 'debug': 'on'}
            >>> provider.get_child_keys('db')
            ['host', 'port']
        """
        prefix = f"{parent_path}{KEY_DELIMITER}" if parent_path else ''
        segments: set[str] = set()
        for key in self.data:
            if not key.startswith(prefix):
                continue
            segment = key[len(prefix):].split(KEY_DELIMITER, 1)[0]
            if segment:
                segments.add(segment)
        return sorted(segments, key=_child_key_order)

    def load(self) -> None:
        """Replace ``data`` with the contents of the source file.

        A missing optional file loads as an empty mapping.

        Raises:
            FileNotFoundError: If the file is missing and not optional.
            XmlConfigFormatError: If the file is not a valid document.
        """
        file_provider = self.source.file_provider
        path = self.source.path
        if file_provider is None or not file_provider.exists(path):
            if self.source.optional:
                self.data = {}
                return
            raise FileNotFoundError(
                f"The configuration file '{path}' was not found and is not optional"
            )

        physical_path = file_provider.get_physical_path(path)
        self.data = parse_xml_file(physical_path)
        logger.info("Loaded %d keys from %s", len(self.data), physical_path)

    # ==================== Write side ====================

    def set(self, key: str, value: str | None) -> None:
        """Set ``key`` and rewrite the whole backing file.

        Args:
            key: Delimited configuration key.
            value: New value.

        Raises:
            ResourceWriteError: If the file cannot be opened or written.
                The mapping is already updated when this is raised.
            InvalidKeyError: If a key in the mapping is empty or malformed.
            InvalidArgumentError: If a key segment is not an XML name or a
                value holds a character XML cannot represent.

        Key and value errors are raised before the file is opened, so the
        file keeps its previous content. The mapping keeps the new entry.
        """
        self.data[key] = value
        physical_path = self._physical_path()

        # The document is complete before the file is truncated.
        buffer = io.BytesIO()
        self.writer.write(buffer, self.data)

        try:
            with self.stream_provider.get_writable_stream(physical_path) as stream:
                stream.write(buffer.getvalue())
        except OSError as exc:
            logger.error("Could not write configuration file %s: %s", physical_path, exc)
            raise ResourceWriteError(
                f"Could not write configuration file '{physical_path}'"
            ) from exc

        logger.info("Saved %d keys to %s", len(self.data), physical_path)

    def _physical_path(self) -> str:
        file_provider = self.source.file_provider
        if file_provider is None:
            raise ResourceWriteError(f"No file provider to resolve '{self.source.path}'")
        physical_path = file_provider.get_physical_path(self.source.path)
        if not physical_path:
            raise ResourceWriteError(f"'{self.source.path}' has no physical location")
        return physical_path
