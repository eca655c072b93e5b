# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""XmlConfigurationWriter - serializes configuration data as XML.

The writer builds the node tree for the whole mapping and writes it
depth-first. An element's own text is written after all of its child
elements, so a key that is also a parent path produces::

    <test>
      <element>value</element>updateValue</test>

Downstream readers depend on this layout; keep it.

Example:
    >>> stream = io.BytesIO()
    >>> XmlConfigurationWriter(write_comment=False).write(stream, {'a:b': '1'})
    >>> print(stream.getvalue().decode())
    <?xml version="1.0" encoding="utf-8"?>
    <configuration>
      <a>
        <b>1</b>
      </a>
    </configuration>
"""

from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import BinaryIO, Callable, Mapping

from .builder import XmlTreeBuilder
from .exceptions import InvalidArgumentError
from .node import XmlConfigNode
from .xmlwriter import ElementWriter, XmlElementWriter, XmlWriterSettings

logger = logging.getLogger(__name__)

WriterFactory = Callable[[BinaryIO], 'ElementWriter | None']


class XmlConfigurationWriter:
    """Write a flat configuration mapping to a stream as an XML document.

    Attributes:
        root_name: Name of the root element.
        settings: Formatting options for the default element writer.
        write_comment: Write a generation comment with the current time.
        writer_factory: Callable returning the ElementWriter for a stream.
    """

    def __init__(
        self,
        settings: XmlWriterSettings | None = None,
        root_name: str | None = None,
        write_comment: bool = True,
        writer_factory: WriterFactory | None = None,
    ) -> None:
        """Initialize the writer.

        Args:
            settings: Formatting options. Defaults to indented output with
                normalized newlines.
            root_name: Root element name, 'configuration' if None.
            write_comment: Write the 'Auto generated' comment.
            writer_factory: Replaces the default XmlElementWriter, e.g.
                to record calls in tests.
        """
        self.settings = settings or XmlWriterSettings()
        self.write_comment = write_comment
        self._tree_builder = XmlTreeBuilder(root_name)
        self.writer_factory = writer_factory or self._create_element_writer

    @property
    def root_name(self) -> str:
        return self._tree_builder.root_name

    def _create_element_writer(self, stream: BinaryIO) -> ElementWriter:
        return XmlElementWriter(stream, self.settings)

    def build_tree(self, data: Mapping[str, str | None]) -> XmlConfigNode:
        """Build the node tree for ``data``."""
        return self._tree_builder.build(data)

    def write(self, stream: BinaryIO, data: Mapping[str, str | None]) -> None:
        """Write ``data`` to ``stream`` as a complete XML document.

        Args:
            stream: Binary destination stream.
            data: Mapping of delimited keys to values.

        Raises:
            InvalidArgumentError: If stream or data is None, or no element
                writer could be created for the stream.
            InvalidKeyError: If a key is empty or malformed.
        """
        if stream is None:
            raise InvalidArgumentError("stream is required")
        if data is None:
            raise InvalidArgumentError("data is required")

        tree = self.build_tree(data)
        self.write_tree(stream, tree)

    def write_tree(self, stream: BinaryIO, root: XmlConfigNode) -> None:
        """Write an already built tree to ``stream``."""
        if stream is None:
            raise InvalidArgumentError("stream is required")
        if root is None:
            raise InvalidArgumentError("root is required")

        writer = self.writer_factory(stream)
        if writer is None:
            raise InvalidArgumentError("A valid element writer is needed")

        try:
            writer.start_document()
            if self.write_comment:
                writer.write_comment(
                    f"Auto generated from {type(self).__module__}.{type(self).__qualname__} "
                    f"on {datetime.now():%Y-%m-%d %H:%M:%S}"
                )
            self._write_node(writer, root)
            writer.end_document()
        finally:
            writer.close()

        logger.debug("Wrote '%s' document", root.name)

    def serialize(self, root: XmlConfigNode) -> bytes:
        """Return the XML document for ``root`` as bytes."""
        buffer = io.BytesIO()
        self.write_tree(buffer, root)
        return buffer.getvalue()

    def _write_node(self, writer: ElementWriter, node: XmlConfigNode) -> None:
        writer.start_element(node.name)
        for child in node:
            self._write_node(writer, child)
        # Own text goes after the children.
        if node.value:
            writer.write_text(node.value)
        writer.end_element()
