# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""WritableXmlConfigurationSource and builder registration.

A source describes where a configuration file lives and which services
persist it. The host configuration framework collects sources through
any object with an ``add(source)`` method and asks each one to
``build()`` its provider.

Example:
    >>> add_writable_xml(config_builder, 'settings.xml', optional=True)
"""

from __future__ import annotations

import os
from typing import Any, Protocol

from .exceptions import InvalidArgumentError
from .files import FileProvider, FileStreamProvider, PhysicalFileProvider, StreamProvider
from .provider import WritableXmlConfigurationProvider
from .writer import XmlConfigurationWriter


class ConfigurationWriter(Protocol):
    """Writes a configuration mapping to a stream."""

    def write(self, stream: Any, data: Any) -> None: ...


class ConfigurationBuilder(Protocol):
    """Host-side collection of configuration sources."""

    def add(self, source: Any) -> Any: ...


class WritableXmlConfigurationSource:
    """An XML file configuration source whose provider can save settings.

    Attributes:
        writer: Serializes the mapping to a stream.
        stream_provider: Opens the truncating stream for the file.
        path: Path of the file, relative to the file provider.
        optional: Loading succeeds with no data when the file is missing.
        reload_on_change: Passed through for hosts that watch the file.
        file_provider: Resolves ``path`` to a physical location.
    """

    def __init__(
        self,
        writer: ConfigurationWriter,
        stream_provider: StreamProvider,
        path: str | None = None,
        optional: bool = False,
        reload_on_change: bool = False,
        file_provider: FileProvider | None = None,
    ) -> None:
        """Initialize the source.

        Raises:
            InvalidArgumentError: If writer or stream_provider is None.
        """
        if writer is None:
            raise InvalidArgumentError("writer is required")
        if stream_provider is None:
            raise InvalidArgumentError("stream_provider is required")
        self.writer = writer
        self.stream_provider = stream_provider
        self.path = path
        self.optional = optional
        self.reload_on_change = reload_on_change
        self.file_provider = file_provider

    def __repr__(self) -> str:
        return f"WritableXmlConfigurationSource({self.path!r}, optional={self.optional})"

    def resolve_file_provider(self) -> None:
        """Root a file provider at the directory of an absolute ``path``.

        Afterwards ``path`` holds just the file name. Does nothing when a
        file provider is already set or the path is relative.
        """
        if self.file_provider is not None or not self.path:
            return
        if os.path.isabs(self.path):
            directory, self.path = os.path.split(self.path)
            self.file_provider = PhysicalFileProvider(directory)

    def ensure_defaults(self) -> None:
        """Fall back to a file provider rooted at the working directory."""
        if self.file_provider is None:
            self.file_provider = PhysicalFileProvider(os.getcwd())

    def build(self, builder: ConfigurationBuilder | None = None) -> WritableXmlConfigurationProvider:
        """Return a new provider for this source."""
        self.ensure_defaults()
        return WritableXmlConfigurationProvider(self)


def add_writable_xml(
    builder: ConfigurationBuilder,
    path: str,
    *,
    optional: bool = False,
    reload_on_change: bool = False,
    file_provider: FileProvider | None = None,
    stream_provider: StreamProvider | None = None,
    writer: ConfigurationWriter | None = None,
) -> Any:
    """Add a writable XML source for ``path`` to ``builder``.

    Args:
        builder: Object with an ``add(source)`` method.
        path: Path of the XML file.
        optional: Whether the file may be missing.
        reload_on_change: Whether the host should reload on file change.
        file_provider: Resolves the path. Derived from an absolute path
            when None.
        stream_provider: Defaults to FileStreamProvider.
        writer: Defaults to an XmlConfigurationWriter without the
            generation comment.

    Returns:
        Whatever ``builder.add`` returns, usually the builder itself.
    """
    source = WritableXmlConfigurationSource(
        writer if writer is not None else XmlConfigurationWriter(write_comment=False),
        stream_provider if stream_provider is not None else FileStreamProvider(),
        path=path,
        optional=optional,
        reload_on_change=reload_on_change,
        file_provider=file_provider,
    )
    source.resolve_file_provider()
    return builder.add(source)
