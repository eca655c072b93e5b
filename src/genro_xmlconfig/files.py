# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""File resolution and writable streams for configuration files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO, Protocol


class FileProvider(Protocol):
    """Maps a logical configuration path to a physical file."""

    def get_physical_path(self, path: str) -> str | None: ...

    def exists(self, path: str) -> bool: ...


class StreamProvider(Protocol):
    """Opens a writable stream for a physical path."""

    def get_writable_stream(self, path: str) -> BinaryIO: ...


class PhysicalFileProvider:
    """Resolve configuration paths against a root directory.

    Example:
        >>> provider = PhysicalFileProvider('/etc/myapp')
        >>> provider.get_physical_path('settings.xml')
        '/etc/myapp/settings.xml'
    """

    __slots__ = ('root',)

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)

    def __repr__(self) -> str:
        return f"PhysicalFileProvider({str(self.root)!r})"

    def get_physical_path(self, path: str) -> str | None:
        """Return the absolute file path for ``path``, or None if empty."""
        if not path:
            return None
        return str(self.root / path)

    def exists(self, path: str) -> bool:
        physical = self.get_physical_path(path)
        return physical is not None and Path(physical).is_file()


class FileStreamProvider:
    """Open files for writing with truncate semantics.

    Any previous content is discarded. A missing file is created.
    """

    def get_writable_stream(self, path: str) -> BinaryIO:
        return open(path, 'wb')
