# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Configuration key paths.

Keys are flat strings whose segments are joined by a delimiter
(``':'`` by default), e.g. ``'database:primary:host'``. The helpers in
``ConfigurationPath`` are tolerant and mirror what a configuration
framework uses to produce the keys; ``split_key`` is the strict form used
when building a tree.

Example:
    >>> split_key('database:primary:host')
    ('database:primary', 'host')
    >>> split_key('debug')
    (None, 'debug')
"""

from __future__ import annotations

from .exceptions import InvalidKeyError

KEY_DELIMITER = ':'


class ConfigurationPath:
    """Utilities for delimited configuration keys."""

    KEY_DELIMITER = KEY_DELIMITER

    @staticmethod
    def combine(*segments: str) -> str:
        """Join path segments with the key delimiter."""
        return KEY_DELIMITER.join(segments)

    @staticmethod
    def get_section_key(path: str | None) -> str | None:
        """Return the last segment of ``path``.

        Example:
            >>> ConfigurationPath.get_section_key('a:b:c')
            'c'
        """
        if not path:
            return path
        return path.rsplit(KEY_DELIMITER, 1)[-1]

    @staticmethod
    def get_parent_path(path: str | None) -> str | None:
        """Return ``path`` without its last segment, or None at top level."""
        if not path:
            return None
        index = path.rfind(KEY_DELIMITER)
        return None if index == -1 else path[:index]


def split_key(key: str | None, delimiter: str = KEY_DELIMITER) -> tuple[str | None, str]:
    """Split a key into its parent path and leaf segment.

    Args:
        key: Delimited configuration key.
        delimiter: Segment delimiter.

    Returns:
        Tuple of (parent_path, leaf). parent_path is None when the key
        has a single segment.

    Raises:
        InvalidKeyError: If the key is None, empty, or has an empty segment.
    """
    if not key:
        raise InvalidKeyError("key must be a non-empty configuration path")
    if '' in key.split(delimiter):
        raise InvalidKeyError(f"Empty segment in configuration path '{key}'")

    index = key.rfind(delimiter)
    if index == -1:
        return None, key
    return key[:index], key[index + len(delimiter):]
