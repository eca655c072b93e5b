# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""XML configuration exceptions."""

from __future__ import annotations


class XmlConfigError(Exception):
    """Base exception for XML configuration errors."""

    pass


class InvalidKeyError(XmlConfigError, ValueError):
    """Raised when a configuration key is empty or malformed."""

    pass


class InvalidArgumentError(XmlConfigError, ValueError):
    """Raised when a required argument is missing or unusable."""

    pass


class ResourceWriteError(XmlConfigError):
    """Raised when the backing file cannot be opened or written."""

    pass


class XmlConfigFormatError(XmlConfigError):
    """Raised when an XML configuration document cannot be read."""

    pass
