# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-XmlConfig - Writable XML configuration files.

Turns a flat configuration mapping with delimited keys ('a:b:c') into a
nested XML document, and rewrites the backing file on every change.
"""

__version__ = "0.1.0"

from .builder import XmlTreeBuilder
from .exceptions import (
    InvalidArgumentError,
    InvalidKeyError,
    ResourceWriteError,
    XmlConfigError,
    XmlConfigFormatError,
)
from .files import FileStreamProvider, PhysicalFileProvider
from .node import XmlConfigNode
from .parsers import parse_xml, parse_xml_file
from .path import KEY_DELIMITER, ConfigurationPath, split_key
from .provider import WritableXmlConfigurationProvider
from .source import WritableXmlConfigurationSource, add_writable_xml
from .writer import XmlConfigurationWriter
from .xmlwriter import ElementWriter, XmlElementWriter, XmlWriterSettings

__all__ = [
    # Tree
    "XmlConfigNode",
    "XmlTreeBuilder",
    "ConfigurationPath",
    "KEY_DELIMITER",
    "split_key",
    # Writing
    "ElementWriter",
    "XmlElementWriter",
    "XmlWriterSettings",
    "XmlConfigurationWriter",
    # Provider
    "FileStreamProvider",
    "PhysicalFileProvider",
    "WritableXmlConfigurationProvider",
    "WritableXmlConfigurationSource",
    "add_writable_xml",
    # Parsing
    "parse_xml",
    "parse_xml_file",
    # Exceptions
    "XmlConfigError",
    "InvalidKeyError",
    "InvalidArgumentError",
    "ResourceWriteError",
    "XmlConfigFormatError",
]
