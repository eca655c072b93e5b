# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Flatten an XML configuration document into delimited keys.

The root element is skipped. Nested elements become key paths, attributes
become child keys, and an element's text becomes the value of its path.
Text written after child elements counts as the element's text, so
documents produced by XmlConfigurationWriter read back unchanged.

Example:
    >>> parse_xml(io.BytesIO(b'<configuration><db port="5432">x</db></configuration>'))
    {'db:port': '5432', 'db': 'x'}
"""

from __future__ import annotations

import os
from typing import BinaryIO
from xml.etree import ElementTree as ET

from ..exceptions import XmlConfigFormatError
from ..path import KEY_DELIMITER


def parse_xml(stream: BinaryIO, delimiter: str = KEY_DELIMITER) -> dict[str, str]:
    """Read an XML document from ``stream`` into a flat mapping.

    Raises:
        XmlConfigFormatError: If the document is not well-formed or two
            elements or attributes produce the same key.
    """
    try:
        root = ET.parse(stream).getroot()
    except ET.ParseError as exc:
        raise XmlConfigFormatError(f"Invalid XML configuration document: {exc}") from exc

    data: dict[str, str] = {}
    for name, value in root.attrib.items():
        _add_value(data, name, value)
    _load_children(root, '', data, delimiter)
    return data


def parse_xml_file(path: str | os.PathLike[str], delimiter: str = KEY_DELIMITER) -> dict[str, str]:
    """Read the XML configuration file at ``path``."""
    with open(path, 'rb') as stream:
        return parse_xml(stream, delimiter)


def _load_children(
    element: ET.Element,
    prefix: str,
    data: dict[str, str],
    delimiter: str,
) -> None:
    for child in element:
        if not isinstance(child.tag, str):
            continue
        path = f"{prefix}{delimiter}{child.tag}" if prefix else child.tag

        for name, value in child.attrib.items():
            _add_value(data, f"{path}{delimiter}{name}", value)

        text = _element_text(child)
        if text:
            _add_value(data, path, text)

        _load_children(child, path, data, delimiter)


def _element_text(element: ET.Element) -> str:
    """Join the non-whitespace text chunks directly inside ``element``."""
    chunks = [element.text] + [child.tail for child in element]
    return ''.join(chunk for chunk in chunks if chunk and chunk.strip())


def _add_value(data: dict[str, str], key: str, value: str) -> None:
    if key in data:
        raise XmlConfigFormatError(f"A duplicate key '{key}' was found")
    data[key] = value
