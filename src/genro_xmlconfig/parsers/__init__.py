# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parsers for reading configuration data from documents.

Available parsers:
- xml_document: XML configuration documents, flattened to delimited keys

Example:
    >>> from genro_xmlconfig.parsers import parse_xml_file
    >>> data = parse_xml_file('settings.xml')
    >>> data['database:host']
"""

from .xml_document import parse_xml, parse_xml_file

__all__ = [
    'parse_xml',
    'parse_xml_file',
]
