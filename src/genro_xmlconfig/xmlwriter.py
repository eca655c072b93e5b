# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Low-level XML element writer.

``ElementWriter`` is the capability the document serializer depends on.
``XmlElementWriter`` is the default implementation: a forward-only writer
that encodes markup onto a binary stream as it goes.

Indentation follows the usual XML writer rules: every element starts on
its own line, indented by depth, unless its parent already holds text.
Once an element holds text (mixed content) nothing more is indented inside
it, and its end tag follows the text directly::

    <configuration>
      <a>
        <b>1</b>
      </a>x</configuration>
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import BinaryIO, Protocol

from .exceptions import InvalidArgumentError

NEWLINE_HANDLING = ('replace', 'entitize', 'none')

_NAME_PATTERN = re.compile(r'^[^\W\d][\w.\-]*$')
_NEWLINE_PATTERN = re.compile(r'\r\n|\r|\n')
# Characters outside the XML 1.0 Char production.
_INVALID_CHAR_PATTERN = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]')


class ElementWriter(Protocol):
    """Operations the serializer needs from a markup writer."""

    def start_document(self) -> None: ...

    def end_document(self) -> None: ...

    def start_element(self, name: str) -> None: ...

    def end_element(self) -> None: ...

    def write_text(self, text: str) -> None: ...

    def write_comment(self, text: str) -> None: ...

    def close(self) -> None: ...


@dataclass
class XmlWriterSettings:
    """Formatting options for XmlElementWriter.

    Attributes:
        indent: Put elements on their own, indented lines.
        indent_chars: Characters written per depth level.
        newline_chars: Line break used for indentation and for
            normalized line breaks in text.
        newline_handling: How line breaks inside text are written:
            'replace' normalizes them to newline_chars, 'entitize'
            writes them as character references, 'none' leaves them.
        encoding: Output encoding, also named in the declaration.
        omit_xml_declaration: Skip the ``<?xml ...?>`` declaration.
    """

    indent: bool = True
    indent_chars: str = '  '
    newline_chars: str = '\n'
    newline_handling: str = 'replace'
    encoding: str = 'utf-8'
    omit_xml_declaration: bool = False

    def __post_init__(self) -> None:
        if self.newline_handling not in NEWLINE_HANDLING:
            raise InvalidArgumentError(
                f"newline_handling must be one of {', '.join(NEWLINE_HANDLING)}, "
                f"not '{self.newline_handling}'"
            )


class _Frame:
    __slots__ = ('name', 'open', 'has_elements', 'mixed')

    def __init__(self, name: str, mixed: bool) -> None:
        self.name = name
        self.open = True
        self.has_elements = False
        self.mixed = mixed


class XmlElementWriter:
    """Forward-only XML writer over a binary stream.

    The writer does not close the stream it writes to.

    Example:
        >>> buffer = io.BytesIO()
        >>> with XmlElementWriter(buffer) as writer:
        ...     writer.start_document()
        ...     writer.start_element('configuration')
        ...     writer.write_text('on')
        ...     writer.end_document()
        >>> buffer.getvalue()
        b'<?xml version="1.0" encoding="utf-8"?>\\n<configuration>on</configuration>'
    """

    def __init__(self, stream: BinaryIO, settings: XmlWriterSettings | None = None) -> None:
        if stream is None:
            raise InvalidArgumentError("stream is required")
        writable = getattr(stream, 'writable', None)
        if getattr(stream, 'closed', False) or (writable is not None and not writable()):
            raise InvalidArgumentError("stream is not writable")
        self._stream = stream
        self.settings = settings or XmlWriterSettings()
        self._stack: list[_Frame] = []
        self._at_start = True

    def __enter__(self) -> XmlElementWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def depth(self) -> int:
        """Number of open elements."""
        return len(self._stack)

    # ==================== Output helpers ====================

    def _write(self, text: str) -> None:
        self._stream.write(text.encode(self.settings.encoding, 'xmlcharrefreplace'))
        self._at_start = False

    def _indent(self, depth: int) -> None:
        if self.settings.indent and not self._at_start:
            self._write(self.settings.newline_chars + self.settings.indent_chars * depth)

    def _close_start_tag(self) -> None:
        if self._stack and self._stack[-1].open:
            self._write('>')
            self._stack[-1].open = False

    def _in_mixed_content(self) -> bool:
        return bool(self._stack) and self._stack[-1].mixed

    def _check_chars(self, text: str) -> None:
        match = _INVALID_CHAR_PATTERN.search(text)
        if match:
            raise InvalidArgumentError(
                f"Character {match.group()!r} at position {match.start()} is not allowed in XML"
            )

    def _escape(self, text: str) -> str:
        text = text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')
        handling = self.settings.newline_handling
        if handling == 'replace':
            return _NEWLINE_PATTERN.sub(lambda _: self.settings.newline_chars, text)
        if handling == 'entitize':
            return text.replace('\r', '&#xD;').replace('\n', '&#xA;')
        return text

    # ==================== ElementWriter ====================

    def start_document(self) -> None:
        """Write the XML declaration unless the settings omit it."""
        if not self.settings.omit_xml_declaration:
            self._write(f'<?xml version="1.0" encoding="{self.settings.encoding}"?>')

    def end_document(self) -> None:
        """Close every open element and flush the stream."""
        while self._stack:
            self.end_element()
        self.flush()

    def start_element(self, name: str) -> None:
        """Open an element.

        Raises:
            InvalidArgumentError: If name is not a valid XML element name.
        """
        if not name or not _NAME_PATTERN.match(name):
            raise InvalidArgumentError(f"Invalid XML element name: {name!r}")

        self._close_start_tag()
        mixed = self._in_mixed_content()
        if not mixed:
            self._indent(len(self._stack))
        self._write(f'<{name}')
        if self._stack:
            self._stack[-1].has_elements = True
        self._stack.append(_Frame(name, mixed))

    def end_element(self) -> None:
        """Close the innermost open element.

        An element with no content is written as ``<name />``.
        """
        if not self._stack:
            raise InvalidArgumentError("No open element to end")

        frame = self._stack.pop()
        if frame.open:
            self._write(' />')
            return
        if frame.has_elements and not frame.mixed:
            self._indent(len(self._stack))
        self._write(f'</{frame.name}>')

    def write_text(self, text: str) -> None:
        """Write escaped text content into the innermost element.

        Raises:
            InvalidArgumentError: If text holds a character XML 1.0 does not
                allow, such as a control character or a lone surrogate.
        """
        if not self._stack:
            raise InvalidArgumentError("Text must be written inside an element")
        if not text:
            return
        self._check_chars(text)
        self._close_start_tag()
        self._write(self._escape(text))
        self._stack[-1].mixed = True

    def write_comment(self, text: str) -> None:
        """Write ``<!--text-->``.

        Raises:
            InvalidArgumentError: If text contains '--', ends with '-' or
                holds a character XML 1.0 does not allow.
        """
        if '--' in text or text.endswith('-'):
            raise InvalidArgumentError("An XML comment cannot contain '--' or end with '-'")
        self._check_chars(text)

        self._close_start_tag()
        if not self._in_mixed_content():
            self._indent(len(self._stack))
        self._write(f'<!--{text}-->')
        if self._stack:
            self._stack[-1].has_elements = True

    def flush(self) -> None:
        flush = getattr(self._stream, 'flush', None)
        if flush is not None:
            flush()

    def close(self) -> None:
        """Flush pending output. The stream stays open."""
        self.flush()
