"""Shared helpers for reading flat key/value configuration."""

from __future__ import annotations

import logging
import re
import string
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}

PROPERTIES_ENCODING = "iso-8859-1"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def parse_bool(value: Optional[str], key: str) -> bool:
    """Parse a boolean property value, rejecting anything ambiguous."""

    lowered = (value or "").strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value '{value}' for '{key}'")


def parse_properties(content: str) -> Dict[str, str]:
    """Parse Java ``.properties`` text, preserving file order.

    Keys end at the first unescaped ``=``, ``:`` or whitespace; blank lines and
    lines starting with ``#`` or ``!`` are ignored. A line ending in an odd
    number of backslashes continues on the next one. ``\\t``, ``\\n``, ``\\uXXXX``
    and escaped separators are decoded in keys and values.
    """

    properties: Dict[str, str] = {}
    for number, line in _logical_lines(content):
        raw_key, raw_value = _split_entry(line)
        key = _unescape(raw_key, number)
        if not key:
            logger.warning("Ignoring property line %d with an empty key", number)
            continue
        if key in properties:
            logger.debug("Line %d: duplicate key '%s' (overriding previous value)", number, key)
        properties[key] = _unescape(raw_value, number)
    return properties


def _logical_lines(content: str) -> Iterator[Tuple[int, str]]:
    buffer: Optional[str] = None
    start = 0
    for number, line in enumerate(_LINE_BREAK.split(content), start=1):
        stripped = line.lstrip(_WHITESPACE)
        if buffer is None:
            if not stripped or stripped.startswith(("#", "!")):
                continue
            start = number
            buffer = ""
        buffer += stripped
        trailing = len(buffer) - len(buffer.rstrip("\\"))
        if trailing % 2:
            buffer = buffer[:-1]
            continue
        yield start, buffer
        buffer = None
    if buffer is not None:
        yield start, buffer


def _split_entry(line: str) -> Tuple[str, str]:
    index = 0
    escaped = False
    while index < len(line):
        char = line[index]
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1

    rest = line[index:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return line[:index], rest


def _unescape(text: str, number: int) -> str:
    if "\\" not in text:
        return text
    chars: List[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        index += 1
        if char != "\\":
            chars.append(char)
            continue
        if index == len(text):
            break
        code = text[index]
        index += 1
        if code == "u":
            digits = text[index : index + 4]
            if len(digits) != 4 or any(digit not in string.hexdigits for digit in digits):
                raise ConfigurationError(f"Malformed \\uxxxx escape on property line {number}")
            chars.append(chr(int(digits, 16)))
            index += 4
        else:
            chars.append(_ESCAPES.get(code, code))
    return "".join(chars)


def load_properties(path: Path) -> Dict[str, str]:
    """Load an ISO-8859-1 properties file; a missing file yields an empty mapping."""

    if not path.exists():
        logger.debug("No properties file at %s", path)
        return {}
    return parse_properties(path.read_text(encoding=PROPERTIES_ENCODING))


def parse_assignments(values: Optional[Iterable[str]]) -> Dict[str, str]:
    """Parse repeated ``key=value`` command-line assignments."""

    assignments: Dict[str, str] = {}
    for entry in values or []:
        if "=" not in entry:
            raise ConfigurationError(f"Property must be key=value (got '{entry}')")
        key, raw_value = entry.split("=", 1)
        assignments[key.strip()] = raw_value.strip()
    return assignments


__all__ = ["load_properties", "parse_assignments", "parse_bool", "parse_properties"]
