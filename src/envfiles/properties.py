"""Reader for the line-oriented ``.properties`` text format.

Grammar, applied per logical line:

* natural lines end in ``\\n``, ``\\r`` or ``\\r\\n``;
* blank lines and lines whose first non-blank character is ``#`` or ``!``
  are comments;
* a line ending in an odd number of backslashes continues on the next line,
  whose leading whitespace is dropped;
* the key runs to the first unescaped ``=``, ``:`` or whitespace; whitespace,
  at most one ``=``/``:`` and more whitespace separate it from the value;
* ``\\t \\n \\r \\f`` and ``\\uXXXX`` are escapes, any other ``\\c`` is ``c``.

Two inputs are rejected with :class:`PropertiesParseError`: a continuation
backslash on the last line of input, and a malformed ``\\uXXXX`` escape.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional, TextIO, Tuple

from envfiles.exceptions import PropertiesParseError

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_NEWLINE = re.compile(r"\r\n|\r|\n")


def _ends_with_continuation(line: str) -> bool:
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(text: str, source: Optional[str]) -> Iterator[Tuple[int, str]]:
    """Yield ``(first_line_number, logical_line)`` pairs, comments removed."""
    natural = _NEWLINE.split(text)
    if natural and natural[-1] == "":
        # a final line terminator does not start another line
        natural.pop()
    index = 0
    while index < len(natural):
        start = index + 1
        line = natural[index].lstrip(_WHITESPACE)
        index += 1
        if not line or line[0] in "#!":
            continue
        while _ends_with_continuation(line):
            if index >= len(natural):
                raise PropertiesParseError(
                    "Unterminated line continuation at end of input",
                    line=index,
                    source=source,
                )
            line = line[:-1] + natural[index].lstrip(_WHITESPACE)
            index += 1
        yield start, line


def _unescape(raw: str, line: int, source: Optional[str]) -> str:
    out = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch != "\\" or i + 1 >= len(raw):
            out.append(ch)
            i += 1
            continue
        nxt = raw[i + 1]
        if nxt == "u":
            digits = raw[i + 2 : i + 6]
            if len(digits) != 4 or any(c not in "0123456789abcdefABCDEF" for c in digits):
                raise PropertiesParseError(
                    f"Malformed \\uXXXX encoding: \\u{digits}", line=line, source=source
                )
            out.append(chr(int(digits, 16)))
            i += 6
        else:
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
    text = "".join(out)
    if any("\ud800" <= c <= "\udfff" for c in text):
        # \uD83D\uDE00 style pairs become one code point; lone halves are kept
        text = text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
    return text


def _split(line: str) -> Tuple[str, str]:
    """Split a logical line into raw (still escaped) key and value."""
    i = 0
    length = len(line)
    while i < length:
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS or ch in _WHITESPACE:
            break
        i += 1
    key = line[:i]

    j = i
    while j < length and line[j] in _WHITESPACE:
        j += 1
    if j < length and line[j] in _SEPARATORS:
        j += 1
        while j < length and line[j] in _WHITESPACE:
            j += 1
    return key, line[j:]


def loads_properties(text: str, source: Optional[str] = None) -> dict[str, str]:
    """Parse properties text into a dict. Later duplicates win.

    Args:
        text: Properties document
        source: Optional name used in error details

    Raises:
        PropertiesParseError: On malformed input
    """
    result: dict[str, str] = {}
    for number, line in _logical_lines(text, source):
        raw_key, raw_value = _split(line)
        result[_unescape(raw_key, number, source)] = _unescape(raw_value, number, source)
    return result


def load_properties(stream: TextIO, source: Optional[str] = None) -> dict[str, str]:
    """Parse properties from an open text stream. The stream is not closed."""
    return loads_properties(stream.read(), source=source)


__all__ = ["loads_properties", "load_properties"]
