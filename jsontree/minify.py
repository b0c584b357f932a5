"""Strip whitespace and comments from JSON text."""

from __future__ import annotations

import re

__all__ = ["minify"]

# Alternatives, tried left to right at each position:
#   1. a string literal, kept as is (escapes may hide a quote); it may be unterminated
#   2. a line comment, up to but not including the newline
#   3. a block comment; the '*' of the opener may also start the closer, so "/*/"
#      is a whole comment, and an unterminated one runs to the end of the text
#   4. whitespace
_DISCARDABLE = re.compile(
    r'("(?:\\[\s\S]|[^"\\])*"?)'
    r"|//[^\n]*"
    r"|/(?=\*)(?:[\s\S]*?\*/|[\s\S]*)"
    r"|[ \t\r\n]+"
)


def _keep_strings(match: re.Match) -> str:
    return match.group(1) or ""


def minify(json: str) -> str:
    """Return ``json`` without whitespace and ``//`` or ``/* */`` comments.

    String literals are left untouched. Text after a NUL character is
    dropped, as it ends the input.
    """
    if not isinstance(json, str):
        raise TypeError("minify expects a string")
    text = json.split("\0", 1)[0]
    return _DISCARDABLE.sub(_keep_strings, text)