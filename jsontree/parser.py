"""Parse JSON text into a tree of :class:`~jsontree.node.Node` objects."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from .node import JsonType, Node

__all__ = ["ParseError", "NESTING_LIMIT", "parse_value", "parse", "parse_with_opts"]

NESTING_LIMIT = 1000
"""How deeply arrays and objects may be nested before parsing fails."""

_MAX_NUMBER_LENGTH = 63
_NUMBER_CHARS = frozenset("0123456789+-eE.")
_NUMBER_START = frozenset("-0123456789")
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_OPENERS = {"[": False, "{": True}
_LITERALS = (
    ("null", JsonType.NULL),
    ("false", JsonType.FALSE),
    ("true", JsonType.TRUE),
)
_SIMPLE_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    '"': '"',
    "\\": "\\",
    "/": "/",
}


class ParseError(ValueError):
    """Raised when text is not valid JSON; ``position`` marks where it failed."""

    def __init__(self, position: int) -> None:
        super().__init__(f"invalid JSON at position {position}")
        self.position = position


class _Failure(Exception):
    """Internal signal that parsing stopped at the reader's current offset."""


@dataclass
class _Frame:
    node: Node
    is_object: bool

    @property
    def closing(self) -> str:
        return "}" if self.is_object else "]"


def _hex4(digits: str) -> int:
    """Value of four hex digits; 0 when any of them is not a hex digit."""
    if len(digits) != 4 or not all(c in _HEX_DIGITS for c in digits):
        return 0
    return int(digits, 16)


class _Reader:
    """Cursor over the text, which always ends in a single NUL terminator."""

    def __init__(self, text: str) -> None:
        self.content = text.split("\0", 1)[0] + "\0"
        self.length = len(self.content)
        self.offset = 0
        self.depth = 0

    def char(self) -> Optional[str]:
        if self.offset < self.length:
            return self.content[self.offset]
        return None

    def skip_whitespace(self) -> None:
        while self.offset < self.length and ord(self.content[self.offset]) <= 32:
            self.offset += 1
        if self.offset == self.length:
            self.offset -= 1

    def error_position(self) -> int:
        if self.offset < self.length:
            return self.offset
        return self.length - 1

    # -- values --------------------------------------------------------------

    def value(self) -> Node:
        """Parse one value at the current offset, without recursion."""
        root = Node()
        stack: list[_Frame] = []
        target = root
        while True:
            frame = self._start(target)
            if frame is not None:
                stack.append(frame)
                target = self._next_member(frame)
                continue
            while stack:
                frame = stack[-1]
                self.skip_whitespace()
                current = self.char()
                if current == ",":
                    target = self._next_member(frame)
                    break
                if current != frame.closing:
                    raise _Failure
                stack.pop()
                self._close(frame)
            else:
                return root

    def _start(self, node: Node) -> Optional[_Frame]:
        """Parse a scalar into ``node``, or open a container that has members."""
        for word, kind in _LITERALS:
            if self.content.startswith(word, self.offset):
                node.type = kind
                if kind is JsonType.TRUE:
                    node.value_int = 1
                self.offset += len(word)
                return None

        ch = self.char()
        if ch == '"':
            self._string(node)
            return None
        if ch in _NUMBER_START:
            self._number(node)
            return None
        if ch in _OPENERS:
            if self.depth >= NESTING_LIMIT:
                raise _Failure
            self.depth += 1
            frame = _Frame(node, _OPENERS[ch])
            self.offset += 1
            self.skip_whitespace()
            if self.char() == frame.closing:
                self._close(frame)
                return None
            self.offset -= 1
            return frame
        raise _Failure

    def _next_member(self, frame: _Frame) -> Node:
        """Step past the separator and prepare the next child node."""
        child = Node()
        frame.node.children.append(child)
        self.offset += 1
        self.skip_whitespace()
        if frame.is_object:
            self._string(child)
            self.skip_whitespace()
            child.key = child.value_string
            child.value_string = None
            if self.char() != ":":
                raise _Failure
            self.offset += 1
            self.skip_whitespace()
        return child

    def _close(self, frame: _Frame) -> None:
        self.depth -= 1
        frame.node.type = JsonType.OBJECT if frame.is_object else JsonType.ARRAY
        self.offset += 1

    # -- scalars -------------------------------------------------------------

    def _number(self, node: Node) -> None:
        start = self.offset
        end = start
        while (
            end - start < _MAX_NUMBER_LENGTH
            and end < self.length
            and self.content[end] in _NUMBER_CHARS
        ):
            end += 1
        match = _NUMBER.match(self.content, start, end)
        if match is None:
            raise _Failure
        node.type = JsonType.NUMBER
        node.set_number(float(match.group()))
        self.offset = match.end()

    def _string(self, node: Node) -> None:
        content = self.content
        start = self.offset
        if content[start] != '"':
            self.offset = start + 1
            raise _Failure

        end = start + 1
        while end < self.length and content[end] != '"':
            if content[end] == "\\":
                if end + 1 >= self.length:
                    self.offset = start + 1
                    raise _Failure
                end += 1
            end += 1
        if end >= self.length:
            self.offset = start + 1
            raise _Failure

        pieces = []
        pointer = start + 1
        while pointer < end:
            ch = content[pointer]
            if ch != "\\":
                pieces.append(ch)
                pointer += 1
                continue
            escaped = content[pointer + 1]
            if escaped in _SIMPLE_ESCAPES:
                pieces.append(_SIMPLE_ESCAPES[escaped])
                pointer += 2
            elif escaped == "u":
                decoded = self._utf16(pointer, end)
                if decoded is None:
                    self.offset = pointer
                    raise _Failure
                text, consumed = decoded
                pieces.append(text)
                pointer += consumed
            else:
                self.offset = pointer
                raise _Failure

        # A decoded NUL ends the string, as the stored value is NUL-terminated.
        node.type = JsonType.STRING
        node.value_string = "".join(pieces).split("\0", 1)[0]
        self.offset = end + 1

    def _utf16(self, pointer: int, end: int) -> Optional[Tuple[str, int]]:
        """Decode ``\\uXXXX`` (or a surrogate pair) starting at ``pointer``."""
        content = self.content
        if end - pointer < 6:
            return None
        first = _hex4(content[pointer + 2 : pointer + 6])
        if 0xDC00 <= first <= 0xDFFF:
            return None
        if 0xD800 <= first <= 0xDBFF:
            second_at = pointer + 6
            if end - second_at < 6:
                return None
            if content[second_at] != "\\" or content[second_at + 1] != "u":
                return None
            second = _hex4(content[second_at + 2 : second_at + 6])
            if not 0xDC00 <= second <= 0xDFFF:
                return None
            codepoint = 0x10000 + (((first & 0x3FF) << 10) | (second & 0x3FF))
            return chr(codepoint), 12
        return chr(first), 6


def parse_value(text: str) -> Node:
    """Parse a single value at the very start of ``text``; the rest is ignored."""
    reader = _Reader(text)
    try:
        return reader.value()
    except _Failure:
        raise ParseError(reader.error_position()) from None


def parse_with_opts(text: str, require_null_terminated: bool = False) -> Tuple[Node, int]:
    """Parse ``text`` and return the tree and the index where parsing stopped.

    With ``require_null_terminated`` anything but whitespace after the value
    is an error.
    """
    if text is None:
        raise TypeError("text to parse must be a string")
    reader = _Reader(text)
    try:
        reader.skip_whitespace()
        node = reader.value()
        if require_null_terminated:
            reader.skip_whitespace()
            if reader.char() != "\0":
                raise _Failure
    except _Failure:
        raise ParseError(reader.error_position()) from None
    return node, reader.offset


def parse(text: str) -> Node:
    """Parse ``text`` into a tree, ignoring anything after the first value."""
    node, _ = parse_with_opts(text, False)
    return node