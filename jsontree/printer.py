"""Render a tree of :class:`~jsontree.node.Node` objects as JSON text."""

from __future__ import annotations

from typing import Iterator, NamedTuple, Optional, Union

from .node import JsonType, Node

__all__ = [
    "PrintError",
    "print_number",
    "print_string",
    "print_value",
    "print_formatted",
    "print_unformatted",
    "print_buffered",
    "print_preallocated",
]

_MAX_NUMBER_LENGTH = 25

_ESCAPES = {code: "\\u%04x" % code for code in range(32)}
_ESCAPES.update(
    {
        ord('"'): '\\"',
        ord("\\"): "\\\\",
        ord("\b"): "\\b",
        ord("\f"): "\\f",
        ord("\n"): "\\n",
        ord("\r"): "\\r",
        ord("\t"): "\\t",
    }
)

_LITERALS = {
    JsonType.NULL: ("null", 5),
    JsonType.FALSE: ("false", 6),
    JsonType.TRUE: ("true", 5),
}


class PrintError(ValueError):
    """Raised when a tree cannot be rendered, or does not fit its buffer."""


class _Piece(NamedTuple):
    """A run of output text and the room reserved before writing it."""

    text: str
    request: int


class _Visit(NamedTuple):
    """A node still to be rendered at the given nesting depth."""

    node: Optional[Node]
    depth: int


def _c_string(value: str) -> str:
    """The part of ``value`` before any NUL character."""
    return value.split("\0", 1)[0]


def print_number(value: float) -> str:
    """Format a number with the shortest of 15 or 17 significant digits.

    NaN and the infinities have no JSON form and come out as ``null``.
    """
    number = float(value)
    if number * 0 != 0:
        return "null"
    text = "%1.15g" % number
    if float(text) != number:
        text = "%1.17g" % number
    if len(text) > _MAX_NUMBER_LENGTH:
        raise PrintError("number does not fit the number buffer")
    return text


def print_string(value: Optional[str]) -> str:
    """Quote and escape ``value``; ``None`` prints as an empty string."""
    if value is None:
        return '""'
    return '"' + _c_string(value).translate(_ESCAPES) + '"'


def _pieces(item: Optional[Node], fmt: bool) -> Iterator[_Piece]:
    """Yield the output of ``item`` piece by piece, without recursion."""
    stack: list[Union[_Piece, _Visit]] = [_Visit(item, 0)]
    while stack:
        entry = stack.pop()
        if isinstance(entry, _Piece):
            yield entry
            continue
        node, depth = entry
        if node is None:
            raise PrintError("cannot print a missing node")
        kind = node.type
        if kind in _LITERALS:
            yield _Piece(*_LITERALS[kind])
        elif kind is JsonType.NUMBER:
            text = print_number(node.value_double)
            yield _Piece(text, len(text))
        elif kind is JsonType.RAW:
            if node.value_string is None:
                raise PrintError("raw node has no text")
            raw = _c_string(node.value_string)
            yield _Piece(raw, len(raw) + 1)
        elif kind is JsonType.STRING:
            text = print_string(node.value_string)
            yield _Piece(text, len(text) + 1)
        elif kind is JsonType.ARRAY:
            stack.extend(reversed(_array_work(node, depth, fmt)))
        elif kind is JsonType.OBJECT:
            stack.extend(reversed(_object_work(node, depth, fmt)))
        else:
            raise PrintError(f"cannot print a node of type {kind.value}")


def _array_work(node: Node, depth: int, fmt: bool) -> list[Union[_Piece, _Visit]]:
    separator = ", " if fmt else ","
    work: list[Union[_Piece, _Visit]] = [_Piece("[", 1)]
    last = len(node.children) - 1
    for position, child in enumerate(node.children):
        work.append(_Visit(child, depth + 1))
        if position != last:
            work.append(_Piece(separator, len(separator) + 1))
    work.append(_Piece("]", 2))
    return work


def _object_work(node: Node, depth: int, fmt: bool) -> list[Union[_Piece, _Visit]]:
    inner = depth + 1
    opening = "{\n" if fmt else "{"
    colon = ":\t" if fmt else ":"
    work: list[Union[_Piece, _Visit]] = [_Piece(opening, len(opening) + 1)]
    last = len(node.children) - 1
    for position, member in enumerate(node.children):
        if fmt:
            work.append(_Piece("\t" * inner, inner))
        key = print_string(member.key)
        work.append(_Piece(key, len(key) + 1))
        work.append(_Piece(colon, len(colon)))
        work.append(_Visit(member, inner))
        tail = ("," if position != last else "") + ("\n" if fmt else "")
        work.append(_Piece(tail, len(tail) + 1))
    if fmt:
        work.append(_Piece("\t" * depth + "}", inner + 1))
    else:
        work.append(_Piece("}", 2))
    return work


def print_value(item: Optional[Node], fmt: bool) -> str:
    """Render ``item``; ``fmt`` adds newlines and tab indentation."""
    return "".join(piece.text for piece in _pieces(item, fmt))


def print_formatted(item: Optional[Node]) -> str:
    """Render ``item`` with newlines and tab indentation."""
    return print_value(item, True)


def print_unformatted(item: Optional[Node]) -> str:
    """Render ``item`` as compactly as possible."""
    return print_value(item, False)


def print_buffered(item: Optional[Node], prebuffer: int, fmt: bool) -> str:
    """Render ``item`` starting from a buffer of ``prebuffer`` characters.

    The buffer grows as needed; a negative size is an error.
    """
    if prebuffer < 0:
        raise PrintError("buffer size must not be negative")
    return print_value(item, fmt)


def print_preallocated(item: Optional[Node], length: int, fmt: bool) -> str:
    """Render ``item`` into a fixed buffer of ``length`` characters.

    Raises :class:`PrintError` when the output, with the room reserved for
    each piece and a terminator, would not fit.
    """
    if length < 0:
        raise PrintError("buffer size must not be negative")
    parts = []
    offset = 0
    for piece in _pieces(item, fmt):
        if offset + piece.request + 1 > length:
            raise PrintError(f"output does not fit in {length} characters")
        parts.append(piece.text)
        offset += len(piece.text)
    return "".join(parts)