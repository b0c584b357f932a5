"""In-memory JSON tree: nodes, constructors, lookups, edits and comparison."""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

__all__ = [
    "JsonType",
    "Node",
    "version",
    "create_null",
    "create_true",
    "create_false",
    "create_bool",
    "create_number",
    "create_string",
    "create_raw",
    "create_array",
    "create_object",
    "create_int_array",
    "create_float_array",
    "create_double_array",
    "create_string_array",
    "duplicate",
    "compare",
]

_VERSION = (1, 5, 5)

INT_MAX = 2**31 - 1
INT_MIN = -(2**31)

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def version() -> str:
    """Return the library version as ``major.minor.patch``."""
    return "%d.%d.%d" % _VERSION


class JsonType(enum.Enum):
    """The kind of value a node holds."""

    INVALID = "invalid"
    FALSE = "false"
    TRUE = "true"
    NULL = "null"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    RAW = "raw"


def _saturate(number: float) -> int:
    """Convert a double to a C int, clamping at the int limits."""
    if math.isnan(number):
        return 0
    if number >= INT_MAX:
        return INT_MAX
    if number <= INT_MIN:
        return INT_MIN
    return int(number)


def _keys_equal(name: str, key: Optional[str], case_sensitive: bool) -> bool:
    if key is None:
        return False
    if case_sensitive:
        return name == key
    return name.translate(_ASCII_LOWER) == key.translate(_ASCII_LOWER)


@dataclass(eq=False)
class Node:
    """A JSON value; arrays and objects keep their children in order."""

    type: JsonType = JsonType.INVALID
    value_string: Optional[str] = None
    value_int: int = 0
    value_double: float = 0.0
    key: Optional[str] = None
    children: list = field(default_factory=list)
    is_reference: bool = False

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator["Node"]:
        return iter(tuple(self.children))

    def set_number(self, value: float) -> float:
        """Store a number in both the double and the saturated int slot."""
        value = float(value)
        self.value_int = _saturate(value)
        self.value_double = value
        return value

    # -- lookups ---------------------------------------------------------

    def get_array_item(self, index: int) -> Optional["Node"]:
        if index < 0 or index >= len(self.children):
            return None
        return self.children[index]

    def _find(self, name: Optional[str], case_sensitive: bool) -> Optional["Node"]:
        if name is None:
            return None
        return next(
            (c for c in self.children if _keys_equal(name, c.key, case_sensitive)),
            None,
        )

    def get_object_item(self, name: Optional[str]) -> Optional["Node"]:
        """Find a member by key, ignoring ASCII case."""
        return self._find(name, False)

    def get_object_item_case_sensitive(self, name: Optional[str]) -> Optional["Node"]:
        return self._find(name, True)

    def has_object_item(self, name: Optional[str]) -> bool:
        return self.get_object_item(name) is not None

    # -- adding ----------------------------------------------------------

    def add_item(self, item: Optional["Node"]) -> None:
        if item is None:
            return
        self.children.append(item)

    def add_item_to_object(self, key: str, item: Optional["Node"]) -> None:
        if item is None:
            return
        item.key = key
        self.children.append(item)

    def add_reference(self, item: "Node") -> None:
        self.add_item(_create_reference(item))

    def add_reference_to_object(self, key: str, item: "Node") -> None:
        self.add_item_to_object(key, _create_reference(item))

    # -- detaching -------------------------------------------------------

    def _index_of(self, item: "Node") -> Optional[int]:
        return next(
            (i for i, child in enumerate(self.children) if child is item), None
        )

    def detach(self, item: Optional["Node"]) -> Optional["Node"]:
        """Remove ``item`` from this node's children and return it."""
        if item is None:
            return None
        position = self._index_of(item)
        if position is not None:
            del self.children[position]
        return item

    def detach_item_from_array(self, index: int) -> Optional["Node"]:
        if index < 0:
            return None
        return self.detach(self.get_array_item(index))

    def delete_item_from_array(self, index: int) -> None:
        self.detach_item_from_array(index)

    def detach_item_from_object(self, key: str) -> Optional["Node"]:
        return self.detach(self.get_object_item(key))

    def detach_item_from_object_case_sensitive(self, key: str) -> Optional["Node"]:
        return self.detach(self.get_object_item_case_sensitive(key))

    def delete_item_from_object(self, key: str) -> None:
        self.detach_item_from_object(key)

    def delete_item_from_object_case_sensitive(self, key: str) -> None:
        self.detach_item_from_object_case_sensitive(key)

    # -- inserting and replacing ------------------------------------------

    def insert_item(self, index: int, item: "Node") -> None:
        """Insert before position ``index``, or append when it is past the end."""
        if index < 0:
            return
        if index >= len(self.children):
            self.add_item(item)
            return
        self.children.insert(index, item)

    def replace_item(self, item: Optional["Node"], replacement: Optional["Node"]) -> bool:
        """Put ``replacement`` where ``item`` was; False if that cannot be done."""
        if replacement is None:
            return False
        if replacement is item:
            return True
        if item is None:
            return False
        position = self._index_of(item)
        if position is None:
            return False
        self.children[position] = replacement
        return True

    def replace_item_in_array(self, index: int, item: "Node") -> None:
        if index < 0:
            return
        self.replace_item(self.get_array_item(index), item)

    def _replace_in_object(self, key: str, item: Optional["Node"], case_sensitive: bool) -> bool:
        if item is None:
            return False
        item.key = key
        self.replace_item(self._find(key, case_sensitive), item)
        return True

    def replace_item_in_object(self, key: str, item: Optional["Node"]) -> bool:
        return self._replace_in_object(key, item, False)

    def replace_item_in_object_case_sensitive(self, key: str, item: Optional["Node"]) -> bool:
        return self._replace_in_object(key, item, True)

    # -- type checks -----------------------------------------------------

    def is_invalid(self) -> bool:
        return self.type is JsonType.INVALID

    def is_false(self) -> bool:
        return self.type is JsonType.FALSE

    def is_true(self) -> bool:
        return self.type is JsonType.TRUE

    def is_bool(self) -> bool:
        return self.type in (JsonType.TRUE, JsonType.FALSE)

    def is_null(self) -> bool:
        return self.type is JsonType.NULL

    def is_number(self) -> bool:
        return self.type is JsonType.NUMBER

    def is_string(self) -> bool:
        return self.type is JsonType.STRING

    def is_array(self) -> bool:
        return self.type is JsonType.ARRAY

    def is_object(self) -> bool:
        return self.type is JsonType.OBJECT

    def is_raw(self) -> bool:
        return self.type is JsonType.RAW


def _create_reference(item: "Node") -> "Node":
    """A node that shares ``item``'s value and children, without a key."""
    return Node(
        type=item.type,
        value_string=item.value_string,
        value_int=item.value_int,
        value_double=item.value_double,
        key=None,
        children=item.children,
        is_reference=True,
    )


# -- constructors -------------------------------------------------------------


def create_null() -> Node:
    return Node(JsonType.NULL)


def create_true() -> Node:
    return Node(JsonType.TRUE)


def create_false() -> Node:
    return Node(JsonType.FALSE)


def create_bool(value: object) -> Node:
    return Node(JsonType.TRUE if value else JsonType.FALSE)


def create_number(value: float) -> Node:
    node = Node(JsonType.NUMBER)
    node.set_number(value)
    return node


def create_string(value: str) -> Node:
    if value is None:
        raise TypeError("a string node needs a string value")
    return Node(JsonType.STRING, value_string=value)


def create_raw(raw: str) -> Node:
    if raw is None:
        raise TypeError("a raw node needs a string value")
    return Node(JsonType.RAW, value_string=raw)


def create_array() -> Node:
    return Node(JsonType.ARRAY)


def create_object() -> Node:
    return Node(JsonType.OBJECT)


def _array_of(nodes: Iterable[Node]) -> Node:
    array = create_array()
    array.children.extend(nodes)
    return array


def create_int_array(numbers: Iterable[int]) -> Node:
    return _array_of(create_number(int(n)) for n in numbers)


def _to_single_precision(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def create_float_array(numbers: Iterable[float]) -> Node:
    """Array of numbers stored at single precision, then widened."""
    return _array_of(create_number(_to_single_precision(n)) for n in numbers)


def create_double_array(numbers: Iterable[float]) -> Node:
    return _array_of(create_number(n) for n in numbers)


def create_string_array(strings: Iterable[str]) -> Node:
    return _array_of(create_string(s) for s in strings)


# -- copying and comparing ------------------------------------------------------


def duplicate(item: Node, recurse: bool) -> Node:
    """Copy ``item``; with ``recurse`` its children are copied too."""
    if item is None:
        raise ValueError("cannot duplicate a missing node")
    copy = Node(
        type=item.type,
        value_string=item.value_string,
        value_int=item.value_int,
        value_double=item.value_double,
        key=item.key,
    )
    if recurse:
        copy.children = [duplicate(child, True) for child in item.children]
    return copy


def compare(a: Optional[Node], b: Optional[Node], case_sensitive: bool) -> bool:
    """Deep structural equality of two nodes."""
    if a is None or b is None or a.type is not b.type or a.is_invalid():
        return False
    if a is b:
        return True

    kind = a.type
    if kind in (JsonType.FALSE, JsonType.TRUE, JsonType.NULL):
        return True
    if kind is JsonType.NUMBER:
        return a.value_double == b.value_double
    if kind in (JsonType.STRING, JsonType.RAW):
        if a.value_string is None or b.value_string is None:
            return False
        return a.value_string == b.value_string
    if kind is JsonType.ARRAY:
        if len(a.children) != len(b.children):
            return False
        return all(
            compare(x, y, case_sensitive) for x, y in zip(a.children, b.children)
        )
    if kind is JsonType.OBJECT:
        return _object_subset(a, b, case_sensitive) and _object_subset(
            b, a, case_sensitive
        )
    return False


def _object_subset(a: Node, b: Node, case_sensitive: bool) -> bool:
    for member in a.children:
        if member.key is None:
            return False
        other = b._find(member.key, case_sensitive)
        if other is None or not compare(member, other, case_sensitive):
            return False
    return True