import math

import pytest

from jsontree.node import (
    JsonType,
    Node,
    compare,
    create_array,
    create_bool,
    create_double_array,
    create_false,
    create_float_array,
    create_int_array,
    create_null,
    create_number,
    create_object,
    create_raw,
    create_string,
    create_string_array,
    create_true,
    duplicate,
    version,
)


def _object(**members):
    obj = create_object()
    for key, value in members.items():
        obj.add_item_to_object(key, create_number(value))
    return obj


def test_version():
    assert version() == "1.5.5"


def test_constructors_set_types():
    assert create_null().is_null()
    assert create_true().is_true()
    assert create_false().is_false()
    assert create_bool(1).is_true()
    assert create_bool(0).is_false()
    assert create_true().is_bool() and create_false().is_bool()
    assert not create_null().is_bool()
    assert create_array().is_array()
    assert create_object().is_object()
    assert create_raw("{}").is_raw()
    assert Node().is_invalid()


def test_create_string_keeps_value():
    node = create_string("hello")
    assert node.is_string()
    assert node.value_string == "hello"


def test_create_string_rejects_none():
    with pytest.raises(TypeError):
        create_string(None)
    with pytest.raises(TypeError):
        create_raw(None)


def test_number_saturates_int():
    assert create_number(1e12).value_int == 2147483647
    assert create_number(-1e12).value_int == -2147483648
    node = create_number(-3.7)
    assert node.value_int == -3
    assert node.value_double == -3.7
    assert create_number(math.inf).value_int == 2147483647


def test_set_number_returns_value():
    node = create_number(0)
    assert node.set_number(2.5) == 2.5
    assert node.value_double == 2.5
    assert node.value_int == 2


def test_int_and_double_arrays():
    ints = create_int_array([1, 2, 3])
    assert [n.value_int for n in ints] == [1, 2, 3]
    doubles = create_double_array([0.1, 0.25])
    assert [n.value_double for n in doubles] == [0.1, 0.25]
    assert len(create_int_array([])) == 0


def test_float_array_uses_single_precision():
    floats = create_float_array([0.5, 0.1])
    assert floats.get_array_item(0).value_double == 0.5
    narrowed = floats.get_array_item(1).value_double
    assert narrowed != 0.1
    assert abs(narrowed - 0.1) < 1e-7


def test_string_array():
    arr = create_string_array(["a", "b"])
    assert [n.value_string for n in arr] == ["a", "b"]


def test_array_item_access_bounds():
    arr = create_int_array([10, 20])
    assert len(arr) == 2
    assert arr.get_array_item(1).value_int == 20
    assert arr.get_array_item(2) is None
    assert arr.get_array_item(-1) is None


def test_object_lookup_case():
    obj = _object(Name=1)
    assert obj.get_object_item("name").value_int == 1
    assert obj.get_object_item_case_sensitive("name") is None
    assert obj.get_object_item_case_sensitive("Name").value_int == 1
    assert obj.has_object_item("NAME")
    assert not obj.has_object_item("other")
    assert obj.get_object_item(None) is None


def test_add_item_ignores_none():
    arr = create_array()
    arr.add_item(None)
    assert len(arr) == 0


def test_references_share_value_without_key():
    original = create_string("x")
    original.key = "k"
    arr = create_array()
    arr.add_reference(original)
    ref = arr.get_array_item(0)
    assert ref is not original
    assert ref.is_reference
    assert ref.key is None
    assert ref.value_string == "x"

    obj = create_object()
    obj.add_reference_to_object("alias", original)
    assert obj.get_object_item("alias").value_string == "x"
    assert original.key == "k"


def test_detach_and_delete_from_array():
    arr = create_int_array([1, 2, 3])
    detached = arr.detach_item_from_array(1)
    assert detached.value_int == 2
    assert [n.value_int for n in arr] == [1, 3]
    arr.delete_item_from_array(0)
    assert [n.value_int for n in arr] == [3]
    assert arr.detach_item_from_array(-1) is None
    assert arr.detach_item_from_array(5) is None


def test_detach_and_delete_from_object():
    obj = _object(a=1, B=2, c=3)
    assert obj.detach_item_from_object("b").value_int == 2
    assert obj.detach_item_from_object_case_sensitive("A") is None
    obj.delete_item_from_object_case_sensitive("a")
    assert [n.key for n in obj] == ["c"]
    obj.delete_item_from_object("C")
    assert len(obj) == 0


def test_detach_via_pointer():
    arr = create_int_array([1, 2])
    first = arr.get_array_item(0)
    assert arr.detach(first) is first
    assert arr.get_array_item(0).value_int == 2
    assert arr.detach(None) is None


def test_insert_item():
    arr = create_int_array([1, 3])
    arr.insert_item(1, create_number(2))
    arr.insert_item(0, create_number(0))
    arr.insert_item(99, create_number(4))
    arr.insert_item(-1, create_number(-1))
    assert [n.value_int for n in arr] == [0, 1, 2, 3, 4]


def test_replace_item():
    arr = create_int_array([1, 2, 3])
    old = arr.get_array_item(1)
    new = create_number(9)
    assert arr.replace_item(old, new)
    assert [n.value_int for n in arr] == [1, 9, 3]
    assert arr.replace_item(new, new)
    assert not arr.replace_item(new, None)


def test_replace_item_in_array_and_object():
    arr = create_int_array([1, 2])
    arr.replace_item_in_array(0, create_number(5))
    arr.replace_item_in_array(-1, create_number(7))
    assert [n.value_int for n in arr] == [5, 2]

    obj = _object(Key=1, other=2)
    assert obj.replace_item_in_object("key", create_number(8))
    assert obj.get_object_item("key").value_int == 8
    assert obj.get_object_item_case_sensitive("key") is not None
    assert len(obj) == 2
    assert obj.replace_item_in_object_case_sensitive("other", create_number(4))
    assert obj.get_object_item("other").value_int == 4
    assert not obj.replace_item_in_object("other", None)


def test_duplicate_shallow_and_deep():
    obj = _object(a=1, b=2)
    obj.key = "root"
    shallow = duplicate(obj, False)
    assert shallow.is_object()
    assert shallow.key == "root"
    assert len(shallow) == 0

    deep = duplicate(obj, True)
    assert compare(obj, deep, True)
    assert deep.get_object_item("a") is not obj.get_object_item("a")


def test_duplicate_clears_reference_flag():
    arr = create_array()
    arr.add_reference(create_string("s"))
    copy = duplicate(arr.get_array_item(0), True)
    assert not copy.is_reference
    assert copy.value_string == "s"


def test_duplicate_none_raises():
    with pytest.raises(ValueError):
        duplicate(None, True)


def test_compare_scalars():
    assert compare(create_null(), create_null(), True)
    assert compare(create_number(1.5), create_number(1.5), True)
    assert not compare(create_number(1.5), create_number(2), True)
    assert compare(create_string("x"), create_string("x"), True)
    assert not compare(create_string("x"), create_raw("x"), True)
    assert not compare(create_true(), create_false(), True)
    assert not compare(None, create_null(), True)
    invalid = Node()
    assert not compare(invalid, invalid, True)


def test_compare_arrays():
    assert compare(create_int_array([1, 2]), create_int_array([1, 2]), True)
    assert not compare(create_int_array([1, 2]), create_int_array([1, 2, 3]), True)
    assert not compare(create_int_array([1, 2]), create_int_array([2, 1]), True)


def test_compare_objects():
    assert compare(_object(a=1, b=2), _object(b=2, a=1), True)
    assert not compare(_object(a=1), _object(a=1, b=2), True)
    assert not compare(_object(a=1, b=2), _object(a=1), True)
    assert compare(_object(A=1), _object(a=1), False)
    assert not compare(_object(A=1), _object(a=1), True)


def test_iteration_is_safe_while_detaching():
    arr = create_int_array([1, 2, 3])
    for child in arr:
        arr.detach(child)
    assert len(arr) == 0


def test_type_enum_members():
    assert create_number(1).type is JsonType.NUMBER
    assert create_string("").type is JsonType.STRING