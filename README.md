# jsontree

jsontree is a small library that handles JSON as a tree of `Node` objects.
It can parse text into nodes. You can build and edit trees by hand and
compare them. It prints trees back to text, either compact or indented with
tabs. It also strips whitespace and comments from JSON text.

The package has four modules:

- `jsontree.node`
- `jsontree.parser`
- `jsontree.printer`
- `jsontree.minify`

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Parsing

```python
from jsontree.parser import parse, parse_with_opts, ParseError

root = parse('{"name": "Jack", "age": 27}')
print(root.get_object_item("name").value_string)   # Jack

node, end = parse_with_opts('[1, 2]  ', require_null_terminated=True)
print(end)                                         # index where parsing stopped

try:
    parse_with_opts('[1, 2] trailing', require_null_terminated=True)
except ParseError as error:
    print("bad input at", error.position)
```

- `parse(text)` parses the first value in `text` and ignores anything that
  follows it.
- `parse_with_opts(text, require_null_terminated)` returns a pair: the tree
  and the offset where parsing stopped. When `require_null_terminated` is
  true, anything after the value other than whitespace is an error.
- `parse_value(text)` parses one value at the very start of `text`, without
  skipping leading whitespace.

Invalid input raises `ParseError`, which is a `ValueError`. Its `position`
attribute marks where parsing failed. Arrays and objects nested deeper than
`NESTING_LIMIT` (1000) are rejected. A NUL character ends the input.

## Building trees

```python
from jsontree.node import create_object, create_array, create_number, create_string

root = create_object()
root.add_item_to_object("title", create_string("Example"))
sizes = create_array()
for n in (1, 2, 3):
    sizes.add_item(create_number(n))
root.add_item_to_object("sizes", sizes)

print(len(sizes))                      # 3
for child in sizes:
    print(child.value_double, child.value_int)
```

### Node fields

A `Node` is a dataclass with these fields:

- `type`: a `JsonType`.
- `value_string`: the text of a string or raw value.
- `value_double`: the number.
- `value_int`: the number clamped to the 32-bit int range.
- `key`: the member name inside an object.
- `children`: the child nodes.
- `is_reference`: whether the node is a reference to another node.

### Node methods

- `set_number(value)` sets both number fields.
- Lookups:
  - `get_array_item(index)`
  - `get_object_item(name)`, which ignores ASCII case
  - `get_object_item_case_sensitive(name)`
  - `has_object_item(name)`

  These return `None` when nothing matches.
- Adding:
  - `add_item(item)`
  - `add_item_to_object(key, item)`
  - `insert_item(index, item)`, which appends when `index` is past the end
- References: `add_reference(item)` and `add_reference_to_object(key, item)` add a reference node. A reference node shares the value and the children list of `item`.
- Removing:
  - `detach(item)`
  - `detach_item_from_array(index)`
  - `detach_item_from_object(key)`
  - `detach_item_from_object_case_sensitive(key)`

  Each returns the removed node. The matching `delete_*` methods remove the node and return nothing.
- Replacing:
  - `replace_item(item, replacement)`
  - `replace_item_in_array(index, item)`
  - `replace_item_in_object(key, item)`
  - `replace_item_in_object_case_sensitive(key, item)`
- Type checks:
  - `is_null`
  - `is_true`
  - `is_false`
  - `is_bool`
  - `is_number`
  - `is_string`
  - `is_array`
  - `is_object`
  - `is_raw`
  - `is_invalid`

### Module-level functions

- Constructors:
  - `create_null`
  - `create_true`
  - `create_false`
  - `create_bool`
  - `create_number`
  - `create_string`
  - `create_raw`
  - `create_array`
  - `create_object`
- Array constructors:
  - `create_int_array`
  - `create_float_array`, which rounds each value to single precision
  - `create_double_array`
  - `create_string_array`
- `duplicate(item, recurse)` copies a node. When `recurse` is true it also copies the children.
- `compare(a, b, case_sensitive)` tests two trees for structural equality. The order of object members does not matter.
- `version()` returns `"1.5.5"`.

## Printing

```python
from jsontree.printer import print_formatted, print_unformatted

print(print_unformatted(root))   # {"title":"Example","sizes":[1,2,3]}
print(print_formatted(root))     # tab-indented, one object member per line
```

- `print_value(item, fmt)` renders a node. `print_formatted` and
  `print_unformatted` are shorthands for it.
- `print_buffered(item, prebuffer, fmt)` renders the same output. A negative
  `prebuffer` is an error.
- `print_preallocated(item, length, fmt)` raises `PrintError` when the output
  would not fit in a buffer of `length` characters. The fit includes the room
  reserved for each piece and a terminator.
- `print_number(value)` formats a single number.
- `print_string(value)` formats a single string. Quotes, backslashes and
  control characters are escaped. A value of `None` prints as `""`.

Numbers are printed with 15 significant digits. If that does not give back
the exact value, 17 digits are used. NaN and the infinities print as `null`.
A node that cannot be rendered raises `PrintError`, which is a `ValueError`.
This includes an invalid node and a raw node without text.

## Minifying

```python
from jsontree.minify import minify

minify('{ "a": 1, // note\n "b": /* x */ 2 }')   # '{"a":1,"b":2}'
```

`minify` removes the following from the text:

- spaces, tabs, newlines and carriage returns
- `//` comments
- `/* */` comments

It leaves string literals untouched.

## What it does not do

jsontree is a library only. It has no command-line tool. It does not read or
write files.