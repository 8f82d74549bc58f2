"""Value helpers: truthiness, structural equality, type names and printing."""

from __future__ import annotations

from io import StringIO

from shallot import LispValue
from shallot.errors import TypeMismatch
from shallot.types.builtin import Builtin
from shallot.types.closure import Closure
from shallot.types.nil import Nil, NilType
from shallot.types.reference import Reference
from shallot.types.symbol import Symbol


def is_number(value: LispValue) -> bool:
    # bool is an int subclass in Python but a separate variant here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: LispValue) -> bool:
    """Only Nil and false are falsy; 0, "" and () are truthy."""
    return value is not Nil and value is not False


def type_name(value: LispValue) -> str:
    if isinstance(value, NilType):
        return "nil"
    if isinstance(value, bool):
        return "bool"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Symbol):
        return "symbol"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "map"
    if isinstance(value, Closure):
        return "function"
    if isinstance(value, Builtin):
        return "builtin"
    if isinstance(value, Reference):
        return "ref"
    return type(value).__name__


def is_map_key(value: LispValue) -> bool:
    """Hashable atoms other than bools; true/false hash like 1/0 and would
    share a slot with those numbers."""
    if isinstance(value, bool):
        return False
    try:
        hash(value)
    except TypeError:
        return False
    return True


def check_map_key(value: LispValue) -> LispValue:
    if not is_map_key(value):
        raise TypeMismatch(f"Map key must be a non-bool atom, got {type_name(value)}")
    return value


def values_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality for data, identity for references and functions."""
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, list) and isinstance(b, list):
        if len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(values_equal(a[k], b[k]) for k in a)
    if isinstance(a, (Reference, Closure, Builtin)) or isinstance(b, (Reference, Closure, Builtin)):
        return False
    if type(a) != type(b):
        return False
    return a == b


def format_number(n: int | float) -> str:
    if isinstance(n, float) and n.is_integer():
        return str(int(n))
    return str(n)


def _escape(s: str) -> str:
    return s.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\t", "\\t")


def _write(buffer: StringIO, value: LispValue, readable: bool, seen: set[int]) -> None:
    if isinstance(value, NilType):
        buffer.write("nil")
    elif isinstance(value, bool):
        buffer.write("true" if value else "false")
    elif is_number(value):
        buffer.write(format_number(value))
    elif isinstance(value, str):
        buffer.write(f'"{_escape(value)}"' if readable else value)
    elif isinstance(value, list):
        buffer.write("(")
        for i, item in enumerate(value):
            if i:
                buffer.write(" ")
            _write(buffer, item, readable, seen)
        buffer.write(")")
    elif isinstance(value, dict):
        buffer.write("[")
        for i, (k, v) in enumerate(value.items()):
            if i:
                buffer.write(" ")
            _write(buffer, k, readable, seen)
            buffer.write(" ")
            _write(buffer, v, readable, seen)
        buffer.write("]")
    elif isinstance(value, Reference):
        # A reference prints as its live contents
        if id(value) in seen:
            buffer.write("<cycle>")
            return
        seen.add(id(value))
        _write(buffer, value.deref(), readable, seen)
        seen.discard(id(value))
    else:
        buffer.write(str(value))


def to_str(value: LispValue, readable: bool = False) -> str:
    """Render a value the way `print` shows it.

    With `readable=True` strings are quoted and escaped (REPL echo, error
    reports).
    """
    with StringIO() as buffer:
        _write(buffer, value, readable, set())
        return buffer.getvalue()
