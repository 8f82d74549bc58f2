"""Member access over references to maps.

`recv.field` reads a key out of the map a Reference currently holds;
`recv.field = v` swaps an updated map into the cell, so every holder of the
reference sees the write while plain map values stay untouched. Functions
read through `.` come back bound: `self` is pre-seeded, in a fresh frame, to
the receiving reference.
"""
from __future__ import annotations

from shallot import LispValue
from shallot.errors import ArityError, NoSuchMember, TypeMismatch
from shallot.types.builtin import Builtin, builtin
from shallot.types.closure import Closure
from shallot.types.environment import Environment
from shallot.types.reference import Reference
from shallot.types.symbol import SELF, Symbol
from shallot.types.values import check_map_key, is_map_key, to_str, type_name
from shallot.builtin.reference_builtin import expect_reference


def _fields(recv: LispValue, who: str) -> tuple[Reference, dict]:
    ref = expect_reference(recv, who)
    contents = ref.deref()
    if not isinstance(contents, dict):
        raise TypeMismatch(f"{who} expects a ref to a map, got a ref to {type_name(contents)}")
    return ref, contents


def bind_method(fn: LispValue, recv: Reference, env: Environment) -> LispValue:
    """Pre-seed `self` for functions read off a receiver.

    A Closure gets a fresh frame under its own captured environment; a
    Builtin gets a fresh frame under the caller's environment, which it
    receives as its `env`. Anything else is returned unchanged.
    """
    if isinstance(fn, Closure):
        frame = Environment(outer=fn.env)
        frame.define(SELF, recv)
        return fn.with_env(frame)
    if isinstance(fn, Builtin):
        frame = Environment(outer=env)
        frame.define(SELF, recv)
        return fn.bind(frame)
    return fn


def member_read(recv: LispValue, key: LispValue, env: Environment) -> LispValue:
    ref, fields = _fields(recv, "member access")
    try:
        value = fields[check_map_key(key)]
    except KeyError:
        raise NoSuchMember(f"No member {to_str(key, readable=True)} in {to_str(ref, readable=True)}")
    return bind_method(value, ref, env)


def member_write(recv: LispValue, key: LispValue, value: LispValue) -> LispValue:
    ref, fields = _fields(recv, "member assignment")
    updated = dict(fields)
    updated[check_map_key(key)] = value
    ref.replace(updated)
    return value


@builtin("get-member", 2)
def get_member(env: Environment, args: list[LispValue]) -> LispValue:
    """(get-member ref key) - member read with a computed key."""
    if len(args) != 2:
        raise ArityError("get-member requires exactly 2 arguments")
    return member_read(args[0], args[1], env)


@builtin("set-member!", 3)
def set_member(env: Environment, args: list[LispValue]) -> LispValue:
    """(set-member! ref key value) - member write with a computed key."""
    if len(args) != 3:
        raise ArityError("set-member! requires exactly 3 arguments")
    return member_write(*args)


@builtin("has-member?", 2)
def has_member(env: Environment, args: list[LispValue]) -> bool:
    if len(args) != 2:
        raise ArityError("has-member? requires exactly 2 arguments")
    _, fields = _fields(args[0], "has-member?")
    return is_map_key(args[1]) and args[1] in fields


MEMBER_BUILTINS: tuple[Builtin, ...] = (get_member, set_member, has_member)


def register(env: Environment) -> None:
    env.update({Symbol(b.name): b for b in MEMBER_BUILTINS})
