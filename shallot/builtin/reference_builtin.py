"""Reference cells exposed as ordinary builtins.

The evaluator knows nothing about mutation: allocation, dereference and
in-place replacement of a cell are plain functions over the opaque
Reference variant.
"""
from __future__ import annotations

from shallot import LispValue
from shallot.errors import ArityError, NotAReference
from shallot.types.builtin import Builtin, builtin
from shallot.types.environment import Environment
from shallot.types.reference import Reference
from shallot.types.symbol import Symbol
from shallot.types.values import type_name


def expect_reference(value: LispValue, who: str) -> Reference:
    if not isinstance(value, Reference):
        raise NotAReference(f"{who} expects a ref, got {type_name(value)}")
    return value


@builtin("new", 1)
def new(env: Environment, args: list[LispValue]) -> Reference:
    """Allocate a fresh cell holding the argument."""
    if len(args) != 1:
        raise ArityError("new requires exactly 1 argument")
    return Reference(args[0])


@builtin("deref", 1)
def deref(env: Environment, args: list[LispValue]) -> LispValue:
    """Current contents of a cell."""
    if len(args) != 1:
        raise ArityError("deref requires exactly 1 argument")
    return expect_reference(args[0], "deref").deref()


@builtin("reset!", 2)
def reset(env: Environment, args: list[LispValue]) -> LispValue:
    """Replace a cell's contents; every holder sees the new value."""
    if len(args) != 2:
        raise ArityError("reset! requires exactly 2 arguments")
    ref, value = args
    return expect_reference(ref, "reset!").replace(value)


@builtin("ref?", 1)
def is_ref(env: Environment, args: list[LispValue]) -> bool:
    if len(args) != 1:
        raise ArityError("ref? requires exactly 1 argument")
    return isinstance(args[0], Reference)


REFERENCE_BUILTINS: tuple[Builtin, ...] = (new, deref, reset, is_ref)


def register(env: Environment) -> None:
    env.update({Symbol(b.name): b for b in REFERENCE_BUILTINS})
