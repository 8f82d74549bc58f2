"""Native functions exposed to Shallot code."""

from __future__ import annotations

from typing import Callable

from shallot import LispValue
from shallot.types.environment import Environment

NativeFn = Callable[[Environment, list[LispValue]], LispValue]


class Builtin:
    """A host function registered as data.

    `fn` is called as `fn(env, args)` with already-evaluated arguments and is
    solely responsible for validating them. `arity` is informational
    (`None` means variadic); the evaluator never checks it.
    """

    __slots__ = ("fn", "name", "arity", "doc", "bound_env")

    def __init__(
        self,
        fn: NativeFn,
        name: str,
        arity: int | None = None,
        doc: str = "",
        bound_env: Environment | None = None,
    ):
        self.fn = fn
        self.name = name
        self.arity = arity
        self.doc = doc
        # Frame pre-seeded with a receiver, set by member access
        self.bound_env = bound_env

    @property
    def variadic(self) -> bool:
        return self.arity is None

    def bind(self, env: Environment) -> Builtin:
        return Builtin(self.fn, self.name, self.arity, self.doc, env)

    def __call__(self, env: Environment, args: list[LispValue]) -> LispValue:
        return self.fn(self.bound_env if self.bound_env is not None else env, args)

    def __str__(self) -> str:
        return f"<builtin {self.name}>"

    def __repr__(self) -> str:
        return str(self)


def builtin(name: str, arity: int | None = None) -> Callable[[NativeFn], Builtin]:
    """Decorator turning `fn(env, args)` into a named Builtin."""
    def wrap(fn: NativeFn) -> Builtin:
        return Builtin(fn, name, arity, (fn.__doc__ or "").strip())
    return wrap
