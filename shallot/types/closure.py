"""Closure representation for Shallot."""

from __future__ import annotations

from io import StringIO

from shallot import SExpression
from shallot.types.environment import Environment
from shallot.types.symbol import Symbol


class Closure:
    """A first-class function: formal parameters, body, and captured env.

    The captured environment is shared with whoever else holds that frame;
    the closure never rebinds it.
    """

    __slots__ = ("params", "body", "env", "name")

    def __init__(
        self,
        params: list[Symbol],
        body: SExpression,
        env: Environment,
        name: Symbol | None = None,
    ):
        self.params: list[Symbol] = params
        self.body: SExpression = body
        self.env: Environment = env
        self.name: Symbol | None = name

    @property
    def arity(self) -> int:
        return len(self.params)

    def with_env(self, env: Environment) -> Closure:
        """Same function, evaluated against a different captured frame."""
        return Closure(self.params, self.body, env, self.name)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<function ")
            if self.name is not None:
                buffer.write(f"{self.name} ")
            buffer.write("(")
            buffer.write(" ".join(str(p) for p in self.params))
            buffer.write(")>")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)
