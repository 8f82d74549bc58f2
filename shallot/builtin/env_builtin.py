"""Built-in functions for the Shallot runtime environment.

This module defines the core arithmetic, comparison, logic, list helpers,
printing and application builtins, and `register`, which installs them
(together with the reference and member-access builtins) into an
Environment. Every builtin takes `(env, args)` with already-evaluated
arguments and validates them itself.
"""
from __future__ import annotations

import math
import sys

from shallot import LispValue
from shallot.errors import ArityError, DivisionByZero, TypeMismatch
from shallot.types.builtin import Builtin, builtin
from shallot.types.environment import Environment
from shallot.types.nil import Nil
from shallot.types.symbol import Symbol
from shallot.types.values import is_number, is_truthy, to_str, type_name, values_equal
from shallot.builtin import member_builtin, reference_builtin
from shallot.evaluation.apply import apply as apply_engine
from shallot.evaluation.evaluator import evaluate


def _numbers(op: str, args: list[LispValue]) -> list[float]:
    for a in args:
        if not is_number(a):
            raise TypeMismatch(f"All arguments to {op} must be numbers, got {type_name(a)}")
    return args


def _exactly(op: str, n: int, args: list[LispValue]) -> None:
    if len(args) != n:
        raise ArityError(f"{op} requires exactly {n} argument(s), got {len(args)}")


# -------------------------------
# Arithmetic
# -------------------------------
@builtin("+")
def add(env: Environment, args: list[LispValue]) -> LispValue:
    """Numeric sum of all arguments.

    When every argument is a string, list or map, `+` concatenates the
    strings or lists, or merges the maps left to right (later keys win).
    None of the arguments is modified.
    """
    if args and all(isinstance(a, str) for a in args):
        return "".join(args)
    if args and all(isinstance(a, list) for a in args):
        return [item for xs in args for item in xs]
    if args and all(isinstance(a, dict) for a in args):
        merged: dict = {}
        for m in args:
            merged.update(m)
        return merged
    return float(sum(_numbers("+", args)))


@builtin("-")
def sub(env: Environment, args: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    if not args:
        raise ArityError("- requires at least 1 argument")
    first, *rest = _numbers("-", args)
    if not rest:
        return float(-first)
    return float(first - sum(rest))


@builtin("*")
def mul(env: Environment, args: list[LispValue]) -> LispValue:
    return float(math.prod(_numbers("*", args)))


@builtin("/")
def div(env: Environment, args: list[LispValue]) -> LispValue:
    """Divide left-to-right; with one arg returns the reciprocal."""
    if not args:
        raise ArityError("/ requires at least 1 argument")
    nums = _numbers("/", args)
    if len(nums) == 1:
        nums = [1.0, *nums]
    result = float(nums[0])
    for x in nums[1:]:
        if x == 0:
            raise DivisionByZero("Division by zero")
        result /= x
    return result


@builtin("%", 2)
def mod(env: Environment, args: list[LispValue]) -> LispValue:
    """(% n d) => n mod d."""
    _exactly("%", 2, args)
    n, d = _numbers("%", args)
    if d == 0:
        raise DivisionByZero("Modulo by zero")
    return float(n % d)


# -------------------------------
# Comparison
# -------------------------------
def _chain(op: str, args: list[LispValue], test) -> bool:
    if len(args) < 2:
        raise ArityError(f"{op} requires at least 2 arguments")
    if all(isinstance(a, str) for a in args):
        return all(test(a, b) for a, b in zip(args, args[1:]))
    nums = _numbers(op, args)
    return all(test(a, b) for a, b in zip(nums, nums[1:]))


@builtin("<")
def lt(env: Environment, args: list[LispValue]) -> bool:
    return _chain("<", args, lambda a, b: a < b)


@builtin("<=")
def lte(env: Environment, args: list[LispValue]) -> bool:
    return _chain("<=", args, lambda a, b: a <= b)


@builtin(">")
def gt(env: Environment, args: list[LispValue]) -> bool:
    return _chain(">", args, lambda a, b: a > b)


@builtin(">=")
def gte(env: Environment, args: list[LispValue]) -> bool:
    return _chain(">=", args, lambda a, b: a >= b)


@builtin("==")
def equals(env: Environment, args: list[LispValue]) -> bool:
    """True if all arguments are equal (structurally; refs by identity)."""
    if len(args) <= 1:
        return True
    first = args[0]
    return all(values_equal(first, other) for other in args[1:])


@builtin("!=")
def not_equals(env: Environment, args: list[LispValue]) -> bool:
    return not equals(env, args)


# -------------------------------
# Logic
# -------------------------------
@builtin("not", 1)
def logical_not(env: Environment, args: list[LispValue]) -> bool:
    """Only nil and false are falsy."""
    _exactly("not", 1, args)
    return not is_truthy(args[0])


# -------------------------------
# Lists
# -------------------------------
@builtin("list")
def make_list(env: Environment, args: list[LispValue]) -> list[LispValue]:
    return list(args)


@builtin("len", 1)
def length(env: Environment, args: list[LispValue]) -> float:
    _exactly("len", 1, args)
    xs = args[0]
    if xs is Nil:
        return 0.0
    if not isinstance(xs, (list, dict, str)):
        raise TypeMismatch(f"len expects a list, map or string, got {type_name(xs)}")
    return float(len(xs))


@builtin("first", 1)
def first(env: Environment, args: list[LispValue]) -> LispValue:
    """First element of a list; nil for an empty list."""
    _exactly("first", 1, args)
    xs = args[0]
    if xs is Nil:
        return Nil
    if not isinstance(xs, list):
        raise TypeMismatch(f"first expects a list, got {type_name(xs)}")
    return xs[0] if xs else Nil


@builtin("rest", 1)
def rest(env: Environment, args: list[LispValue]) -> LispValue:
    _exactly("rest", 1, args)
    xs = args[0]
    if xs is Nil:
        return []
    if not isinstance(xs, list):
        raise TypeMismatch(f"rest expects a list, got {type_name(xs)}")
    return xs[1:]


@builtin("cons", 2)
def cons(env: Environment, args: list[LispValue]) -> list[LispValue]:
    """Prepend head to a list (non-destructive); nil counts as the empty list."""
    _exactly("cons", 2, args)
    head, tail = args
    if tail is Nil:
        return [head]
    if not isinstance(tail, list):
        raise TypeMismatch(f"cons expects a list tail, got {type_name(tail)}")
    return [head, *tail]


@builtin("nth", 2)
def nth(env: Environment, args: list[LispValue]) -> LispValue:
    _exactly("nth", 2, args)
    xs, i = args
    if not isinstance(xs, list):
        raise TypeMismatch(f"nth expects a list, got {type_name(xs)}")
    if not is_number(i) or not float(i).is_integer():
        raise TypeMismatch(f"nth expects an integral index, got {to_str(i, readable=True)}")
    i = int(i)
    return xs[i] if 0 <= i < len(xs) else Nil


# -------------------------------
# Output and introspection
# -------------------------------
def _print(args: list[LispValue], end: str) -> LispValue:
    sys.stdout.write(" ".join(to_str(a) for a in args) + end)
    return args[-1] if args else Nil


@builtin("print")
def print_(env: Environment, args: list[LispValue]) -> LispValue:
    """Print arguments separated by spaces, no newline; returns the last one."""
    return _print(args, "")


@builtin("println")
def println(env: Environment, args: list[LispValue]) -> LispValue:
    """Print arguments separated by spaces and a newline; returns the last one."""
    return _print(args, "\n")


@builtin("str")
def to_string(env: Environment, args: list[LispValue]) -> str:
    return "".join(to_str(a) for a in args)


@builtin("type-of", 1)
def type_of(env: Environment, args: list[LispValue]) -> Symbol:
    _exactly("type-of", 1, args)
    return Symbol(type_name(args[0]))


@builtin("apply", 2)
def apply_fn(env: Environment, args: list[LispValue]) -> LispValue:
    """(apply f (a b c)) calls f with the list's elements as arguments."""
    _exactly("apply", 2, args)
    fn, fn_args = args
    if not isinstance(fn_args, list):
        raise TypeMismatch(f"apply expects an argument list, got {type_name(fn_args)}")
    return apply_engine(fn, list(fn_args), env, evaluate)


CORE_BUILTINS: tuple[Builtin, ...] = (
    add, sub, mul, div, mod,
    lt, lte, gt, gte, equals, not_equals,
    logical_not,
    make_list, length, first, rest, cons, nth,
    print_, println, to_string, type_of, apply_fn,
)


def register(env: Environment) -> None:
    """Install every core builtin plus the reference and member builtins."""
    env.update({Symbol(b.name): b for b in CORE_BUILTINS})
    env.define(Symbol("PI"), math.pi)
    env.define(Symbol("E"), math.e)
    reference_builtin.register(env)
    member_builtin.register(env)
