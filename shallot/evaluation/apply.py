"""Application engine for Shallot.

Centralizes function application for the evaluator, special forms and
builtins that call back into user code:
- Closures get a fresh frame, child of their captured environment, binding
  each parameter. Arity is checked before anything is bound.
- Builtins are called with the evaluated argument list and validate it
  themselves. Host exceptions are re-raised as NativeError.
"""

from __future__ import annotations

import logging

from shallot import LispValue, EvaluatorFn
from shallot.errors import ArityError, NativeError, NotCallable, ShallotError
from shallot.types.builtin import Builtin
from shallot.types.closure import Closure
from shallot.types.environment import Environment
from shallot.types.values import to_str, type_name

logger = logging.getLogger(__name__)


def apply_closure(fn: Closure, args: list[LispValue], evaluate_fn: EvaluatorFn) -> LispValue:
    """Apply a Closure to already-evaluated arguments."""
    if len(args) != len(fn.params):
        name = fn.name if fn.name is not None else "function"
        raise ArityError(
            f"{name} expects {len(fn.params)} argument(s), got {len(args)}"
        )
    frame = Environment(outer=fn.env)
    for param, arg in zip(fn.params, args):
        frame.define(param, arg)
    return evaluate_fn(fn.body, frame)


def apply_builtin(fn: Builtin, args: list[LispValue], env: Environment) -> LispValue:
    try:
        return fn(env, args)
    except (ShallotError, RecursionError):
        raise
    except Exception as exc:
        logger.debug("builtin %s raised %r", fn.name, exc)
        raise NativeError(f"{fn.name}: {exc}") from exc


def apply(
    head: LispValue,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Closure or a Builtin; anything else is NotCallable."""
    if isinstance(head, Closure):
        return apply_closure(head, args, evaluate_fn)
    elif isinstance(head, Builtin):
        return apply_builtin(head, args, env)
    else:
        raise NotCallable(f"Cannot apply non-function {to_str(head, readable=True)} ({type_name(head)})")
