"""Core evaluator for the Shallot interpreter.

A plain recursive-descent evaluator: special forms are dispatched on the head
symbol before any argument is evaluated; every other list is an application
whose head and arguments are evaluated left to right. Mutation lives entirely
in builtins over Reference cells; nothing here knows about it.
"""

from __future__ import annotations

from shallot import SExpression, LispValue
from shallot.errors import ShallotError
from shallot.types.environment import Environment
from shallot.types.nil import Nil
from shallot.types.symbol import Symbol
from shallot.types.values import check_map_key
from shallot.evaluation.apply import apply
from shallot.evaluation.special_forms import SPECIAL_FORMS


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate `expr` in `env`.

    Failures propagate as ShallotError; the innermost failing expression is
    attached to the error on the way out.
    """
    try:
        return _evaluate(expr, env)
    except ShallotError as err:
        if err.expr is None:
            err.expr = expr
        raise


def _evaluate(expr: SExpression, env: Environment) -> LispValue:
    match expr:
        case Symbol():
            return env.lookup(expr)

        case list() if not expr:
            return Nil

        case [head, *tail_args] if isinstance(expr, list):
            # --- Special forms handling ---
            if isinstance(head, Symbol) and head in SPECIAL_FORMS:
                return SPECIAL_FORMS[head](tail_args, env, evaluate)

            # --- Application ---
            callee = evaluate(head, env)
            args = [evaluate(arg, env) for arg in tail_args]
            return apply(callee, args, env, evaluate)

        case dict():
            return evaluate_map_literal(expr, env)

    # --- Atoms return as-is ---
    return expr


def evaluate_map_literal(expr: dict, env: Environment) -> dict:
    """Build a fresh map from a literal. Keys are atoms and stand for
    themselves (a symbol key names a field); values are evaluated in
    insertion order."""
    result: dict = {}
    for key, value_expr in expr.items():
        result[check_map_key(key)] = evaluate(value_expr, env)
    return result
