from __future__ import annotations

from shallot import EvaluatorFn
from shallot import SExpression, LispValue
from shallot.errors import ArityError, InvalidSymbol
from shallot.types.closure import Closure
from shallot.types.environment import Environment
from shallot.types.nil import Nil
from shallot.types.symbol import DO, Symbol


def parse_params(params: SExpression, owner: str) -> list[Symbol]:
    """Accept (a b c), (), nil or a single bare symbol as a parameter list."""
    if params is Nil:
        return []
    if isinstance(params, Symbol):
        return [params]
    if not isinstance(params, list):
        raise InvalidSymbol(f"{owner} parameter list must be a list of symbols, got {params!r}")
    for p in params:
        if not isinstance(p, Symbol):
            raise InvalidSymbol(f"{owner} parameter must be a Symbol, got {p!r}")
    if len(set(params)) != len(params):
        raise InvalidSymbol(f"{owner} has duplicate parameter names")
    return list(params)


def make_body(body_forms: list[SExpression]) -> SExpression:
    # Several body forms run as an implicit (do ...)
    if not body_forms:
        return Nil
    if len(body_forms) == 1:
        return body_forms[0]
    return [DO, *body_forms]


def fun_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(fun (params) body...) -> anonymous closure over `env`."""
    if not tail:
        raise ArityError("fun requires at least a parameter list")

    params = parse_params(tail[0], "fun")
    return Closure(params, make_body(tail[1:]), env)
