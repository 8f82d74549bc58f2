from shallot import EvaluatorFn
from shallot import SExpression, LispValue
from shallot.errors import ArityError, InvalidSymbol
from shallot.types.closure import Closure
from shallot.types.environment import Environment
from shallot.types.symbol import Symbol
from shallot.evaluation.special_forms.lambda_form import make_body, parse_params


def defun_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (defun name (params) body...)
    Binds `name` in the current frame; the closure captures that same frame,
    so the function can call itself.
    """
    if len(tail) < 3:
        raise ArityError("defun requires a name, a parameter list and a body")

    name, params_expr, *body_forms = tail
    if not isinstance(name, Symbol):
        raise InvalidSymbol(f"defun name must be a Symbol, got {name!r}")
    fn = Closure(parse_params(params_expr, f"defun {name}"), make_body(body_forms), env, name)
    env.define(name, fn)
    return fn


def def_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (def name value)
    Always a local declaration: never walks the chain, shadows outer bindings.
    """
    if len(tail) != 2:
        raise ArityError("def requires exactly 2 arguments")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise InvalidSymbol(f"def name must be a Symbol, got {name!r}")
    value = evaluate_fn(val_expr, env)
    env.define(name, value)
    return value
