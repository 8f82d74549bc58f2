from shallot import EvaluatorFn
from shallot import SExpression, LispValue
from shallot.errors import ArityError
from shallot.types.environment import Environment
from shallot.types.symbol import DOT, Symbol
from shallot.builtin.member_builtin import member_read, member_write


def member_key(field: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    # A bare symbol names the field literally; anything else is a computed key
    if isinstance(field, Symbol):
        return field
    return evaluate_fn(field, env)


def is_member_access(expr: SExpression) -> bool:
    return isinstance(expr, list) and len(expr) == 3 and expr[0] == DOT


def member_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (. recv field)        read, binding `self` for functions
    (. recv field value)  write through the reference
    """
    if len(tail) not in (2, 3):
        raise ArityError(". requires a receiver, a field and an optional value")

    recv = evaluate_fn(tail[0], env)
    key = member_key(tail[1], env, evaluate_fn)
    if len(tail) == 2:
        return member_read(recv, key, env)
    return member_write(recv, key, evaluate_fn(tail[2], env))
