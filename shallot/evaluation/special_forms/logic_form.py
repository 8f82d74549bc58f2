from shallot import EvaluatorFn
from shallot import SExpression, LispValue
from shallot.types.environment import Environment
from shallot.types.nil import Nil
from shallot.types.values import is_truthy


def and_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Short-circuiting logical AND.

    (and a b c ...) evaluates operands left to right and stops at the first
    falsy one (nil or false), which is returned. If every operand is truthy
    the last value is returned; with no operands, true.
    """
    result: LispValue = True
    for expr in tail:
        result = evaluate_fn(expr, env)
        if not is_truthy(result):
            return result
    return result


def or_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Short-circuiting logical OR.

    (or a b c ...) returns the first truthy operand without evaluating the
    rest. Otherwise the last (falsy) value, or nil with no operands.
    """
    result: LispValue = Nil
    for expr in tail:
        result = evaluate_fn(expr, env)
        if is_truthy(result):
            return result
    return result
