from shallot import SExpression, LispValue, EvaluatorFn
from shallot.errors import ArityError
from shallot.types.environment import Environment


def quote_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) != 1:
        raise ArityError("quote expects exactly 1 argument")
    return tail[0]
