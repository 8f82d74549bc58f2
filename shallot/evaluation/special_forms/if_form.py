from shallot import EvaluatorFn
from shallot import SExpression, LispValue
from shallot.errors import ArityError
from shallot.types.environment import Environment
from shallot.types.nil import Nil
from shallot.types.values import is_truthy


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) not in (2, 3):
        raise ArityError("if requires a condition, a then-expression and an optional else-expression")

    cond = evaluate_fn(tail[0], env)

    # Only the taken branch is evaluated
    if is_truthy(cond):
        return evaluate_fn(tail[1], env)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env)
    else:
        return Nil
