from shallot import EvaluatorFn
from shallot import SExpression, LispValue
from shallot.types.environment import Environment
from shallot.types.nil import Nil


def do_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(do e1 e2 ...) / {e1 e2 ...}

    Evaluates each expression in order inside one new frame chained to `env`;
    the value is the last expression's, or nil for an empty block.
    """
    block = Environment(outer=env)
    result: LispValue = Nil
    for e in tail:
        result = evaluate_fn(e, block)
    return result
