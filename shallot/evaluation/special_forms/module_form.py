from shallot import EvaluatorFn
from shallot import SExpression, LispValue
from shallot.errors import ArityError, InvalidSymbol
from shallot.types.environment import Environment
from shallot.types.reference import Reference
from shallot.types.symbol import Symbol


def module_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (module Name body...)
    Runs the body in its own frame and exports that frame's bindings as a
    ref to a map, so `Name.member` works like any other receiver.
    """
    if len(tail) < 1:
        raise ArityError("module requires a name")
    name, *body = tail
    if not isinstance(name, Symbol):
        raise InvalidSymbol(f"module name must be a Symbol, got {name!r}")

    module_env = Environment(outer=env)
    for expr in body:
        evaluate_fn(expr, module_env)

    exports = Reference({sym: module_env.vars[sym] for sym in module_env.names()})
    env.define(name, exports)
    return exports
