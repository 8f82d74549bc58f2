from shallot import EvaluatorFn
from shallot import SExpression, LispValue
from shallot.errors import ArityError, TypeMismatch
from shallot.types.environment import Environment
from shallot.types.symbol import Symbol
from shallot.types.values import to_str
from shallot.builtin.member_builtin import member_write
from shallot.evaluation.special_forms.member_form import is_member_access, member_key


def assign_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (= name value)          rebind the nearest `name`, declaring it here if unbound
    (= (. recv field) value) write through the reference `recv` holds
    """
    if len(tail) != 2:
        raise ArityError("= requires exactly 2 arguments: (= target value)")
    target, val_expr = tail

    if isinstance(target, Symbol):
        value = evaluate_fn(val_expr, env)
        env.assign(target, value)
        return value

    if is_member_access(target):
        _, recv_expr, field = target
        recv = evaluate_fn(recv_expr, env)
        key = member_key(field, env, evaluate_fn)
        return member_write(recv, key, evaluate_fn(val_expr, env))

    raise TypeMismatch(f"Cannot assign to {to_str(target, readable=True)}")
