from __future__ import annotations

from shallot import EvaluatorFn
from shallot import SExpression, LispValue
from shallot.errors import ArityError, InvalidSymbol
from shallot.types.builtin import Builtin
from shallot.types.closure import Closure
from shallot.types.environment import Environment
from shallot.types.reference import Reference
from shallot.types.symbol import Symbol
from shallot.evaluation.special_forms.lambda_form import make_body, parse_params


def _parse_methods(
    struct_name: Symbol, method_defs: list[SExpression], env: Environment
) -> dict[Symbol, Closure]:
    methods: dict[Symbol, Closure] = {}
    for method_def in method_defs:
        if not isinstance(method_def, list) or len(method_def) < 3:
            raise ArityError(
                f"struct {struct_name} method must be (name (params) body...)"
            )
        m_name, m_params, *m_body = method_def
        if not isinstance(m_name, Symbol):
            raise InvalidSymbol(f"struct {struct_name} method name must be a Symbol, got {m_name!r}")
        # Methods close over the definition frame; `self` arrives via member access
        methods[m_name] = Closure(
            parse_params(m_params, f"{struct_name}.{m_name}"), make_body(m_body), env, m_name
        )
    return methods


def struct_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (struct Name (field...) (method (params...) body...)...)
    Defines `Name` as a constructor returning a fresh ref to a map of the
    fields (in declaration order) followed by the methods.
    """
    if len(tail) < 2:
        raise ArityError("struct requires a name and a field list")
    struct_name, fields_expr, *method_defs = tail
    if not isinstance(struct_name, Symbol):
        raise InvalidSymbol(f"struct name must be a Symbol, got {struct_name!r}")

    fields = parse_params(fields_expr, f"struct {struct_name}")
    methods = _parse_methods(struct_name, method_defs, env)

    def make_struct(env_inner: Environment, args: list[LispValue]) -> Reference:
        if len(args) != len(fields):
            raise ArityError(
                f"{struct_name} constructor expects {len(fields)} args, got {len(args)}"
            )
        instance: dict = dict(zip(fields, args))
        instance.update(methods)
        return Reference(instance)

    constructor = Builtin(make_struct, str(struct_name), len(fields), "Struct constructor")
    env.define(struct_name, constructor)
    return constructor
