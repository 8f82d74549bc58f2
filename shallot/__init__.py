# Core type aliases for Shallot's data model.
# Plain Python types (float, str, bool, list, dict) represent both code (forms)
# and runtime values; Symbol, Nil, Closure, Builtin and Reference cover the rest.
#
# Naming guidance:
# - SExpression: use in reader and special-form code to denote syntactic forms.
# - LispValue:  use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any, Callable

__version__ = "0.1.0"

# Runtime value alias
LispValue = Any
# Forms alias (code is data)
SExpression = LispValue

# Evaluator function type handed to special forms
EvaluatorFn = Callable[..., LispValue]
