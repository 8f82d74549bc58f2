from __future__ import annotations

from typing import Any


class ShallotError(Exception):
    """ Base class for all Shallot errors"""
    kind = "Error"

    def __init__(self, message: str, expr: Any = None):
        super().__init__(message)
        self.message = message
        # Offending expression, attached by the evaluator on the way out
        self.expr = expr

    def report(self) -> str:
        """Render `kind: message`, plus the offending expression when known."""
        text = f"{self.kind}: {self.message}"
        if self.expr is not None:
            from shallot.types.values import to_str
            text += f"\n  in: {to_str(self.expr, readable=True)}"
        return text


class UnboundSymbol(ShallotError):
    """ Raised when a symbol is used before it is bound"""
    kind = "UnboundSymbol"


class ArityError(ShallotError):
    """ Raised when the number of arguments passed to a function or form is incorrect"""
    kind = "ArityError"


class NotCallable(ShallotError):
    """ Raised when a non-function value is applied"""
    kind = "NotCallable"


class NotAReference(ShallotError):
    """ Raised when a reference operation receives something other than a Reference"""
    kind = "NotAReference"


class NoSuchMember(ShallotError):
    """ Raised when member access names a key the referenced map does not hold"""
    kind = "NoSuchMember"


class TypeMismatch(ShallotError):
    """ Raised when a value has the wrong variant for an operation"""
    kind = "TypeMismatch"


class InvalidSymbol(TypeMismatch):
    """ Raised when a symbol is required (names, parameters, fields) but something else is given"""


class DivisionByZero(ShallotError):
    """ Raised on division or modulo by zero"""
    kind = "DivisionByZero"


class NativeError(ShallotError):
    """ Raised when host code behind a builtin fails (I/O, OS, ...)"""
    kind = "Native"


class ShallotSyntaxError(ShallotError):
    """ Raised by the reader on malformed source"""
    kind = "Syntax"


class RecursionLimitError(ShallotError):
    """ Raised when evaluation nests deeper than the configured recursion limit"""
    kind = "RecursionLimit"
