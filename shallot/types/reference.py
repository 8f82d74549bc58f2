"""Shared mutable cells."""

from __future__ import annotations

from shallot import LispValue


class Reference:
    """A single mutable cell shared by every holder.

    Equality and hashing are by cell identity, never by contents: copying a
    Reference into another binding aliases the same cell.
    """

    __slots__ = ("value",)

    def __init__(self, value: LispValue):
        self.value = value

    def deref(self) -> LispValue:
        return self.value

    def replace(self, value: LispValue) -> LispValue:
        self.value = value
        return value

    def __repr__(self) -> str:
        return f"<ref {id(self):#x}>"
