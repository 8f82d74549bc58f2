"""
  Shallot Reader: Lexer and Parser

- Streaming, lazy parsing of prefix (S-expression) source
- Emits canonical expression trees made of plain Python values:

    - nil / true / false -> Nil / True / False
    - numbers -> float
    - strings -> str
    - symbols -> Symbol
    - (a b c) -> list
    - {a b c} -> [do, a, b, c]
    - [k v ...] -> dict (map literal, insertion ordered)
    - 'x -> [quote, x]
    - a.b.c -> [., [., a, b], c]   (member access sugar)

Infix notation is not read here: `p.x = 5` is written (= p.x 5).
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from shallot import SExpression
from shallot.errors import ShallotSyntaxError
from shallot.types.nil import Nil
from shallot.types.symbol import DO, DOT, QUOTE, Symbol
from shallot.types.values import is_map_key


TOKEN_RE = re.compile(
    r"[\s,]*(?:"
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>')"  # 'x
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<lbracket>\[)"  # [
    r"|(?P<rbracket>\])"  # ]
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<symbol>[^\s(){}\[\]\'",;]+)'  # fallback: symbols and numbers
    r")",
    re.DOTALL,
)

NUMBER_RE = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    '"': '"',
    "\\": "\\",
}

CLOSERS = {"lparen": "rparen", "lbrace": "rbrace", "lbracket": "rbracket"}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples, comments dropped."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if m is None or m.lastgroup is None:
            # only whitespace/commas left, or an unterminated string
            rest = source[pos:].strip().strip(",")
            if rest:
                raise ShallotSyntaxError(f"Unexpected input at {pos}: {rest[:20]!r}")
            return
        pos = m.end()
        if m.lastgroup == "comment":
            continue
        yield m.lastgroup, m.group(m.lastgroup)


def unescape(body: str) -> str:
    return re.sub(r"\\(.)", lambda m: ESCAPES.get(m.group(1), m.group(1)), body, flags=re.DOTALL)


def read_atom(token: str) -> SExpression:
    if token == "nil":
        return Nil
    if token == "true":
        return True
    if token == "false":
        return False
    if NUMBER_RE.fullmatch(token):
        return float(token)
    if token == "." or "." not in token:
        return Symbol(token)
    return read_member_path(token)


def read_member_path(token: str) -> SExpression:
    """`a.b.c` -> (. (. a b) c); every segment must be non-empty."""
    head, *fields = token.split(".")
    if not head or not all(fields):
        raise ShallotSyntaxError(f"Malformed member access {token!r}")
    expr: SExpression = read_atom(head)
    for field in fields:
        key = float(field) if NUMBER_RE.fullmatch(field) else Symbol(field)
        expr = [DOT, expr, key]
    return expr


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def _read_until(self, opener: str) -> list[SExpression]:
        closer = CLOSERS[opener]
        items = []
        while True:
            tok_type, tok_val = self.peek()
            if tok_type is None:
                raise ShallotSyntaxError(f"Unexpected end of input, missing {closer}")
            if tok_type == closer:
                self.advance()
                return items
            if tok_type in ("rparen", "rbrace", "rbracket"):
                raise ShallotSyntaxError(f"Unexpected {tok_val!r}, expected {closer}")
            items.append(self.parse_expr())

    def parse_expr(self) -> SExpression:
        """Read one expression; returns None at end of input."""
        tok_type, tok_val = self.advance()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            return read_atom(tok_val)

        if tok_type == "string":
            return unescape(tok_val[1:-1])

        if tok_type == "quote":
            if self.peek()[0] is None:
                raise ShallotSyntaxError("Nothing to quote at end of input")
            return [QUOTE, self.parse_expr()]

        if tok_type == "lparen":
            return self._read_until("lparen")

        if tok_type == "lbrace":
            return [DO, *self._read_until("lbrace")]

        if tok_type == "lbracket":
            items = self._read_until("lbracket")
            if len(items) % 2:
                raise ShallotSyntaxError("Map literal needs an even number of forms")
            result: dict = {}
            for key, value in zip(items[::2], items[1::2]):
                # Keys are read, never computed: use set-member! for those
                if not is_map_key(key):
                    raise ShallotSyntaxError(
                        f"Map literal key must be a symbol, string, number or nil, got {key!r}"
                    )
                result[key] = value
            return result

        raise ShallotSyntaxError(f"Unexpected {tok_val!r}")

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read(source: str) -> list[SExpression]:
    """Read every top-level expression in `source`."""
    return list(TokenStream(lex(source)).parse_all())
