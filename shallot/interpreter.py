from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Callable, Iterator, Literal

from shallot import SExpression, LispValue
from shallot import config
from shallot.builtin.env_builtin import register
from shallot.errors import RecursionLimitError, ShallotError
from shallot.evaluation.apply import apply
from shallot.evaluation.evaluator import evaluate
from shallot.reader.parser import read
from shallot.types.environment import Environment
from shallot.types.nil import Nil
from shallot.types.symbol import Symbol

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates Shallot code against one global Environment that
    persists across calls. This is the boundary where failures may be
    reported and evaluation resumed with the next top-level form.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        recursion_limit: int | None = None,
    ):
        self.env: Environment = Environment()
        register(self.env)
        self.recursion_limit: int = recursion_limit or config.get_recursion_limit()

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            for path in config.get_prelude_files():
                if not path.is_file():
                    logger.info("prelude %s not found, skipping", path)
                    continue
                logger.info("loading prelude %s", path)
                self.eval_prelude(path.read_text(encoding="utf-8"))
        elif prelude:
            self.eval_prelude(prelude)

    @contextmanager
    def _recursion_guard(self) -> Iterator[None]:
        previous = sys.getrecursionlimit()
        if previous < self.recursion_limit:
            sys.setrecursionlimit(self.recursion_limit)
        try:
            yield
        except RecursionError as exc:
            raise RecursionLimitError(
                f"Maximum evaluation depth exceeded (recursion limit {sys.getrecursionlimit()})"
            ) from exc
        finally:
            sys.setrecursionlimit(previous)

    def eval_expr(self, expr: SExpression) -> LispValue:
        """Evaluate one canonical expression tree in the global environment."""
        logger.debug("eval %r", expr)
        with self._recursion_guard():
            return evaluate(expr, self.env)

    def eval_prelude(self, code: str) -> None:
        for expr in read(code):
            self.eval_expr(expr)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`; the value of the last one is returned."""
        result: LispValue = Nil
        for expr in read(code):
            result = self.eval_expr(expr)
        return result

    def eval_safely(
        self,
        code: str,
        report: Callable[[ShallotError], None] | None = None,
    ) -> LispValue:
        """Like `eval`, but a failing top-level form is reported and skipped.

        Returns the value of the last form that succeeded (nil if none did).
        """
        report = report or self._log_failure
        try:
            forms = read(code)
        except ShallotError as err:
            report(err)
            return Nil
        result: LispValue = Nil
        for expr in forms:
            try:
                result = self.eval_expr(expr)
            except ShallotError as err:
                report(err)
        return result

    def call(self, name: str, *args: LispValue) -> LispValue:
        """Host callback boundary: apply the global `name` to `args`.

        Repeated calls are independent; they share only the state the
        function captured.
        """
        fn = self.env.lookup(Symbol(name))
        with self._recursion_guard():
            return apply(fn, list(args), self.env, evaluate)

    def has(self, name: str) -> bool:
        return self.env.find(Symbol(name)) is not None

    @staticmethod
    def _log_failure(err: ShallotError) -> None:
        logger.warning("%s", err.report())
