"""Shallot CLI: evaluate an expression, run a file, or start a REPL."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from shallot import __version__, config
from shallot.errors import ShallotError
from shallot.interpreter import Interpreter
from shallot.types.values import to_str


def _report(err: ShallotError) -> None:
    print(err.report(), file=sys.stderr)


def run_eval(interp: Interpreter, code: str) -> int:
    try:
        result = interp.eval(code)
    except ShallotError as err:
        _report(err)
        return 1
    print(to_str(result, readable=True))
    return 0


def run_file(interp: Interpreter, file_path: str) -> int:
    try:
        source = Path(file_path).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"shallot: cannot read {file_path}: {exc.strerror}", file=sys.stderr)
        return 1
    try:
        interp.eval(source)
    except ShallotError as err:
        _report(err)
        return 1
    return 0


def run_repl(interp: Interpreter) -> int:
    print(f"Shallot REPL v{__version__}")
    print("Type expressions to evaluate. Press Ctrl+D to exit.")
    while True:
        try:
            line = input("λ> ")
        except EOFError:
            print("Bye!")
            return 0
        except KeyboardInterrupt:
            print("^C")
            continue
        if not line.strip():
            continue
        failed: list[ShallotError] = []
        result = interp.eval_safely(line, report=failed.append)
        for err in failed:
            _report(err)
        if not failed:
            print(to_str(result, readable=True))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shallot",
        description="Run a Shallot program, or start an interactive REPL when no FILE is given.",
    )
    parser.add_argument("file", nargs="?", metavar="FILE", help="Source file to run")
    parser.add_argument("-e", "--eval", dest="expr", metavar="EXPR",
                        help="Evaluate EXPR and print the result")
    parser.add_argument("-d", "--debug", action="store_true",
                        help="Log every evaluated form")
    parser.add_argument("--no-prelude", action="store_true",
                        help="Do not load SHALLOT_PRELUDE_PATH")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else config.get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        interp = Interpreter(prelude=None if args.no_prelude else 'auto')
    except ShallotError as err:
        _report(err)
        return 1

    if args.expr is not None:
        return run_eval(interp, args.expr)
    if args.file is not None:
        return run_file(interp, args.file)
    return run_repl(interp)


if __name__ == "__main__":
    sys.exit(main())
