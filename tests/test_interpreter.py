import logging

import pytest

from shallot import errors
from shallot.__main__ import main
from shallot.interpreter import Interpreter
from shallot.types.nil import Nil
from shallot.types.values import to_str

FIB = "(defun fib (n) (if (<= n 1) n (+ (fib (- n 1)) (fib (- n 2)))))"


def test_fib(interp):
    interp.eval(FIB)
    assert interp.eval("(fib 10)") == 55


def test_points_share_cells(interp):
    interp.eval("(= p1 (new [x 10 y 10]))")
    interp.eval("(= p1.x 5)")
    assert to_str(interp.eval("p1")) == "[x 5 y 10]"
    interp.eval("(= p2 p1) (= p1.y 99)")
    assert interp.eval("p2.y") == 99


def test_struct_method_end_to_end(interp):
    interp.eval("""
        (struct Point (x y)
          (shift (dx dy) {
            (= self.x (+ self.x dx))
            (= self.y (+ self.y dy))
          }))
        (def p (Point 1 2))
        (p.shift 1 2)
    """)
    assert to_str(interp.eval("p")) == "[x 2 y 4 shift <function shift (dx dy)>]"


def test_globals_persist_between_calls(interp):
    interp.eval("(def x 1)")
    interp.eval("(= x (+ x 1))")
    assert interp.eval("x") == 2
    assert interp.has("x")
    assert not interp.has("nope")


def test_eval_of_empty_source_is_nil(interp):
    assert interp.eval("") is Nil
    assert interp.eval("; nothing") is Nil


def test_eval_propagates_errors(interp):
    with pytest.raises(errors.UnboundSymbol):
        interp.eval("(+ 1 missing)")


def test_eval_safely_reports_and_continues(interp):
    failed = []
    result = interp.eval_safely("(def a 1) (/ a 0) (def b 2) b", report=failed.append)
    assert result == 2
    assert [type(err) for err in failed] == [errors.DivisionByZero]
    assert interp.eval("a") == 1


def test_eval_safely_reports_syntax_errors(interp):
    failed = []
    assert interp.eval_safely("(def a", report=failed.append) is Nil
    assert isinstance(failed[0], errors.ShallotSyntaxError)


def test_eval_safely_logs_by_default(interp, caplog):
    with caplog.at_level(logging.WARNING, logger="shallot.interpreter"):
        interp.eval_safely("(nope)")
    assert "UnboundSymbol" in caplog.text


def test_host_callback(interp):
    interp.eval("(defun add (a b) (+ a b))")
    assert interp.call("add", 2.0, 3.0) == 5
    # Repeated calls are independent
    assert interp.call("add", 1.0, 1.0) == 2


def test_host_callback_shares_captured_state(interp):
    interp.eval("(def hits (new 0)) (defun hit () (reset! hits (+ (deref hits) 1)))")
    interp.call("hit")
    interp.call("hit")
    assert interp.eval("(deref hits)") == 2


def test_host_callback_errors(interp):
    with pytest.raises(errors.UnboundSymbol):
        interp.call("nope")
    interp.eval("(def n 1)")
    with pytest.raises(errors.NotCallable):
        interp.call("n")


def test_recursion_limit():
    interp = Interpreter(prelude=None, recursion_limit=300)
    interp.eval("(defun down (n) (if (== n 0) 0 (down (- n 1))))")
    assert interp.eval("(down 10)") == 0
    with pytest.raises(errors.RecursionLimitError):
        interp.eval("(down 100000)")
    # The interpreter stays usable afterwards
    assert interp.eval("(down 5)") == 0


def test_inline_prelude():
    interp = Interpreter(prelude="(def answer 42)")
    assert interp.eval("answer") == 42


def test_prelude_from_environment(tmp_path, monkeypatch):
    prelude = tmp_path / "prelude.shl"
    prelude.write_text("(defun sq (n) (* n n))", encoding="utf-8")
    missing = tmp_path / "missing.shl"
    monkeypatch.setenv("SHALLOT_PRELUDE_PATH", f"{missing}:{prelude}")
    interp = Interpreter()
    assert interp.eval("(sq 7)") == 49


def test_recursion_limit_from_environment(monkeypatch):
    monkeypatch.setenv("SHALLOT_RECURSION_LIMIT", "2500")
    assert Interpreter(prelude=None).recursion_limit == 2500
    monkeypatch.setenv("SHALLOT_RECURSION_LIMIT", "not-a-number")
    assert Interpreter(prelude=None).recursion_limit == 10000


# -----------------------------------------------------
# Command line
# -----------------------------------------------------

def test_cli_eval(capsys):
    assert main(["--no-prelude", "-e", "(+ 1 2)"]) == 0
    assert capsys.readouterr().out == "3\n"


def test_cli_eval_error(capsys):
    assert main(["--no-prelude", "-e", "(. (new [x 1]) y)"]) == 1
    assert "NoSuchMember" in capsys.readouterr().err


def test_cli_runs_file(tmp_path, capsys):
    src = tmp_path / "prog.shl"
    src.write_text(FIB + "\n(println (fib 10))\n", encoding="utf-8")
    assert main(["--no-prelude", str(src)]) == 0
    assert capsys.readouterr().out == "55\n"


def test_cli_missing_file(tmp_path, capsys):
    assert main(["--no-prelude", str(tmp_path / "nope.shl")]) == 1
    assert "cannot read" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [["--bogus"], ["-e"], ["a.shl", "b.shl"]])
def test_cli_usage_errors(argv, capsys):
    with pytest.raises(SystemExit) as info:
        main(argv)
    assert info.value.code == 2
    assert "usage: shallot" in capsys.readouterr().err


def test_cli_help(capsys):
    with pytest.raises(SystemExit) as info:
        main(["-h"])
    assert info.value.code == 0
    out = capsys.readouterr().out
    assert "--eval" in out
    assert "--no-prelude" in out


def test_cli_debug_flag_is_accepted(capsys):
    assert main(["--no-prelude", "--debug", "-e", "(* 6 7)"]) == 0
    assert capsys.readouterr().out.endswith("42\n")


def test_repl(monkeypatch, capsys):
    lines = iter(["(def x 2)", "", "(* x 21)", "(oops)"])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    assert main(["--no-prelude"]) == 0
    captured = capsys.readouterr()
    assert "42\n" in captured.out
    assert "Bye!" in captured.out
    assert "UnboundSymbol" in captured.err
