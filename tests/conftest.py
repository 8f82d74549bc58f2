import pytest

from shallot.builtin.env_builtin import register
from shallot.evaluation.evaluator import evaluate
from shallot.interpreter import Interpreter
from shallot.reader.parser import read
from shallot.types.environment import Environment


@pytest.fixture
def env():
    """Fresh environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def interp():
    """Interpreter without any prelude so tests do not depend on the host."""
    return Interpreter(prelude=None)


@pytest.fixture
def run(env):
    """Read and evaluate source in `env`, returning the last value."""
    def _run(source):
        result = None
        for expr in read(source):
            result = evaluate(expr, env)
        return result
    return _run
