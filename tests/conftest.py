import pytest

from slither.builtin.env_builtin import register
from slither.evaluation.evaluator import evaluate
from slither.interpreter import Interpreter
from slither.reader.parser import parse
from slither.reader.reader import read
from slither.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def run(env):
    """Evaluate each top-level form of `source` in `env`; return the last result."""

    def _run(source: str):
        result = None
        for form in read(parse(source)):
            result = evaluate(form, env)
        return result

    return _run


@pytest.fixture
def interp():
    """Interpreter without the standard prelude."""
    return Interpreter(prelude=False)
