import pytest

from lispy.types.environment import Environment
from lispy.builtin.env_builtin import register
from lispy.evaluation.evaluator import evaluate
from lispy.reader.parser import parse
from lispy.reader.syntax_tree import read_value
from lispy.printer import render


@pytest.fixture
def env():
    """Fresh root environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def run(env):
    """Evaluate one line of source as the read-loop does and render the result."""
    def _run(source: str) -> str:
        return render(evaluate(env, read_value(parse(source))))
    return _run
