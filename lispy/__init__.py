# Lispy: a small expression language over S-Expressions and Q-Expressions.
#
# Public entry points for embedders and the read-loop:
# - create_environment(): a fresh root Environment with no bindings.
# - register_builtins(env): install the builtin catalog into a root.
# - evaluate(env, value): reduce a value to normal form.
# - render(value): canonical text form of a value.
# - Interpreter: reader + root environment bundled together.

__version__ = "0.1.0"

from lispy.types import (  # noqa: E402
    Builtin,
    Closure,
    Environment,
    Error,
    ErrorKind,
    Number,
    QExpr,
    SExpr,
    Symbol,
    Value,
    create_environment,
)
from lispy.builtin.env_builtin import register as register_builtins  # noqa: E402
from lispy.evaluation.evaluator import evaluate  # noqa: E402
from lispy.printer import render  # noqa: E402
from lispy.reader.parser import parse  # noqa: E402
from lispy.reader.syntax_tree import read_value  # noqa: E402
from lispy.interpreter import Interpreter  # noqa: E402
