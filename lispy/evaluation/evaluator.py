"""Core evaluator for the Lispy interpreter.

Evaluation is a plain recursive reduction over values; there is no trampoline,
so deep user recursion is bounded by Python's recursion limit.
"""

from __future__ import annotations

from lispy.types.environment import Environment
from lispy.types.function import Builtin, Closure
from lispy.types.value import Error, Number, QExpr, SExpr, Symbol, Value, destroy
from lispy.evaluation.apply import call


def evaluate(env: Environment, v: Value) -> Value:
    """Reduce `v` to its normal form in `env`.

    Numbers, errors, functions and q-expressions evaluate to themselves,
    symbols are looked up, and s-expressions are applied.
    """
    match v:
        case Symbol(name=name):
            return env.get(name)
        case SExpr():
            return evaluate_sexpr(env, v)
        case Number() | Error() | QExpr() | Builtin() | Closure():
            return v
    raise TypeError(f"Not a Lispy value: {v!r}")


def evaluate_sexpr(env: Environment, v: SExpr) -> Value:
    # Every child is evaluated before any error is inspected.
    v.cells[:] = [evaluate(env, c) for c in v.cells]

    for i, c in enumerate(v.cells):
        if isinstance(c, Error):
            return v.take(i)

    if not v.cells:
        return v
    if len(v.cells) == 1:
        return v.take(0)

    fn, args = v.remove_at(0)
    result = call(env, fn, args, evaluate)
    destroy(fn)
    return result
