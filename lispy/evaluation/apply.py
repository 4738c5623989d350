"""Application engine for Lispy.

This module centralizes function call semantics:
- Builtins are invoked directly with the caller environment and arguments.
- Closures bind formals to arguments positionally in their own environment.
  Running out of arguments is partial application and yields a new closure;
  running out of formals is an arity error; a saturated closure evaluates its
  body with the caller environment as parent.

Keeping this logic in one place keeps the evaluator and the `eval` builtin in
agreement.
"""

from __future__ import annotations

import logging
from typing import Callable

from lispy.types.environment import Environment
from lispy.types.function import Builtin, Closure
from lispy.types.value import Error, ErrorKind, SExpr, Value, copy, destroy, type_name

logger = logging.getLogger(__name__)

EvaluatorFn = Callable[[Environment, Value], Value]


def apply_closure(
    fn: Closure,
    args: SExpr,
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply a user closure to already-evaluated arguments.

    Parameters:
    - fn: The closure being applied. It is owned by the call and is mutated:
      bound formals are consumed and their values stored in `fn.env`.
    - args: The argument container, consumed left to right.
    - env: The caller environment; becomes the parent of `fn.env` for the
      duration of a saturated call.
    - evaluate_fn: Evaluator used to reduce the body.
    """
    given = len(args)
    total = len(fn.formals)

    while len(args):
        if not len(fn.formals):
            destroy(args)
            return Error(
                f"Function passed too many arguments. Got {given}, Expected {total}.",
                ErrorKind.ARITY_MISMATCH,
            )
        sym, _ = fn.formals.remove_at(0)
        val, _ = args.remove_at(0)
        fn.env.put(sym.name, val)

    if len(fn.formals):
        logger.debug("Partial application: %d of %d formals bound", given, total)
        return copy(fn)

    fn.env.parent = env
    logger.debug("Calling closure with %d argument(s)", given)
    return evaluate_fn(fn.env, SExpr(copy(fn.body).cells))


def call(env: Environment, fn: Value, args: SExpr, evaluate_fn: EvaluatorFn) -> Value:
    """Apply either a Builtin or a Closure.

    - For Builtin, invoke with the runtime env and the argument container.
    - For Closure, defer to apply_closure (handling partials and arity).
    - Otherwise, produce a NOT_CALLABLE error value.
    """
    match fn:
        case Builtin():
            return fn.fn(env, args)
        case Closure():
            return apply_closure(fn, args, env, evaluate_fn)
        case _:
            destroy(args)
            return Error(
                f"S-Expression starts with incorrect type. Got {type_name(fn)}, Expected Function.",
                ErrorKind.NOT_CALLABLE,
            )
