"""Built-in functions for the Lispy runtime environment.

This module defines arithmetic, list processing, evaluation, lambda
construction and the binding forms, plus the registration helper that installs
them into a root environment.

Every builtin receives the caller environment and an SExpr of already
evaluated arguments, which it owns. Arity and type checks run before any work;
a failed check releases the arguments and returns an Error value.
"""
from __future__ import annotations

from typing import Callable

from lispy.types.environment import Environment
from lispy.types.function import Builtin, BuiltinFn, Closure
from lispy.types.value import (
    Error,
    ErrorKind,
    Number,
    QExpr,
    SExpr,
    Symbol,
    Value,
    destroy,
    type_name,
    wrap_int64,
)
from lispy.evaluation.evaluator import evaluate
from lispy.printer import render


# -------------------------------
# Argument checks
# -------------------------------
_TYPE_NAMES = {Number: "Number", Symbol: "Symbol", QExpr: "Q-Expression"}


def _fail(args: SExpr, message: str, kind: ErrorKind) -> Error:
    destroy(args)
    return Error(message, kind)


def _check_count(name: str, args: SExpr, expected: int) -> Error | None:
    if len(args) != expected:
        return _fail(
            args,
            f"Function '{name}' passed incorrect number of arguments. "
            f"Got {len(args)}, Expected {expected}.",
            ErrorKind.ARITY_MISMATCH,
        )
    return None


def _check_type(name: str, args: SExpr, index: int, expected: type) -> Error | None:
    arg = args[index]
    if not isinstance(arg, expected):
        return _fail(
            args,
            f"Function '{name}' passed incorrect type for argument {index}. "
            f"Got {type_name(arg)}, Expected {_TYPE_NAMES[expected]}.",
            ErrorKind.TYPE_MISMATCH,
        )
    return None


def _check_not_empty(name: str, args: SExpr, index: int) -> Error | None:
    if not len(args[index]):
        return _fail(
            args,
            f"Function '{name}' passed {{}} for argument {index}.",
            ErrorKind.EMPTY_LIST,
        )
    return None


def _check_single_list(name: str, args: SExpr) -> Error | None:
    """One non-empty Q-Expression argument, as head/tail/init/len expect."""
    return (
        _check_count(name, args, 1)
        or _check_type(name, args, 0, QExpr)
        or _check_not_empty(name, args, 0)
    )


# -------------------------------
# Arithmetic
# -------------------------------
def _trunc_div(x: int, y: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q


def _power(x: int, y: int) -> int | None:
    """x ** y wrapped to int64; None when the result is undefined (0 ** -n)."""
    if y >= 0:
        return pow(x, y, 2**64)
    if x == 0:
        return None
    if x == 1:
        return 1
    if x == -1:
        return 1 if y % 2 == 0 else -1
    return 0


def builtin_op(env: Environment, args: SExpr, op: str) -> Value:
    """Left-fold `op` over numeric arguments; unary `-` negates."""
    if not len(args):
        return _fail(
            args,
            f"Function '{op}' passed incorrect number of arguments. Got 0, Expected 1.",
            ErrorKind.ARITY_MISMATCH,
        )
    for arg in args:
        if not isinstance(arg, Number):
            return _fail(args, "Cannot operate on non-number", ErrorKind.TYPE_MISMATCH)

    x, _ = args.remove_at(0)
    result = x.value
    if op == "-" and not len(args):
        result = -result

    while len(args):
        y, _ = args.remove_at(0)
        if op == "+":
            result += y.value
        elif op == "-":
            result -= y.value
        elif op == "*":
            result *= y.value
        elif op in ("/", "%"):
            if y.value == 0:
                return _fail(args, "Division by zero", ErrorKind.DIVISION_BY_ZERO)
            q = _trunc_div(result, y.value)
            result = q if op == "/" else result - y.value * q
        elif op == "^":
            p = _power(result, y.value)
            if p is None:
                return _fail(args, "Division by zero", ErrorKind.DIVISION_BY_ZERO)
            result = p
        result = wrap_int64(result)

    return Number(wrap_int64(result))


def add(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "+")


def sub(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "-")


def mul(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "*")


def div(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "/")


def mod(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "%")


def power(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "^")


# -------------------------------
# Lists
# -------------------------------
def list_builtin(env: Environment, args: SExpr) -> Value:
    """Reinterpret the argument container as a Q-Expression."""
    return QExpr(args.cells)


def head(env: Environment, args: SExpr) -> Value:
    """Return a Q-Expression holding only the first element."""
    if (err := _check_single_list("head", args)) is not None:
        return err
    q = args.take(0)
    while len(q) > 1:
        destroy(q.remove_at(1)[0])
    return q


def tail(env: Environment, args: SExpr) -> Value:
    """Return the Q-Expression without its first element."""
    if (err := _check_single_list("tail", args)) is not None:
        return err
    q = args.take(0)
    destroy(q.remove_at(0)[0])
    return q


def init(env: Environment, args: SExpr) -> Value:
    """Return the Q-Expression without its last element."""
    if (err := _check_single_list("init", args)) is not None:
        return err
    q = args.take(0)
    destroy(q.remove_at(len(q) - 1)[0])
    return q


def join(env: Environment, args: SExpr) -> Value:
    """Concatenate Q-Expressions in argument order."""
    if not len(args):
        return _fail(
            args,
            "Function 'join' passed incorrect number of arguments. Got 0, Expected 1.",
            ErrorKind.ARITY_MISMATCH,
        )
    for i in range(len(args)):
        if (err := _check_type("join", args, i, QExpr)) is not None:
            return err

    x, _ = args.remove_at(0)
    while len(args):
        y, _ = args.remove_at(0)
        x.cells.extend(y.cells)
    return x


def cons(env: Environment, args: SExpr) -> Value:
    """Prepend a Number to a Q-Expression."""
    if (err := (
        _check_count("cons", args, 2)
        or _check_type("cons", args, 0, Number)
        or _check_type("cons", args, 1, QExpr)
    )) is not None:
        return err
    x, _ = args.remove_at(0)
    q = args.take(0)
    q.cells.insert(0, x)
    return q


def _count_leaves(v: Value) -> int:
    if isinstance(v, (SExpr, QExpr)):
        return sum(_count_leaves(c) for c in v)
    return 1


def length(env: Environment, args: SExpr) -> Value:
    """Count leaf values; nested lists contribute their own leaves."""
    if (err := _check_single_list("len", args)) is not None:
        return err
    q = args.take(0)
    n = _count_leaves(q)
    destroy(q)
    return Number(n)


# -------------------------------
# Evaluation and functions
# -------------------------------
def eval_builtin(env: Environment, args: SExpr) -> Value:
    """Evaluate a Q-Expression as an S-Expression in the current environment."""
    if (err := (
        _check_count("eval", args, 1)
        or _check_type("eval", args, 0, QExpr)
    )) is not None:
        return err
    q = args.take(0)
    return evaluate(env, SExpr(q.cells))


def _check_symbols(name: str, args: SExpr, syms: QExpr) -> Error | None:
    for s in syms:
        if not isinstance(s, Symbol):
            return _fail(
                args,
                f"Function '{name}' cannot define non-symbol. Got {type_name(s)}, Expected Symbol.",
                ErrorKind.NON_SYMBOL_BINDING,
            )
    return None


def lambda_builtin(env: Environment, args: SExpr) -> Value:
    """(\\ {formals} {body}) builds a closure with a fresh private environment."""
    if (err := (
        _check_count("\\", args, 2)
        or _check_type("\\", args, 0, QExpr)
        or _check_type("\\", args, 1, QExpr)
        or _check_symbols("\\", args, args[0])
    )) is not None:
        return err
    formals, _ = args.remove_at(0)
    body = args.take(0)
    return Closure(formals, body, Environment())


def _bind(env: Environment, args: SExpr, name: str, store: Callable[[str, Value], None]) -> Value:
    """Shared implementation of `def` and `=`; `store` writes one binding."""
    if not len(args):
        return _fail(
            args,
            f"Function '{name}' passed incorrect number of arguments. Got 0, Expected 1.",
            ErrorKind.ARITY_MISMATCH,
        )
    if (err := (
        _check_type(name, args, 0, QExpr)
        or _check_symbols(name, args, args[0])
    )) is not None:
        return err
    syms = args[0]
    if len(syms) != len(args) - 1:
        return _fail(
            args,
            f"Function '{name}' passed too many arguments for symbols. "
            f"Got {len(args) - 1}, Expected {len(syms)}.",
            ErrorKind.ARITY_MISMATCH,
        )

    for sym, value in zip(syms, args.cells[1:]):
        store(sym.name, value)
    destroy(args)
    return SExpr()


def def_builtin(env: Environment, args: SExpr) -> Value:
    return _bind(env, args, "def", env.define)


def put_builtin(env: Environment, args: SExpr) -> Value:
    return _bind(env, args, "=", env.put)


def print_env(env: Environment, args: SExpr) -> Value:
    """Print every binding of the current frame; returns ()."""
    destroy(args)
    for name, value in env.vars.items():
        print(f"{name}: {render(value)}")
    return SExpr()


BUILTINS: dict[str, BuiltinFn] = {
    "list": list_builtin,
    "head": head,
    "tail": tail,
    "init": init,
    "join": join,
    "cons": cons,
    "len": length,
    "eval": eval_builtin,
    "\\": lambda_builtin,
    "def": def_builtin,
    "=": put_builtin,
    "printEnv": print_env,
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "%": mod,
    "^": power,
}


def register(env: Environment) -> None:
    """Register all builtin functions into the given (root) environment."""
    env.update({name: Builtin(name, fn) for name, fn in BUILTINS.items()})
