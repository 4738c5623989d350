"""Function values: named builtins and user closures built by `\\`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from lispy.types.environment import Environment
    from lispy.types.value import QExpr, SExpr, Value

BuiltinFn = Callable[["Environment", "SExpr"], "Value"]


class Builtin:
    """A primitive implemented in Python.

    The canonical name is fixed at registration time so the value prints the
    same way no matter which symbol it is later bound to.
    """

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: BuiltinFn):
        self.name = name
        self.fn = fn

    def __eq__(self, other) -> bool:
        return isinstance(other, Builtin) and self.fn is other.fn

    def __hash__(self) -> int:
        return hash(self.fn)

    def __repr__(self):
        return f"Builtin({self.name!r})"


class Closure:
    """A user-defined function with formals, a body and a private environment.

    `formals` is a QExpr of Symbols and `body` a QExpr. Arguments bound by a
    partial application live in `env` until the closure is saturated.
    """

    __slots__ = ("formals", "body", "env")

    def __init__(self, formals: QExpr, body: QExpr, env: Environment):
        self.formals = formals
        self.body = body
        self.env = env

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Closure)
            and self.formals == other.formals
            and self.body == other.body
            and self.env.vars == other.env.vars
        )

    __hash__ = None

    def __repr__(self):
        return f"Closure({self.formals!r}, {self.body!r})"
