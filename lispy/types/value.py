"""Runtime values for Lispy.

Every datum the evaluator handles is one of a closed set of variants:
Number, Error, Symbol, SExpr, QExpr and the two Function variants (Builtin and
Closure, see lispy.types.function). Code and data share the same
representation: the reader produces SExpr/QExpr trees of Numbers and Symbols,
and evaluation reduces them to values of the same kinds.

Ownership rules:
- A value is owned by exactly one container (an SExpr/QExpr, an Environment
  binding, or a local in the evaluator).
- Moving a child out of a container (`remove_at`, `take`) hands it to the caller.
- `copy` is deep and never shares mutable child storage with its source.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Iterator, Union

from lispy.types.function import Builtin, Closure

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def wrap_int64(n: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    n &= 0xFFFFFFFFFFFFFFFF
    return n - 2**64 if n > INT64_MAX else n


class ErrorKind(Enum):
    UNBOUND_SYMBOL = "unbound symbol"
    ARITY_MISMATCH = "arity mismatch"
    TYPE_MISMATCH = "type mismatch"
    EMPTY_LIST = "empty list"
    DIVISION_BY_ZERO = "division by zero"
    INVALID_LITERAL = "invalid literal"
    NOT_CALLABLE = "not callable"
    NON_SYMBOL_BINDING = "non-symbol binding"
    RECURSION_LIMIT = "recursion limit"


class Number:
    __slots__ = ("value",)

    def __init__(self, value: int):
        self.value = value

    def __eq__(self, other) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self):
        return f"Number({self.value})"


class Error:
    """A first-class error value. Once produced it propagates as a result."""

    __slots__ = ("message", "kind")

    def __init__(self, message: str, kind: ErrorKind):
        self.message = message
        self.kind = kind

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Error)
            and self.kind is other.kind
            and self.message == other.message
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.message))

    def __repr__(self):
        return f"Error({self.message!r}, {self.kind.name})"


class Symbol:
    __slots__ = ("name",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash
        self.name = sys.intern(name)

    def __eq__(self, other) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self):
        return f"Symbol({self.name!r})"

    def __str__(self):
        return self.name


class _Expr:
    """Shared storage for the two list variants (SExpr and QExpr)."""

    __slots__ = ("cells",)

    def __init__(self, cells: list[Value] | None = None):
        # Avoid a shared default list across instances
        self.cells: list[Value] = cells if cells is not None else []

    def append(self, item: Value):
        """Append one child and return the same container for chaining."""
        self.cells.append(item)
        return self

    def remove_at(self, index: int):
        """Extract the child at `index`, shifting later children left.

        Returns `(removed, container)`; the container is this same object.
        Raises IndexError unless 0 <= index < len(self).
        """
        if not 0 <= index < len(self.cells):
            raise IndexError(f"remove_at index {index} out of range for {len(self.cells)} cells")
        return self.cells.pop(index), self

    def take(self, index: int) -> Value:
        """Extract the child at `index` and release the rest of the container."""
        item, _ = self.remove_at(index)
        destroy(self)
        return item

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.cells)

    def __getitem__(self, index: int) -> Value:
        return self.cells[index]

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.cells == other.cells

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self.cells!r})"


class SExpr(_Expr):
    """An expression evaluated by function application."""

    __slots__ = ()


class QExpr(_Expr):
    """A quoted list: structurally an SExpr, but inert under evaluation."""

    __slots__ = ()


Value = Union[Number, Error, Symbol, SExpr, QExpr, Builtin, Closure]


def type_name(v: Value) -> str:
    """Human-readable type name used in error messages."""
    match v:
        case Number():
            return "Number"
        case Error():
            return "Error"
        case Symbol():
            return "Symbol"
        case SExpr():
            return "S-Expression"
        case QExpr():
            return "Q-Expression"
        case Builtin() | Closure():
            return "Function"
    raise TypeError(f"Not a Lispy value: {v!r}")


def copy(v: Value) -> Value:
    """Deep-copy any value. Closures get an independent copy of their environment."""
    match v:
        case Number(value=n):
            return Number(n)
        case Error(message=m, kind=k):
            return Error(m, k)
        case Symbol(name=s):
            return Symbol(s)
        case SExpr(cells=cells):
            return SExpr([copy(c) for c in cells])
        case QExpr(cells=cells):
            return QExpr([copy(c) for c in cells])
        case Builtin():
            # Builtins hold no mutable state; the reference is the value.
            return v
        case Closure(formals=formals, body=body, env=env):
            return Closure(copy(formals), copy(body), env.copy())
    raise TypeError(f"Not a Lispy value: {v!r}")


def destroy(v: Value) -> None:
    """Release everything `v` owns.

    Containers release their children recursively and closures release the
    bindings of their captured environment. The parent of that environment is
    borrowed and is left alone.
    """
    match v:
        case Number() | Error() | Symbol() | Builtin():
            return
        case SExpr(cells=cells) | QExpr(cells=cells):
            for c in cells:
                destroy(c)
            cells.clear()
        case Closure(formals=formals, body=body, env=env):
            destroy(formals)
            destroy(body)
            env.clear()
        case _:
            raise TypeError(f"Not a Lispy value: {v!r}")
