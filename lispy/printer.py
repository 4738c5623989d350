"""Canonical text form of Lispy values."""

from __future__ import annotations

from io import StringIO

from lispy.types.function import Builtin, Closure
from lispy.types.value import Error, Number, QExpr, SExpr, Symbol, Value


def _write_expr(buffer: StringIO, cells: list[Value], open_: str, close: str) -> None:
    buffer.write(open_)
    buffer.write(" ".join(render(c) for c in cells))
    buffer.write(close)


def render(v: Value) -> str:
    """Render `v` the way the read-loop prints it."""
    with StringIO() as buffer:
        match v:
            case Number(value=n):
                buffer.write(str(n))
            case Error(message=m):
                buffer.write(f"Error: {m}")
            case Symbol(name=s):
                buffer.write(s)
            case SExpr(cells=cells):
                _write_expr(buffer, cells, "(", ")")
            case QExpr(cells=cells):
                _write_expr(buffer, cells, "{", "}")
            case Builtin(name=name):
                buffer.write(name or "<builtin>")
            case Closure(formals=formals, body=body):
                buffer.write("(\\ ")
                buffer.write(render(formals))
                buffer.write(" ")
                buffer.write(render(body))
                buffer.write(")")
            case _:
                raise TypeError(f"Not a Lispy value: {v!r}")
        return buffer.getvalue()
