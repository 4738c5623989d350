import pytest

from lispy.builtin.env_builtin import print_env
from lispy.printer import render
from lispy.types.environment import Environment
from lispy.types.function import Builtin, Closure
from lispy.types.value import Error, ErrorKind, Number, QExpr, SExpr, Symbol


@pytest.mark.parametrize(
    "value,text",
    [
        (Number(-12), "-12"),
        (Error("Division by zero", ErrorKind.DIVISION_BY_ZERO), "Error: Division by zero"),
        (Symbol("head"), "head"),
        (SExpr(), "()"),
        (QExpr(), "{}"),
        (SExpr([Symbol("+"), Number(1), QExpr([Number(2), Number(3)])]), "(+ 1 {2 3})"),
        (Closure(QExpr([Symbol("x")]), QExpr([Symbol("x")]), Environment()), "(\\ {x} {x})"),
        (Builtin("join", lambda env, args: args), "join"),
        (Builtin("", lambda env, args: args), "<builtin>"),
    ],
)
def test_render(value, text):
    assert render(value) == text


def test_builtin_keeps_name_when_rebound(run):
    run("def {first} head")
    assert run("first") == "head"
    assert run("first {4 5}") == "{4}"


def test_print_env_lists_current_frame(capsys):
    env = Environment()
    env.put("x", Number(1))
    env.put("xs", QExpr([Number(2)]))
    ret = print_env(env, SExpr())
    out = capsys.readouterr().out
    assert out == "x: 1\nxs: {2}\n"
    assert ret == SExpr()


def test_print_env_builtin_from_source(run, capsys):
    run("def {answer} 42")
    assert run("printEnv 0") == "()"
    out = capsys.readouterr().out
    assert "answer: 42\n" in out
    assert "+: +\n" in out
