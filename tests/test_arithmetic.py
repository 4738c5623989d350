import pytest
from hypothesis import given, strategies as st

from lispy.types.environment import Environment
from lispy.types.value import Error, ErrorKind, Number, SExpr, INT64_MAX, INT64_MIN
from lispy.builtin.env_builtin import register
from lispy.evaluation.evaluator import evaluate
from lispy.reader.parser import parse
from lispy.reader.syntax_tree import read_value


def eval_source(env, source):
    return evaluate(env, read_value(parse(source)))


# Hypothesis re-runs a test body many times, so build the environment per example
def _fresh_env():
    env = Environment()
    register(env)
    return env


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2 3)", 6),
        ("+ 1 2 3", 6),
        ("(- 10 3 2)", 5),
        ("(* 2 3 4)", 24),
        ("(/ 12 3)", 4),
        ("(+ (* 2 3) (- 10 4))", 12),
        ("(/ (+ 20 10) (* 2 5))", 3),
        ("(- 5)", -5),
        ("(- -10 -5)", -5),
        ("(* -2 3)", -6),
        ("(/ -7 2)", -3),
        ("(/ 7 -2)", -3),
        ("(% 7 3)", 1),
        ("(% -7 3)", -1),
        ("(% 7 -3)", 1),
        ("(^ 2 10)", 1024),
        ("(^ -2 3)", -8),
        ("(^ 2 0)", 1),
        ("(^ 2 -1)", 0),
        ("(^ 1 -5)", 1),
        ("(^ -1 -3)", -1),
        ("(+ 1 (* 2 (+ 3 4) (- 10 6)))", 57),
        ("(+ 5)", 5),
    ],
)
def test_arithmetic(env, source, expected):
    assert eval_source(env, source) == Number(expected)


@pytest.mark.parametrize("source", ["(/ 10 0)", "(/ 0 0)", "(% 3 0)", "(^ 0 -1)", "(/ 10 2 0 1)"])
def test_division_by_zero(env, source):
    result = eval_source(env, source)
    assert isinstance(result, Error)
    assert result.kind is ErrorKind.DIVISION_BY_ZERO
    assert result.message == "Division by zero"


def test_non_number_operand(env):
    result = eval_source(env, "(+ 1 {2})")
    assert result == Error("Cannot operate on non-number", ErrorKind.TYPE_MISMATCH)


def test_no_arguments_is_arity_error(env):
    plus = env.get("+")
    result = plus.fn(env, SExpr())
    assert result.kind is ErrorKind.ARITY_MISMATCH


def test_overflow_wraps_to_int64(env):
    assert eval_source(env, f"(+ {INT64_MAX} 1)") == Number(INT64_MIN)
    assert eval_source(env, f"(- {INT64_MIN} 1)") == Number(INT64_MAX)
    assert eval_source(env, f"(/ {INT64_MIN} -1)") == Number(INT64_MIN)
    assert eval_source(env, "(^ 2 64)") == Number(0)
    assert eval_source(env, "(^ 2 63)") == Number(INT64_MIN)


ints = st.integers(min_value=-(10**6), max_value=10**6)


@given(ints, ints)
def test_add_sub_mul_match_python(a, b):
    env = _fresh_env()
    assert eval_source(env, f"+ {a} {b}") == Number(a + b)
    assert eval_source(env, f"- {a} {b}") == Number(a - b)
    assert eval_source(env, f"* {a} {b}") == Number(a * b)


@given(ints, ints.filter(lambda n: n != 0))
def test_div_mod_truncate_toward_zero(a, b):
    env = _fresh_env()
    q = abs(a) // abs(b) * (1 if (a < 0) == (b < 0) else -1)
    assert eval_source(env, f"/ {a} {b}") == Number(q)
    assert eval_source(env, f"% {a} {b}") == Number(a - b * q)


@given(ints)
def test_div_by_zero_for_any_dividend(a):
    env = _fresh_env()
    assert eval_source(env, f"/ {a} 0").kind is ErrorKind.DIVISION_BY_ZERO
