import pytest

from lispy.types.value import Error, ErrorKind, QExpr, Number, SExpr
from lispy.evaluation.evaluator import evaluate
from lispy.reader.parser import parse
from lispy.reader.syntax_tree import read_value


def eval_source(env, source):
    return evaluate(env, read_value(parse(source)))


@pytest.mark.parametrize(
    "source,expected",
    [
        ("list 1 2 3", "{1 2 3}"),
        ("list", "list"),
        ("(list 1 (+ 1 1) {3})", "{1 2 {3}}"),
        ("head {1 2 3}", "{1}"),
        ("head {{1 2} 3}", "{{1 2}}"),
        ("tail {1 2 3}", "{2 3}"),
        ("tail {1}", "{}"),
        ("init {1 2 3}", "{1 2}"),
        ("init {1}", "{}"),
        ("join {1 2} {3 4}", "{1 2 3 4}"),
        ("join {1} {} {2 3} {4}", "{1 2 3 4}"),
        ("join {1 2}", "{1 2}"),
        ("cons 1 {2 3}", "{1 2 3}"),
        ("cons 1 {}", "{1}"),
        ("len {1 2 3}", "3"),
        ("len {1 {2 3} 4}", "4"),
        ("len {{1 {2 {3}}} {}}", "3"),
        ("eval {+ 1 2}", "3"),
        ("eval {head {1 2}}", "{1}"),
        ("eval (tail {tail tail {5 6 7}})", "{6 7}"),
        ("eval {}", "()"),
        ("head (list 1 2 3)", "{1}"),
    ],
)
def test_list_builtins(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source,kind",
    [
        ("head {}", ErrorKind.EMPTY_LIST),
        ("tail {}", ErrorKind.EMPTY_LIST),
        ("init {}", ErrorKind.EMPTY_LIST),
        ("len {}", ErrorKind.EMPTY_LIST),
        ("head {1} {2}", ErrorKind.ARITY_MISMATCH),
        ("tail {1} {2}", ErrorKind.ARITY_MISMATCH),
        ("len {1} {2}", ErrorKind.ARITY_MISMATCH),
        ("head 1", ErrorKind.TYPE_MISMATCH),
        ("tail (list)", ErrorKind.TYPE_MISMATCH),  # (list) unwraps to the builtin itself
        ("init 5", ErrorKind.TYPE_MISMATCH),
        ("len 5", ErrorKind.TYPE_MISMATCH),
        ("join {1} 2", ErrorKind.TYPE_MISMATCH),
        ("cons {1} {2}", ErrorKind.TYPE_MISMATCH),
        ("cons 1 2", ErrorKind.TYPE_MISMATCH),
        ("cons 1 {2} {3}", ErrorKind.ARITY_MISMATCH),
        ("eval 5", ErrorKind.TYPE_MISMATCH),
        ("eval {1} {2}", ErrorKind.ARITY_MISMATCH),
    ],
)
def test_list_builtin_errors(env, source, kind):
    result = eval_source(env, source)
    assert isinstance(result, Error)
    assert result.kind is kind


def test_error_messages_name_the_function(run):
    assert run("head {}") == "Error: Function 'head' passed {} for argument 0."
    assert run("tail {1} {2}") == (
        "Error: Function 'tail' passed incorrect number of arguments. Got 2, Expected 1."
    )
    assert run("eval 5") == (
        "Error: Function 'eval' passed incorrect type for argument 0. Got Number, Expected Q-Expression."
    )


def test_list_reuses_the_argument_cells(env):
    lst = env.get("list")
    args = SExpr([Number(1), Number(2)])
    cells = args.cells
    result = lst.fn(env, args)
    assert isinstance(result, QExpr)
    assert result.cells is cells


def test_join_is_associative(run):
    assert run("join (join {1} {2 3}) {4}") == run("join {1} (join {2 3} {4})")


def test_eval_uses_current_environment(env, run):
    run("def {x} 10")
    assert run("eval {+ x 1}") == "11"
    assert run("eval {x}") == "10"


def test_failed_builtin_leaves_environment_unchanged(env, run):
    run("def {xs} {1 2 3}")
    assert run("head xs 1").startswith("Error:")
    assert run("xs") == "{1 2 3}"
