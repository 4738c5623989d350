from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from lispy.builtin.env_builtin import register
from lispy.errors import LispySyntaxError
from lispy.evaluation.evaluator import evaluate
from lispy.reader.parser import parse
from lispy.reader.syntax_tree import SyntaxNode, read_value
from lispy.types.environment import Environment, create_environment
from lispy.types.value import Error, ErrorKind, Value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates Lispy code against one root Environment.
    Definitions persist across calls.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = create_environment()
        register(self.env)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import keeps config optional for embedders
            from lispy.config import get_prelude_path
            path = get_prelude_path()
            if path is not None:
                try:
                    code = path.read_text(encoding="utf-8")
                except FileNotFoundError:
                    logger.info("No prelude at %s", path)
                else:
                    logger.info("Loading %s", path)
                    self.eval_prelude(code, str(path))
        elif prelude:
            self.eval_prelude(prelude)

    def _evaluate(self, value: Value) -> Value:
        try:
            return evaluate(self.env, value)
        except RecursionError:
            logger.warning("Evaluation exceeded the maximum recursion depth")
            return Error("Maximum recursion depth exceeded", ErrorKind.RECURSION_LIMIT)

    def eval_tree(self, tree: SyntaxNode) -> Value:
        return self._evaluate(read_value(tree))

    def eval(self, code: str, filename: str = "<stdin>") -> Value:
        """Evaluate a whole input as one root S-Expression, as the read-loop does.

        `+ 1 2` and `(+ 1 2)` both evaluate to 3.
        Raises LispySyntaxError when the input does not parse.
        """
        return self.eval_tree(parse(code, filename))

    def load(self, code: str, filename: str = "<string>") -> list[Value]:
        """Evaluate each top-level expression separately and collect the results."""
        root = read_value(parse(code, filename))
        results: list[Value] = []
        while len(root):
            expr, _ = root.remove_at(0)
            results.append(self._evaluate(expr))
        return results

    def eval_prelude(self, code: str, filename: str = "<prelude>") -> None:
        """Evaluate prelude code, logging failures instead of raising them."""
        try:
            results = self.load(code, filename)
        except LispySyntaxError as e:
            logger.warning("Prelude syntax error: %s", e)
            return
        for result in results:
            if isinstance(result, Error):
                logger.warning("Prelude error: %s", result.message)

    def load_file(self, path: str | Path) -> list[Value]:
        path = Path(path)
        code = path.read_text(encoding="utf-8")
        logger.info("Loading %s", path)
        return self.load(code, str(path))
