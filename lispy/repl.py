"""Interactive read-loop for Lispy.

Each input line is read as one root S-Expression, evaluated against the
session's Interpreter and printed. Syntax errors are reported and the loop
continues; EOF or Ctrl-C ends the session.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, TextIO

from lispy import __version__
from lispy.config import get_prompt, setup_logging
from lispy.errors import LispySyntaxError
from lispy.interpreter import Interpreter
from lispy.printer import render
from lispy.types.value import Error

logger = logging.getLogger(__name__)


class Repl:
    def __init__(self, interp: Interpreter, output: Optional[TextIO] = None, prompt: Optional[str] = None):
        self.interp = interp
        self.output = output if output is not None else sys.stdout
        self.prompt = prompt if prompt is not None else get_prompt()

    def banner(self) -> None:
        print(f"Lispy Version {__version__}", file=self.output)
        print("Press Ctrl+c to Exit\n", file=self.output)

    def start(self) -> None:
        """Read, evaluate and print until EOF or interrupt."""
        while True:
            try:
                line = input(self.prompt)
            except (KeyboardInterrupt, EOFError):
                print(file=self.output)
                break
            self.process(line)

    def process(self, line: str) -> None:
        if not line.strip():
            return
        try:
            result = self.interp.eval(line)
        except LispySyntaxError as e:
            logger.debug("Rejected input %r", line)
            print(e, file=self.output)
            return
        print(render(result), file=self.output)

    def run_file(self, path: str) -> bool:
        """Load a source file; print its errors. Returns False if any occurred."""
        try:
            results = self.interp.load_file(path)
        except (OSError, LispySyntaxError) as e:
            print(e, file=self.output)
            return False
        errors = [r for r in results if isinstance(r, Error)]
        for err in errors:
            print(render(err), file=self.output)
        return not errors


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="lispy", description="Lispy interactive interpreter")
    parser.add_argument("files", nargs="*", help="source files to load before the prompt")
    parser.add_argument("-q", "--quiet", action="store_true", help="do not print the banner")
    parser.add_argument("--log-level", help="override LISPY_LOG_LEVEL")
    parser.add_argument("--no-repl", action="store_true", help="exit after loading files")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    repl = Repl(Interpreter())

    ok = all([repl.run_file(path) for path in args.files])
    if args.no_repl:
        return 0 if ok else 1

    if not args.quiet:
        repl.banner()
    repl.start()
    return 0
