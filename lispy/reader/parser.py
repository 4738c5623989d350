"""
  Lispy Reader: Lexer and Parser

Grammar:

    number : /-?[0-9]+/ ;
    symbol : /[a-zA-Z0-9_+\\-*\\/\\\\=<>!&%^]+/ ;
    sexpr  : '(' <expr>* ')' ;
    qexpr  : '{' <expr>* '}' ;
    expr   : <number> | <symbol> | <sexpr> | <qexpr> ;
    lispy  : /^/ <expr>* /$/ ;

- Emits a generic SyntaxNode tree (see lispy.reader.syntax_tree), not values.
- A number is tried before a symbol, so `1x` reads as the number 1 followed by
  the symbol x, and a lone `-` is a symbol.
- Whitespace and `;` line comments are skipped.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional

from lispy.errors import LispySyntaxError
from lispy.reader.syntax_tree import SyntaxNode

logger = logging.getLogger(__name__)


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<number>-?[0-9]+)"  # integer, tried before symbols
    r"|(?P<symbol>[a-zA-Z0-9_+\-*/\\=<>!&%^]+)"
)

WHITESPACE_RE = re.compile(r"\s+")

CLOSERS = {"lparen": ("rparen", "sexpr", ")"), "lbrace": ("rbrace", "qexpr", "}")}


def _line_col(source: str, pos: int) -> tuple[int, int]:
    line = source.count("\n", 0, pos) + 1
    return line, pos - (source.rfind("\n", 0, pos) + 1) + 1


def lex(source: str, filename: str = "<stdin>") -> Iterator[tuple[str, str, int]]:
    """Token generator: yields (token_type, token_value, position) triples."""
    pos = 0
    n = len(source)
    while pos < n:
        ws = WHITESPACE_RE.match(source, pos)
        if ws:
            pos = ws.end()
            continue
        m = TOKEN_RE.match(source, pos)
        if not m:
            line, col = _line_col(source, pos)
            raise LispySyntaxError(f"unexpected character {source[pos]!r}", filename, line, col)
        pos = m.end()
        if m.lastgroup == "comment":
            continue
        yield m.lastgroup, m.group(), m.start()


class TokenStream:
    def __init__(self, source: str, filename: str = "<stdin>"):
        self.source = source
        self.filename = filename
        self.tokens = lex(source, filename)
        self.buffer: list[tuple[str, str, int]] = []

    def peek(self) -> tuple[Optional[str], Optional[str], int]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None, len(self.source)
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str], int]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None, len(self.source)))

    def error(self, message: str, pos: int) -> LispySyntaxError:
        line, col = _line_col(self.source, pos)
        return LispySyntaxError(message, self.filename, line, col)

    def node(self, tag: str, contents: str, pos: int, children=None) -> SyntaxNode:
        line, col = _line_col(self.source, pos)
        return SyntaxNode(tag, contents, children or [], line, col)

    def parse_expr(self) -> SyntaxNode:
        tok_type, tok_val, pos = self.advance()
        if tok_type is None:
            raise self.error("unexpected end of input", pos)

        if tok_type in ("number", "symbol"):
            return self.node(f"expr|{tok_type}|regex", tok_val, pos)

        if tok_type in CLOSERS:
            closer, rule, close_char = CLOSERS[tok_type]
            children = [self.node("char", tok_val, pos)]
            while True:
                nxt_type, nxt_val, nxt_pos = self.peek()
                if nxt_type is None:
                    raise self.error(f"expected '{close_char}' before end of input", nxt_pos)
                if nxt_type == closer:
                    self.advance()
                    children.append(self.node("char", nxt_val, nxt_pos))
                    break
                if nxt_type in ("rparen", "rbrace"):
                    raise self.error(f"expected '{close_char}', got '{nxt_val}'", nxt_pos)
                children.append(self.parse_expr())
            return self.node(f"expr|{rule}|>", "", pos, children)

        raise self.error(f"unexpected '{tok_val}'", pos)

    def parse_all(self) -> Iterator[SyntaxNode]:
        while self.peek()[0] is not None:
            yield self.parse_expr()


def parse(source: str, filename: str = "<stdin>") -> SyntaxNode:
    """Parse a whole input into a root node tagged `>`."""
    stream = TokenStream(source, filename)
    children = [SyntaxNode("regex")]
    children.extend(stream.parse_all())
    children.append(SyntaxNode("regex"))
    root = SyntaxNode(">", "", children)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Parsed %s:\n%s", filename, root.pretty())
    return root
