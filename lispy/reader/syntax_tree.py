"""Generic syntax tree produced by the reader, and its conversion to values.

A SyntaxNode carries a tag, the literal text of leaf tokens and ordered
children. Tags follow the grammar-rule naming of a parser-combinator AST:

    >                  the whole input (root)
    expr|number|regex  integer literal
    expr|symbol|regex  identifier
    expr|sexpr|>       ( ... )
    expr|qexpr|>       { ... }
    char               punctuation: ( ) { }
    regex              start/end-of-input markers

`read_value` recognizes nodes by substring of the tag so producers may use
shorter or longer tag paths.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lispy.types.value import (
    INT64_MAX,
    INT64_MIN,
    Error,
    ErrorKind,
    Number,
    QExpr,
    SExpr,
    Symbol,
    Value,
)

PUNCTUATION = frozenset("(){}")


@dataclass
class SyntaxNode:
    tag: str
    contents: str = ""
    children: list[SyntaxNode] = field(default_factory=list)
    line: int = 1
    column: int = 1

    def pretty(self, depth: int = 0) -> str:
        """Indented dump of the tree, one node per line."""
        pad = "  " * depth
        head = f"{pad}{self.tag}" + (f" '{self.contents}'" if self.contents else "")
        return "\n".join([head, *(c.pretty(depth + 1) for c in self.children)])


def read_number(node: SyntaxNode) -> Value:
    try:
        n = int(node.contents, 10)
    except ValueError:
        return Error("invalid number", ErrorKind.INVALID_LITERAL)
    if not INT64_MIN <= n <= INT64_MAX:
        return Error("invalid number", ErrorKind.INVALID_LITERAL)
    return Number(n)


def read_value(node: SyntaxNode) -> Value:
    """Convert a syntax tree into an unevaluated value."""
    if "number" in node.tag:
        return read_number(node)
    if "symbol" in node.tag:
        return Symbol(node.contents)

    if node.tag == ">" or "sexpr" in node.tag:
        v = SExpr()
    elif "qexpr" in node.tag:
        v = QExpr()
    else:
        return Error(f"unknown syntax node '{node.tag}'", ErrorKind.INVALID_LITERAL)

    for child in node.children:
        if child.contents in PUNCTUATION and child.tag == "char":
            continue
        if child.tag == "regex":
            continue
        v.append(read_value(child))
    return v
