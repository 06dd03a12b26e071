"""
Parses and evaluates the condition part of a fuzzy rule.

A condition is a space-delimited expression over atoms of the form
`<variable> IS <term>`, joined by the connectives AND and OR and grouped with
balanced parentheses, e.g.

    (temperature IS hot OR humidity IS high) AND pressure IS low

The text is tokenized and built into a small tree of Atom, Constant, And and Or
nodes. Connectives have no precedence over each other: an ungrouped chain is
folded strictly left to right, so `a AND b OR c` means `(a AND b) OR c`.
Evaluation uses min for AND and max for OR. Numeric literals are accepted as
operands wherever an atom is, so already-resolved degrees such as
`0.2 AND 0.8` evaluate directly.
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple, Union

from fuzzy_engine.errors import ConditionParseError

_TOKEN_RE = re.compile(r"\(|\)|[^\s()]+")

CONNECTIVES = ("AND", "OR")
KEYWORD_IS = "IS"

Resolver = Callable[[str, str], float]


@dataclass(frozen=True)
class Atom:
    """`variable IS term`, resolved to a degree at evaluation time."""

    variable: str
    term: str

    def evaluate(self, resolve: Resolver) -> float:
        return float(resolve(self.variable, self.term))


@dataclass(frozen=True)
class Constant:
    """An already-resolved degree."""

    value: float

    def evaluate(self, resolve: Resolver) -> float:
        return self.value


@dataclass(frozen=True)
class And:
    operands: Tuple["Node", ...]

    def evaluate(self, resolve: Resolver) -> float:
        return min(op.evaluate(resolve) for op in self.operands)


@dataclass(frozen=True)
class Or:
    operands: Tuple["Node", ...]

    def evaluate(self, resolve: Resolver) -> float:
        return max(op.evaluate(resolve) for op in self.operands)


Node = Union[Atom, Constant, And, Or]


def tokenize(text: str) -> List[str]:
    """Split a condition into words and single-character parentheses."""
    return _TOKEN_RE.findall(text)


def _combine(connective: str, left: Node, right: Node) -> Node:
    # Left fold: an ungrouped chain of the same connective is flattened.
    cls = And if connective == "AND" else Or
    if isinstance(left, cls):
        return cls(left.operands + (right,))
    return cls((left, right))


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = tokenize(text)
        self.pos = 0

    def _peek(self, offset: int = 0) -> Optional[str]:
        i = self.pos + offset
        return self.tokens[i] if i < len(self.tokens) else None

    def _advance(self) -> str:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def _error(self, message: str) -> ConditionParseError:
        return ConditionParseError(f"{message} in condition: {self.text!r}")

    def parse(self) -> Node:
        if not self.tokens:
            raise self._error("empty condition")
        node = self._expression()
        if self.pos != len(self.tokens):
            raise self._error(f"unexpected token {self._peek()!r}")
        return node

    def _expression(self) -> Node:
        node = self._operand()
        while self._peek() in CONNECTIVES:
            connective = self._advance()
            node = _combine(connective, node, self._operand())
        return node

    def _operand(self) -> Node:
        tok = self._peek()
        if tok is None:
            raise self._error("unexpected end")
        if tok == "(":
            self._advance()
            node = self._expression()
            if self._peek() != ")":
                raise self._error("missing ')'")
            self._advance()
            return node
        if tok == ")" or tok in CONNECTIVES or tok == KEYWORD_IS:
            raise self._error(f"unexpected token {tok!r}")

        if self._peek(1) == KEYWORD_IS:
            term = self._peek(2)
            if term is None or term in ("(", ")", KEYWORD_IS) or term in CONNECTIVES:
                raise self._error(f"missing term after '{tok} IS'")
            self.pos += 3
            return Atom(tok, term)

        try:
            value = float(tok)
        except ValueError:
            raise self._error(f"malformed operand {tok!r}") from None
        if not 0.0 <= value <= 1.0:
            raise self._error(f"degree out of range {tok!r}")
        self._advance()
        return Constant(value)


def parse_condition(text: str) -> Node:
    """Build the expression tree of a condition string."""
    return _Parser(text).parse()


def evaluate_condition(condition: Union[str, Node], resolve: Resolver) -> float:
    """
    Evaluate a condition to a single degree.

    Args:
        condition: Condition text or a tree returned by parse_condition().
        resolve: Maps (variable, term) to the fuzzified degree of that term.
    """
    node = parse_condition(condition) if isinstance(condition, str) else condition
    return node.evaluate(resolve)


def references(node: Node) -> Iterator[Tuple[str, str]]:
    """Yield every (variable, term) pair the condition refers to, in text order."""
    if isinstance(node, Atom):
        yield (node.variable, node.term)
    elif isinstance(node, (And, Or)):
        for op in node.operands:
            yield from references(op)
