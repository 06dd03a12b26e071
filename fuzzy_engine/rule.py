"""
Fuzzy rules of the form `IF <condition> THEN <variable> IS <term>`.

A rule is validated when it is created and is never modified afterwards. It
refers to variables and terms by name only; the engine resolves those names
against its registry before inference.
"""

import re
from typing import List, Optional

from fuzzy_engine.condition import Node, parse_condition
from fuzzy_engine.errors import ConditionParseError, RuleValidationError

_CONDITION_TOKENS = ("IS", "AND", "OR")
_CONDITION_RE = re.compile(r"\bIF\s+(.*?)\s+THEN\s", re.DOTALL)


def validate_rule_text(text: str) -> str:
    """
    Checks the structure of a rule statement.

    The checks run in order and the first failure raises RuleValidationError:
    parenthesis balance, leading IF, THEN fourth from the end, IS second from
    the end, and only IS/AND/OR at the connective positions of the condition.

    Returns:
        str: The statement, unchanged.
    """
    depth = 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise RuleValidationError(f"missing left parenthesis: {text}")
    if depth > 0:
        raise RuleValidationError(f"missing right parenthesis: {text}")

    tokens = text.replace("(", "").replace(")", "").split()

    if not tokens or tokens[0] != "IF":
        raise RuleValidationError(f"'IF' not found: {text}")
    if len(tokens) < 4 or tokens[-4] != "THEN":
        raise RuleValidationError(f"'THEN' not found: {text}")
    if tokens[-2] != "IS":
        raise RuleValidationError(f"'IS' not found: {text}")

    for i in range(2, len(tokens) - 5, 2):
        if tokens[i] not in _CONDITION_TOKENS:
            raise RuleValidationError(f"Syntax error: {tokens[i]}")

    return text


class FuzzyRule:
    """
    A validated rule statement.

    Attributes:
        text (str): The full rule statement.
        strength (float): Degree of the condition at the last evaluation.
    """

    def __init__(self, text: str) -> None:
        self._text = validate_rule_text(text)
        self._tokens: List[str] = text.split()
        self._tree: Optional[Node] = None
        self.strength = 0.0

    def __repr__(self) -> str:
        return f"FuzzyRule({self._text!r})"

    @property
    def text(self) -> str:
        return self._text

    def conditions(self) -> str:
        """The part of the rule between `IF` and `THEN`, any whitespace around them."""
        match = _CONDITION_RE.search(self._text)
        if match is None:
            raise ConditionParseError(f"condition not found in rule: {self._text}")
        return match.group(1)

    @property
    def consequent_variable(self) -> str:
        return self._tokens[-3]

    @property
    def consequent_term(self) -> str:
        return self._tokens[-1]

    @property
    def condition_tree(self) -> Node:
        """Parsed condition, built on first access."""
        if self._tree is None:
            self._tree = parse_condition(self.conditions())
        return self._tree
