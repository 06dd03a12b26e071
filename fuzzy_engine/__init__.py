"""Fuzzy inference engine: trapezoidal terms, IF/THEN rules, CoG output."""

from fuzzy_engine.engine import FuzzyEngine
from fuzzy_engine.errors import (
    ConditionParseError,
    DefuzzificationError,
    FclFormatError,
    FuzzyError,
    RuleValidationError,
    UnknownNameError,
)
from fuzzy_engine.membership import MembershipFunction
from fuzzy_engine.rule import FuzzyRule
from fuzzy_engine.variable import LinguisticVariable

__all__ = [
    "ConditionParseError",
    "DefuzzificationError",
    "FclFormatError",
    "FuzzyEngine",
    "FuzzyError",
    "FuzzyRule",
    "LinguisticVariable",
    "MembershipFunction",
    "RuleValidationError",
    "UnknownNameError",
]
