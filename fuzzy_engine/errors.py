"""
Exception types raised by the fuzzy inference engine.

Every error derives from FuzzyError and from the builtin exception that best
describes it, so callers can catch either the domain type or the builtin.
"""


class FuzzyError(Exception):
    """Base class for all fuzzy engine errors."""


class RuleValidationError(FuzzyError, ValueError):
    """A rule statement failed structural validation."""


class UnknownNameError(FuzzyError, LookupError):
    """A referenced variable, term or consequent does not exist."""


class ConditionParseError(FuzzyError, ValueError):
    """A rule condition could not be reduced to a well-formed expression."""


class DefuzzificationError(FuzzyError, ZeroDivisionError):
    """No consequent term carries any area, so the centroid is undefined."""


class FclFormatError(FuzzyError, ValueError):
    """A persisted project document is missing required structure."""
