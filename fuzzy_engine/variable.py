"""
Linguistic variables: a named crisp quantity described by ordered terms.
"""

from typing import Dict, Iterable, Optional

from fuzzy_engine.errors import UnknownNameError
from fuzzy_engine.membership import MembershipFunction


class LinguisticVariable:
    """
    A named variable holding an ordered set of membership functions.

    Attributes:
        name (str): Variable name, unique within an engine.
        terms (Dict[str, MembershipFunction]): Terms in declaration order.
        input_value (float): Current crisp reading, set before each pass.
    """

    def __init__(
        self,
        name: str,
        terms: Optional[Iterable[MembershipFunction]] = None,
        input_value: float = 0.0,
    ) -> None:
        self.name = name
        self.terms: Dict[str, MembershipFunction] = {}
        self.input_value = float(input_value)
        for mf in terms or ():
            self.add_term(mf)

    def __repr__(self) -> str:
        return f"LinguisticVariable({self.name!r}, terms={list(self.terms)})"

    def add_term(self, mf: MembershipFunction) -> None:
        if mf.name in self.terms:
            raise ValueError(f"Duplicate term '{mf.name}' in variable '{self.name}'")
        self.terms[mf.name] = mf

    def find(self, term_name: str) -> MembershipFunction:
        try:
            return self.terms[term_name]
        except KeyError:
            raise UnknownNameError(
                f"MembershipFunction not found: {term_name} (variable '{self.name}')"
            ) from None

    def fuzzify(self, term_name: str) -> float:
        """Degree of membership of the current input value in `term_name`."""
        return self.find(term_name).degree(self.input_value)

    def min_value(self) -> float:
        """Smallest left foot (x0) over all terms."""
        self._require_terms()
        return min(mf.x0 for mf in self.terms.values())

    def max_value(self) -> float:
        """Largest right foot (x3) over all terms."""
        self._require_terms()
        return max(mf.x3 for mf in self.terms.values())

    def range(self) -> float:
        return self.max_value() - self.min_value()

    def reset_activations(self) -> None:
        for mf in self.terms.values():
            mf.activation = 0.0

    def _require_terms(self) -> None:
        if not self.terms:
            raise ValueError(f"Variable '{self.name}' has no terms")
