"""
Fuzzifies crisp input values against trapezoidal membership functions.

This module holds the degree-of-membership primitive shared by every term and
a Fuzzifier that maps the current crisp input of each linguistic variable to
its degree of membership in every term, once per inference pass.
"""

import logging
from typing import Dict, Mapping, Sequence

from fuzzy_engine.errors import UnknownNameError

fuzzifier_log = logging.getLogger("fuzzifier")


def trapezoid(x: float, params: Sequence[float]) -> float:
    """
    Calculates the membership degree for a trapezoidal function.

    Args:
        x (float): The crisp input value.
        params (Sequence[float]): Corners [x0, x1, x2, x3] where:
            - x0 and x3 are the feet (zero membership),
            - x1 to x2 is the top (membership = 1.0)

    Returns:
        float: Degree of membership (0.0 to 1.0). x1 and x2 belong to the top,
            x3 belongs to the falling edge. A vertical edge (x0 == x1 or
            x2 == x3) never enters a ramp branch, so it is a jump, not a
            division by zero.
    """
    x0, x1, x2, x3 = params

    if x0 <= x < x1:
        return (x - x0) / (x1 - x0)
    elif x1 <= x <= x2:
        return 1.0
    elif x2 < x <= x3:
        return (x3 - x) / (x3 - x2)
    return 0.0


class Fuzzifier:
    """
    Calculates membership degrees for the crisp inputs of a set of variables.

    Attributes:
        variables (Mapping[str, LinguisticVariable]): The variables to fuzzify,
            keyed by name. Each carries its own terms and current input value.
    """

    def __init__(self, variables: Mapping) -> None:
        self.variables = variables
        fuzzifier_log.info("Fuzzifier initialized with %d variables.", len(self.variables))

    def fuzzify(self, input_name: str) -> Dict[str, float]:
        """
        Fuzzifies the current crisp input of a single variable.

        Args:
            input_name (str): The name of the variable.

        Returns:
            Dict[str, float]: A dictionary mapping each term name to its
                membership degree. Every term is present, including those
                at 0.0.
        """
        if input_name not in self.variables:
            raise UnknownNameError(f"No membership functions defined for input '{input_name}'")

        variable = self.variables[input_name]
        crisp_value = variable.input_value
        fuzzified_output = {
            mf.name: trapezoid(crisp_value, mf.points) for mf in variable.terms.values()
        }

        formatted_output = {k: f"{v:.3f}" for k, v in fuzzified_output.items() if v > 0}
        fuzzifier_log.debug(
            "Fuzzified %s=  %.3f -> %s", input_name, crisp_value, formatted_output
        )
        return fuzzified_output

    def fuzzify_all(self) -> Dict[str, Dict[str, float]]:
        """Fuzzifies every variable, keyed by variable name."""
        return {name: self.fuzzify(name) for name in self.variables}
