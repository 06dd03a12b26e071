"""
Computes the final crisp output from the activated consequent terms.

This module implements center-of-gravity defuzzification: every consequent
term contributes its centroid, weighted by the area of its shape clipped at the
term's activation level.
"""

import logging
from typing import Iterable

from fuzzy_engine.errors import DefuzzificationError
from fuzzy_engine.membership import MembershipFunction

defuzzifier_log = logging.getLogger("defuzzifier")


class Defuzzifier:
    """Performs center-of-gravity (CoG) defuzzification."""

    def __init__(self):
        defuzzifier_log.info("Defuzzifier initialized.")

    def defuzzify(self, terms: Iterable[MembershipFunction]) -> float:
        """
        Calculates the final crisp output value.

        The output is the area-weighted average of the term centroids:
        output = (Σ(Ci * Ai)) / (Σ Ai)
        where Ci is the centroid of term i and Ai its clipped area.

        Args:
            terms (Iterable[MembershipFunction]): The consequent variable's
                terms with their activation levels already set.

        Returns:
            float: The crisp output value.

        Raises:
            DefuzzificationError: If the total area is zero, i.e. no rule
                activated any consequent term.
        """
        numerator = 0.0
        denominator = 0.0
        active = 0

        for mf in terms:
            area = mf.area()
            centroid = mf.centroid()
            numerator += centroid * area
            denominator += area
            if mf.activation > 0:
                active += 1
            defuzzifier_log.debug(
                "Term %s: activation= %.3f, centroid= %.3f, area= %.3f",
                mf.name,
                mf.activation,
                centroid,
                area,
            )

        if denominator == 0:
            defuzzifier_log.warning("Sum of term areas is zero. No rule fired.")
            raise DefuzzificationError(
                "Cannot defuzzify: no consequent term has a non-zero area"
            )

        final_output = numerator / denominator
        defuzzifier_log.debug(
            "Defuzzified output: %.4f (from %d active terms)", final_output, active
        )
        return final_output
