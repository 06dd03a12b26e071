"""
Evaluates the fuzzy rule base to determine rule activation.

This module takes the fuzzified inputs (membership degrees per variable and
term) and applies them to a list of rules. For each rule it computes the
firing strength, the degree of its condition under min/max connectives, and
reports which consequent term that strength drives.
"""

import logging
from typing import Dict, List, Sequence, Tuple

from fuzzy_engine.errors import UnknownNameError
from fuzzy_engine.rule import FuzzyRule

rule_engine_log = logging.getLogger("rule_engine")
WZ_log = logging.getLogger("WZ_engine")


class RuleEngine:
    """
    Evaluates a Mamdani-type fuzzy rule base.

    Attributes:
        rules (Sequence[FuzzyRule]): The validated rules, in declaration order.
    """

    def __init__(self, rules: Sequence[FuzzyRule]):
        self.rules = rules
        rule_engine_log.info("Rule Engine initialized with %d rules.", len(self.rules))
        rule_engine_log.info(
            "W is rule firing strength and T is the consequent term it drives."
        )

    def evaluate(self, fuzzified: Dict[str, Dict[str, float]]) -> List[Tuple[float, str]]:
        """
        Evaluates all rules in the rule base.

        Each rule's firing strength (W) is the degree of its condition: AND
        takes the minimum of its operands, OR the maximum, folded left to right
        within a parenthesis group. The strength is stored on the rule.

        Args:
            fuzzified (Dict[str, Dict[str, float]]): Membership degree of every
                term of every variable, keyed by variable then term.

        Returns:
            List[Tuple[float, str]]: One (W, T) tuple per rule, in rule order,
            where W is the firing strength and T the consequent term name.
        """

        def resolve(variable: str, term: str) -> float:
            try:
                return fuzzified[variable][term]
            except KeyError:
                raise UnknownNameError(
                    f"Condition refers to unknown term '{variable} IS {term}'"
                ) from None

        for variable, degrees in fuzzified.items():
            rounded = {k: round(v, 3) for k, v in degrees.items()}
            rule_engine_log.info("%s: fuzzy=%s", variable, rounded)

        rule_outputs = []
        for i, rule in enumerate(self.rules):
            firing_strength = rule.condition_tree.evaluate(resolve)
            rule_outputs.append((firing_strength, rule.consequent_term))

            if firing_strength > 0:
                WZ_log.debug(
                    "Rule# %d W= %.3f T= %s | %s", i, firing_strength, rule.consequent_term, rule.text
                )
            else:
                WZ_log.debug("Rule# %d W= %.3f", i, firing_strength)

        # Strengths are only recorded once every rule has evaluated cleanly.
        for rule, (firing_strength, _term) in zip(self.rules, rule_outputs):
            rule.strength = firing_strength

        return rule_outputs
