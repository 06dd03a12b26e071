"""
Orchestrates a fuzzy inference pass.

This module integrates the Fuzzifier, Rule Engine, and Defuzzifier behind a
single FuzzyEngine that owns the linguistic variables and the rule base. It is
the only interface callers need: add variables and rules, name the consequent
variable, set crisp inputs and run inference.

An engine instance is not reentrant. An inference pass resets and then
accumulates activation levels on the consequent terms, so callers must
serialize passes over a shared instance.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Union

from fuzzy_engine.condition import references
from fuzzy_engine.defuzzifier import Defuzzifier
from fuzzy_engine.errors import UnknownNameError
from fuzzy_engine.fuzzifier import Fuzzifier
from fuzzy_engine.rule import FuzzyRule
from fuzzy_engine.rule_engine import RuleEngine
from fuzzy_engine.variable import LinguisticVariable

engine_log = logging.getLogger("engine")


class FuzzyEngine:
    """
    The fuzzy inference engine.

    Names used by rules are resolved against the engine's variables once,
    in validate(), which runs automatically before the first pass after any
    structural change.

    Attributes:
        fuzzifier (Fuzzifier): Built by validate().
        rule_engine (RuleEngine): Built by validate().
        defuzzifier (Defuzzifier): The CoG defuzzifier.
        file_path (str): Project file used by the last save() or load().
    """

    def __init__(
        self,
        variables: Optional[Iterable[LinguisticVariable]] = None,
        rules: Optional[Iterable[Union[str, FuzzyRule]]] = None,
        consequent: str = "",
    ) -> None:
        self._variables: Dict[str, LinguisticVariable] = {}
        self._rules: List[FuzzyRule] = []
        self._consequent = consequent
        self._validated = False
        self.file_path = ""

        self.fuzzifier: Optional[Fuzzifier] = None
        self.rule_engine: Optional[RuleEngine] = None
        self.defuzzifier = Defuzzifier()

        for variable in variables or ():
            self.add_variable(variable)
        for rule in rules or ():
            self.add_rule(rule)

    # ---------- structure ----------

    @property
    def variables(self) -> Dict[str, LinguisticVariable]:
        return self._variables

    @property
    def rules(self) -> List[FuzzyRule]:
        return self._rules

    @property
    def consequent(self) -> str:
        return self._consequent

    @consequent.setter
    def consequent(self, name: str) -> None:
        self._consequent = name
        self._validated = False

    def add_variable(self, variable: LinguisticVariable) -> LinguisticVariable:
        if variable.name in self._variables:
            raise ValueError(f"Duplicate variable '{variable.name}'")
        self._variables[variable.name] = variable
        self._validated = False
        return variable

    def add_rule(self, rule: Union[str, FuzzyRule]) -> FuzzyRule:
        """Validates a rule statement and appends it to the rule base."""
        if not isinstance(rule, FuzzyRule):
            rule = FuzzyRule(rule)
        self._rules.append(rule)
        self._validated = False
        return rule

    def find_variable(self, name: str) -> LinguisticVariable:
        try:
            return self._variables[name]
        except KeyError:
            raise UnknownNameError(f"LinguisticVariable not found: {name}") from None

    def consequent_variable(self) -> LinguisticVariable:
        if not self._consequent or self._consequent not in self._variables:
            raise UnknownNameError(f"Consequent variable not found: {self._consequent!r}")
        return self._variables[self._consequent]

    def input_variables(self) -> List[LinguisticVariable]:
        return [v for name, v in self._variables.items() if name != self._consequent]

    # ---------- inputs ----------

    def set_input(self, name: str, value: float) -> None:
        self.find_variable(name).input_value = float(value)

    def set_inputs(self, values: Mapping[str, float]) -> None:
        for name, value in values.items():
            self.set_input(name, value)

    # ---------- validation ----------

    def validate(self) -> None:
        """
        Resolves every name the rule base refers to.

        Raises:
            UnknownNameError: Missing consequent, a rule concluding on another
                variable, or an unknown variable/term in a rule.
            ConditionParseError: A rule condition cannot be parsed.
        """
        consequent = self.consequent_variable()
        if not consequent.terms:
            raise ValueError(f"Consequent variable '{consequent.name}' has no terms")

        for rule in self._rules:
            if rule.consequent_variable != consequent.name:
                raise UnknownNameError(
                    f"Rule concludes on '{rule.consequent_variable}', "
                    f"consequent is '{consequent.name}': {rule.text}"
                )
            consequent.find(rule.consequent_term)
            for variable, term in references(rule.condition_tree):
                self.find_variable(variable).find(term)

        self.fuzzifier = Fuzzifier(self._variables)
        self.rule_engine = RuleEngine(list(self._rules))
        self._validated = True
        engine_log.info(
            "Engine validated: %d variables, %d rules, consequent '%s'.",
            len(self._variables),
            len(self._rules),
            consequent.name,
        )

    # ---------- inference ----------

    def defuzzify(self) -> float:
        """
        Executes one full inference pass.

        1) Reset every consequent term's activation to 0.
        2) Fuzzify the current inputs and evaluate every rule.
        3) Raise each consequent term's activation to the strongest rule
           concluding on it.
        4) Defuzzify with the center-of-gravity method.

        Returns:
            float: The crisp output value.

        Raises:
            DefuzzificationError: If no rule fired above zero strength.
        """
        if not self._validated:
            self.validate()

        consequent = self.consequent_variable()
        engine_log.debug(
            "--- Inference Start (%s) ---",
            ", ".join(f"{v.name}= {v.input_value:.3f}" for v in self.input_variables()),
        )

        # 1) Reset
        consequent.reset_activations()

        # 2) Fuzzification and rule evaluation
        fuzzified = self.fuzzifier.fuzzify_all()
        rule_outputs = self.rule_engine.evaluate(fuzzified)

        # 3) Max accumulation per consequent term
        for strength, term in rule_outputs:
            mf = consequent.find(term)
            if strength > mf.activation:
                mf.activation = strength

        # 4) Defuzzification
        output = self.defuzzifier.defuzzify(consequent.terms.values())
        engine_log.debug("--- Inference End (%s= %.4f) ---", consequent.name, output)
        return output

    infer = defuzzify

    # ---------- persistence ----------

    def save(self, path: Optional[str] = None) -> None:
        """Saves the project as an FCL-style XML document."""
        from fuzzy_engine.fcl import save_fcl

        if path is not None:
            self.file_path = path
        if not self.file_path:
            raise ValueError("FilePath not set")
        save_fcl(self, self.file_path)

    @classmethod
    def load(cls, path: str) -> "FuzzyEngine":
        """Builds an engine from an FCL-style XML document."""
        from fuzzy_engine.fcl import load_fcl

        engine = load_fcl(path)
        engine.file_path = path
        return engine
