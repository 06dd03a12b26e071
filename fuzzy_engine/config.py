"""
Configuration loader for fuzzy inference projects.

A project is either a TOML configuration file or an FCL-style XML document.
TOML files describe the same structure as the XML format plus initial crisp
inputs and CLI logging settings:

    CONSEQUENT = "fan"
    rule_base = [
        "IF temperature IS hot THEN fan IS high",
    ]

    [inputs]
    temperature = 25.0

    [membership_functions.temperature]
    cold = [0.0, 0.0, 10.0, 20.0]
    hot  = [10.0, 20.0, 30.0, 30.0]

    [membership_functions.fan]
    low  = [0.0, 0.0, 3.0, 6.0]
    high = [3.0, 6.0, 9.0, 9.0]

    [logging]
    LOG_DIR = "logs"
    CONSOLE_LEVEL = "INFO"

Variables are created in table order and terms in key order. TOML parsing is
done via Python's built-in `tomllib` module, or the `tomli` backport on older
interpreters.
"""

import logging
import os
from typing import Any, Dict, Mapping

try:
    import tomllib  # py311+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # fallback if needed

from fuzzy_engine.engine import FuzzyEngine
from fuzzy_engine.fcl import load_fcl
from fuzzy_engine.membership import MembershipFunction
from fuzzy_engine.variable import LinguisticVariable

config_log = logging.getLogger("config")

XML_SUFFIXES = (".xml", ".fcl")


def load_config(path: str) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def build_engine(config: Mapping[str, Any]) -> FuzzyEngine:
    """
    Builds an engine from a parsed configuration mapping.

    Initial values from the optional [inputs] table are applied. Name
    references are checked lazily by FuzzyEngine.validate().
    """
    engine = FuzzyEngine(consequent=str(config.get("CONSEQUENT", "")))

    for var_name, terms in config.get("membership_functions", {}).items():
        variable = LinguisticVariable(var_name)
        for term_name, params in terms.items():
            if len(params) != 4:
                raise ValueError(
                    f"Invalid membership function shape for '{var_name}.{term_name}': {params}"
                )
            variable.add_term(MembershipFunction(term_name, *params))
        engine.add_variable(variable)

    for text in config.get("rule_base", []):
        engine.add_rule(text)

    engine.set_inputs(config.get("inputs", {}))

    config_log.info(
        "Built engine with %d variables and %d rules (consequent '%s').",
        len(engine.variables),
        len(engine.rules),
        engine.consequent,
    )
    return engine


def load_engine(path: str) -> FuzzyEngine:
    """Loads a project from a .toml configuration or an .xml/.fcl document."""
    suffix = os.path.splitext(path)[1].lower()
    if suffix in XML_SUFFIXES:
        engine = load_fcl(path)
        engine.file_path = path
    else:
        engine = build_engine(load_config(path))
    config_log.info("Project '%s' loaded.", path)
    return engine
