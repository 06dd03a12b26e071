# tests/conftest.py
import logging
import os

import matplotlib
import pytest

matplotlib.use("Agg")

from fuzzy_engine.engine import FuzzyEngine
from fuzzy_engine.membership import MembershipFunction
from fuzzy_engine.variable import LinguisticVariable
from utils.logger import LOGGER_NAMES

CONFIG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config")


def make_fan_engine(rules=("IF temperature IS cold THEN fan IS low",
                           "IF temperature IS hot THEN fan IS high")):
    """temperature: cold/hot over [0, 30]; fan: low/high over [0, 9]."""
    temperature = LinguisticVariable(
        "temperature",
        [
            MembershipFunction("cold", 0, 0, 10, 20),
            MembershipFunction("hot", 10, 20, 30, 30),
        ],
    )
    fan = LinguisticVariable(
        "fan",
        [
            MembershipFunction("low", 0, 0, 3, 6),
            MembershipFunction("high", 3, 6, 9, 9),
        ],
    )
    return FuzzyEngine([temperature, fan], list(rules), consequent="fan")


@pytest.fixture
def fan_engine():
    return make_fan_engine()


@pytest.fixture
def hot_only_engine():
    return make_fan_engine(rules=("IF temperature IS hot THEN fan IS high",))


@pytest.fixture
def fan_config_path():
    return os.path.join(CONFIG_DIR, "fan_config.toml")


@pytest.fixture
def fan_xml_path():
    return os.path.join(CONFIG_DIR, "fan.xml")


@pytest.fixture
def reset_logging():
    """Undo setup_logging() so later tests see default logger wiring."""
    yield
    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        for h in list(log.handlers):
            log.removeHandler(h)
            h.close()
        log.propagate = True
        log.setLevel(logging.NOTSET)
