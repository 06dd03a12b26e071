import pytest

from fuzzy_engine.condition import And, Atom
from fuzzy_engine.errors import ConditionParseError, RuleValidationError
from fuzzy_engine.rule import FuzzyRule, validate_rule_text

SIMPLE = "IF x IS a THEN y IS b"


def test_valid_rule_is_kept_unmodified():
    rule = FuzzyRule(SIMPLE)
    assert rule.text == SIMPLE
    assert rule.strength == 0.0


def test_conditions_accessor_is_repeatable():
    rule = FuzzyRule("IF (temperature IS hot OR humidity IS humid) AND wind IS calm THEN fan IS high")
    expected = "(temperature IS hot OR humidity IS humid) AND wind IS calm"
    assert rule.conditions() == expected
    assert rule.conditions() == expected


def test_consequent_parts():
    rule = FuzzyRule("IF temperature IS hot THEN fan IS high")
    assert rule.consequent_variable == "fan"
    assert rule.consequent_term == "high"


def test_condition_tree():
    rule = FuzzyRule("IF x IS a AND z IS c THEN y IS b")
    assert rule.condition_tree == And((Atom("x", "a"), Atom("z", "c")))
    assert rule.condition_tree is rule.condition_tree


@pytest.mark.parametrize(
    "text, message",
    [
        ("IF (x IS a THEN y IS b", "missing right parenthesis"),
        ("IF x IS a) THEN y IS b", "missing left parenthesis"),
        ("IF x IS a) AND (z IS c THEN y IS b", "missing left parenthesis"),
        ("x IS a THEN y IS b", "'IF' not found"),
        ("WHEN x IS a THEN y IS b", "'IF' not found"),
        ("", "'IF' not found"),
        ("IF", "'THEN' not found"),
        ("IF x IS a y IS b", "'THEN' not found"),
        ("IF x IS a THEN y b c", "'IS' not found"),
        ("IF x IS a XOR z IS c THEN y IS b", "Syntax error: XOR"),
        ("IF x WAS a THEN y IS b", "Syntax error: WAS"),
        ("IF x IS a AND z NOT c THEN y IS b", "Syntax error: NOT"),
    ],
)
def test_invalid_rules(text, message):
    with pytest.raises(RuleValidationError, match=message):
        FuzzyRule(text)


def test_parenthesis_check_runs_first():
    # Also lacks IF, but the unbalanced parenthesis is reported.
    with pytest.raises(RuleValidationError, match="missing right parenthesis"):
        validate_rule_text("((x IS a THEN y IS b")


def test_injected_parenthesis_is_rejected():
    validate_rule_text(SIMPLE)
    with pytest.raises(RuleValidationError):
        validate_rule_text("IF (x IS a THEN y IS b")


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        FuzzyRule("IF x IS a")


def test_structurally_valid_rule_can_still_fail_to_parse():
    rule = FuzzyRule("IF x IS (a) THEN y IS b")
    with pytest.raises(ConditionParseError):
        rule.condition_tree


@pytest.mark.parametrize(
    "text",
    [
        "IF\ttemperature IS hot THEN fan IS high",
        "IF temperature IS hot\nTHEN fan IS high",
        "IF  temperature IS hot  THEN\tfan IS high",
    ],
)
def test_rule_separated_by_any_whitespace(text):
    rule = FuzzyRule(text)
    assert rule.conditions() == "temperature IS hot"
    assert rule.condition_tree == Atom("temperature", "hot")
    assert (rule.consequent_variable, rule.consequent_term) == ("fan", "high")


def test_missing_condition_is_a_parse_error():
    # Passes the token checks, but no whitespace separates IF from its condition.
    rule = FuzzyRule("IF( x IS a) THEN y IS b")
    with pytest.raises(ConditionParseError, match="condition not found"):
        rule.conditions()
