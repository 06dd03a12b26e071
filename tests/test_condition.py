import pytest

from fuzzy_engine.condition import (
    And,
    Atom,
    Constant,
    Or,
    evaluate_condition,
    parse_condition,
    references,
    tokenize,
)
from fuzzy_engine.errors import ConditionParseError

DEGREES = {
    ("temperature", "hot"): 0.7,
    ("temperature", "cold"): 0.1,
    ("humidity", "humid"): 0.4,
    ("humidity", "dry"): 0.9,
}


def resolve(variable, term):
    return DEGREES[(variable, term)]


def no_lookup(variable, term):
    raise AssertionError(f"unexpected lookup {variable} IS {term}")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0.2 AND 0.8", 0.2),
        ("0.2 OR 0.8", 0.8),
        ("0.9 AND 0.1 OR 0.6", 0.6),            # ((0.9 AND 0.1) OR 0.6)
        ("0.9 OR 0.2 AND 0.4", 0.4),            # no AND-over-OR precedence
        ("(0.2 OR 0.8) AND 0.3", 0.3),
        ("0.9 OR (0.2 AND 0.4)", 0.9),
        ("((0.2 OR 0.8) AND (0.6 OR 0.1)) OR 0.3", 0.6),
        ("(((0.35)))", 0.35),
        ("0.5", 0.5),
    ],
)
def test_numeric_folding(text, expected):
    assert evaluate_condition(text, no_lookup) == pytest.approx(expected)


def test_single_atom_returns_degree_unchanged():
    assert evaluate_condition("temperature IS hot", resolve) == 0.7


@pytest.mark.parametrize(
    "text, expected",
    [
        ("temperature IS hot AND humidity IS humid", 0.4),
        ("temperature IS hot OR humidity IS dry", 0.9),
        ("temperature IS cold OR humidity IS humid AND temperature IS hot", 0.4),
        ("temperature IS cold OR (humidity IS humid AND temperature IS hot)", 0.4),
        ("(temperature IS hot OR humidity IS dry) AND humidity IS humid", 0.4),
        ("(temperature IS hot AND humidity IS dry) OR temperature IS cold", 0.7),
    ],
)
def test_atom_expressions(text, expected):
    assert evaluate_condition(text, resolve) == pytest.approx(expected)


def test_tokenize_splits_parentheses():
    assert tokenize("(a IS x OR(b IS y))") == ["(", "a", "IS", "x", "OR", "(", "b", "IS", "y", ")", ")"]


def test_same_connective_chain_is_flattened():
    tree = parse_condition("a IS x AND b IS y AND c IS z")
    assert tree == And((Atom("a", "x"), Atom("b", "y"), Atom("c", "z")))


def test_mixed_chain_folds_left():
    tree = parse_condition("a IS x AND b IS y OR c IS z")
    assert tree == Or((And((Atom("a", "x"), Atom("b", "y"))), Atom("c", "z")))


def test_group_on_the_right_stays_nested():
    tree = parse_condition("0.1 OR (a IS x AND 0.5)")
    assert tree == Or((Constant(0.1), And((Atom("a", "x"), Constant(0.5)))))


def test_parsed_tree_can_be_reused():
    tree = parse_condition("temperature IS hot AND humidity IS dry")
    assert evaluate_condition(tree, resolve) == pytest.approx(0.7)
    low = {("temperature", "hot"): 0.2, ("humidity", "dry"): 0.6}
    assert evaluate_condition(tree, lambda v, t: low[(v, t)]) == pytest.approx(0.2)


def test_references_in_text_order():
    tree = parse_condition("(a IS x OR b IS y) AND 0.3 AND c IS z")
    assert list(references(tree)) == [("a", "x"), ("b", "y"), ("c", "z")]


@pytest.mark.parametrize(
    "text, fragment",
    [
        ("0.2 AND abc", "abc"),
        ("0.2 AND", "unexpected end"),
        ("(0.2 AND 0.3", "missing ')'"),
        ("0.2 AND 0.3)", "unexpected token ')'"),
        ("0.2 0.3", "unexpected token '0.3'"),
        ("AND 0.3", "unexpected token 'AND'"),
        ("temperature IS", "missing term"),
        ("temperature IS AND", "missing term"),
        ("", "empty condition"),
        ("   ", "empty condition"),
        ("0.2 OR 10", "degree out of range '10'"),
        ("-0.1 AND 0.5", "degree out of range '-0.1'"),
        ("0.2 OR inf", "degree out of range 'inf'"),
        ("nan", "degree out of range 'nan'"),
    ],
)
def test_malformed_conditions(text, fragment):
    with pytest.raises(ConditionParseError) as excinfo:
        parse_condition(text)
    assert fragment in str(excinfo.value)


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        evaluate_condition("0.2 OR nope", no_lookup)
