"""
Reads and writes projects as FCL-style XML documents.

Document layout:

    <FUNCTION_BLOCK>
      <VAR_INPUT NAME="temperature" TYPE="REAL" RANGE="0.0 30.0" />
      <VAR_OUTPUT NAME="fan" TYPE="REAL" RANGE="0.0 9.0" />
      <FUZZIFY NAME="temperature">
        <TERM NAME="cold" POINTS="0.0 0.0 10.0 20.0" />
      </FUZZIFY>
      <DEFUZZIFY METHOD="CoG" ACCU="MAX" NAME="fan">
        <TERM NAME="low" POINTS="0.0 0.0 3.0 6.0" />
      </DEFUZZIFY>
      <RULEBLOCK AND="MIN" OR="MAX">
        <RULE NUMBER="1" TEXT="IF temperature IS cold THEN fan IS low" />
      </RULEBLOCK>
    </FUNCTION_BLOCK>

RANGE is derived from the terms when saving and ignored when loading.
"""

import logging
import xml.etree.ElementTree as ET

from fuzzy_engine.engine import FuzzyEngine
from fuzzy_engine.errors import FclFormatError
from fuzzy_engine.membership import MembershipFunction
from fuzzy_engine.variable import LinguisticVariable

fcl_log = logging.getLogger("fcl")


def _fmt(x: float) -> str:
    # repr of a float round-trips exactly
    return repr(float(x))


def _attr(node: ET.Element, name: str) -> str:
    value = node.get(name)
    if value is None:
        raise FclFormatError(f"<{node.tag}> is missing attribute {name}")
    return value


def to_xml(engine: FuzzyEngine) -> str:
    """Serializes the engine's variables, terms and rules."""
    root = ET.Element("FUNCTION_BLOCK")

    for variable in engine.variables.values():
        tag = "VAR_OUTPUT" if variable.name == engine.consequent else "VAR_INPUT"
        rng = f"{_fmt(variable.min_value())} {_fmt(variable.max_value())}" if variable.terms else ""
        ET.SubElement(root, tag, NAME=variable.name, TYPE="REAL", RANGE=rng)

    for variable in engine.variables.values():
        if variable.name == engine.consequent:
            block = ET.SubElement(root, "DEFUZZIFY", METHOD="CoG", ACCU="MAX")
        else:
            block = ET.SubElement(root, "FUZZIFY")
        block.set("NAME", variable.name)

        for mf in variable.terms.values():
            ET.SubElement(block, "TERM", NAME=mf.name, POINTS=" ".join(_fmt(p) for p in mf.points))

    ruleblock = ET.SubElement(root, "RULEBLOCK", AND="MIN", OR="MAX")
    for number, rule in enumerate(engine.rules, start=1):
        ET.SubElement(ruleblock, "RULE", NUMBER=str(number), TEXT=rule.text)

    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True).decode("utf-8")


def _read_terms(variable: LinguisticVariable, block: ET.Element) -> None:
    for term in block.iter("TERM"):
        points = _attr(term, "POINTS").split()
        if len(points) != 4:
            raise FclFormatError(
                f"TERM {term.get('NAME')!r} needs 4 points, got {len(points)}"
            )
        try:
            x0, x1, x2, x3 = (float(p) for p in points)
        except ValueError:
            raise FclFormatError(f"TERM {term.get('NAME')!r} has non-numeric points") from None
        variable.add_term(MembershipFunction(_attr(term, "NAME"), x0, x1, x2, x3))


def from_xml(text: str) -> FuzzyEngine:
    """Builds an engine from the text of an FCL-style XML document."""
    try:
        root = ET.fromstring(text.encode("utf-8"))
    except ET.ParseError as e:
        raise FclFormatError(f"Malformed XML: {e}") from e
    if root.tag != "FUNCTION_BLOCK":
        raise FclFormatError(f"Root element must be FUNCTION_BLOCK, got {root.tag}")

    engine = FuzzyEngine()
    for node in root:
        if node.tag in ("VAR_INPUT", "VAR_OUTPUT"):
            name = _attr(node, "NAME")
            engine.add_variable(LinguisticVariable(name))
            if node.tag == "VAR_OUTPUT" and not engine.consequent:
                engine.consequent = name

    if not engine.consequent:
        raise FclFormatError("No VAR_OUTPUT element found")

    for tag in ("FUZZIFY", "DEFUZZIFY"):
        for block in root.iter(tag):
            name = _attr(block, "NAME")
            if name not in engine.variables:
                raise FclFormatError(f"<{tag}> refers to undeclared variable {name!r}")
            _read_terms(engine.variables[name], block)

    rules = []
    for node in root.iter("RULE"):
        try:
            number = int(node.get("NUMBER", len(rules) + 1))
        except ValueError:
            raise FclFormatError(f"RULE has non-integer NUMBER {node.get('NUMBER')!r}") from None
        rules.append((number, _attr(node, "TEXT")))
    for _number, text in sorted(rules, key=lambda r: r[0]):
        engine.add_rule(text)

    fcl_log.info(
        "Loaded project: %d variables, %d rules, consequent '%s'.",
        len(engine.variables),
        len(engine.rules),
        engine.consequent,
    )
    return engine


def save_fcl(engine: FuzzyEngine, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_xml(engine))
    fcl_log.info("Project saved to %s", path)


def load_fcl(path: str) -> FuzzyEngine:
    with open(path, "r", encoding="utf-8") as f:
        return from_xml(f.read())
