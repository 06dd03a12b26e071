# rule_trace.py

import logging
from typing import Any, Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from fuzzy_engine.engine import FuzzyEngine
from fuzzy_engine.errors import DefuzzificationError

main_log = logging.getLogger("main")


def trace_rule_firing(
    engine: FuzzyEngine,
    plot: bool = False,
) -> Tuple[List[Dict[str, Any]], Optional[float]]:
    """
    Run one inference pass and return detailed trace information per rule,
    including firing strength, consequent term and the term's final activation.

    Args:
        engine: A configured engine with its inputs already set.
        plot: If True, draw a bar chart of the rule contributions.

    Returns:
        A list of dictionaries with one rule evaluation trace each, and the
        crisp output, or None when no rule fired.
    """
    try:
        output = engine.defuzzify()
    except DefuzzificationError:
        main_log.warning("No rule fired; trace has no crisp output.")
        output = None

    consequent = engine.consequent_variable()
    traces = []
    for i, rule in enumerate(engine.rules):
        term = rule.consequent_term
        traces.append(
            {
                "rule_index": i,
                "text": rule.text,
                "strength": rule.strength,
                "term": term,
                "activation": consequent.find(term).activation,
            }
        )

    if plot:
        plot_rule_contributions(traces, engine)
    return traces, output


def plot_rule_contributions(trace_data, engine):
    inputs = ", ".join(f"{v.name} = {v.input_value:.3f}" for v in engine.input_variables())
    labels = [f"R{t['rule_index'] + 1} → {t['term']}" for t in trace_data]
    ws = [t["strength"] for t in trace_data]

    # a rule "wins" when it set its term's activation
    winners = [t["strength"] > 0 and t["strength"] == t["activation"] for t in trace_data]
    colors = ["blue" if w else "gray" for w in winners]

    fig, ax1 = plt.subplots(figsize=(12, 6))

    bars = ax1.bar(range(len(labels)), ws, color=colors, alpha=0.7)

    ax1.set_ylabel("Firing Strength")
    ax1.set_ylim(0, 1.05)
    ax1.set_xticks(range(len(labels)))
    ax1.set_xticklabels(labels, rotation=45, ha="right")
    ax1.text(
        0.01,
        0.99,
        inputs,
        transform=ax1.transAxes,
        fontsize=11,
        verticalalignment="top",
        bbox=dict(facecolor="white", alpha=0.7, edgecolor="gray"),
    )

    # Annotate W values on top of bars
    for bar in bars:
        height = bar.get_height()
        if height > 0:
            ax1.text(
                bar.get_x() + bar.get_width() / 2,
                height + 0.01,
                f"{height:.2f}",
                ha="center",
                va="bottom",
                fontsize=8,
                color="black",
            )

    win_patch = mpatches.Patch(color="blue", label="Sets its term's activation")
    lose_patch = mpatches.Patch(color="gray", label="Dominated or not fired")
    ax1.legend(handles=[win_patch, lose_patch], loc="upper right")

    ax1.set_title("Rule Contributions: Firing Strength per Rule")
    fig.tight_layout()
    return fig
