import os
import logging

import matplotlib.pyplot as plt
import numpy as np

from fuzzy_engine.variable import LinguisticVariable

main_log = logging.getLogger("main")


def plot_variable(
    variable: LinguisticVariable, show_activation=False, save=False, output_dir="plots"
):
    """
    Plot the trapezoidal membership functions of a variable.
    Optionally shade each term clipped at its activation (consequent terms
    after an inference pass) and mark the current input value.
    Args:
        variable (LinguisticVariable): Variable whose terms are drawn
        show_activation (bool): Shade the activation-clipped shapes
        save (bool): Whether to save the plot as a PNG
        output_dir (str): Directory to save the plot
    Returns:
        The matplotlib Figure.
    """
    lo, hi = variable.min_value(), variable.max_value()
    x_dense = np.linspace(lo, hi, 1000)

    fig, ax = plt.subplots(figsize=(8, 4))
    for mf in variable.terms.values():
        y = np.array([mf.degree(x) for x in x_dense])
        line, = ax.plot(x_dense, y, label=mf.name)
        if show_activation and mf.activation > 0:
            ax.fill_between(x_dense, np.minimum(y, mf.activation), alpha=0.35, color=line.get_color())
        else:
            ax.fill_between(x_dense, y, alpha=0.1, color=line.get_color())

    if not show_activation and lo <= variable.input_value <= hi:
        ax.axvline(variable.input_value, color="red", linestyle="--", label="input")

    ax.set_title(f"Membership Functions – {variable.name}")
    ax.set_xlabel(variable.name)
    ax.set_ylabel("Membership Degree")
    ax.set_xlim(lo, hi)
    ax.set_ylim(0, 1.05)
    ax.grid(True)
    ax.legend()
    fig.tight_layout()

    if save:
        os.makedirs(output_dir, exist_ok=True)
        filename = os.path.join(output_dir, f"{variable.name.lower()}_membership_functions.png")
        fig.savefig(filename)
        main_log.info("Saved plot to: %s", filename)

    return fig
