"""
Command-line entry point for the fuzzy inference engine.

Loads a project (TOML configuration or FCL-style XML document), applies crisp
inputs and prints the defuzzified output of the consequent variable. A CSV file
of inputs runs one inference pass per row.

    python main.py config/fan_config.toml --set temperature=15
    python main.py config/fan.xml --batch readings.csv
    python main.py config/fan_config.toml --trace --save-fcl fan.xml
"""

import argparse
import csv
import logging
import os
import sys
from typing import Dict, List, Optional

from fuzzy_engine.config import XML_SUFFIXES, load_config, load_engine
from fuzzy_engine.engine import FuzzyEngine
from fuzzy_engine.errors import DefuzzificationError, FuzzyError
from utils.logger import set_pass_index, setup_logging
from utils.profiler import CodeProfiler

main_log = logging.getLogger("main")


def _parse_assignment(text: str):
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"value of {name!r} is not a number: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run fuzzy inference on a TOML or FCL-style XML project."
    )
    parser.add_argument("project", help="Project file (.toml, .xml or .fcl).")
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        type=_parse_assignment,
        default=[],
        metavar="NAME=VALUE",
        help="Set a crisp input value (repeatable).",
    )
    parser.add_argument(
        "--batch",
        help="CSV file of inputs; header row names the variables, one pass per row.",
    )
    parser.add_argument("--trace", action="store_true", help="Print per-rule firing strengths.")
    parser.add_argument(
        "--plot", action="store_true", help="Plot the variables and rule contributions."
    )
    parser.add_argument("--save-fcl", metavar="PATH", help="Export the project as FCL-style XML.")
    parser.add_argument("--log-dir", help="Directory for component log files.")
    return parser


def _logging_settings(project: str) -> Dict:
    if os.path.splitext(project)[1].lower() in XML_SUFFIXES:
        return {}
    try:
        return load_config(project).get("logging", {})
    except (OSError, ValueError):
        return {}


def read_batch(path: str) -> List[Dict[str, float]]:
    with open(path, newline="", encoding="utf-8") as f:
        return [
            {name: float(value) for name, value in row.items()}
            for row in csv.DictReader(f)
        ]


def run_pass(engine: FuzzyEngine, profiler: CodeProfiler, trace: bool = False) -> float:
    with profiler:
        if trace:
            from utils.rule_trace import trace_rule_firing

            traces, output = trace_rule_firing(engine)
            for t in traces:
                print(f"  R{t['rule_index'] + 1}: W= {t['strength']:.3f} -> {t['term']}  | {t['text']}")
            if output is None:
                raise DefuzzificationError("No rule fired above zero strength")
            return output
        return engine.defuzzify()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log_cfg = _logging_settings(args.project)
    level_name = str(log_cfg.get("CONSOLE_LEVEL", "WARNING")).upper()
    console_level = logging.getLevelName(level_name)
    if not isinstance(console_level, int):
        print(f"error: unknown CONSOLE_LEVEL {level_name!r}", file=sys.stderr)
        return 1
    setup_logging(
        log_dir=args.log_dir or log_cfg.get("LOG_DIR", "logs"),
        console_level=console_level,
    )
    main_log.info("Application starting...")

    try:
        engine = load_engine(args.project)
        engine.set_inputs(dict(args.assignments))
        consequent = engine.consequent
        profiler = CodeProfiler("Inference")

        if args.batch:
            for i, row in enumerate(read_batch(args.batch)):
                set_pass_index(i)
                engine.set_inputs(row)
                output = run_pass(engine, profiler, trace=args.trace)
                print(", ".join(f"{k}={v:g}" for k, v in row.items()) + f" -> {consequent} = {output:.6g}")
            profiler.summary()
        else:
            set_pass_index(0)
            output = run_pass(engine, profiler, trace=args.trace)
            print(f"{consequent} = {output:.6g}")

        if args.plot:
            import matplotlib.pyplot as plt
            from utils.plot_membership_shapes import plot_variable
            from utils.rule_trace import trace_rule_firing

            for variable in engine.input_variables():
                plot_variable(variable)
            plot_variable(engine.consequent_variable(), show_activation=True)
            trace_rule_firing(engine, plot=True)
            plt.show()

        if args.save_fcl:
            engine.save(args.save_fcl)
            print(f"Saved project to {args.save_fcl}")

    except (FuzzyError, ValueError, OSError) as e:
        main_log.critical("Inference failed: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    main_log.info("Application finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
