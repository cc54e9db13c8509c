"""
Command line interface for REVAC.

Examples
--------
Tune an objective defined in ``my_project/objectives.py``::

    revac tune --config tuning.yaml --objective my_project.objectives:run_ga

Summarise the progress log of a finished (or running) tuning session::

    revac summarize --log progress.csv --config tuning.yaml

The configuration file lists the parameters in order alongside optional
``tuning`` and ``tracking`` sections::

    parameters:
      mutation_rate: [0.0, 1.0]
      population_size: [10, 200]
    tuning:
      evaluations: 2000
      output: progress.csv
"""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml
from loguru import logger

from revac import RevacConfigError, RevacTuner, TuningConfig
from revac.reporting import load_progress, summarize_progress
from revac.tuning import ParameterSpace
from revac.utils import ConfigLoader, ExperimentLogger
from revac.utils import config_reference
from revac.utils.profiles import list_profiles


def _load_objective(target: str) -> Callable[..., float]:
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise RevacConfigError(f"Objective must look like 'package.module:function', got '{target}'.")
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    module = importlib.import_module(module_name)
    try:
        objective = getattr(module, attribute)
    except AttributeError as exc:
        raise RevacConfigError(f"Module '{module_name}' has no attribute '{attribute}'.") from exc
    if not callable(objective):
        raise RevacConfigError(f"Objective '{target}' is not callable.")
    return objective


def _parse_overrides(pairs: List[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep:
            raise RevacConfigError(f"Override '{pair}' must look like key=value.")
        overrides[key.strip()] = yaml.safe_load(raw)
    return overrides


def _parameter_space(loaded: Dict[str, Any]) -> ParameterSpace:
    ranges = loaded.get("parameters")
    if not ranges:
        raise RevacConfigError("The configuration must define a 'parameters' mapping of name: [min, max].")
    return ParameterSpace.from_mapping(ranges)


def _tune_command(args: argparse.Namespace) -> None:
    overrides = _parse_overrides(args.set or [])
    if args.output:
        overrides["output"] = args.output
    loaded = ConfigLoader().load(
        Path(args.config),
        overrides={"tuning": overrides} if overrides else None,
        profile=args.profile,
    )
    space = _parameter_space(loaded.to_dict())
    config = TuningConfig(**loaded.section("tuning"))
    tracking = loaded.section("tracking")
    experiment_logger = ExperimentLogger(
        experiment_name=tracking["experiment_name"],
        tracking_uri=tracking["tracking_uri"],
        enabled=tracking["enabled"],
    )
    tuner = RevacTuner(
        space,
        _load_objective(args.objective),
        config,
        experiment_logger=experiment_logger,
        run_name=tracking["run_name"],
    )
    result = tuner.run()
    print(json.dumps({"best": result.best, "utility": result.best_utility}, indent=2))


def _summarize_command(args: argparse.Namespace) -> None:
    space: Optional[ParameterSpace] = None
    if args.config:
        space = _parameter_space(ConfigLoader().load(Path(args.config)).to_dict())
    frame = load_progress(args.log)
    print(json.dumps(summarize_progress(frame, space, window=args.window), indent=2))


def _describe_config_command(args: argparse.Namespace) -> None:
    if args.key:
        print(config_reference.explain(args.key))
        return
    if args.markdown:
        print(config_reference.to_markdown(section=args.section))
    else:
        print(config_reference.to_console(section=args.section))


def _generate_config_docs_command(args: argparse.Namespace) -> None:
    path = config_reference.write_markdown(Path(args.output))
    print(f"Configuration reference generated at {path.resolve()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="revac", description="REVAC parameter tuner for meta-heuristics")
    subparsers = parser.add_subparsers(dest="command")

    profile_choices = sorted(list_profiles().keys())

    tune_parser = subparsers.add_parser("tune", help="Tune an objective function with REVAC.")
    tune_parser.add_argument("--config", required=True, help="YAML/JSON file with parameters and options.")
    tune_parser.add_argument("--objective", required=True, help="Objective as 'package.module:function'.")
    tune_parser.add_argument("--profile", choices=profile_choices, help="Apply a budget profile before the config file.")
    tune_parser.add_argument("--output", help="Progress log CSV (overrides tuning.output).")
    tune_parser.add_argument(
        "--set",
        action="append",
        metavar="KEY=VALUE",
        help="Override a tuning option, e.g. --set evaluations=1000. May be repeated.",
    )
    tune_parser.set_defaults(func=_tune_command)

    summary_parser = subparsers.add_parser("summarize", help="Summarise a progress log.")
    summary_parser.add_argument("--log", required=True, help="Progress log CSV written by a tuning run.")
    summary_parser.add_argument("--config", help="Configuration file providing parameter ranges.")
    summary_parser.add_argument("--window", type=int, help="Trailing rows treated as the final population.")
    summary_parser.set_defaults(func=_summarize_command)

    describe_parser = subparsers.add_parser("describe-config", help="Display the REVAC configuration schema.")
    describe_parser.add_argument("--section", help="Optional configuration section to filter.")
    describe_parser.add_argument("--markdown", action="store_true", help="Render the output as markdown.")
    describe_parser.add_argument("--key", help="Explain a single configuration key instead of listing the table.")
    describe_parser.set_defaults(func=_describe_config_command)

    config_doc_parser = subparsers.add_parser("generate-config-docs", help="Write CONFIG.md from the schema.")
    config_doc_parser.add_argument("--output", default="CONFIG.md", help="Destination markdown file (default: CONFIG.md).")
    config_doc_parser.set_defaults(func=_generate_config_docs_command)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        parser.print_help()
        return
    parsed = parser.parse_args(argv)
    if not hasattr(parsed, "func"):
        parser.print_help()
        return
    try:
        parsed.func(parsed)
    except RevacConfigError as exc:
        logger.error("{}", exc)
        raise SystemExit(2) from exc


if __name__ == "__main__":
    main()
