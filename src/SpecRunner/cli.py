"""CLI entry points for running feature suites."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from SpecRunner.pipeline.errors import SpecRunnerError
from SpecRunner.shared.config import RunConfig

logger = logging.getLogger("SpecRunner")

EXIT_PASS = 0
EXIT_FAIL = 1
EXIT_ERROR = 2


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
    )


def _add_run_parser(subparsers: argparse._SubParsersAction) -> None:
    defaults = RunConfig.from_env()

    p = subparsers.add_parser("run", help="Run a suite of feature files")
    p.add_argument(
        "--steps", type=Path, default=defaults.steps_path,
        help="Directory holding step definition files",
    )
    p.add_argument(
        "--features", type=Path, default=defaults.features_path,
        help="Directory holding .feature files",
    )
    p.add_argument(
        "--tags", default=defaults.tags,
        help="Tag expression, e.g. '@smoke,@auth' or 'not @wip'",
    )
    p.set_defaults(func=_cmd_run)


def _add_check_tags_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("check-tags", help="Validate a tag expression")
    p.add_argument("expression", help="Tag expression to check")
    p.set_defaults(func=_cmd_check_tags)


def _cmd_run(args: argparse.Namespace) -> int:
    config = RunConfig(
        steps_path=args.steps,
        features_path=args.features,
        tags=args.tags,
    )
    return run_suite(config)


def run_suite(config: RunConfig) -> int:
    """Run the suite described by ``config`` and return an exit code."""
    from SpecRunner.execution.engine import ExecutorEngine
    from SpecRunner.execution.presenter import LoggingRealTimePresenter
    from SpecRunner.pipeline.driver import Driver
    from SpecRunner.pipeline.filesystem import LocalFileSystem
    from SpecRunner.selection.selector import parse_tag_selector

    try:
        selector = parse_tag_selector(config.tags)
        engine = ExecutorEngine(LoggingRealTimePresenter(), selector=selector)
        driver = Driver(LocalFileSystem(), engine)
        driver.read_step_definitions(
            str(config.steps_path), config.step_extension
        )
        result = driver.run_features(
            str(config.features_path), config.feature_extension
        )
    except SpecRunnerError as exc:
        logger.error("[SPECRUNNER] Run aborted: %s", exc)
        return EXIT_ERROR

    for failure in result.parse_failures:
        logger.error(
            "[SPECRUNNER] Could not parse %s: %s",
            failure.feature_file,
            failure.failure,
        )
    logger.info(
        "[SPECRUNNER] features=%d scenarios_passed=%d scenarios_failed=%d "
        "parse_failures=%d",
        len(result.features),
        result.n_success,
        result.n_failure,
        len(result.parse_failures),
    )
    if result.is_success:
        logger.info("[SPECRUNNER] Suite passed")
        return EXIT_PASS
    logger.info("[SPECRUNNER] Suite failed")
    return EXIT_FAIL


def _cmd_check_tags(args: argparse.Namespace) -> int:
    from SpecRunner.selection.expression import describe
    from SpecRunner.selection.parser import parse_tag_expression

    try:
        expression = parse_tag_expression(args.expression)
    except SpecRunnerError as exc:
        logger.error("[SPECRUNNER] %s", exc)
        return EXIT_ERROR
    print(describe(expression))
    return EXIT_PASS


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="specrunner",
        description="Run executable specifications written as Gherkin features",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    _add_run_parser(subparsers)
    _add_check_tags_parser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(getattr(args, "verbose", False))

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
