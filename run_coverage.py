#!/usr/bin/env python3
# run_coverage.py
# This file is part of Procov - Process Model Test Coverage
#
# Command-line interface for replaying recorded traces against process models

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from logic.assertions import CoverageAssertionError
from logic.runner import TraceCoverageRunner
from model.exceptions import UnknownModel
from parser.exceptions import ParseError
from utils.logger import configure_logging, get_logger
from utils.model_reader import ModelFormatError
from utils.settings import CoverageSettings
from utils.trace_reader import TraceFormatError, validate_trace_file


def build_settings(args: argparse.Namespace) -> CoverageSettings:
    """Combine environment configuration with command line flags.

    Command line values take precedence over the environment.
    """
    settings = CoverageSettings.from_env()
    overrides = {}
    if args.exclude:
        overrides["excluded_model_keys"] = settings.excluded_model_keys | set(args.exclude)
    if args.verbose or args.debug:
        overrides["detailed_logging"] = True
    if args.at_least is not None:
        overrides["class_coverage_at_least"] = args.at_least
    return settings.with_overrides(**overrides) if overrides else settings


def print_method_breakdown(runner: TraceCoverageRunner) -> None:
    """Print per-method coverage after the run."""
    logger = get_logger()

    logger.info("\n📋 Method breakdown:")
    for method, report in runner.method_reports.items():
        logger.info(f"  {method}: {report}")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Process model test coverage from recorded execution traces",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_coverage.py -m order.bpmn -t trace.csv
  python run_coverage.py -m order.bpmn -m billing.bpmn -t trace.csv -v
  python run_coverage.py -m order.bpmn -t trace.csv --at-least 0.8
  python run_coverage.py -m order.bpmn -t trace.csv --condition ">= 50% & < 100%"
  python run_coverage.py -m order.bpmn -t trace.csv -x billing --debug

Trace file format:
  test,kind,model_key,element_id,element_type
  test_happy_path,ELEMENT_ACTIVATED,order,start,START_EVENT
  test_happy_path,SEQUENCE_FLOW_TAKEN,order,flow1,SEQUENCE_FLOW

Exit codes:
  0 ok, 1 trace error, 2 condition parse error, 3 model error,
  4 coverage assertion failed, 5 unexpected error, 6 invalid configuration
        """,
    )

    parser.add_argument(
        "-m", "--model", required=True, type=Path, action="append",
        help="Path to a BPMN model file (repeatable)",
    )

    parser.add_argument(
        "-t", "--trace", required=True, type=Path, help="Path to CSV trace file"
    )

    parser.add_argument(
        "-x", "--exclude", action="append", default=[],
        help="Model key excluded from coverage (repeatable)",
    )

    parser.add_argument(
        "--at-least", type=float, default=None,
        help="Fail unless class coverage ratio is at least this value",
    )

    parser.add_argument(
        "--condition", action="append", default=[],
        help="Class coverage condition, e.g. '>= 80%%' (repeatable)",
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log class and method coverages"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --verbose)"
    )

    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only log warnings and errors"
    )

    parser.add_argument(
        "--validate-only", action="store_true", help="Only validate trace file format"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the coverage command.

    Args:
        argv: Command line arguments, defaults to sys.argv[1:]

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=not args.quiet, debug=args.debug)
    logger = get_logger()

    try:
        logger.info(f"🔍 Validating trace file: {args.trace}")
        count = validate_trace_file(str(args.trace))

        if args.validate_only:
            logger.info(f"✅ Trace validation successful ({count} records). Exiting.")
            return 0

        settings = build_settings(args)
        errors = settings.validate()
        if errors:
            logger.error(f"Invalid configuration: {'; '.join(errors)}")
            return 6

        runner = TraceCoverageRunner(args.model, args.trace, settings)
        for condition in args.condition:
            runner.add_class_condition(condition)

        try:
            report = runner.run()
        finally:
            if args.verbose or args.debug:
                print_method_breakdown(runner)

        missing = runner.missing_elements(report)
        if missing:
            logger.info(f"Missing elements: {', '.join(missing)}")
        return 0

    except TraceFormatError as e:
        logger.error(f"Trace file error: {e}")
        return 1

    except ParseError as e:
        logger.error(f"Condition parsing error: {e}")
        return 2

    except ModelFormatError as e:
        logger.error(f"Model file error: {e}")
        return 3

    except UnknownModel as e:
        logger.error(f"Trace references an undeployed model: {e}")
        return 3

    except CoverageAssertionError as e:
        logger.error(f"Coverage assertion failed: {e}")
        return 4

    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 6

    except KeyboardInterrupt:
        logger.error("Coverage run interrupted by user")
        return 5

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return 5


if __name__ == "__main__":
    sys.exit(main())
