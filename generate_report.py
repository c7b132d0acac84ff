"""Build the custom HTML report from a run document."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from config import ReportConfig, load_config
from exceptions import E2EError, MissingInputError, ReportError, ReportGenerationError
from normalizer import normalize
from reporters import BaseReporter, HTMLReporter
from run_document import load_run_document


def generate_report(
    input_path: Path,
    output_path: Path,
    reporter: Optional[BaseReporter] = None,
    logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Load, normalize, render and write one report.

    Raises:
        MissingInputError: the run document does not exist
        MalformedInputError: the run document cannot be parsed
        ReportGenerationError: anything else went wrong; no output file is written
    """
    logger = logger or logging.getLogger("report_generator")
    reporter = reporter or HTMLReporter()

    document = load_run_document(input_path)
    try:
        run = normalize(document, logger=logger)
        target = reporter.generate(run, output_path)
    except ReportError:
        raise
    except Exception as exc:
        raise ReportGenerationError(str(exc) or type(exc).__name__) from exc

    logger.info(
        f"Report covers {run.aggregates.total} test(s): {run.aggregates.passed} passed, "
        f"{run.aggregates.failed} failed, {run.aggregates.skipped} skipped"
    )
    return target


def run_from_config(config: ReportConfig, logger: logging.Logger) -> int:
    """Generate the report described by ``config`` and print the outcome line."""
    try:
        target = generate_report(
            config.input_path,
            config.output_path,
            reporter=HTMLReporter(config),
            logger=logger,
        )
    except MissingInputError as exc:
        logger.error(f"❌ {exc.message}")
        return 1
    except ReportError as exc:
        logger.error(f"❌ Error generating custom report: {exc.message}")
        return 1

    # Shown regardless of log level.
    print(f"✅ Custom report generated: {target}")
    return 0


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Generate the stakeholder HTML report from a JSON run document.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                     # test-results/report.json -> test-results/customReport.html
  %(prog)s --input out/report.json --output out/report.html
  %(prog)s --config e2e.yaml --title "Nightly run"
        """,
    )
    parser.add_argument(
        "--input",
        help="Run document to read (default: test-results/report.json)",
    )
    parser.add_argument(
        "--output",
        help="HTML file to write (default: test-results/customReport.html)",
    )
    parser.add_argument(
        "--title",
        help="Report heading",
    )
    parser.add_argument(
        "--config",
        help="Path to config file (default: e2e.json if exists)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-essential output",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    if args.quiet:
        log_level = logging.WARNING
    elif args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s" if not args.verbose else "[%(levelname)s] %(name)s: %(message)s",
    )
    logger = logging.getLogger("report_generator")

    cli_overrides = {
        "input": args.input,
        "output": args.output,
        "title": args.title,
        "verbose": args.verbose or None,
    }
    try:
        config = load_config(Path(args.config) if args.config else None, cli_overrides)
        exit_code = run_from_config(config.report, logger)
    except E2EError as exc:
        logger.error(f"Error: {exc}")
        exit_code = 1
    except Exception as exc:
        logger.exception(f"Unexpected error: {exc}")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
