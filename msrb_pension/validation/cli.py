# msrb_pension/validation/cli.py
"""
Command-line entry point for the validation harness (`msrb-validate`).

Exit status is 0 when every fixture matches both reference sources, 1 when
any comparison is outside tolerance, 2 when fixtures or tables cannot be loaded.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from logging_config import ERROR_LOGGER, setup_logging
from msrb_pension.config.loaders import ConfigLoadError, get_statutory_tables, load_statutory_tables
from msrb_pension.validation.harness import load_fixtures, run_validation

logger = logging.getLogger(__name__)
error_logger = logging.getLogger(ERROR_LOGGER)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate the MSRB pension engine against reference figures.")
    parser.add_argument("--fixtures", type=Path, default=None, help="Fixture YAML (default: packaged fixtures)")
    parser.add_argument("--tables", type=Path, default=None, help="Statutory tables YAML (default: packaged tables)")
    parser.add_argument("--output", type=Path, default=None, help="Write the comparison report to this CSV file")
    parser.add_argument("--log-dir", type=Path, default=Path("output_dev/pension_logs"), help="Log directory")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_dir, debug=args.debug)

    try:
        tables = load_statutory_tables(args.tables) if args.tables else get_statutory_tables()
        fixtures = load_fixtures(args.fixtures)
    except ConfigLoadError as e:
        error_logger.error(f"Could not load validation inputs: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    report = run_validation(fixtures, tables)
    summary = report.fixture_summary()
    print(f"Statutory tables {tables.version}: {len(fixtures)} fixtures, {len(report.records)} comparisons")
    print(summary.to_string(index=False))

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        report.to_frame().to_csv(args.output, index=False)
        logger.info(f"Wrote validation report to {args.output}")

    if not report.passed:
        print(f"{len(report.failures)} comparison(s) outside tolerance", file=sys.stderr)
        for f in report.failures:
            print(f"  {f.fixture}.{f.metric} [{f.source}]: expected {f.expected}, got {f.actual}", file=sys.stderr)
        return 1
    print("All fixtures within tolerance")
    return 0


if __name__ == "__main__":
    sys.exit(main())
