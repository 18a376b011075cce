# msrb_pension/cli.py
"""
`msrb-estimate`: print a benefit estimate and COLA projection for one member.

Example:
    msrb-estimate --group 2 --age 55 --years 31 --salary 95000 --service-entry before_2012 \
        --option C --beneficiary-age 55
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from logging_config import ERROR_LOGGER, setup_logging
from msrb_pension.config.loaders import ConfigLoadError, get_statutory_tables, load_statutory_tables
from msrb_pension.config.models import ColaConfig, RetirementOption, ServiceEntryEra
from msrb_pension.engines.calculator import calculate_annual_pension, generate_projection_table
from msrb_pension.engines.cola import projection_to_frame
from msrb_pension.errors import PensionError
from msrb_pension.projections.age_projection import project_by_retirement_age
from msrb_pension.utils.money import format_currency

logger = logging.getLogger(__name__)
error_logger = logging.getLogger(ERROR_LOGGER)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Estimate a Massachusetts state-employee pension.")
    parser.add_argument("--group", required=True, help="Retirement group (1-4)")
    parser.add_argument("--age", type=int, required=True, help="Age at retirement")
    parser.add_argument("--years", type=float, required=True, dest="years_of_service", help="Years of service")
    parser.add_argument("--salary", type=float, required=True, dest="average_salary",
                        help="Average of the highest three consecutive years of salary")
    parser.add_argument("--service-entry", choices=[e.value for e in ServiceEntryEra], default="before_2012")
    parser.add_argument("--option", choices=[o.value for o in RetirementOption], default="A")
    parser.add_argument("--beneficiary-age", type=float, default=None)
    parser.add_argument("--projection-years", type=int, default=5, help="Years of COLA projection")
    parser.add_argument("--cola-rate", type=float, default=0.03)
    parser.add_argument("--cola-base", type=float, default=13000.0)
    parser.add_argument("--by-age", action="store_true", help="Also show the retirement-age projection")
    parser.add_argument("--tables", type=Path, default=None, help="Statutory tables YAML")
    parser.add_argument("--log-dir", type=Path, default=Path("output_dev/pension_logs"))
    parser.add_argument("--debug", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_dir, debug=args.debug)

    raw = {
        "group": args.group,
        "age": args.age,
        "years_of_service": args.years_of_service,
        "average_salary": args.average_salary,
        "service_entry": args.service_entry,
        "retirement_option": args.option,
        "beneficiary_age": args.beneficiary_age,
    }
    try:
        tables = load_statutory_tables(args.tables) if args.tables else get_statutory_tables()
        result = calculate_annual_pension(raw, tables)
        cola = ColaConfig(rate=args.cola_rate, base_amount=args.cola_base)
        rows = generate_projection_table(result, args.projection_years, cola)
    except (ConfigLoadError, PensionError, ValidationError) as e:
        error_logger.error(f"Estimate failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    inp = result.calculation_input
    print(f"{inp.group.label}, age {inp.age}, {inp.years_of_service:g} years, "
          f"salary {format_currency(inp.average_salary)} ({inp.service_entry.value})")
    print(f"Benefit factor {result.benefit_factor:.4f} ({result.factor_table}), "
          f"benefit percentage {result.benefit_percentage:.2f}%")
    if result.capped_at_80_percent:
        print(f"Capped at 80%: {format_currency(result.uncapped_pension_annual)} -> "
              f"{format_currency(result.base_pension_annual)}")
    for option, opt in result.options.items():
        marker = "*" if option == result.selected_option else " "
        line = f"{marker} {opt.description}: {format_currency(opt.annual)}/yr, {format_currency(opt.monthly)}/mo"
        if opt.survivor_annual is not None:
            line += f"; survivor {format_currency(opt.survivor_annual)}/yr"
        print(line)
    for warning in result.warnings:
        print(f"WARNING: {warning}")

    print()
    print(projection_to_frame(rows).round(2).to_string(index=False))

    if args.by_age:
        print()
        frame = project_by_retirement_age(
            inp.group, inp.age, inp.years_of_service, inp.average_salary, inp.service_entry,
            inp.retirement_option, inp.beneficiary_age, tables,
        )
        print(frame.round(4).to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
