# msrb_pension/projections/age_projection.py
"""
Retirement-age projection: what the allowance would be if the member kept
working and retired one, two, ... years later.

Each candidate age adds one year of service. Ages where the member is not
eligible, or where the statutory tables have no factor, are skipped. The table
ends at the group's oldest projection age, or at the first age where the
benefit reaches the 80% maximum.
"""

import logging
from typing import Optional

import pandas as pd

from msrb_pension import schema
from msrb_pension.config.loaders import get_statutory_tables
from msrb_pension.config.models import (
    CalculationInput,
    RetirementGroup,
    RetirementOption,
    ServiceEntryEra,
    StatutoryTables,
)
from msrb_pension.engines.calculator import calculate_annual_pension
from msrb_pension.errors import FactorLookupError
from msrb_pension.plan_rules.eligibility import check_eligibility

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 30


def project_by_retirement_age(
    group: RetirementGroup,
    start_age: int,
    years_of_service: float,
    average_salary: float,
    service_entry: ServiceEntryEra,
    retirement_option: RetirementOption = RetirementOption.A,
    beneficiary_age: Optional[float] = None,
    tables: Optional[StatutoryTables] = None,
    max_iterations: int = MAX_ITERATIONS,
) -> pd.DataFrame:
    """
    One row per eligible retirement age from `start_age` upward.

    The beneficiary ages alongside the member, so each Option C row uses the
    age pair at that retirement date. `benefit_percentage` is reported
    uncapped; `capped_at_80_percent` marks rows limited by the maximum.
    """
    tables = tables or get_statutory_tables()
    group = RetirementGroup.parse(group)
    retirement_option = RetirementOption(retirement_option)
    max_age = tables.projection_max_ages[group]

    rows = []
    for offset in range(max_iterations):
        age = start_age + offset
        yos = years_of_service + offset
        if age > max_age:
            break

        eligibility = check_eligibility(age, yos, group, service_entry, tables)
        if not eligibility.eligible:
            logger.debug(f"Skipping age {age}: {eligibility.message}")
            continue

        inp = CalculationInput(
            group=group,
            age=age,
            years_of_service=yos,
            average_salary=average_salary,
            service_entry=service_entry,
            retirement_option=retirement_option,
            beneficiary_age=beneficiary_age + offset if beneficiary_age is not None else None,
        )
        try:
            result = calculate_annual_pension(inp, tables)
        except FactorLookupError as e:
            logger.debug(f"Skipping age {age}: {e}")
            continue

        selected = result.selected
        rows.append(
            {
                schema.PROJ_AGE: age,
                schema.PROJ_YEARS_OF_SERVICE: yos,
                schema.PROJ_BENEFIT_FACTOR: result.benefit_factor,
                schema.PROJ_BENEFIT_PERCENTAGE: result.benefit_percentage,
                schema.PROJ_CAPPED: result.capped_at_80_percent,
                schema.PROJ_ANNUAL_PENSION: selected.annual,
                schema.PROJ_MONTHLY_PENSION: selected.monthly,
                schema.PROJ_SURVIVOR_ANNUAL: selected.survivor_annual,
                schema.PROJ_SURVIVOR_MONTHLY: selected.survivor_monthly,
            }
        )

        if result.benefit_percentage >= tables.max_benefit_fraction * 100:
            break

    logger.info(
        f"{group.label} projection from age {start_age}: {len(rows)} eligible retirement ages"
    )
    return pd.DataFrame(rows, columns=schema.AGE_PROJECTION_COLS)
