# msrb_pension/engines/benefit_factor.py
"""
Benefit factor resolver: picks the statutory per-year-of-service multiplier
for a (group, service era, age) combination.

Two schedules exist. Members who joined on or after 2012-04-02 and retire with
fewer than 30 years of service use the reduced `post_2012_under_30` schedule;
everybody else uses `default`. The choice depends on both the era and the
service length.
"""

import logging
from typing import Optional, Tuple

from msrb_pension.config.loaders import get_statutory_tables
from msrb_pension.config.models import (
    FACTOR_TABLE_DEFAULT,
    FACTOR_TABLE_POST_2012,
    RetirementGroup,
    ServiceEntryEra,
    StatutoryTables,
)
from msrb_pension.errors import FactorLookupError

logger = logging.getLogger(__name__)


def select_factor_table(
    service_entry: ServiceEntryEra,
    years_of_service: float,
    tables: Optional[StatutoryTables] = None,
) -> str:
    tables = tables or get_statutory_tables()
    if (
        ServiceEntryEra(service_entry) == ServiceEntryEra.AFTER_2012
        and years_of_service < tables.post_2012_full_schedule_years
    ):
        return FACTOR_TABLE_POST_2012
    return FACTOR_TABLE_DEFAULT


def tabulated_age_range(
    group: RetirementGroup,
    table_name: str,
    tables: Optional[StatutoryTables] = None,
) -> Tuple[int, int]:
    """Youngest and oldest age with a factor for `group` in `table_name`."""
    tables = tables or get_statutory_tables()
    schedule = tables.factor_schedule(table_name, RetirementGroup.parse(group))
    return min(schedule), max(schedule)


def get_benefit_factor(
    group: RetirementGroup,
    service_entry: ServiceEntryEra,
    age: int,
    years_of_service: float,
    tables: Optional[StatutoryTables] = None,
) -> float:
    """
    Return the statutory benefit factor (e.g. 0.025 for 2.5% per year).

    Raises:
        FactorLookupError: if `age` is below the group's minimum tabulated age,
            above the oldest tabulated age, or otherwise missing from the table.
            Factors are never extrapolated.
    """
    tables = tables or get_statutory_tables()
    group = RetirementGroup.parse(group)
    table_name = select_factor_table(service_entry, years_of_service, tables)
    schedule = tables.factor_schedule(table_name, group)
    youngest, oldest = min(schedule), max(schedule)

    if age < youngest:
        raise FactorLookupError(
            f"Age {age} is below the minimum retirement age {youngest} for {group.label} "
            f"({table_name} schedule)"
        )
    if age > oldest:
        raise FactorLookupError(
            f"Age {age} is above the oldest tabulated age {oldest} for {group.label} "
            f"({table_name} schedule)"
        )
    if age not in schedule:
        raise FactorLookupError(f"No benefit factor for age {age} in {group.label} ({table_name} schedule)")

    factor = schedule[age]
    logger.debug(
        f"Benefit factor {factor:.4f} for {group.label}, age {age}, "
        f"{years_of_service} years, {ServiceEntryEra(service_entry).value} ({table_name})"
    )
    return factor
