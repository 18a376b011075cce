# msrb_pension/plan_rules/eligibility.py
"""
Superannuation eligibility for MSRB members.

Service before 2012-04-02: 20+ years at any age, or age 55+ with 10+ years.
Service on/after 2012-04-02: 10+ years and the group's minimum age.
"""

import logging
from typing import NamedTuple, Optional

from msrb_pension.config.loaders import get_statutory_tables
from msrb_pension.config.models import RetirementGroup, ServiceEntryEra, StatutoryTables

logger = logging.getLogger(__name__)


class EligibilityResult(NamedTuple):
    eligible: bool
    message: str = ""


def check_eligibility(
    age: int,
    years_of_service: float,
    group: RetirementGroup,
    service_entry: ServiceEntryEra,
    tables: Optional[StatutoryTables] = None,
) -> EligibilityResult:
    tables = tables or get_statutory_tables()
    group = RetirementGroup.parse(group)
    service_entry = ServiceEntryEra(service_entry)

    if service_entry == ServiceEntryEra.BEFORE_2012:
        rules = tables.eligibility.before_2012
        if years_of_service >= rules.min_years_any_age:
            return EligibilityResult(True)
        if age >= rules.min_age_with_vesting and years_of_service >= rules.vesting_years:
            return EligibilityResult(True)
        return EligibilityResult(
            False,
            f"Not eligible: service before 04/02/2012 requires {rules.min_years_any_age:g}+ years, "
            f"or age {rules.min_age_with_vesting}+ with {rules.vesting_years:g}+ years.",
        )

    rules = tables.eligibility.after_2012
    if years_of_service < rules.vesting_years:
        return EligibilityResult(
            False, f"Not eligible: service on/after 04/02/2012 requires at least {rules.vesting_years:g} years."
        )
    min_age = rules.minimum_ages[group]
    if age < min_age:
        return EligibilityResult(
            False, f"Not eligible: {group.label} requires minimum age {min_age} for service on/after 04/02/2012."
        )
    return EligibilityResult(True)
