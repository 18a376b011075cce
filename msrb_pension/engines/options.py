# msrb_pension/engines/options.py
"""
Retirement option engine.

Option A pays the full allowance. Option B (annuity protection) takes a small
table-driven reduction. Option C (joint and survivor) reduces the member's own
allowance by an age-pair factor, and the survivor receives two thirds of that
reduced amount.

Monthly figures are always derived from the unrounded annual figure. Rounding
to cents belongs to presentation (see msrb_pension.utils.money).
"""

import logging
from typing import NamedTuple, Optional

from msrb_pension.config.loaders import get_statutory_tables
from msrb_pension.config.models import OptionResult, RetirementOption, StatutoryTables
from msrb_pension.errors import FactorLookupError, InvalidInputError
from msrb_pension.utils.money import round_half_up

logger = logging.getLogger(__name__)


class OptionCLookup(NamedTuple):
    factor: float
    lookup_key: str
    used_default: bool


def age_pair_key(member_age: float, beneficiary_age: float) -> str:
    return f"{round_half_up(member_age)}-{round_half_up(beneficiary_age)}"


def option_b_reduction_rate(member_age: float, tables: Optional[StatutoryTables] = None) -> float:
    """Rate from the band with the highest `min_age` not above `member_age`."""
    tables = tables or get_statutory_tables()
    applicable = [band for band in tables.option_b if band.min_age <= member_age]
    if not applicable:
        raise FactorLookupError(f"No Option B reduction band covers member age {member_age}")
    return applicable[-1].rate


def lookup_option_c_factor(
    member_age: float,
    beneficiary_age: float,
    tables: Optional[StatutoryTables] = None,
) -> OptionCLookup:
    tables = tables or get_statutory_tables()
    key = age_pair_key(member_age, beneficiary_age)
    factors = tables.option_c_factors
    if key in factors:
        return OptionCLookup(factors[key], key, False)

    default = tables.option_c.default
    if default is None:
        raise FactorLookupError(f"No Option C reduction factor for ages {key} and no default configured")
    logger.warning(f"Option C age pair {key} not in table; using default factor {default}")
    return OptionCLookup(default, key, True)


def apply_retirement_option(
    base_pension: float,
    option: RetirementOption,
    member_age: float,
    beneficiary_age: Optional[float] = None,
    tables: Optional[StatutoryTables] = None,
) -> OptionResult:
    """Apply exactly one retirement option to the (already capped) base pension."""
    tables = tables or get_statutory_tables()
    option = RetirementOption(option)

    if option == RetirementOption.A:
        return OptionResult(
            option=option,
            description="Option A: Full Allowance",
            annual=base_pension,
            monthly=base_pension / 12,
        )

    if option == RetirementOption.B:
        rate = option_b_reduction_rate(member_age, tables)
        annual = base_pension * (1 - rate)
        return OptionResult(
            option=option,
            description=f"Option B: Annuity Protection ({rate:.2%} reduction)",
            annual=annual,
            monthly=annual / 12,
            reduction_factor=1 - rate,
        )

    if beneficiary_age is None:
        raise InvalidInputError("Option C requires a beneficiary age")
    if beneficiary_age <= 0:
        raise InvalidInputError(f"Beneficiary age must be positive, got {beneficiary_age}")

    lookup = lookup_option_c_factor(member_age, beneficiary_age, tables)
    member_annual = base_pension * lookup.factor
    survivor_annual = member_annual * tables.option_c.survivor_numerator / tables.option_c.survivor_denominator
    warning = None
    if lookup.used_default:
        warning = (
            f"Option C factor for ages {lookup.lookup_key} is not tabulated; "
            f"default factor {lookup.factor} used. Confirm with the MSRB calculator."
        )

    return OptionResult(
        option=option,
        description=(
            f"Option C: Joint & Survivor (66.67%) - {1 - lookup.factor:.2%} reduction "
            f"(ages {lookup.lookup_key}{', default factor' if lookup.used_default else ''})"
        ),
        annual=member_annual,
        monthly=member_annual / 12,
        reduction_factor=lookup.factor,
        survivor_annual=survivor_annual,
        survivor_monthly=survivor_annual / 12,
        lookup_key=lookup.lookup_key,
        low_confidence=lookup.used_default,
        warning=warning,
    )
