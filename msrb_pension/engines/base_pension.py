# msrb_pension/engines/base_pension.py
"""
Base pension: benefit percentage, salary multiplication and the 80% cap.

The cap limits the dollar amount only. `benefit_percentage` is reported as
computed, even when it exceeds 80.
"""

import logging
from dataclasses import dataclass

from msrb_pension.errors import InvalidInputError

logger = logging.getLogger(__name__)
debug_logger = logging.getLogger("msrb_pension.debug")

MAX_BENEFIT_FRACTION = 0.80


@dataclass(frozen=True)
class BasePension:
    benefit_fraction: float
    benefit_percentage: float
    uncapped_pension: float
    max_pension: float
    base_pension: float
    capped_at_80_percent: bool


def compute_base_pension(
    average_salary: float,
    years_of_service: float,
    benefit_factor: float,
    max_fraction: float = MAX_BENEFIT_FRACTION,
) -> BasePension:
    if years_of_service < 0:
        raise InvalidInputError(f"years_of_service must be non-negative, got {years_of_service}")
    if average_salary <= 0:
        raise InvalidInputError(f"average_salary must be positive, got {average_salary}")

    benefit_fraction = benefit_factor * years_of_service
    uncapped = average_salary * benefit_fraction
    max_pension = average_salary * max_fraction
    capped = uncapped > max_pension

    if capped:
        debug_logger.debug(
            f"Uncapped pension {uncapped:,.2f} exceeds {max_fraction:.0%} of salary; "
            f"limited to {max_pension:,.2f}"
        )

    return BasePension(
        benefit_fraction=benefit_fraction,
        benefit_percentage=benefit_fraction * 100,
        uncapped_pension=uncapped,
        max_pension=max_pension,
        base_pension=min(uncapped, max_pension),
        capped_at_80_percent=capped,
    )
