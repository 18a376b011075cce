# msrb_pension/plan_rules/service.py
"""Helpers that derive engine inputs from raw membership data."""

import logging
from datetime import date, datetime
from typing import Optional, Sequence, Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from msrb_pension.config.models import ServiceEntryEra
from msrb_pension.errors import InvalidInputError

logger = logging.getLogger(__name__)

# Members who joined on or after this date are in the post-reform tier.
REFORM_CUTOFF = date(2012, 4, 2)

DateLike = Union[date, str]


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return isoparse(value).date()
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Unparseable date: {value!r}") from e


def determine_service_entry(membership_date: Optional[DateLike]) -> ServiceEntryEra:
    """Era from the membership date; an unknown date is treated as post-reform."""
    if membership_date is None or membership_date == "":
        logger.debug("No membership date; assuming after_2012")
        return ServiceEntryEra.AFTER_2012
    if _as_date(membership_date) < REFORM_CUTOFF:
        return ServiceEntryEra.BEFORE_2012
    return ServiceEntryEra.AFTER_2012


def years_of_service_between(membership_date: DateLike, as_of: Optional[DateLike] = None) -> int:
    """Completed years of membership as of `as_of` (default today)."""
    start = _as_date(membership_date)
    end = _as_date(as_of) if as_of is not None else date.today()
    if end < start:
        raise InvalidInputError(f"as_of {end} is before membership date {start}")
    return relativedelta(end, start).years


def average_highest_consecutive(salaries: Sequence[float], window: int = 3) -> float:
    """
    Highest average of `window` consecutive annual salaries, in the order given.

    With fewer than `window` years on record, all of them are averaged.
    """
    values = [float(s) for s in salaries]
    if not values:
        raise InvalidInputError("At least one salary is required")
    if any(v < 0 for v in values):
        raise InvalidInputError("Salaries must be non-negative")
    if len(values) <= window:
        return sum(values) / len(values)
    return max(sum(values[i:i + window]) / window for i in range(len(values) - window + 1))
