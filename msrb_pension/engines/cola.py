# msrb_pension/engines/cola.py
"""
Cost-of-living adjustments (COLA) for an in-pay Massachusetts pension.

Each year the allowance grows by `rate` applied to at most `base_amount`
(3% of the first $13,000, i.e. $390/year, for FY2025). The next year starts
from the adjusted amount. The 80% cap does not apply after retirement.
"""

import logging
from typing import Dict, List, Optional, Sequence

import pandas as pd

from msrb_pension import schema
from msrb_pension.config.models import ColaConfig, ColaProjectionRow
from msrb_pension.errors import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_COLA = ColaConfig()

# Structures compared by compare_cola_structures: the current law plus the two
# proposals the Special COLA Commission has looked at.
COLA_STRUCTURES: Dict[str, ColaConfig] = {
    "current": ColaConfig(rate=0.03, base_amount=13000.0),
    "increased_base": ColaConfig(rate=0.03, base_amount=20000.0),
    "increased_rate": ColaConfig(rate=0.035, base_amount=13000.0),
}


def cola_increase(pension: float, config: Optional[ColaConfig] = None) -> float:
    config = config or DEFAULT_COLA
    if pension <= 0:
        return 0.0
    return min(pension * config.rate, config.annual_cap)


def generate_cola_projection(
    starting_pension: float,
    years: int = 5,
    config: Optional[ColaConfig] = None,
) -> List[ColaProjectionRow]:
    """Rows for years 1..`years`; rebuilt from scratch on every call."""
    config = config or DEFAULT_COLA
    if years < 0:
        raise InvalidInputError(f"years must be non-negative, got {years}")
    if starting_pension < 0:
        raise InvalidInputError(f"starting_pension must be non-negative, got {starting_pension}")

    rows = []
    current = starting_pension
    cumulative = 0.0
    for year in range(1, years + 1):
        increase = cola_increase(current, config)
        ending = current + increase
        cumulative += increase
        rows.append(
            ColaProjectionRow(
                year=year,
                starting_pension=current,
                cola_increase=increase,
                ending_pension=ending,
                monthly_pension=ending / 12,
                cumulative_increase=cumulative,
                at_maximum=increase >= config.annual_cap,
            )
        )
        current = ending

    logger.debug(
        f"COLA projection: {years} years from {starting_pension:,.2f} "
        f"({config.rate:.2%} of first {config.base_amount:,.0f}) -> {current:,.2f}"
    )
    return rows


def projection_to_frame(rows: Sequence[ColaProjectionRow]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=schema.COLA_PROJECTION_COLS)
    df = pd.DataFrame([row.model_dump() for row in rows])
    return df[schema.COLA_PROJECTION_COLS]


def compare_cola_structures(
    starting_pension: float,
    years: int = 20,
    structures: Optional[Dict[str, ColaConfig]] = None,
) -> pd.DataFrame:
    """Total COLA and final allowance after `years` under each structure."""
    structures = structures or COLA_STRUCTURES
    records = []
    for name, config in structures.items():
        rows = generate_cola_projection(starting_pension, years, config)
        records.append(
            {
                schema.COLA_STRUCTURE: name,
                schema.COLA_RATE: config.rate,
                schema.COLA_BASE_AMOUNT: config.base_amount,
                schema.COLA_ANNUAL_CAP: config.annual_cap,
                schema.COLA_TOTAL_INCREASE: rows[-1].cumulative_increase if rows else 0.0,
                schema.COLA_FINAL_PENSION: rows[-1].ending_pension if rows else starting_pension,
            }
        )
    return pd.DataFrame(records)
