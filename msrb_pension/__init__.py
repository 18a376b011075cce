"""
msrb_pension: Massachusetts state-employee pension benefit engine.

Reproduces the Massachusetts State Retirement Board formulas: benefit factor
lookup, 80% cap, Option A/B/C allowances and COLA projections.
"""

from msrb_pension.config.models import (
    CalculationInput,
    CalculationResult,
    ColaConfig,
    ColaProjectionRow,
    RetirementGroup,
    RetirementOption,
    ServiceEntryEra,
)
from msrb_pension.engines.calculator import calculate_annual_pension, generate_projection_table
from msrb_pension.errors import FactorLookupError, InvalidInputError, PensionError

__all__ = [
    "CalculationInput",
    "CalculationResult",
    "ColaConfig",
    "ColaProjectionRow",
    "FactorLookupError",
    "InvalidInputError",
    "PensionError",
    "RetirementGroup",
    "RetirementOption",
    "ServiceEntryEra",
    "calculate_annual_pension",
    "generate_projection_table",
]
