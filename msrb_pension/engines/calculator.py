# msrb_pension/engines/calculator.py
"""
Engine entry points.

calculate_annual_pension runs the full pipeline for one member:
benefit factor -> base pension (80% cap) -> retirement options -> result.
generate_projection_table expands a result into a multi-year COLA table.

Both are pure: no I/O beyond the once-per-process table load, no shared
mutable state, identical input gives identical output.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from msrb_pension.config.loaders import get_statutory_tables
from msrb_pension.config.models import (
    CalculationInput,
    CalculationResult,
    ColaConfig,
    ColaProjectionRow,
    RetirementOption,
    StatutoryTables,
)
from msrb_pension.engines.base_pension import compute_base_pension
from msrb_pension.engines.benefit_factor import get_benefit_factor, select_factor_table
from msrb_pension.engines.cola import generate_cola_projection
from msrb_pension.engines.options import apply_retirement_option
from msrb_pension.errors import InvalidInputError

logger = logging.getLogger(__name__)
calc_logger = logging.getLogger("msrb_pension.calculation")


def coerce_input(raw: Union[CalculationInput, Mapping[str, Any]]) -> CalculationInput:
    if isinstance(raw, CalculationInput):
        return raw
    if isinstance(raw, Mapping):
        return CalculationInput.from_raw(raw)
    raise InvalidInputError(f"Expected CalculationInput or mapping, got {type(raw).__name__}")


def calculate_annual_pension(
    calculation_input: Union[CalculationInput, Mapping[str, Any]],
    tables: Optional[StatutoryTables] = None,
) -> CalculationResult:
    """
    Compute the annual pension for one member.

    Options A and B are always computed; Option C is computed when a
    beneficiary age is known. `selected_option` names the member's election.

    Raises:
        InvalidInputError: malformed input, or Option C without a beneficiary age.
        FactorLookupError: the age is outside the statutory tables.
    """
    inp = coerce_input(calculation_input)
    tables = tables or get_statutory_tables()

    if inp.retirement_option == RetirementOption.C and inp.beneficiary_age is None:
        raise InvalidInputError("Option C requires a beneficiary age")

    factor_table = select_factor_table(inp.service_entry, inp.years_of_service, tables)
    factor = get_benefit_factor(inp.group, inp.service_entry, inp.age, inp.years_of_service, tables)
    base = compute_base_pension(
        inp.average_salary, inp.years_of_service, factor, max_fraction=tables.max_benefit_fraction
    )

    options = {
        RetirementOption.A: apply_retirement_option(base.base_pension, RetirementOption.A, inp.age, tables=tables),
        RetirementOption.B: apply_retirement_option(base.base_pension, RetirementOption.B, inp.age, tables=tables),
    }
    if inp.beneficiary_age is not None:
        options[RetirementOption.C] = apply_retirement_option(
            base.base_pension, RetirementOption.C, inp.age, inp.beneficiary_age, tables=tables
        )

    warnings = tuple(o.warning for o in options.values() if o.warning)
    low_confidence = any(o.low_confidence for o in options.values())

    result = CalculationResult(
        calculation_input=inp,
        tables_version=tables.version,
        factor_table=factor_table,
        benefit_factor=factor,
        benefit_percentage=base.benefit_percentage,
        uncapped_pension_annual=base.uncapped_pension,
        max_pension_annual=base.max_pension,
        base_pension_annual=base.base_pension,
        capped_at_80_percent=base.capped_at_80_percent,
        selected_option=inp.retirement_option,
        options=options,
        low_confidence=low_confidence,
        warnings=warnings,
    )

    calc_logger.info(
        f"{inp.group.label}, age {inp.age}, {inp.years_of_service} yrs, "
        f"salary {inp.average_salary:,.2f}: factor {factor:.4f}, "
        f"{base.benefit_percentage:.2f}% -> base {base.base_pension:,.2f}"
        f"{' (capped)' if base.capped_at_80_percent else ''}; "
        f"Option {inp.retirement_option.value} annual {result.selected.annual:,.2f}"
        f"{' [low confidence]' if low_confidence else ''}"
    )
    return result


def generate_projection_table(
    result: CalculationResult,
    years: int = 5,
    cola_config: Optional[ColaConfig] = None,
) -> List[ColaProjectionRow]:
    """COLA projection starting from the elected option's annual amount."""
    return generate_cola_projection(result.selected.annual, years, cola_config)
