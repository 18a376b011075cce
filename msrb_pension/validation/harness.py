# msrb_pension/validation/harness.py
"""
Validation harness: runs the engine over reference fixtures and compares the
results with two independent sources.

- "official": figures hand-transcribed from the MSRB calculator or charts,
  compared after rounding the engine output to cents.
- "reference": the same figures recomputed by `independent_reference` using
  decimal arithmetic and the factors transcribed into the fixture, without
  touching the engine or its tables.

A fixture passes only if every metric is within its tolerance against both.
A result that fell back to a default factor fails unless the fixture expects
`low_confidence: true`.
"""

import logging
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field, ValidationError, field_validator

from msrb_pension import schema
from msrb_pension.config.loaders import ConfigLoadError, load_fixture_file
from msrb_pension.config.models import (
    CalculationInput,
    CalculationResult,
    RetirementOption,
    StatutoryTables,
)
from msrb_pension.engines.calculator import calculate_annual_pension
from msrb_pension.errors import PensionError
from msrb_pension.utils.money import round_currency

logger = logging.getLogger(__name__)
val_logger = logging.getLogger("msrb_pension.validation")

SOURCE_OFFICIAL = "official"
SOURCE_REFERENCE = "reference"

# Non-money metrics are compared at this absolute tolerance regardless of the fixture.
RATIO_TOLERANCE = 1e-9


class ToleranceExceededError(PensionError):
    """A computed figure differs from its reference by more than the allowed delta."""

    pass


def _option_value(option: RetirementOption, attr: str) -> Callable[[CalculationResult], Optional[float]]:
    def extract(result: CalculationResult) -> Optional[float]:
        opt = result.options.get(option)
        return getattr(opt, attr) if opt is not None else None
    return extract


# metric name -> (extractor, is_money)
METRICS: Dict[str, tuple] = {
    "benefit_factor": (lambda r: r.benefit_factor, False),
    "benefit_percentage": (lambda r: r.benefit_percentage, False),
    "capped_at_80_percent": (lambda r: r.capped_at_80_percent, False),
    "low_confidence": (lambda r: r.low_confidence, False),
    "uncapped_pension_annual": (lambda r: r.uncapped_pension_annual, True),
    "base_pension_annual": (lambda r: r.base_pension_annual, True),
    "option_a_annual": (_option_value(RetirementOption.A, "annual"), True),
    "option_a_monthly": (_option_value(RetirementOption.A, "monthly"), True),
    "option_b_annual": (_option_value(RetirementOption.B, "annual"), True),
    "option_b_monthly": (_option_value(RetirementOption.B, "monthly"), True),
    "option_c_member_annual": (_option_value(RetirementOption.C, "annual"), True),
    "option_c_member_monthly": (_option_value(RetirementOption.C, "monthly"), True),
    "option_c_survivor_annual": (_option_value(RetirementOption.C, "survivor_annual"), True),
    "option_c_survivor_monthly": (_option_value(RetirementOption.C, "survivor_monthly"), True),
}


class TranscribedFactors(BaseModel):
    benefit_factor: float = Field(..., gt=0.0)
    option_b_rate: Optional[float] = Field(None, ge=0.0, lt=1.0)
    option_c_factor: Optional[float] = Field(None, gt=0.0, le=1.0)


class ReferenceFixture(BaseModel):
    name: str
    source: str = ""
    tolerance: float = Field(0.01, ge=0.0)
    input: CalculationInput
    transcribed: Optional[TranscribedFactors] = None
    expected: Dict[str, Union[bool, float]]

    @field_validator("expected")
    @classmethod
    def check_metric_names(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        unknown = sorted(set(v) - set(METRICS))
        if unknown:
            raise ValueError(f"Unknown metrics {unknown}; expected a subset of {sorted(METRICS)}")
        return v


@dataclass(frozen=True)
class ComparisonRecord:
    fixture: str
    metric: str
    source: str
    expected: Any
    actual: Any
    difference: float
    tolerance: float
    passed: bool


@dataclass
class ValidationReport:
    records: List[ComparisonRecord] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.records)

    @property
    def failures(self) -> List[ComparisonRecord]:
        return [r for r in self.records if not r.passed]

    def to_frame(self) -> pd.DataFrame:
        if not self.records:
            return pd.DataFrame(columns=schema.VALIDATION_REPORT_COLS)
        return pd.DataFrame([asdict(r) for r in self.records])[schema.VALIDATION_REPORT_COLS]

    def fixture_summary(self) -> pd.DataFrame:
        """Per-fixture pass/fail with the largest absolute discrepancy."""
        df = self.to_frame()
        if df.empty:
            return pd.DataFrame(columns=[schema.VAL_FIXTURE, schema.VAL_PASSED, "max_abs_difference"])
        df["abs_difference"] = df[schema.VAL_DIFFERENCE].abs()
        return (
            df.groupby(schema.VAL_FIXTURE, sort=False)
            .agg(passed=(schema.VAL_PASSED, "all"), max_abs_difference=("abs_difference", "max"))
            .reset_index()
        )

    def raise_for_failures(self) -> None:
        failures = self.failures
        if failures:
            details = "; ".join(
                f"{f.fixture}.{f.metric} ({f.source}): expected {f.expected}, got {f.actual}" for f in failures[:10]
            )
            raise ToleranceExceededError(f"{len(failures)} comparison(s) outside tolerance: {details}")


def load_fixtures(path: Optional[Union[str, Path]] = None) -> List[ReferenceFixture]:
    raw = load_fixture_file(path)
    try:
        return [ReferenceFixture.model_validate(item) for item in raw["fixtures"]]
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid reference fixture in {path or 'packaged fixtures'}: {e}") from e


def independent_reference(fixture: ReferenceFixture) -> Dict[str, Union[bool, Decimal]]:
    """
    Recompute the fixture's figures in Decimal from its transcribed factors.

    Uses only the fixture itself, never the engine or its tables. Metrics that need a factor the
    fixture does not transcribe are omitted.
    """
    if fixture.transcribed is None:
        return {}
    t = fixture.transcribed
    inp = fixture.input
    salary = Decimal(repr(inp.average_salary))
    fraction = Decimal(repr(t.benefit_factor)) * Decimal(repr(inp.years_of_service))
    uncapped = salary * fraction
    maximum = salary * Decimal("0.80")
    base = min(uncapped, maximum)
    twelve = Decimal(12)

    out: Dict[str, Union[bool, Decimal]] = {
        "benefit_factor": Decimal(repr(t.benefit_factor)),
        "benefit_percentage": fraction * 100,
        "capped_at_80_percent": uncapped > maximum,
        "uncapped_pension_annual": uncapped,
        "base_pension_annual": base,
        "option_a_annual": base,
        "option_a_monthly": base / twelve,
    }
    if t.option_b_rate is not None:
        b = base * (1 - Decimal(repr(t.option_b_rate)))
        out["option_b_annual"] = b
        out["option_b_monthly"] = b / twelve
    if t.option_c_factor is not None:
        member = base * Decimal(repr(t.option_c_factor))
        survivor = member * 2 / 3
        out["option_c_member_annual"] = member
        out["option_c_member_monthly"] = member / twelve
        out["option_c_survivor_annual"] = survivor
        out["option_c_survivor_monthly"] = survivor / twelve
    return out


def _compare(fixture: str, metric: str, source: str, expected: Any, actual: Any, tolerance: float) -> ComparisonRecord:
    if actual is None:
        return ComparisonRecord(fixture, metric, source, expected, None, float("nan"), tolerance, False)
    if isinstance(expected, bool) or isinstance(actual, bool):
        passed = bool(expected) == bool(actual)
        return ComparisonRecord(fixture, metric, source, expected, actual, float(bool(actual) != bool(expected)),
                                0.0, passed)
    expected_f = float(expected)
    actual_f = float(actual)
    diff = actual_f - expected_f
    passed = bool(np.isclose(actual_f, expected_f, rtol=0.0, atol=tolerance))
    return ComparisonRecord(fixture, metric, source, expected_f, actual_f, diff, tolerance, passed)


def compare_fixture(fixture: ReferenceFixture, tables: Optional[StatutoryTables] = None) -> List[ComparisonRecord]:
    try:
        result = calculate_annual_pension(fixture.input, tables)
    except PensionError as e:
        logger.error(f"Fixture {fixture.name} could not be calculated: {e}")
        return [
            ComparisonRecord(fixture.name, metric, SOURCE_OFFICIAL, expected, None, float("nan"), fixture.tolerance,
                             False)
            for metric, expected in fixture.expected.items()
        ]

    reference = independent_reference(fixture)
    records = []
    for metric, expected in fixture.expected.items():
        extract, is_money = METRICS[metric]
        actual = extract(result)
        tolerance = fixture.tolerance if is_money else RATIO_TOLERANCE
        shown = round_currency(actual) if (is_money and actual is not None) else actual
        records.append(_compare(fixture.name, metric, SOURCE_OFFICIAL, expected, shown, tolerance))
        if metric in reference:
            records.append(_compare(fixture.name, metric, SOURCE_REFERENCE, reference[metric], actual, tolerance))

    # A default-factor fallback fails the fixture unless it lists low_confidence: true.
    if "low_confidence" not in fixture.expected:
        records.append(
            _compare(fixture.name, "low_confidence", SOURCE_OFFICIAL, False, result.low_confidence, RATIO_TOLERANCE)
        )
    return records


def run_validation(
    fixtures: List[ReferenceFixture],
    tables: Optional[StatutoryTables] = None,
) -> ValidationReport:
    report = ValidationReport()
    for fixture in fixtures:
        records = compare_fixture(fixture, tables)
        report.records.extend(records)
        failed = [r for r in records if not r.passed]
        if failed:
            for r in failed:
                val_logger.warning(
                    f"FAIL {fixture.name}.{r.metric} [{r.source}]: expected {r.expected}, "
                    f"got {r.actual} (diff {r.difference}, tolerance {r.tolerance})"
                )
        else:
            val_logger.info(f"PASS {fixture.name} ({len(records)} comparisons)")
    val_logger.info(
        f"Validation finished: {len(fixtures)} fixtures, {len(report.records)} comparisons, "
        f"{len(report.failures)} failures"
    )
    return report
