# msrb_pension/config/models.py
"""
Pydantic models for the benefit engine: caller inputs, calculation results,
COLA settings, and the structure of the statutory tables loaded from YAML
(statutory_tables.yaml).
"""

import logging
import re
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from msrb_pension.errors import InvalidInputError

logger = logging.getLogger(__name__)

_AGE_PAIR_KEY = re.compile(r"^\d+-\d+$")

FACTOR_TABLE_DEFAULT = "default"
FACTOR_TABLE_POST_2012 = "post_2012_under_30"


def _freeze(value: Any) -> Any:
    """Replace nested dicts with read-only views."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    return value


# --- Enumerations ---


class RetirementGroup(IntEnum):
    """MSRB retirement group; selects the benefit factor schedule and minimum ages."""

    GROUP_1 = 1
    GROUP_2 = 2
    GROUP_3 = 3
    GROUP_4 = 4

    @classmethod
    def parse(cls, value: Any) -> "RetirementGroup":
        """Accepts 2, "2", "Group 2", "GROUP_2" and "group2"."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            digits = re.sub(r"[^0-9]", "", value)
            if not digits:
                raise ValueError(f"Unrecognised retirement group: {value!r}")
            value = int(digits)
        try:
            return cls(int(value))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Unrecognised retirement group: {value!r}") from e

    @property
    def label(self) -> str:
        return f"Group {self.value}"


class ServiceEntryEra(str, Enum):
    """Whether membership began before or on/after 2012-04-02."""

    BEFORE_2012 = "before_2012"
    AFTER_2012 = "after_2012"


class RetirementOption(str, Enum):
    A = "A"
    B = "B"
    C = "C"


# --- Engine inputs ---


class CalculationInput(BaseModel):
    """One member's retirement scenario."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    group: RetirementGroup
    age: int = Field(..., ge=0, description="Age at retirement in whole years")
    years_of_service: float = Field(..., ge=0.0, description="Creditable service, may be fractional")
    average_salary: float = Field(
        ..., gt=0.0, description="Average of the highest three consecutive years of regular compensation"
    )
    service_entry: ServiceEntryEra
    retirement_option: RetirementOption = RetirementOption.A
    beneficiary_age: Optional[float] = Field(None, gt=0.0, description="Required for Option C")

    @field_validator("group", mode="before")
    @classmethod
    def _parse_group(cls, v: Any) -> RetirementGroup:
        return RetirementGroup.parse(v)

    @field_validator("retirement_option", mode="before")
    @classmethod
    def _parse_option(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid calculation input: {e}") from e

    @model_validator(mode='after')
    def check_beneficiary_for_option_c(self) -> 'CalculationInput':
        if self.retirement_option == RetirementOption.C and self.beneficiary_age is None:
            raise ValueError("Option C requires a beneficiary age")
        return self

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "CalculationInput":
        """Build an input from a plain mapping, raising InvalidInputError on bad data."""
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            raise InvalidInputError(f"Invalid calculation input (keys={list(raw.keys())}): {e}") from e


# --- Engine outputs ---


class OptionResult(BaseModel):
    """Allowance payable under one retirement option. For Option C `annual` is the member's share."""

    model_config = ConfigDict(frozen=True)

    option: RetirementOption
    description: str
    annual: float
    monthly: float
    reduction_factor: float = Field(1.0, description="Fraction of the Option A allowance kept")
    survivor_annual: Optional[float] = None
    survivor_monthly: Optional[float] = None
    lookup_key: Optional[str] = None
    low_confidence: bool = False
    warning: Optional[str] = None

    @property
    def reduction_rate(self) -> float:
        return 1.0 - self.reduction_factor


class CalculationResult(BaseModel):
    """Snapshot of one calculation; derived entirely from `calculation_input`."""

    model_config = ConfigDict(frozen=True)

    calculation_input: CalculationInput
    tables_version: str
    factor_table: str
    benefit_factor: float
    benefit_percentage: float = Field(..., description="years x factor x 100, never capped")
    uncapped_pension_annual: float
    max_pension_annual: float
    base_pension_annual: float
    capped_at_80_percent: bool
    selected_option: RetirementOption
    options: Dict[RetirementOption, OptionResult]
    low_confidence: bool = False
    warnings: Tuple[str, ...] = ()

    @field_validator("options", mode="after")
    @classmethod
    def _freeze_options(cls, v: Dict[RetirementOption, OptionResult]) -> Mapping[RetirementOption, OptionResult]:
        return _freeze(v)

    @field_serializer("options")
    def _dump_options(self, v: Mapping[RetirementOption, OptionResult]) -> Dict[RetirementOption, OptionResult]:
        return dict(v)

    @property
    def selected(self) -> OptionResult:
        return self.options[self.selected_option]

    @property
    def base_pension_monthly(self) -> float:
        return self.base_pension_annual / 12


class ColaConfig(BaseModel):
    """Massachusetts COLA: `rate` applied to the first `base_amount` of the annual allowance."""

    model_config = ConfigDict(frozen=True)

    rate: float = Field(0.03, ge=0.0, le=1.0)
    base_amount: float = Field(13000.0, ge=0.0)
    dollar_cap: Optional[float] = Field(
        None, ge=0.0, description="Annual increase cap; defaults to rate x base_amount"
    )

    @property
    def annual_cap(self) -> float:
        if self.dollar_cap is not None:
            return self.dollar_cap
        return self.base_amount * self.rate


class ColaProjectionRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    starting_pension: float
    cola_increase: float
    ending_pension: float
    monthly_pension: float
    cumulative_increase: float
    at_maximum: bool


# --- Statutory tables ---


class Before2012Eligibility(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_years_any_age: float = Field(..., ge=0)
    min_age_with_vesting: int = Field(..., ge=0)
    vesting_years: float = Field(..., ge=0)


class After2012Eligibility(BaseModel):
    model_config = ConfigDict(frozen=True)

    vesting_years: float = Field(..., ge=0)
    minimum_ages: Dict[RetirementGroup, int]

    @field_validator("minimum_ages", mode="after")
    @classmethod
    def _freeze_minimum_ages(cls, v: Dict[RetirementGroup, int]) -> Mapping[RetirementGroup, int]:
        return _freeze(v)

    @field_serializer("minimum_ages")
    def _dump_minimum_ages(self, v: Mapping[RetirementGroup, int]) -> Dict[RetirementGroup, int]:
        return _thaw(v)


class EligibilityRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    before_2012: Before2012Eligibility
    after_2012: After2012Eligibility


class OptionBBand(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_age: int = Field(..., ge=0)
    rate: float = Field(..., ge=0.0, lt=1.0)


class OptionCReductionTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    survivor_numerator: int = Field(2, gt=0)
    survivor_denominator: int = Field(3, gt=0)
    default: Optional[float] = Field(None, gt=0.0, le=1.0)
    factors: Dict[str, float] = Field(default_factory=dict, validate_default=True)

    @field_validator("factors")
    @classmethod
    def check_factor_keys(cls, v: Dict[str, float]) -> Mapping[str, float]:
        for key, factor in v.items():
            if not _AGE_PAIR_KEY.match(key):
                raise ValueError(f"Option C key {key!r} must look like 'memberAge-beneficiaryAge'")
            if not 0.0 < factor <= 1.0:
                raise ValueError(f"Option C factor for {key} must be in (0, 1], got {factor}")
        return _freeze(v)

    @field_serializer("factors")
    def _dump_factors(self, v: Mapping[str, float]) -> Dict[str, float]:
        return _thaw(v)

    @model_validator(mode='after')
    def check_survivor_fraction(self) -> 'OptionCReductionTable':
        if self.survivor_numerator > self.survivor_denominator:
            raise ValueError("Survivor fraction cannot exceed 1")
        return self


class StatutoryTables(BaseModel):
    """Validated contents of statutory_tables.yaml. Treated as read-only."""

    model_config = ConfigDict(frozen=True)

    version: str
    max_benefit_fraction: float = Field(0.80, gt=0.0, le=1.0)
    post_2012_full_schedule_years: float = Field(30, gt=0)
    benefit_factors: Dict[str, Dict[RetirementGroup, Dict[int, float]]]
    eligibility: EligibilityRules
    projection_max_ages: Dict[RetirementGroup, int]
    option_b: Tuple[OptionBBand, ...] = Field(..., min_length=1)
    option_c: OptionCReductionTable

    @field_validator("benefit_factors", "projection_max_ages", mode="after")
    @classmethod
    def _freeze_tables(cls, v: Dict[Any, Any]) -> Mapping[Any, Any]:
        return _freeze(v)

    @field_serializer("benefit_factors", "projection_max_ages")
    def _dump_tables(self, v: Mapping[Any, Any]) -> Dict[Any, Any]:
        return _thaw(v)

    @model_validator(mode='after')
    def check_tables_complete(self) -> 'StatutoryTables':
        for table_name in (FACTOR_TABLE_DEFAULT, FACTOR_TABLE_POST_2012):
            if table_name not in self.benefit_factors:
                raise ValueError(f"benefit_factors is missing the '{table_name}' table")
            table = self.benefit_factors[table_name]
            for group in RetirementGroup:
                schedule = table.get(group)
                if not schedule:
                    raise ValueError(f"benefit_factors.{table_name} has no schedule for {group.label}")
                bad = {age: f for age, f in schedule.items() if not 0.0 < f <= 0.05}
                if bad:
                    raise ValueError(f"Implausible factors in {table_name}/{group.label}: {bad}")
        min_ages = [band.min_age for band in self.option_b]
        if any(b <= a for a, b in zip(min_ages, min_ages[1:])):
            raise ValueError("option_b bands must have strictly increasing min_age")
        return self

    def factor_schedule(self, table_name: str, group: RetirementGroup) -> Mapping[int, float]:
        """Read-only age -> factor view for one group in one table."""
        return self.benefit_factors[table_name][group]

    @property
    def option_c_factors(self) -> Mapping[str, float]:
        return self.option_c.factors
