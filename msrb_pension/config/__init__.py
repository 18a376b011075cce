"""
Config package: pydantic models and YAML loaders for the statutory tables and fixtures.
"""

from .loaders import ConfigLoadError, get_statutory_tables, load_fixture_file, load_statutory_tables
from .models import (
    CalculationInput,
    CalculationResult,
    ColaConfig,
    ColaProjectionRow,
    OptionResult,
    RetirementGroup,
    RetirementOption,
    ServiceEntryEra,
    StatutoryTables,
)

__all__ = [
    "CalculationInput",
    "CalculationResult",
    "ColaConfig",
    "ColaProjectionRow",
    "ConfigLoadError",
    "OptionResult",
    "RetirementGroup",
    "RetirementOption",
    "ServiceEntryEra",
    "StatutoryTables",
    "get_statutory_tables",
    "load_fixture_file",
    "load_statutory_tables",
]
