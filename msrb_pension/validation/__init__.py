"""
Validation package: compares engine output against hand-transcribed MSRB
figures and an independent decimal recomputation.
"""

from .harness import (
    ComparisonRecord,
    ReferenceFixture,
    ToleranceExceededError,
    ValidationReport,
    compare_fixture,
    independent_reference,
    load_fixtures,
    run_validation,
)

__all__ = [
    "ComparisonRecord",
    "ReferenceFixture",
    "ToleranceExceededError",
    "ValidationReport",
    "compare_fixture",
    "independent_reference",
    "load_fixtures",
    "run_validation",
]
