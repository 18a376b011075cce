"""
Engines package for the benefit calculation.

This package contains the pure calculation stages and the two entry points
used by collaborators (web API, PDF generator, comparison tooling).
"""

from .calculator import calculate_annual_pension, generate_projection_table

__all__ = ["calculate_annual_pension", "generate_projection_table"]
