"""
Projections package: retirement-age comparison tables built on the engine.
"""

from .age_projection import project_by_retirement_age

__all__ = ["project_by_retirement_age"]
