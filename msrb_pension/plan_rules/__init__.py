"""
Plan rules package: retirement eligibility and service/salary helpers.
"""

from .eligibility import EligibilityResult, check_eligibility
from .service import average_highest_consecutive, determine_service_entry, years_of_service_between

__all__ = [
    "EligibilityResult",
    "average_highest_consecutive",
    "check_eligibility",
    "determine_service_entry",
    "years_of_service_between",
]
