# Profile display helpers

from .display import (
    PRESENT,
    linkedin_handle,
    month_range,
    name_initial,
    skill_label,
    year_range,
)

__all__ = [
    "PRESENT",
    "year_range",
    "month_range",
    "skill_label",
    "linkedin_handle",
    "name_initial",
]
