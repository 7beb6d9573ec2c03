"""
Display formatting for profile data.

Date ranges, skill labels and contact handles are shaped here so every
client renders them identically.
"""

import re
from datetime import datetime
from typing import Optional

PRESENT = "Present"

_LINKEDIN_PREFIX = re.compile(r"^https?://(www\.)?linkedin\.com/in/", re.IGNORECASE)


def year_range(start: datetime, end: Optional[datetime]) -> str:
    """Education style: ``2019 - 2023`` or ``2021 - Present``."""
    end_label = str(end.year) if end else PRESENT
    return f"{start.year} - {end_label}"


def month_year(value: datetime) -> str:
    return value.strftime("%b %Y")


def month_range(start: datetime, end: Optional[datetime]) -> str:
    """Experience style: ``Jun 2022 - Aug 2022`` or ``Jan 2024 - Present``."""
    end_label = month_year(end) if end else PRESENT
    return f"{month_year(start)} - {end_label}"


def skill_label(name: str, proficiency: Optional[str]) -> str:
    return f"{name} ({proficiency})" if proficiency else name


def linkedin_handle(url: Optional[str]) -> Optional[str]:
    """Strip the ``linkedin.com/in/`` prefix, leaving the public handle."""
    if not url:
        return None
    return _LINKEDIN_PREFIX.sub("", url)


def name_initial(name: Optional[str]) -> str:
    """Avatar placeholder shown when a profile has no image."""
    return name[:1] if name else ""
