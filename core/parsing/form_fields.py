"""
Helpers for turning submitted form fields into column values.

Forms submit everything as flat strings. Multi-value fields (skills, project
image URLs) arrive as one comma-separated string; dates arrive as
``YYYY-MM-DD`` from date inputs, or full ISO timestamps from API clients.
"""

import re
from datetime import date, datetime, timezone
from typing import Optional

from core.errors import FormValidationError

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def split_csv(raw: Optional[str]) -> list[str]:
    """
    Split a comma-separated field into trimmed, non-empty tokens.

    Order is preserved and repeated tokens are kept:

        >>> split_csv("Go, Go, Rust")
        ['Go', 'Go', 'Rust']
        >>> split_csv("a.png, , b.png")
        ['a.png', 'b.png']
    """
    if not raw:
        return []
    return [token.strip() for token in raw.split(",") if token.strip()]


def clean_text(raw: Optional[str]) -> Optional[str]:
    """Strip a free-text field; blank becomes None."""
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def parse_date(raw: Optional[str], field: str) -> datetime:
    """
    Parse a required date field.

    Raises:
        FormValidationError: If the value is blank or not a date.
    """
    value = (raw or "").strip()
    if not value:
        raise FormValidationError(field, f"'{field}' is required")

    try:
        if _DATE_ONLY.match(value):
            parsed = date.fromisoformat(value)
            return datetime(parsed.year, parsed.month, parsed.day)
        # Accept a trailing Z from JavaScript's toISOString()
        parsed_dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise FormValidationError(field, f"'{field}' is not a valid date") from None

    # Stored as naive UTC, like every other timestamp column
    if parsed_dt.tzinfo is not None:
        parsed_dt = parsed_dt.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed_dt


def parse_optional_date(raw: Optional[str], field: str) -> Optional[datetime]:
    """Parse an end date; blank means the entry is ongoing and maps to None."""
    if raw is None or not raw.strip():
        return None
    return parse_date(raw, field)


__all__ = ["split_csv", "clean_text", "parse_date", "parse_optional_date"]
