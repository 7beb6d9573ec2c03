# Form field parsing helpers

from .form_fields import clean_text, parse_date, parse_optional_date, split_csv

__all__ = [
    "split_csv",
    "clean_text",
    "parse_date",
    "parse_optional_date",
]
