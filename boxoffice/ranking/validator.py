"""Request validation for ranking queries.

Runs before any network activity; every failure raises
``ValidationError`` with a message that can be shown verbatim.
"""

import calendar
import math
import re
from datetime import datetime
from typing import Any

from boxoffice.exceptions import ValidationError

MIN_YEAR = 1900
"""Earliest supported release year."""

_LEADING_INT = re.compile(r"[+-]?\d+")


def parse_int_param(value: Any) -> int:
    """Parse a loosely-typed input (e.g. query-string value) as an integer.

    Strings are read up to the first non-digit, so a fractional part or a
    trailing suffix is ignored ("2023.7" and "2023abc" both give 2023).

    Args:
        value: Raw input value.

    Returns:
        Parsed integer.

    Raises:
        ValidationError: If the value is missing or not numeric.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Year and month parameters are required")

    if isinstance(value, bool):
        raise ValidationError("Year and month must be valid numbers")
    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError("Year and month must be valid numbers")
        return math.trunc(value)

    match = _LEADING_INT.match(str(value).strip())
    if match is None:
        raise ValidationError("Year and month must be valid numbers")
    return int(match.group())


def validate_date_input(year: int, month: int, current_year: int | None = None) -> None:
    """Validate year and month bounds.

    Args:
        year: Release year.
        month: Release month (1-12).
        current_year: Upper year bound; defaults to the current calendar year.

    Raises:
        ValidationError: If either value is out of range.
    """
    max_year = current_year or datetime.now().year

    if year < MIN_YEAR or year > max_year:
        raise ValidationError(f"Year must be between {MIN_YEAR} and {max_year}")

    if month < 1 or month > 12:
        raise ValidationError("Month must be between 1 and 12")


def month_date_range(year: int, month: int) -> tuple[str, str]:
    """Inclusive ISO date range covering a calendar month.

    Args:
        year: Year.
        month: Month (1-12).

    Returns:
        Tuple of first and last day (YYYY-MM-DD).
    """
    last_day = calendar.monthrange(year, month)[1]
    return f"{year:04d}-{month:02d}-01", f"{year:04d}-{month:02d}-{last_day:02d}"
