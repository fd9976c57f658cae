"""Instant handling.

Instants are decimal years (1900.0 is the start of 1900, 1900.5 roughly
mid-year). Calendar dates are converted on the way in so that every
layout computation works on plain floats.
"""

import math
from datetime import date, datetime
from typing import Any


def to_decimal_year(value: Any) -> float:
    """Convert a date, datetime or number to a decimal year.

    Anything that cannot be read as an instant becomes NaN rather than
    raising; downstream layout treats NaN as an unknown instant.
    """
    if isinstance(value, bool):
        return math.nan

    if isinstance(value, datetime):
        year_start = datetime(value.year, 1, 1, tzinfo=value.tzinfo)
        year_end = datetime(value.year + 1, 1, 1, tzinfo=value.tzinfo)
        return value.year + (value - year_start) / (year_end - year_start)

    if isinstance(value, date):
        days_in_year = date(value.year, 12, 31).timetuple().tm_yday
        return value.year + (value.timetuple().tm_yday - 1) / days_in_year

    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            pass
        try:
            return to_decimal_year(datetime.fromisoformat(value.strip()))
        except ValueError:
            return math.nan

    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def is_known(value: float | None) -> bool:
    """True when the instant is present and finite."""
    return value is not None and math.isfinite(value)


def format_year(value: float | None) -> str:
    """Format an instant as a four-digit-style year label ("?" when unknown)."""
    if not is_known(value):
        return "?"
    return str(math.floor(value))
