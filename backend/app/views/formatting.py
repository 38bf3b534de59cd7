"""
Display helpers shared by the customer list and detail views.

Values arrive from the JSON API as strings (`"1990-01-01"`,
`"2024-05-01T10:00:00Z"`), so every helper accepts either a string or a
date/datetime.
"""

import math
from datetime import date, datetime
from typing import List, Optional, Union

DateLike = Union[str, date, datetime]

DAYS_PER_YEAR = 365.25


def to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if "T" in text or " " in text:
        # fromisoformat only accepts a trailing "Z" from Python 3.11
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


def compute_age(date_of_birth: DateLike, today: Optional[date] = None) -> int:
    """Whole years since `date_of_birth`: floor(elapsed days / 365.25)."""
    today = today or date.today()
    elapsed_days = (today - to_date(date_of_birth)).days
    return math.floor(elapsed_days / DAYS_PER_YEAR)


def split_interests(interests: Optional[str]) -> List[str]:
    """'chess, code ,,gym' -> ['chess', 'code', 'gym']"""
    if not interests:
        return []
    return [part.strip() for part in interests.split(",") if part.strip()]


def format_input_date(value: DateLike) -> str:
    """Value for an <input type="date">: YYYY-MM-DD."""
    return to_date(value).isoformat()


def format_short_date(value: DateLike) -> str:
    """Grid cell format, e.g. 1/31/1990."""
    d = to_date(value)
    return f"{d.month}/{d.day}/{d.year}"


def format_long_date(value: DateLike) -> str:
    """Profile format, e.g. January 31, 1990."""
    d = to_date(value)
    return f"{d.strftime('%B')} {d.day}, {d.year}"
