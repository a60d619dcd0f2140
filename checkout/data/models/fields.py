from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

_DIGITS = re.compile(r"[0-9]+")
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_count(value: Any) -> int:
    """Parse a non-negative integer from an int or an ASCII digit string.

    Leading zeros are accepted ("0001" -> 1); signs, blanks and decimals are not.
    """
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is not a count")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _DIGITS.fullmatch(value.strip()):
        return int(value.strip())
    raise ValueError(f"{value!r} is not a non-negative integer")


def parse_date(value: Any) -> date:
    """Parse a YYYY-MM-DD date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and _ISO_DATE.fullmatch(value.strip()):
        return date.fromisoformat(value.strip())
    raise ValueError(f"{value!r} is not a YYYY-MM-DD date")
