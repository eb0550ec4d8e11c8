"""Date helpers for rate lookups."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional

from .errors import InvalidDateError

# Earliest day the provider publishes reference rates for.
PROVIDER_FLOOR = date(1999, 1, 4)

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def parse_rate_date(value: object, *, today: Optional[date] = None) -> date:
    """Validate a ``YYYY-MM-DD`` string (or date) within the provider's range."""

    if isinstance(value, datetime):
        day = value.date()
    elif isinstance(value, date):
        day = value
    elif isinstance(value, str) and _DATE_PATTERN.fullmatch(value):
        try:
            day = datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError as exc:
            raise InvalidDateError(f"'{value}' is not a valid calendar date") from exc
    else:
        raise InvalidDateError("Invalid date format. Use YYYY-MM-DD")

    limit = today or today_utc()
    if day < PROVIDER_FLOOR or day > limit:
        raise InvalidDateError(
            f"Date must be between {PROVIDER_FLOOR.isoformat()} and {limit.isoformat()}"
        )
    return day


__all__ = ["PROVIDER_FLOOR", "parse_rate_date", "today_utc"]
