# app/core/validation.py
from datetime import date, datetime
from calendar import monthrange
from typing import Any, List, Optional

from app.core.normalization import trim, strip_xss, escape_html


class ValidationFailed(Exception):
    """Raised by checks that run outside the request schema (uniqueness etc.)."""

    def __init__(self, errors: List[dict]):
        super().__init__("validation failed")
        self.errors = errors


def field_error(path: str, msg: str, value: Any = None, location: str = "body") -> dict:
    return {"location": location, "path": path, "msg": msg, "value": value}


def format_errors(raw_errors) -> List[dict]:
    """
    Turns pydantic error dicts into the flat list returned to the client.
    """
    errors = []
    for err in raw_errors:
        loc = list(err.get("loc", ()))
        location = loc.pop(0) if loc and loc[0] in ("body", "path", "query") else "body"
        path = ".".join(str(part) for part in loc)

        # ValueErrors raised by our own validators keep their plain message
        ctx_error = (err.get("ctx") or {}).get("error")
        msg = str(ctx_error) if ctx_error is not None else err.get("msg", "invalid value")

        value = err.get("input")
        if isinstance(value, (dict, list)):
            value = None
        errors.append(field_error(path, msg, value, location))
    return errors


# --- STRING VALIDATOR ---

def validate_string(
    value: Any,
    field: str,
    required: bool = True,
    min_length: int = 0,
    max_length: int = 0,
) -> Optional[str]:
    """
    Sanitizes then validates a text field.

    Order: trim, strip markup, trim, length checks, HTML escape. Lengths are
    measured on the plain text, before escaping. An empty optional value is
    treated as absent and comes back as None.
    """
    if value is None:
        if required:
            raise ValueError(f"{field} is required")
        return None

    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")

    text = trim(strip_xss(trim(value)))

    if not text:
        if required:
            raise ValueError(f"{field} is required")
        return None

    if min_length and len(text) < min_length:
        raise ValueError(f"{field} must be at least {min_length} characters")
    if max_length and len(text) > max_length:
        raise ValueError(f"{field} must be no more than {max_length} characters")

    return escape_html(text)


# --- DATE VALIDATOR ---

def months_before(day: date, months: int) -> date:
    """Same day-of-month `months` months earlier, clamped to the month's last day."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        # the whole string must parse, trailing junk is not a date
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
    raise ValueError("Invalid date format")


def validate_game_date(value: Any, today: Optional[date] = None) -> date:
    """
    A game date must not be in the future nor older than two months.
    """
    game_date = parse_date(value)
    today = today or date.today()

    if game_date > today:
        raise ValueError("Date cannot be in the future")
    if game_date < months_before(today, 2):
        raise ValueError("Date cannot be more than two months in the past")

    return game_date


def validate_score(value: Any, field: str) -> int:
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an integer")
    if value < 0:
        raise ValueError(f"{field} must be a non-negative integer")
    return value


def at_least_one(values: dict, fields: List[str]) -> None:
    if not any(values.get(field) is not None for field in fields):
        raise ValueError(
            f"At least one of the following fields is required: {', '.join(fields)}"
        )
