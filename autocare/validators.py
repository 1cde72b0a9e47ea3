"""Shared validation utilities for bookings and staff records.

Every function raises ``ValueError`` with a user-facing message; callers in
the service layer turn that into a ``ValidationError``.
"""

from __future__ import annotations

import json
import re
from datetime import date, datetime
from typing import Any

from autocare.config import get_settings

TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")

_DAY_NAMES = {
    "monday": "Mon", "mon": "Mon",
    "tuesday": "Tue", "tue": "Tue",
    "wednesday": "Wed", "wed": "Wed",
    "thursday": "Thu", "thu": "Thu",
    "friday": "Fri", "fri": "Fri",
    "saturday": "Sat", "sat": "Sat",
    "sunday": "Sun", "sun": "Sun",
}


def normalize_time(value: str) -> str:
    """
    Validate a 24-hour ``H:MM``/``HH:MM`` time inside booking hours.

    Returns:
        The zero-padded ``HH:MM`` form.

    Raises:
        ValueError: If the format is wrong or the hour is outside the window.
    """
    if not isinstance(value, str):
        raise ValueError("Invalid time format (use HH:MM)")
    match = TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError("Invalid time format (use HH:MM)")
    hours, minutes = int(match.group(1)), int(match.group(2))

    booking = get_settings().booking
    if not booking.opening_hour <= hours < booking.closing_hour:
        raise ValueError(
            f"Appointments can only be booked between {booking.opening_hour:02d}:00 "
            f"and {booking.closing_hour - 1:02d}:59"
        )
    return f"{hours:02d}:{minutes:02d}"


def parse_date(value: Any, label: str = "date") -> date:
    """Parse ``YYYY-MM-DD`` or an ISO-8601 datetime into a bare date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid {label} format")
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError(f"Invalid {label} format") from None


def parse_appointment_date(value: Any) -> date:
    return parse_date(value, "appointment date")


def ensure_not_past(value: date, today: date | None = None) -> date:
    today = today or date.today()
    if value < today:
        raise ValueError("Appointment date must be today or in the future")
    return value


def normalize_plate(value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Car number plate is required")
    return value.strip().upper()


def validate_year(value: Any) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValueError("Year must be a number") from None
    low, high = get_settings().booking.min_vehicle_year, date.today().year + 1
    if not low <= year <= high:
        raise ValueError(f"Year must be between {low} and {high}")
    return year


def validate_mileage(value: Any) -> int:
    try:
        mileage = int(value)
    except (TypeError, ValueError):
        raise ValueError("Mileage must be a number") from None
    if mileage < 0:
        raise ValueError("Mileage cannot be negative")
    return mileage


def parse_string_list(value: Any) -> list[str]:
    """Accept a list, a JSON array string, or a comma-separated string."""
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("[") and text.endswith("]"):
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                raise ValueError("Malformed list value") from None
            return parse_string_list(parsed if isinstance(parsed, list) else [])
        return [item.strip() for item in text.split(",") if item.strip()]
    raise ValueError("Expected a list of strings")


def normalize_weekdays(value: Any) -> list[str]:
    """Map day names to their three-letter form; unknown names pass through."""
    return [_DAY_NAMES.get(day.lower(), day) for day in parse_string_list(value)]
