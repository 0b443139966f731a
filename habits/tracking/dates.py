"""Calendar and clock helpers for windowing and formatting entries."""

import calendar
from datetime import date, timedelta
from typing import Optional, TypeVar

D = TypeVar("D", bound=date)

DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def format_date(value: date) -> str:
    """Serialize a date (or datetime) as YYYY-MM-DD using its local fields."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date(text: str) -> date:
    """
    Parse a YYYY-MM-DD string into a calendar date.

    Raises:
        ValueError: If the string is not an ISO calendar date
    """
    return date.fromisoformat(text.strip())


def get_today_string() -> str:
    """Today's date in local time."""
    return format_date(date.today())


def day_of_week(value: date) -> int:
    """
    Get day of week where Sunday=0, Saturday=6.

    Args:
        value: Date or datetime to check

    Returns:
        Day of week (0-6)
    """
    # Python weekday: Monday=0, Sunday=6
    return (value.weekday() + 1) % 7


def get_week_start(value: D) -> D:
    """Sunday on or before value. Datetimes keep their time of day."""
    return value - timedelta(days=day_of_week(value))


def get_week_end(value: D) -> D:
    """Saturday of the week containing value."""
    return get_week_start(value) + timedelta(days=6)


def get_week_dates(week_start: D) -> list[D]:
    """Seven consecutive days starting at week_start (not checked to be a Sunday)."""
    return [week_start + timedelta(days=i) for i in range(7)]


def get_month_dates(year: int, month_index: int) -> list[date]:
    """
    Every day of a calendar month.

    Args:
        year: Four-digit year
        month_index: 0=January, 11=December

    Returns:
        Dates in ascending order
    """
    month = month_index + 1
    days_in_month = calendar.monthrange(year, month)[1]
    return [date(year, month, day) for day in range(1, days_in_month + 1)]


def get_month_start(year: int, month_index: int) -> date:
    return date(year, month_index + 1, 1)


def get_month_end(year: int, month_index: int) -> date:
    return get_month_dates(year, month_index)[-1]


def parse_clock(text: Optional[str]) -> Optional[tuple[int, int]]:
    """
    Split an "HH:MM" string into (hour, minute).

    Returns:
        Tuple of ints, or None if either component is missing or non-numeric
    """
    if not text:
        return None

    parts = text.split(":")
    if len(parts) < 2:
        return None

    try:
        return int(parts[0].strip()), int(parts[1].strip())
    except ValueError:
        return None


def format_time(time24: str) -> str:
    """
    Convert a 24-hour "HH:MM" clock to "h:mm AM/PM".

    Example:
        "00:00" -> "12:00 AM", "09:05" -> "9:05 AM", "13:30" -> "1:30 PM"

    Unparseable input is returned unchanged.
    """
    clock = parse_clock(time24)
    if clock is None:
        return time24

    hours, minutes = clock
    period = "PM" if hours >= 12 else "AM"
    hours12 = hours % 12 or 12
    return f"{hours12}:{minutes:02d} {period}"


def calculate_sleep_hours(bed_time: str, wake_time: str) -> float:
    """
    Hours slept between bed_time and wake_time ("HH:MM").

    Wake is assumed to fall within 24 hours of bed: a wake clock earlier than
    the bed clock means the night crossed midnight. Equal clocks give 0.

    Returns:
        Fractional hours (8.25 for 8h15m), or 0 if either time is unparseable
    """
    bed = parse_clock(bed_time)
    wake = parse_clock(wake_time)
    if bed is None or wake is None:
        return 0

    bed_minutes = bed[0] * 60 + bed[1]
    wake_minutes = wake[0] * 60 + wake[1]

    if wake_minutes < bed_minutes:
        wake_minutes += 24 * 60

    return (wake_minutes - bed_minutes) / 60


def get_day_name(value: date) -> str:
    """Short weekday name, Sun..Sat."""
    return DAY_NAMES[day_of_week(value)]


def get_month_name(value: date) -> str:
    return MONTH_NAMES[value.month - 1]


def get_month_year(value: date) -> str:
    """e.g. "March 2025"."""
    return f"{get_month_name(value)} {value.year}"
