"""
Calendar helpers for pairing documents.

Pure functions, no timezone or library calendar calls: weekday of a date,
month lengths, leap years and how many calendar days a pairing spans.
"""

from typing import Iterable, List

from patterns import WEEKDAY_CODES

# Weekday offset of the first of each month in a common year
_MONTH_OFFSETS = (0, 3, 3, 6, 1, 4, 6, 2, 5, 0, 3, 5)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")
    if month == 2:
        return 29 if is_leap_year(year) else 28
    return 31 - ((month - 1) % 7 % 2)


def day_of_week(year: int, month: int, day: int) -> int:
    """
    Day of the week for a Gregorian date, Sunday = 0 .. Saturday = 6.

    Gauss's congruence: the weekday of January 1st is built from the
    4/100/400-year cycles of the previous year, then shifted by the month
    offset. The leap day only shifts months after February.
    """
    if year < 1:
        raise ValueError(f"year out of range: {year}")
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")
    if not 1 <= day <= 31:
        raise ValueError(f"day out of range: {day}")

    offset = _MONTH_OFFSETS[month - 1]
    if month > 2 and is_leap_year(year):
        offset += 1

    y = year - 1
    return (day + offset + 5 * (y % 4) + 4 * (y % 100) + 6 * (y % 400)) % 7


def weekday_code(year: int, month: int, day: int) -> str:
    return WEEKDAY_CODES[day_of_week(year, month, day)]


def operating_weekdays(days: Iterable[int], year: int, month: int) -> List[str]:
    """Weekday codes of a pairing's operating days, in day order."""
    return [weekday_code(year, month, d) for d in days]


def pairing_length(first_day_code: str, last_day_code: str) -> int:
    """
    Number of calendar days between the first and last leg, inclusive.

    Both codes must be of the same kind: two-letter weekdays ("MO" .. "SU")
    or relative duty-day digits ("1" .. "7"). A last day that is not after
    the first wraps into the following week.
    """
    if first_day_code in WEEKDAY_CODES and last_day_code in WEEKDAY_CODES:
        first = WEEKDAY_CODES.index(first_day_code)
        last = WEEKDAY_CODES.index(last_day_code)
    elif first_day_code.isdigit() and last_day_code.isdigit():
        first = int(first_day_code)
        last = int(last_day_code)
    else:
        raise ValueError(
            f"day codes must both be weekdays or both be digits: {first_day_code!r}, {last_day_code!r}"
        )

    span = last - first
    if last <= first:
        span += 7
    return span % 7 + 1


def num_calendar_rows(num_days: int, first_day: int) -> int:
    """
    Week rows needed to draw a Monday-first month grid whose first day
    falls on first_day (Sunday = 0).
    """
    first_row = 7 - (first_day - 1) % 7
    remaining = max(0, num_days - first_row)
    return 1 + -(-remaining // 7)


def time_to_hours(value: str) -> float:
    # "HHMM", "HMM" or minutes only
    if not value:
        return 0.0
    if len(value) == 4:
        return int(value[:2]) + int(value[2:]) / 60
    if len(value) == 3:
        return int(value[:1]) + int(value[1:]) / 60
    return int(value) / 60
