"""
Trail Calendar.

Gregorian months and seasons for the 1848 journey. February has 29 days in
years divisible by four (the simple four-year leap approximation).
"""

from enum import Enum


class Season(str, Enum):
    """The four seasons, bucketed by month."""

    WINTER = "winter"  # December, January, February
    SPRING = "spring"  # March, April, May
    SUMMER = "summer"  # June, July, August
    FALL = "fall"  # September, October, November


MONTH_NAMES: dict[int, str] = {
    1: "January",
    2: "February",
    3: "March",
    4: "April",
    5: "May",
    6: "June",
    7: "July",
    8: "August",
    9: "September",
    10: "October",
    11: "November",
    12: "December",
}

DAYS_IN_MONTH: dict[int, int] = {
    1: 31,
    2: 28,
    3: 31,
    4: 30,
    5: 31,
    6: 30,
    7: 31,
    8: 31,
    9: 30,
    10: 31,
    11: 30,
    12: 31,
}

SEASON_BY_MONTH: dict[int, Season] = {
    12: Season.WINTER,
    1: Season.WINTER,
    2: Season.WINTER,
    3: Season.SPRING,
    4: Season.SPRING,
    5: Season.SPRING,
    6: Season.SUMMER,
    7: Season.SUMMER,
    8: Season.SUMMER,
    9: Season.FALL,
    10: Season.FALL,
    11: Season.FALL,
}


def get_season_for_month(month: int) -> Season:
    """
    Get the season for a month number.

    Raises:
        ValueError: If month is not 1-12
    """
    if month not in SEASON_BY_MONTH:
        raise ValueError(f"Invalid month number: {month}")
    return SEASON_BY_MONTH[month]


def is_leap_year(year: int) -> bool:
    return year % 4 == 0


def get_days_in_month(month: int, year: int) -> int:
    """Number of days in a month, with 29-day February in leap years."""
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month]


def advance_date(day: int, month: int, year: int, days: int = 1) -> tuple[int, int, int, int]:
    """
    Advance a date by a number of days.

    Args:
        day: Day of month
        month: 1-12
        year: Calendar year
        days: Days to advance (0 or more)

    Returns:
        Tuple of (day, month, year, months_rolled) where months_rolled counts
        the month boundaries crossed
    """
    months_rolled = 0
    for _ in range(days):
        day += 1
        if day > get_days_in_month(month, year):
            day = 1
            month += 1
            months_rolled += 1
            if month > 12:
                month = 1
                year += 1
    return day, month, year, months_rolled


def format_date(month: int, day: int, year: int) -> str:
    """Format a date like 'March 1, 1848'."""
    return f"{MONTH_NAMES[month]} {day}, {year}"
