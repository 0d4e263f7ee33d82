"""
Trail Weather and Calendar System.

Implements the seasonal weather tables and the Gregorian calendar used by
the day-advance engine.
"""

from oregon_trail.weather.calendar import (
    Season,
    MONTH_NAMES,
    DAYS_IN_MONTH,
    get_season_for_month,
    get_days_in_month,
    is_leap_year,
    advance_date,
    format_date,
)
from oregon_trail.weather.weather_types import (
    WeatherEntry,
    WeatherResult,
    WEATHER_TABLES,
    SEVERE_WEATHER,
    generate_weather,
    roll_weather,
    get_severe_weather,
)

__all__ = [
    # Calendar
    "Season",
    "MONTH_NAMES",
    "DAYS_IN_MONTH",
    "get_season_for_month",
    "get_days_in_month",
    "is_leap_year",
    "advance_date",
    "format_date",
    # Weather
    "WeatherEntry",
    "WeatherResult",
    "WEATHER_TABLES",
    "SEVERE_WEATHER",
    "generate_weather",
    "roll_weather",
    "get_severe_weather",
]
