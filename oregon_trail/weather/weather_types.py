"""
Trail Weather Tables.

Each season maps a d100 roll to a weather tier. Entries are checked in
order and the first one whose bound exceeds the roll wins, so every bound
is exclusive (winter: 39 is very cold, 40 is cold).
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from oregon_trail.data_models import Weather
from oregon_trail.weather.calendar import Season, get_season_for_month

if TYPE_CHECKING:
    from oregon_trail.data_models import DiceRoller


@dataclass(frozen=True)
class WeatherEntry:
    """A single weather table entry: rolls below roll_below give this weather."""

    roll_below: int
    weather: Weather

    def matches(self, roll: int) -> bool:
        return roll < self.roll_below


@dataclass(frozen=True)
class WeatherResult:
    """The result of rolling on a weather table."""

    weather: Weather
    roll: int
    season: Season

    def __str__(self) -> str:
        return f"{self.weather.value} ({self.season.value}, rolled {self.roll})"


# =============================================================================
# WEATHER TABLES
# =============================================================================

# Catch-all bound; d100 never reaches it
_ANY = 101

WINTER_TABLE: list[WeatherEntry] = [
    WeatherEntry(40, Weather.VERY_COLD),
    WeatherEntry(70, Weather.COLD),
    WeatherEntry(85, Weather.COOL),
    WeatherEntry(95, Weather.RAINY),
    WeatherEntry(_ANY, Weather.SNOWY),
]

SPRING_TABLE: list[WeatherEntry] = [
    WeatherEntry(10, Weather.COLD),
    WeatherEntry(30, Weather.COOL),
    WeatherEntry(60, Weather.WARM),
    WeatherEntry(80, Weather.HOT),
    WeatherEntry(_ANY, Weather.RAINY),
]

SUMMER_TABLE: list[WeatherEntry] = [
    WeatherEntry(20, Weather.WARM),
    WeatherEntry(60, Weather.HOT),
    WeatherEntry(90, Weather.VERY_HOT),
    WeatherEntry(_ANY, Weather.RAINY),
]

FALL_TABLE: list[WeatherEntry] = [
    WeatherEntry(10, Weather.HOT),
    WeatherEntry(40, Weather.WARM),
    WeatherEntry(70, Weather.COOL),
    WeatherEntry(90, Weather.COLD),
    WeatherEntry(_ANY, Weather.RAINY),
]

WEATHER_TABLES: dict[Season, list[WeatherEntry]] = {
    Season.WINTER: WINTER_TABLE,
    Season.SPRING: SPRING_TABLE,
    Season.SUMMER: SUMMER_TABLE,
    Season.FALL: FALL_TABLE,
}

# Weather forced by the bad-weather hazard
SEVERE_WEATHER: dict[Season, Weather] = {
    Season.WINTER: Weather.SNOWY,
    Season.SPRING: Weather.RAINY,
    Season.SUMMER: Weather.VERY_HOT,
    Season.FALL: Weather.RAINY,
}


def generate_weather(month: int, roll: int) -> Weather:
    """
    Look up the weather for a month and a d100 roll.

    Args:
        month: 1-12
        roll: 1-100

    Returns:
        The weather tier for the first matching table entry
    """
    table = WEATHER_TABLES[get_season_for_month(month)]
    for entry in table:
        if entry.matches(roll):
            return entry.weather
    return table[-1].weather


def roll_weather(month: int, dice: "DiceRoller") -> WeatherResult:
    """Roll d100 on the weather table for the given month."""
    season = get_season_for_month(month)
    roll = dice.roll_percentile(f"weather roll ({season.value})").total
    return WeatherResult(weather=generate_weather(month, roll), roll=roll, season=season)


def get_severe_weather(month: int) -> Weather:
    """Season-appropriate extreme: snow in winter, heat in summer, rain otherwise."""
    return SEVERE_WEATHER[get_season_for_month(month)]
