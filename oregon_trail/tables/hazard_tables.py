"""
Hazard Tables for the Oregon Trail.

Random trail events checked once per day. A single d100 roll decides both
whether anything happens (roll of 15 or less) and which hazards qualify:
every hazard whose chance is at least the roll is a candidate, and one
candidate is picked uniformly. The chances overlap, so a low roll can
qualify several hazards at once.
"""

from dataclasses import dataclass
from enum import Enum


class HazardType(str, Enum):
    """Random events that can befall the party."""

    BREAKDOWN = "breakdown"
    WILD_FRUIT = "wild_fruit"
    LOST_OXEN = "lost_oxen"
    THEFT = "theft"
    BAD_WEATHER = "bad_weather"


@dataclass(frozen=True)
class HazardEntry:
    """A hazard and the highest d100 roll on which it qualifies."""

    hazard_type: HazardType
    name: str
    chance: int

    def qualifies(self, roll: int) -> bool:
        return roll <= self.chance


# Rolls above this mean a quiet day
EVENT_CHANCE = 15

HAZARD_TABLE: list[HazardEntry] = [
    HazardEntry(HazardType.BREAKDOWN, "Wagon breakdown", 10),
    HazardEntry(HazardType.WILD_FRUIT, "Found wild fruit", 8),
    HazardEntry(HazardType.LOST_OXEN, "Oxen wandered off", 5),
    HazardEntry(HazardType.THEFT, "Theft", 5),
    HazardEntry(HazardType.BAD_WEATHER, "Bad weather", 10),
]

WAGON_PARTS: tuple[str, ...] = ("wheel", "axle", "tongue")

THEFT_ITEMS: tuple[str, ...] = ("food", "ammunition", "clothing")

# Inclusive (min, max) ranges
BREAKDOWN_DAYS_LOST = (3, 6)
WILD_FRUIT_POUNDS = (5, 20)
OXEN_LOST = (1, 2)
THEFT_AMOUNTS: dict[str, tuple[int, int]] = {
    "food": (10, 30),
    "ammunition": (1, 2),
    "clothing": (1, 2),
}


def get_qualifying_hazards(roll: int) -> list[HazardEntry]:
    """
    Get every hazard the roll qualifies for.

    Returns an empty list for quiet-day rolls (above EVENT_CHANCE).
    """
    if roll > EVENT_CHANCE:
        return []
    return [entry for entry in HAZARD_TABLE if entry.qualifies(roll)]
