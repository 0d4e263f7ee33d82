"""
Static game tables for the Oregon Trail.

This module provides:
- The milestone table (18 waypoints from Independence to the Willamette Valley)
- The random hazard table checked once per day
- The game animal table used by the hunting field
"""

from oregon_trail.tables.milestone_table import (
    ORIGIN_NAME,
    MILESTONES,
    MILESTONE_BY_NAME,
    FIRST_MILESTONE,
    FINAL_MILESTONE,
    get_milestone,
    get_next_milestone,
)
from oregon_trail.tables.hazard_tables import (
    HazardType,
    HazardEntry,
    EVENT_CHANCE,
    HAZARD_TABLE,
    WAGON_PARTS,
    THEFT_ITEMS,
    THEFT_AMOUNTS,
    get_qualifying_hazards,
)
from oregon_trail.tables.hunting_tables import (
    AnimalType,
    GameAnimal,
    GAME_ANIMALS,
    FIELD_WIDTH,
    FIELD_HEIGHT,
    HUNT_DURATION_SECONDS,
    BULLETS_PER_BOX,
    select_animal,
    describe_quick_hunt,
)

__all__ = [
    # Milestones
    "ORIGIN_NAME",
    "MILESTONES",
    "MILESTONE_BY_NAME",
    "FIRST_MILESTONE",
    "FINAL_MILESTONE",
    "get_milestone",
    "get_next_milestone",
    # Hazards
    "HazardType",
    "HazardEntry",
    "EVENT_CHANCE",
    "HAZARD_TABLE",
    "WAGON_PARTS",
    "THEFT_ITEMS",
    "THEFT_AMOUNTS",
    "get_qualifying_hazards",
    # Hunting
    "AnimalType",
    "GameAnimal",
    "GAME_ANIMALS",
    "FIELD_WIDTH",
    "FIELD_HEIGHT",
    "HUNT_DURATION_SECONDS",
    "BULLETS_PER_BOX",
    "select_animal",
    "describe_quick_hunt",
]
