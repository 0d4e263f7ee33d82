"""
Trail Simulation.

The day-advance engine and the setup of a new journey.
"""

from oregon_trail.trail.trail_engine import (
    MILES_PER_DAY,
    RATIONS_PER_DAY,
    NEAR_MILESTONE_MILES,
    advance_calendar,
    advance_turn,
    location_label,
    spend_days,
)
from oregon_trail.trail.game_setup import (
    STARTING_CASH,
    initialize_game,
)

__all__ = [
    # Turn engine
    "MILES_PER_DAY",
    "RATIONS_PER_DAY",
    "NEAR_MILESTONE_MILES",
    "advance_calendar",
    "advance_turn",
    "location_label",
    "spend_days",
    # Setup
    "STARTING_CASH",
    "initialize_game",
]
