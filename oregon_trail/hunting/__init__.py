"""
Hunting.

The shooting-field mini-game, the quick hunt, and applying a hunt's
results to the party's supplies.
"""

from oregon_trail.hunting.hunting_engine import (
    HuntingError,
    HuntOutcome,
    HuntingSession,
    QuickHuntResult,
    ShotResult,
    Target,
    apply_hunt_outcome,
    quick_hunt,
)

__all__ = [
    "HuntingError",
    "HuntOutcome",
    "HuntingSession",
    "QuickHuntResult",
    "ShotResult",
    "Target",
    "apply_hunt_outcome",
    "quick_hunt",
]
