"""
Trail Hazards.

Daily random events: wagon breakdowns, wild fruit, straying oxen, theft
and severe weather.
"""

from oregon_trail.hazards.hazard_engine import (
    HazardOutcome,
    apply_hazard_outcome,
    maybe_trigger_event,
)

__all__ = [
    "HazardOutcome",
    "apply_hazard_outcome",
    "maybe_trigger_event",
]
