"""
Observability and replay for the Oregon Trail.

Records every roll, phase transition, simulated day, hazard and river
crossing of a journey, and replays a journey from its roll stream.
"""

from oregon_trail.observability.run_log import (
    RunLog,
    LogEvent,
    EventType,
    RollEvent,
    TransitionEvent,
    TurnEvent,
    HazardEvent,
    CrossingEvent,
    get_run_log,
    reset_run_log,
)
from oregon_trail.observability.replay import ReplaySession, ReplayMode

__all__ = [
    "RunLog",
    "LogEvent",
    "EventType",
    "RollEvent",
    "TransitionEvent",
    "TurnEvent",
    "HazardEvent",
    "CrossingEvent",
    "get_run_log",
    "reset_run_log",
    "ReplaySession",
    "ReplayMode",
]
