"""Trail session management module."""

from oregon_trail.game_state.state_machine import (
    InvalidTransitionError,
    StateMachine,
    StateTransition,
    TrailPhase,
    VALID_TRANSITIONS,
)
from oregon_trail.game_state.trail_controller import TrailController, TrailControllerError

__all__ = [
    "InvalidTransitionError",
    "StateMachine",
    "StateTransition",
    "TrailPhase",
    "VALID_TRANSITIONS",
    "TrailController",
    "TrailControllerError",
]
