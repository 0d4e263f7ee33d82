"""
State Machine for the Oregon Trail session.

Only one trail phase is active at a time. Every phase change goes through
a named trigger that is validated against VALID_TRANSITIONS and recorded
in the transition history.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional
import logging

from oregon_trail.data_models import TransitionLog

if TYPE_CHECKING:
    from oregon_trail.observability.run_log import RunLog


logger = logging.getLogger(__name__)


class TrailPhase(str, Enum):
    """What the party is doing right now."""

    TRAVELING = "traveling"
    RIVER_CROSSING = "river_crossing"
    HUNTING = "hunting"
    SHOPPING = "shopping"
    GAME_OVER = "game_over"


@dataclass
class StateTransition:
    """A valid phase transition."""

    from_state: TrailPhase
    to_state: TrailPhase
    trigger: str
    description: str = ""

    def __hash__(self) -> int:
        return hash((self.from_state, self.to_state, self.trigger))


VALID_TRANSITIONS: list[StateTransition] = [
    # Traveling
    StateTransition(
        TrailPhase.TRAVELING,
        TrailPhase.RIVER_CROSSING,
        "reach_river",
        "The next milestone is a river that must be crossed",
    ),
    StateTransition(
        TrailPhase.TRAVELING,
        TrailPhase.HUNTING,
        "start_hunt",
        "The party goes hunting",
    ),
    StateTransition(
        TrailPhase.TRAVELING,
        TrailPhase.SHOPPING,
        "enter_store",
        "The party visits the general store",
    ),
    StateTransition(
        TrailPhase.TRAVELING,
        TrailPhase.GAME_OVER,
        "party_died",
        "Every member of the party has died",
    ),
    StateTransition(
        TrailPhase.TRAVELING,
        TrailPhase.GAME_OVER,
        "journey_complete",
        "The party reached the Willamette Valley",
    ),
    # River crossing
    StateTransition(
        TrailPhase.RIVER_CROSSING,
        TrailPhase.TRAVELING,
        "river_crossed",
        "The party made it to the far bank",
    ),
    StateTransition(
        TrailPhase.RIVER_CROSSING,
        TrailPhase.GAME_OVER,
        "party_died",
        "Every member of the party has died at the river",
    ),
    # Hunting
    StateTransition(
        TrailPhase.HUNTING,
        TrailPhase.TRAVELING,
        "end_hunt",
        "The hunt is over",
    ),
    # Shopping
    StateTransition(
        TrailPhase.SHOPPING,
        TrailPhase.TRAVELING,
        "leave_store",
        "The party leaves the general store",
    ),
]


class InvalidTransitionError(Exception):
    """Raised when a trigger is not valid in the current phase."""
    pass


class StateMachine:
    """
    Manages trail phase transitions with validation and history tracking.

    Attributes:
        current_state: The active phase
        previous_state: The phase before the last transition
        state_history: Every transition so far, starting with initialization
    """

    def __init__(
        self,
        initial_state: TrailPhase = TrailPhase.TRAVELING,
        run_log: Optional["RunLog"] = None,
    ):
        """
        Args:
            initial_state: The starting phase (default: TRAVELING)
            run_log: Optional RunLog that receives every transition
        """
        self._current_state: TrailPhase = initial_state
        self._previous_state: Optional[TrailPhase] = None
        self._state_history: list[TransitionLog] = []
        self.run_log = run_log

        self._valid_transitions: dict[tuple[TrailPhase, str], TrailPhase] = {}
        for transition in VALID_TRANSITIONS:
            self._valid_transitions[(transition.from_state, transition.trigger)] = transition.to_state

        self._log_transition(
            from_state="INIT", to_state=initial_state.value, trigger="initialization"
        )

    @property
    def current_state(self) -> TrailPhase:
        return self._current_state

    @property
    def previous_state(self) -> Optional[TrailPhase]:
        return self._previous_state

    @property
    def state_history(self) -> list[TransitionLog]:
        """Get the complete transition history."""
        return self._state_history.copy()

    def can_transition(self, trigger: str) -> bool:
        return (self._current_state, trigger) in self._valid_transitions

    def get_valid_triggers(self) -> list[str]:
        """Triggers accepted in the current phase."""
        return [
            trigger
            for (state, trigger) in self._valid_transitions
            if state == self._current_state
        ]

    def transition(self, trigger: str, context: Optional[dict[str, Any]] = None) -> TrailPhase:
        """
        Move to a new phase.

        Args:
            trigger: The trigger event causing the transition
            context: Optional context data for the transition

        Returns:
            The new phase

        Raises:
            InvalidTransitionError: If the trigger is not valid in the current phase
        """
        context = context or {}

        key = (self._current_state, trigger)
        if key not in self._valid_transitions:
            raise InvalidTransitionError(
                f"Invalid transition: Cannot trigger '{trigger}' from state "
                f"'{self._current_state.value}'. Valid triggers: {self.get_valid_triggers()}"
            )

        new_state = self._valid_transitions[key]
        old_state = self._current_state

        self._previous_state = old_state
        self._current_state = new_state
        self._log_transition(
            from_state=old_state.value, to_state=new_state.value, trigger=trigger, context=context
        )

        return new_state

    def _log_transition(
        self, from_state: str, to_state: str, trigger: str, context: Optional[dict[str, Any]] = None
    ) -> None:
        self._state_history.append(
            TransitionLog(
                timestamp=datetime.now(),
                from_state=from_state,
                to_state=to_state,
                trigger=trigger,
                context=context or {},
            )
        )
        logger.info(f"Phase {from_state} -> {to_state} ({trigger})")
        if self.run_log is not None:
            self.run_log.log_transition(
                from_state=from_state,
                to_state=to_state,
                trigger=trigger,
                context=context,
            )

    def get_state_info(self) -> dict[str, Any]:
        """Current phase information for display/debugging."""
        return {
            "current_state": self._current_state.value,
            "previous_state": self._previous_state.value if self._previous_state else None,
            "valid_triggers": self.get_valid_triggers(),
            "transition_count": len(self._state_history),
        }

    @property
    def is_game_over(self) -> bool:
        return self._current_state == TrailPhase.GAME_OVER

    def __repr__(self) -> str:
        return f"StateMachine(current={self._current_state.value}, previous={self._previous_state})"
