"""
Run Log for journey event tracking.

Captures dice rolls, phase transitions, simulated days, hazards and
river crossings so a journey can be inspected after the fact and its
roll stream replayed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional
import json
import logging

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Types of events that can be logged."""

    ROLL = "roll"  # Dice roll
    TRANSITION = "transition"  # Trail phase transition
    TURN = "turn"  # One simulated day
    HAZARD = "hazard"  # Random trail event
    CROSSING = "crossing"  # River crossing attempt
    CUSTOM = "custom"  # Custom event


@dataclass
class LogEvent:
    """Base class for all logged events."""

    # Subclasses set their own event_type in __post_init__
    event_type: EventType = EventType.CUSTOM
    timestamp: datetime = field(default_factory=datetime.now)
    sequence_number: int = 0
    game_time: Optional[str] = None  # In-game date, e.g. "March 2, 1848"
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "sequence_number": self.sequence_number,
            "game_time": self.game_time,
            "context": self.context,
        }

    def __str__(self) -> str:
        name = self.context.get("event_name", self.event_type.value)
        return f"[{self.sequence_number}] {name.upper()} {self.context}"


@dataclass
class RollEvent(LogEvent):
    """A dice roll event."""

    notation: str = ""  # e.g., "1d100", "range(2-5)"
    rolls: list[int] = field(default_factory=list)
    modifier: int = 0
    total: int = 0
    reason: str = ""

    def __post_init__(self):
        self.event_type = EventType.ROLL

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "notation": self.notation,
                "rolls": self.rolls,
                "modifier": self.modifier,
                "total": self.total,
                "reason": self.reason,
            }
        )
        return base

    def __str__(self) -> str:
        if self.modifier > 0:
            return f"[{self.sequence_number}] ROLL {self.notation}: {self.rolls} + {self.modifier} = {self.total} ({self.reason})"
        elif self.modifier < 0:
            return f"[{self.sequence_number}] ROLL {self.notation}: {self.rolls} - {abs(self.modifier)} = {self.total} ({self.reason})"
        return f"[{self.sequence_number}] ROLL {self.notation}: {self.rolls} = {self.total} ({self.reason})"


@dataclass
class TransitionEvent(LogEvent):
    """A trail phase transition event."""

    from_state: str = ""
    to_state: str = ""
    trigger: str = ""

    def __post_init__(self):
        self.event_type = EventType.TRANSITION

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "from_state": self.from_state,
                "to_state": self.to_state,
                "trigger": self.trigger,
            }
        )
        return base

    def __str__(self) -> str:
        return f"[{self.sequence_number}] TRANSITION {self.from_state} -> {self.to_state} (trigger: {self.trigger})"


@dataclass
class TurnEvent(LogEvent):
    """One simulated day on the trail."""

    date: str = ""
    miles_traveled: int = 0
    location: str = ""
    messages: list[str] = field(default_factory=list)
    significant: bool = False

    def __post_init__(self):
        self.event_type = EventType.TURN

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "date": self.date,
                "miles_traveled": self.miles_traveled,
                "location": self.location,
                "messages": self.messages,
                "significant": self.significant,
            }
        )
        return base

    def __str__(self) -> str:
        flag = " *" if self.significant else ""
        return f"[{self.sequence_number}] TURN {self.date}: {self.miles_traveled} miles, {self.location}{flag}"


@dataclass
class HazardEvent(LogEvent):
    """A random trail event."""

    hazard_type: str = ""
    roll: int = 0
    description: str = ""

    def __post_init__(self):
        self.event_type = EventType.HAZARD

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "hazard_type": self.hazard_type,
                "roll": self.roll,
                "description": self.description,
            }
        )
        return base

    def __str__(self) -> str:
        return f"[{self.sequence_number}] HAZARD {self.hazard_type} [{self.roll}]: {self.description or 'no effect'}"


@dataclass
class CrossingEvent(LogEvent):
    """A river crossing attempt."""

    river: str = ""
    strategy: str = ""
    success: bool = False
    message: str = ""
    days_lost: int = 0

    def __post_init__(self):
        self.event_type = EventType.CROSSING

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "river": self.river,
                "strategy": self.strategy,
                "success": self.success,
                "message": self.message,
                "days_lost": self.days_lost,
            }
        )
        return base

    def __str__(self) -> str:
        outcome = "ok" if self.success else "failed"
        return f"[{self.sequence_number}] CROSSING {self.river} by {self.strategy} ({outcome}, {self.days_lost} days): {self.message}"


class RunLog:
    """
    Run log for one journey.

    Use get_run_log() for the shared instance, or create a RunLog and hand
    it to a DiceRoller directly.
    """

    def __init__(self):
        self._events: list[LogEvent] = []
        self._sequence: int = 0
        self._seed: Optional[int] = None
        self._session_start: datetime = datetime.now()
        self._game_time_provider: Optional[Callable[[], str]] = None

    def reset(self) -> None:
        """Reset the log for a new journey."""
        self._events = []
        self._sequence = 0
        self._session_start = datetime.now()
        logger.info("RunLog reset")

    def set_seed(self, seed: int) -> None:
        self._seed = seed
        logger.info(f"RunLog seed set: {seed}")

    def get_seed(self) -> Optional[int]:
        return self._seed

    def set_game_time_provider(self, provider: Callable[[], str]) -> None:
        """
        Set a callback to get the current in-game date.

        The provider should return a string like "March 1, 1848".
        """
        self._game_time_provider = provider

    def _get_game_time(self) -> Optional[str]:
        if self._game_time_provider:
            try:
                return self._game_time_provider()
            except Exception as e:
                logger.warning(f"Game time provider error: {e}")
                return None
        return None

    def _log_event(self, event: LogEvent) -> None:
        self._sequence += 1
        event.sequence_number = self._sequence
        event.game_time = self._get_game_time()
        self._events.append(event)

    def log_roll(
        self,
        notation: str,
        rolls: list[int],
        modifier: int,
        total: int,
        reason: str = "",
        context: Optional[dict[str, Any]] = None,
    ) -> RollEvent:
        """Log a dice roll."""
        event = RollEvent(
            notation=notation,
            rolls=list(rolls),
            modifier=modifier,
            total=total,
            reason=reason,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_transition(
        self,
        from_state: str,
        to_state: str,
        trigger: str,
        context: Optional[dict[str, Any]] = None,
    ) -> TransitionEvent:
        """Log a phase transition."""
        event = TransitionEvent(
            from_state=from_state,
            to_state=to_state,
            trigger=trigger,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_turn(
        self,
        date: str,
        miles_traveled: int,
        location: str,
        messages: Optional[list[str]] = None,
        significant: bool = False,
    ) -> TurnEvent:
        """Log one simulated day."""
        event = TurnEvent(
            date=date,
            miles_traveled=miles_traveled,
            location=location,
            messages=messages or [],
            significant=significant,
        )
        self._log_event(event)
        return event

    def log_hazard(self, hazard_type: str, roll: int, description: str = "") -> HazardEvent:
        event = HazardEvent(hazard_type=hazard_type, roll=roll, description=description)
        self._log_event(event)
        return event

    def log_crossing(
        self,
        river: str,
        strategy: str,
        success: bool,
        message: str,
        days_lost: int = 0,
    ) -> CrossingEvent:
        event = CrossingEvent(
            river=river,
            strategy=strategy,
            success=success,
            message=message,
            days_lost=days_lost,
        )
        self._log_event(event)
        return event

    def log_custom(self, event_name: str, details: dict[str, Any]) -> LogEvent:
        """Log a custom event."""
        event = LogEvent(
            event_type=EventType.CUSTOM,
            context={"event_name": event_name, **details},
        )
        self._log_event(event)
        return event

    def get_events(
        self,
        event_type: Optional[EventType] = None,
        since_sequence: int = 0,
    ) -> list[LogEvent]:
        """
        Get logged events.

        Args:
            event_type: Filter by event type (None = all)
            since_sequence: Only events after this sequence number

        Returns:
            List of events
        """
        events = [e for e in self._events if e.sequence_number > since_sequence]
        if event_type:
            events = [e for e in events if e.event_type == event_type]
        return events

    def get_rolls(self) -> list[RollEvent]:
        return [e for e in self._events if isinstance(e, RollEvent)]

    def get_transitions(self) -> list[TransitionEvent]:
        return [e for e in self._events if isinstance(e, TransitionEvent)]

    def get_turns(self) -> list[TurnEvent]:
        return [e for e in self._events if isinstance(e, TurnEvent)]

    def get_hazards(self) -> list[HazardEvent]:
        return [e for e in self._events if isinstance(e, HazardEvent)]

    def get_crossings(self) -> list[CrossingEvent]:
        return [e for e in self._events if isinstance(e, CrossingEvent)]

    def get_roll_stream(self) -> list[dict[str, Any]]:
        """
        Get the roll stream for replay.

        Returns a list of {notation, rolls, modifier, total, reason} for each
        roll, in the order the rolls were made.
        """
        return [
            {
                "notation": e.notation,
                "rolls": e.rolls,
                "modifier": e.modifier,
                "total": e.total,
                "reason": e.reason,
            }
            for e in self.get_rolls()
        ]

    def get_event_count(self) -> int:
        return len(self._events)

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the run log."""
        return {
            "session_start": self._session_start.isoformat(),
            "seed": self._seed,
            "total_events": len(self._events),
            "rolls": len(self.get_rolls()),
            "transitions": len(self.get_transitions()),
            "turns": len(self.get_turns()),
            "hazards": len(self.get_hazards()),
            "crossings": len(self.get_crossings()),
            "last_sequence": self._sequence,
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entire log to a dictionary."""
        return {
            "session_start": self._session_start.isoformat(),
            "seed": self._seed,
            "sequence": self._sequence,
            "events": [e.to_dict() for e in self._events],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def save(self, filepath: str) -> None:
        """Save the log to a file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.to_json())
        logger.info(f"RunLog saved to {filepath}")

    def format_log(
        self,
        event_types: Optional[list[EventType]] = None,
        max_events: Optional[int] = None,
    ) -> str:
        """
        Format the log as a human-readable string.

        Args:
            event_types: Filter by event types (None = all)
            max_events: Maximum number of most recent events to include

        Returns:
            Formatted log string
        """
        lines = [
            "=== Run Log ===",
            f"Session: {self._session_start.isoformat()}",
            f"Seed: {self._seed if self._seed is not None else 'not set'}",
            f"Total Events: {len(self._events)}",
            "",
        ]

        events = self._events
        if event_types:
            events = [e for e in events if e.event_type in event_types]
        if max_events:
            events = events[-max_events:]

        for event in events:
            lines.append(str(event))

        return "\n".join(lines)


_run_log: Optional[RunLog] = None


def get_run_log() -> RunLog:
    """Get the shared RunLog instance."""
    global _run_log
    if _run_log is None:
        _run_log = RunLog()
    return _run_log


def reset_run_log() -> RunLog:
    """Reset and return the shared RunLog instance."""
    log = get_run_log()
    log.reset()
    return log
