"""
Replay of a journey's dice rolls.

A ReplaySession feeds recorded rolls back to a DiceRoller, so a journey
can be re-run exactly from its roll stream without relying on the
generator's seed behaviour.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union
import json
import logging

from oregon_trail.observability.run_log import EventType, RunLog

logger = logging.getLogger(__name__)


class ReplayMode(str, Enum):
    """Replay mode settings."""

    DISABLED = "disabled"  # Fresh rolls
    REPLAYING = "replaying"  # Rolls come from the stream


@dataclass
class ReplaySession:
    """
    A recorded roll stream and a position within it.

    While replaying, get_next_roll() hands out recorded rolls in order.
    Running past the end is an overrun: it is counted, logged as a
    warning, and the roller falls back to fresh rolls.
    """

    seed: Optional[int] = None
    roll_stream: list[dict[str, Any]] = field(default_factory=list)
    mode: ReplayMode = ReplayMode.DISABLED
    _position: int = 0
    _overruns: int = 0

    def __post_init__(self):
        self._position = 0
        self._overruns = 0

    @classmethod
    def from_run_log(cls, log: Union[RunLog, dict[str, Any]]) -> "ReplaySession":
        """
        Create a session that replays a run log's rolls.

        Args:
            log: A RunLog, or the dictionary from RunLog.to_dict()

        Returns:
            ReplaySession in replaying mode
        """
        log_data = log.to_dict() if isinstance(log, RunLog) else log
        roll_stream = [
            {
                "notation": event.get("notation", ""),
                "rolls": event.get("rolls", []),
                "modifier": event.get("modifier", 0),
                "total": event.get("total", 0),
                "reason": event.get("reason", ""),
            }
            for event in log_data.get("events", [])
            if event.get("event_type") == EventType.ROLL.value
        ]
        return cls(seed=log_data.get("seed"), roll_stream=roll_stream, mode=ReplayMode.REPLAYING)

    @classmethod
    def load(cls, filepath: str) -> "ReplaySession":
        """Load a session from a run log saved with RunLog.save()."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        session = cls.from_run_log(data)
        logger.info(f"Loaded {len(session.roll_stream)} recorded rolls from {filepath}")
        return session

    def start_replay(self) -> None:
        """Start replaying from the beginning."""
        self.mode = ReplayMode.REPLAYING
        self._position = 0
        self._overruns = 0
        logger.info(f"Replay started with {len(self.roll_stream)} recorded rolls")

    def stop_replay(self) -> None:
        self.mode = ReplayMode.DISABLED
        logger.info(f"Replay stopped at position {self._position}/{len(self.roll_stream)}")

    def is_replaying(self) -> bool:
        return self.mode == ReplayMode.REPLAYING

    def has_next_roll(self) -> bool:
        return self._position < len(self.roll_stream)

    def get_next_roll(self) -> Optional[dict[str, Any]]:
        """
        Get the next recorded roll.

        Returns:
            Dict with {notation, rolls, modifier, total, reason}
            or None when not replaying or the stream is exhausted
        """
        if not self.is_replaying():
            return None

        if self._position >= len(self.roll_stream):
            self._overruns += 1
            logger.warning(
                f"Replay overrun #{self._overruns}: no more recorded rolls at position {self._position}"
            )
            return None

        roll = self.roll_stream[self._position]
        self._position += 1
        return roll

    def get_position(self) -> int:
        return self._position

    def get_remaining_rolls(self) -> int:
        return max(0, len(self.roll_stream) - self._position)

    def get_overrun_count(self) -> int:
        return self._overruns

    def reset(self) -> None:
        """Rewind to the beginning of the roll stream."""
        self._position = 0
        self._overruns = 0

    def get_summary(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "mode": self.mode.value,
            "total_rolls": len(self.roll_stream),
            "current_position": self._position,
            "remaining_rolls": self.get_remaining_rolls(),
            "overruns": self._overruns,
        }

    def __repr__(self) -> str:
        return (
            f"ReplaySession(seed={self.seed}, "
            f"mode={self.mode.value}, "
            f"position={self._position}/{len(self.roll_stream)})"
        )
