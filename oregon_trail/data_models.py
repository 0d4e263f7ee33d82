"""
Shared data structures for the Oregon Trail simulation.

These structures are shared by every engine; none of them is owned by a
single subsystem. Party, supply, milestone and game-state values are frozen:
each simulated day produces a new GameState derived from the previous one.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Sequence
import logging
import random
import re

if TYPE_CHECKING:
    from oregon_trail.observability.replay import ReplaySession
    from oregon_trail.observability.run_log import RunLog


logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class Occupation(str, Enum):
    """Occupations available to the party leader."""
    BANKER = "banker"
    CARPENTER = "carpenter"
    FARMER = "farmer"


class HealthStatus(str, Enum):
    """Health tiers, worst to best: dead < very poor < poor < fair < good."""
    DEAD = "dead"
    VERY_POOR = "very poor"
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"

    @property
    def rank(self) -> int:
        """Position on the ordered health scale (0 = dead, 4 = good)."""
        return HEALTH_ORDER.index(self)

    @classmethod
    def from_rank(cls, rank: int) -> "HealthStatus":
        """Get the health tier at a scale position, clamped to the scale."""
        return HEALTH_ORDER[max(0, min(len(HEALTH_ORDER) - 1, rank))]


HEALTH_ORDER: tuple[HealthStatus, ...] = (
    HealthStatus.DEAD,
    HealthStatus.VERY_POOR,
    HealthStatus.POOR,
    HealthStatus.FAIR,
    HealthStatus.GOOD,
)


class Weather(str, Enum):
    """Weather conditions on the trail."""
    VERY_HOT = "very hot"
    HOT = "hot"
    WARM = "warm"
    COOL = "cool"
    COLD = "cold"
    VERY_COLD = "very cold"
    RAINY = "rainy"
    SNOWY = "snowy"


class Pace(str, Enum):
    """Daily travel-speed policy."""
    STEADY = "steady"
    STRENUOUS = "strenuous"
    GRUELING = "grueling"
    RESTING = "resting"


class RationsLevel(str, Enum):
    """Daily food-consumption policy."""
    FILLING = "filling"
    MEAGER = "meager"
    BARE_BONES = "bare bones"
    NONE = "none"


class MilestoneType(str, Enum):
    """Kinds of waypoint along the trail."""
    LANDMARK = "landmark"
    RIVER = "river"
    FORT = "fort"
    TOWN = "town"


# =============================================================================
# DICE AND RANDOMIZATION
# =============================================================================


@dataclass
class DiceResult:
    """Result of a dice roll with full information."""
    notation: str
    rolls: list[int]
    modifier: int
    total: int
    reason: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "notation": self.notation,
            "rolls": list(self.rolls),
            "modifier": self.modifier,
            "total": self.total,
            "reason": self.reason,
        }

    def __str__(self) -> str:
        if self.modifier > 0:
            return f"{self.notation}: {self.rolls} + {self.modifier} = {self.total}"
        elif self.modifier < 0:
            return f"{self.notation}: {self.rolls} - {abs(self.modifier)} = {self.total}"
        return f"{self.notation}: {self.rolls} = {self.total}"


class DiceRoller:
    """
    Centralized randomization interface.

    All randomness in the simulation goes through a DiceRoller instance that
    is passed explicitly to each engine function. A roller owns its own
    seeded generator, so the seed alone determines a whole journey.

    Every roll is kept in the roller's roll log and, if a RunLog is attached,
    recorded there too. If a ReplaySession is attached and replaying, the
    recorded totals are returned instead of fresh rolls.
    """

    _NOTATION = re.compile(r"^\s*(\d*)\s*d\s*(\d+)\s*(?:([+-])\s*(\d+))?\s*$", re.IGNORECASE)

    def __init__(
        self,
        seed: Optional[int] = None,
        run_log: Optional["RunLog"] = None,
        replay: Optional["ReplaySession"] = None,
    ):
        """
        Args:
            seed: Seed for the generator (None = seeded from system entropy)
            run_log: Optional RunLog that receives every roll
            replay: Optional ReplaySession supplying recorded rolls
        """
        self._seed = seed
        self._rng = random.Random(seed)
        self._roll_log: list[DiceResult] = []
        self.run_log = run_log
        self.replay = replay

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def set_seed(self, seed: int) -> None:
        """Reseed the generator for reproducibility."""
        self._seed = seed
        self._rng.seed(seed)
        if self.run_log is not None:
            self.run_log.set_seed(seed)

    def roll(self, dice: str, reason: str = "") -> DiceResult:
        """
        Roll dice using standard notation (e.g., '1d100', '2d6+1', '3d6-2').

        Args:
            dice: Dice notation string
            reason: Why this roll is being made (for logging)

        Returns:
            DiceResult with individual rolls and total

        Raises:
            ValueError: If the notation cannot be parsed
        """
        match = self._NOTATION.match(dice)
        if not match:
            raise ValueError(f"Invalid dice notation: {dice!r}")

        num_dice = int(match.group(1)) if match.group(1) else 1
        die_size = int(match.group(2))
        if num_dice < 1 or die_size < 1:
            raise ValueError(f"Invalid dice notation: {dice!r}")

        modifier = 0
        if match.group(3):
            modifier = int(match.group(4))
            if match.group(3) == "-":
                modifier = -modifier

        rolls = [self._rng.randint(1, die_size) for _ in range(num_dice)]
        return self._record(dice, rolls, modifier, reason)

    def roll_percentile(self, reason: str = "") -> DiceResult:
        """Roll d100 for percentile checks."""
        return self.roll("1d100", reason)

    def randint(self, a: int, b: int, reason: str = "") -> int:
        """Return a random integer in [a, b], inclusive."""
        notation = f"d{b - a + 1}" if a == 1 else f"range({a}-{b})"
        value = self._rng.randint(a, b)
        return self._record(notation, [value], 0, reason).total

    def choice(self, seq: Sequence[Any], reason: str = "") -> Any:
        """
        Choose an element from a non-empty sequence.

        Raises:
            IndexError: If the sequence is empty
        """
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        index = self.randint(0, len(seq) - 1, reason or f"choice from {len(seq)} options")
        return seq[index]

    def random(self, reason: str = "") -> float:
        """Return a float in [0.0, 1.0), resolved to 1/10000 steps."""
        return self.randint(0, 9999, reason or "random float") / 10000.0

    def get_roll_log(self) -> list[DiceResult]:
        """Get the complete roll log for this roller."""
        return self._roll_log.copy()

    def clear_roll_log(self) -> None:
        """Clear the roll log."""
        self._roll_log = []

    def _record(self, notation: str, rolls: list[int], modifier: int, reason: str) -> DiceResult:
        """Log a roll, substituting the recorded one when replaying."""
        if self.replay is not None and self.replay.is_replaying():
            recorded = self.replay.get_next_roll()
            if recorded is not None:
                if recorded.get("notation") != notation:
                    logger.warning(
                        f"Replay notation mismatch: expected {notation}, "
                        f"recorded {recorded.get('notation')} ({reason})"
                    )
                rolls = list(recorded.get("rolls", rolls))
                modifier = recorded.get("modifier", modifier)

        result = DiceResult(
            notation=notation,
            rolls=rolls,
            modifier=modifier,
            total=sum(rolls) + modifier,
            reason=reason,
        )
        self._roll_log.append(result)

        if self.run_log is not None:
            self.run_log.log_roll(
                notation=result.notation,
                rolls=result.rolls,
                modifier=result.modifier,
                total=result.total,
                reason=result.reason,
            )
        return result


# =============================================================================
# PARTY AND SUPPLIES
# =============================================================================


@dataclass(frozen=True)
class Person:
    """A member of the wagon party. Dead members stay in the party, flagged not alive."""
    name: str
    health: HealthStatus = HealthStatus.GOOD
    illness: Optional[str] = None
    is_alive: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "health": self.health.value,
            "illness": self.illness,
            "is_alive": self.is_alive,
        }


# Wagon part name -> SpareParts field
SPARE_PART_FIELDS: dict[str, str] = {
    "wheel": "wheels",
    "axle": "axles",
    "tongue": "tongues",
}


@dataclass(frozen=True)
class SpareParts:
    """Spare wagon parts carried by the party."""
    wheels: int = 0
    axles: int = 0
    tongues: int = 0

    def count(self, part: str) -> int:
        """Number of spares held for a part ('wheel', 'axle' or 'tongue')."""
        return getattr(self, SPARE_PART_FIELDS[part])

    def adjust(self, part: str, delta: int) -> "SpareParts":
        """Return new spares with one part's count changed, clamped at zero."""
        attr = SPARE_PART_FIELDS[part]
        return replace(self, **{attr: max(0, getattr(self, attr) + delta)})

    def to_dict(self) -> dict[str, int]:
        return {"wheels": self.wheels, "axles": self.axles, "tongues": self.tongues}


@dataclass(frozen=True)
class Supplies:
    """
    Everything the party carries.

    food is in pounds, ammunition in boxes of 20 rounds, clothing in sets,
    cash in dollars. No quantity is ever negative.
    """
    food: int = 0
    ammunition: int = 0
    clothing: int = 0
    oxen: int = 0
    spare_parts: SpareParts = field(default_factory=SpareParts)
    cash: float = 0.0

    def adjust(
        self,
        food: int = 0,
        ammunition: int = 0,
        clothing: int = 0,
        oxen: int = 0,
        cash: float = 0.0,
    ) -> "Supplies":
        """Return new supplies with the given deltas applied, each clamped at zero."""
        return replace(
            self,
            food=max(0, self.food + food),
            ammunition=max(0, self.ammunition + ammunition),
            clothing=max(0, self.clothing + clothing),
            oxen=max(0, self.oxen + oxen),
            cash=max(0.0, round(self.cash + cash, 2)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "food": self.food,
            "ammunition": self.ammunition,
            "clothing": self.clothing,
            "oxen": self.oxen,
            "spare_parts": self.spare_parts.to_dict(),
            "cash": self.cash,
        }


# =============================================================================
# MILESTONES
# =============================================================================


@dataclass(frozen=True)
class RiverData:
    """River geometry in feet."""
    width: int
    depth: int


@dataclass(frozen=True)
class Milestone:
    """
    A named waypoint at a fixed distance (miles) from Independence.

    River waypoints are RiverMilestone instances; only they carry river data.
    """
    name: str
    distance: int
    milestone_type: MilestoneType

    def __post_init__(self):
        if self.milestone_type == MilestoneType.RIVER and not isinstance(self, RiverMilestone):
            raise ValueError(f"{self.name}: river milestones must be RiverMilestone")

    @property
    def is_river(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "distance": self.distance,
            "type": self.milestone_type.value,
        }


@dataclass(frozen=True)
class RiverMilestone(Milestone):
    """A river crossing waypoint."""
    milestone_type: MilestoneType = field(default=MilestoneType.RIVER, init=False)
    river: RiverData

    @property
    def is_river(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["river_data"] = {"width": self.river.width, "depth": self.river.depth}
        return data


# =============================================================================
# GAME STATE
# =============================================================================


@dataclass(frozen=True)
class GameState:
    """
    The aggregate root of a journey.

    events is the permanent, append-only history. messages holds only the
    narration of the latest turn or action.
    """
    party_leader: Person
    companions: tuple[Person, ...]
    occupation: Occupation
    supplies: Supplies
    day: int
    month: int
    year: int
    miles_traveled: int
    current_location: str
    next_milestone: Milestone
    weather: Weather
    pace: Pace
    rations: RationsLevel
    events: tuple[str, ...] = ()
    messages: tuple[str, ...] = ()
    had_significant_event: bool = False

    @property
    def party(self) -> tuple[Person, ...]:
        """Leader first, then companions in order."""
        return (self.party_leader, *self.companions)

    @property
    def living_members(self) -> tuple[Person, ...]:
        return tuple(p for p in self.party if p.is_alive)

    @property
    def living_count(self) -> int:
        return len(self.living_members)

    def with_party(self, party: Sequence[Person]) -> "GameState":
        """Return a new state with the leader and companions replaced."""
        return replace(self, party_leader=party[0], companions=tuple(party[1:]))

    def with_log(self, *lines: str, events: Sequence[str] = ()) -> "GameState":
        """Return a new state with lines appended to messages and events appended to history."""
        return replace(
            self,
            events=self.events + tuple(events),
            messages=self.messages + tuple(lines),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "party_leader": self.party_leader.to_dict(),
            "companions": [p.to_dict() for p in self.companions],
            "occupation": self.occupation.value,
            "supplies": self.supplies.to_dict(),
            "day": self.day,
            "month": self.month,
            "year": self.year,
            "miles_traveled": self.miles_traveled,
            "current_location": self.current_location,
            "next_milestone": self.next_milestone.to_dict(),
            "weather": self.weather.value,
            "pace": self.pace.value,
            "rations": self.rations.value,
            "events": list(self.events),
            "messages": list(self.messages),
            "had_significant_event": self.had_significant_event,
        }


@dataclass
class TransitionLog:
    """Log entry for a state transition."""
    timestamp: datetime
    from_state: str
    to_state: str
    trigger: str
    context: dict[str, Any] = field(default_factory=dict)
