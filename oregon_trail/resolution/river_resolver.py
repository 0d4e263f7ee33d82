"""
River Crossing Resolution for the Oregon Trail.

Four ways across a river:

- Ferry: costs floor(width / 20) dollars, always safe, takes a day.
  Refused outright when the party cannot pay.
- Wait: spend 2-5 days by the bank; 70% of the time the river drops
  1-3 feet (never below 1 foot). The party then crosses at the lower level.
- Ford: safe at 3 feet or less. Deeper rivers fail on d100 <= (depth - 3) * 20;
  30% of failures tip the wagon over.
- Caulk and float: fails on d100 <= 20, or 40 in rain, snow or bitter cold;
  half of failures send the wagon downriver. Injuries are rolled separately.

river_crossing() only resolves the attempt. apply_crossing_result() charges
the cost, applies damage and spends the lost days on the game state.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional
import logging

from oregon_trail.data_models import (
    HealthStatus,
    RiverMilestone,
    SPARE_PART_FIELDS,
    Weather,
)
from oregon_trail.tables.hazard_tables import WAGON_PARTS
from oregon_trail.tables.milestone_table import get_next_milestone

if TYPE_CHECKING:
    from oregon_trail.data_models import DiceRoller, GameState


logger = logging.getLogger(__name__)


class CrossingStrategy(str, Enum):
    """How the party attempts the river."""

    FORD = "ford"
    FERRY = "ferry"
    CAULK = "caulk"
    WAIT = "wait"


@dataclass(frozen=True)
class CrossingDamage:
    """Losses from a failed crossing."""

    food: int
    supplies: bool
    injury: bool

    def to_dict(self) -> dict[str, Any]:
        return {"food": self.food, "supplies": self.supplies, "injury": self.injury}


@dataclass(frozen=True)
class CrossingResult:
    """
    Outcome of a crossing attempt.

    damage is set only on a failed ford or caulk. cost is set only for a
    ferry that was boarded. new_depth is set only when waiting lowered the
    river, and is reported in the message only.
    """

    strategy: CrossingStrategy
    success: bool
    message: str
    damage: Optional[CrossingDamage] = None
    cost: Optional[int] = None
    days_lost: Optional[int] = None
    new_depth: Optional[int] = None

    @property
    def crossed(self) -> bool:
        """Whether the party ends up on the far bank."""
        return self.success

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy.value,
            "success": self.success,
            "message": self.message,
            "damage": self.damage.to_dict() if self.damage else None,
            "cost": self.cost,
            "days_lost": self.days_lost,
            "new_depth": self.new_depth,
        }


# =============================================================================
# CONSTANTS
# =============================================================================

FERRY_FEET_PER_DOLLAR = 20

WAIT_DAYS = (2, 5)
WAIT_DROP_CHANCE = 70
WAIT_DROP_FEET = (1, 3)
MIN_RIVER_DEPTH = 1

SAFE_FORD_DEPTH = 3
FORD_FAIL_PER_FOOT = 20
FORD_SEVERE_CHANCE = 30

CAULK_FAIL_CHANCE = 20
CAULK_BAD_WEATHER_FAIL_CHANCE = 40
CAULK_SEVERE_CHANCE = 50
CAULK_INJURY_CHANCE = 30
CAULK_BAD_WEATHER: frozenset[Weather] = frozenset({Weather.RAINY, Weather.VERY_COLD, Weather.SNOWY})

INJURY_ILLNESS = "injured during river crossing"


def ferry_cost(width: int) -> int:
    return width // FERRY_FEET_PER_DOLLAR


def ford_fail_chance(depth: int) -> int:
    """Percent chance a ford fails at the given depth."""
    return max(0, depth - SAFE_FORD_DEPTH) * FORD_FAIL_PER_FOOT


def caulk_fail_chance(weather: Weather) -> int:
    return CAULK_BAD_WEATHER_FAIL_CHANCE if weather in CAULK_BAD_WEATHER else CAULK_FAIL_CHANCE


# =============================================================================
# RESOLVER
# =============================================================================


def river_crossing(
    depth: int,
    width: int,
    strategy: CrossingStrategy,
    cash: float,
    weather: Weather,
    dice: "DiceRoller",
) -> CrossingResult:
    """
    Resolve a crossing attempt. Never touches game state.

    Args:
        depth: River depth in feet
        width: River width in feet
        strategy: The chosen crossing method
        cash: Cash on hand, for the ferry
        weather: Current weather, for caulking
        dice: Dice roller for every random outcome

    Returns:
        CrossingResult describing the attempt
    """
    strategy = CrossingStrategy(strategy)
    logger.debug(f"River crossing: {strategy.value} (depth {depth}ft, width {width}ft)")

    if strategy == CrossingStrategy.FERRY:
        return _resolve_ferry(width, cash)
    if strategy == CrossingStrategy.WAIT:
        return _resolve_wait(depth, dice)
    if strategy == CrossingStrategy.FORD:
        return _resolve_ford(depth, dice)
    return _resolve_caulk(weather, dice)


def _resolve_ferry(width: int, cash: float) -> CrossingResult:
    cost = ferry_cost(width)
    if cash < cost:
        return CrossingResult(
            strategy=CrossingStrategy.FERRY,
            success=False,
            message=f"You don't have enough money for the ferry. It costs ${cost}.",
        )
    return CrossingResult(
        strategy=CrossingStrategy.FERRY,
        success=True,
        message="You safely crossed the river using the ferry.",
        cost=cost,
        days_lost=1,
    )


def _resolve_wait(depth: int, dice: "DiceRoller") -> CrossingResult:
    days = dice.randint(*WAIT_DAYS, "days waiting at river")
    if dice.randint(1, 100, "river level drop") <= WAIT_DROP_CHANCE:
        new_depth = max(MIN_RIVER_DEPTH, depth - dice.randint(*WAIT_DROP_FEET, "river drop (feet)"))
        return CrossingResult(
            strategy=CrossingStrategy.WAIT,
            success=True,
            message=f"After waiting {days} days, the river is now {new_depth} feet deep.",
            days_lost=days,
            new_depth=new_depth,
        )
    return CrossingResult(
        strategy=CrossingStrategy.WAIT,
        success=True,
        message=f"You waited {days} days, but the river depth hasn't changed.",
        days_lost=days,
    )


def _resolve_ford(depth: int, dice: "DiceRoller") -> CrossingResult:
    fail_chance = ford_fail_chance(depth)
    if fail_chance > 0 and dice.randint(1, 100, "ford check") <= fail_chance:
        severe = dice.randint(1, 100, "ford severity") <= FORD_SEVERE_CHANCE
        if severe:
            food = dice.randint(20, 50, "food lost fording")
            return CrossingResult(
                strategy=CrossingStrategy.FORD,
                success=False,
                message="Disaster! Your wagon tipped over in the river!",
                damage=CrossingDamage(food=food, supplies=True, injury=True),
                days_lost=3,
            )
        food = dice.randint(5, 20, "food lost fording")
        return CrossingResult(
            strategy=CrossingStrategy.FORD,
            success=False,
            message="You had trouble fording the river and got your supplies wet.",
            damage=CrossingDamage(food=food, supplies=False, injury=False),
            days_lost=1,
        )
    return CrossingResult(
        strategy=CrossingStrategy.FORD,
        success=True,
        message="You successfully forded the river.",
        days_lost=1,
    )


def _resolve_caulk(weather: Weather, dice: "DiceRoller") -> CrossingResult:
    if dice.randint(1, 100, "caulk check") <= caulk_fail_chance(weather):
        severe = dice.randint(1, 100, "caulk severity") <= CAULK_SEVERE_CHANCE
        if severe:
            food = dice.randint(30, 70, "food lost floating")
            injury = dice.randint(1, 100, "caulk injury") <= CAULK_INJURY_CHANCE
            return CrossingResult(
                strategy=CrossingStrategy.CAULK,
                success=False,
                message="Oh no! Your wagon floated away downriver with some of your supplies!",
                damage=CrossingDamage(food=food, supplies=True, injury=injury),
                days_lost=4,
            )
        food = dice.randint(10, 30, "food lost floating")
        injury = dice.randint(1, 100, "caulk injury") <= CAULK_INJURY_CHANCE
        return CrossingResult(
            strategy=CrossingStrategy.CAULK,
            success=False,
            message="Your wagon took on some water while floating across.",
            damage=CrossingDamage(food=food, supplies=False, injury=injury),
            days_lost=2,
        )
    return CrossingResult(
        strategy=CrossingStrategy.CAULK,
        success=True,
        message="You successfully caulked the wagon and floated across the river.",
        days_lost=1,
    )


# =============================================================================
# APPLYING RESULTS
# =============================================================================


def current_river_depth(state: "GameState") -> Optional[int]:
    """Depth of the river ahead, or None when the next milestone is dry land."""
    milestone = state.next_milestone
    if not isinstance(milestone, RiverMilestone):
        return None
    return milestone.river.depth


def apply_crossing_result(
    state: "GameState",
    result: CrossingResult,
    dice: "DiceRoller",
) -> "GameState":
    """
    Apply a crossing result to the game state exactly once.

    Charges the ferry, removes lost food, loses a random spare part on
    supply damage, injures a random living member on injury, then spends
    the lost days at the river. A successful crossing puts the party one
    mile past the river and advances the next milestone. The crossing
    message leads the resulting messages.
    """
    from oregon_trail.trail.trail_engine import spend_days

    river = state.next_milestone
    supplies = state.supplies
    party = list(state.party)
    notes: list[str] = []

    if result.cost:
        supplies = supplies.adjust(cash=-result.cost)

    if result.damage is not None:
        supplies = supplies.adjust(food=-result.damage.food)

        if result.damage.supplies:
            part = dice.choice(WAGON_PARTS, "spare part lost in river")
            if supplies.spare_parts.count(part) > 0:
                supplies = replace(supplies, spare_parts=supplies.spare_parts.adjust(part, -1))
                notes.append(f"You lost a spare {part} in the river.")
                logger.debug(f"Lost spare {part} ({SPARE_PART_FIELDS[part]}) in the river")

        if result.damage.injury:
            living = [i for i, p in enumerate(party) if p.is_alive]
            if living:
                index = dice.choice(living, "river injury victim")
                party[index] = replace(
                    party[index], health=HealthStatus.POOR, illness=INJURY_ILLNESS
                )
                notes.append(f"{party[index].name} was injured during the river crossing.")

    state = replace(state.with_party(party), supplies=supplies)

    day_messages: list[str] = []
    if result.days_lost:
        state = spend_days(state, result.days_lost, dice)
        day_messages = list(state.messages)

    events: list[str] = []
    if result.crossed and isinstance(river, RiverMilestone):
        miles = river.distance + 1
        state = replace(
            state,
            miles_traveled=miles,
            current_location=f"Crossed {river.name}",
            next_milestone=get_next_milestone(miles),
        )
        events.append(f"Successfully crossed {river.name}")
        logger.info(f"Crossed {river.name} by {result.strategy.value}")
    else:
        logger.info(f"River crossing at {river.name}: {result.message}")

    return replace(
        state,
        events=state.events + tuple(events),
        messages=(result.message, *notes, *day_messages),
    )
