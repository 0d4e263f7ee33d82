"""
Test helpers for the Oregon Trail test suite.

Provides a scripted dice roller so tests can dictate exactly which
numbers the engines see, plus small builders for common game states.
"""

from dataclasses import replace
from typing import Iterable, Optional

from oregon_trail.data_models import (
    DiceRoller,
    GameState,
    HealthStatus,
    Pace,
    Person,
    RationsLevel,
)
from oregon_trail.observability.run_log import RunLog
from oregon_trail.tables.milestone_table import get_milestone
from oregon_trail.trail.game_setup import initialize_game


# =============================================================================
# SCRIPTED DICE
# =============================================================================


class ScriptedDice(DiceRoller):
    """
    DiceRoller whose integer rolls come from a queue.

    randint() pops the next queued value; choice() and random() go through
    randint(), so a choice takes the index to pick and random() takes a
    value in 0-9999. Percentile rolls (weather) and any randint once the
    queue is empty fall back to the seeded generator.

    Usage:
        dice = ScriptedDice([50, 50, 100])  # two health rolls, quiet hazard check
    """

    def __init__(
        self,
        values: Iterable[int] = (),
        seed: int = 0,
        run_log: Optional[RunLog] = None,
    ):
        super().__init__(seed=seed, run_log=run_log)
        self.queue: list[int] = list(values)

    def push(self, *values: int) -> "ScriptedDice":
        self.queue.extend(values)
        return self

    @property
    def exhausted(self) -> bool:
        return not self.queue

    def randint(self, a: int, b: int, reason: str = "") -> int:
        if not self.queue:
            return super().randint(a, b, reason)
        value = self.queue.pop(0)
        if not a <= value <= b:
            raise AssertionError(f"Scripted value {value} outside [{a}, {b}] for {reason!r}")
        notation = f"d{b - a + 1}" if a == 1 else f"range({a}-{b})"
        return self._record(notation, [value], 0, reason).total


def quiet_day(living: int) -> list[int]:
    """Rolls for a travel day with no illness and no hazard."""
    return [50] * living + [100]


# =============================================================================
# STATE BUILDERS
# =============================================================================


def new_party(occupation: str = "banker") -> GameState:
    """Ann leading Bob and Cy, fresh out of Independence."""
    return initialize_game("Ann", ["Bob", "Cy"], occupation)


def at_river(state: GameState, river_name: str = "Kansas River Crossing") -> GameState:
    """Place the party on the near bank of a river."""
    river = get_milestone(river_name)
    return replace(
        state,
        miles_traveled=river.distance - 2,
        current_location=f"Near {river.name}",
        next_milestone=river,
        messages=(),
    )


def near_milestone(state: GameState, name: str, miles_short: int) -> GameState:
    """Place the party a few miles short of a milestone."""
    milestone = get_milestone(name)
    return replace(
        state,
        miles_traveled=milestone.distance - miles_short,
        next_milestone=milestone,
        messages=(),
    )


def lone_traveler(
    health: HealthStatus = HealthStatus.GOOD,
    food: int = 200,
    rations: RationsLevel = RationsLevel.FILLING,
    pace: Pace = Pace.STEADY,
) -> GameState:
    """A party of one, for health and food arithmetic."""
    state = initialize_game("Ann", [], "farmer")
    return replace(
        state,
        party_leader=Person(name="Ann", health=health),
        supplies=replace(state.supplies, food=food),
        rations=rations,
        pace=pace,
        messages=(),
    )
