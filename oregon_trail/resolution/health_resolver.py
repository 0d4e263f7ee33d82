"""
Health Resolution for the Oregon Trail.

Each day every living party member's health tier moves by an integer delta
on the ordered scale dead < very poor < poor < fair < good:

- Rations: filling +1, meager 0, bare bones -1, none -2
- Pace: resting +1, steady 0, strenuous 0, grueling -1
- Illness (d100): below 5 is a serious illness (-2), below 15 a minor one (-1)

The result is clamped to the scale. Dead is absorbing.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from oregon_trail.data_models import HealthStatus, Pace, Person, RationsLevel

if TYPE_CHECKING:
    from oregon_trail.data_models import DiceRoller


RATIONS_HEALTH_DELTA: dict[RationsLevel, int] = {
    RationsLevel.FILLING: 1,
    RationsLevel.MEAGER: 0,
    RationsLevel.BARE_BONES: -1,
    RationsLevel.NONE: -2,
}

PACE_HEALTH_DELTA: dict[Pace, int] = {
    Pace.GRUELING: -1,
    Pace.STRENUOUS: 0,
    Pace.STEADY: 0,
    Pace.RESTING: 1,
}

SERIOUS_ILLNESS_BELOW = 5
SERIOUS_ILLNESS_DELTA = -2
MINOR_ILLNESS_BELOW = 15
MINOR_ILLNESS_DELTA = -1


def illness_delta(roll: int) -> int:
    """Health delta from the illness roll (0 when no illness strikes)."""
    if roll < SERIOUS_ILLNESS_BELOW:
        return SERIOUS_ILLNESS_DELTA
    if roll < MINOR_ILLNESS_BELOW:
        return MINOR_ILLNESS_DELTA
    return 0


def health_delta(rations: RationsLevel, pace: Pace, roll: int) -> int:
    """Combined daily health delta for the given rations, pace and illness roll."""
    return RATIONS_HEALTH_DELTA[rations] + PACE_HEALTH_DELTA[pace] + illness_delta(roll)


def update_health(
    current: HealthStatus,
    rations: RationsLevel,
    pace: Pace,
    roll: int,
) -> HealthStatus:
    """
    Compute a person's next health tier.

    Args:
        current: Current health tier
        rations: Party rations level
        pace: Party travel pace
        roll: Illness roll, 1-100

    Returns:
        The new health tier, clamped between dead and good
    """
    if current == HealthStatus.DEAD:
        return HealthStatus.DEAD
    return HealthStatus.from_rank(current.rank + health_delta(rations, pace, roll))


@dataclass(frozen=True)
class HealthChange:
    """One person's daily health update."""

    person: Person
    previous: HealthStatus
    roll: int

    @property
    def changed(self) -> bool:
        return self.person.health != self.previous

    @property
    def died(self) -> bool:
        return self.changed and not self.person.is_alive

    @property
    def recovered_from_very_poor(self) -> bool:
        return self.previous == HealthStatus.VERY_POOR and self.person.health == HealthStatus.POOR

    @property
    def became_very_poor(self) -> bool:
        return self.changed and self.person.health == HealthStatus.VERY_POOR


def roll_person_health(
    person: Person,
    rations: RationsLevel,
    pace: Pace,
    dice: "DiceRoller",
) -> HealthChange:
    """
    Roll a living person's daily health update.

    Dead members are returned unchanged without consuming a roll. A person
    whose health reaches dead is flagged not alive.
    """
    if not person.is_alive:
        return HealthChange(person=person, previous=person.health, roll=0)

    roll = dice.randint(1, 100, f"health roll ({person.name})")
    new_health = update_health(person.health, rations, pace, roll)
    updated = Person(
        name=person.name,
        health=new_health,
        illness=person.illness,
        is_alive=new_health != HealthStatus.DEAD,
    )
    return HealthChange(person=updated, previous=person.health, roll=roll)
