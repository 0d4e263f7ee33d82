"""
Hazard Engine for the Oregon Trail.

Rolls the daily hazard check and turns the chosen hazard into a
HazardOutcome: a patch of supply changes, forced weather, lost days and
narration. Rolling never touches the game state; apply_hazard_outcome()
produces the new state from a patch.
"""

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Optional
import logging

from oregon_trail.data_models import Weather
from oregon_trail.tables.hazard_tables import (
    BREAKDOWN_DAYS_LOST,
    OXEN_LOST,
    THEFT_AMOUNTS,
    THEFT_ITEMS,
    WAGON_PARTS,
    WILD_FRUIT_POUNDS,
    HazardEntry,
    HazardType,
    get_qualifying_hazards,
)
from oregon_trail.weather.calendar import Season, get_season_for_month
from oregon_trail.weather.weather_types import get_severe_weather

if TYPE_CHECKING:
    from oregon_trail.data_models import DiceRoller, GameState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HazardOutcome:
    """
    The effect of one hazard on the game state.

    Supply fields are deltas. spare_part names a spare consumed for a
    repair. weather, when set, replaces the day's weather. event goes to
    the permanent history and message to the turn's narration; both are
    empty when the hazard fired without effect (theft of something the
    party does not own).
    """

    hazard_type: HazardType
    roll: int
    food: int = 0
    ammunition: int = 0
    clothing: int = 0
    oxen: int = 0
    spare_part: Optional[str] = None
    weather: Optional[Weather] = None
    days_lost: int = 0
    event: Optional[str] = None
    message: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hazard_type": self.hazard_type.value,
            "roll": self.roll,
            "food": self.food,
            "ammunition": self.ammunition,
            "clothing": self.clothing,
            "oxen": self.oxen,
            "spare_part": self.spare_part,
            "weather": self.weather.value if self.weather else None,
            "days_lost": self.days_lost,
            "event": self.event,
            "message": self.message,
        }


def maybe_trigger_event(state: "GameState", dice: "DiceRoller") -> Optional[HazardOutcome]:
    """
    Roll the daily hazard check.

    One d100 roll decides whether anything happens and which hazards
    qualify; a qualifying hazard is then picked uniformly.

    Returns:
        The fired hazard's outcome, or None on a quiet day
    """
    roll = dice.randint(1, 100, "hazard check")
    candidates = get_qualifying_hazards(roll)
    if not candidates:
        return None

    entry: HazardEntry = dice.choice(candidates, "hazard selection")
    logger.debug(f"Hazard roll {roll}: {entry.name} (from {len(candidates)} candidates)")

    resolvers = {
        HazardType.BREAKDOWN: _resolve_breakdown,
        HazardType.WILD_FRUIT: _resolve_wild_fruit,
        HazardType.LOST_OXEN: _resolve_lost_oxen,
        HazardType.THEFT: _resolve_theft,
        HazardType.BAD_WEATHER: _resolve_bad_weather,
    }
    return resolvers[entry.hazard_type](state, dice, roll)


def _resolve_breakdown(state: "GameState", dice: "DiceRoller", roll: int) -> HazardOutcome:
    part = dice.choice(WAGON_PARTS, "broken wagon part")
    if state.supplies.spare_parts.count(part) > 0:
        text = f"A wagon {part} broke, but you had a spare part to fix it."
        return HazardOutcome(
            hazard_type=HazardType.BREAKDOWN,
            roll=roll,
            spare_part=part,
            event=text,
            message=text,
        )

    days = dice.randint(*BREAKDOWN_DAYS_LOST, "days lost to breakdown")
    return HazardOutcome(
        hazard_type=HazardType.BREAKDOWN,
        roll=roll,
        days_lost=days,
        event=f"A wagon {part} broke, and you don't have a spare part!",
        message=(
            f"A wagon {part} broke, and you don't have a spare part! "
            "You'll need to trade for one at the next fort or settlement."
        ),
        details={"part": part},
    )


def _resolve_wild_fruit(state: "GameState", dice: "DiceRoller", roll: int) -> HazardOutcome:
    pounds = dice.randint(*WILD_FRUIT_POUNDS, "wild fruit found")
    return HazardOutcome(
        hazard_type=HazardType.WILD_FRUIT,
        roll=roll,
        food=pounds,
        event=f"You found {pounds} pounds of wild fruit!",
        message=f"You found {pounds} pounds of wild fruit growing near the trail!",
    )


def _resolve_lost_oxen(state: "GameState", dice: "DiceRoller", roll: int) -> HazardOutcome:
    lost = dice.randint(*OXEN_LOST, "oxen wandered off")
    if state.supplies.oxen > lost:
        text = f"{lost} of your oxen wandered off during the night."
        return HazardOutcome(
            hazard_type=HazardType.LOST_OXEN,
            roll=roll,
            oxen=-lost,
            event=text,
            message=text,
        )
    held = state.supplies.oxen
    if held > 1:
        event = f"All {held} of your remaining oxen wandered off during the night!"
    else:
        event = "Your last ox wandered off during the night!"
    return HazardOutcome(
        hazard_type=HazardType.LOST_OXEN,
        roll=roll,
        oxen=-held,
        event=event,
        message=f"{event} Without an ox, your wagon cannot move.",
    )


def _resolve_theft(state: "GameState", dice: "DiceRoller", roll: int) -> HazardOutcome:
    item = dice.choice(THEFT_ITEMS, "stolen item")
    held = getattr(state.supplies, item)
    if held <= 0:
        logger.debug(f"Theft of {item} found nothing to steal")
        return HazardOutcome(hazard_type=HazardType.THEFT, roll=roll, details={"item": item})

    amount = dice.randint(*THEFT_AMOUNTS[item], f"{item} stolen")
    if item == "food":
        text = f"{amount} pounds of food was stolen during the night."
    elif item == "ammunition":
        text = f"{amount} boxes of ammunition were stolen."
    else:
        text = f"{amount} sets of clothing were stolen."
    return HazardOutcome(
        hazard_type=HazardType.THEFT,
        roll=roll,
        event=text,
        message=text,
        details={"item": item},
        **{item: -amount},
    )


def _resolve_bad_weather(state: "GameState", dice: "DiceRoller", roll: int) -> HazardOutcome:
    season = get_season_for_month(state.month)
    if season == Season.WINTER:
        event = "A blizzard has set in!"
        message = "A severe blizzard has set in! Travel will be difficult and dangerous."
    elif season == Season.SUMMER:
        event = "A severe heat wave has begun!"
        message = "A severe heat wave has begun! Travel will be exhausting and water will be scarce."
    else:
        event = "Heavy rain has set in!"
        message = "Heavy rain has set in! The trail is muddy and progress will be slower."
    return HazardOutcome(
        hazard_type=HazardType.BAD_WEATHER,
        roll=roll,
        weather=get_severe_weather(state.month),
        event=event,
        message=message,
    )


def apply_hazard_outcome(
    state: "GameState",
    outcome: HazardOutcome,
    dice: "DiceRoller",
) -> "GameState":
    """
    Produce the state after a hazard.

    Supplies are clamped at zero. Lost days run through the calendar, so
    they can roll over the month and bring new weather.
    """
    from oregon_trail.trail.trail_engine import advance_calendar

    supplies = state.supplies.adjust(
        food=outcome.food,
        ammunition=outcome.ammunition,
        clothing=outcome.clothing,
        oxen=outcome.oxen,
    )
    if outcome.spare_part is not None:
        supplies = replace(supplies, spare_parts=supplies.spare_parts.adjust(outcome.spare_part, -1))

    new_state = replace(state, supplies=supplies)
    if outcome.weather is not None:
        new_state = replace(new_state, weather=outcome.weather)
    if outcome.days_lost:
        new_state = advance_calendar(new_state, dice, outcome.days_lost)

    if outcome.event is not None:
        logger.info(f"Hazard: {outcome.event}")
        new_state = new_state.with_log(outcome.message or outcome.event, events=[outcome.event])
    return new_state
