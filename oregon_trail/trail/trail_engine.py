"""
Trail Engine for the Oregon Trail.

Runs one simulated day at a time. Each turn, in order:

1. Advance the calendar one day (new weather only when the month changes)
2. Travel the pace's miles
3. Resolve location: arrival at the next milestone, or a progress label
4. Eat: living members times the rations' pounds per person
5. Roll health for every living member, leader first
6. Roll the daily hazard check
7. Flag whether the day was significant enough to halt auto-travel

advance_turn() never fails and never validates its input; an oxless
wagon, for instance, still travels. Stopping on such conditions is the
caller's decision.
"""

from dataclasses import replace
from typing import TYPE_CHECKING
import logging

from oregon_trail.data_models import Pace, RationsLevel, RiverMilestone
from oregon_trail.hazards.hazard_engine import apply_hazard_outcome, maybe_trigger_event
from oregon_trail.resolution.health_resolver import roll_person_health
from oregon_trail.tables.milestone_table import get_next_milestone
from oregon_trail.weather.calendar import advance_date, format_date
from oregon_trail.weather.weather_types import roll_weather

if TYPE_CHECKING:
    from oregon_trail.data_models import DiceRoller, GameState


logger = logging.getLogger(__name__)


MILES_PER_DAY: dict[Pace, int] = {
    Pace.STEADY: 15,
    Pace.STRENUOUS: 20,
    Pace.GRUELING: 25,
    Pace.RESTING: 0,
}

# Pounds per living person per day
RATIONS_PER_DAY: dict[RationsLevel, int] = {
    RationsLevel.FILLING: 3,
    RationsLevel.MEAGER: 2,
    RationsLevel.BARE_BONES: 1,
    RationsLevel.NONE: 0,
}

NEAR_MILESTONE_MILES = 20


# =============================================================================
# CALENDAR
# =============================================================================


def advance_calendar(state: "GameState", dice: "DiceRoller", days: int = 1) -> "GameState":
    """
    Move the date forward, regenerating the weather on each month change.

    Args:
        state: Current game state
        dice: Dice roller for the weather rolls
        days: Number of days to advance

    Returns:
        New state with the updated date and weather
    """
    day, month, year, weather = state.day, state.month, state.year, state.weather
    for _ in range(days):
        day, month, year, rolled = advance_date(day, month, year)
        if rolled:
            weather = roll_weather(month, dice).weather
            logger.debug(f"New month {format_date(month, day, year)}: weather is {weather.value}")
    return replace(state, day=day, month=month, year=year, weather=weather)


# =============================================================================
# TURN
# =============================================================================


def location_label(miles_traveled: int, next_milestone_name: str, next_distance: int) -> str:
    """Progress label shown between milestones."""
    if next_distance - miles_traveled <= NEAR_MILESTONE_MILES:
        return f"Near {next_milestone_name}"
    return f"{miles_traveled} miles from Independence"


def advance_turn(state: "GameState", dice: "DiceRoller", travel: bool = True) -> "GameState":
    """
    Simulate one day on the trail.

    Args:
        state: Current game state
        dice: Dice roller for weather, health and hazard rolls
        travel: False spends the day in camp (no miles, no location
            change), used for days lost at a river

    Returns:
        The next game state. messages holds only this day's narration;
        events keeps the whole history.
    """
    state = replace(state, messages=())

    # 1. Calendar
    state = advance_calendar(state, dice, 1)

    # 2. Travel
    miles = state.miles_traveled
    if travel:
        miles += MILES_PER_DAY[state.pace]
    state = replace(state, miles_traveled=miles)

    # 3. Location
    arrived = False
    if travel and miles >= state.next_milestone.distance:
        reached = state.next_milestone.name
        next_milestone = get_next_milestone(miles)
        arrived = True
        state = replace(state, current_location=reached, next_milestone=next_milestone)
        arrival = f"You've reached {reached}!"
        state = state.with_log(arrival, events=[arrival])
        if isinstance(next_milestone, RiverMilestone):
            state = state.with_log(f"There's a river crossing ahead at {next_milestone.name}.")
        logger.info(f"Arrived at {reached} ({miles} miles)")
    elif travel and miles > 0:
        state = replace(
            state,
            current_location=location_label(
                miles, state.next_milestone.name, state.next_milestone.distance
            ),
        )

    # 4. Food
    food_before = state.supplies.food
    consumed = state.living_count * RATIONS_PER_DAY[state.rations]
    state = replace(state, supplies=state.supplies.adjust(food=-consumed))
    if food_before > 0 and state.supplies.food == 0:
        state = state.with_log(
            "You have run out of food! Your party will quickly grow weak without food.",
            events=["You ran out of food!"],
        )
        logger.info("Party ran out of food")

    # 5. Health
    party = []
    for person in state.party:
        change = roll_person_health(person, state.rations, state.pace, dice)
        party.append(change.person)
        name = person.name
        if change.died:
            state = state.with_log(f"{name} has died.", events=[f"{name} has died."])
            logger.info(f"{name} has died")
        elif change.recovered_from_very_poor:
            state = state.with_log(
                f"{name}'s health has improved.",
                events=[f"{name}'s health has improved from very poor to poor."],
            )
        elif change.became_very_poor:
            state = state.with_log(
                f"{name}'s health has become very poor.",
                events=[f"{name}'s health has deteriorated to very poor."],
            )
    state = state.with_party(party)

    # 6. Hazards
    outcome = maybe_trigger_event(state, dice)
    if outcome is not None:
        state = apply_hazard_outcome(state, outcome, dice)

    # 7. Significance
    significant = (
        outcome is not None
        or len(state.messages) > 0
        or state.supplies.food == 0
        or state.next_milestone.is_river
        or arrived
    )
    state = replace(state, had_significant_event=significant)

    logger.debug(
        f"Turn {format_date(state.month, state.day, state.year)}: "
        f"{state.miles_traveled} miles, {state.supplies.food} lbs food, "
        f"{state.living_count} alive"
    )
    if dice.run_log is not None:
        dice.run_log.log_turn(
            date=format_date(state.month, state.day, state.year),
            miles_traveled=state.miles_traveled,
            location=state.current_location,
            messages=list(state.messages),
            significant=significant,
        )
        if outcome is not None:
            dice.run_log.log_hazard(
                hazard_type=outcome.hazard_type.value,
                roll=outcome.roll,
                description=outcome.event or "",
            )
    return state


def spend_days(state: "GameState", days: int, dice: "DiceRoller") -> "GameState":
    """
    Spend days in camp without travelling.

    Each day runs a full turn with travel disabled. The returned messages
    collect the narration of every day spent.
    """
    messages: list[str] = []
    for _ in range(days):
        state = advance_turn(state, dice, travel=False)
        messages.extend(state.messages)
    return replace(state, messages=tuple(messages))
