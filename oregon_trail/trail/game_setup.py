"""
Game setup: builds the starting state of a journey.
"""

from typing import Sequence, Union
import logging

from oregon_trail.data_models import (
    GameState,
    Occupation,
    Pace,
    Person,
    RationsLevel,
    SpareParts,
    Supplies,
    Weather,
)
from oregon_trail.tables.milestone_table import FIRST_MILESTONE, ORIGIN_NAME


logger = logging.getLogger(__name__)


STARTING_CASH: dict[Occupation, float] = {
    Occupation.BANKER: 1600.0,
    Occupation.CARPENTER: 800.0,
    Occupation.FARMER: 400.0,
}

STARTING_FOOD = 200
STARTING_AMMUNITION = 2
STARTING_CLOTHING = 3
STARTING_OXEN = 4
STARTING_SPARES = 1

START_DAY = 1
START_MONTH = 3
START_YEAR = 1848


def initialize_game(
    leader_name: str,
    companion_names: Sequence[str],
    occupation: Union[Occupation, str],
) -> GameState:
    """
    Build the starting game state.

    Blank companion names are dropped. Leader name validation is left to
    the caller.

    Args:
        leader_name: Name of the party leader
        companion_names: Names of the companions, blanks allowed
        occupation: Occupation or its value ('banker', 'carpenter', 'farmer')

    Returns:
        The initial GameState at Independence, Missouri on March 1, 1848

    Raises:
        ValueError: If occupation names no known occupation
    """
    occupation = Occupation(occupation)
    companions = tuple(Person(name=name) for name in companion_names if name.strip())

    supplies = Supplies(
        food=STARTING_FOOD,
        ammunition=STARTING_AMMUNITION,
        clothing=STARTING_CLOTHING,
        oxen=STARTING_OXEN,
        spare_parts=SpareParts(
            wheels=STARTING_SPARES, axles=STARTING_SPARES, tongues=STARTING_SPARES
        ),
        cash=STARTING_CASH[occupation],
    )

    logger.info(
        f"New journey: {leader_name} ({occupation.value}) with {len(companions)} companions"
    )
    return GameState(
        party_leader=Person(name=leader_name),
        companions=companions,
        occupation=occupation,
        supplies=supplies,
        day=START_DAY,
        month=START_MONTH,
        year=START_YEAR,
        miles_traveled=0,
        current_location=ORIGIN_NAME,
        next_milestone=FIRST_MILESTONE,
        weather=Weather.COOL,
        pace=Pace.STEADY,
        rations=RationsLevel.FILLING,
        events=(f"Your journey begins in {ORIGIN_NAME}.",),
        messages=(
            "You set out on the trail with high hopes. "
            "The journey ahead is long but your spirits are high.",
        ),
    )
