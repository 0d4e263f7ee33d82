"""
Tests for the day-advance engine.
"""

from dataclasses import replace

import pytest

from oregon_trail.data_models import DiceRoller, HealthStatus, Pace, Person, RationsLevel, Weather
from oregon_trail.observability.run_log import RunLog
from oregon_trail.tables import get_milestone
from oregon_trail.trail import (
    MILES_PER_DAY,
    RATIONS_PER_DAY,
    advance_calendar,
    advance_turn,
    location_label,
    spend_days,
)
from tests.helpers import ScriptedDice, lone_traveler, near_milestone, quiet_day


class TestCalendarAdvance:
    """Days pass; weather changes with the month."""

    def test_same_month_keeps_weather(self, party_state):
        """No month change means no weather roll."""
        dice = ScriptedDice()
        state = advance_calendar(party_state, dice, 3)
        assert (state.month, state.day, state.year) == (3, 4, 1848)
        assert state.weather == party_state.weather
        assert dice.get_roll_log() == []

    def test_leap_february(self, party_state):
        """February 28, 1848 is followed by February 29."""
        state = replace(party_state, month=2, day=28)
        state = advance_calendar(state, ScriptedDice(), 1)
        assert (state.month, state.day) == (2, 29)

    def test_non_leap_february(self, party_state):
        """February 28, 1849 is followed by March 1."""
        state = replace(party_state, month=2, day=28, year=1849)
        state = advance_calendar(state, ScriptedDice(), 1)
        assert (state.month, state.day, state.year) == (3, 1, 1849)

    def test_month_change_rolls_weather(self, party_state):
        """A new month brings a weather roll for its season."""
        state = replace(party_state, month=6, day=30, weather=Weather.COOL)
        dice = ScriptedDice()
        state = advance_calendar(state, dice, 1)
        assert (state.month, state.day) == (7, 1)
        assert state.weather in {Weather.WARM, Weather.HOT, Weather.VERY_HOT, Weather.RAINY}
        assert len(dice.get_roll_log()) == 1


class TestTravel:
    """Miles and locations."""

    @pytest.mark.parametrize("pace,miles", [(Pace.STEADY, 15), (Pace.STRENUOUS, 20), (Pace.GRUELING, 25), (Pace.RESTING, 0)])
    def test_miles_per_pace(self, party_state, pace, miles):
        """Each pace covers its miles per day."""
        assert MILES_PER_DAY[pace] == miles
        state = advance_turn(replace(party_state, pace=pace), ScriptedDice(quiet_day(3)))
        assert state.miles_traveled == miles

    def test_first_day(self, party_state):
        """A quiet first day out of Independence."""
        dice = ScriptedDice(quiet_day(3))
        state = advance_turn(party_state, dice)
        assert (state.month, state.day) == (3, 2)
        assert state.miles_traveled == 15
        assert state.current_location == "15 miles from Independence"
        assert state.supplies.food == 191
        assert state.messages == ()
        assert not state.had_significant_event
        assert state.events == party_state.events
        assert dice.exhausted

    def test_resting_keeps_location(self, party_state):
        """No miles, no new location label."""
        state = advance_turn(replace(party_state, pace=Pace.RESTING), ScriptedDice(quiet_day(3)))
        assert state.current_location == "Independence, Missouri"

    def test_near_label(self, party_state):
        """Within 20 miles of the next milestone the label says so."""
        state = near_milestone(party_state, "Fort Kearney", 24)
        state = advance_turn(state, ScriptedDice(quiet_day(3)))
        assert state.miles_traveled == 295
        assert state.current_location == "Near Fort Kearney"

    def test_location_label(self):
        """Progress labels between milestones."""
        assert location_label(100, "Fort Kearney", 304) == "100 miles from Independence"
        assert location_label(284, "Fort Kearney", 304) == "Near Fort Kearney"

    def test_arrival(self, party_state):
        """Reaching a milestone announces it and targets the next one."""
        state = near_milestone(party_state, "Fort Kearney", 14)
        state = advance_turn(state, ScriptedDice(quiet_day(3)))
        assert state.miles_traveled == 305
        assert state.current_location == "Fort Kearney"
        assert state.next_milestone == get_milestone("Chimney Rock")
        assert state.messages == ("You've reached Fort Kearney!",)
        assert state.events[-1] == "You've reached Fort Kearney!"
        assert state.had_significant_event

    def test_arrival_before_river(self, party_state):
        """Arriving where a river lies ahead warns of the crossing."""
        state = near_milestone(party_state, "Fort Bridger", 9)
        state = advance_turn(state, ScriptedDice(quiet_day(3)))
        assert state.next_milestone.name == "Green River Crossing"
        assert state.messages == (
            "You've reached Fort Bridger!",
            "There's a river crossing ahead at Green River Crossing.",
        )

    def test_river_ahead_is_significant(self, party_state):
        """A day spent with a river ahead always halts auto-travel."""
        state = near_milestone(party_state, "Kansas River Crossing", 80)
        state = advance_turn(state, ScriptedDice(quiet_day(3)))
        assert state.messages == ()
        assert state.had_significant_event

    def test_no_travel_day(self, party_state):
        """A camp day passes time but moves nothing."""
        state = near_milestone(party_state, "Fort Kearney", 5)
        new_state = advance_turn(state, ScriptedDice(quiet_day(3)), travel=False)
        assert new_state.miles_traveled == state.miles_traveled
        assert new_state.next_milestone == state.next_milestone
        assert new_state.day == state.day + 1


class TestFood:
    """Daily food consumption."""

    @pytest.mark.parametrize(
        "rations,eaten",
        [
            (RationsLevel.FILLING, 9),
            (RationsLevel.MEAGER, 6),
            (RationsLevel.BARE_BONES, 3),
            (RationsLevel.NONE, 0),
        ],
    )
    def test_consumption(self, party_state, rations, eaten):
        """Three people eat their rations' pounds each."""
        assert RATIONS_PER_DAY[rations] * 3 == eaten
        state = advance_turn(replace(party_state, rations=rations), ScriptedDice(quiet_day(3)))
        assert state.supplies.food == 200 - eaten

    def test_dead_do_not_eat(self, party_state):
        """Only living members eat."""
        cy = Person("Cy", health=HealthStatus.DEAD, is_alive=False)
        state = party_state.with_party([party_state.party_leader, party_state.companions[0], cy])
        state = advance_turn(state, ScriptedDice(quiet_day(2)))
        assert state.supplies.food == 194

    def test_running_out(self):
        """Food running out is announced once."""
        state = lone_traveler(food=2)
        state = advance_turn(state, ScriptedDice(quiet_day(1)))
        assert state.supplies.food == 0
        assert "You have run out of food! Your party will quickly grow weak without food." in state.messages
        assert state.events[-1] == "You ran out of food!"
        assert state.had_significant_event

        state = advance_turn(state, ScriptedDice(quiet_day(1)))
        assert state.messages == ()
        assert state.events.count("You ran out of food!") == 1
        assert state.had_significant_event


class TestHealthInTurn:
    """Health rolls during a turn."""

    def test_death(self):
        """A member who reaches dead is announced and stays in the party."""
        state = lone_traveler(health=HealthStatus.POOR, rations=RationsLevel.NONE)
        state = advance_turn(state, ScriptedDice(quiet_day(1)))
        assert not state.party_leader.is_alive
        assert state.living_count == 0
        assert state.messages == ("Ann has died.",)
        assert state.events[-1] == "Ann has died."

    def test_recovery(self):
        """Very poor to poor is good news."""
        state = lone_traveler(health=HealthStatus.VERY_POOR)
        state = advance_turn(state, ScriptedDice(quiet_day(1)))
        assert state.party_leader.health == HealthStatus.POOR
        assert state.messages == ("Ann's health has improved.",)
        assert state.events[-1] == "Ann's health has improved from very poor to poor."

    def test_decline(self):
        """Falling to very poor is bad news."""
        state = lone_traveler(health=HealthStatus.FAIR, rations=RationsLevel.BARE_BONES)
        state = advance_turn(state, ScriptedDice([10, 100]))
        assert state.party_leader.health == HealthStatus.VERY_POOR
        assert state.messages == ("Ann's health has become very poor.",)
        assert state.events[-1] == "Ann's health has deteriorated to very poor."

    def test_health_rolled_leader_first(self, party_state):
        """Health rolls go leader first, then companions in order."""
        dice = ScriptedDice(quiet_day(3))
        advance_turn(party_state, dice)
        reasons = [r.reason for r in dice.get_roll_log()]
        assert reasons == [
            "health roll (Ann)",
            "health roll (Bob)",
            "health roll (Cy)",
            "hazard check",
        ]


class TestHazardsInTurn:
    """The day's hazard."""

    def test_hazard_applied(self, party_state):
        """Found fruit lands in the wagon and makes the day significant."""
        state = advance_turn(party_state, ScriptedDice([50, 50, 50, 3, 1, 12]))
        assert state.supplies.food == 200 - 9 + 12
        assert state.messages == ("You found 12 pounds of wild fruit growing near the trail!",)
        assert state.events[-1] == "You found 12 pounds of wild fruit!"
        assert state.had_significant_event

    def test_empty_theft_still_significant(self, party_state):
        """A hazard that fired without effect still halts auto-travel."""
        state = replace(party_state, supplies=replace(party_state.supplies, ammunition=0))
        state = advance_turn(state, ScriptedDice([50, 50, 50, 3, 3, 1]))
        assert state.messages == ()
        assert state.had_significant_event

    def test_messages_reset_each_turn(self, party_state):
        """Only the latest day's narration is kept in messages."""
        state = advance_turn(party_state, ScriptedDice([50, 50, 50, 3, 1, 12]))
        state = advance_turn(state, ScriptedDice(quiet_day(3)))
        assert state.messages == ()
        assert "You found 12 pounds of wild fruit!" in state.events


class TestSpendDays:
    """Days in camp."""

    def test_spend_days(self, party_state):
        """Days pass without travel, narration accumulates."""
        state = lone_traveler(health=HealthStatus.VERY_POOR)
        state = spend_days(state, 2, ScriptedDice(quiet_day(1) * 2))
        assert state.day == 3
        assert state.miles_traveled == 0
        assert state.messages == ("Ann's health has improved.",)

    def test_zero_days(self, party_state):
        """Spending no days changes nothing but the messages."""
        state = spend_days(party_state, 0, ScriptedDice())
        assert state.day == party_state.day
        assert state.messages == ()


class TestTurnLogging:
    """Turns reach the run log through the dice."""

    def test_turn_logged(self, party_state):
        """Each turn records a turn event."""
        log = RunLog()
        dice = ScriptedDice(quiet_day(3), run_log=log)
        advance_turn(party_state, dice)
        turns = log.get_turns()
        assert len(turns) == 1
        assert turns[0].date == "March 2, 1848"
        assert turns[0].miles_traveled == 15
        assert not turns[0].significant
        assert log.get_hazards() == []

    def test_hazard_logged(self, party_state):
        """A fired hazard records a hazard event."""
        log = RunLog()
        advance_turn(party_state, ScriptedDice([50, 50, 50, 3, 1, 12], run_log=log))
        hazards = log.get_hazards()
        assert len(hazards) == 1
        assert hazards[0].hazard_type == "wild_fruit"
        assert hazards[0].roll == 3


class TestDeterminism:
    """A seed determines the whole journey."""

    def test_same_seed_same_journey(self, party_state):
        """Two runs from one seed end in the same state."""
        def run(seed):
            dice = DiceRoller(seed=seed)
            state = party_state
            for _ in range(60):
                state = advance_turn(state, dice)
            return state

        assert run(1848) == run(1848)
