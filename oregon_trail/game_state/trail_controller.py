"""
Trail Controller for the Oregon Trail.

Drives a journey the way a player does: travel a day, auto-travel until
something happens, rest, change pace or rations, cross rivers, hunt and
shop. The controller holds the current GameState, routes every random
outcome through its DiceRoller, and keeps the trail phase in a
StateMachine so that, for example, nobody travels past an uncrossed river.
"""

from dataclasses import replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Union
import logging

from oregon_trail.data_models import GameState, Pace, RationsLevel, RiverMilestone
from oregon_trail.game_state.state_machine import StateMachine, TrailPhase
from oregon_trail.hunting.hunting_engine import (
    HuntingSession,
    HuntOutcome,
    QuickHuntResult,
    apply_hunt_outcome,
    quick_hunt,
)
from oregon_trail.resolution.river_resolver import (
    CrossingResult,
    CrossingStrategy,
    apply_crossing_result,
    current_river_depth,
    river_crossing,
)
from oregon_trail.store.general_store import PURCHASE_MESSAGE, StoreOrder, order_total, purchase
from oregon_trail.tables.hunting_tables import BULLETS_PER_BOX, QUICK_HUNT_NO_AMMO
from oregon_trail.tables.milestone_table import FINAL_MILESTONE
from oregon_trail.trail.trail_engine import advance_turn
from oregon_trail.weather.calendar import format_date

if TYPE_CHECKING:
    from oregon_trail.data_models import DiceRoller
    from oregon_trail.observability.run_log import RunLog


logger = logging.getLogger(__name__)


class TrailControllerError(Exception):
    """Raised when an action is not possible in the current situation."""
    pass


REST_MESSAGE = "You rested for a day. Your party's health may improve."
AUTO_TRAVEL_EVENT_STOP = "Auto-travel stopped due to an event."
AUTO_TRAVEL_STOP = "Auto-travel stopped."
PARTY_DIED_EVENT = "Everyone in your party has died."
JOURNEY_COMPLETE_EVENT = f"You have reached the {FINAL_MILESTONE.name}! Your journey is complete."


class TrailController:
    """
    Session controller for one journey.

    Attributes:
        state: The current GameState (a new value after every action)
        dice: Dice roller used for every random outcome
        state_machine: The trail phase
    """

    def __init__(
        self,
        state: GameState,
        dice: "DiceRoller",
        run_log: Optional["RunLog"] = None,
    ):
        """
        Args:
            state: Starting game state, usually from initialize_game()
            dice: Dice roller for the journey
            run_log: RunLog for transitions and crossings (defaults to the dice's log)
        """
        self._state = state
        self.dice = dice
        self.run_log = run_log if run_log is not None else dice.run_log
        self.state_machine = StateMachine(TrailPhase.TRAVELING, run_log=self.run_log)
        self._hunt: Optional[HuntingSession] = None

        if self.run_log is not None:
            self.run_log.set_game_time_provider(
                lambda: format_date(self._state.month, self._state.day, self._state.year)
            )

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> TrailPhase:
        return self.state_machine.current_state

    @property
    def is_game_over(self) -> bool:
        return self.state_machine.is_game_over

    @property
    def hunt(self) -> Optional[HuntingSession]:
        """The hunt in progress, if any."""
        return self._hunt

    def _require_phase(self, action: str, *phases: TrailPhase) -> None:
        if self.phase not in phases:
            raise TrailControllerError(f"Cannot {action} while {self.phase.value.replace('_', ' ')}")

    def _check_game_over(self) -> bool:
        """Enter game over when the party is dead or the journey is complete."""
        if self.is_game_over:
            return True
        if self._state.living_count == 0:
            self._state = self._state.with_log(PARTY_DIED_EVENT, events=[PARTY_DIED_EVENT])
            self.state_machine.transition("party_died", {"date": self._date()})
            return True
        if (
            self.phase == TrailPhase.TRAVELING
            and self._state.current_location == FINAL_MILESTONE.name
        ):
            self._state = self._state.with_log(JOURNEY_COMPLETE_EVENT, events=[JOURNEY_COMPLETE_EVENT])
            self.state_machine.transition("journey_complete", {"date": self._date()})
            return True
        return False

    def _date(self) -> str:
        return format_date(self._state.month, self._state.day, self._state.year)

    def _enter_river_phase(self) -> None:
        river = self._state.next_milestone
        self.state_machine.transition("reach_river", {"river": river.name})
        notice = f"There's a river crossing ahead at {river.name}."
        if notice not in self._state.messages:
            self._state = self._state.with_log(notice)

    # =========================================================================
    # TRAVEL
    # =========================================================================

    def continue_on_trail(self) -> GameState:
        """
        Travel one day.

        With a river ahead the party stops at the bank instead and the
        controller enters the river crossing phase.
        """
        self._require_phase("travel", TrailPhase.TRAVELING)
        if self._state.next_milestone.is_river:
            self._state = replace(self._state, messages=())
            self._enter_river_phase()
            return self._state

        self._state = advance_turn(self._state, self.dice)
        self._check_game_over()
        return self._state

    def auto_travel(
        self,
        max_days: Optional[int] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> dict[str, Any]:
        """
        Travel day after day until something needs the player.

        Stops when should_stop() returns True, after a significant day,
        at a river, at the end of the journey, or after max_days.

        Returns:
            Dictionary with days_traveled, stop_reason and messages
        """
        self._require_phase("travel", TrailPhase.TRAVELING)
        days = 0
        reason = "max_days"

        while True:
            if should_stop is not None and should_stop():
                reason = "cancelled"
                break
            if max_days is not None and days >= max_days:
                break
            if self._state.next_milestone.is_river:
                self._state = replace(self._state, messages=())
                self._enter_river_phase()
                reason = "river"
                break

            self._state = advance_turn(self._state, self.dice)
            days += 1

            if self._check_game_over():
                reason = "game_over"
                break
            if self._state.had_significant_event:
                reason = "event"
                break

        if reason == "event":
            self._state = self._state.with_log(AUTO_TRAVEL_EVENT_STOP)
        elif reason in ("cancelled", "max_days"):
            self._state = self._state.with_log(AUTO_TRAVEL_STOP)

        logger.info(f"Auto-travel: {days} days, stopped ({reason})")
        return {
            "days_traveled": days,
            "stop_reason": reason,
            "messages": list(self._state.messages),
        }

    def rest(self) -> GameState:
        """Rest in camp for one day, then resume the previous pace."""
        self._require_phase("rest", TrailPhase.TRAVELING)
        pace = self._state.pace
        rested = advance_turn(replace(self._state, pace=Pace.RESTING), self.dice)
        self._state = replace(rested, pace=pace, messages=(REST_MESSAGE, *rested.messages))
        self._check_game_over()
        return self._state

    def change_pace(self, pace: Union[Pace, str]) -> GameState:
        """
        Raises:
            ValueError: If pace names no known pace
        """
        pace = Pace(pace)
        self._require_phase("change pace", TrailPhase.TRAVELING, TrailPhase.RIVER_CROSSING)
        self._state = replace(
            self._state, pace=pace, messages=(f"You changed your pace to {pace.value}.",)
        )
        if self.run_log is not None:
            self.run_log.log_custom("pace_changed", {"pace": pace.value})
        return self._state

    def change_rations(self, rations: Union[RationsLevel, str]) -> GameState:
        """
        Raises:
            ValueError: If rations names no known rations level
        """
        rations = RationsLevel(rations)
        self._require_phase("change rations", TrailPhase.TRAVELING, TrailPhase.RIVER_CROSSING)
        self._state = replace(
            self._state, rations=rations, messages=(f"You changed your rations to {rations.value}.",)
        )
        if self.run_log is not None:
            self.run_log.log_custom("rations_changed", {"rations": rations.value})
        return self._state

    # =========================================================================
    # RIVERS
    # =========================================================================

    def cross_river(self, strategy: Union[CrossingStrategy, str]) -> CrossingResult:
        """
        Attempt the river ahead.

        Raises:
            TrailControllerError: If there is no river ahead
            ValueError: If strategy names no crossing method
        """
        strategy = CrossingStrategy(strategy)
        river = self._state.next_milestone
        if not isinstance(river, RiverMilestone):
            raise TrailControllerError("There is no river to cross here.")
        if self.phase == TrailPhase.TRAVELING:
            self._enter_river_phase()
        self._require_phase("cross a river", TrailPhase.RIVER_CROSSING)

        depth = current_river_depth(self._state)
        result = river_crossing(
            depth,
            river.river.width,
            strategy,
            self._state.supplies.cash,
            self._state.weather,
            self.dice,
        )
        self._state = apply_crossing_result(self._state, result, self.dice)

        if self.run_log is not None:
            self.run_log.log_crossing(
                river=river.name,
                strategy=strategy.value,
                success=result.success,
                message=result.message,
                days_lost=result.days_lost or 0,
            )

        if self._check_game_over():
            return result
        if result.crossed:
            self.state_machine.transition("river_crossed", {"river": river.name, "strategy": strategy.value})
        return result

    # =========================================================================
    # HUNTING
    # =========================================================================

    def start_hunt(self) -> HuntingSession:
        """
        Go out on the hunting field with every bullet carried.

        Raises:
            TrailControllerError: If the party has no ammunition
        """
        self._require_phase("hunt", TrailPhase.TRAVELING)
        if self._state.supplies.ammunition <= 0:
            raise TrailControllerError(QUICK_HUNT_NO_AMMO)
        self.state_machine.transition("start_hunt")
        self._hunt = HuntingSession(self._state.supplies.ammunition * BULLETS_PER_BOX, self.dice)
        return self._hunt

    def finish_hunt(self) -> HuntOutcome:
        """Bring the hunt's results back to the wagon."""
        self._require_phase("finish a hunt", TrailPhase.HUNTING)
        outcome = self._hunt.finish()
        self._hunt = None
        self._state = apply_hunt_outcome(self._state, outcome)
        self.state_machine.transition("end_hunt", outcome.to_dict())
        return outcome

    def quick_hunt(self, skill: int = 5) -> QuickHuntResult:
        """Hunt without the shooting field."""
        self._require_phase("hunt", TrailPhase.TRAVELING)
        bullets = self._state.supplies.ammunition * BULLETS_PER_BOX
        if bullets <= 0:
            result = quick_hunt(0, self.dice, skill)
            self._state = replace(self._state, messages=(result.message,))
            return result

        self.state_machine.transition("start_hunt", {"mode": "quick"})
        result = quick_hunt(bullets, self.dice, skill)
        hunted = apply_hunt_outcome(self._state, result.outcome)
        self._state = replace(hunted, messages=(result.message, *hunted.messages))
        self.state_machine.transition("end_hunt", result.outcome.to_dict())
        return result

    # =========================================================================
    # STORE
    # =========================================================================

    def open_store(self) -> GameState:
        self._require_phase("visit the store", TrailPhase.TRAVELING)
        self.state_machine.transition("enter_store", {"location": self._state.current_location})
        return self._state

    def buy(self, order: StoreOrder) -> GameState:
        """
        Buy an order at the general store.

        Raises:
            InsufficientFundsError: If the order costs more than the party's cash
        """
        self._require_phase("buy supplies", TrailPhase.SHOPPING)
        supplies = purchase(self._state.supplies, order)
        self._state = replace(self._state, supplies=supplies, messages=(PURCHASE_MESSAGE,))
        if self.run_log is not None:
            self.run_log.log_custom("purchase", {**order.to_dict(), "total": order_total(order)})
        return self._state

    def close_store(self) -> GameState:
        self._require_phase("leave the store", TrailPhase.SHOPPING)
        self.state_machine.transition("leave_store")
        return self._state
