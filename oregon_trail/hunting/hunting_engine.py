"""
Hunting Engine for the Oregon Trail.

Two ways to hunt:

- HuntingSession: the shooting-gallery mini-game as a headless model.
  Animals cross an 800x500 field; the hunter fires at field coordinates
  until the 60 seconds run out or the bullets do.
- quick_hunt(): a single resolved hunt weighted by hunting skill.

Either way the result is a HuntOutcome of (food_gained, bullets_used),
which apply_hunt_outcome() turns into food and spent ammunition boxes.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Optional
import logging
import math

from oregon_trail.tables.hunting_tables import (
    BULLETS_PER_BOX,
    FIELD_WIDTH,
    HUNT_DURATION_SECONDS,
    INITIAL_TARGETS,
    QUICK_HUNT_BASE_CHANCE,
    QUICK_HUNT_BASE_FOOD,
    QUICK_HUNT_BULLETS,
    QUICK_HUNT_FAILURE,
    QUICK_HUNT_NO_AMMO,
    QUICK_HUNT_SKILL_BONUS,
    QUICK_HUNT_SKILL_FOOD,
    RESPAWN_ON_EXIT_CHANCE,
    RESPAWN_ON_HIT_CHANCE,
    SPAWN_Y_MIN,
    SPAWN_Y_RANGE,
    GameAnimal,
    describe_quick_hunt,
    select_animal,
)

if TYPE_CHECKING:
    from oregon_trail.data_models import DiceRoller, GameState


logger = logging.getLogger(__name__)


class HuntingError(Exception):
    """Raised when a hunt is used after it has ended."""
    pass


@dataclass(frozen=True)
class HuntOutcome:
    """What a hunt brought back."""

    food_gained: int
    bullets_used: int

    @property
    def success(self) -> bool:
        return self.food_gained > 0

    @property
    def boxes_used(self) -> int:
        """Ammunition boxes spent; a partly used box counts as spent."""
        return math.ceil(self.bullets_used / BULLETS_PER_BOX)

    def to_dict(self) -> dict[str, Any]:
        return {
            "food_gained": self.food_gained,
            "bullets_used": self.bullets_used,
            "success": self.success,
        }


# =============================================================================
# HUNTING SESSION
# =============================================================================


@dataclass
class Target:
    """An animal crossing the hunting field. x, y is the top-left corner."""

    target_id: int
    animal: GameAnimal
    x: float
    y: float
    direction: int

    @property
    def width(self) -> int:
        return self.animal.width

    @property
    def height(self) -> int:
        return self.animal.height

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height

    def has_left_field(self) -> bool:
        if self.direction < 0:
            return self.x < -self.width
        return self.x > FIELD_WIDTH + self.width


@dataclass(frozen=True)
class ShotResult:
    """The result of one shot."""

    hit: bool
    target: Optional[Target] = None
    food: int = 0


class HuntingSession:
    """
    A hunt on the shooting field.

    The session advances by animation frames (step) and by whole seconds
    (tick). Each shot hits at most one animal. The hunt is over when time
    runs out or the last bullet is fired; finish() then reports the
    outcome exactly once.
    """

    def __init__(
        self,
        available_bullets: int,
        dice: "DiceRoller",
        duration: int = HUNT_DURATION_SECONDS,
    ):
        """
        Args:
            available_bullets: Bullets carried (ammunition boxes x 20)
            dice: Dice roller for animal spawns
            duration: Hunt length in seconds
        """
        self.dice = dice
        self.bullets = max(0, available_bullets)
        self.bullets_used = 0
        self.food_gained = 0
        self.time_left = duration
        self.targets: list[Target] = []
        self.hits: list[Target] = []
        self._next_id = 1
        self._finished = False
        self.is_over = self.bullets <= 0

        for _ in range(INITIAL_TARGETS):
            self._spawn_target()
        logger.debug(f"Hunt started with {self.bullets} bullets")

    def _spawn_target(self) -> Target:
        animal = select_animal(self.dice.random("hunting animal"))
        width = animal.width
        x = -width if self.dice.random("spawn side") < 0.5 else FIELD_WIDTH + width
        y = SPAWN_Y_MIN + self.dice.random("spawn height") * SPAWN_Y_RANGE
        direction = -1 if self.dice.random("spawn direction") < 0.5 else 1
        target = Target(
            target_id=self._next_id, animal=animal, x=x, y=y, direction=direction
        )
        self._next_id += 1
        self.targets.append(target)
        return target

    def step(self, frames: int = 1) -> None:
        """Move every animal; those leaving the field may be replaced."""
        for _ in range(frames):
            if self.is_over:
                return
            remaining: list[Target] = []
            departed = 0
            for target in self.targets:
                target.x += target.animal.speed * target.direction
                if target.has_left_field():
                    departed += 1
                else:
                    remaining.append(target)
            self.targets = remaining
            for _ in range(departed):
                if self.dice.random("respawn after exit") < RESPAWN_ON_EXIT_CHANCE:
                    self._spawn_target()

    def tick(self, seconds: int = 1) -> None:
        """Run the hunt clock down."""
        if self.is_over:
            return
        self.time_left = max(0, self.time_left - seconds)
        if self.time_left == 0:
            self.is_over = True
            logger.debug("Hunt over: time ran out")

    def shoot(self, x: float, y: float) -> ShotResult:
        """
        Fire one bullet at a point on the field.

        Raises:
            HuntingError: If the hunt is over
        """
        if self.is_over:
            raise HuntingError("The hunt is over")

        self.bullets -= 1
        self.bullets_used += 1

        result = ShotResult(hit=False)
        for target in self.targets:
            if target.contains(x, y):
                self.targets.remove(target)
                self.hits.append(target)
                self.food_gained += target.animal.food_value
                result = ShotResult(hit=True, target=target, food=target.animal.food_value)
                logger.debug(f"Hit {target.animal.animal_type.value} for {target.animal.food_value} lbs")
                if self.dice.random("respawn after hit") < RESPAWN_ON_HIT_CHANCE:
                    self._spawn_target()
                break

        if self.bullets <= 0:
            self.is_over = True
            logger.debug("Hunt over: out of bullets")
        return result

    def finish(self) -> HuntOutcome:
        """
        End the hunt and report what it brought back.

        Raises:
            HuntingError: If the hunt was already finished
        """
        if self._finished:
            raise HuntingError("The hunt has already been finished")
        self._finished = True
        self.is_over = True
        outcome = HuntOutcome(food_gained=self.food_gained, bullets_used=self.bullets_used)
        logger.info(f"Hunt finished: {outcome.food_gained} lbs using {outcome.bullets_used} bullets")
        return outcome


# =============================================================================
# QUICK HUNT
# =============================================================================


@dataclass(frozen=True)
class QuickHuntResult:
    """A resolved quick hunt."""

    success: bool
    food_gained: int
    bullets_used: int
    message: str

    @property
    def outcome(self) -> HuntOutcome:
        return HuntOutcome(food_gained=self.food_gained, bullets_used=self.bullets_used)


def quick_hunt(available_bullets: int, dice: "DiceRoller", skill: int = 5) -> QuickHuntResult:
    """
    Resolve a hunt without the shooting field.

    Success is d100 <= 30 + 5 x skill (skill clamped to 1-10). A hunt
    spends 1-3 bullets, never more than are carried; a successful one
    brings back 10-50 pounds plus skill x 2-5.
    """
    if available_bullets <= 0:
        return QuickHuntResult(success=False, food_gained=0, bullets_used=0, message=QUICK_HUNT_NO_AMMO)

    skill = min(10, max(1, skill))
    chance = QUICK_HUNT_BASE_CHANCE + skill * QUICK_HUNT_SKILL_BONUS
    success = dice.randint(1, 100, "hunting success") <= chance
    bullets = min(available_bullets, dice.randint(*QUICK_HUNT_BULLETS, "bullets spent hunting"))

    if not success:
        return QuickHuntResult(
            success=False, food_gained=0, bullets_used=bullets, message=QUICK_HUNT_FAILURE
        )

    food = dice.randint(*QUICK_HUNT_BASE_FOOD, "hunting yield")
    food += skill * dice.randint(*QUICK_HUNT_SKILL_FOOD, "hunting skill yield")
    return QuickHuntResult(
        success=True, food_gained=food, bullets_used=bullets, message=describe_quick_hunt(food)
    )


# =============================================================================
# APPLYING OUTCOMES
# =============================================================================


def apply_hunt_outcome(state: "GameState", outcome: HuntOutcome) -> "GameState":
    """Add the meat and remove the spent ammunition boxes."""
    supplies = state.supplies.adjust(food=outcome.food_gained, ammunition=-outcome.boxes_used)
    if outcome.success:
        message = (
            f"Hunting successful! You got {outcome.food_gained} pounds of food "
            f"using {outcome.bullets_used} bullets."
        )
    else:
        message = "Your hunting was unsuccessful. Better luck next time."
    return replace(state, supplies=supplies, messages=(message,))
