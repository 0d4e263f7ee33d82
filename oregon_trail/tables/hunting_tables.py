"""
Hunting Tables for the Oregon Trail.

Game animals that roam the hunting field. Each new target is drawn from a
weighted table (rabbits are common, bears are rare); larger animals are
slower and yield more meat.
"""

from dataclasses import dataclass
from enum import Enum


class AnimalType(str, Enum):
    """Game animals found on the hunting field."""

    RABBIT = "rabbit"
    DEER = "deer"
    BUFFALO = "buffalo"
    BEAR = "bear"


@dataclass(frozen=True)
class GameAnimal:
    """A huntable animal: hitbox size in pixels, speed in pixels per tick, food in pounds."""

    animal_type: AnimalType
    weight: float
    width: int
    height: int
    speed: float
    food_value: int

    def to_dict(self) -> dict:
        return {
            "animal_type": self.animal_type.value,
            "weight": self.weight,
            "width": self.width,
            "height": self.height,
            "speed": self.speed,
            "food_value": self.food_value,
        }


# =============================================================================
# HUNTING FIELD
# =============================================================================

FIELD_WIDTH = 800
FIELD_HEIGHT = 500

# Targets spawn in a band above the ground strip
SPAWN_Y_MIN = 100
SPAWN_Y_RANGE = 300

HUNT_DURATION_SECONDS = 60
INITIAL_TARGETS = 5
BULLETS_PER_BOX = 20

# Chance a target is replaced when it leaves the field / after it is shot
RESPAWN_ON_EXIT_CHANCE = 0.3
RESPAWN_ON_HIT_CHANCE = 0.5


# =============================================================================
# GAME ANIMALS
# =============================================================================

GAME_ANIMALS: list[GameAnimal] = [
    GameAnimal(AnimalType.RABBIT, weight=0.4, width=30, height=20, speed=5, food_value=5),
    GameAnimal(AnimalType.DEER, weight=0.3, width=60, height=50, speed=3, food_value=15),
    GameAnimal(AnimalType.BUFFALO, weight=0.2, width=80, height=60, speed=2, food_value=40),
    GameAnimal(AnimalType.BEAR, weight=0.1, width=70, height=65, speed=1.5, food_value=30),
]


def select_animal(rand: float) -> GameAnimal:
    """
    Pick an animal from the weighted table.

    Args:
        rand: A value in [0, 1)

    Returns:
        The first animal whose cumulative weight exceeds rand
    """
    cumulative = 0.0
    for animal in GAME_ANIMALS:
        cumulative += animal.weight
        if rand < cumulative:
            return animal
    return GAME_ANIMALS[0]


# =============================================================================
# QUICK HUNT
# =============================================================================

QUICK_HUNT_BASE_CHANCE = 30
QUICK_HUNT_SKILL_BONUS = 5
QUICK_HUNT_BULLETS = (1, 3)
QUICK_HUNT_BASE_FOOD = (10, 50)
QUICK_HUNT_SKILL_FOOD = (2, 5)

# (food below, narration); anything at or above the last bound is an excellent hunt
QUICK_HUNT_TIERS: list[tuple[int, str]] = [
    (20, "You shot a small animal, gaining a little meat."),
    (40, "You hunted successfully, bringing back a decent amount of meat."),
]
QUICK_HUNT_EXCELLENT = "Excellent hunt! You brought back a large amount of meat!"
QUICK_HUNT_FAILURE = "Your hunting trip was unsuccessful. Better luck next time."
QUICK_HUNT_NO_AMMO = "You don't have any ammunition to hunt with!"


def describe_quick_hunt(food: int) -> str:
    """Narration for a successful quick hunt by pounds of meat."""
    for bound, text in QUICK_HUNT_TIERS:
        if food < bound:
            return text
    return QUICK_HUNT_EXCELLENT
