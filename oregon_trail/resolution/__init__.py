"""Resolution module.

Provides the daily health model and the river crossing resolver.
"""

from oregon_trail.resolution.health_resolver import (
    RATIONS_HEALTH_DELTA,
    PACE_HEALTH_DELTA,
    HealthChange,
    health_delta,
    illness_delta,
    roll_person_health,
    update_health,
)
from oregon_trail.resolution.river_resolver import (
    CrossingDamage,
    CrossingResult,
    CrossingStrategy,
    apply_crossing_result,
    caulk_fail_chance,
    current_river_depth,
    ferry_cost,
    ford_fail_chance,
    river_crossing,
)

__all__ = [
    "RATIONS_HEALTH_DELTA",
    "PACE_HEALTH_DELTA",
    "HealthChange",
    "health_delta",
    "illness_delta",
    "roll_person_health",
    "update_health",
    "CrossingDamage",
    "CrossingResult",
    "CrossingStrategy",
    "apply_crossing_result",
    "caulk_fail_chance",
    "current_river_depth",
    "ferry_cost",
    "ford_fail_chance",
    "river_crossing",
]
