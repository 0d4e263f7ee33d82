"""
Milestone Table for the Oregon Trail.

The 18 waypoints between Independence, Missouri and the Willamette Valley,
ordered by strictly increasing distance (miles from Independence). The
table is static reference data and never changes after import.
"""

from typing import Optional

from oregon_trail.data_models import Milestone, MilestoneType, RiverData, RiverMilestone


ORIGIN_NAME = "Independence, Missouri"

MILESTONES: tuple[Milestone, ...] = (
    Milestone("Independence, Missouri", 0, MilestoneType.TOWN),
    RiverMilestone("Kansas River Crossing", 102, river=RiverData(width=620, depth=4)),
    RiverMilestone("Big Blue River Crossing", 185, river=RiverData(width=300, depth=3)),
    Milestone("Fort Kearney", 304, MilestoneType.FORT),
    Milestone("Chimney Rock", 554, MilestoneType.LANDMARK),
    Milestone("Fort Laramie", 640, MilestoneType.FORT),
    Milestone("Independence Rock", 830, MilestoneType.LANDMARK),
    Milestone("South Pass", 932, MilestoneType.LANDMARK),
    Milestone("Fort Bridger", 989, MilestoneType.FORT),
    RiverMilestone("Green River Crossing", 1151, river=RiverData(width=400, depth=6)),
    Milestone("Soda Springs", 1295, MilestoneType.LANDMARK),
    Milestone("Fort Hall", 1395, MilestoneType.FORT),
    RiverMilestone("Snake River Crossing", 1534, river=RiverData(width=1000, depth=7)),
    Milestone("Fort Boise", 1648, MilestoneType.FORT),
    Milestone("Blue Mountains", 1808, MilestoneType.LANDMARK),
    Milestone("Fort Walla Walla", 1863, MilestoneType.FORT),
    Milestone("The Dalles", 1973, MilestoneType.TOWN),
    Milestone("Willamette Valley", 2040, MilestoneType.TOWN),
)

MILESTONE_BY_NAME: dict[str, Milestone] = {m.name: m for m in MILESTONES}

# The journey's first target skips the two early rivers
FIRST_MILESTONE: Milestone = MILESTONE_BY_NAME["Fort Kearney"]

FINAL_MILESTONE: Milestone = MILESTONES[-1]


def get_milestone(name: str) -> Optional[Milestone]:
    """Get a milestone by its exact name."""
    return MILESTONE_BY_NAME.get(name)


def get_next_milestone(miles_traveled: int) -> Milestone:
    """
    Get the first milestone strictly beyond the distance travelled.

    Past the end of the table, the last milestone is returned again.
    """
    for milestone in MILESTONES:
        if milestone.distance > miles_traveled:
            return milestone
    return MILESTONES[-1]

