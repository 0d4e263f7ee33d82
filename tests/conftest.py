"""
Pytest fixtures for the Oregon Trail test suite.

Provides reusable fixtures for dice, run logs, game states and controllers.
"""

import pytest

from oregon_trail.data_models import DiceRoller
from oregon_trail.game_state.trail_controller import TrailController
from oregon_trail.observability.run_log import RunLog
from tests.helpers import ScriptedDice, new_party


# =============================================================================
# DICE FIXTURES
# =============================================================================


@pytest.fixture
def seeded_dice():
    """Provide a seeded DiceRoller for reproducible tests."""
    return DiceRoller(seed=42)


@pytest.fixture
def scripted_dice():
    """Factory for dice that roll the given values in order."""

    def _make(*values: int, run_log=None) -> ScriptedDice:
        return ScriptedDice(values, run_log=run_log)

    return _make


# =============================================================================
# RUN LOG FIXTURES
# =============================================================================


@pytest.fixture
def run_log():
    """A fresh RunLog, not shared with other tests."""
    return RunLog()


# =============================================================================
# GAME STATE FIXTURES
# =============================================================================


@pytest.fixture
def party_state():
    """Ann (banker) with Bob and Cy at Independence on March 1, 1848."""
    return new_party()


@pytest.fixture
def controller(party_state, seeded_dice):
    """A TrailController for a fresh journey with seeded dice."""
    return TrailController(party_state, seeded_dice)
