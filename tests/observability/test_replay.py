"""
Tests for replaying a journey from its recorded roll stream.
"""

from oregon_trail.data_models import DiceRoller
from oregon_trail.observability import ReplayMode, ReplaySession, RunLog
from oregon_trail.trail import advance_turn


def run_days(state, dice, days=40):
    for _ in range(days):
        state = advance_turn(state, dice)
    return state


class TestReplaySession:
    """Stepping through a roll stream."""

    def test_from_run_log(self):
        """A session built from a log holds its rolls, ready to replay."""
        log = RunLog()
        log.set_seed(5)
        log.log_roll("d100", [12], 0, 12, "hazard check")
        log.log_transition("traveling", "hunting", "start_hunt")
        log.log_roll("d3", [2], 0, 2, "bullets")
        session = ReplaySession.from_run_log(log)
        assert session.is_replaying()
        assert session.seed == 5
        assert [r["total"] for r in session.roll_stream] == [12, 2]

    def test_from_dict(self):
        """The serialized log works as well."""
        log = RunLog()
        log.log_roll("d6", [4], 0, 4)
        session = ReplaySession.from_run_log(log.to_dict())
        assert session.get_remaining_rolls() == 1

    def test_get_next_roll(self):
        """Rolls are handed out in order."""
        session = ReplaySession(
            roll_stream=[{"notation": "d6", "rolls": [1], "modifier": 0, "total": 1, "reason": ""},
                         {"notation": "d6", "rolls": [6], "modifier": 0, "total": 6, "reason": ""}],
            mode=ReplayMode.REPLAYING,
        )
        assert session.get_next_roll()["total"] == 1
        assert session.get_position() == 1
        assert session.get_next_roll()["total"] == 6
        assert not session.has_next_roll()

    def test_overrun(self):
        """Running past the end is counted."""
        session = ReplaySession(mode=ReplayMode.REPLAYING)
        assert session.get_next_roll() is None
        assert session.get_overrun_count() == 1

    def test_not_replaying(self):
        """A disabled session hands out nothing."""
        session = ReplaySession(
            roll_stream=[{"notation": "d6", "rolls": [1], "modifier": 0, "total": 1, "reason": ""}]
        )
        assert session.get_next_roll() is None
        session.start_replay()
        assert session.get_next_roll()["total"] == 1
        session.stop_replay()
        assert session.mode == ReplayMode.DISABLED

    def test_summary(self):
        session = ReplaySession(seed=3, mode=ReplayMode.REPLAYING)
        summary = session.get_summary()
        assert summary["seed"] == 3
        assert summary["mode"] == "replaying"
        assert summary["total_rolls"] == 0


class TestJourneyReplay:
    """A recorded journey replays exactly."""

    def test_replay_from_run_log(self, party_state):
        """Replaying the roll stream with another seed reproduces the journey."""
        log = RunLog()
        original = run_days(party_state, DiceRoller(seed=1848, run_log=log))

        session = ReplaySession.from_run_log(log)
        replayed = run_days(party_state, DiceRoller(seed=99, replay=session))

        assert replayed == original
        assert session.get_remaining_rolls() == 0
        assert session.get_overrun_count() == 0

    def test_replay_from_saved_log(self, party_state, tmp_path):
        """A run log saved to disk loads back as a replay session."""
        log = RunLog()
        log.set_seed(7)
        original = run_days(party_state, DiceRoller(seed=7, run_log=log), days=20)
        path = tmp_path / "journey.json"
        log.save(str(path))

        session = ReplaySession.load(str(path))
        assert session.seed == 7
        assert session.is_replaying()
        replayed = run_days(party_state, DiceRoller(seed=8, replay=session), days=20)
        assert replayed == original
        assert session.get_overrun_count() == 0
