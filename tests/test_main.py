"""
Tests for the command-line entry point: configuration, session setup and
the command loop.
"""

import pytest

from oregon_trail.data_models import DiceRoller, Pace
from oregon_trail.observability import RunLog
from oregon_trail.main import (
    GameConfig,
    TrailCLI,
    create_config_from_args,
    create_session,
    save_run_log,
    format_status,
    format_supplies,
    parse_arguments,
)
from tests.helpers import ScriptedDice, quiet_day


@pytest.fixture
def cli():
    config = GameConfig(seed=42, leader_name="Ann", companion_names=["Bob"], record_run_log=False)
    return TrailCLI(create_session(config), config)


class TestGameConfig:
    """Configuration normalization."""

    def test_occupation_normalized(self):
        assert GameConfig(leader_name="Ann", occupation="FARMER").occupation == "farmer"

    def test_unknown_occupation(self):
        with pytest.raises(ValueError):
            GameConfig(leader_name="Ann", occupation="blacksmith")

    def test_blank_companions_dropped(self):
        config = GameConfig(leader_name="Ann", companion_names=["Bob", "  ", ""])
        assert config.companion_names == ["Bob"]


class TestArguments:
    """Parsing the command line into a config."""

    def test_defaults(self):
        config = create_config_from_args(parse_arguments([]))
        assert config.seed is None
        assert config.occupation == "banker"
        assert config.auto_travel_days == 30
        assert config.record_run_log

    def test_full_command_line(self):
        args = parse_arguments(
            ["--seed", "1848", "--name", "Ann", "--companion", "Bob", "--companion", "Cy",
             "--occupation", "carpenter", "--auto-days", "5", "--no-run-log"]
        )
        config = create_config_from_args(args)
        assert config.seed == 1848
        assert config.leader_name == "Ann"
        assert config.companion_names == ["Bob", "Cy"]
        assert config.occupation == "carpenter"
        assert config.auto_travel_days == 5
        assert not config.record_run_log

    def test_run_log_files(self):
        """--save-log and --replay land in the config."""
        config = create_config_from_args(
            parse_arguments(["--save-log", "out.json", "--replay", "in.json"])
        )
        assert config.save_log_path == "out.json"
        assert config.replay_path == "in.json"


class TestCreateSession:
    """Building a controller from a config."""

    def test_blank_name_refused(self):
        with pytest.raises(ValueError, match="Please enter your name"):
            create_session(GameConfig(leader_name="   "))

    def test_session(self):
        """The party and seed come from the config."""
        controller = create_session(GameConfig(seed=7, leader_name="Ann", companion_names=["Bob"]))
        assert [p.name for p in controller.state.party] == ["Ann", "Bob"]
        assert controller.dice.seed == 7
        assert controller.run_log.get_seed() == 7

    def test_without_run_log(self):
        controller = create_session(GameConfig(leader_name="Ann", record_run_log=False))
        assert controller.run_log is None

    def test_replay_session(self, tmp_path):
        """A saved run log supplies the seed and the rolls of a new session."""
        log = RunLog()
        log.set_seed(1848)
        dice = DiceRoller(seed=1848, run_log=log)
        rolls = [dice.randint(1, 100, "hazard check") for _ in range(3)]
        path = tmp_path / "trip.json"
        log.save(str(path))

        controller = create_session(
            GameConfig(leader_name="Ann", record_run_log=False, replay_path=str(path))
        )
        assert controller.dice.seed == 1848
        assert controller.dice.replay.get_remaining_rolls() == 3
        assert [controller.dice.randint(1, 100, "hazard check") for _ in range(3)] == rolls


class TestSaveRunLog:
    """Writing the run log when the journey ends."""

    def test_saved(self, tmp_path, capsys):
        """The log is written where the config says."""
        path = tmp_path / "trip.json"
        config = GameConfig(seed=5, leader_name="Ann", save_log_path=str(path))
        controller = create_session(config)
        controller.continue_on_trail()
        assert save_run_log(controller, config)
        assert path.exists()
        assert "Run log saved to" in capsys.readouterr().out

    def test_nothing_to_save(self, tmp_path):
        """Without a recorded log nothing is written."""
        path = tmp_path / "trip.json"
        config = GameConfig(leader_name="Ann", record_run_log=False, save_log_path=str(path))
        assert not save_run_log(create_session(config), config)
        assert not path.exists()

    def test_no_path(self):
        config = GameConfig(leader_name="Ann")
        assert not save_run_log(create_session(config), config)


class TestFormatting:
    """Status and supplies text."""

    def test_status(self, cli):
        text = format_status(cli.controller.state)
        assert "Date: March 1, 1848" in text
        assert "Miles traveled: 0" in text
        assert "  Ann: good" in text

    def test_supplies(self, cli):
        text = format_supplies(cli.controller.state)
        assert "Cash: $1600.00" in text


class TestTrailCLI:
    """Commands typed at the prompt."""

    def test_unknown_command(self, cli, capsys):
        cli.process_command("fly")
        assert "Unknown command: fly" in capsys.readouterr().out

    def test_refused_action_reported(self, cli, capsys):
        """Errors from the controller are printed, not raised."""
        cli.process_command("cross ferry")
        assert capsys.readouterr().out.strip() != ""
        assert cli.controller.state.miles_traveled == 0

    def test_bad_pace_reported(self, cli, capsys):
        cli.process_command("pace sprinting")
        assert capsys.readouterr().out.strip() != ""
        assert cli.controller.state.pace == Pace.STEADY

    def test_pace(self, cli):
        cli.process_command("pace grueling")
        assert cli.controller.state.pace == Pace.GRUELING

    def test_buy(self, cli, capsys):
        cli.process_command("buy food 100")
        assert "Total: $20.00" in capsys.readouterr().out
        assert cli.controller.state.supplies.cash == 1580.0
        assert cli.controller.phase.value == "traveling"

    def test_buy_usage(self, cli, capsys):
        cli.process_command("buy food")
        assert "Usage: buy" in capsys.readouterr().out

    def test_quit(self, cli):
        cli.running = True
        cli.process_command("quit")
        assert not cli.running

    def test_continue(self, cli):
        cli.controller.dice = ScriptedDice(quiet_day(2))
        cli.process_command("continue")
        assert cli.controller.state.day == 2

    def test_runlog_without_log(self, cli, capsys):
        """Sessions without a run log say so."""
        cli.process_command("runlog")
        assert "not being recorded" in capsys.readouterr().out

    def test_runlog(self, capsys):
        """The runlog command prints the latest entries."""
        config = GameConfig(seed=42, leader_name="Ann")
        cli = TrailCLI(create_session(config), config)
        cli.process_command("pace grueling")
        capsys.readouterr()
        cli.process_command("runlog 1")
        out = capsys.readouterr().out
        assert out.startswith("=== Run Log ===")
        assert "Seed: 42" in out
        assert "PACE_CHANGED" in out
