"""
Oregon Trail - Main Entry Point

A text-mode journey from Independence, Missouri to the Willamette Valley
in 1848. This module holds the configuration, the session setup and the
interactive command loop that drives a TrailController.
"""

import argparse
import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from oregon_trail.data_models import DiceRoller, GameState, Occupation, Pace, RationsLevel
from oregon_trail.game_state import InvalidTransitionError, TrailController, TrailControllerError
from oregon_trail.hunting import HuntingError
from oregon_trail.observability import ReplaySession, RunLog, reset_run_log
from oregon_trail.resolution import CrossingStrategy, current_river_depth
from oregon_trail.store import InsufficientFundsError, StoreOrder, order_total, price_list
from oregon_trail.trail import initialize_game
from oregon_trail.weather import format_date


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class GameConfig:
    """Configuration for a journey."""

    seed: Optional[int] = None
    leader_name: str = ""
    companion_names: list[str] = field(default_factory=list)
    occupation: str = Occupation.BANKER.value

    # Auto-travel stops after this many days even without an event
    auto_travel_days: int = 30

    # Runtime options
    verbose: bool = False
    record_run_log: bool = True

    # Run log files
    save_log_path: Optional[str] = None  # Written when the journey ends
    replay_path: Optional[str] = None  # Saved run log whose rolls are replayed

    def __post_init__(self):
        """Normalize the occupation and drop blank companions."""
        self.occupation = Occupation(self.occupation.lower()).value
        self.companion_names = [name for name in self.companion_names if name.strip()]


def create_session(config: GameConfig) -> TrailController:
    """
    Build a controller for a new journey.

    Raises:
        ValueError: If the leader name is blank
    """
    if not config.leader_name.strip():
        raise ValueError("Please enter your name")

    run_log: Optional[RunLog] = None
    if config.record_run_log:
        run_log = reset_run_log()

    seed = config.seed
    replay: Optional[ReplaySession] = None
    if config.replay_path:
        replay = ReplaySession.load(config.replay_path)
        if seed is None:
            seed = replay.seed

    dice = DiceRoller(seed=seed, run_log=run_log, replay=replay)
    if seed is not None and run_log is not None:
        run_log.set_seed(seed)

    state = initialize_game(config.leader_name, config.companion_names, config.occupation)
    logger.info(f"Session created (seed={seed}, replay={config.replay_path is not None})")
    return TrailController(state, dice, run_log=run_log)


def format_status(state: GameState) -> str:
    """Multi-line status summary of a journey."""
    lines = [
        f"Date: {format_date(state.month, state.day, state.year)}",
        f"Weather: {state.weather.value}",
        f"Location: {state.current_location}",
        f"Miles traveled: {state.miles_traveled}",
        f"Next landmark: {state.next_milestone.name} "
        f"({max(0, state.next_milestone.distance - state.miles_traveled)} miles)",
        f"Pace: {state.pace.value}    Rations: {state.rations.value}",
        "Party:",
    ]
    for person in state.party:
        status = person.health.value if person.is_alive else "dead"
        illness = f" ({person.illness})" if person.illness and person.is_alive else ""
        lines.append(f"  {person.name}: {status}{illness}")
    return "\n".join(lines)


def format_supplies(state: GameState) -> str:
    s = state.supplies
    return "\n".join(
        [
            f"Food: {s.food} pounds",
            f"Ammunition: {s.ammunition} boxes ({s.ammunition * 20} bullets)",
            f"Clothing: {s.clothing} sets",
            f"Oxen: {s.oxen}",
            f"Spare parts: {s.spare_parts.wheels} wheels, {s.spare_parts.axles} axles, "
            f"{s.spare_parts.tongues} tongues",
            f"Cash: ${s.cash:.2f}",
        ]
    )


# =============================================================================
# CLI
# =============================================================================

class TrailCLI:
    """Interactive command-line interface for a journey."""

    def __init__(self, controller: TrailController, config: Optional[GameConfig] = None):
        self.controller = controller
        self.config = config or GameConfig(leader_name=controller.state.party_leader.name)
        self.running = False
        self.commands: dict[str, Callable[[str], None]] = {
            "status": self.cmd_status,
            "continue": self.cmd_continue,
            "auto": self.cmd_auto,
            "rest": self.cmd_rest,
            "pace": self.cmd_pace,
            "rations": self.cmd_rations,
            "cross": self.cmd_cross,
            "hunt": self.cmd_hunt,
            "buy": self.cmd_buy,
            "supplies": self.cmd_supplies,
            "log": self.cmd_log,
            "runlog": self.cmd_runlog,
            "dice": self.cmd_dice,
            "help": self.cmd_help,
            "quit": self.cmd_quit,
            "exit": self.cmd_quit,
        }

    def run(self) -> None:
        """Run the interactive CLI loop."""
        self.running = True
        print("\n" + "=" * 60)
        print("THE OREGON TRAIL")
        print("=" * 60)
        print("Type 'help' for available commands, 'quit' to exit.\n")
        self.print_messages()

        while self.running:
            try:
                user_input = input(f"[{self.controller.phase.value}]> ").strip()
                if not user_input:
                    continue

                self.process_command(user_input)

                if self.controller.is_game_over:
                    print("\nThe journey is over.")
                    self.running = False

            except KeyboardInterrupt:
                print("\nInterrupted. Type 'quit' to exit.")
            except EOFError:
                self.running = False

        print("\nFarewell, traveler!")

    def process_command(self, user_input: str) -> None:
        """Process a user command, reporting refused actions."""
        parts = user_input.split(maxsplit=1)
        cmd = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        if cmd not in self.commands:
            print(f"Unknown command: {cmd}. Type 'help' for available commands.")
            return

        try:
            self.commands[cmd](args)
        except (
            TrailControllerError,
            InvalidTransitionError,
            InsufficientFundsError,
            HuntingError,
            ValueError,
        ) as e:
            print(f"{e}")

    def print_messages(self) -> None:
        for message in self.controller.state.messages:
            print(f"  {message}")

    def cmd_help(self, args: str) -> None:
        """Show help information."""
        print("""
Available Commands:
  status                 - Show date, location and party health
  continue               - Travel for one day
  auto [DAYS]            - Travel until something happens
  rest                   - Rest for a day
  pace PACE              - steady, strenuous, grueling or resting
  rations LEVEL          - filling, meager, bare bones or none
  cross METHOD           - Cross the river ahead: ford, ferry, caulk or wait
  hunt                   - Go hunting
  buy ITEM QTY [...]     - Buy supplies (e.g., 'buy food 100 oxen 2')
  supplies               - Show supplies
  log                    - Show the journey's events
  runlog [N]             - Show the last N run log entries (default: 20)
  dice                   - Show dice roll history
  help                   - Show this help
  quit/exit              - Exit the game
""")

    def cmd_status(self, args: str) -> None:
        print(format_status(self.controller.state))
        depth = current_river_depth(self.controller.state)
        if depth is not None:
            print(f"River ahead: {self.controller.state.next_milestone.name}, {depth} feet deep")

    def cmd_quit(self, args: str) -> None:
        self.running = False

    def cmd_continue(self, args: str) -> None:
        self.controller.continue_on_trail()
        self.print_messages()

    def cmd_auto(self, args: str) -> None:
        """Auto-travel, optionally for at most DAYS days."""
        days = int(args) if args.strip() else self.config.auto_travel_days
        result = self.controller.auto_travel(max_days=days)
        print(f"Traveled {result['days_traveled']} days.")
        self.print_messages()

    def cmd_rest(self, args: str) -> None:
        self.controller.rest()
        self.print_messages()

    def cmd_pace(self, args: str) -> None:
        if not args:
            print("Usage: pace " + "|".join(p.value for p in Pace))
            return
        self.controller.change_pace(args.strip().lower())
        self.print_messages()

    def cmd_rations(self, args: str) -> None:
        if not args:
            print("Usage: rations " + "|".join(r.value for r in RationsLevel))
            return
        self.controller.change_rations(args.strip().lower())
        self.print_messages()

    def cmd_cross(self, args: str) -> None:
        if not args:
            print("Usage: cross " + "|".join(s.value for s in CrossingStrategy))
            return
        self.controller.cross_river(args.strip().lower())
        self.print_messages()

    def cmd_hunt(self, args: str) -> None:
        self.controller.quick_hunt()
        self.print_messages()

    def cmd_buy(self, args: str) -> None:
        """Buy supplies: pairs of ITEM QTY."""
        tokens = args.split()
        if not tokens or len(tokens) % 2:
            print("Usage: buy ITEM QTY [ITEM QTY ...]")
            for row in price_list():
                print(f"  {row['item']}: ${row['price']:.2f}")
            return

        items = {tokens[i]: int(tokens[i + 1]) for i in range(0, len(tokens), 2)}
        order = StoreOrder.from_items(items)
        print(f"Total: ${order_total(order):.2f}")

        self.controller.open_store()
        try:
            self.controller.buy(order)
        finally:
            self.controller.close_store()
        self.print_messages()

    def cmd_supplies(self, args: str) -> None:
        print(format_supplies(self.controller.state))

    def cmd_log(self, args: str) -> None:
        """Show the journey's events."""
        events = self.controller.state.events
        print("\nJourney Log (last 10 entries):")
        print("-" * 40)
        for entry in events[-10:]:
            print(f"  {entry}")
        print("-" * 40)

    def cmd_runlog(self, args: str) -> None:
        """Show the most recent run log entries."""
        run_log = self.controller.run_log
        if run_log is None:
            print("The run log is not being recorded.")
            return
        count = int(args) if args.strip() else 20
        print(run_log.format_log(max_events=count))

    def cmd_dice(self, args: str) -> None:
        """Show dice roll history."""
        rolls = self.controller.dice.get_roll_log()
        print("\nDice Roll History (last 10):")
        print("-" * 40)
        for roll in rolls[-10:]:
            print(f"  {roll} ({roll.reason})")
        print("-" * 40)


def prompt_party(config: GameConfig) -> GameConfig:
    """Ask for any party details not given on the command line."""
    while not config.leader_name.strip():
        config.leader_name = input("What is your name? ").strip()
        if not config.leader_name:
            print("Please enter your name")

    if not config.companion_names:
        for i in range(4):
            name = input(f"Name of companion {i + 1} (blank to skip): ").strip()
            if name:
                config.companion_names.append(name)
    return config


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="The Oregon Trail - travel from Independence, Missouri to Oregon in 1848",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  oregon-trail                                   # Prompt for the party
  oregon-trail --name Ann --companion Bob        # Name the party up front
  oregon-trail --occupation farmer --seed 1848   # Reproducible journey
  oregon-trail --seed 1848 --save-log trip.json  # Keep the run log
  oregon-trail --replay trip.json                # Replay a saved journey
        """
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible journey",
    )
    parser.add_argument(
        "--name",
        type=str,
        default="",
        help="Name of the party leader",
    )
    parser.add_argument(
        "--companion",
        action="append",
        default=[],
        help="Name of a companion (repeatable)",
    )
    parser.add_argument(
        "--occupation",
        type=str,
        default=Occupation.BANKER.value,
        choices=[o.value for o in Occupation],
        help="Leader's occupation, which sets starting cash (default: banker)",
    )
    parser.add_argument(
        "--auto-days",
        type=int,
        default=30,
        help="Most days a single 'auto' command travels (default: 30)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    # Run log options
    log_group = parser.add_argument_group("Run Log Options")
    log_group.add_argument(
        "--no-run-log",
        action="store_true",
        help="Do not record the run log",
    )
    log_group.add_argument(
        "--save-log",
        type=str,
        default=None,
        metavar="PATH",
        help="Save the run log as JSON when the journey ends",
    )
    log_group.add_argument(
        "--replay",
        type=str,
        default=None,
        metavar="PATH",
        help="Replay the dice rolls of a saved run log",
    )

    return parser.parse_args(argv)


def save_run_log(controller: TrailController, config: GameConfig) -> bool:
    """Write the run log to config.save_log_path, if both exist."""
    if not config.save_log_path:
        return False
    if controller.run_log is None:
        logger.warning("No run log was recorded, so none was saved")
        return False
    controller.run_log.save(config.save_log_path)
    print(f"Run log saved to {config.save_log_path}")
    return True


def create_config_from_args(args: argparse.Namespace) -> GameConfig:
    """Create GameConfig from parsed arguments."""
    return GameConfig(
        seed=args.seed,
        leader_name=args.name,
        companion_names=list(args.companion),
        occupation=args.occupation,
        auto_travel_days=args.auto_days,
        verbose=args.verbose,
        record_run_log=not args.no_run_log,
        save_log_path=args.save_log,
        replay_path=args.replay,
    )


def main(argv: Optional[list[str]] = None) -> Optional[TrailController]:
    """Main entry point for CLI usage."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    config = create_config_from_args(args)
    try:
        config = prompt_party(config)
    except (KeyboardInterrupt, EOFError):
        print("\nFarewell, traveler!")
        return None

    controller = create_session(config)
    print(format_status(controller.state))

    cli = TrailCLI(controller, config)
    cli.run()

    save_run_log(controller, config)
    if controller.run_log is not None and config.verbose:
        print(json.dumps(controller.run_log.get_summary(), indent=2))
    return controller


if __name__ == "__main__":
    main()
