"""Testing CLI for Gambit Competition.

Simulates competitions with seeded random results and prints standings,
either from the command line or from an interactive prompt.

    python -m gambitcompetition.testing simulate --type swiss --players 9 \\
        --option round_count=5 --seed 42
"""

# Gambit Competition
# Copyright (C) 2025  Gambit Competition developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import logging
import random
import sys
from typing import Any, Dict, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from gambitcompetition.constants import COMPETITION_TYPES
from gambitcompetition.exceptions import CompetitionException
from gambitcompetition.models.competition.competition import Competition
from gambitcompetition.models.competition.competition_config import CompetitionConfig
from gambitcompetition.testing.simulator import (
    ResultPattern,
    ResultSimulator,
    SimulatorConfig,
)
from gambitcompetition.utils import enable_console_logging, setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


def parse_option(text: str) -> Tuple[str, Any]:
    """Parse ``name=value``, the value read as JSON when possible.

    ``round_count=5`` gives an int, ``player_passing_count=[6,3]`` a list and
    ``performance_types_to_sum=time`` stays a string.
    """
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"Option must be name=value, got {text!r}")
    name, raw = text.split("=", 1)
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    # A single performance type is accepted for list options
    if name.startswith("performance_types_") and isinstance(value, str):
        value = [value]
    return name.strip(), value


def format_standings(competition: Competition) -> List[str]:
    """One line per player, best first."""
    lines = []
    for rank, entry in enumerate(competition.get_rankings(), start=1):
        eliminated = competition.get_player_elimination_round(entry.entity_key)
        status = f"  out in round {eliminated}" if eliminated else ""
        lines.append(
            f"{rank:>3}. {str(entry.entity_key):<12} seed {entry.entity_seed:>3}  "
            f"points {entry.points:>6}  played {entry.played:>3}{status}"
        )
    return lines


# ========== Commands ==========


def run_simulate_command(args: argparse.Namespace) -> int:
    """Run the simulate command."""
    if args.verbose:
        enable_console_logging(logging.DEBUG)

    options: Dict[str, Any] = dict(args.option or [])
    config = CompetitionConfig.from_options(args.type, options)
    players = [f"P{number:02d}" for number in range(1, args.players + 1)]
    rng = random.Random(args.seed)
    competition = Competition(players, config, rng=rng)

    simulator = ResultSimulator(
        SimulatorConfig(seed=args.seed, result_pattern=ResultPattern(args.pattern))
    )
    played = simulator.play_competition(competition)

    print(f"\n{Colors.BOLD}{args.type} with {args.players} players{Colors.ENDC}")
    print(f"  Rounds: {competition.round_count}")
    print(f"  Games played: {played}\n")
    for line in format_standings(competition):
        print(line)
    print()
    return 0


def run_options_command(args: argparse.Namespace) -> int:
    """Run the options command."""
    print(f"\n{Colors.BOLD}Options for {args.type}:{Colors.ENDC}")
    for option in CompetitionConfig.supported_options(args.type):
        print(f"  {Colors.OKCYAN}{option}{Colors.ENDC}")
    print()
    return 0


# ========== Parsers ==========

# (flags, add_argument keywords) per subcommand
SIMULATE_ARGUMENTS = [
    (
        ("--type",),
        {"choices": COMPETITION_TYPES, "required": True, "help": "Competition type"},
    ),
    (("--players",), {"type": int, "default": 8, "help": "Number of players (default: 8)"}),
    (
        ("--option",),
        {
            "type": parse_option,
            "action": "append",
            "help": "Competition option as name=value, repeatable",
        },
    ),
    (
        ("--pattern",),
        {
            "choices": [pattern.value for pattern in ResultPattern],
            "default": ResultPattern.REALISTIC.value,
            "help": "Result pattern",
        },
    ),
    (("--seed",), {"type": int, "help": "Random seed"}),
    (("--verbose",), {"action": "store_true", "help": "Show library logs"}),
]

OPTIONS_ARGUMENTS = [
    (
        ("--type",),
        {"choices": COMPETITION_TYPES, "required": True, "help": "Competition type"},
    ),
]

SUBCOMMANDS = {
    "simulate": (
        "Simulate a competition and print standings",
        SIMULATE_ARGUMENTS,
        run_simulate_command,
    ),
    "options": (
        "List options supported by a competition type",
        OPTIONS_ARGUMENTS,
        run_options_command,
    ),
}

# Interactive mode only
PROMPT_COMMANDS = {
    "help": "Show all commands, or the arguments of one command",
    "exit": "Leave the interactive mode",
}


def add_arguments(parser: argparse.ArgumentParser, arguments) -> None:
    for flags, keywords in arguments:
        parser.add_argument(*flags, **keywords)


def create_command_parser(command: str) -> argparse.ArgumentParser:
    """Standalone parser for one subcommand, as typed at the prompt."""
    description, arguments, func = SUBCOMMANDS[command]
    parser = argparse.ArgumentParser(prog=command, description=description)
    add_arguments(parser, arguments)
    parser.set_defaults(func=func)
    return parser


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="python -m gambitcompetition.testing",
        description="Gambit Competition testing tools",
    )
    parser.add_argument(
        "-i", "--interactive", action="store_true", help="Run in interactive mode"
    )
    subparsers = parser.add_subparsers(dest="command")
    for command, (description, arguments, func) in SUBCOMMANDS.items():
        subparser = subparsers.add_parser(command, help=description, description=description)
        add_arguments(subparser, arguments)
        subparser.set_defaults(func=func)
    return parser


# ========== Interactive help ==========


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for command, (description, _, _) in SUBCOMMANDS.items():
        print(f"  {Colors.OKGREEN}{command:15}{Colors.ENDC} - {description}")
    for command, description in PROMPT_COMMANDS.items():
        print(f"  {Colors.OKGREEN}{command:15}{Colors.ENDC} - {description}")
    print()


def print_command_help(command: str):
    """Print the usage of a command."""
    if command in SUBCOMMANDS:
        create_command_parser(command).print_help()
    elif command in PROMPT_COMMANDS:
        print(f"{Colors.BOLD}{command}{Colors.ENDC}: {PROMPT_COMMANDS[command]}")
    else:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()


def create_completer() -> NestedCompleter:
    """Complete commands, their flags and the choices of each flag."""
    completions: Dict[str, Any] = {}
    for command, (_, arguments, _) in SUBCOMMANDS.items():
        flags: Dict[str, Any] = {}
        for option_strings, keywords in arguments:
            choices = keywords.get("choices")
            for flag in option_strings:
                flags[flag] = {choice: None for choice in choices} if choices else None
        completions[command] = flags
    completions["help"] = {command: None for command in [*SUBCOMMANDS, *PROMPT_COMMANDS]}
    completions["exit"] = None
    return NestedCompleter.from_nested_dict(completions)


# ========== Modes ==========


def run_command(command: str, args_list: List[str]) -> Optional[int]:
    """Run one interactive command, None for unknown commands."""
    if command in SUBCOMMANDS:
        args = create_command_parser(command).parse_args(args_list)
        return args.func(args)
    elif command == "help":
        if args_list:
            print_command_help(args_list[0])
        else:
            print_commands_list()
        return 0
    return None


def run_interactive_mode() -> int:
    """Read commands from a prompt with completion and history until exit."""
    print(f"\n{Colors.OKBLUE}GAMBIT COMPETITION - TEST CLI{Colors.ENDC}")
    print(f"Type {Colors.BOLD}help{Colors.ENDC} to see all available commands\n")

    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )

    while True:
        try:
            parts = session.prompt("gambit-competition> ").split()
        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Type 'exit' to leave{Colors.ENDC}")
            continue
        except EOFError:
            break

        if not parts:
            continue
        if parts[0] == "exit":
            break
        try:
            if run_command(parts[0], parts[1:]) is None:
                print(f"{Colors.FAIL}Unknown command: {parts[0]}{Colors.ENDC}")
        except SystemExit:
            # argparse exits on invalid arguments
            continue
        except CompetitionException as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")

    print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
    return 0


def run_standard_mode(argv: Optional[List[str]] = None) -> int:
    """Run in standard CLI mode (non-interactive)."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        return run_interactive_mode()
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        return args.func(args)
    except CompetitionException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}", file=sys.stderr)
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    return run_standard_mode(argv)


if __name__ == "__main__":
    sys.exit(main())
