import argparse

import pytest
from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from gambitcompetition.models.competition.competition import Competition
from gambitcompetition.models.competition.competition_config import CompetitionConfig
from gambitcompetition.testing import ResultPattern, ResultSimulator, SimulatorConfig
from gambitcompetition.testing.__main__ import (
    create_completer,
    main,
    parse_option,
    print_commands_list,
    run_command,
)


def _keys(competition):
    return [entry.entity_key for entry in competition.get_rankings()]


def test_same_seed_same_results():
    players = [f"p{i}" for i in range(8)]
    first = Competition(players, CompetitionConfig("round_robin"))
    second = Competition(players, CompetitionConfig("round_robin"))

    ResultSimulator(SimulatorConfig(seed=21)).play_competition(first)
    ResultSimulator(SimulatorConfig(seed=21)).play_competition(second)

    assert _keys(first) == _keys(second)


def test_predictable_elimination_contest_follows_seeds():
    config = CompetitionConfig(
        "elimination_contest",
        performance_types_to_sum=["time"],
        player_eliminated_per_round=2,
    )
    players = [f"p{i}" for i in range(7)]
    competition = Competition(players, config)
    simulator = ResultSimulator(
        SimulatorConfig(result_pattern=ResultPattern.PREDICTABLE, extra_performance_types=["style"])
    )

    assert simulator.play_competition(competition) == 3
    assert _keys(competition) == players
    assert competition.get_games()[0].get_player_performances("p0") == {"time": 100, "style": 100}


def test_play_stops_after_max_games():
    competition = Competition(["a", "b", "c", "d"], CompetitionConfig("round_robin"))
    simulator = ResultSimulator(SimulatorConfig(seed=1, max_games=2))
    with pytest.raises(RuntimeError):
        simulator.play_competition(competition)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("round_count=5", ("round_count", 5)),
        ("player_passing_count=[6,3]", ("player_passing_count", [6, 3])),
        ("performance_types_to_sum=time", ("performance_types_to_sum", ["time"])),
        ("shuffle_calendar=true", ("shuffle_calendar", True)),
    ],
)
def test_parse_option(text, expected):
    assert parse_option(text) == expected


def test_parse_option_requires_equal_sign():
    with pytest.raises(argparse.ArgumentTypeError):
        parse_option("round_count")


def test_simulate_command_prints_standings(capsys):
    code = main(
        [
            "simulate",
            "--type",
            "swiss",
            "--players",
            "6",
            "--option",
            "round_count=3",
            "--seed",
            "9",
        ]
    )

    assert code == 0
    out = capsys.readouterr().out
    assert "Rounds: 3" in out
    assert "P06" in out


def test_simulate_command_reports_competition_errors(capsys):
    code = main(["simulate", "--type", "swiss", "--players", "6"])

    assert code == 1
    assert "round count" in capsys.readouterr().err


def test_options_command_lists_type_options(capsys):
    assert main(["options", "--type", "bracket"]) == 0
    out = capsys.readouterr().out
    assert "best_seed_always_home" in out
    assert "qualification_spots" in out


def _complete(text):
    completer = create_completer()
    completions = completer.get_completions(Document(text), CompleteEvent())
    return [completion.text for completion in completions]


def test_completion_follows_parser_arguments():
    assert set(_complete("simulate --")) == {
        "--type",
        "--players",
        "--option",
        "--pattern",
        "--seed",
        "--verbose",
    }
    assert _complete("simulate --type sw") == ["swiss"]
    assert _complete("simulate --pattern pre") == ["predictable"]
    assert _complete("options --") == ["--type"]


def test_help_lists_every_command(capsys):
    print_commands_list()
    out = capsys.readouterr().out
    for command in ("simulate", "options", "help", "exit"):
        assert command in out


def test_help_for_a_command_shows_its_arguments(capsys):
    assert run_command("help", ["simulate"]) == 0
    out = capsys.readouterr().out
    assert "usage: simulate" in out
    assert "--pattern" in out
    assert "--verbose" in out


def test_interactive_command_runs_like_the_command_line(capsys):
    assert run_command("options", ["--type", "swiss"]) == 0
    assert "round_count" in capsys.readouterr().out
    assert run_command("league", []) is None
