import random

import pytest

from gambitcompetition.exceptions import CompetitionRuntimeException, PlayerCountException
from gambitcompetition.models.competition.competition import Competition
from gambitcompetition.models.competition.competition_config import CompetitionConfig
from gambitcompetition.pairing.bracket import bracket_round_count, generate_duel_table

PLAYERS = ["a", "b", "c", "d", "e", "f", "g", "h"]


def _play_home_wins(competition):
    game = competition.get_next_game()
    while game is not None:
        game.set_home_won()
        game = competition.get_next_game()


def test_duel_table_for_eight_players():
    assert generate_duel_table(8) == [(1, 8), (4, 5), (2, 7), (3, 6)]


def test_duel_table_for_four_players():
    assert generate_duel_table(4) == [(1, 4), (2, 3)]


def test_duel_table_keeps_top_seeds_apart():
    table = generate_duel_table(16)
    first_half = {seed for game in table[:4] for seed in game}
    second_half = {seed for game in table[4:] for seed in game}
    assert 1 in first_half and 2 in second_half
    assert sorted(first_half | second_half) == list(range(1, 17))


def test_round_count_is_log2():
    assert bracket_round_count(4) == 2
    assert bracket_round_count(8) == 3
    assert bracket_round_count(32) == 5


def test_first_round_follows_duel_table():
    competition = Competition(PLAYERS, CompetitionConfig("bracket"))

    first_round = competition.get_games_by_round(1)
    assert [(game.key_home, game.key_away) for game in first_round] == [
        ("a", "h"),
        ("d", "e"),
        ("b", "g"),
        ("c", "f"),
    ]
    assert competition.round_count == 3


def test_player_count_not_power_of_two_raises():
    with pytest.raises(CompetitionRuntimeException, match="not a power of 2"):
        Competition(PLAYERS[:6], CompetitionConfig("bracket"))


def test_too_few_players_raise():
    with pytest.raises(PlayerCountException):
        Competition(PLAYERS[:2], CompetitionConfig("bracket"))


def test_winners_advance_and_losers_are_eliminated_at_their_round():
    competition = Competition(PLAYERS, CompetitionConfig("bracket"))
    _play_home_wins(competition)

    assert competition.is_completed()
    second_round = competition.get_games_by_round(2)
    assert [(game.key_home, game.key_away) for game in second_round] == [("a", "d"), ("b", "c")]
    final = competition.get_games_by_round(3)
    assert [(game.key_home, game.key_away) for game in final] == [("a", "b")]

    assert competition.get_player_elimination_round("a") == 0
    assert competition.get_player_elimination_round("b") == 3
    assert competition.get_player_elimination_round("c") == 2
    assert competition.get_player_elimination_round("d") == 2
    for key in ("e", "f", "g", "h"):
        assert competition.get_player_elimination_round(key) == 1
    assert competition.get_rankings()[0].entity_key == "a"


def test_draw_counts_as_home_win():
    competition = Competition(PLAYERS[:4], CompetitionConfig("bracket"))
    first, second = competition.get_games_by_round(1)
    first.set_drawn()
    second.set_away_won()

    final = competition.get_games_by_round(2)[0]
    assert (final.key_home, final.key_away) == ("a", "c")
    assert competition.get_player_elimination_round("d") == 1
    assert competition.get_player_elimination_round("b") == 1


def test_best_seed_always_home_with_shuffle():
    config = CompetitionConfig(
        "bracket", best_seed_always_home=True, pre_round_shuffle=True
    )
    competition = Competition(PLAYERS, config, rng=random.Random(5))
    game = competition.get_next_game()
    while game is not None:
        assert competition.get_player_seed(game.key_home) < competition.get_player_seed(
            game.key_away
        )
        game.set_away_won()
        game = competition.get_next_game()
    assert competition.is_completed()
    assert competition.get_game_count() == 7


def test_eliminated_player_cannot_reach_first_rank():
    competition = Competition(PLAYERS[:4], CompetitionConfig("bracket"))
    for game in competition.get_games_by_round(1):
        game.set_home_won()

    assert not competition.can_player_win("d")
    assert competition.can_player_win("a")
    assert competition.get_max_game_count_by_player("d") == 1
    assert competition.get_max_game_count_by_player("a") == 2
