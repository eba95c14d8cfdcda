import random
from collections import Counter

from gambitcompetition.models.competition.competition import Competition
from gambitcompetition.models.competition.competition_config import CompetitionConfig
from gambitcompetition.pairing.round_robin import (
    generate_base_calendar,
    generate_round_robin_calendar,
)


def test_even_round_robin_meets_every_pair_once():
    calendar = generate_base_calendar(6)

    assert sorted(calendar) == [1, 2, 3, 4, 5]
    met = Counter()
    for games in calendar.values():
        seeds = [seed for game in games for seed in game]
        assert sorted(seeds) == [1, 2, 3, 4, 5, 6]
        for home, away in games:
            met[frozenset((home, away))] += 1
    assert len(met) == 15
    assert set(met.values()) == {1}


def test_odd_round_robin_idles_each_player_once():
    calendar = generate_base_calendar(5)

    assert sorted(calendar) == [1, 2, 3, 4, 5]
    idle = []
    met = Counter()
    for round_number in sorted(calendar):
        games = calendar[round_number]
        assert len(games) == 2
        seeds = {seed for game in games for seed in game}
        assert len(seeds) == 4
        idle.extend({1, 2, 3, 4, 5} - seeds)
        for home, away in games:
            met[frozenset((home, away))] += 1
    assert idle == [5, 4, 3, 2, 1]
    assert len(met) == 10
    assert set(met.values()) == {1}


def test_two_series_balance_home_and_away():
    calendar = generate_round_robin_calendar(4, serie_count=2)

    assert sorted(calendar) == [1, 2, 3, 4, 5, 6]
    ordered_pairs = Counter(game for games in calendar.values() for game in games)
    assert len(ordered_pairs) == 12
    assert set(ordered_pairs.values()) == {1}


def test_three_series_reverse_the_second_one_only():
    base = generate_base_calendar(4)
    calendar = generate_round_robin_calendar(4, serie_count=3)

    assert len(calendar) == 9
    for base_round, games in base.items():
        assert calendar[base_round] == games
        assert calendar[base_round + 3] == [(away, home) for home, away in games]
        assert calendar[base_round + 6] == games


def test_shuffle_keeps_rounds_within_their_series():
    plain = generate_round_robin_calendar(6, serie_count=2)
    shuffled = generate_round_robin_calendar(
        6, serie_count=2, shuffle=True, rng=random.Random(3)
    )

    assert sorted(shuffled) == sorted(plain)
    for serie_rounds in (range(1, 6), range(6, 11)):
        plain_rounds = sorted(sorted(plain[r]) for r in serie_rounds)
        shuffled_rounds = sorted(sorted(shuffled[r]) for r in serie_rounds)
        assert plain_rounds == shuffled_rounds


def test_shuffle_is_reproducible_with_same_seed():
    first = generate_round_robin_calendar(8, shuffle=True, rng=random.Random(11))
    second = generate_round_robin_calendar(8, shuffle=True, rng=random.Random(11))
    assert first == second


def test_competition_builds_full_calendar_from_seeds():
    competition = Competition(["a", "b", "c", "d", "e"], CompetitionConfig("round_robin"))

    assert competition.round_count == 5
    assert competition.get_game_count() == 10
    assert competition.get_max_game_count_by_player() == 4
    first_round = competition.get_games_by_round(1)
    assert [(game.key_home, game.key_away) for game in first_round] == [("a", "d"), ("b", "c")]
    assert [game.game_number for game in competition.get_games()] == list(range(1, 11))


def test_serie_count_below_one_means_one():
    config = CompetitionConfig("round_robin", serie_count=0)
    competition = Competition(["a", "b", "c", "d"], config)

    assert competition.config.serie_count == 1
    assert competition.round_count == 3
