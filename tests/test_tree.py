import random

import pytest

from gambitcompetition.builder import BuilderPhase, BuilderTree, PlayerSelector
from gambitcompetition.exceptions import (
    BuilderOptionException,
    CompetitionRuntimeException,
    ParameterException,
    PlayerCountException,
    RankingException,
)
from gambitcompetition.testing import ResultPattern, ResultSimulator, SimulatorConfig

PLAYERS = [f"p{i}" for i in range(1, 9)]


def _predictable():
    return ResultSimulator(SimulatorConfig(seed=4, result_pattern=ResultPattern.PREDICTABLE))


def _cup():
    builder = BuilderTree("Cup")
    groups = builder.add_phase("Groups")
    options = {"qualification_spots": 2, "elimination_spots": 1}
    groups.add_group("round_robin", options)
    groups.add_group("round_robin", options)
    final = builder.add_phase("Final")
    final.add_group("round_robin")
    final.add_player_selector(
        PlayerSelector(player_pack="qualified", pickup_method="by_rank_in_group")
    )
    return builder


def _play_groups(tree):
    simulator = _predictable()
    for group in tree.get_phase("Groups").groups.values():
        simulator.play_competition(group)


def _selecting_phase(*selectors):
    phase = BuilderPhase("Selection")
    for selector in selectors:
        phase.add_player_selector(selector)
    return phase


def test_players_are_dealt_across_groups():
    tree = _cup().start_iteration(PLAYERS, "2025")
    phase = tree.get_phase("Groups")

    assert phase.get_group("0").get_player_keys_seeded() == ["p1", "p3", "p5", "p7"]
    assert phase.get_group("1").get_player_keys_seeded() == ["p2", "p4", "p6", "p8"]
    assert phase.get_round_count() == 3
    assert phase.get_game_count() == 12
    assert phase.qualification_spots == 4
    assert tree.unused_player_keys == []


def test_next_game_prefers_first_group_on_equal_rounds():
    tree = _cup().start_iteration(PLAYERS)
    phase = tree.get_phase("Groups")

    game, group_name = phase.get_next_game_with_group()
    assert group_name == "0"
    assert game.round_number == 1
    assert phase.current_round == 1


def test_next_phase_starts_once_previous_is_completed():
    tree = _cup().start_iteration(PLAYERS, "2025")
    assert tree.get_phase("Final") is None
    assert list(tree.phases) == ["Groups"]

    _play_groups(tree)
    final = tree.get_phase("Final")
    assert final is not None
    assert final.get_group("0").get_player_keys_seeded() == ["p1", "p2", "p3", "p4"]
    assert tree.get_current_phase() is final


def test_play_whole_tree():
    builder = _cup()
    tree = builder.start_iteration(PLAYERS, "2025", rng=random.Random(1))

    played = _predictable().play_tree(tree)

    assert played == 12 + 6
    assert tree.is_completed()
    assert tree.get_current_phase() is None
    assert tree.name == "Cup 2025"
    assert builder.get_iteration("2025") is tree
    assert tree.get_last_phase().name == "Final"


def test_pickup_methods_order_the_pack():
    tree = _cup().start_iteration(PLAYERS)
    _play_groups(tree)

    by_group = _selecting_phase(PlayerSelector("Groups", "qualified", "by_group"))
    by_rank = _selecting_phase(PlayerSelector("Groups", "qualified", "by_rank_in_group"))
    shuffled = _selecting_phase(PlayerSelector("Groups", "qualified", "by_rank_shuffled"))

    assert tree.compute_players_keys_for_phase(by_group) == ["p1", "p3", "p2", "p4"]
    assert tree.compute_players_keys_for_phase(by_rank) == ["p1", "p2", "p3", "p4"]
    keys = tree.compute_players_keys_for_phase(shuffled)
    assert set(keys[:2]) == {"p1", "p2"}
    assert set(keys[2:]) == {"p3", "p4"}


def test_selection_window():
    tree = _cup().start_iteration(PLAYERS)
    _play_groups(tree)

    window = _selecting_phase(
        PlayerSelector(
            "Groups", "qualified", "by_group", start_pick_at_rank=2, selection_length=2
        )
    )
    assert tree.compute_players_keys_for_phase(window) == ["p3", "p2"]

    beyond = _selecting_phase(PlayerSelector("Groups", "qualified", start_pick_at_rank=9))
    assert tree.compute_players_keys_for_phase(beyond) == []


def test_stagnation_pack():
    tree = _cup().start_iteration(PLAYERS)
    _play_groups(tree)

    selection = _selecting_phase(PlayerSelector("Groups", "stagnation"))
    assert tree.compute_players_keys_for_phase(selection) == ["p5", "p6"]
    assert tree.get_phase("Groups").get_player_keys_for_elimination() == ["p7", "p8"]


def test_selections_are_concatenated_without_duplicates():
    tree = _cup().start_iteration(PLAYERS)
    _play_groups(tree)

    selection = _selecting_phase(
        PlayerSelector("Groups", "qualified", selection_length=1),
        PlayerSelector("Groups", "qualified"),
        PlayerSelector("Groups", "stagnation"),
    )
    assert tree.compute_players_keys_for_phase(selection) == ["p1", "p3", "p2", "p4", "p5", "p6"]


def test_default_selector_takes_unused_then_qualified():
    builder = _cup()
    tree = builder.start_iteration(PLAYERS)
    _play_groups(tree)
    # Starts the final, Groups is now the last completed phase
    tree.get_current_phase()

    assert _selecting_phase().get_effective_player_selectors() == [PlayerSelector()]
    assert tree.compute_players_keys_for_phase(_selecting_phase()) == ["p1", "p3", "p2", "p4"]


def test_first_phase_takes_part_of_the_roster():
    builder = BuilderTree("League")
    top = builder.add_phase("Top")
    top.add_group("round_robin")
    top.add_player_selector(PlayerSelector(selection_length=4))
    rest = builder.add_phase("Rest")
    rest.add_group("round_robin")
    rest.add_player_selector(PlayerSelector(player_pack="unused"))

    tree = builder.start_iteration(PLAYERS)
    assert tree.get_phase("Top").get_group("0").get_player_keys_seeded() == PLAYERS[:4]
    assert tree.unused_player_keys == PLAYERS[4:]

    _predictable().play_competition(tree.get_phase("Top").get_group("0"))
    assert tree.get_phase("Rest").get_group("0").get_player_keys_seeded() == PLAYERS[4:]
    assert tree.unused_player_keys == []


def test_ranked_player_keys_follow_last_phase_reached():
    tree = _cup().start_iteration(PLAYERS)
    before = tree.get_ranked_player_keys()
    assert list(before) == PLAYERS
    assert set(before.values()) == {"Groups"}

    _predictable().play_tree(tree)
    ranked = tree.get_ranked_player_keys()

    assert list(ranked)[:4] == ["p1", "p2", "p3", "p4"]
    assert ranked["p1"] == "Final"
    assert ranked["p5"] == "Groups"
    assert set(ranked) == set(PLAYERS)


def test_mixed_team_rankings_combine_same_team_across_groups():
    teams = {"A": ["p1", "p2"], "B": ["p3", "p4"], "C": ["p5", "p6", "p7", "p8"]}
    tree = _cup().start_iteration(PLAYERS, team_composition=teams)
    _play_groups(tree)
    phase = tree.get_phase("Groups")

    mixed = phase.get_mixed_team_rankings()
    assert [entry.entity_key for entry in mixed] == ["A", "B", "C"]
    assert mixed[0].points == 18
    assert tree.is_using_teams
    assert list(tree.get_ranked_team_keys()) == ["A", "B", "C"]


def test_groups_of_different_kinds_cannot_be_mixed():
    builder = BuilderTree("Open")
    phase_builder = builder.add_phase("Mixed")
    phase_builder.add_group("round_robin", {"qualification_spots": 1})
    phase_builder.add_group("race", {"qualification_spots": 1})
    players = PLAYERS[:6]
    tree = builder.start_iteration(players)
    phase = tree.get_phase("Mixed")
    simulator = _predictable()
    for group in phase.groups.values():
        simulator.play_competition(group)

    with pytest.raises(RankingException):
        phase.get_mixed_rankings()
    assert phase.get_player_keys_for_qualification(phase_ranked=True) == ["p1", "p2"]
    ranked = tree.get_ranked_player_keys()
    assert list(ranked) == players
    assert set(ranked.values()) == {None}
    assert list(tree.get_ranked_player_keys(mix_groups=False).values()) == ["Mixed"] * 6


def test_unknown_spot_raises():
    tree = _cup().start_iteration(PLAYERS)
    with pytest.raises(ParameterException):
        tree.get_phase("Groups").get_player_keys_for_spot("relegation")


def test_too_few_players_for_a_phase_raise():
    builder = _cup()
    with pytest.raises(PlayerCountException) as excinfo:
        builder.start_iteration(PLAYERS[:5])
    assert excinfo.value.expected == 6
    assert builder.compute_min_players_count() == 6


def test_tree_without_phase_raises():
    with pytest.raises(CompetitionRuntimeException):
        BuilderTree("Empty").start_iteration(PLAYERS)


def test_phase_without_group_raises():
    with pytest.raises(CompetitionRuntimeException):
        BuilderPhase("Empty").start_phase(PLAYERS)


def test_unsupported_group_option_raises():
    phase = BuilderPhase("Groups")
    with pytest.raises(BuilderOptionException):
        phase.add_group("swiss", {"serie_count": 2})


def test_unknown_dispatch_method_falls_back_to_deal():
    phase = BuilderPhase("Groups", dispatch_method="snake")
    assert phase.dispatch_method == "deal"


def test_random_dispatch_keeps_every_player():
    builder = BuilderTree("Draw")
    phase = builder.add_phase("Groups", dispatch_method="random")
    phase.add_group("round_robin")
    phase.add_group("round_robin")
    tree = builder.start_iteration(PLAYERS, rng=random.Random(8))

    groups = tree.get_phase("Groups").groups.values()
    dealt = [key for group in groups for key in group.get_player_keys_seeded()]
    assert sorted(dealt) == PLAYERS
    assert [group.player_count for group in groups] == [4, 4]


@pytest.mark.parametrize(
    "options",
    [{"player_pack": "losers"}, {"pickup_method": "by_luck"}],
)
def test_invalid_selector_raises(options):
    with pytest.raises(ParameterException):
        PlayerSelector(**options)


def test_selector_window_bounds_are_clamped():
    selector = PlayerSelector(start_pick_at_rank=0, selection_length=-3)
    assert selector.start_pick_at_rank == 1
    assert selector.selection_length == 0
    assert not selector.is_windowed


def test_group_dealt_below_its_minimum_raises_before_building():
    phase = BuilderPhase("Mixed")
    phase.add_group("round_robin")
    phase.add_group("bracket")
    assert phase.compute_min_players_count() == 7

    with pytest.raises(PlayerCountException) as excinfo:
        phase.start_phase(PLAYERS[:7])
    assert excinfo.value.expected == 4
    assert "group 1" in str(excinfo.value)
