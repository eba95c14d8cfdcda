from gambitcompetition.pairing.bracket import (
    bracket_round_count,
    check_power_of_two,
    generate_duel_table,
    get_round_winners,
)
from gambitcompetition.pairing.elimination import (
    compute_round_count,
    players_count_to_pass_round,
    players_count_to_start_round,
    split_survivors,
)
from gambitcompetition.pairing.round_robin import (
    base_round_count,
    generate_base_calendar,
    generate_round_robin_calendar,
)
from gambitcompetition.pairing.swiss import create_swiss_pairings, select_bye

__all__ = [
    "base_round_count",
    "bracket_round_count",
    "check_power_of_two",
    "compute_round_count",
    "create_swiss_pairings",
    "generate_base_calendar",
    "generate_duel_table",
    "generate_round_robin_calendar",
    "get_round_winners",
    "players_count_to_pass_round",
    "players_count_to_start_round",
    "select_bye",
    "split_survivors",
]
