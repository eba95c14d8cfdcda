"""Round planning for elimination contests."""

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

from typing import List, Sequence, Tuple

from gambitcompetition.type_hints import PlayerKey


def compute_round_count(
    player_count: int, passing_counts: Sequence[int], eliminated_per_round: int
) -> int:
    """Number of rounds of an elimination contest.

    With explicit passing counts, one round more than counts given, unless
    the last count is 1: that survivor wins without playing alone, so the
    contest ends with the round it was cut on.
    Otherwise rounds go on while more than one player would remain after
    the next cut.

    Examples:
        10 players, 3 eliminated per round: 10, 7 then 4 players, 3 rounds.
        5 players passing 3 then 1: 5 then 3 players, 2 rounds.
    """
    if passing_counts:
        if passing_counts[-1] == 1:
            return len(passing_counts)
        return len(passing_counts) + 1
    round_count = 1
    remaining = player_count
    while remaining - eliminated_per_round > 1:
        remaining -= eliminated_per_round
        round_count += 1
    return round_count


def players_count_to_start_round(
    round_number: int,
    player_count: int,
    round_count: int,
    passing_counts: Sequence[int],
    eliminated_per_round: int,
) -> int:
    """How many players start a given round, 0 when out of bounds."""
    if round_number < 1 or round_number > round_count:
        return 0
    if round_number == 1:
        return player_count
    if passing_counts:
        # Counts pass at the end of a round, hence the offset
        return passing_counts[round_number - 2]
    return player_count - eliminated_per_round * (round_number - 1)


def players_count_to_pass_round(
    round_number: int,
    player_count: int,
    round_count: int,
    passing_counts: Sequence[int],
    eliminated_per_round: int,
) -> int:
    """How many players survive a given round, 0 when nobody is cut after it.

    Only a final passing count of 1 cuts the last round.
    """
    if round_number < 1 or round_number > round_count:
        return 0
    if round_number < round_count:
        return players_count_to_start_round(
            round_number + 1, player_count, round_count, passing_counts, eliminated_per_round
        )
    if passing_counts and len(passing_counts) == round_count:
        return passing_counts[-1]
    return 0


def split_survivors(
    ranked_keys: Sequence[PlayerKey], expected: int
) -> Tuple[List[PlayerKey], List[PlayerKey]]:
    """Split a round result between survivors and eliminated players."""
    return list(ranked_keys[:expected]), list(ranked_keys[expected:])
