"""Single-elimination bracket pairing."""

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

from gambitcompetition.exceptions import CompetitionRuntimeException
from gambitcompetition.models.game import GameDuel
from gambitcompetition.type_hints import PlayerKey, SeedPairing
from gambitcompetition.utils.sequence import is_power_of_two


def check_power_of_two(player_count: int, round_number: int) -> None:
    """Raise if a bracket round cannot be built for this many players.

    Raises:
        CompetitionRuntimeException: If player_count is not a power of 2
    """
    if not is_power_of_two(player_count):
        raise CompetitionRuntimeException(
            "Cannot create next round with a number of players that is not "
            f"a power of 2, {player_count} given on round {round_number}"
        )


def bracket_round_count(player_count: int) -> int:
    """Rounds needed to get a single winner out of a power of 2 players."""
    return player_count.bit_length() - 1


def generate_duel_table(player_count: int) -> List[SeedPairing]:
    """Order first round duels so that top seeds meet as late as possible.

    Seed i first meets seed N + 1 - i. Each duel starts in its own part;
    while more than one part remains, the second half of parts is folded
    into the first half in reverse order. For 8 players:

    - start:  [1v8] [2v7] [3v6] [4v5]
    - fold 1: [1v8, 4v5] [2v7, 3v6]
    - fold 2: [1v8, 4v5, 2v7, 3v6]

    Args:
        player_count: Number of players, a power of 2

    Returns:
        List of (home seed, away seed) in calendar order

    Raises:
        CompetitionRuntimeException: If player_count is not a power of 2
    """
    check_power_of_two(player_count, 1)
    parts: List[List[SeedPairing]] = [
        [(seed, player_count + 1 - seed)] for seed in range(1, player_count // 2 + 1)
    ]
    while len(parts) > 1:
        part_count = len(parts)
        for index in range(part_count // 2, part_count):
            parts[part_count - index - 1].extend(parts[index])
        del parts[part_count // 2 :]
    return parts[0]


def get_round_winners(games: Sequence[GameDuel]) -> Tuple[List[PlayerKey], List[PlayerKey]]:
    """Split players of a round between winners and losers.

    A drawn game counts as a home win. A bye has no loser.

    Args:
        games: Games of the round, in calendar order

    Returns:
        Tuple of (winner keys, loser keys), unplayed games are skipped
    """
    winners = []
    losers = []
    for game in games:
        if not game.is_played:
            continue
        winners.append(game.get_winner_key())
        loser = game.get_loser_key()
        if loser is not None:
            losers.append(loser)
    return winners, losers
