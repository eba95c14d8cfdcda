"""Swiss system pairing, one round at a time."""

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

from typing import List, Optional, Sequence, Tuple

from gambitcompetition.models.ranking import RankingDuel
from gambitcompetition.type_hints import PlayerKey
from gambitcompetition.utils import setup_logger

logger = setup_logger(__name__)


def select_bye(rankings: Sequence[RankingDuel]) -> Optional[int]:
    """Find who gets the bye when the pool is odd.

    The pool is scanned bottom-up, the first player who never received a
    bye gets it. The top-ranked player is never scanned.

    Args:
        rankings: Current rankings, first to last

    Returns:
        Index of the bye player in rankings, None if pool is even or
        everyone scanned already had a bye
    """
    if len(rankings) % 2 == 0:
        return None
    for index in range(len(rankings) - 1, 0, -1):
        if rankings[index].won_bye > 0:
            continue
        return index
    return None


def _next_game(pool: List[RankingDuel]) -> Tuple[PlayerKey, PlayerKey]:
    home = pool[0]
    # The final index of the pool is never scanned
    opponent_index = None
    for index in range(1, len(pool) - 1):
        if not home.has_opponent(pool[index].entity_key):
            opponent_index = index
            break
    if opponent_index is None:
        # No new opponent found: rematch with the next one
        opponent_index = 1
    away = pool[opponent_index]
    del pool[opponent_index]
    del pool[0]
    return home.entity_key, away.entity_key


def create_swiss_pairings(
    rankings: Sequence[RankingDuel],
) -> Tuple[List[Tuple[PlayerKey, PlayerKey]], Optional[PlayerKey]]:
    """Create pairings for the next Swiss round.

    The top-ranked unpaired player is matched with the nearest-ranked
    player it has not met yet, repeatedly, until the pool is empty.

    Args:
        rankings: Current rankings, first to last

    Returns:
        Tuple of (pairings, bye player key)
        pairings is a list of (home key, away key) tuples
    """
    pool = list(rankings)
    bye_key = None
    bye_index = select_bye(pool)
    if bye_index is not None:
        bye_key = pool.pop(bye_index).entity_key
        logger.debug(f"Bye granted to {bye_key!r}")

    pairings = []
    while len(pool) >= 2:
        pairings.append(_next_game(pool))
    if pool:
        logger.warning(
            f"Player {pool[0].entity_key!r} left unpaired: every candidate already had a bye"
        )
    return pairings, bye_key
