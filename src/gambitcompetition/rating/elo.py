"""Elo rating updates for duels and multi-player games."""

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

from gambitcompetition.constants import DEFAULT_ELO_K_FACTOR
from gambitcompetition.rating.access import Rating

WIN = 1.0
TIE = 0.5
LOSS = 0.0


class EloCalculator:
    """Compute new ratings from game outcomes.

    Ratings are never modified in place: each update returns new
    :class:`Rating` objects.
    """

    def __init__(self, k_factor: float = DEFAULT_ELO_K_FACTOR):
        self.k_factor = k_factor

    @staticmethod
    def expected_score(rating: float, opponent_rating: float) -> float:
        return 1 / (1 + 10 ** ((opponent_rating - rating) / 400))

    def duel(
        self, home: Rating, away: Rating, home_score: float
    ) -> Tuple[Rating, Rating]:
        """Update both ratings after a duel.

        Args:
            home: Home player rating
            away: Away player rating
            home_score: WIN, TIE or LOSS from the home point of view

        Returns:
            New (home, away) ratings
        """
        expected_home = self.expected_score(home.value, away.value)
        delta = self.k_factor * (home_score - expected_home)
        return (
            Rating(value=home.value + delta, games=home.games + 1),
            Rating(value=away.value - delta, games=away.games + 1),
        )

    def ordered(self, ratings: Sequence[Rating]) -> List[Rating]:
        """Update ratings after a multi-player game.

        Each player is compared to every other one as in a duel, the better
        finisher winning. The K factor is split across the opponents so a
        game weighs the same whatever the field size.

        Args:
            ratings: Ratings in finishing order, first to last

        Returns:
            New ratings, in the same order
        """
        count = len(ratings)
        if count < 2:
            return list(ratings)
        k_share = self.k_factor / (count - 1)
        deltas = [0.0] * count
        for i in range(count):
            for j in range(i + 1, count):
                expected = self.expected_score(ratings[i].value, ratings[j].value)
                delta = k_share * (WIN - expected)
                deltas[i] += delta
                deltas[j] -= delta
        return [
            Rating(value=rating.value + deltas[index], games=rating.games + 1)
            for index, rating in enumerate(ratings)
        ]
