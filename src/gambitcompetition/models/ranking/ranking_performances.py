"""Ranking entry for competitions scored on performances."""

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

from typing import Hashable

from gambitcompetition.models.game import GamePerformances
from gambitcompetition.models.ranking.base_ranking import RankingEntry


class RankingPerformances(RankingEntry):
    """Ranking of an entity in elimination contests.

    Players surviving longer rank first. Among players who played as many
    games, the position in their latest game decides, then the summed
    performance total.

    Attributes
    ----------
    last_position : int
        Position in the latest game saved, 0 before any game.
    performance_total : float
        Sum of the declared performance types over every game.
    """

    game_class = GamePerformances

    def __init__(self, entity_key: Hashable, entity_seed: int = 0):
        super().__init__(entity_key, entity_seed)
        self.last_position = 0
        self.performance_total: float = 0

    def _save_result(self, game: GamePerformances) -> None:
        self.last_position = game.get_player_position(self.entity_key)
        self.performance_total += game.get_player_total(self.entity_key)
        if self.last_position:
            self.played_by_result[self.last_position] = (
                self.get_played_by_result(self.last_position) + 1
            )

    def _combine_specific(self, entry: "RankingPerformances") -> None:
        self.performance_total += entry.performance_total
        if entry.last_position and (
            not self.last_position or entry.last_position < self.last_position
        ):
            self.last_position = entry.last_position

    def compare_to(self, other: "RankingPerformances") -> int:
        # More played is first: survived longer
        if self.played != other.played:
            return 1 if self.played > other.played else -1
        # Better position in latest game is first
        if self.last_position != other.last_position:
            return 1 if self.last_position < other.last_position else -1
        if self.performance_total != other.performance_total:
            return 1 if self.performance_total > other.performance_total else -1
        performance_order = self._compare_performances(other)
        if performance_order != 0:
            return performance_order
        return self._compare_tail(other)
