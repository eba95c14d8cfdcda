"""Ranking entry for race championships."""

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

from gambitcompetition.constants import RACE_POINTS
from gambitcompetition.models.game import GameRace
from gambitcompetition.models.ranking.base_ranking import RankingEntry


class RankingRace(RankingEntry):
    """Ranking of an entity finishing races, results are positions."""

    game_class = GameRace
    default_points = RACE_POINTS

    @property
    def won(self) -> int:
        return self.get_played_by_result(1)

    def get_played_in_first_positions(self, up_to: int) -> int:
        return sum(
            self.get_played_by_result(position) for position in range(1, up_to + 1)
        )

    def _save_result(self, game: GameRace) -> None:
        position = game.get_player_position(self.entity_key)
        if position:
            self.played_by_result[position] = self.get_played_by_result(position) + 1

    def compare_to(self, other: "RankingRace") -> int:
        # More points is first
        if self.points != other.points:
            return 1 if self.points > other.points else -1
        # Then more 1st, 2nd and 3rd places
        for position in (1, 2, 3):
            mine = self.get_played_by_result(position)
            theirs = other.get_played_by_result(position)
            if mine != theirs:
                return 1 if mine > theirs else -1
        performance_order = self._compare_performances(other)
        if performance_order != 0:
            return performance_order
        return self._compare_tail(other)
