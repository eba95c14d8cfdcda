"""Ranking entry for duel-based competitions."""

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

from typing import Hashable, List

from gambitcompetition.constants import (
    DUEL_POINTS,
    RESULT_DRAWN,
    RESULT_LOSS,
    RESULT_WON,
)
from gambitcompetition.models.game import GameDuel
from gambitcompetition.models.ranking.base_ranking import RankingEntry


class RankingDuel(RankingEntry):
    """Ranking of an entity playing duels.

    Byes count as won games and are also tallied apart, so that a player
    does not receive two byes.

    Cascade: points, wins, draws, score difference, score for, declared
    performances, fewer games played, lower seed.
    """

    game_class = GameDuel
    default_points = DUEL_POINTS

    def __init__(self, entity_key: Hashable, entity_seed: int = 0):
        super().__init__(entity_key, entity_seed)
        self.won_bye = 0
        self.score_for: float = 0
        self.score_against: float = 0
        self.opponents: List[Hashable] = []

    @property
    def won(self) -> int:
        return self.get_played_by_result(RESULT_WON)

    @property
    def drawn(self) -> int:
        return self.get_played_by_result(RESULT_DRAWN)

    @property
    def lost(self) -> int:
        return self.get_played_by_result(RESULT_LOSS)

    @property
    def score_difference(self) -> float:
        return self.score_for - self.score_against

    def has_opponent(self, opponent_key: Hashable) -> bool:
        return opponent_key in self.opponents

    def _save_result(self, game: GameDuel) -> None:
        key = self.entity_key
        result = game.get_player_result(key)
        if result is None:
            return
        self.played_by_result[result] = self.get_played_by_result(result) + 1
        if game.is_bye:
            self.won_bye += 1
            return
        self.opponents.append(game.get_opponent_key(key))
        self.score_for += game.get_player_score(key)
        self.score_against += game.get_player_score(game.get_opponent_key(key))

    def _combine_specific(self, entry: "RankingDuel") -> None:
        self.won_bye += entry.won_bye
        self.score_for += entry.score_for
        self.score_against += entry.score_against
        self.opponents.extend(entry.opponents)

    def compare_to(self, other: "RankingDuel") -> int:
        # More points is first
        if self.points != other.points:
            return 1 if self.points > other.points else -1
        # More won is first
        if self.won != other.won:
            return 1 if self.won > other.won else -1
        # More drawn is first
        if self.drawn != other.drawn:
            return 1 if self.drawn > other.drawn else -1
        if self.score_difference != other.score_difference:
            return 1 if self.score_difference > other.score_difference else -1
        if self.score_for != other.score_for:
            return 1 if self.score_for > other.score_for else -1
        performance_order = self._compare_performances(other)
        if performance_order != 0:
            return performance_order
        return self._compare_tail(other)
