"""Game where several players score performances."""

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

from typing import Dict, List, Sequence

from gambitcompetition.exceptions import CompetitionRuntimeException
from gambitcompetition.models.game.base_game import Game
from gambitcompetition.type_hints import PlayerKey


class GamePerformances(Game):
    """Multi-player game ranked on the sum of some performance types.

    Args:
        player_keys: Participants, in registration order
        performance_types_to_sum: Performance types summed to rank players
    """

    def __init__(
        self, player_keys: Sequence[PlayerKey], performance_types_to_sum: Sequence[str]
    ):
        super().__init__()
        self._player_keys = list(player_keys)
        self.performance_types_to_sum = list(performance_types_to_sum)

    def __repr__(self) -> str:
        return f"GamePerformances({len(self._player_keys)} players, played={self.is_played})"

    @property
    def player_keys(self) -> List[PlayerKey]:
        return list(self._player_keys)

    def set_player_performances(
        self, player_key: PlayerKey, performances: Dict[str, float]
    ) -> None:
        for performance_type, value in performances.items():
            self.set_player_performance(player_key, performance_type, value)

    def set_results(self, results: Dict[PlayerKey, Dict[str, float]]) -> None:
        """Record performances of every player given, then end the game.

        Every key is checked before anything is written, so a rejected
        result leaves the game untouched.

        Raises:
            CompetitionRuntimeException: Game already played, key not a
                participant or performance type not a name
        """
        self._check_not_played()
        for player_key, performances in results.items():
            self._check_can_edit(player_key)
            for performance_type in performances:
                if not isinstance(performance_type, str) or not performance_type:
                    raise CompetitionRuntimeException(
                        f"Invalid performance type {performance_type!r} for player {player_key!r}"
                    )
        for player_key, performances in results.items():
            self.set_player_performances(player_key, performances)
        self.set_ended()

    def set_ended(self) -> None:
        self._set_ended()

    def get_player_total(self, player_key: PlayerKey) -> float:
        """Sum of the declared performance types for a player."""
        return sum(
            self.get_player_performance(player_key, performance_type)
            for performance_type in self.performance_types_to_sum
        )

    def get_game_ranks(self) -> Dict[PlayerKey, float]:
        """Players ordered by total, best first.

        Equal totals keep registration order.

        Returns:
            Player key to total, in rank order
        """
        ordered = sorted(
            self._player_keys, key=lambda key: self.get_player_total(key), reverse=True
        )
        return {key: self.get_player_total(key) for key in ordered}

    def get_player_position(self, player_key: PlayerKey) -> int:
        """Position of a player in this game, 0 if unplayed or not found."""
        if not self.is_played or player_key not in self._player_keys:
            return 0
        return list(self.get_game_ranks()).index(player_key) + 1

    def get_ordered_keys(self) -> List[PlayerKey]:
        return list(self.get_game_ranks())
