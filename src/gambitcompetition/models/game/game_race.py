"""Game where players finish in positions."""

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

from typing import List, Sequence

from gambitcompetition.exceptions import CompetitionRuntimeException
from gambitcompetition.models.game.base_game import Game
from gambitcompetition.type_hints import PlayerKey


class GameRace(Game):
    """A race: every participant gets a finishing position."""

    def __init__(self, player_keys: Sequence[PlayerKey]):
        super().__init__()
        self._player_keys = list(player_keys)
        self._positions: List[PlayerKey] = []

    def __repr__(self) -> str:
        return f"GameRace({len(self._player_keys)} players, positions={self._positions})"

    @property
    def player_keys(self) -> List[PlayerKey]:
        return list(self._player_keys)

    def set_positions(self, ordered_keys: Sequence[PlayerKey]) -> None:
        """Record finishing order, first to last, and end the game.

        Raises:
            CompetitionRuntimeException: If keys do not match the participants
        """
        self._check_not_played()
        ordered_keys = list(ordered_keys)
        if len(ordered_keys) != len(self._player_keys) or set(ordered_keys) != set(
            self._player_keys
        ):
            raise CompetitionRuntimeException(
                f"Positions must list each of the {len(self._player_keys)} "
                f"participants of game {self.game_number} exactly once"
            )
        self._positions = ordered_keys
        self._set_ended()

    def get_positions(self) -> List[PlayerKey]:
        return list(self._positions)

    def get_player_position(self, player_key: PlayerKey) -> int:
        """1-based finishing position, 0 if unplayed or not found."""
        if player_key not in self._positions:
            return 0
        return self._positions.index(player_key) + 1
