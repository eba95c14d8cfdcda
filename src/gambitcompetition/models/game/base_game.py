"""A game in a competition. This is a base class."""

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

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from gambitcompetition.exceptions import CompetitionRuntimeException
from gambitcompetition.type_hints import PlayerKey
from gambitcompetition.utils import setup_logger

logger = setup_logger(__name__)


class Game(ABC):
    """Atomic match unit of a competition calendar.

    A game is created unplayed, then placed in a calendar slot by its
    competition (see :meth:`affect_to`). Once its outcome is recorded, the
    game is marked as played and the competition is notified so rankings
    are updated inline.

    Attributes
    ----------
    round_number : int
        Round of the competition calendar holding this game.
    game_number : int
        Position of this game across the whole calendar, starting at 1.
        0 until the game is affected to a competition.
    name : str
        Optional display name.
    """

    def __init__(self) -> None:
        self.round_number: int = 0
        self.game_number: int = 0
        self.name: str = ""
        self._played: bool = False
        self._competition: Optional[Any] = None
        self._performances: Dict[PlayerKey, Dict[str, float]] = {}
        self._expenses: Dict[PlayerKey, Dict[str, float]] = {}
        self._bonus: Dict[PlayerKey, float] = {}
        self._malus: Dict[PlayerKey, float] = {}

    @property
    @abstractmethod
    def player_keys(self) -> List[PlayerKey]:
        """Keys of every participant, in registration order."""

    @property
    def is_played(self) -> bool:
        return self._played

    @property
    def competition(self) -> Optional[Any]:
        """Competition holding this game, if already affected."""
        return self._competition

    def has_player(self, player_key: PlayerKey) -> bool:
        return player_key in self.player_keys

    def affect_to(self, competition: Any, game_number: int) -> None:
        """Place this game in a competition calendar.

        Args:
            competition: The owning competition, notified when the game ends
            game_number: Number of the game in the calendar
        """
        self._competition = competition
        self.game_number = game_number

    # ========== Performances, expenses, bonus and malus ==========

    def set_player_performance(
        self, player_key: PlayerKey, performance_type: str, value: float
    ) -> None:
        self._check_can_edit(player_key)
        self._performances.setdefault(player_key, {})[performance_type] = value

    def get_player_performances(self, player_key: PlayerKey) -> Dict[str, float]:
        return dict(self._performances.get(player_key, {}))

    def get_player_performance(
        self, player_key: PlayerKey, performance_type: str
    ) -> float:
        return self._performances.get(player_key, {}).get(performance_type, 0)

    def set_player_expense(
        self, player_key: PlayerKey, expense_type: str, value: float
    ) -> None:
        self._check_can_edit(player_key)
        self._expenses.setdefault(player_key, {})[expense_type] = value

    def get_player_expenses(self, player_key: PlayerKey) -> Dict[str, float]:
        return dict(self._expenses.get(player_key, {}))

    def add_player_bonus(self, player_key: PlayerKey, points: float) -> None:
        self._check_can_edit(player_key)
        self._bonus[player_key] = self._bonus.get(player_key, 0) + points

    def add_player_malus(self, player_key: PlayerKey, points: float) -> None:
        self._check_can_edit(player_key)
        self._malus[player_key] = self._malus.get(player_key, 0) + points

    def get_player_bonus(self, player_key: PlayerKey) -> float:
        return self._bonus.get(player_key, 0)

    def get_player_malus(self, player_key: PlayerKey) -> float:
        return self._malus.get(player_key, 0)

    def _check_can_edit(self, player_key: PlayerKey) -> None:
        # Rankings already consumed the data of a played game
        if self._played:
            raise CompetitionRuntimeException(
                f"Game {self.game_number} is already played and cannot be edited"
            )
        if not self.has_player(player_key):
            raise CompetitionRuntimeException(
                f"Player {player_key!r} does not take part in game {self.game_number}"
            )

    # ========== Outcome ==========

    def _check_not_played(self) -> None:
        if self._played:
            raise CompetitionRuntimeException(
                f"Result already recorded for game {self.game_number} "
                f"(round {self.round_number})"
            )

    def _set_ended(self) -> None:
        """Mark the game as played and notify the owning competition.

        Raises:
            CompetitionRuntimeException: If a result was already recorded
        """
        self._check_not_played()
        self._played = True
        logger.debug(
            f"Game {self.game_number} (round {self.round_number}) ended: {self!r}"
        )
        if self._competition is not None:
            self._competition.update_games_played()
