"""Ranking entry of a player or team in a competition. This is a base class."""

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

import copy
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Hashable, Iterable, Optional, Type

from gambitcompetition.exceptions import RankingException
from gambitcompetition.models.game import Game

if TYPE_CHECKING:
    from gambitcompetition.models.ranking.rankings_holder import RankingsHolder


class RankingEntry(ABC):
    """Accumulated statistics of one entity (player or team).

    Each concrete entry kind handles one game kind and defines its own
    comparison cascade. Points are computed from the per-result tallies and
    the points table of the owning :class:`RankingsHolder`.

    Attributes
    ----------
    entity_key : Hashable
        Player or team key.
    entity_seed : int
        Seed of the entity, final tie-break.
    played : int
        Number of games saved.
    played_by_result : dict
        Result (won/drawn/loss, or position) to number of games.
    performances : dict of str to float
        Summed performances by type.
    expenses : dict of str to float
        Summed expenses by type.
    bonus, malus : float
        Points added or removed on top of the points table.
    """

    game_class: Type[Game] = Game
    # Result to points, copied into each new holder
    default_points: Dict[Any, float] = {}

    def __init__(self, entity_key: Hashable, entity_seed: int = 0):
        self.entity_key = entity_key
        self.entity_seed = entity_seed
        self.played = 0
        self.played_by_result: Dict[Any, int] = {}
        self.performances: Dict[str, float] = {}
        self.expenses: Dict[str, float] = {}
        self.bonus: float = 0
        self.malus: float = 0
        self.holder: Optional["RankingsHolder"] = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.entity_key!r}, seed={self.entity_seed}, "
            f"points={self.points}, played={self.played})"
        )

    # ========== Accessors ==========

    def get_played_by_result(self, result: Any) -> int:
        return self.played_by_result.get(result, 0)

    @property
    def points(self) -> float:
        total = self.bonus - self.malus
        if self.holder is None:
            return total
        for result, count in self.played_by_result.items():
            total += self.holder.get_points_for_result(result) * count
        return total

    def get_performance(self, performance_type: str) -> float:
        return self.performances.get(performance_type, 0)

    @property
    def total_expenses(self) -> float:
        return sum(self.expenses.values())

    # ========== Saving games ==========

    def save_game(self, game: Game) -> bool:
        """Accumulate a played game in this entry.

        Returns:
            True if the game counted for this entity

        Raises:
            RankingException: If the game kind does not match the entry kind
        """
        if not isinstance(game, self.game_class):
            raise RankingException(
                f"{type(self).__name__} requires {self.game_class.__name__} "
                f"as game, {type(game).__name__} given"
            )
        if not game.is_played or not game.has_player(self.entity_key):
            return False
        key = self.entity_key
        for performance_type, value in game.get_player_performances(key).items():
            self.performances[performance_type] = (
                self.performances.get(performance_type, 0) + value
            )
        for expense_type, value in game.get_player_expenses(key).items():
            self.expenses[expense_type] = self.expenses.get(expense_type, 0) + value
        self.bonus += game.get_player_bonus(key)
        self.malus += game.get_player_malus(key)
        self.played += 1
        self._save_result(game)
        return True

    @abstractmethod
    def _save_result(self, game: Game) -> None:
        """Tally the result of a played game for this entity."""

    # ========== Comparison ==========

    @abstractmethod
    def compare_to(self, other: "RankingEntry") -> int:
        """Compare to another entry of the same kind.

        Returns:
            1 if self ranks higher, -1 if other ranks higher, 0 only when
            seeds are equal too
        """

    def _compare_performances(self, other: "RankingEntry") -> int:
        if self.holder is None:
            return 0
        return self.holder.order_by_performances(self, other)

    def _compare_tail(self, other: "RankingEntry") -> int:
        # Less played is first
        if self.played != other.played:
            return 1 if self.played < other.played else -1
        # Lower seed is first
        if self.entity_seed != other.entity_seed:
            return 1 if self.entity_seed < other.entity_seed else -1
        return 0

    def compare_expenses_to(self, other: "RankingEntry") -> int:
        """Compare on total expenses (lower first), then the standard cascade."""
        if self.total_expenses != other.total_expenses:
            return 1 if self.total_expenses < other.total_expenses else -1
        return self.compare_to(other)

    # ========== Combining ==========

    def combine(self, entries: Iterable["RankingEntry"]) -> None:
        """Add statistics of other entries to this one (used for teams)."""
        for entry in entries:
            self.played += entry.played
            for result, count in entry.played_by_result.items():
                self.played_by_result[result] = (
                    self.played_by_result.get(result, 0) + count
                )
            for performance_type, value in entry.performances.items():
                self.performances[performance_type] = (
                    self.performances.get(performance_type, 0) + value
                )
            for expense_type, value in entry.expenses.items():
                self.expenses[expense_type] = self.expenses.get(expense_type, 0) + value
            self.bonus += entry.bonus
            self.malus += entry.malus
            self._combine_specific(entry)

    def _combine_specific(self, entry: "RankingEntry") -> None:
        """Hook for kind-specific statistics."""

    def clone(self) -> "RankingEntry":
        """Copy of this entry, detached from its holder."""
        # Keys must stay the very same objects, containers are copied
        cloned = copy.copy(self)
        for name, value in vars(self).items():
            if isinstance(value, (dict, list, set)):
                setattr(cloned, name, copy.copy(value))
        cloned.holder = None
        return cloned
