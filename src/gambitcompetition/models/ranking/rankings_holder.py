"""Holder of every ranking entry of one competition."""

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

import functools
from typing import Any, Dict, Hashable, List, Mapping, Optional, Sequence, Type

from gambitcompetition.exceptions import RankingException
from gambitcompetition.models.ranking.base_ranking import RankingEntry
from gambitcompetition.utils import setup_logger

logger = setup_logger(__name__)


class RankingsHolder:
    """Owns ranking entries of one kind, the points table and the order.

    The order is only recomputed on :meth:`compute_rankings_order`, so a
    batch of saved games costs one sort.

    Args:
        entry_class: Kind of entries held, every entry must be of this class
    """

    def __init__(self, entry_class: Type[RankingEntry]):
        self.entry_class = entry_class
        self._points_by_result: Dict[Any, float] = dict(entry_class.default_points)
        self._performance_types_to_rank: List[str] = []
        self._entries: Dict[Hashable, RankingEntry] = {}
        self._order: List[RankingEntry] = []

    def __repr__(self) -> str:
        return f"RankingsHolder({self.entry_class.__name__}, {len(self._entries)} entries)"

    def __len__(self) -> int:
        return len(self._entries)

    # ========== Configuration ==========

    def set_points_attribution_for_result(self, result: Any, points: float) -> None:
        self._points_by_result[result] = points

    def get_points_for_result(self, result: Any) -> float:
        return self._points_by_result.get(result, 0)

    @property
    def points_attribution(self) -> Dict[Any, float]:
        return dict(self._points_by_result)

    def add_performance_type_to_rank(self, performance_type: str) -> None:
        if performance_type not in self._performance_types_to_rank:
            self._performance_types_to_rank.append(performance_type)

    @property
    def performance_types_to_rank(self) -> List[str]:
        return list(self._performance_types_to_rank)

    def duplicate_empty_holder(self) -> "RankingsHolder":
        """New holder with the same kind and configuration, without entries."""
        holder = RankingsHolder(self.entry_class)
        holder._points_by_result = dict(self._points_by_result)
        holder._performance_types_to_rank = list(self._performance_types_to_rank)
        return holder

    # ========== Entries ==========

    def add_ranking(self, entity_key: Hashable, entity_seed: int) -> RankingEntry:
        """Create and hold a new empty entry."""
        entry = self.entry_class(entity_key, entity_seed)
        self.integrate_ranking(entry)
        return entry

    def integrate_ranking(self, entry: RankingEntry) -> None:
        """Hold an existing entry.

        Raises:
            RankingException: If the entry kind differs from the holder kind,
                or if an entry already exists for the same key
        """
        if type(entry) is not self.entry_class:
            raise RankingException(
                f"Cannot integrate {type(entry).__name__} in a holder of "
                f"{self.entry_class.__name__}"
            )
        if entry.entity_key in self._entries:
            raise RankingException(
                f"A ranking already exists for entity {entry.entity_key!r}"
            )
        entry.holder = self
        self._entries[entry.entity_key] = entry

    def get_ranking(self, entity_key: Hashable) -> Optional[RankingEntry]:
        return self._entries.get(entity_key)

    def get_all_rankings(self) -> Dict[Hashable, RankingEntry]:
        """Entries by key, in integration order."""
        return dict(self._entries)

    # ========== Ordering ==========

    def order_by_performances(self, first: RankingEntry, second: RankingEntry) -> int:
        """Compare two entries on declared performance types, more is first."""
        for performance_type in self._performance_types_to_rank:
            mine = first.get_performance(performance_type)
            theirs = second.get_performance(performance_type)
            if mine != theirs:
                return 1 if mine > theirs else -1
        return 0

    def compute_rankings_order(self) -> None:
        # Stable sort: entries with equal seeds keep integration order
        self._order = sorted(
            self._entries.values(),
            key=functools.cmp_to_key(lambda a, b: a.compare_to(b)),
            reverse=True,
        )

    def get_rankings(self) -> List[RankingEntry]:
        """Entries from first to last, as of the last computed order."""
        return list(self._order)

    def get_rankings_by_expenses(self) -> List[RankingEntry]:
        """Entries from lower to higher total expenses."""
        return sorted(
            self._entries.values(),
            key=functools.cmp_to_key(lambda a, b: a.compare_expenses_to(b)),
            reverse=True,
        )

    def get_rank(self, rank: int) -> Optional[RankingEntry]:
        """Entry at a 1-based rank, None if out of bounds."""
        if rank < 1 or rank > len(self._order):
            return None
        return self._order[rank - 1]

    def get_entity_rank(self, entity_key: Hashable) -> int:
        """1-based rank of an entity, 0 if not found."""
        for index, entry in enumerate(self._order):
            if entry.entity_key == entity_key:
                return index + 1
        return 0

    # ========== Teams ==========

    def get_team_rankings(
        self, team_composition: Mapping[Hashable, Sequence[Hashable]]
    ) -> List[RankingEntry]:
        """Rank teams by combining entries of their members.

        Teams without any member held here are left out. A team seed is its
        position in the composition.

        Args:
            team_composition: Team key to member keys

        Returns:
            Team entries from first to last
        """
        team_holder = self.duplicate_empty_holder()
        for index, (team_key, member_keys) in enumerate(team_composition.items()):
            members = [
                self._entries[key] for key in member_keys if key in self._entries
            ]
            if not members:
                continue
            team_entry = team_holder.add_ranking(team_key, index + 1)
            team_entry.combine(members)
        team_holder.compute_rankings_order()
        logger.debug(f"Computed rankings for {len(team_holder)} teams")
        return team_holder.get_rankings()
