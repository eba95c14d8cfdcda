"""A phase of a competition tree: groups started from one dispatch."""

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

import random
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

from gambitcompetition.constants import (
    SPOT_ELIMINATION,
    SPOT_QUALIFICATION,
    SPOT_STAGNATION,
)
from gambitcompetition.exceptions import ParameterException, RankingException
from gambitcompetition.models.competition.competition import Competition
from gambitcompetition.models.game import Game
from gambitcompetition.models.ranking import RankingEntry, RankingsHolder
from gambitcompetition.type_hints import PlayerKey
from gambitcompetition.utils import setup_logger
from gambitcompetition.utils.sequence import shuffled

logger = setup_logger(__name__)


class TreePhase:
    """Competitions (groups) started together for one phase of a tree.

    Groups are kept in declaration order, which breaks ties everywhere a
    phase merges its groups: next game, games by round and rank tiers.

    Args:
        name: Phase name, unique in its tree
        groups: Group name to competition, in declaration order
    """

    def __init__(self, name: str, groups: Dict[str, Competition]):
        self.name = name
        self.groups: Dict[str, Competition] = dict(groups)
        self._completed = False

    def __repr__(self) -> str:
        return f"TreePhase({self.name!r}, groups={list(self.groups)})"

    def get_group(self, name: str) -> Optional[Competition]:
        return self.groups.get(name)

    # ========== Progress ==========

    def get_next_game_with_group(self) -> Tuple[Optional[Game], Optional[str]]:
        """Earliest unplayed game across groups, with its group name.

        The lowest round wins; on equal rounds the first declared group wins.
        """
        if self._completed:
            return None, None
        candidate: Optional[Game] = None
        candidate_group: Optional[str] = None
        for group_name, group in self.groups.items():
            game = group.get_next_game()
            if game is None:
                continue
            if candidate is None or candidate.round_number > game.round_number:
                candidate = game
                candidate_group = group_name
        if candidate is None:
            self._completed = True
        return candidate, candidate_group

    def get_next_game(self) -> Optional[Game]:
        return self.get_next_game_with_group()[0]

    def is_completed(self) -> bool:
        if self._completed:
            return True
        return self.get_next_game() is None

    @property
    def current_round(self) -> int:
        game = self.get_next_game()
        return game.round_number if game else -1

    def get_games_by_round(self, round_number: int) -> List[Game]:
        games: List[Game] = []
        for group in self.groups.values():
            games.extend(group.get_games_by_round(round_number))
        return games

    def get_game_count(self) -> int:
        return sum(group.get_game_count() for group in self.groups.values())

    def get_games_completed_count(self) -> int:
        return sum(group.get_games_completed_count() for group in self.groups.values())

    def get_games_to_play_count(self) -> int:
        return self.get_game_count() - self.get_games_completed_count()

    def get_round_count(self) -> int:
        """Rounds needed to play every group, groups playing side by side."""
        return max((group.round_count for group in self.groups.values()), default=0)

    @property
    def qualification_spots(self) -> int:
        return sum(group.qualification_spots for group in self.groups.values())

    @property
    def elimination_spots(self) -> int:
        return sum(group.elimination_spots for group in self.groups.values())

    # ========== Rankings ==========

    def get_rankings(self, by_expenses: bool = False) -> Dict[str, List[RankingEntry]]:
        return {
            name: group.get_rankings(by_expenses) for name, group in self.groups.items()
        }

    def get_team_rankings(self) -> Dict[str, List[RankingEntry]]:
        return {name: group.get_team_rankings() for name, group in self.groups.items()}

    def _mix_group_rankings(
        self, for_teams: bool = False, by_expenses: bool = False
    ) -> List[RankingEntry]:
        """Rank entries of every group together, in one holder.

        Raises:
            RankingException: If groups hold different ranking kinds, or if
                an entity is ranked in two groups (players only)
        """
        all_rankings = self.get_team_rankings() if for_teams else self.get_rankings()
        first_group = next(iter(self.groups.values()), None)
        if first_group is None:
            return []
        mixed_holder: RankingsHolder = first_group.rankings_holder.duplicate_empty_holder()
        try:
            for group_rankings in all_rankings.values():
                for entry in group_rankings:
                    mixed = entry.clone()
                    existing = mixed_holder.get_ranking(mixed.entity_key)
                    if for_teams and existing is not None:
                        # Same team spread across groups
                        existing.combine([mixed])
                        continue
                    mixed_holder.integrate_ranking(mixed)
        except RankingException as exc:
            raise RankingException(f"Cannot build mixed rankings: {exc}") from exc
        mixed_holder.compute_rankings_order()
        if by_expenses and not for_teams:
            return mixed_holder.get_rankings_by_expenses()
        return mixed_holder.get_rankings()

    def get_mixed_rankings(self, by_expenses: bool = False) -> List[RankingEntry]:
        return self._mix_group_rankings(False, by_expenses)

    def get_mixed_team_rankings(self) -> List[RankingEntry]:
        return self._mix_group_rankings(True)

    def get_mixed_rankings_for_keys(
        self, keys: Sequence[Hashable], by_expenses: bool = False
    ) -> List[RankingEntry]:
        wanted = set(keys)
        return [
            entry
            for entry in self.get_mixed_rankings(by_expenses)
            if entry.entity_key in wanted
        ]

    def get_mixed_rankings_for_qualification(self) -> List[RankingEntry]:
        return self.get_mixed_rankings_for_keys(self.get_player_keys_for_qualification())

    def get_mixed_rankings_for_stagnation(self) -> List[RankingEntry]:
        return self.get_mixed_rankings_for_keys(self.get_player_keys_for_stagnation())

    def get_mixed_rankings_for_elimination(self) -> List[RankingEntry]:
        return self.get_mixed_rankings_for_keys(self.get_player_keys_for_elimination())

    # ========== Spots ==========

    def get_player_keys_for_spot(
        self,
        spot: str,
        by_rank: bool = False,
        phase_ranked: bool = False,
        shuffle_by_rank: bool = False,
        rng: Optional[random.Random] = None,
    ) -> List[PlayerKey]:
        """Keys of players in a spot type, across groups.

        By default keys come group by group. With ``by_rank``, every group's
        first key comes first, then every group's second key, and so on; each
        tier is shuffled when ``shuffle_by_rank`` is set. With
        ``phase_ranked``, keys are reordered by the mixed rankings of the
        phase, keeping the previous order if groups cannot be mixed.

        Args:
            spot: One of qualification, stagnation or elimination
            by_rank: Order rank-major across groups
            phase_ranked: Order by mixed rankings of the phase
            shuffle_by_rank: Shuffle each rank tier, with ``by_rank``
            rng: Random source for tier shuffles

        Raises:
            ParameterException: If the spot type is unknown
        """
        if spot not in (SPOT_QUALIFICATION, SPOT_STAGNATION, SPOT_ELIMINATION):
            raise ParameterException(f"must be a known spot type, {spot!r} given", "spot")

        player_keys: List[PlayerKey] = []
        tiers: List[List[PlayerKey]] = []
        for group in self.groups.values():
            if spot == SPOT_QUALIFICATION:
                group_keys = group.get_player_keys_for_qualification()
            elif spot == SPOT_STAGNATION:
                group_keys = group.get_player_keys_for_stagnation()
            else:
                group_keys = group.get_player_keys_for_elimination()

            if by_rank:
                for index, player_key in enumerate(group_keys):
                    if index >= len(tiers):
                        tiers.append([])
                    tiers[index].append(player_key)
            else:
                player_keys.extend(group_keys)

        if by_rank:
            for tier in tiers:
                if shuffle_by_rank:
                    tier = shuffled(tier, rng or random.Random())
                player_keys.extend(tier)

        if phase_ranked:
            try:
                mixed = self.get_mixed_rankings_for_keys(player_keys)
            except RankingException as exc:
                logger.warning(f"Phase {self.name}: keeping group order, {exc}")
            else:
                player_keys = [entry.entity_key for entry in mixed]

        return player_keys

    def get_player_keys_for_qualification(self, **kwargs) -> List[PlayerKey]:
        return self.get_player_keys_for_spot(SPOT_QUALIFICATION, **kwargs)

    def get_player_keys_for_stagnation(self, **kwargs) -> List[PlayerKey]:
        return self.get_player_keys_for_spot(SPOT_STAGNATION, **kwargs)

    def get_player_keys_for_elimination(self, **kwargs) -> List[PlayerKey]:
        return self.get_player_keys_for_spot(SPOT_ELIMINATION, **kwargs)
