"""Runtime iteration of a competition tree."""

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
from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional

from gambitcompetition.constants import (
    PICKUP_METHOD_BY_RANK_IN_GROUP,
    PICKUP_METHOD_BY_RANK_IN_PHASE,
    PICKUP_METHOD_BY_RANK_SHUFFLED,
    PLAYER_PACK_QUALIFIED,
    PLAYER_PACK_STAGNATION,
    PLAYER_PACK_UNUSED,
)
from gambitcompetition.exceptions import RankingException
from gambitcompetition.models.competition.competition import Roster, normalize_roster
from gambitcompetition.models.ranking import RankingEntry
from gambitcompetition.rating import RatingAccess
from gambitcompetition.tree.phase import TreePhase
from gambitcompetition.type_hints import PlayerKey, TeamComposition
from gambitcompetition.utils import setup_logger
from gambitcompetition.utils.sequence import unique

if TYPE_CHECKING:
    from gambitcompetition.builder.builder_phase import BuilderPhase
    from gambitcompetition.builder.builder_tree import BuilderTree
    from gambitcompetition.builder.player_selector import PlayerSelector

logger = setup_logger(__name__)


class CompetitionTree:
    """One iteration of a builder tree, bound to a concrete roster.

    The first phase starts on creation. A later phase starts the first time
    the tree is queried after its previous phase is completed; its roster is
    then computed from the player selectors of that phase.

    Args:
        builder_tree: Blueprint of the phases
        players: Roster, mapping key to player data or sequence of keys
        iteration_name: Name distinguishing this iteration
        rng: Random source shared by every phase and group
        rating_access: Where to read and write ratings, None to not rate
        team_composition: Team key to member player keys

    Raises:
        PlayerCountException: Not enough players for the first phase
    """

    def __init__(
        self,
        builder_tree: "BuilderTree",
        players: Roster,
        iteration_name: str = "",
        rng: Optional[random.Random] = None,
        rating_access: Optional[RatingAccess] = None,
        team_composition: Optional[TeamComposition] = None,
    ):
        self.builder_tree = builder_tree
        self.iteration_name = iteration_name
        self.players: Dict[PlayerKey, Any] = normalize_roster(players)
        self.rng = rng or random.Random()
        self.rating_access = rating_access
        self.team_composition: TeamComposition = dict(team_composition or {})
        self.phases: Dict[str, TreePhase] = {}
        self._unused_players: Dict[PlayerKey, Any] = dict(self.players)
        self._last_phase_name_completed: Optional[str] = None
        self._completed = False

        first_phase = next(iter(builder_tree.phases.values()))
        self._start_phase_in_tree(first_phase)

    def __repr__(self) -> str:
        return f"CompetitionTree({self.name!r}, phases={list(self.phases)})"

    @property
    def name(self) -> str:
        if not self.iteration_name:
            return self.builder_tree.name
        return f"{self.builder_tree.name} {self.iteration_name}"

    @property
    def is_using_ratings(self) -> bool:
        return self.rating_access is not None

    @property
    def is_using_teams(self) -> bool:
        return bool(self.team_composition)

    @property
    def unused_player_keys(self) -> List[PlayerKey]:
        """Keys of players not taken by any phase yet."""
        return list(self._unused_players)

    def get_player(self, player_key: PlayerKey) -> Any:
        return self.players.get(player_key)

    # ========== Phases ==========

    def get_phase(self, name: str) -> Optional[TreePhase]:
        """Phase by name, starting pending phases first if needed."""
        if name not in self.phases:
            self.get_current_phase()
        return self.phases.get(name)

    def get_last_phase(self) -> Optional[TreePhase]:
        """Latest started phase."""
        if not self.phases:
            return None
        return list(self.phases.values())[-1]

    def get_current_phase(self) -> Optional[TreePhase]:
        """First phase not completed, starting the next one if due.

        Returns:
            The current phase, None when every phase is completed
        """
        if self._completed:
            return None
        for phase_name, phase in self.phases.items():
            if not phase.is_completed():
                return phase
            self._last_phase_name_completed = phase_name

        next_builder_phase = self.builder_tree.get_phase_after(self._last_phase_name_completed)
        if next_builder_phase is None:
            self._completed = True
            logger.info(f"Tree {self.name} completed")
            return None
        return self._start_phase_in_tree(next_builder_phase)

    def is_completed(self) -> bool:
        if self._completed:
            return True
        return self.get_current_phase() is None

    def _start_phase_in_tree(self, builder_phase: "BuilderPhase") -> TreePhase:
        player_keys = self.compute_players_keys_for_phase(builder_phase)
        phase_players = {}
        for player_key in player_keys:
            self._unused_players.pop(player_key, None)
            phase_players[player_key] = self.players[player_key]
        phase = builder_phase.start_phase(
            phase_players, self.rng, self.rating_access, self.team_composition
        )
        self.phases[builder_phase.name] = phase
        return phase

    # ========== Selection ==========

    def _pick_from_phase(self, phase: TreePhase, selector: "PlayerSelector") -> List[PlayerKey]:
        pickup = selector.pickup_method
        options = {
            "by_rank": pickup in (PICKUP_METHOD_BY_RANK_IN_GROUP, PICKUP_METHOD_BY_RANK_SHUFFLED),
            "phase_ranked": pickup == PICKUP_METHOD_BY_RANK_IN_PHASE,
            "shuffle_by_rank": pickup == PICKUP_METHOD_BY_RANK_SHUFFLED,
            "rng": self.rng,
        }
        if selector.player_pack == PLAYER_PACK_QUALIFIED:
            return phase.get_player_keys_for_qualification(**options)
        elif selector.player_pack == PLAYER_PACK_STAGNATION:
            return phase.get_player_keys_for_stagnation(**options)
        elif selector.player_pack == PLAYER_PACK_UNUSED:
            return list(self._unused_players)
        return list(self._unused_players) + phase.get_player_keys_for_qualification(**options)

    def compute_players_keys_for_phase(self, builder_phase: "BuilderPhase") -> List[PlayerKey]:
        """Roster of a phase, from its player selectors.

        Each selector reads its source phase (named, else the last completed
        one), takes a pack ordered by its pickup method, then its window.
        Without any source phase the pack is the unused pool. Selections are
        concatenated and duplicates dropped.
        """
        player_keys: List[PlayerKey] = []
        for selector in builder_phase.get_effective_player_selectors():
            phase = self.phases.get(selector.phase_name)
            if phase is None and self._last_phase_name_completed is not None:
                phase = self.phases.get(self._last_phase_name_completed)

            if phase is None:
                pack_keys = list(self._unused_players)
            else:
                pack_keys = self._pick_from_phase(phase, selector)
            player_keys.extend(selector.select(pack_keys))

        player_keys = unique(player_keys)
        logger.debug(f"Tree {self.name}: {len(player_keys)} players for phase {builder_phase.name}")
        return player_keys

    # ========== Rankings ==========

    def _get_ranked_entity_keys(
        self, for_teams: bool = False, mix_groups: bool = True, by_expenses: bool = False
    ) -> Dict[Hashable, Optional[str]]:
        remaining = list(self.team_composition if for_teams else self.players)
        pending = set(remaining)
        ranked: Dict[Hashable, Optional[str]] = {}

        for phase_name, phase in reversed(list(self.phases.items())):
            if mix_groups:
                try:
                    if for_teams:
                        entries: List[RankingEntry] = phase.get_mixed_team_rankings()
                    else:
                        entries = phase.get_mixed_rankings(by_expenses)
                except RankingException as exc:
                    logger.warning(f"Tree {self.name}: phase {phase_name} ignored, {exc}")
                    entries = []
            else:
                by_group = (
                    phase.get_team_rankings() if for_teams else phase.get_rankings(by_expenses)
                )
                entries = [entry for group in by_group.values() for entry in group]

            for entry in entries:
                if entry.entity_key in pending:
                    ranked[entry.entity_key] = phase_name
                    pending.discard(entry.entity_key)
            if not pending:
                break

        # Entities not ranked yet are planned for phases to come
        left = {key: None for key in remaining if key in pending}
        left.update(ranked)
        return left

    def get_ranked_player_keys(
        self, mix_groups: bool = True, by_expenses: bool = False
    ) -> Dict[PlayerKey, Optional[str]]:
        """Player key to the name of the last phase reached, best first.

        Players never ranked come first, with None.
        """
        return self._get_ranked_entity_keys(False, mix_groups, by_expenses)

    def get_ranked_team_keys(self, mix_groups: bool = True) -> Dict[Hashable, Optional[str]]:
        return self._get_ranked_entity_keys(True, mix_groups)
