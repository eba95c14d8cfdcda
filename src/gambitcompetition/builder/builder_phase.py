"""Blueprint of one phase of a competition tree."""

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
from typing import Any, Dict, List, Optional

from gambitcompetition.builder.competition_builder import CompetitionBuilder
from gambitcompetition.builder.player_selector import PlayerSelector
from gambitcompetition.constants import (
    DISPATCH_METHOD_DEAL,
    DISPATCH_METHOD_RANDOM,
    DISPATCH_METHODS,
)
from gambitcompetition.exceptions import (
    CompetitionRuntimeException,
    PlayerCountException,
)
from gambitcompetition.models.competition.competition import Roster, normalize_roster
from gambitcompetition.rating import RatingAccess
from gambitcompetition.tree.phase import TreePhase
from gambitcompetition.type_hints import PlayerKey, TeamComposition
from gambitcompetition.utils import setup_logger
from gambitcompetition.utils.sequence import deal_mapping, shuffled_mapping

logger = setup_logger(__name__)


class BuilderPhase:
    """Groups of a phase, how players are dispatched and selected.

    Args:
        name: Phase name, unique in its tree
        dispatch_method: ``deal`` or ``random``; unknown methods fall back
            to ``deal``
    """

    def __init__(self, name: str, dispatch_method: str = DISPATCH_METHOD_DEAL):
        self.name = name
        self.dispatch_method = DISPATCH_METHOD_DEAL
        self.set_dispatch_method(dispatch_method)
        self.groups: Dict[str, CompetitionBuilder] = {}
        self.player_selectors: List[PlayerSelector] = []

    def __repr__(self) -> str:
        return f"BuilderPhase({self.name!r}, groups={list(self.groups)})"

    def set_dispatch_method(self, dispatch_method: str) -> None:
        if dispatch_method not in DISPATCH_METHODS:
            logger.warning(
                f"Phase {self.name}: unknown dispatch method {dispatch_method!r}, "
                f"using {DISPATCH_METHOD_DEAL!r}"
            )
            dispatch_method = DISPATCH_METHOD_DEAL
        self.dispatch_method = dispatch_method

    # ========== Groups ==========

    def add_group(
        self,
        competition_type: str,
        options: Optional[Dict[str, Any]] = None,
        name: str = "",
    ) -> CompetitionBuilder:
        """Declare a group from a competition type and its options.

        Args:
            name: Group name, defaults to the number of groups already declared
        """
        return self.add_group_from_builder(CompetitionBuilder(competition_type, options), name)

    def add_group_from_builder(
        self, builder: CompetitionBuilder, name: str = ""
    ) -> CompetitionBuilder:
        """Declare a group from a copy of a prepared builder."""
        if not name:
            name = str(len(self.groups))
        group = builder.copy(name)
        self.groups[name] = group
        return group

    def get_group(self, name: str) -> Optional[CompetitionBuilder]:
        return self.groups.get(name)

    # ========== Selectors ==========

    def add_player_selector(self, selector: PlayerSelector) -> None:
        self.player_selectors.append(selector)

    def reset_player_selectors(self) -> None:
        self.player_selectors = []

    def get_effective_player_selectors(self) -> List[PlayerSelector]:
        """Declared selectors, or the default one when none is declared."""
        return list(self.player_selectors) or [PlayerSelector()]

    # ========== Counts ==========

    def compute_min_players_count(self) -> int:
        return sum(group.min_players_required for group in self.groups.values())

    @property
    def qualification_spots(self) -> int:
        return sum(group.qualification_spots for group in self.groups.values())

    @property
    def elimination_spots(self) -> int:
        return sum(group.elimination_spots for group in self.groups.values())

    # ========== Start ==========

    def dispatch_players(
        self, players: Dict[PlayerKey, Any], rng: random.Random
    ) -> List[Dict[PlayerKey, Any]]:
        """Split a roster across groups, one mapping per group in declaration order."""
        if self.dispatch_method == DISPATCH_METHOD_RANDOM:
            players = shuffled_mapping(players, rng)
        return deal_mapping(players, len(self.groups))

    def start_phase(
        self,
        players: Roster,
        rng: Optional[random.Random] = None,
        rating_access: Optional[RatingAccess] = None,
        team_composition: Optional[TeamComposition] = None,
    ) -> TreePhase:
        """Dispatch players and build every group.

        Raises:
            CompetitionRuntimeException: If no group is declared
            PlayerCountException: If players are fewer than the sum of group
                minimums, or a group gets fewer players than its minimum
        """
        if not self.groups:
            raise CompetitionRuntimeException(f"Cannot start phase {self.name}: no group declared")
        roster = normalize_roster(players)
        min_players = self.compute_min_players_count()
        if len(roster) < min_players:
            raise PlayerCountException("to start phase", min_players)

        rng = rng or random.Random()
        hands = self.dispatch_players(roster, rng)
        for (group_name, builder), hand in zip(self.groups.items(), hands):
            if len(hand) < builder.min_players_required:
                raise PlayerCountException(
                    f"to start group {group_name} of phase {self.name}",
                    builder.min_players_required,
                )
        competitions = {}
        for (group_name, builder), hand in zip(self.groups.items(), hands):
            competitions[group_name] = builder.build_for_players(
                hand, rng, rating_access, team_composition
            )
        logger.info(
            f"Started phase {self.name} with {len(roster)} players "
            f"in {len(competitions)} groups"
        )
        return TreePhase(self.name, competitions)
