"""Blueprint of a multi-phase competition tree."""

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
from typing import Dict, Optional

from gambitcompetition.builder.builder_phase import BuilderPhase
from gambitcompetition.constants import DISPATCH_METHOD_DEAL
from gambitcompetition.exceptions import (
    CompetitionRuntimeException,
    PlayerCountException,
)
from gambitcompetition.models.competition.competition import Roster, normalize_roster
from gambitcompetition.rating import RatingAccess
from gambitcompetition.tree.tree import CompetitionTree
from gambitcompetition.type_hints import TeamComposition
from gambitcompetition.utils import setup_logger

logger = setup_logger(__name__)


class BuilderTree:
    """Ordered phases of a tree, started as independent iterations.

    Example:
        >>> tree = BuilderTree("Cup")
        >>> groups = tree.add_phase("Groups")
        >>> _ = groups.add_group("round_robin", {"qualification_spots": 2})
        >>> _ = groups.add_group("round_robin", {"qualification_spots": 2})
        >>> final = tree.add_phase("Final")
        >>> _ = final.add_group("bracket")
        >>> iteration = tree.start_iteration(range(8), "2025")

    Attributes
    ----------
    name : str
        Tree name, prefix of iteration names.
    phases : dict of str to BuilderPhase
        Phases in declaration order.
    iterations : dict of str to CompetitionTree
        Started iterations by name.
    expected_players_count : int
        Informative player count, not enforced.
    """

    def __init__(self, name: str, expected_players_count: int = 0):
        self.name = name
        self.phases: Dict[str, BuilderPhase] = {}
        self.iterations: Dict[str, CompetitionTree] = {}
        self.expected_players_count = expected_players_count

    def __repr__(self) -> str:
        return f"BuilderTree({self.name!r}, phases={list(self.phases)})"

    # ========== Phases ==========

    def add_phase(self, name: str, dispatch_method: str = DISPATCH_METHOD_DEAL) -> BuilderPhase:
        phase = BuilderPhase(name, dispatch_method)
        self.phases[name] = phase
        return phase

    def get_phase(self, name: str) -> Optional[BuilderPhase]:
        return self.phases.get(name)

    def get_phase_after(self, name: Optional[str]) -> Optional[BuilderPhase]:
        """Phase declared right after the named one, None if last or unknown."""
        names = list(self.phases)
        if name not in names:
            return None
        index = names.index(name) + 1
        if index >= len(names):
            return None
        return self.phases[names[index]]

    def compute_min_players_count(self) -> int:
        """Players needed by the most demanding phase."""
        return max(
            (phase.compute_min_players_count() for phase in self.phases.values()),
            default=0,
        )

    # ========== Iterations ==========

    def start_iteration(
        self,
        players: Roster,
        iteration_name: str = "",
        rng: Optional[random.Random] = None,
        rating_access: Optional[RatingAccess] = None,
        team_composition: Optional[TeamComposition] = None,
    ) -> CompetitionTree:
        """Start a new tree for a roster, and its first phase.

        Raises:
            CompetitionRuntimeException: If no phase is declared
            PlayerCountException: If players are fewer than the most
                demanding phase requires
        """
        if not self.phases:
            raise CompetitionRuntimeException(f"Cannot start tree {self.name}: no phase declared")
        roster = normalize_roster(players)
        min_players = self.compute_min_players_count()
        if len(roster) < min_players:
            raise PlayerCountException("to start tree", min_players)

        iteration = CompetitionTree(
            self, roster, iteration_name, rng, rating_access, team_composition
        )
        self.iterations[iteration_name] = iteration
        logger.info(f"Started tree {iteration.name} with {len(roster)} players")
        return iteration

    def get_iteration(self, iteration_name: str = "") -> Optional[CompetitionTree]:
        return self.iterations.get(iteration_name)
