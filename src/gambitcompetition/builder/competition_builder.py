"""Blueprint of one competition, instantiated once per roster."""

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
from typing import Any, Dict, Optional

from gambitcompetition.models.competition.competition import Competition, Roster
from gambitcompetition.models.competition.competition_config import CompetitionConfig
from gambitcompetition.rating import RatingAccess
from gambitcompetition.type_hints import TeamComposition


class CompetitionBuilder:
    """A competition type with its options, ready to be built for players.

    Options are checked against the type when the builder is created, so a
    typo fails at declaration time rather than when a phase starts.

    Raises:
        CompetitionTypeException: Unknown type
        BuilderOptionException: Option not supported by the type
        ParameterException: Invalid option value
    """

    def __init__(
        self,
        competition_type: str,
        options: Optional[Dict[str, Any]] = None,
        name: str = "",
    ):
        self.config = CompetitionConfig.from_options(competition_type, options)
        self.config.validate()
        self.name = name

    def __repr__(self) -> str:
        return f"CompetitionBuilder({self.competition_type!r}, name={self.name!r})"

    @property
    def competition_type(self) -> str:
        return self.config.competition_type

    @property
    def options(self) -> Dict[str, Any]:
        options = self.config.to_dict()
        del options["competition_type"]
        return options

    @property
    def min_players_required(self) -> int:
        return self.config.min_player_count

    @property
    def qualification_spots(self) -> int:
        return self.config.qualification_spots

    @property
    def elimination_spots(self) -> int:
        return self.config.elimination_spots

    def copy(self, name: Optional[str] = None) -> "CompetitionBuilder":
        builder = CompetitionBuilder(self.competition_type, self.options, self.name)
        if name is not None:
            builder.name = name
        return builder

    def build_for_players(
        self,
        players: Roster,
        rng: Optional[random.Random] = None,
        rating_access: Optional[RatingAccess] = None,
        team_composition: Optional[TeamComposition] = None,
    ) -> Competition:
        return Competition(
            players,
            self.config,
            rng=rng,
            rating_access=rating_access,
            team_composition=team_composition,
        )
