"""CompetitionConfig data class."""

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

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from gambitcompetition.constants import (
    COMMON_OPTIONS,
    COMPETITION_BRACKET,
    COMPETITION_ELIMINATION_CONTEST,
    COMPETITION_OPTIONS,
    COMPETITION_RACE,
    COMPETITION_ROUND_ROBIN,
    COMPETITION_SWISS,
    COMPETITION_TYPES,
    MIN_PLAYER_COUNT,
    SWISS_MIN_ROUND_COUNT,
)
from gambitcompetition.exceptions import (
    BuilderOptionException,
    CompetitionTypeException,
    ParameterException,
    PerformanceToSumException,
    PlayerCountException,
    RoundCountException,
)
from gambitcompetition.utils.validation import (
    validate_count,
    validate_count_list,
    validate_name_list,
)


@dataclass
class CompetitionConfig:
    """Competition configuration settings.

    Only options listed for the competition type in
    ``constants.COMPETITION_OPTIONS`` (plus the common ones) are meaningful,
    others keep their defaults.

    Attributes
    ----------
    competition_type : str
        One of ``constants.COMPETITION_TYPES``.
    qualification_spots : int
        Number of players qualified at the end, from the top.
    elimination_spots : int
        Number of players eliminated at the end, from the bottom.
    performance_types_to_rank : list of str
        Performance types compared as tie-breaks, in order.
    serie_count : int
        Round-robin: number of times each pair meets.
    shuffle_calendar : bool
        Round-robin: shuffle rounds within each series.
    round_count : int or None
        Swiss and race: number of rounds.
    best_seed_always_home : bool
        Bracket: list the better seed as home player.
    pre_round_shuffle : bool
        Bracket: shuffle players before pairing each round.
    performance_types_to_sum : list of str
        Elimination contest: performance types summed to rank a round.
    player_passing_count : list of int
        Elimination contest: players kept after each round.
    player_eliminated_per_round : int
        Elimination contest: players cut after each round, used when no
        passing counts are given.
    """

    competition_type: str
    qualification_spots: int = 0
    elimination_spots: int = 0
    performance_types_to_rank: List[str] = field(default_factory=list)
    serie_count: int = 1
    shuffle_calendar: bool = False
    round_count: Optional[int] = None
    best_seed_always_home: bool = False
    pre_round_shuffle: bool = False
    performance_types_to_sum: List[str] = field(default_factory=list)
    player_passing_count: List[int] = field(default_factory=list)
    player_eliminated_per_round: int = 0

    @property
    def min_player_count(self) -> int:
        return MIN_PLAYER_COUNT.get(self.competition_type, 0)

    @staticmethod
    def supported_options(competition_type: str) -> List[str]:
        """Option names accepted by a competition type.

        Raises:
            CompetitionTypeException: If the type is unknown
        """
        if competition_type not in COMPETITION_TYPES:
            raise CompetitionTypeException(competition_type)
        return COMMON_OPTIONS + COMPETITION_OPTIONS[competition_type]

    # ========== Validation ==========

    def validate(self, player_count: Optional[int] = None) -> None:
        """Check options, and their consistency with a player count if given.

        Raises:
            CompetitionTypeException: Unknown competition type
            ParameterException: Invalid option value
            PlayerCountException: Not enough players for this configuration
        """
        if self.competition_type not in COMPETITION_TYPES:
            raise CompetitionTypeException(self.competition_type)

        validate_count(self.qualification_spots).raise_for("qualification spots")
        validate_count(self.elimination_spots).raise_for("elimination spots")
        validate_name_list(self.performance_types_to_rank).raise_for(
            "performance types to rank"
        )

        if self.competition_type == COMPETITION_ROUND_ROBIN:
            if self.serie_count < 1:
                self.serie_count = 1
        elif self.competition_type == COMPETITION_SWISS:
            if self.round_count is None or self.round_count < SWISS_MIN_ROUND_COUNT:
                raise RoundCountException("to create competition", SWISS_MIN_ROUND_COUNT)
        elif self.competition_type == COMPETITION_RACE:
            if self.round_count is None:
                self.round_count = 1
            validate_count(self.round_count, minimum=1).raise_for("round count")
        elif self.competition_type == COMPETITION_ELIMINATION_CONTEST:
            if not self.performance_types_to_sum:
                raise PerformanceToSumException()
            validate_name_list(self.performance_types_to_sum, required=True).raise_for(
                "performance types to sum"
            )
            if self.player_passing_count:
                start_from = player_count if player_count is not None else float("inf")
                validate_count_list(self.player_passing_count, start_from).raise_for(
                    "player passing count"
                )
            else:
                validate_count(self.player_eliminated_per_round, minimum=1).raise_for(
                    "player eliminated per round"
                )

        if player_count is None:
            return

        if player_count < self.min_player_count:
            raise PlayerCountException("to create competition", self.min_player_count)
        if self.competition_type == COMPETITION_SWISS and self.round_count >= player_count:
            raise PlayerCountException(
                "to create competition with more rounds than players",
                self.round_count + 1,
            )
        if self.qualification_spots + self.elimination_spots > player_count:
            raise ParameterException(
                f"plus elimination spots cannot exceed player count ({player_count})",
                "qualification spots",
            )

    # ========== Conversion ==========

    @classmethod
    def from_options(
        cls, competition_type: str, options: Optional[Dict[str, Any]] = None
    ) -> "CompetitionConfig":
        """Build a configuration from a type tag and plain options.

        Raises:
            CompetitionTypeException: If the type is unknown
            BuilderOptionException: If an option is not supported by the type
        """
        options = dict(options or {})
        supported = cls.supported_options(competition_type)
        for option in options:
            if option not in supported:
                raise BuilderOptionException(option, competition_type)
        for list_option in (
            "performance_types_to_rank",
            "performance_types_to_sum",
            "player_passing_count",
        ):
            if list_option in options and options[list_option] is not None:
                options[list_option] = list(options[list_option])
        return cls(competition_type=competition_type, **options)

    def copy(self) -> "CompetitionConfig":
        return replace(
            self,
            performance_types_to_rank=list(self.performance_types_to_rank),
            performance_types_to_sum=list(self.performance_types_to_sum),
            player_passing_count=list(self.player_passing_count),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary, with only supported options."""
        data: Dict[str, Any] = {"competition_type": self.competition_type}
        for option in self.supported_options(self.competition_type):
            value = getattr(self, option)
            data[option] = list(value) if isinstance(value, list) else value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompetitionConfig":
        """Deserialize configuration from dictionary."""
        options = {key: value for key, value in data.items() if key != "competition_type"}
        return cls.from_options(data["competition_type"], options)
