"""Ranking and rating updates for played games.

This module turns each played game into ranking statistics and, when a
rating access is given, into new player ratings.
"""

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

from typing import List, Optional, Type

from gambitcompetition.constants import (
    COMPETITION_BRACKET,
    COMPETITION_ELIMINATION_CONTEST,
    COMPETITION_RACE,
    COMPETITION_ROUND_ROBIN,
    COMPETITION_SWISS,
    RESULT_DRAWN,
    RESULT_LOSS,
    RESULT_WON,
)
from gambitcompetition.exceptions import CompetitionTypeException
from gambitcompetition.models.game import Game, GameDuel, GamePerformances, GameRace
from gambitcompetition.models.ranking import (
    RankingDuel,
    RankingEntry,
    RankingPerformances,
    RankingRace,
    RankingsHolder,
)
from gambitcompetition.rating import EloCalculator, RatingAccess
from gambitcompetition.rating.elo import LOSS, TIE, WIN
from gambitcompetition.type_hints import PlayerKey
from gambitcompetition.utils import setup_logger

logger = setup_logger(__name__)

ELO_DUEL_SCORES = {
    RESULT_WON: WIN,
    RESULT_DRAWN: TIE,
    RESULT_LOSS: LOSS,
}


def ranking_class_for(competition_type: str) -> Type[RankingEntry]:
    """Ranking entry kind used by a competition type.

    Raises:
        CompetitionTypeException: If the type is unknown
    """
    if competition_type in (
        COMPETITION_ROUND_ROBIN,
        COMPETITION_SWISS,
        COMPETITION_BRACKET,
    ):
        return RankingDuel
    elif competition_type == COMPETITION_ELIMINATION_CONTEST:
        return RankingPerformances
    elif competition_type == COMPETITION_RACE:
        return RankingRace
    raise CompetitionTypeException(competition_type)


class RankingRecorder:
    """Records played games in rankings and ratings.

    This class is responsible for:
    - Building the rankings holder matching the competition type
    - Saving each played game in the entries of its players
    - Updating ratings through the rating access, if any
    - Knowing the points a game can bring, for reachability
    """

    def __init__(
        self,
        competition_type: str,
        rating_access: Optional[RatingAccess] = None,
        elo_calculator: Optional[EloCalculator] = None,
    ):
        self.competition_type = competition_type
        self.rating_access = rating_access
        self.elo_calculator = elo_calculator or EloCalculator()

    def create_holder(self, performance_types_to_rank: List[str]) -> RankingsHolder:
        holder = RankingsHolder(ranking_class_for(self.competition_type))
        for performance_type in performance_types_to_rank:
            holder.add_performance_type_to_rank(performance_type)
        return holder

    def record_game(self, holder: RankingsHolder, game: Game) -> None:
        """Save a played game in rankings, then update ratings.

        The caller recomputes the rankings order once a batch is recorded.
        """
        for player_key in game.player_keys:
            entry = holder.get_ranking(player_key)
            if entry is not None:
                entry.save_game(game)
        if self.rating_access is not None:
            self.update_ratings_for_game(game)

    # ========== Ratings ==========

    def update_ratings_for_game(self, game: Game) -> bool:
        """Update ratings of the players of a played game.

        Returns:
            True if ratings were updated, False if the game does not rate
            (unplayed, bye, or a player without rating)
        """
        if self.rating_access is None or not game.is_played:
            return False

        if isinstance(game, GameDuel):
            if game.is_bye:
                return False
            home = self.rating_access.get_rating(game.key_home)
            away = self.rating_access.get_rating(game.key_away)
            if home is None or away is None:
                logger.debug(f"Game {game.game_number} not rated: missing rating")
                return False
            home_score = ELO_DUEL_SCORES[game.get_player_result(game.key_home)]
            new_home, new_away = self.elo_calculator.duel(home, away, home_score)
            self.rating_access.set_rating(game.key_home, new_home)
            self.rating_access.set_rating(game.key_away, new_away)
            return True

        if isinstance(game, GameRace):
            ordered_keys = game.get_positions()
        elif isinstance(game, GamePerformances):
            ordered_keys = game.get_ordered_keys()
        else:
            return False
        return self._update_ordered(ordered_keys, game.game_number)

    def _update_ordered(self, ordered_keys: List[PlayerKey], game_number: int) -> bool:
        ratings = []
        for player_key in ordered_keys:
            rating = self.rating_access.get_rating(player_key)
            if rating is None:
                logger.debug(f"Game {game_number} not rated: missing rating")
                return False
            ratings.append(rating)
        for player_key, rating in zip(ordered_keys, self.elo_calculator.ordered(ratings)):
            self.rating_access.set_rating(player_key, rating)
        return True

    # ========== Points bounds ==========

    def max_points_for_a_game(self, holder: RankingsHolder) -> float:
        """Most points a single game can bring, -1 if unbounded."""
        if self.competition_type == COMPETITION_ELIMINATION_CONTEST:
            return -1
        elif self.competition_type == COMPETITION_RACE:
            points = holder.points_attribution.values()
            return max(points) if points else 0
        return holder.get_points_for_result(RESULT_WON)

    def min_points_for_a_game(self, holder: RankingsHolder, player_count: int) -> float:
        """Fewest points a single game can bring."""
        if self.competition_type == COMPETITION_ELIMINATION_CONTEST:
            return 0
        elif self.competition_type == COMPETITION_RACE:
            table = holder.points_attribution
            positions = range(1, player_count + 1)
            return min(table.get(position, 0) for position in positions)
        return holder.get_points_for_result(RESULT_LOSS)
