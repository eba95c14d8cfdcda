"""Calendar management for competitions.

This module handles calendar generation for every competition type and
the lazy creation of rounds that depend on previous results.
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

from typing import TYPE_CHECKING, List, Sequence

from gambitcompetition.constants import (
    COMPETITION_BRACKET,
    COMPETITION_ELIMINATION_CONTEST,
    COMPETITION_RACE,
    COMPETITION_ROUND_ROBIN,
    COMPETITION_SWISS,
)
from gambitcompetition.exceptions import CompetitionTypeException
from gambitcompetition.models.game import GameDuel, GamePerformances, GameRace
from gambitcompetition.pairing import (
    bracket_round_count,
    check_power_of_two,
    compute_round_count,
    create_swiss_pairings,
    generate_duel_table,
    generate_round_robin_calendar,
    get_round_winners,
    players_count_to_pass_round,
    split_survivors,
)
from gambitcompetition.type_hints import MaybePlayerKey, PlayerKey
from gambitcompetition.utils import setup_logger
from gambitcompetition.utils.sequence import chunk_pairs, shuffled

if TYPE_CHECKING:
    from gambitcompetition.models.competition.competition import Competition

logger = setup_logger(__name__)


class CalendarManager:
    """Generates and extends the calendar of a competition.

    This class is responsible for:
    - Generating the initial calendar according to the competition type
    - Creating the next round when the previous one is complete
      (Swiss, bracket and elimination contest)
    - Marking players eliminated by the round they lost

    Round-robin and race calendars are complete from the start.
    """

    def __init__(self, competition: "Competition"):
        self.competition = competition
        self.competition_type = competition.config.competition_type

    @property
    def last_round(self) -> int:
        calendar = self.competition.calendar
        return max(calendar) if calendar else 0

    def generate_calendar(self) -> None:
        """Generate the first rounds and set the round count.

        Raises:
            CompetitionRuntimeException: Bracket player count not a power of 2
            CompetitionTypeException: Unknown competition type
        """
        config = self.competition.config
        if self.competition_type == COMPETITION_ROUND_ROBIN:
            self._generate_round_robin()
        elif self.competition_type == COMPETITION_SWISS:
            self.competition.round_count = config.round_count
            self._generate_swiss_round(1)
        elif self.competition_type == COMPETITION_BRACKET:
            self._generate_bracket()
        elif self.competition_type == COMPETITION_ELIMINATION_CONTEST:
            self.competition.round_count = compute_round_count(
                self.competition.player_count,
                config.player_passing_count,
                config.player_eliminated_per_round,
            )
            self._add_elimination_game(1, self.competition.get_player_keys_seeded())
        elif self.competition_type == COMPETITION_RACE:
            self._generate_race()
        else:
            raise CompetitionTypeException(self.competition_type)
        logger.info(
            f"Generated {self.competition_type} calendar: "
            f"{self.competition.round_count} rounds planned, "
            f"{self.competition.get_game_count()} games created"
        )

    def extend_calendar(self) -> bool:
        """Create the next round once every game of the last one is played.

        Returns:
            True if a round was added, False if the calendar is complete
        """
        if self.competition_type == COMPETITION_SWISS:
            if self.last_round >= self.competition.round_count:
                return False
            self._generate_swiss_round(self.last_round + 1)
            return True
        elif self.competition_type == COMPETITION_BRACKET:
            return self._extend_bracket()
        elif self.competition_type == COMPETITION_ELIMINATION_CONTEST:
            return self._extend_elimination_contest()
        return False

    # ========== Round-robin ==========

    def _generate_round_robin(self) -> None:
        config = self.competition.config
        seed_calendar = generate_round_robin_calendar(
            self.competition.player_count,
            serie_count=config.serie_count,
            shuffle=config.shuffle_calendar,
            rng=self.competition.rng,
        )
        key_on_seed = self.competition.get_player_key_on_seed
        for round_number in sorted(seed_calendar):
            games = [
                GameDuel(key_on_seed(home), key_on_seed(away))
                for home, away in seed_calendar[round_number]
            ]
            self.competition.add_round(round_number, games)
        self.competition.round_count = len(seed_calendar)

    # ========== Swiss ==========

    def _generate_swiss_round(self, round_number: int) -> None:
        rankings = self.competition.rankings_holder.get_rankings()
        pairings, bye_key = create_swiss_pairings(rankings)
        games = []
        if bye_key is not None:
            bye_game = GameDuel(bye_key, None)
            bye_game.set_end_of_bye()
            games.append(bye_game)
        games.extend(GameDuel(home, away) for home, away in pairings)
        self.competition.add_round(round_number, games)
        logger.info(f"Swiss round {round_number} paired: {len(pairings)} games")

    # ========== Bracket ==========

    def _create_bracket_game(self, key_home: PlayerKey, key_away: MaybePlayerKey) -> GameDuel:
        if key_away is not None and self.competition.config.best_seed_always_home:
            seed_home = self.competition.get_player_seed(key_home)
            seed_away = self.competition.get_player_seed(key_away)
            if seed_away < seed_home:
                key_home, key_away = key_away, key_home
        return GameDuel(key_home, key_away)

    def _add_bracket_round(self, round_number: int, player_keys: Sequence[PlayerKey]) -> None:
        if self.competition.config.pre_round_shuffle:
            player_keys = shuffled(player_keys, self.competition.rng)
        check_power_of_two(len(player_keys), round_number)
        games = [
            self._create_bracket_game(home, away)
            for home, away in chunk_pairs(list(player_keys))
        ]
        self.competition.add_round(round_number, games)

    def _generate_bracket(self) -> None:
        player_count = self.competition.player_count
        check_power_of_two(player_count, 1)
        self.competition.round_count = bracket_round_count(player_count)
        if self.competition.config.pre_round_shuffle:
            self._add_bracket_round(1, self.competition.get_player_keys_seeded())
            return
        key_on_seed = self.competition.get_player_key_on_seed
        games = [
            self._create_bracket_game(key_on_seed(home), key_on_seed(away))
            for home, away in generate_duel_table(player_count)
        ]
        self.competition.add_round(1, games)

    def _extend_bracket(self) -> bool:
        round_number = self.last_round
        winners, losers = get_round_winners(self.competition.get_games_by_round(round_number))
        for loser in losers:
            self.competition.set_player_elimination_round(loser, round_number)
        if len(winners) <= 1:
            return False
        self._add_bracket_round(round_number + 1, winners)
        logger.info(f"Bracket round {round_number + 1} created with {len(winners)} players")
        return True

    # ========== Elimination contest ==========

    def _add_elimination_game(self, round_number: int, player_keys: List[PlayerKey]) -> None:
        game = GamePerformances(
            player_keys, self.competition.config.performance_types_to_sum
        )
        self.competition.add_round(round_number, [game])

    def _extend_elimination_contest(self) -> bool:
        config = self.competition.config
        last_round = self.last_round
        kept = players_count_to_pass_round(
            last_round,
            self.competition.player_count,
            self.competition.round_count,
            config.player_passing_count,
            config.player_eliminated_per_round,
        )
        if kept < 1:
            return False
        last_game = self.competition.get_games_by_round(last_round)[0]
        survivors, eliminated = split_survivors(last_game.get_ordered_keys(), kept)
        for player_key in eliminated:
            self.competition.set_player_elimination_round(player_key, last_round)
        if last_round >= self.competition.round_count:
            # Cut of the final round, the survivor wins
            return False
        self._add_elimination_game(last_round + 1, survivors)
        logger.info(
            f"Elimination round {last_round + 1} created: {len(survivors)} players "
            f"continue, {len(eliminated)} eliminated"
        )
        return True

    # ========== Race ==========

    def _generate_race(self) -> None:
        player_keys = self.competition.get_player_keys_seeded()
        round_count = self.competition.config.round_count
        for round_number in range(1, round_count + 1):
            self.competition.add_round(round_number, [GameRace(player_keys)])
        self.competition.round_count = round_count
