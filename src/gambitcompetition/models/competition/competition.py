"""Main Competition class - orchestrates calendar, results and rankings.

This is the primary interface for a single competition, coordinating the
calendar manager and the ranking recorder behind one API.
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

import random
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    Hashable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from gambitcompetition.constants import (
    COMPETITION_BRACKET,
    COMPETITION_ELIMINATION_CONTEST,
    COMPETITION_ROUND_ROBIN,
)
from gambitcompetition.controllers.competition import CalendarManager, RankingRecorder
from gambitcompetition.exceptions import ParameterException
from gambitcompetition.models.competition.competition_config import CompetitionConfig
from gambitcompetition.models.game import Game
from gambitcompetition.models.ranking import RankingEntry
from gambitcompetition.rating import EloCalculator, Rating, RatingAccess
from gambitcompetition.type_hints import PlayerKey, TeamComposition, TeamKey
from gambitcompetition.utils import setup_logger

logger = setup_logger(__name__)

Roster = Union[Mapping[PlayerKey, Any], Sequence[PlayerKey]]


def normalize_roster(players: Roster) -> Dict[PlayerKey, Any]:
    """Turn a roster into an ordered key to player data mapping.

    A sequence of keys gives each key as its own data.

    Raises:
        ParameterException: If a sequence holds the same key twice
    """
    if isinstance(players, Mapping):
        return dict(players)
    roster: Dict[PlayerKey, Any] = {}
    for player_key in players:
        if player_key in roster:
            raise ParameterException(
                f"cannot contain the same key twice ({player_key!r})", "players"
            )
        roster[player_key] = player_key
    return roster


class Competition:
    """A competition among a fixed roster of players.

    The competition type tag of the configuration selects how the calendar
    is generated and which ranking kind is used. Seeds follow roster order.

    Games notify their competition when a result is recorded: rankings are
    updated inline and dependent rounds are created as soon as possible.

    Args:
        players: Roster, mapping key to player data or sequence of keys
        config: Competition configuration
        rng: Random source for every random step, a new one if not given
        rating_access: Where to read and write ratings, None to not rate
        team_composition: Team key to member player keys
        elo_calculator: Rating update math, default Elo if not given

    Raises:
        PlayerCountException: Not enough players
        ParameterException: Invalid option
        CompetitionRuntimeException: Bracket size not a power of 2
    """

    def __init__(
        self,
        players: Roster,
        config: CompetitionConfig,
        rng: Optional[random.Random] = None,
        rating_access: Optional[RatingAccess] = None,
        team_composition: Optional[TeamComposition] = None,
        elo_calculator: Optional[EloCalculator] = None,
    ) -> None:
        roster = normalize_roster(players)
        config = config.copy()
        config.validate(len(roster))

        self.config = config
        self.rng = rng or random.Random()
        self.players: Dict[PlayerKey, Any] = roster
        self.player_count = len(roster)
        self.team_composition: TeamComposition = {
            team: list(members) for team, members in (team_composition or {}).items()
        }
        self._seeds = MappingProxyType(
            {player_key: index + 1 for index, player_key in enumerate(roster)}
        )
        self._keys_by_seed = {seed: key for key, seed in self._seeds.items()}

        self.round_count = 0
        self.calendar: Dict[int, List[Game]] = {}
        self._games: List[Game] = []
        self._next_index = 0
        self._elimination_round: Dict[PlayerKey, int] = {}

        self.ranking_recorder = RankingRecorder(
            config.competition_type, rating_access, elo_calculator
        )
        self.rankings_holder = self.ranking_recorder.create_holder(
            config.performance_types_to_rank
        )
        for player_key, seed in self._seeds.items():
            self.rankings_holder.add_ranking(player_key, seed)
        self.rankings_holder.compute_rankings_order()

        self.calendar_manager = CalendarManager(self)
        self.calendar_manager.generate_calendar()
        self.update_games_played()
        logger.info(
            f"Created {config.competition_type} competition with "
            f"{self.player_count} players"
        )

    def __repr__(self) -> str:
        return (
            f"Competition({self.competition_type}, {self.player_count} players, "
            f"{self.get_games_completed_count()}/{self.get_game_count()} games played)"
        )

    # ========== Properties ==========

    @property
    def competition_type(self) -> str:
        return self.config.competition_type

    @property
    def rating_access(self) -> Optional[RatingAccess]:
        return self.ranking_recorder.rating_access

    @property
    def is_using_ratings(self) -> bool:
        return self.rating_access is not None

    @property
    def seeds(self) -> Mapping[PlayerKey, int]:
        """Read-only player key to seed mapping."""
        return self._seeds

    @property
    def qualification_spots(self) -> int:
        return self.config.qualification_spots

    @property
    def elimination_spots(self) -> int:
        return self.config.elimination_spots

    @property
    def current_round(self) -> int:
        """Round of the next game to play, -1 when completed."""
        next_game = self.get_next_game()
        return next_game.round_number if next_game else -1

    # ========== Players and teams ==========

    def get_players(self, ranked: bool = False) -> Dict[PlayerKey, Any]:
        """Player key to data, in seed order or in ranking order."""
        if not ranked:
            return dict(self.players)
        return {
            entry.entity_key: self.players[entry.entity_key]
            for entry in self.get_rankings()
            if entry.entity_key in self.players
        }

    def get_player(self, player_key: PlayerKey) -> Any:
        return self.players.get(player_key)

    def get_player_seed(self, player_key: PlayerKey) -> int:
        """Seed of a player, 0 if not found."""
        return self._seeds.get(player_key, 0)

    def get_player_key_on_seed(self, seed: int) -> Optional[PlayerKey]:
        return self._keys_by_seed.get(seed)

    def get_player_keys_seeded(self) -> List[PlayerKey]:
        return [self._keys_by_seed[seed] for seed in sorted(self._keys_by_seed)]

    @property
    def team_count(self) -> int:
        return len(self.team_composition)

    def get_team_seed(self, team_key: TeamKey) -> int:
        """Position of a team in the composition, 0 if not found."""
        for index, key in enumerate(self.team_composition):
            if key == team_key:
                return index + 1
        return 0

    def get_team_key_on_seed(self, seed: int) -> Optional[TeamKey]:
        teams = list(self.team_composition)
        if 1 <= seed <= len(teams):
            return teams[seed - 1]
        return None

    def get_player_keys_in_team(self, team_key: TeamKey) -> List[PlayerKey]:
        return list(self.team_composition.get(team_key, []))

    def is_team_having_players(self, team_key: TeamKey) -> bool:
        """Whether a team has at least one member in this competition."""
        return any(key in self.players for key in self.get_player_keys_in_team(team_key))

    # ========== Calendar ==========

    def add_round(self, round_number: int, games: Sequence[Game]) -> None:
        """Place games in the calendar, numbering them after existing ones."""
        round_games = self.calendar.setdefault(round_number, [])
        for game in games:
            game.round_number = round_number
            game.affect_to(self, len(self._games) + 1)
            self._games.append(game)
            round_games.append(game)

    def get_game_count(self) -> int:
        return len(self._games)

    def get_games(self) -> List[Game]:
        return list(self._games)

    def get_game_by_number(self, game_number: int) -> Optional[Game]:
        if 1 <= game_number <= len(self._games):
            return self._games[game_number - 1]
        return None

    def get_games_by_round(self, round_number: int) -> List[Game]:
        return list(self.calendar.get(round_number, []))

    def get_game_round(self, game_number: int) -> Optional[int]:
        game = self.get_game_by_number(game_number)
        return game.round_number if game else None

    def rename_games(self, names: Sequence[str]) -> None:
        """Give names to games, in game number order."""
        for game, name in zip(self._games, names):
            game.name = name

    def get_min_game_count_by_player(self) -> int:
        if self.competition_type in (COMPETITION_BRACKET, COMPETITION_ELIMINATION_CONTEST):
            return 1
        return self.get_max_game_count_by_player()

    def get_max_game_count_by_player(self, player_key: Optional[PlayerKey] = None) -> int:
        """Most games a player can play, lower once eliminated."""
        elimination_round = 0
        if player_key is not None:
            elimination_round = self.get_player_elimination_round(player_key)
        count = elimination_round or self.round_count
        if self.competition_type == COMPETITION_ROUND_ROBIN and self.player_count % 2:
            # One idle round per series
            count -= self.config.serie_count
        return count

    def set_player_elimination_round(self, player_key: PlayerKey, round_number: int) -> None:
        self._elimination_round[player_key] = round_number

    def get_player_elimination_round(self, player_key: PlayerKey) -> int:
        """Round a player was eliminated at, 0 if still running."""
        return self._elimination_round.get(player_key, 0)

    # ========== Progress ==========

    def update_games_played(self) -> None:
        """Record played games, in game number order, and extend the calendar.

        Only the contiguous run of played games after the last recorded one
        is recorded. When every game is played, rounds depending on results
        are created; a bye created this way is already played, so the loop
        goes on until a game is waiting or the calendar is complete.
        """
        while True:
            start = self._next_index
            while self._next_index < len(self._games):
                game = self._games[self._next_index]
                if not game.is_played:
                    break
                self.ranking_recorder.record_game(self.rankings_holder, game)
                self._next_index += 1
            if self._next_index != start:
                self.rankings_holder.compute_rankings_order()
                logger.debug(f"Recorded games {start + 1} to {self._next_index}")
            if self._next_index < len(self._games):
                return
            if not self.calendar_manager.extend_calendar():
                return

    def get_next_game(self) -> Optional[Game]:
        """Next game to play, None when completed."""
        self.update_games_played()
        if self._next_index < len(self._games):
            return self._games[self._next_index]
        return None

    def is_completed(self) -> bool:
        return self.get_next_game() is None and bool(self._games)

    def get_games_completed_count(self) -> int:
        self.update_games_played()
        return self._next_index

    def get_games_to_play_count(self) -> int:
        return self.get_game_count() - self.get_games_completed_count()

    # ========== Rankings ==========

    def get_rankings(self, by_expenses: bool = False) -> List[RankingEntry]:
        if by_expenses:
            return self.rankings_holder.get_rankings_by_expenses()
        return self.rankings_holder.get_rankings()

    def get_player_ranking(self, player_key: PlayerKey) -> Optional[RankingEntry]:
        return self.rankings_holder.get_ranking(player_key)

    def get_player_rank(self, player_key: PlayerKey) -> int:
        return self.rankings_holder.get_entity_rank(player_key)

    def get_team_rankings(self) -> List[RankingEntry]:
        """Rankings of teams having at least one member in this competition."""
        return self.rankings_holder.get_team_rankings(self.team_composition)

    def get_team_rank(self, team_key: TeamKey) -> int:
        for index, entry in enumerate(self.get_team_rankings()):
            if entry.entity_key == team_key:
                return index + 1
        return 0

    # ========== Spots ==========

    def _keys_of(self, entries: Sequence[RankingEntry]) -> List[PlayerKey]:
        return [entry.entity_key for entry in entries if entry.entity_key is not None]

    def get_player_keys_for_qualification(self) -> List[PlayerKey]:
        return self._keys_of(self.get_rankings()[: self.qualification_spots])

    def get_player_keys_for_elimination(self) -> List[PlayerKey]:
        if self.elimination_spots == 0:
            return []
        return self._keys_of(self.get_rankings()[-self.elimination_spots :])

    def get_player_keys_for_stagnation(self) -> List[PlayerKey]:
        stagnation_count = (
            self.player_count - self.qualification_spots - self.elimination_spots
        )
        if stagnation_count <= 0:
            return []
        start = self.qualification_spots
        return self._keys_of(self.get_rankings()[start : start + stagnation_count])

    def get_first_elimination_rank(self) -> int:
        return self.player_count - self.elimination_spots + 1

    # ========== Reachability ==========

    def _can_ranking_reach_ranking(self, entry_a: RankingEntry, entry_b: RankingEntry) -> bool:
        """Whether A can still score at least as many points as B."""
        if self.get_player_elimination_round(entry_a.entity_key) > 0:
            return False
        max_points = self.ranking_recorder.max_points_for_a_game(self.rankings_holder)
        if max_points == -1:
            return True
        min_points = self.ranking_recorder.min_points_for_a_game(
            self.rankings_holder, self.player_count
        )
        to_play_a = self.get_max_game_count_by_player(entry_a.entity_key) - entry_a.played
        to_play_b = self.get_max_game_count_by_player(entry_b.entity_key) - entry_b.played
        best_a = entry_a.points + max(0, to_play_a) * max_points
        worst_b = entry_b.points + max(0, to_play_b) * min_points
        return best_a >= worst_b

    def can_player_reach_rank(self, player_key: PlayerKey, rank: int) -> bool:
        rank_entry = self.rankings_holder.get_rank(rank)
        player_entry = self.get_player_ranking(player_key)
        if rank_entry is None or player_entry is None:
            return False
        return self._can_ranking_reach_ranking(player_entry, rank_entry)

    def can_player_drop_to_rank(self, player_key: PlayerKey, rank: int) -> bool:
        rank_entry = self.rankings_holder.get_rank(rank)
        player_entry = self.get_player_ranking(player_key)
        if rank_entry is None or player_entry is None:
            return False
        return self._can_ranking_reach_ranking(rank_entry, player_entry)

    def can_player_win(self, player_key: PlayerKey) -> bool:
        return self.can_player_reach_rank(player_key, 1)

    def can_player_lose(self, player_key: PlayerKey) -> bool:
        return self.can_player_drop_to_rank(player_key, 2)

    def can_player_be_last(self, player_key: PlayerKey) -> bool:
        return self.can_player_drop_to_rank(player_key, self.player_count)

    def get_player_max_reachable_rank(self, player_key: PlayerKey) -> int:
        """Best rank a player can still reach, 0 if not found."""
        if self.can_player_win(player_key):
            return 1
        player_rank = self.get_player_rank(player_key)
        if not player_rank:
            return 0
        for rank in range(player_rank - 1, 1, -1):
            if not self.can_player_reach_rank(player_key, rank):
                return rank + 1
        return min(player_rank, 2)

    def get_player_max_droppable_rank(self, player_key: PlayerKey) -> int:
        """Worst rank a player can still drop to, 0 if not found."""
        if self.can_player_be_last(player_key):
            return self.player_count
        player_rank = self.get_player_rank(player_key)
        if not player_rank:
            return 0
        for rank in range(player_rank + 1, self.player_count):
            if not self.can_player_drop_to_rank(player_key, rank):
                return rank - 1
        return max(player_rank, self.player_count - 1)

    def can_player_reach_seed(self, player_key: PlayerKey, seed: int) -> bool:
        """Whether enough games remain to climb from current rank to a seed."""
        entry = self.get_player_ranking(player_key)
        if entry is None:
            return False
        to_play = self.get_max_game_count_by_player(player_key) - entry.played
        return to_play >= self.get_player_rank(player_key) - seed

    def can_player_drop_to_seed(self, player_key: PlayerKey, seed: int) -> bool:
        """Whether enough games remain to fall from current rank to a seed."""
        entry = self.get_player_ranking(player_key)
        if entry is None:
            return False
        to_play = self.get_max_game_count_by_player(player_key) - entry.played
        return to_play >= seed - self.get_player_rank(player_key)

    # ========== Ratings ==========

    def get_player_rating(self, player_key: PlayerKey) -> Optional[Rating]:
        if self.rating_access is None:
            return None
        return self.rating_access.get_rating(player_key)

    def get_team_rating(self, team_key: TeamKey) -> Optional[Rating]:
        """Average rating of team members, None if any member is unrated."""
        member_keys = self.get_player_keys_in_team(team_key)
        if self.rating_access is None or not member_keys:
            return None
        ratings = [self.get_player_rating(key) for key in member_keys]
        if any(rating is None for rating in ratings):
            return None
        return Rating(value=sum(rating.value for rating in ratings) / len(ratings))

    def get_rating_rankings(self) -> List[Tuple[PlayerKey, Rating]]:
        """Rated players from best to worst rating, seed order on ties."""
        if self.rating_access is None:
            return []
        rated = []
        for player_key in self.get_player_keys_seeded():
            rating = self.get_player_rating(player_key)
            if rating is not None:
                rated.append((player_key, rating))
        return sorted(rated, key=lambda item: item[1].value, reverse=True)

    def get_team_rating_rankings(self) -> List[Tuple[Hashable, Rating]]:
        if self.rating_access is None:
            return []
        rated = []
        for team_key in self.team_composition:
            rating = self.get_team_rating(team_key)
            if rating is not None:
                rated.append((team_key, rating))
        return sorted(rated, key=lambda item: item[1].value, reverse=True)

    # ========== Copy ==========

    def new_competition_with_same_players(self, ranked: bool = False) -> "Competition":
        """New competition with the same configuration and roster.

        Args:
            ranked: Seed players in current ranking order instead of seed order
        """
        return Competition(
            self.get_players(ranked),
            self.config,
            rng=self.rng,
            rating_access=self.rating_access,
            team_composition=self.team_composition,
            elo_calculator=self.ranking_recorder.elo_calculator,
        )
