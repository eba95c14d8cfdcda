"""Game between a home and an away player."""

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

from typing import List, Optional

from gambitcompetition.constants import RESULT_DRAWN, RESULT_LOSS, RESULT_WON
from gambitcompetition.exceptions import CompetitionRuntimeException
from gambitcompetition.models.game.base_game import Game
from gambitcompetition.type_hints import DuelResult, MaybePlayerKey, PlayerKey


class GameDuel(Game):
    """A duel between two players.

    A duel without away player is a bye: the home player wins it
    automatically once :meth:`set_end_of_bye` is called.

    Attributes
    ----------
    key_home : PlayerKey
        Home player.
    key_away : PlayerKey or None
        Away player, None for a bye.
    score_home, score_away : float
        Scores, if the outcome was recorded with :meth:`set_score`.
    """

    def __init__(self, key_home: PlayerKey, key_away: MaybePlayerKey = None):
        super().__init__()
        self.key_home = key_home
        self.key_away = key_away
        self.score_home: float = 0
        self.score_away: float = 0
        # From home point of view, None while unplayed
        self._home_result: Optional[DuelResult] = None

    def __repr__(self) -> str:
        away = "BYE" if self.is_bye else repr(self.key_away)
        return f"GameDuel({self.key_home!r} vs {away}, result={self._home_result})"

    @property
    def player_keys(self) -> List[PlayerKey]:
        if self.is_bye:
            return [self.key_home]
        return [self.key_home, self.key_away]

    @property
    def is_bye(self) -> bool:
        return self.key_away is None

    def reverse_home_away(self) -> None:
        """Swap home and away players of an unplayed game."""
        if self.is_played:
            raise CompetitionRuntimeException(
                f"Cannot reverse home and away on played game {self.game_number}"
            )
        if self.is_bye:
            return
        self.key_home, self.key_away = self.key_away, self.key_home

    # ========== Recording outcome ==========

    def set_score(self, score_home: float, score_away: float) -> None:
        """Record final scores, the result follows from them."""
        if self.is_bye:
            raise CompetitionRuntimeException("Cannot set a score on a bye game")
        self._check_not_played()
        self.score_home = score_home
        self.score_away = score_away
        if score_home > score_away:
            self._record(RESULT_WON)
        elif score_home < score_away:
            self._record(RESULT_LOSS)
        else:
            self._record(RESULT_DRAWN)

    def set_home_won(self) -> None:
        self._record(RESULT_WON)

    def set_away_won(self) -> None:
        if self.is_bye:
            raise CompetitionRuntimeException("Away player cannot win a bye game")
        self._record(RESULT_LOSS)

    def set_drawn(self) -> None:
        if self.is_bye:
            raise CompetitionRuntimeException("Cannot draw a bye game")
        self._record(RESULT_DRAWN)

    def set_end_of_bye(self) -> None:
        """End a bye game, as a win for the home player."""
        if not self.is_bye:
            raise CompetitionRuntimeException(
                f"Game {self.game_number} is not a bye game"
            )
        self._record(RESULT_WON)

    def _record(self, home_result: DuelResult) -> None:
        self._check_not_played()
        self._home_result = home_result
        self._set_ended()

    # ========== Reading outcome ==========

    def has_home_won(self) -> bool:
        return self._home_result == RESULT_WON

    def has_away_won(self) -> bool:
        return self._home_result == RESULT_LOSS

    def is_drawn(self) -> bool:
        return self._home_result == RESULT_DRAWN

    def get_player_result(self, player_key: PlayerKey) -> Optional[DuelResult]:
        """Get the result of a player in this game.

        Returns:
            'won', 'drawn' or 'loss', None if unplayed or player not found
        """
        if self._home_result is None:
            return None
        if player_key == self.key_home:
            return self._home_result
        if not self.is_bye and player_key == self.key_away:
            if self._home_result == RESULT_WON:
                return RESULT_LOSS
            if self._home_result == RESULT_LOSS:
                return RESULT_WON
            return RESULT_DRAWN
        return None

    def get_player_score(self, player_key: PlayerKey) -> float:
        if player_key == self.key_home:
            return self.score_home
        if player_key == self.key_away:
            return self.score_away
        return 0

    def get_opponent_key(self, player_key: PlayerKey) -> MaybePlayerKey:
        if player_key == self.key_home:
            return self.key_away
        if not self.is_bye and player_key == self.key_away:
            return self.key_home
        return None

    def get_winner_key(self) -> MaybePlayerKey:
        """Winner of the game, a drawn game counts as a home win."""
        if not self.is_played:
            return None
        return self.key_away if self.has_away_won() else self.key_home

    def get_loser_key(self) -> MaybePlayerKey:
        """Loser of the game, None for a bye or an unplayed game."""
        if not self.is_played:
            return None
        return self.key_home if self.has_away_won() else self.key_away
