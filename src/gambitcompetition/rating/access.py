"""Rating capability supplied by the caller."""

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

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Union

from gambitcompetition.constants import DEFAULT_ELO_RATING
from gambitcompetition.type_hints import PlayerKey


@dataclass(frozen=True)
class Rating:
    """Rating of a player.

    Attributes
    ----------
    value : float
        Elo rating value.
    games : int
        Number of rated games the value accounts for.
    """

    value: float = DEFAULT_ELO_RATING
    games: int = 0


class RatingAccess(ABC):
    """Adapter between competitions and wherever player ratings are stored.

    A competition built without a rating access does not track ratings.
    """

    @abstractmethod
    def get_rating(self, player_key: PlayerKey) -> Optional[Rating]:
        """Get the current rating of a player, None if unknown."""

    @abstractmethod
    def set_rating(self, player_key: PlayerKey, rating: Rating) -> bool:
        """Store a new rating for a player.

        Returns:
            True if stored, False if the player is unknown to the storage
        """


class InMemoryRatings(RatingAccess):
    """Ratings kept in a plain dictionary.

    Args:
        ratings: Initial player key to rating (a Rating or a bare value)
        default: Rating value given to players without one, None to leave
            them unrated
    """

    def __init__(
        self,
        ratings: Optional[Mapping[PlayerKey, Union[Rating, float]]] = None,
        default: Optional[float] = None,
    ):
        self._ratings: Dict[PlayerKey, Rating] = {}
        self.default = default
        for player_key, rating in (ratings or {}).items():
            if not isinstance(rating, Rating):
                rating = Rating(value=rating)
            self._ratings[player_key] = rating

    def get_rating(self, player_key: PlayerKey) -> Optional[Rating]:
        rating = self._ratings.get(player_key)
        if rating is None and self.default is not None:
            return Rating(value=self.default)
        return rating

    def set_rating(self, player_key: PlayerKey, rating: Rating) -> bool:
        self._ratings[player_key] = rating
        return True

    def as_dict(self) -> Dict[PlayerKey, float]:
        return {key: rating.value for key, rating in self._ratings.items()}
