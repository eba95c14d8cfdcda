"""Selection rule composing the roster of a tree phase."""

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

from dataclasses import dataclass
from typing import List, Optional, Sequence, TypeVar

from gambitcompetition.constants import (
    PICKUP_METHOD_BY_GROUP,
    PICKUP_METHODS,
    PLAYER_PACKS,
)
from gambitcompetition.exceptions import ParameterException

T = TypeVar("T")


@dataclass(frozen=True)
class PlayerSelector:
    """Picks players from a previous phase for the next one.

    Attributes
    ----------
    phase_name : str
        Source phase. Empty (or unknown) means the last completed phase,
        or the unused pool when no phase is completed yet.
    player_pack : str
        ``qualified``, ``stagnation``, ``unused``, or empty for unused
        players followed by qualified ones.
    pickup_method : str
        Order of the pack, see ``constants.PICKUP_METHODS``.
    start_pick_at_rank : int
        1-based position of the first picked player, values below 1 become 1.
    selection_length : int
        Number of players picked, 0 (or any value below 1) picks them all.
    """

    phase_name: str = ""
    player_pack: str = ""
    pickup_method: str = PICKUP_METHOD_BY_GROUP
    start_pick_at_rank: int = 1
    selection_length: int = 0

    def __post_init__(self):
        if self.player_pack and self.player_pack not in PLAYER_PACKS:
            raise ParameterException(
                f"must be one of {PLAYER_PACKS} or empty, {self.player_pack!r} given",
                "player pack",
            )
        if self.pickup_method not in PICKUP_METHODS:
            raise ParameterException(
                f"must be one of {PICKUP_METHODS}, {self.pickup_method!r} given",
                "pickup method",
            )
        if self.start_pick_at_rank < 1:
            object.__setattr__(self, "start_pick_at_rank", 1)
        if self.selection_length < 1:
            object.__setattr__(self, "selection_length", 0)

    @property
    def is_windowed(self) -> bool:
        return self.start_pick_at_rank != 1 or self.selection_length != 0

    def select(self, keys: Sequence[T]) -> List[T]:
        """Slice the selection window out of an ordered pack.

        A start beyond the pack selects nothing.
        """
        if not self.is_windowed:
            return list(keys)
        start = self.start_pick_at_rank - 1
        end: Optional[int] = None
        if self.selection_length:
            end = start + self.selection_length
        return list(keys[start:end])
