"""Sequence helpers used by schedulers and dispatchers."""

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
from typing import Dict, Hashable, Iterable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def deal(items: Sequence[T], hand_count: int) -> List[List[T]]:
    """Deal items like cards into a number of hands.

    Item i goes to hand ``i % hand_count``, so hand sizes differ by one at most.

    Args:
        items: Items to deal, in order
        hand_count: Number of hands

    Returns:
        One list per hand
    """
    hands: List[List[T]] = [[] for _ in range(hand_count)]
    for index, item in enumerate(items):
        hands[index % hand_count].append(item)
    return hands


def deal_mapping(
    mapping: Dict[Hashable, T], hand_count: int
) -> List[Dict[Hashable, T]]:
    """Deal a mapping into hands, preserving keys and order."""
    hands = deal(list(mapping.items()), hand_count)
    return [dict(hand) for hand in hands]


def shuffled(items: Iterable[T], rng: random.Random) -> List[T]:
    """Return a shuffled copy of the items, drawn from the given random source."""
    copy = list(items)
    rng.shuffle(copy)
    return copy


def shuffled_mapping(mapping: Dict[Hashable, T], rng: random.Random) -> Dict[Hashable, T]:
    """Return a copy of the mapping with keys in shuffled order."""
    return dict(shuffled(mapping.items(), rng))


def unique(items: Iterable[T]) -> List[T]:
    """Remove duplicates, preserving the first occurrence."""
    seen = set()
    result = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def is_power_of_two(number: int) -> bool:
    """Check if a positive number is a power of 2."""
    return number > 0 and (number & (number - 1)) == 0


def chunk_pairs(items: Sequence[T]) -> List[Tuple[T, T]]:
    """Group items 2 by 2, in received order.

    Raises:
        ValueError: If an odd number of items is given
    """
    if len(items) % 2:
        raise ValueError(f"Cannot pair an odd number of items ({len(items)})")
    return [(items[i], items[i + 1]) for i in range(0, len(items), 2)]
