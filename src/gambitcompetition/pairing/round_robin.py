"""Round-robin calendar generation (circle method)."""

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
from typing import Dict, List, Optional

from gambitcompetition.type_hints import SeedPairing

SeedCalendar = Dict[int, List[SeedPairing]]


def _gap(value: int, gap: int, modulo: int) -> int:
    """Move a 1-based value by a gap, wrapping around within [1, modulo]."""
    moved = value + gap
    if moved > modulo:
        moved -= modulo
    if moved < 1:
        moved += modulo
    return moved


def base_round_count(player_count: int) -> int:
    """Rounds in one series: N - 1 for an even count, N for an odd one."""
    return player_count - 1 if player_count % 2 == 0 else player_count


def _generate_base_even(player_count: int) -> SeedCalendar:
    round_count = player_count - 1
    calendar: SeedCalendar = {r: [] for r in range(1, round_count + 1)}
    # Seed 1 meets every other seed in ascending order
    for round_number in range(1, round_count + 1):
        calendar[round_number].append((1, round_number + 1))

    round_when_match_next = 1
    for seed_home in range(2, player_count):
        # First game against the last seed, on the round after the one
        # this seed met the previous home seed
        round_number = _gap(round_when_match_next, 1, round_count)
        calendar[round_number].append((seed_home, player_count))
        round_when_match_next = _gap(round_number, 1, round_count)
        for seed_away in range(seed_home + 1, player_count):
            round_number = _gap(round_number, 1, round_count)
            calendar[round_number].append((seed_home, seed_away))
    return calendar


def _generate_base_odd(player_count: int) -> SeedCalendar:
    round_count = player_count
    calendar: SeedCalendar = {r: [] for r in range(1, round_count + 1)}
    # One seed is idle each round: the last on round 1, the first on the last round
    round_number = 1
    for seed_home in range(1, player_count + 1):
        seed_away = seed_home
        for _ in range(player_count - 1):
            seed_away = _gap(seed_away, -2, player_count)
            # A lower opponent seed means this game was already registered
            if seed_home < seed_away:
                calendar[round_number].append((seed_home, seed_away))
            round_number = _gap(round_number, 1, round_count)
    return calendar


def generate_base_calendar(player_count: int) -> SeedCalendar:
    """Generate one series of a round-robin, as seed pairings.

    Args:
        player_count: Number of players, seeds are 1..player_count

    Returns:
        Round number to list of (home seed, away seed)
    """
    if player_count % 2 == 0:
        return _generate_base_even(player_count)
    return _generate_base_odd(player_count)


def _reverse_serie(serie: int, base_round: int, serie_count: int) -> bool:
    if serie_count % 2 == 1:
        # Odd total: reverse even series only, first seeds are favored
        return serie % 2 == 0
    return (serie % 2 == 0 and base_round % 2 == 1) or (
        serie % 2 == 1 and base_round % 2 == 0
    )


def generate_round_robin_calendar(
    player_count: int,
    serie_count: int = 1,
    shuffle: bool = False,
    rng: Optional[random.Random] = None,
) -> SeedCalendar:
    """Generate a full round-robin calendar over one or several series.

    Each series replays the base calendar. Home and away alternate between
    series, except that with an odd series count only even series are
    reversed. With an even series count, even rounds of the first series
    are reversed too, so every pair ends balanced.

    Args:
        player_count: Number of players
        serie_count: Number of series, values below 1 mean 1
        shuffle: Shuffle round order within each series
        rng: Random source used to shuffle

    Returns:
        Round number to list of (home seed, away seed)
    """
    serie_count = max(1, serie_count)
    base = generate_base_calendar(player_count)
    rounds_in_serie = len(base)

    calendar: SeedCalendar = {r: list(games) for r, games in base.items()}
    round_number = rounds_in_serie + 1
    for serie in range(2, serie_count + 1):
        for base_round, games in base.items():
            if _reverse_serie(serie, base_round, serie_count):
                calendar[round_number] = [(away, home) for home, away in games]
            else:
                calendar[round_number] = list(games)
            round_number += 1

    if serie_count > 1 and serie_count % 2 == 0:
        for base_round in range(2, rounds_in_serie + 1, 2):
            calendar[base_round] = [(away, home) for home, away in calendar[base_round]]

    if shuffle:
        rng = rng or random.Random()
        ordered = [calendar[r] for r in sorted(calendar)]
        calendar = {}
        for serie in range(serie_count):
            serie_rounds = ordered[serie * rounds_in_serie : (serie + 1) * rounds_in_serie]
            rng.shuffle(serie_rounds)
            for offset, games in enumerate(serie_rounds):
                calendar[serie * rounds_in_serie + offset + 1] = games

    return calendar
