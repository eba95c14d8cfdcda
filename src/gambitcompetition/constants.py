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

# Competition types
COMPETITION_ROUND_ROBIN = "round_robin"
COMPETITION_SWISS = "swiss"
COMPETITION_BRACKET = "bracket"
COMPETITION_ELIMINATION_CONTEST = "elimination_contest"
COMPETITION_RACE = "race"

COMPETITION_TYPES = [
    COMPETITION_ROUND_ROBIN,
    COMPETITION_SWISS,
    COMPETITION_BRACKET,
    COMPETITION_ELIMINATION_CONTEST,
    COMPETITION_RACE,
]

# Minimum number of players needed to create each competition type
MIN_PLAYER_COUNT = {
    COMPETITION_ROUND_ROBIN: 3,
    COMPETITION_SWISS: 3,
    COMPETITION_BRACKET: 4,
    COMPETITION_ELIMINATION_CONTEST: 3,
    COMPETITION_RACE: 3,
}

# Options each competition type accepts, on top of the common ones
COMMON_OPTIONS = ["qualification_spots", "elimination_spots", "performance_types_to_rank"]
COMPETITION_OPTIONS = {
    COMPETITION_ROUND_ROBIN: ["serie_count", "shuffle_calendar"],
    COMPETITION_SWISS: ["round_count"],
    COMPETITION_BRACKET: ["best_seed_always_home", "pre_round_shuffle"],
    COMPETITION_ELIMINATION_CONTEST: [
        "performance_types_to_sum",
        "player_passing_count",
        "player_eliminated_per_round",
    ],
    COMPETITION_RACE: ["round_count"],
}

# Duel results
RESULT_WON = "won"
RESULT_DRAWN = "drawn"
RESULT_LOSS = "loss"

# Default points attribution
DUEL_POINTS = {
    RESULT_WON: 3,
    RESULT_DRAWN: 1,
    RESULT_LOSS: 0,
}
RACE_POINTS = {
    1: 10,
    2: 7,
    3: 5,
    4: 3,
    5: 2,
    6: 1,
}

# Swiss round count lower bound
SWISS_MIN_ROUND_COUNT = 2

# Player packs, for selection between phases of a tree
PLAYER_PACK_QUALIFIED = "qualified"
PLAYER_PACK_STAGNATION = "stagnation"
PLAYER_PACK_UNUSED = "unused"
PLAYER_PACKS = [
    PLAYER_PACK_UNUSED,
    PLAYER_PACK_QUALIFIED,
    PLAYER_PACK_STAGNATION,
]

# Pickup methods, governing the order of a player pack
PICKUP_METHOD_BY_GROUP = "by_group"
PICKUP_METHOD_BY_RANK_IN_GROUP = "by_rank_in_group"
PICKUP_METHOD_BY_RANK_SHUFFLED = "by_rank_shuffled"
PICKUP_METHOD_BY_RANK_IN_PHASE = "by_rank_in_phase"
PICKUP_METHODS = [
    PICKUP_METHOD_BY_GROUP,
    PICKUP_METHOD_BY_RANK_IN_GROUP,
    PICKUP_METHOD_BY_RANK_SHUFFLED,
    PICKUP_METHOD_BY_RANK_IN_PHASE,
]

# Dispatch methods, splitting a phase roster across its groups
DISPATCH_METHOD_DEAL = "deal"
DISPATCH_METHOD_RANDOM = "random"
DISPATCH_METHODS = [
    DISPATCH_METHOD_DEAL,
    DISPATCH_METHOD_RANDOM,
]

# Spot types in a finished competition
SPOT_QUALIFICATION = "qualification"
SPOT_STAGNATION = "stagnation"
SPOT_ELIMINATION = "elimination"

# Elo
DEFAULT_ELO_RATING = 1500
DEFAULT_ELO_K_FACTOR = 32
