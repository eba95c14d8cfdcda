"""Type hints used in Gambit Competition."""

from typing import Dict, Hashable, List, Literal, Optional, Tuple

# Player and team keys are opaque, only referenced
PlayerKey = Hashable
TeamKey = Hashable
MaybePlayerKey = Optional[PlayerKey]

CompetitionType = Literal[
    "round_robin",
    "swiss",
    "bracket",
    "elimination_contest",
    "race",
]
PlayerPack = Literal["", "qualified", "stagnation", "unused"]
PickupMethod = Literal[
    "by_group", "by_rank_in_group", "by_rank_shuffled", "by_rank_in_phase"
]
DispatchMethod = Literal["deal", "random"]
DuelResult = Literal["won", "drawn", "loss"]

# Home then away key, away is None for a bye
KeyPairing = Tuple[PlayerKey, MaybePlayerKey]
# Seed of home and away players
SeedPairing = Tuple[int, int]
# All pairings for one round
RoundPairings = List[KeyPairing]
# Round number to pairings of that round
PairingCalendar = Dict[int, RoundPairings]
# Team key to its member keys
TeamComposition = Dict[TeamKey, List[PlayerKey]]
