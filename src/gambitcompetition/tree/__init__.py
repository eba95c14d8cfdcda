from gambitcompetition.tree.phase import TreePhase
from gambitcompetition.tree.tree import CompetitionTree

__all__ = [
    "CompetitionTree",
    "TreePhase",
]
