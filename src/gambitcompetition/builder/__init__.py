from gambitcompetition.builder.builder_phase import BuilderPhase
from gambitcompetition.builder.builder_tree import BuilderTree
from gambitcompetition.builder.competition_builder import CompetitionBuilder
from gambitcompetition.builder.player_selector import PlayerSelector

__all__ = [
    "BuilderPhase",
    "BuilderTree",
    "CompetitionBuilder",
    "PlayerSelector",
]
