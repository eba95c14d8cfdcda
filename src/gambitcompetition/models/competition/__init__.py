from gambitcompetition.models.competition.competition import Competition
from gambitcompetition.models.competition.competition_config import CompetitionConfig

__all__ = [
    "Competition",
    "CompetitionConfig",
]
