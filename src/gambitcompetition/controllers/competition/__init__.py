from gambitcompetition.controllers.competition.calendar_manager import CalendarManager
from gambitcompetition.controllers.competition.ranking_recorder import (
    RankingRecorder,
    ranking_class_for,
)

__all__ = [
    "CalendarManager",
    "RankingRecorder",
    "ranking_class_for",
]
