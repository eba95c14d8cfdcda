from gambitcompetition.models.ranking.base_ranking import RankingEntry
from gambitcompetition.models.ranking.ranking_duel import RankingDuel
from gambitcompetition.models.ranking.ranking_performances import RankingPerformances
from gambitcompetition.models.ranking.ranking_race import RankingRace
from gambitcompetition.models.ranking.rankings_holder import RankingsHolder

__all__ = [
    "RankingEntry",
    "RankingDuel",
    "RankingPerformances",
    "RankingRace",
    "RankingsHolder",
]
