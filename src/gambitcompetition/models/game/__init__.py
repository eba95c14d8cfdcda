from gambitcompetition.models.game.base_game import Game
from gambitcompetition.models.game.game_duel import GameDuel
from gambitcompetition.models.game.game_performances import GamePerformances
from gambitcompetition.models.game.game_race import GameRace

__all__ = [
    "Game",
    "GameDuel",
    "GamePerformances",
    "GameRace",
]
