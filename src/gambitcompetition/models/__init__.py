from gambitcompetition.models import game, ranking

__all__ = ["game", "ranking"]
