from gambitcompetition.rating.access import InMemoryRatings, Rating, RatingAccess
from gambitcompetition.rating.elo import EloCalculator

__all__ = [
    "EloCalculator",
    "InMemoryRatings",
    "Rating",
    "RatingAccess",
]
