# Tables owned by the matching engine; they share db.Base metadata
from .match_cache import MatchCache

__all__ = [
    "MatchCache",
]
