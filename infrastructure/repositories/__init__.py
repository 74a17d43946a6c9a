"""Infrastructure repositories module."""
from .club_repository import ClubRepository, next_cursor
from .player_repository import PlayerRepository
from .ranking_repository import RankingRepository

__all__ = [
    'ClubRepository',
    'PlayerRepository',
    'RankingRepository',
    'next_cursor',
]
