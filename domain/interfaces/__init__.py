"""Domain interfaces."""
from .credentials import IPublicIPResolver, ITokenProvider
from .repository import IClubRepository, IPlayerRepository, IRankingRepository

__all__ = [
    'IPublicIPResolver',
    'ITokenProvider',
    'IClubRepository',
    'IPlayerRepository',
    'IRankingRepository',
]
