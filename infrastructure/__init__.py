"""Infrastructure layer - portal and data API clients, repositories."""
from .api import BrawlStarsClient, PortalSessionClient, PublicIPResolver
from .repositories import ClubRepository, PlayerRepository, RankingRepository

__all__ = [
    'BrawlStarsClient',
    'PortalSessionClient',
    'PublicIPResolver',
    'ClubRepository',
    'PlayerRepository',
    'RankingRepository',
]
