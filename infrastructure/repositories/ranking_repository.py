"""Leaderboard repository implementation."""
from typing import Any, List, Optional

from domain.entities import ClubRanking, PlayerRanking, rankings_from_list
from domain.interfaces import IRankingRepository
from infrastructure.api import BrawlStarsClient


class RankingRepository(IRankingRepository):
    """Global and per-country trophy leaderboards."""

    def __init__(self, api_client: BrawlStarsClient):
        self.api_client = api_client

    async def get_player_rankings(self, country: str = "global", limit: Optional[int] = None) -> List[PlayerRanking]:
        data = await self.api_client.get_player_rankings(country, limit=limit)
        return rankings_from_list(_items(data), PlayerRanking.from_dict)

    async def get_club_rankings(self, country: str = "global", limit: Optional[int] = None) -> List[ClubRanking]:
        data = await self.api_client.get_club_rankings(country, limit=limit)
        return rankings_from_list(_items(data), ClubRanking.from_dict)


def _items(data: Any) -> Any:
    return data.get("items") if isinstance(data, dict) else None
