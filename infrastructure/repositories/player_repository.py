"""Player repository implementation."""
from typing import List

from domain.entities import Brawler, Player
from domain.entities.base import list_of
from domain.interfaces import IPlayerRepository
from infrastructure.api import BrawlStarsClient


class PlayerRepository(IPlayerRepository):
    """Players and the brawler catalogue."""

    def __init__(self, api_client: BrawlStarsClient):
        self.api_client = api_client

    async def get_player(self, tag: str) -> Player:
        return Player.from_dict(await self.api_client.get_player(tag))

    async def get_brawlers(self) -> List[Brawler]:
        data = await self.api_client.get_brawlers()
        items = data.get("items") if isinstance(data, dict) else None
        return list_of({"items": items}, "items", "BrawlerList", Brawler.from_dict)
