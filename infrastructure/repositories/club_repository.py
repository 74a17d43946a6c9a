"""Club repository implementation."""
import logging
from typing import Any, List, Optional, Tuple

from domain.entities import Club, ClubMember, members_from_list
from domain.interfaces import IClubRepository
from infrastructure.api import BrawlStarsClient

logger = logging.getLogger(__name__)


class ClubRepository(IClubRepository):
    """Repository for club data using the Brawl Stars API."""
    
    def __init__(self, api_client: BrawlStarsClient):
        """
        Initialize club repository.
        
        Args:
            api_client: Brawl Stars API client instance
        """
        self.api_client = api_client
    
    async def get_club(self, tag: str) -> Club:
        data = await self.api_client.get_club(tag)
        return Club.from_dict(data)
    
    async def get_club_members(
        self,
        tag: str,
        after: Optional[str] = None,
        before: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[ClubMember]:
        data = await self.api_client.get_club_members(tag, after=after, before=before, limit=limit)
        return members_from_list(_items(data))
    
    async def get_club_members_page(
        self,
        tag: str,
        after: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Tuple[List[ClubMember], Optional[str]]:
        data = await self.api_client.get_club_members(tag, after=after, limit=limit)
        members = members_from_list(_items(data))
        next_marker = next_cursor(data)
        logger.debug("club %s: %d members, next=%s", tag, len(members), next_marker)
        return members, next_marker


def _items(data: Any) -> Any:
    return data.get("items") if isinstance(data, dict) else None


def next_cursor(data: Any) -> Optional[str]:
    """The ``paging.cursors.after`` marker of a list response, if any."""
    if not isinstance(data, dict):
        return None
    paging = data.get("paging")
    cursors = paging.get("cursors") if isinstance(paging, dict) else None
    after = cursors.get("after") if isinstance(cursors, dict) else None
    return after if isinstance(after, str) and after else None
