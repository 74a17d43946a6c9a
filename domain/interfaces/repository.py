"""Repository interfaces for game data access."""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..entities import Brawler, Club, ClubMember, ClubRanking, Player, PlayerRanking


class IClubRepository(ABC):
    """Interface for club data repository."""
    
    @abstractmethod
    async def get_club(self, tag: str) -> Club:
        """Get a club by tag."""
        pass
    
    @abstractmethod
    async def get_club_members(
        self,
        tag: str,
        after: Optional[str] = None,
        before: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[ClubMember]:
        """Get one page of a club's members."""
        pass

    @abstractmethod
    async def get_club_members_page(
        self,
        tag: str,
        after: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Tuple[List[ClubMember], Optional[str]]:
        """One page of members plus the marker for the next page (None on the last)."""
        pass


class IPlayerRepository(ABC):
    """Interface for player data repository."""
    
    @abstractmethod
    async def get_player(self, tag: str) -> Player:
        """Get a player by tag."""
        pass
    
    @abstractmethod
    async def get_brawlers(self) -> List[Brawler]:
        """Get the brawler catalogue."""
        pass


class IRankingRepository(ABC):
    """Interface for leaderboard data."""
    
    @abstractmethod
    async def get_player_rankings(self, country: str = "global", limit: Optional[int] = None) -> List[PlayerRanking]:
        pass
    
    @abstractmethod
    async def get_club_rankings(self, country: str = "global", limit: Optional[int] = None) -> List[ClubRanking]:
        pass
