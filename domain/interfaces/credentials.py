"""Interfaces for the credential side of the client."""
from abc import ABC, abstractmethod
from typing import Optional


class IPublicIPResolver(ABC):
    """Finds the caller's public IPv4 address."""
    
    @abstractmethod
    async def resolve(self) -> str:
        """Return the current public address as a dotted quad."""
        pass


class ITokenProvider(ABC):
    """Supplies bearer tokens for the data API."""
    
    @abstractmethod
    async def get_token(self) -> str:
        """Return a token believed valid for the current address."""
        pass
    
    @abstractmethod
    async def refresh(self, rejected_token: Optional[str] = None) -> str:
        """Discard the current token and return a freshly acquired one."""
        pass
