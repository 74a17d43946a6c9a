"""Club admission type enumeration."""
from enum import Enum

from core.errors import ValidationError


class ClubType(Enum):
    """How new members may join a club."""
    
    OPEN = "open"
    CLOSED = "closed"
    INVITE_ONLY = "inviteOnly"
    UNKNOWN = "unknown"
    
    @property
    def accepts_requests(self) -> bool:
        """Whether players can join without an invite."""
        return self is ClubType.OPEN
    
    @classmethod
    def from_string(cls, type_str: str) -> 'ClubType':
        """Create ClubType from the API value."""
        try:
            return cls(type_str)
        except ValueError:
            raise ValidationError(f"Invalid club type: {type_str!r}") from None
