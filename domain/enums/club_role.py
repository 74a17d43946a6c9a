"""Club role enumeration."""
from enum import Enum

from core.errors import ValidationError


class ClubRole(Enum):
    """Role of a player inside a club."""
    
    MEMBER = "member"
    SENIOR = "senior"
    VICE_PRESIDENT = "vicePresident"
    PRESIDENT = "president"
    NOT_MEMBER = "notMember"
    UNKNOWN = "unknown"
    
    @property
    def label(self) -> str:
        """Get human-readable role name."""
        labels = {
            "member": "Member",
            "senior": "Senior",
            "vicePresident": "Vice President",
            "president": "President",
            "notMember": "Not a member",
            "unknown": "Unknown",
        }
        return labels[self.value]
    
    @property
    def can_manage(self) -> bool:
        """Whether the role can invite and kick members."""
        return self in (ClubRole.SENIOR, ClubRole.VICE_PRESIDENT, ClubRole.PRESIDENT)
    
    @classmethod
    def from_string(cls, role_str: str) -> 'ClubRole':
        """Create ClubRole from the API value."""
        try:
            return cls(role_str)
        except ValueError:
            raise ValidationError(f"Invalid club role: {role_str!r}") from None
