"""Domain enumerations."""
from .club_role import ClubRole
from .club_type import ClubType
from .key_match_policy import KeyMatchPolicy

__all__ = [
    'ClubRole',
    'ClubType',
    'KeyMatchPolicy',
]
