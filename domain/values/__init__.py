"""Domain value objects."""
from .address import parse_ipv4, is_ipv4
from .club_description import ClubDescription
from .color_code import ColorCode
from .tags import PlayerTag, ClubTag

__all__ = [
    'parse_ipv4',
    'is_ipv4',
    'ClubDescription',
    'ColorCode',
    'PlayerTag',
    'ClubTag',
]
