"""Domain layer - Business entities, enums, value objects and interfaces."""
from .entities import (
    ApiKey, CidrRange,
    Accessory, StarPower, GearStat, Brawler, BrawlerStat,
    PlayerIcon, PlayerClub, Player,
    ClubMember, Club,
    ClubRanking, PlayerRanking,
)
from .enums import ClubRole, ClubType, KeyMatchPolicy
from .values import ClubDescription, ColorCode, PlayerTag, ClubTag, parse_ipv4
from .interfaces import (
    IPublicIPResolver, ITokenProvider,
    IClubRepository, IPlayerRepository, IRankingRepository,
)

__all__ = [
    # Entities
    'ApiKey',
    'CidrRange',
    'Accessory',
    'StarPower',
    'GearStat',
    'Brawler',
    'BrawlerStat',
    'PlayerIcon',
    'PlayerClub',
    'Player',
    'ClubMember',
    'Club',
    'ClubRanking',
    'PlayerRanking',
    # Enums
    'ClubRole',
    'ClubType',
    'KeyMatchPolicy',
    # Values
    'ClubDescription',
    'ColorCode',
    'PlayerTag',
    'ClubTag',
    'parse_ipv4',
    # Interfaces
    'IPublicIPResolver',
    'ITokenProvider',
    'IClubRepository',
    'IPlayerRepository',
    'IRankingRepository',
]
