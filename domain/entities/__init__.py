"""Domain entities."""
from .api_key import ApiKey, CidrRange
from .brawler import Accessory, StarPower, GearStat, Brawler, BrawlerStat
from .player import PlayerIcon, PlayerClub, Player
from .club import ClubMember, Club, MAX_CLUB_MEMBERS, members_from_list
from .ranking import ClubRanking, PlayerRanking, rankings_from_list

__all__ = [
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
    'MAX_CLUB_MEMBERS',
    'members_from_list',
    'ClubRanking',
    'PlayerRanking',
    'rankings_from_list',
]
