"""Player entity and its nested records."""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..values import ClubTag, ColorCode, PlayerTag
from .base import ensure_mapping, list_of, opt_int, req_int, req_str
from .brawler import BrawlerStat


@dataclass
class PlayerIcon:
    id: int

    @classmethod
    def from_dict(cls, data: Any) -> 'PlayerIcon':
        data = ensure_mapping(data, "PlayerIcon")
        return cls(id=req_int(data, "id", "PlayerIcon"))


@dataclass
class PlayerClub:
    """The club a player belongs to, as embedded in the player profile."""
    tag: ClubTag
    name: str

    @classmethod
    def from_dict(cls, data: Any) -> Optional['PlayerClub']:
        """Players without a club come back with an empty object."""
        data = ensure_mapping(data or {}, "PlayerClub")
        if not data:
            return None
        return cls(tag=ClubTag.parse(req_str(data, "tag", "PlayerClub")), name=req_str(data, "name", "PlayerClub"))


@dataclass
class Player:
    """A Brawl Stars player profile (/players/{tag})."""
    
    # Identity
    tag: PlayerTag
    name: str
    name_color: ColorCode
    icon: PlayerIcon
    
    # Progression
    trophies: int
    highest_trophies: int
    exp_level: int
    exp_points: int = 0
    
    # Victories
    three_vs_three_victories: int = 0
    solo_victories: int = 0
    duo_victories: int = 0
    best_robo_rumble_time: int = 0
    best_time_as_big_brawler: int = 0
    is_qualified_from_championship_challenge: bool = False
    
    club: Optional[PlayerClub] = None
    brawlers: List[BrawlerStat] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'Player':
        data = ensure_mapping(data, "Player")
        return cls(
            tag=PlayerTag.parse(req_str(data, "tag", "Player")),
            name=req_str(data, "name", "Player"),
            name_color=ColorCode.parse(data.get("nameColor")),
            icon=PlayerIcon.from_dict(data.get("icon")),
            trophies=req_int(data, "trophies", "Player"),
            highest_trophies=opt_int(data, "highestTrophies", "Player"),
            exp_level=req_int(data, "expLevel", "Player"),
            exp_points=opt_int(data, "expPoints", "Player"),
            three_vs_three_victories=opt_int(data, "3vs3Victories", "Player"),
            solo_victories=opt_int(data, "soloVictories", "Player"),
            duo_victories=opt_int(data, "duoVictories", "Player"),
            best_robo_rumble_time=opt_int(data, "bestRoboRumbleTime", "Player"),
            best_time_as_big_brawler=opt_int(data, "bestTimeAsBigBrawler", "Player"),
            is_qualified_from_championship_challenge=bool(data.get("isQualifiedFromChampionshipChallenge", False)),
            club=PlayerClub.from_dict(data.get("club")),
            brawlers=list_of(data, "brawlers", "Player", BrawlerStat.from_dict),
        )

    @property
    def total_victories(self) -> int:
        return self.three_vs_three_victories + self.solo_victories + self.duo_victories

    def brawler(self, brawler_id: int) -> Optional[BrawlerStat]:
        return next((b for b in self.brawlers if b.id == brawler_id), None)

    def to_dict(self) -> dict:
        """Convert player to dictionary."""
        return {
            'tag': str(self.tag),
            'name': self.name,
            'name_color': str(self.name_color),
            'icon_id': self.icon.id,
            'trophies': self.trophies,
            'highest_trophies': self.highest_trophies,
            'exp_level': self.exp_level,
            'exp_points': self.exp_points,
            '3vs3_victories': self.three_vs_three_victories,
            'solo_victories': self.solo_victories,
            'duo_victories': self.duo_victories,
            'best_robo_rumble_time': self.best_robo_rumble_time,
            'best_time_as_big_brawler': self.best_time_as_big_brawler,
            'is_qualified_from_championship_challenge': self.is_qualified_from_championship_challenge,
            'club': {'tag': str(self.club.tag), 'name': self.club.name} if self.club else None,
            'brawlers': [b.to_dict() for b in self.brawlers],
        }
