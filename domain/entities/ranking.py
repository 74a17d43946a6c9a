"""Leaderboard entries from the /rankings endpoints."""
from dataclasses import dataclass
from typing import Any, List, Optional

from ..values import ClubTag, ColorCode, PlayerTag
from .base import ensure_mapping, list_of, opt_int, opt_str, req_int, req_str
from .player import PlayerIcon

MAX_RANKING_ENTRIES = 200


@dataclass
class ClubRanking:
    tag: ClubTag
    name: str
    rank: int
    trophies: int
    member_count: int
    badge_id: int

    @classmethod
    def from_dict(cls, data: Any) -> 'ClubRanking':
        data = ensure_mapping(data, "ClubRanking")
        return cls(
            tag=ClubTag.parse(req_str(data, "tag", "ClubRanking")),
            name=req_str(data, "name", "ClubRanking"),
            rank=req_int(data, "rank", "ClubRanking"),
            trophies=req_int(data, "trophies", "ClubRanking"),
            member_count=opt_int(data, "memberCount", "ClubRanking"),
            badge_id=opt_int(data, "badgeId", "ClubRanking"),
        )

    def to_dict(self) -> dict:
        return {
            'tag': str(self.tag),
            'name': self.name,
            'rank': self.rank,
            'trophies': self.trophies,
            'member_count': self.member_count,
            'badge_id': self.badge_id,
        }


@dataclass
class PlayerRanking:
    tag: PlayerTag
    name: str
    rank: int
    trophies: int
    name_color: ColorCode
    icon: PlayerIcon
    club_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'PlayerRanking':
        data = ensure_mapping(data, "PlayerRanking")
        club = ensure_mapping(data.get("club") or {}, "PlayerRanking.club")
        return cls(
            tag=PlayerTag.parse(req_str(data, "tag", "PlayerRanking")),
            name=req_str(data, "name", "PlayerRanking"),
            rank=req_int(data, "rank", "PlayerRanking"),
            trophies=req_int(data, "trophies", "PlayerRanking"),
            name_color=ColorCode.parse(data.get("nameColor")),
            icon=PlayerIcon.from_dict(data.get("icon")),
            club_name=opt_str(club, "name", "PlayerRanking.club"),
        )

    def to_dict(self) -> dict:
        return {
            'tag': str(self.tag),
            'name': self.name,
            'rank': self.rank,
            'trophies': self.trophies,
            'name_color': str(self.name_color),
            'icon_id': self.icon.id,
            'club_name': self.club_name,
        }


def rankings_from_list(items: Any, build) -> List[Any]:
    return list_of({"items": items}, "items", "RankingList", build, limit=MAX_RANKING_ENTRIES)
