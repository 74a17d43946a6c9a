"""Club entity and club members."""
from dataclasses import dataclass, field
from typing import Any, List

from ..enums import ClubRole, ClubType
from ..values import ClubDescription, ClubTag, ColorCode, PlayerTag
from .base import ensure_mapping, list_of, opt_int, req_int, req_str
from .player import PlayerIcon

MAX_CLUB_MEMBERS = 30


@dataclass
class ClubMember:
    """A member entry in a club roster."""
    tag: PlayerTag
    name: str
    name_color: ColorCode
    role: ClubRole
    trophies: int
    icon: PlayerIcon

    @classmethod
    def from_dict(cls, data: Any) -> 'ClubMember':
        data = ensure_mapping(data, "ClubMember")
        return cls(
            tag=PlayerTag.parse(req_str(data, "tag", "ClubMember")),
            name=req_str(data, "name", "ClubMember"),
            name_color=ColorCode.parse(data.get("nameColor")),
            role=ClubRole.from_string(req_str(data, "role", "ClubMember")),
            trophies=req_int(data, "trophies", "ClubMember"),
            icon=PlayerIcon.from_dict(data.get("icon")),
        )

    def to_dict(self) -> dict:
        return {
            'tag': str(self.tag),
            'name': self.name,
            'name_color': str(self.name_color),
            'role': self.role.value,
            'trophies': self.trophies,
            'icon_id': self.icon.id,
        }


def members_from_list(items: Any) -> List[ClubMember]:
    """Build a roster from the raw ``items`` list of /clubs/{tag}/members."""
    return list_of({"items": items}, "items", "ClubMemberList", ClubMember.from_dict, limit=MAX_CLUB_MEMBERS)


@dataclass
class Club:
    """A Brawl Stars club (/clubs/{tag})."""
    
    tag: ClubTag
    name: str
    type: ClubType
    badge_id: int
    trophies: int
    required_trophies: int = 0
    description: ClubDescription = field(default_factory=ClubDescription)
    members: List[ClubMember] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'Club':
        data = ensure_mapping(data, "Club")
        return cls(
            tag=ClubTag.parse(req_str(data, "tag", "Club")),
            name=req_str(data, "name", "Club"),
            type=ClubType.from_string(req_str(data, "type", "Club")),
            badge_id=req_int(data, "badgeId", "Club"),
            trophies=req_int(data, "trophies", "Club"),
            required_trophies=opt_int(data, "requiredTrophies", "Club"),
            description=ClubDescription(data.get("description") or ""),
            members=list_of(data, "members", "Club", ClubMember.from_dict, limit=MAX_CLUB_MEMBERS),
        )

    @property
    def president(self) -> ClubMember | None:
        return next((m for m in self.members if m.role is ClubRole.PRESIDENT), None)

    @property
    def is_full(self) -> bool:
        return len(self.members) >= MAX_CLUB_MEMBERS

    def to_dict(self) -> dict:
        """Convert club to dictionary."""
        return {
            'tag': str(self.tag),
            'name': self.name,
            'type': self.type.value,
            'badge_id': self.badge_id,
            'trophies': self.trophies,
            'required_trophies': self.required_trophies,
            'description': self.description.plain(),
            'members': [m.to_dict() for m in self.members],
        }
