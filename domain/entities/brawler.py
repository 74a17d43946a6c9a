"""Brawler entities: catalogue entries and a player's brawler stats."""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from core.errors import ValidationError

from .base import ensure_mapping, list_of, opt_int, req_int, req_str


@dataclass
class Accessory:
    """A gadget."""
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Any) -> 'Accessory':
        data = ensure_mapping(data, "Accessory")
        return cls(id=req_int(data, "id", "Accessory"), name=req_str(data, "name", "Accessory"))

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name}


@dataclass
class StarPower:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Any) -> 'StarPower':
        data = ensure_mapping(data, "StarPower")
        return cls(id=req_int(data, "id", "StarPower"), name=req_str(data, "name", "StarPower"))

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name}


@dataclass
class GearStat:
    id: int
    name: str
    level: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'GearStat':
        data = ensure_mapping(data, "GearStat")
        level = data.get("level")
        return cls(
            id=req_int(data, "id", "GearStat"),
            name=req_str(data, "name", "GearStat"),
            level=req_int(data, "level", "GearStat") if level is not None else None,
        )

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'level': self.level}


@dataclass
class Brawler:
    """A brawler from the global catalogue (/brawlers)."""
    id: int
    name: str
    star_powers: List[StarPower] = field(default_factory=list)
    gadgets: List[Accessory] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'Brawler':
        data = ensure_mapping(data, "Brawler")
        brawler_id = req_int(data, "id", "Brawler")
        if brawler_id < 0:
            raise ValidationError(f"Brawler.id: expected a non-negative integer, got {brawler_id!r}")
        return cls(
            id=brawler_id,
            name=req_str(data, "name", "Brawler"),
            star_powers=list_of(data, "starPowers", "Brawler", StarPower.from_dict),
            gadgets=list_of(data, "gadgets", "Brawler", Accessory.from_dict),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'star_powers': [s.to_dict() for s in self.star_powers],
            'gadgets': [g.to_dict() for g in self.gadgets],
        }


@dataclass
class BrawlerStat:
    """A brawler as owned by a player, with progression."""
    id: int
    name: str
    power: int
    rank: int
    trophies: int
    highest_trophies: int
    star_powers: List[StarPower] = field(default_factory=list)
    gadgets: List[Accessory] = field(default_factory=list)
    gears: List[GearStat] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'BrawlerStat':
        data = ensure_mapping(data, "BrawlerStat")
        return cls(
            id=req_int(data, "id", "BrawlerStat"),
            name=req_str(data, "name", "BrawlerStat"),
            power=req_int(data, "power", "BrawlerStat"),
            rank=req_int(data, "rank", "BrawlerStat"),
            trophies=req_int(data, "trophies", "BrawlerStat"),
            highest_trophies=opt_int(data, "highestTrophies", "BrawlerStat"),
            star_powers=list_of(data, "starPowers", "BrawlerStat", StarPower.from_dict),
            gadgets=list_of(data, "gadgets", "BrawlerStat", Accessory.from_dict),
            gears=list_of(data, "gears", "BrawlerStat", GearStat.from_dict),
        )

    @property
    def is_maxed(self) -> bool:
        return self.power >= 11

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'power': self.power,
            'rank': self.rank,
            'trophies': self.trophies,
            'highest_trophies': self.highest_trophies,
            'star_powers': [s.to_dict() for s in self.star_powers],
            'gadgets': [g.to_dict() for g in self.gadgets],
            'gears': [g.to_dict() for g in self.gears],
        }
