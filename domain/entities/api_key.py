"""API key records as returned by the developer portal."""
from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.errors import ValidationError

from .base import ensure_mapping, opt_str, req_str


@dataclass(slots=True)
class CidrRange:
    """One network restriction on a key: CIDR entries plus restriction type."""
    cidrs: List[str]
    type: str = "client"

    @classmethod
    def from_raw(cls, raw: Any) -> "CidrRange":
        # create requests send bare strings, list responses return objects
        if isinstance(raw, str):
            return cls(cidrs=[raw])
        data = ensure_mapping(raw, "CidrRange")
        cidrs = data.get("cidrs") or []
        return cls(cidrs=[c for c in cidrs if isinstance(c, str)], type=data.get("type") or "client")

    def covers(self, address: str) -> bool:
        try:
            ip = ipaddress.ip_address(address)
        except ValueError:
            return False
        for cidr in self.cidrs:
            try:
                if ip in ipaddress.ip_network(cidr, strict=False):
                    return True
            except ValueError:
                continue
        return False


@dataclass(slots=True)
class ApiKey:
    """A bearer key registered on the developer account. Identity is ``id``."""

    id: str
    developer_id: str
    tier: str
    name: str
    key: str
    description: str = ""
    scopes: List[str] = field(default_factory=list)
    cidr_ranges: List[CidrRange] = field(default_factory=list)
    origins: Optional[List[str]] = None
    valid_until: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ApiKey":
        data = ensure_mapping(data, "ApiKey")
        key_id = req_str(data, "id", "ApiKey")
        if not key_id.strip():
            raise ValidationError("ApiKey.id: expected a non-empty string")
        raw_ranges = data.get("cidrRanges") or []
        return cls(
            id=key_id,
            developer_id=data.get("developerId") or "",
            tier=data.get("tier") or "",
            name=data.get("name") or "",
            key=data.get("key") or "",
            description=data.get("description") or "",
            scopes=list(data.get("scopes") or []),
            cidr_ranges=[CidrRange.from_raw(r) for r in raw_ranges],
            origins=data.get("origins"),
            valid_until=opt_str(data, "validUntil", "ApiKey"),
        )

    @property
    def addresses(self) -> List[str]:
        return [c for r in self.cidr_ranges for c in r.cidrs]

    def covers(self, address: str) -> bool:
        """True when any network restriction allows ``address``."""
        return any(r.covers(address) for r in self.cidr_ranges)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary; the secret is left out."""
        return {
            'id': self.id,
            'developer_id': self.developer_id,
            'tier': self.tier,
            'name': self.name,
            'description': self.description,
            'scopes': self.scopes,
            'cidr_ranges': self.addresses,
            'origins': self.origins,
            'valid_until': self.valid_until,
        }
