from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union

from core.logging.formatter import mask


class TokenStatus(Enum):
    EMPTY = "empty"
    BOUND = "bound"
    STALE = "stale"


@dataclass(frozen=True, slots=True)
class EmptyToken:
    """No key cached."""

    status = TokenStatus.EMPTY

    def snapshot(self) -> Dict[str, Any]:
        return {"status": self.status.value}


@dataclass(frozen=True, slots=True)
class BoundToken:
    """A key believed valid for ``address``. Token and key id always travel together."""
    token: str
    key_id: str
    address: str

    status = TokenStatus.BOUND

    def __post_init__(self) -> None:
        if not self.token or not self.key_id:
            raise ValueError("a bound token needs both the secret and the key id")

    def snapshot(self) -> Dict[str, Any]:
        return {"status": self.status.value, "key_id": self.key_id, "address": self.address, "token": mask(self.token)}


@dataclass(frozen=True, slots=True)
class StaleToken:
    """The key stopped working or the address moved; it still needs revoking."""
    previous: BoundToken

    status = TokenStatus.STALE

    def snapshot(self) -> Dict[str, Any]:
        return {**self.previous.snapshot(), "status": self.status.value}


TokenState = Union[EmptyToken, BoundToken, StaleToken]
