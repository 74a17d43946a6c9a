"""Player and club tags."""
from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote

from core.errors import ValidationError

_TAG_RE = re.compile(r"^#[A-Z0-9]{3,12}$")


@dataclass(frozen=True, slots=True)
class _Tag:
    value: str

    kind = "tag"

    @classmethod
    def parse(cls, raw: str) -> "_Tag":
        """Normalise to '#' + upper case and validate.

        Tags never contain the letter O, so an 'O' typed by a player is
        read as zero.
        """
        if not isinstance(raw, str) or not raw.strip():
            raise ValidationError(f"Invalid {cls.kind}: {raw!r}")
        text = raw.strip().upper().replace("O", "0")
        normalized = text if text.startswith("#") else f"#{text}"
        if not _TAG_RE.fullmatch(normalized):
            raise ValidationError(f"Invalid {cls.kind} format: {raw!r}")
        return cls(normalized)

    @property
    def url_encoded(self) -> str:
        """Tag as it must appear in a request path ('#' -> '%23')."""
        return quote(self.value, safe="")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PlayerTag(_Tag):
    kind = "player tag"


@dataclass(frozen=True, slots=True)
class ClubTag(_Tag):
    kind = "club tag"
