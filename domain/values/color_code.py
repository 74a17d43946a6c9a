"""ARGB colour codes used for player name colours."""
from __future__ import annotations

import colorsys
import re
from dataclasses import dataclass
from typing import Dict, Tuple

from core.errors import ValidationError

_ARGB_RE = re.compile(r"^0x[0-9a-fA-F]{8}$")

DEFAULT_NAME_COLOR = "0xffffffff"


@dataclass(frozen=True, slots=True)
class ColorCode:
    """Colour in the API's '0xAARRGGBB' notation."""
    value: str

    @classmethod
    def parse(cls, raw: str | None) -> "ColorCode":
        if raw is None:
            return cls(DEFAULT_NAME_COLOR)
        if not isinstance(raw, str) or not _ARGB_RE.fullmatch(raw):
            raise ValidationError(f"Invalid ARGB color code: {raw!r}")
        return cls(raw.lower())

    @property
    def opacity(self) -> float:
        return round(int(self.value[2:4], 16) / 255, 2)

    @property
    def rgb(self) -> Tuple[int, int, int]:
        v = self.value[4:]
        return int(v[0:2], 16), int(v[2:4], 16), int(v[4:6], 16)

    @property
    def hex(self) -> str:
        return f"#{self.value[4:]}"

    def hsl(self) -> Dict[str, int]:
        r, g, b = (c / 255 for c in self.rgb)
        h, l, s = colorsys.rgb_to_hls(r, g, b)
        return {"h": round(h * 360), "s": round(s * 100), "l": round(l * 100)}

    def __str__(self) -> str:
        return self.value
