"""Club descriptions with in-game colour markup."""
from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import List, Tuple

_BLOCK_RE = re.compile(r"<c([0-9A-Fa-f]{6})>(.*?)</c>", re.S)
_TAG_RE = re.compile(r"<c[0-9A-Fa-f]{6}>|</c>")


@dataclass(frozen=True, slots=True)
class ClubDescription:
    """Raw description text; colour spans are written as <cRRGGBB>...</c>."""
    text: str = ""

    def color_blocks(self) -> List[Tuple[str, str]]:
        """(css colour, content) for every coloured span."""
        return [(f"#{hex_}", content.strip()) for hex_, content in _BLOCK_RE.findall(self.text)]

    def plain(self) -> str:
        return _TAG_RE.sub("", self.text)

    def to_html(self) -> str:
        escaped = html.escape(self.text, quote=False)
        # escaping turned the markup into &lt;c..&gt;, match that form
        return re.sub(
            r"&lt;c([0-9A-Fa-f]{6})&gt;(.*?)&lt;/c&gt;",
            lambda m: f'<span style="color:#{m.group(1)}">{m.group(2).strip()}</span>',
            escaped,
            flags=re.S,
        )

    def __str__(self) -> str:
        return self.plain()
