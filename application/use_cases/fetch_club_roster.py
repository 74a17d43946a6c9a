"""Use case for fetching a club together with its full member roster."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from domain.entities import Club, ClubMember, MAX_CLUB_MEMBERS
from domain.interfaces import IClubRepository

logger = logging.getLogger(__name__)


@dataclass
class ClubRoster:
    club: Club
    members: List[ClubMember] = field(default_factory=list)
    pages: int = 0

    def to_dict(self) -> dict:
        data = self.club.to_dict()
        data['members'] = [m.to_dict() for m in self.members]
        data['pages'] = self.pages
        return data


class FetchClubRosterUseCase:
    """
    Fetches a club, then walks /clubs/{tag}/members page by page.

    The club record embeds its members, but the members endpoint is the
    authoritative roster; the walk follows ``paging.cursors.after`` until
    the API stops returning a marker.
    """

    def __init__(
        self,
        club_repo: IClubRepository,
        page_size: Optional[int] = None,
        max_pages: int = 10,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ):
        if max_pages <= 0:
            raise ValueError("max_pages must be positive")
        self.club_repo = club_repo
        self.page_size = page_size
        self.max_pages = max_pages
        self._progress_cb = progress_callback

    async def execute(self, tag: str) -> ClubRoster:
        club = await self.club_repo.get_club(tag)
        roster = ClubRoster(club=club)

        after: Optional[str] = None
        seen_markers: set = set()
        while roster.pages < self.max_pages:
            members, after = await self.club_repo.get_club_members_page(tag, after=after, limit=self.page_size)
            roster.pages += 1
            roster.members.extend(members)
            if self._progress_cb:
                self._progress_cb(roster.pages, len(roster.members))

            if after is None:
                break
            if after in seen_markers:
                # a marker seen twice would loop forever
                logger.warning("club %s: paging marker repeated, stopping", club.tag)
                break
            seen_markers.add(after)
        else:
            logger.warning("club %s: stopped after %d pages", club.tag, self.max_pages)

        if len(roster.members) > MAX_CLUB_MEMBERS:
            logger.warning("club %s: roster has %d members, more than a club can hold", club.tag, len(roster.members))
        logger.info("club %s: %d members in %d page(s)", club.tag, len(roster.members), roster.pages)
        return roster
