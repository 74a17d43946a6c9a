from __future__ import annotations

import argparse
import json
from typing import Any, Callable, Optional

from core.logging.logger import StructuredLogger, get_logger
from application.use_cases import FetchClubRosterUseCase
from infrastructure.api import BrawlStarsClient
from infrastructure.repositories import ClubRepository, PlayerRepository, RankingRepository


def add_lookup_parser(subparsers) -> None:
    p = subparsers.add_parser("lookup", help="Query the Brawl Stars data API")
    what = p.add_subparsers(dest="what", required=True)
    for name, help_text in (
        ("club", "Club profile and full roster"),
        ("members", "One page of a club's members"),
        ("player", "Player profile"),
        ("battlelog", "Player's recent battles"),
    ):
        sp = what.add_parser(name, help=help_text)
        sp.add_argument("tag", help="Player or club tag, with or without '#'")
        sp.add_argument("--json", action="store_true", help="Print raw JSON")
    rp = what.add_parser("rankings", help="Trophy leaderboards")
    rp.add_argument("board", choices=("players", "clubs"))
    rp.add_argument("--country", default="global", help="'global' or a two-letter country code")
    rp.add_argument("--limit", type=int, default=None)
    rp.add_argument("--json", action="store_true", help="Print raw JSON")


class LookupCommand:
    """Read-only data API lookups."""

    def __init__(
        self,
        api_client: BrawlStarsClient,
        *,
        out: Callable[[str], None] = print,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.api_client = api_client
        self.clubs = ClubRepository(api_client)
        self.players = PlayerRepository(api_client)
        self.rankings = RankingRepository(api_client)
        self.out = out
        self.log = logger or get_logger(__name__, service="lookup-cli")

    async def run(self, args: argparse.Namespace) -> int:
        handler = getattr(self, f"_{args.what}")
        self.log.debug(lambda: "lookup", extra={"what": args.what})
        await handler(args)
        return 0

    def _emit(self, payload: Any) -> None:
        self.out(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))

    async def _club(self, args: argparse.Namespace) -> None:
        roster = await FetchClubRosterUseCase(self.clubs).execute(args.tag)
        if args.json:
            self._emit(roster.to_dict())
            return
        club = roster.club
        self.out(f"{club.name} ({club.tag}) - {club.type.value}, {club.trophies} trophies")
        if club.description.plain():
            self.out(f"  {club.description.plain()}")
        for m in sorted(roster.members, key=lambda m: m.trophies, reverse=True):
            self.out(f"  {str(m.tag):<12} {m.name:<20} {m.role.label:<15} {m.trophies:>6}")

    async def _members(self, args: argparse.Namespace) -> None:
        members = await self.clubs.get_club_members(args.tag)
        if args.json:
            self._emit([m.to_dict() for m in members])
            return
        for m in members:
            self.out(f"{str(m.tag):<12} {m.name:<20} {m.role.label:<15} {m.trophies:>6}")

    async def _player(self, args: argparse.Namespace) -> None:
        player = await self.players.get_player(args.tag)
        if args.json:
            self._emit(player.to_dict())
            return
        club = f" [{player.club.name}]" if player.club else ""
        self.out(f"{player.name} ({player.tag}){club}")
        self.out(f"  trophies {player.trophies} (best {player.highest_trophies}), level {player.exp_level}")
        self.out(f"  victories {player.total_victories}, brawlers {len(player.brawlers)}")

    async def _battlelog(self, args: argparse.Namespace) -> None:
        data = await self.api_client.get_player_battlelog(args.tag)
        items = data.get("items", []) if isinstance(data, dict) else []
        if args.json:
            self._emit(items)
            return
        for item in items:
            battle = item.get("battle") or {}
            event = item.get("event") or {}
            self.out(
                f"{item.get('battleTime', '?'):<20} {event.get('mode', battle.get('mode', '?')):<16} "
                f"{battle.get('result', battle.get('rank', '-'))}"
            )

    async def _rankings(self, args: argparse.Namespace) -> None:
        if args.board == "players":
            entries = await self.rankings.get_player_rankings(args.country, limit=args.limit)
        else:
            entries = await self.rankings.get_club_rankings(args.country, limit=args.limit)
        if args.json:
            self._emit([e.to_dict() for e in entries])
            return
        for e in entries:
            self.out(f"{e.rank:>4}. {str(e.tag):<12} {e.name:<20} {e.trophies:>7}")
