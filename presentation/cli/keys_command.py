from __future__ import annotations

import argparse
import json
from typing import Callable, List, Optional

from core.errors import BrawlStarsError
from core.logging.logger import StructuredLogger, get_logger
from application.services.token import TokenManager
from domain.entities import ApiKey
from domain.enums import KeyMatchPolicy
from infrastructure.api import PortalSessionClient


def add_keys_parser(subparsers) -> None:
    p = subparsers.add_parser("keys", help="Manage developer-portal API keys")
    action = p.add_subparsers(dest="action", required=True)
    lp = action.add_parser("list", help="List every key on the account")
    lp.add_argument("--json", action="store_true", help="Print JSON (secrets omitted)")
    action.add_parser("cleanup", help="Revoke the keys this client would use from the current address")
    rp = action.add_parser("revoke", help="Revoke one key by id")
    rp.add_argument("key_id")


class KeysCommand:
    """Key housekeeping on the developer portal."""

    def __init__(
        self,
        portal: PortalSessionClient,
        token_manager: TokenManager,
        *,
        out: Callable[[str], None] = print,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.portal = portal
        self.token_manager = token_manager
        self.out = out
        self.log = logger or get_logger(__name__, service="keys-cli")

    async def run(self, args: argparse.Namespace) -> int:
        if args.action == "list":
            return await self._list(args.json)
        if args.action == "cleanup":
            return await self._cleanup()
        if args.action == "revoke":
            await self.portal.revoke_key(args.key_id)
            self.out(f"revoked {args.key_id}")
            return 0
        raise ValueError(f"unknown keys action {args.action!r}")

    async def _list(self, as_json: bool) -> int:
        keys = await self.portal.list_keys()
        if as_json:
            self.out(json.dumps([k.to_dict() for k in keys], separators=(",", ":"), ensure_ascii=False))
            return 0
        if not keys:
            self.out("No keys on this account.")
        for k in keys:
            self.out(f"{k.id:<38} {k.name:<16} {', '.join(k.addresses) or '-'}")
        return 0

    async def _cleanup(self) -> int:
        """Revoke the cached key plus any key the manager would adopt from here.

        A fresh process holds no token, so the portal is searched the same
        way acquisition searches it.
        """
        failed = 0 if await self.token_manager.cleanup() else 1
        address = await self.token_manager.ip_resolver.resolve()
        for key in self._owned(await self.portal.list_keys(), address):
            try:
                await self.portal.revoke_key(key.id)
                self.out(f"revoked {key.id} ({key.name})")
            except BrawlStarsError as exc:
                self.log.error(lambda: "key-cleanup-failed", extra={"key_id": key.id, "error": str(exc)})
                failed += 1
        if failed:
            self.out(f"{failed} key(s) could not be revoked")
            return 1
        return 0

    def _owned(self, keys: List[ApiKey], address: str) -> List[ApiKey]:
        if self.token_manager.match_policy is KeyMatchPolicy.NAME:
            return [k for k in keys if k.name == self.token_manager.key_name]
        return [k for k in keys if k.name == self.token_manager.key_name and k.covers(address)]
