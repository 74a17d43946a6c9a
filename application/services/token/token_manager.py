from __future__ import annotations

import asyncio
from typing import Iterable, Optional

from config import settings
from core.errors import AcquisitionError, BrawlStarsError
from core.logging.context import log_context
from core.logging.logger import StructuredLogger, get_logger
from domain.entities import ApiKey
from domain.enums import KeyMatchPolicy
from domain.interfaces import IPublicIPResolver, ITokenProvider
from domain.values import parse_ipv4
from infrastructure.api.portal_client import PortalSessionClient
from .state import BoundToken, EmptyToken, StaleToken, TokenState, TokenStatus


class TokenManager(ITokenProvider):
    """Keeps one API key usable from the current public address.

    Reuses a key already registered for the address when there is one and
    creates a key otherwise. Acquisition, refresh and cleanup are serialized
    by one lock, so concurrent callers never mint two keys for one address.
    """

    def __init__(
        self,
        portal: PortalSessionClient,
        ip_resolver: IPublicIPResolver,
        *,
        key_name: Optional[str] = None,
        match_policy: Optional[KeyMatchPolicy] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.portal = portal
        self.ip_resolver = ip_resolver
        self.key_name = key_name or settings.BS_KEY_NAME
        self.match_policy = match_policy or KeyMatchPolicy.from_string(settings.BS_KEY_MATCH)
        self.logger = logger or get_logger(__name__, service="token")
        self._state: TokenState = EmptyToken()
        self._lock = asyncio.Lock()

    @property
    def state(self) -> TokenState:
        return self._state

    @property
    def status(self) -> TokenStatus:
        return self._state.status

    async def get_token(self) -> str:
        """Cached token when bound (no network), otherwise run acquisition."""
        state = self._state
        if isinstance(state, BoundToken):
            return state.token
        async with self._lock:
            state = self._state
            if isinstance(state, BoundToken):
                return state.token
            return await self._replace(_bound_of(state))

    async def refresh(self, rejected_token: Optional[str] = None) -> str:
        """Revoke the current key (best effort) and acquire a new one.

        With ``rejected_token``, a refresh that another caller already
        completed is detected and its token returned instead.
        """
        async with self._lock:
            state = self._state
            if rejected_token is not None and isinstance(state, BoundToken) and state.token != rejected_token:
                return state.token
            return await self._replace(_bound_of(state))

    def mark_stale(self) -> None:
        if isinstance(self._state, BoundToken):
            self._state = StaleToken(self._state)

    async def check_address(self) -> bool:
        """Re-resolve the public address; a changed address makes the token stale."""
        address = parse_ipv4(await self.ip_resolver.resolve())
        async with self._lock:
            state = self._state
            if isinstance(state, BoundToken) and state.address != address:
                self.logger.warning(lambda: "token-address-changed", extra={"bound": state.address, "current": address})
                self._state = StaleToken(state)
                return True
        return False

    async def cleanup(self) -> bool:
        """Revoke the cached key. True when nothing is left behind."""
        async with self._lock:
            target = _bound_of(self._state)
            if target is None:
                return True
            try:
                await self.portal.revoke_key(target.key_id)
            except BrawlStarsError as exc:
                self.logger.error(lambda: "token-cleanup-failed", extra={"key_id": target.key_id, "error": str(exc)})
                return False
            self._state = EmptyToken()
            self.logger.info(lambda: "token-cleaned-up", extra={"key_id": target.key_id})
            return True

    delete_token = cleanup

    # ── Acquisition ────────────────────────────────────────────────────

    async def _replace(self, previous: Optional[BoundToken]) -> str:
        exclude: set[str] = set()
        if previous is not None:
            # never re-adopt the key that was just rejected, even if revoke failed
            exclude.add(previous.key_id)
            await self._revoke_quietly(previous)
        self._state = EmptyToken()
        return await self._acquire(exclude)

    async def _acquire(self, exclude: Iterable[str] = ()) -> str:
        try:
            address = parse_ipv4(await self.ip_resolver.resolve())
        except BrawlStarsError as exc:
            raise AcquisitionError("address", self._state.snapshot(), exc) from exc

        with log_context(address=address, key_name=self.key_name):
            try:
                await self.portal.ensure_session()
            except BrawlStarsError as exc:
                raise AcquisitionError("login", self._state.snapshot(), exc) from exc
            try:
                keys = await self.portal.list_keys()
            except BrawlStarsError as exc:
                raise AcquisitionError("list", self._state.snapshot(), exc) from exc

            reusable = self._find_reusable(keys, address, set(exclude))
            if reusable is not None:
                self._state = BoundToken(token=reusable.key, key_id=reusable.id, address=address)
                self.logger.success(lambda: "token-adopted", extra={"key_id": reusable.id})
                return reusable.key

            try:
                created = await self.portal.create_key(address, self.key_name)
            except BrawlStarsError as exc:
                raise AcquisitionError("create", self._state.snapshot(), exc) from exc
            self._state = BoundToken(token=created.key, key_id=created.id, address=address)
            self.logger.success(lambda: "token-created", extra={"key_id": created.id})
            return created.key

    def _find_reusable(self, keys: Iterable[ApiKey], address: str, exclude: set[str]) -> Optional[ApiKey]:
        for key in keys:
            if not key.key or key.id in exclude:
                continue
            if self.match_policy is KeyMatchPolicy.NAME:
                if key.name == self.key_name:
                    return key
            elif key.covers(address):
                return key
        return None

    async def _revoke_quietly(self, bound: BoundToken) -> None:
        try:
            await self.portal.revoke_key(bound.key_id)
        except BrawlStarsError as exc:
            # an orphaned key on the portal is acceptable, a missing token is not
            self.logger.warning(lambda: "token-revoke-failed", extra={"key_id": bound.key_id, "error": str(exc)})


def _bound_of(state: TokenState) -> Optional[BoundToken]:
    if isinstance(state, BoundToken):
        return state
    if isinstance(state, StaleToken):
        return state.previous
    return None
