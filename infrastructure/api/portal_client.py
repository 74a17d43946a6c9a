"""Brawl Stars developer-portal client: session login and API key management."""
from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from config import settings
from core.errors import AuthenticationError, ProtocolError, RemoteError, TransportError, ValidationError
from core.logging.logger import StructuredLogger, get_logger, traceable
from domain.entities import ApiKey
from domain.values import parse_ipv4

PORTAL_PATHS = {
    "login": "/api/login",
    "logout": "/api/logout",
    "create_key": "/api/apikey/create",
    "list_keys": "/api/apikey/list",
    "revoke_key": "/api/apikey/revoke",
}


@dataclass(slots=True)
class Session:
    """Portal session: the cookie header to replay and when to stop trusting it.

    ``expires_at`` is on the ``time.monotonic()`` clock.
    """
    cookie_header: str
    expires_at: float

    @property
    def remaining(self) -> float:
        return self.expires_at - time.monotonic()

    @property
    def expired(self) -> bool:
        return self.remaining <= 0


class PortalSessionClient:
    """Async client for developer.brawlstars.com.

    Owns exactly one portal session. Every key operation calls
    ``ensure_session`` first, so callers never deal with session expiry.
    """

    def __init__(
        self,
        email: str,
        password: str,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session_ttl_s: Optional[int] = None,
        session_margin_s: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.email = email
        self.password = password
        self.session_ttl_s = session_ttl_s if session_ttl_s is not None else settings.PORTAL_SESSION_TTL_S
        self.session_margin_s = session_margin_s if session_margin_s is not None else settings.PORTAL_SESSION_MARGIN_S
        if not 0 < self.session_margin_s < self.session_ttl_s:
            raise ValueError("session margin must be positive and shorter than the session TTL")
        self.logger = logger or get_logger(__name__, service="portal")
        self._session: Optional[Session] = None
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.BS_PORTAL_BASE_URL,
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "PortalSessionClient":
        return self

    async def __aexit__(self, *_) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def has_session(self) -> bool:
        return self._session is not None and not self._session.expired

    @property
    def session_expires_at(self) -> Optional[float]:
        """Wall-clock expiry of the current session, for display and logs."""
        return time.time() + self._session.remaining if self._session else None

    # ── Session ────────────────────────────────────────────────────────

    @traceable
    async def login(self) -> None:
        """Log in and capture the session cookies.

        Raises:
            AuthenticationError: credentials missing, portal unreachable, or
                no ok status / session cookie in the response.
        """
        if not self.email or not self.password:
            raise AuthenticationError("portal email and password are required")

        self._session = None
        try:
            response = await self._http.post(
                PORTAL_PATHS["login"],
                json={"email": self.email, "password": self.password},
            )
        except httpx.HTTPError as exc:
            raise AuthenticationError(f"portal unreachable: {exc}") from exc

        if not response.is_success:
            raise AuthenticationError(f"login rejected with HTTP {response.status_code}")
        try:
            body = response.json()
        except ValueError as exc:
            raise AuthenticationError("login response is not JSON") from exc
        if _status_message(body) != "ok":
            raise AuthenticationError(f"login failed: {_status_message(body) or 'no status in response'}")

        cookie_header = "; ".join(
            raw.split(";", 1)[0].strip()
            for raw in response.headers.get_list("set-cookie")
            if raw.strip()
        )
        if not cookie_header:
            raise AuthenticationError("login response carried no session cookie")

        # the cookie is replayed by hand; keep the jar empty so it is the only source
        self._http.cookies.clear()
        self._session = Session(cookie_header=cookie_header, expires_at=self._expiry_from(body))
        self.logger.success(lambda: "portal-login-ok", extra={"expires_at": round(self.session_expires_at)})

    async def ensure_session(self) -> None:
        """Log in when there is no session or the cached one has expired."""
        if self._session is None or self._session.expired:
            self.logger.debug(lambda: "portal-session-renew", extra={"had_session": self._session is not None})
            await self.login()

    @traceable
    async def logout(self) -> None:
        """End the session. Best effort: never raises."""
        session, self._session = self._session, None
        if session is None:
            return
        try:
            await self._http.post(PORTAL_PATHS["logout"], json={}, headers={"Cookie": session.cookie_header})
            self.logger.info(lambda: "portal-logout")
        except httpx.HTTPError as exc:
            self.logger.warning(lambda: "portal-logout-failed", extra={"error": str(exc)})

    # ── Keys ───────────────────────────────────────────────────────────

    @traceable
    async def create_key(
        self,
        address: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ApiKey:
        """Create a key restricted to the single IPv4 ``address``."""
        address = parse_ipv4(address)
        name = name or settings.BS_KEY_NAME
        if description is None:
            description = f"[{address}] Created {datetime.now():%Y-%m-%d %H:%M:%S}"

        response, body = await self._post(
            "create_key",
            {"name": name, "description": description, "cidrRanges": [address], "scopes": None},
        )
        raw_key = body.get("key")
        if not isinstance(raw_key, dict) or not raw_key.get("key"):
            raise _remote_error(response.status_code, body, default_reason="keyNotCreated")
        try:
            api_key = ApiKey.from_dict(raw_key)
        except ValidationError as exc:
            raise ProtocolError(f"portal returned a malformed key: {exc}") from exc
        self.logger.success(lambda: "portal-key-created", extra={"key_id": api_key.id, "address": address, "key_name": name})
        return api_key

    @traceable
    async def list_keys(self) -> List[ApiKey]:
        """Every key registered on the account, unfiltered."""
        _, body = await self._post("list_keys", {})
        raw_keys = body.get("keys")
        if not isinstance(raw_keys, list):
            raise ProtocolError("portal key list response has no 'keys' array")
        try:
            keys = [ApiKey.from_dict(k) for k in raw_keys]
        except ValidationError as exc:
            raise ProtocolError(f"portal returned a malformed key: {exc}") from exc
        self.logger.debug(lambda: "portal-keys-listed", extra={"count": len(keys)})
        return keys

    @traceable
    async def revoke_key(self, key_id: str) -> bool:
        """Delete a key by id. Returns True once the portal confirms."""
        if not isinstance(key_id, str) or not key_id.strip():
            raise ValidationError(f"key id must be a non-empty string, got {key_id!r}")

        response, body = await self._post("revoke_key", {"id": key_id})
        if _status_message(body) != "ok":
            raise _remote_error(response.status_code, body, default_reason="revokeFailed")
        self.logger.info(lambda: "portal-key-revoked", extra={"key_id": key_id})
        return True

    # ── Transport ──────────────────────────────────────────────────────

    async def _post(self, op: str, payload: Dict[str, Any]) -> tuple[httpx.Response, Dict[str, Any]]:
        await self.ensure_session()
        try:
            response = await self._http.post(
                PORTAL_PATHS[op],
                json=payload,
                headers={"Cookie": self._session.cookie_header},
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"portal {op} failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            if response.status_code in (401, 403):
                # portal dropped the session early; next call logs in again
                self._session = None
            self.logger.warning(lambda: "portal-request-rejected", extra={"op": op, "status": response.status_code})
            raise _remote_error(response.status_code, body)
        if not isinstance(body, dict):
            raise ProtocolError(f"portal {op} returned an empty or non-JSON body (HTTP {response.status_code})")

        # every portal response reports the session's remaining lifetime
        if "sessionExpiresInSeconds" in body and self._session is not None:
            self._session.expires_at = self._expiry_from(body)
        return response, body

    def _expiry_from(self, body: Dict[str, Any]) -> float:
        ttl = body.get("sessionExpiresInSeconds")
        if isinstance(ttl, bool) or not isinstance(ttl, int):
            ttl = self.session_ttl_s
        # a non-positive lifetime means the portal already ended the session
        return time.monotonic() + max(ttl - self.session_margin_s, 0)


def _status_message(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    status = body.get("status")
    if not isinstance(status, dict):
        return None
    return status.get("message")


def _remote_error(status_code: int, body: Any, default_reason: str = "unknown") -> RemoteError:
    status = body.get("status") if isinstance(body, dict) else None
    if not isinstance(status, dict):
        return RemoteError(status_code, reason=default_reason)
    message = status.get("message")
    if message == "ok":
        message = None
    return RemoteError(
        status_code,
        reason=status.get("reason") or message or default_reason,
        message=status.get("detail") or message or "Unknown error",
        detail=status.get("detail"),
    )
