"""Brawl Stars data API client."""
from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from config import settings
from core.errors import AuthorizationError, ProtocolError, RemoteError, TransportError, ValidationError
from core.logging.logger import StructuredLogger, get_logger
from domain.interfaces import ITokenProvider
from domain.values import ClubTag, PlayerTag


def build_query(
    after: Optional[str] = None,
    before: Optional[str] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    """Paging parameters for list endpoints.

    ``after`` and ``before`` are markers from a previous response's
    ``paging.cursors``; the API accepts only one of them per request.
    """
    if after is not None and before is not None:
        raise ValidationError("only one of 'after' or 'before' may be given")
    params: Dict[str, Any] = {}
    if after is not None:
        if not isinstance(after, str) or not after:
            raise ValidationError(f"'after' must be a non-empty marker string, got {after!r}")
        params["after"] = after
    if before is not None:
        if not isinstance(before, str) or not before:
            raise ValidationError(f"'before' must be a non-empty marker string, got {before!r}")
        params["before"] = before
    if limit is not None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ValidationError(f"'limit' must be a positive integer, got {limit!r}")
        params["limit"] = limit
    return params


class BrawlStarsClient:
    """Asynchronous Brawl Stars API client.

    Tokens come from an injected provider. A 403 means the key no longer
    matches our address (or was revoked): the provider is asked to refresh
    and the request is replayed once.
    """

    def __init__(
        self,
        token_provider: ITokenProvider,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.token_provider = token_provider
        self.base_url = (base_url or settings.BS_API_BASE_URL).rstrip("/")
        self.logger = logger or get_logger(__name__, service="api")
        self.last_status_code: Optional[int] = None
        self.session = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
            transport=transport,
            http2=True,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "BrawlStarsClient":
        return self

    async def __aexit__(self, *_) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.session.aclose()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _get(self, url: str, params: Optional[Dict[str, Any]], token: str) -> httpx.Response:
        try:
            response = await self.session.get(url, params=params or None, headers={"Authorization": f"Bearer {token}"})
        except httpx.HTTPError as exc:
            raise TransportError(f"request to {url} failed: {exc}") from exc
        self.last_status_code = response.status_code
        self.logger.debug(lambda: "api-response", extra={"path": url, "status": response.status_code})
        return response

    async def fetch(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET ``path`` and return the parsed JSON body."""
        url = self._url(path)
        token = await self.token_provider.get_token()
        response = await self._get(url, params, token)

        if response.status_code == 403:
            self.logger.warning(lambda: "api-403 refreshing token", extra={"path": path})
            token = await self.token_provider.refresh(rejected_token=token)
            response = await self._get(url, params, token)
            if response.status_code == 403:
                body = _json_or_none(response)
                raise AuthorizationError(
                    f"token rejected after refresh: {RemoteError.from_body(403, body)}"
                )

        return self._handle(response, path)

    def _handle(self, response: httpx.Response, path: str) -> Any:
        status = response.status_code
        body = _json_or_none(response)

        if status >= 400:
            error = RemoteError.from_body(status, body)
            self.logger.warning(lambda: "api-error", extra={"path": path, "status": status, "reason": error.reason})
            raise error
        if not 200 <= status < 300:
            raise ProtocolError(f"unexpected HTTP {status} for {path}")
        if not response.content:
            raise ProtocolError(f"empty response body for {path}")
        if body is None:
            raise ProtocolError(f"invalid JSON response for {path}")
        return body

    # ── Clubs ──────────────────────────────────────────────────────────

    async def get_club(self, club_tag: str) -> Dict[str, Any]:
        tag = ClubTag.parse(club_tag)
        return await self.fetch(f"clubs/{tag.url_encoded}")

    async def get_club_members(
        self,
        club_tag: str,
        after: Optional[str] = None,
        before: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = build_query(after, before, limit)
        tag = ClubTag.parse(club_tag)
        return await self.fetch(f"clubs/{tag.url_encoded}/members", params)

    # ── Players ────────────────────────────────────────────────────────

    async def get_player(self, player_tag: str) -> Dict[str, Any]:
        tag = PlayerTag.parse(player_tag)
        return await self.fetch(f"players/{tag.url_encoded}")

    async def get_player_battlelog(self, player_tag: str) -> Dict[str, Any]:
        tag = PlayerTag.parse(player_tag)
        return await self.fetch(f"players/{tag.url_encoded}/battlelog")

    # ── Brawlers ───────────────────────────────────────────────────────

    async def get_brawlers(
        self,
        after: Optional[str] = None,
        before: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        return await self.fetch("brawlers", build_query(after, before, limit))

    async def get_brawler(self, brawler_id: int) -> Dict[str, Any]:
        if isinstance(brawler_id, bool) or not isinstance(brawler_id, int) or brawler_id < 0:
            raise ValidationError(f"brawler id must be a non-negative integer, got {brawler_id!r}")
        return await self.fetch(f"brawlers/{brawler_id}")

    # ── Rankings ───────────────────────────────────────────────────────

    async def get_player_rankings(
        self,
        country: str = "global",
        after: Optional[str] = None,
        before: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = build_query(after, before, limit)
        return await self.fetch(f"rankings/{_country(country)}/players", params)

    async def get_club_rankings(
        self,
        country: str = "global",
        after: Optional[str] = None,
        before: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = build_query(after, before, limit)
        return await self.fetch(f"rankings/{_country(country)}/clubs", params)

    async def get_brawler_rankings(
        self,
        brawler_id: int,
        country: str = "global",
        after: Optional[str] = None,
        before: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = build_query(after, before, limit)
        if isinstance(brawler_id, bool) or not isinstance(brawler_id, int) or brawler_id < 0:
            raise ValidationError(f"brawler id must be a non-negative integer, got {brawler_id!r}")
        return await self.fetch(f"rankings/{_country(country)}/brawlers/{brawler_id}", params)

    # ── Events ─────────────────────────────────────────────────────────

    async def get_event_rotation(self) -> Any:
        return await self.fetch("events/rotation")


def _country(code: str) -> str:
    """'global' or a two-letter country code."""
    if not isinstance(code, str):
        raise ValidationError(f"country code must be a string, got {code!r}")
    code = code.strip()
    if code.lower() == "global":
        return "global"
    if len(code) != 2 or not code.isalpha():
        raise ValidationError(f"country code must be 'global' or two letters, got {code!r}")
    return quote(code.upper())


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
