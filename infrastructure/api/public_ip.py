"""Public IPv4 discovery via ipify."""
from __future__ import annotations

from typing import Optional

import httpx

from config import settings
from core.errors import ProtocolError, TransportError, ValidationError
from core.logging.logger import StructuredLogger, get_logger
from domain.interfaces import IPublicIPResolver
from domain.values import parse_ipv4


class PublicIPResolver(IPublicIPResolver):
    """Asks an echo service which address our requests come from."""

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.url = url or settings.PUBLIC_IP_URL
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._transport = transport
        self.logger = logger or get_logger(__name__, service="ip")

    async def resolve(self) -> str:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"public IP lookup failed: {exc}") from exc

        try:
            address = response.json()["ip"]
        except (ValueError, KeyError, TypeError) as exc:
            raise ProtocolError(f"unexpected public IP response: {response.text[:100]!r}") from exc
        try:
            address = parse_ipv4(address)
        except ValidationError as exc:
            raise ProtocolError(str(exc)) from exc
        self.logger.debug(lambda: "public-ip-resolved", extra={"address": address})
        return address
