"""Public address discovery."""

import httpx
import pytest

from core.errors import ProtocolError, TransportError
from infrastructure.api import PublicIPResolver


def resolver_for(handler):
    return PublicIPResolver("https://ip.test/?format=json", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_resolves_ipify_payload():
    resolver = resolver_for(lambda r: httpx.Response(200, json={"ip": "203.0.113.5"}))
    assert await resolver.resolve() == "203.0.113.5"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"address": "203.0.113.5"}),
        httpx.Response(200, json={"ip": "2001:db8::1"}),
        httpx.Response(200, text="203.0.113.5"),
    ],
    ids=["missing-field", "ipv6", "not-json"],
)
async def test_bad_payload_is_protocol_error(response):
    with pytest.raises(ProtocolError):
        await resolver_for(lambda r: response).resolve()


@pytest.mark.asyncio
async def test_http_failure_is_transport_error():
    with pytest.raises(TransportError):
        await resolver_for(lambda r: httpx.Response(503)).resolve()

    def refuse(request):
        raise httpx.ConnectError("down", request=request)

    with pytest.raises(TransportError):
        await resolver_for(refuse).resolve()
