"""Shared fixtures and fakes for the bsclient test suite."""

import itertools
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from core.errors import RemoteError
from domain.entities import ApiKey
from domain.values import parse_ipv4


OK_STATUS = {"code": 0, "message": "ok", "detail": None}


def key_record(key_id: str, cidrs: List[str], *, name: str = "autoCreate", secret: Optional[str] = None) -> dict:
    """A key as the portal's list/create endpoints return it."""
    return {
        "id": key_id,
        "developerId": "dev-1",
        "tier": "developer/silver",
        "name": name,
        "description": f"[{cidrs[0] if cidrs else '-'}] test key",
        "origins": None,
        "scopes": ["brawlstars"],
        "cidrRanges": cidrs,
        "validUntil": None,
        "key": secret if secret is not None else f"secret-{key_id}-0123456789",
    }


class FakeResolver:
    """In-memory public address lookup."""

    def __init__(self, address: str = "203.0.113.5"):
        self.address = address
        self.calls = 0
        self.error: Optional[Exception] = None

    async def resolve(self) -> str:
        self.calls += 1
        if self.error:
            raise self.error
        return self.address


class FakePortal:
    """
    Stand-in for PortalSessionClient.

    Keeps keys in memory and records every call in ``calls`` so tests can
    assert on exactly which portal operations ran.
    """

    def __init__(self, keys: Optional[List[dict]] = None):
        self.keys: Dict[str, ApiKey] = {}
        for raw in keys or []:
            k = ApiKey.from_dict(raw)
            self.keys[k.id] = k
        self.calls: List[str] = []
        self.logged_in = False
        self.login_error: Optional[Exception] = None
        self.list_error: Optional[Exception] = None
        self.create_error: Optional[Exception] = None
        self.revoke_error: Optional[Exception] = None
        self._ids = itertools.count(1)

    async def ensure_session(self) -> None:
        self.calls.append("ensure_session")
        if self.login_error:
            raise self.login_error
        self.logged_in = True

    async def list_keys(self) -> List[ApiKey]:
        self.calls.append("list_keys")
        if self.list_error:
            raise self.list_error
        return list(self.keys.values())

    async def create_key(self, address: str, name: Optional[str] = None, description: Optional[str] = None) -> ApiKey:
        self.calls.append("create_key")
        parse_ipv4(address)
        if self.create_error:
            raise self.create_error
        key_id = f"new-{next(self._ids)}"
        key = ApiKey.from_dict(key_record(key_id, [address], name=name or "autoCreate"))
        self.keys[key.id] = key
        return key

    async def revoke_key(self, key_id: str) -> bool:
        self.calls.append("revoke_key")
        if self.revoke_error:
            raise self.revoke_error
        if key_id not in self.keys:
            raise RemoteError(404, reason="notFound", message="no such key")
        del self.keys[key_id]
        return True

    async def logout(self) -> None:
        self.calls.append("logout")
        self.logged_in = False


class StaticTokens:
    """Token provider that hands out a fixed sequence and counts refreshes."""

    def __init__(self, *tokens: str):
        self.tokens = list(tokens) or ["token-a"]
        self.index = 0
        self.refreshes: List[Optional[str]] = []

    async def get_token(self) -> str:
        return self.tokens[self.index]

    async def refresh(self, rejected_token: Optional[str] = None) -> str:
        self.refreshes.append(rejected_token)
        self.index = min(self.index + 1, len(self.tokens) - 1)
        return self.tokens[self.index]


class Recorder:
    """httpx.MockTransport handler that records requests and delegates to ``respond``."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def portal():
    return FakePortal()


@pytest.fixture
def no_network_transport():
    def fail(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected request to {request.url}")
    return httpx.MockTransport(fail)
