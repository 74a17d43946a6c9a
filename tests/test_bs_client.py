"""Data API dispatcher: 403 recovery, error mapping, paging validation."""

import httpx
import pytest

from conftest import Recorder, StaticTokens
from core.errors import AuthorizationError, ProtocolError, RemoteError, ValidationError
from infrastructure.api import BrawlStarsClient, build_query

BASE = "https://api.test/v1"
CLUB = {"tag": "#2PP", "name": "Tribe", "type": "open", "badgeId": 8000000, "trophies": 1000}


def make_client(respond, tokens=None):
    recorder = Recorder(respond)
    client = BrawlStarsClient(tokens or StaticTokens("token-a", "token-b"), base_url=BASE, transport=recorder.transport)
    return client, recorder


def bearer(request: httpx.Request) -> str:
    return request.headers["authorization"]


@pytest.mark.asyncio
async def test_success_returns_parsed_body():
    client, recorder = make_client(lambda r: httpx.Response(200, json=CLUB))
    async with client:
        assert await client.get_club("#2pp") == CLUB
    assert bearer(recorder.requests[0]) == "Bearer token-a"
    assert client.last_status_code == 200


@pytest.mark.asyncio
async def test_403_refreshes_once_and_replays_request():
    def respond(request):
        if bearer(request) == "Bearer token-a":
            return httpx.Response(403, json={"reason": "accessDenied.invalidIp"})
        return httpx.Response(200, json=CLUB)

    tokens = StaticTokens("token-a", "token-b")
    client, recorder = make_client(respond, tokens)
    async with client:
        assert await client.get_club("#2PP") == CLUB

    assert tokens.refreshes == ["token-a"]
    assert len(recorder.requests) == 2
    first, retry = recorder.requests
    assert first.url == retry.url
    assert bearer(retry) == "Bearer token-b"


@pytest.mark.asyncio
async def test_second_403_is_fatal_without_third_attempt():
    tokens = StaticTokens("token-a", "token-b")
    client, recorder = make_client(
        lambda r: httpx.Response(403, json={"reason": "accessDenied", "message": "Invalid authorization"}),
        tokens,
    )
    async with client:
        with pytest.raises(AuthorizationError):
            await client.get_player("#9QU")

    assert len(recorder.requests) == 2
    assert len(tokens.refreshes) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 404, 429, 500, 503])
async def test_other_errors_surface_remote_error_without_retry(status):
    body = {"reason": "notFound", "message": "Not found with tag %23ABC", "type": "error", "detail": {"x": 1}}
    tokens = StaticTokens()
    client, recorder = make_client(lambda r: httpx.Response(status, json=body), tokens)
    async with client:
        with pytest.raises(RemoteError) as exc_info:
            await client.get_player("#ABC")

    err = exc_info.value
    assert err.status_code == status
    assert (err.reason, err.message, err.type, err.detail) == ("notFound", "Not found with tag %23ABC", "error", {"x": 1})
    assert len(recorder.requests) == 1
    assert tokens.refreshes == []


@pytest.mark.asyncio
async def test_error_without_json_body_uses_defaults():
    client, _ = make_client(lambda r: httpx.Response(502, text="<html>bad gateway</html>"))
    async with client:
        with pytest.raises(RemoteError) as exc_info:
            await client.get_event_rotation()
    assert (exc_info.value.reason, exc_info.value.message) == ("unknown", "Unknown error")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [httpx.Response(200), httpx.Response(200, text="{not json"), httpx.Response(204)],
    ids=["empty", "invalid-json", "no-content"],
)
async def test_unusable_success_body_is_protocol_error(response):
    client, _ = make_client(lambda r: response)
    async with client:
        with pytest.raises(ProtocolError):
            await client.get_brawlers()


@pytest.mark.asyncio
async def test_tags_are_normalised_and_encoded():
    client, recorder = make_client(lambda r: httpx.Response(200, json={"items": []}))
    async with client:
        await client.get_club_members("2ppo", limit=10)
        await client.get_player_battlelog("#9qu")
    members, battlelog = recorder.requests
    assert members.url.raw_path == b"/v1/clubs/%232PP0/members?limit=10"
    assert battlelog.url.raw_path == b"/v1/players/%239QU/battlelog"


@pytest.mark.asyncio
async def test_rankings_paths():
    client, recorder = make_client(lambda r: httpx.Response(200, json={"items": []}))
    async with client:
        await client.get_player_rankings()
        await client.get_club_rankings("fr", after="abc")
        await client.get_brawler_rankings(16000000, "US")
    assert [r.url.raw_path for r in recorder.requests] == [
        b"/v1/rankings/global/players",
        b"/v1/rankings/FR/clubs?after=abc",
        b"/v1/rankings/US/brawlers/16000000",
    ]


@pytest.mark.asyncio
async def test_after_and_before_together_make_no_request(no_network_transport):
    client = BrawlStarsClient(StaticTokens(), base_url=BASE, transport=no_network_transport)
    async with client:
        with pytest.raises(ValidationError):
            await client.get_club_members("#2PP", after="a", before="b")
        with pytest.raises(ValidationError):
            await client.get_player_rankings(after="a", before="b")


@pytest.mark.asyncio
@pytest.mark.parametrize("call", [
    lambda c: c.get_club("#"),
    lambda c: c.get_player("not a tag!"),
    lambda c: c.get_brawler(-1),
    lambda c: c.get_player_rankings("europe"),
])
async def test_invalid_arguments_make_no_request(call, no_network_transport):
    client = BrawlStarsClient(StaticTokens(), base_url=BASE, transport=no_network_transport)
    async with client:
        with pytest.raises(ValidationError):
            await call(client)


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        ({}, {}),
        ({"after": "eyJwb3MiOjF9"}, {"after": "eyJwb3MiOjF9"}),
        ({"before": "b", "limit": 5}, {"before": "b", "limit": 5}),
    ],
)
def test_build_query(kwargs, expected):
    assert build_query(**kwargs) == expected


@pytest.mark.parametrize("kwargs", [
    {"after": "a", "before": "b"},
    {"after": ""},
    {"limit": 0},
    {"limit": True},
    {"limit": "10"},
])
def test_build_query_rejects(kwargs):
    with pytest.raises(ValidationError):
        build_query(**kwargs)
