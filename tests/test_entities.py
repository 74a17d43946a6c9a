"""Entity mapping from raw API payloads."""

import pytest

from conftest import key_record
from core.errors import ValidationError
from domain.entities import (
    ApiKey,
    Brawler,
    Club,
    ClubRanking,
    Player,
    PlayerRanking,
    members_from_list,
    rankings_from_list,
)
from domain.enums import ClubRole, ClubType

PLAYER = {
    "tag": "#9QU",
    "name": "Ash",
    "nameColor": "0xff1ba5f5",
    "icon": {"id": 28000000},
    "trophies": 31000,
    "highestTrophies": 32000,
    "expLevel": 210,
    "expPoints": 250000,
    "3vs3Victories": 9000,
    "soloVictories": 800,
    "duoVictories": 700,
    "isQualifiedFromChampionshipChallenge": True,
    "club": {"tag": "#2PP", "name": "Tribe"},
    "brawlers": [
        {
            "id": 16000000, "name": "SHELLY", "power": 11, "rank": 30, "trophies": 900,
            "highestTrophies": 1000,
            "starPowers": [{"id": 23000076, "name": "SHELL SHOCK"}],
            "gadgets": [{"id": 23000255, "name": "FAST FORWARD"}],
            "gears": [{"id": 62000002, "name": "DAMAGE", "level": 3}],
        },
    ],
}


def member(tag, role="member", trophies=1000):
    return {"tag": tag, "name": f"m{tag}", "nameColor": "0xffffffff", "role": role,
            "trophies": trophies, "icon": {"id": 28000000}}


def test_player_from_dict():
    player = Player.from_dict(PLAYER)
    assert str(player.tag) == "#9QU"
    assert player.three_vs_three_victories == 9000
    assert player.total_victories == 10500
    assert player.club.name == "Tribe"
    assert player.brawler(16000000).is_maxed
    assert player.brawler(1) is None
    assert player.to_dict()["club"] == {"tag": "#2PP", "name": "Tribe"}


def test_player_without_club():
    player = Player.from_dict({**PLAYER, "club": {}})
    assert player.club is None


@pytest.mark.parametrize(
    "patch, field",
    [
        ({"trophies": "lots"}, "Player.trophies"),
        ({"expLevel": True}, "Player.expLevel"),
        ({"icon": None}, "PlayerIcon"),
        ({"brawlers": {}}, "Player.brawlers"),
    ],
)
def test_player_validation_names_entity_and_field(patch, field):
    with pytest.raises(ValidationError, match=field):
        Player.from_dict({**PLAYER, **patch})


def test_club_from_dict():
    club = Club.from_dict({
        "tag": "#2PP", "name": "Tribe", "type": "inviteOnly", "badgeId": 8000000,
        "trophies": 50000, "requiredTrophies": 10000, "description": "<cff0000>hi</c>",
        "members": [member("#AAA", "president"), member("#BBB", "vicePresident")],
    })
    assert club.type is ClubType.INVITE_ONLY
    assert not club.type.accepts_requests
    assert str(club.president.tag) == "#AAA"
    assert club.members[1].role.can_manage
    assert club.to_dict()["description"] == "hi"
    assert not club.is_full


def test_club_member_cap():
    with pytest.raises(ValidationError, match="at most 30"):
        members_from_list([member(f"#A{i:02d}") for i in range(31)])
    assert len(members_from_list([member(f"#A{i:02d}") for i in range(30)])) == 30


def test_unknown_club_role_is_rejected():
    with pytest.raises(ValidationError):
        members_from_list([member("#AAA", role="captain")])
    assert ClubRole.from_string("senior") is ClubRole.SENIOR


def test_brawler_catalogue_entry():
    brawler = Brawler.from_dict({"id": 16000001, "name": "COLT", "starPowers": [], "gadgets": []})
    assert brawler.to_dict() == {"id": 16000001, "name": "COLT", "star_powers": [], "gadgets": []}
    with pytest.raises(ValidationError):
        Brawler.from_dict({"id": -1, "name": "X"})


def test_rankings():
    players = rankings_from_list(
        [{"tag": "#9QU", "name": "Ash", "rank": 1, "trophies": 80000, "icon": {"id": 1},
          "club": {"name": "Tribe"}}],
        PlayerRanking.from_dict,
    )
    assert players[0].club_name == "Tribe"
    clubs = rankings_from_list(
        [{"tag": "#2PP", "name": "Tribe", "rank": 1, "trophies": 1500000, "memberCount": 30, "badgeId": 8000000}],
        ClubRanking.from_dict,
    )
    assert clubs[0].member_count == 30
    with pytest.raises(ValidationError):
        rankings_from_list([{}] * 201, ClubRanking.from_dict)


def test_api_key_mapping_hides_secret():
    raw = key_record("k1", ["203.0.113.0/24", "198.51.100.7"])
    raw["cidrRanges"] = [{"cidrs": raw["cidrRanges"], "type": "client"}]
    key = ApiKey.from_dict(raw)
    assert key.covers("203.0.113.77")
    assert key.covers("198.51.100.7")
    assert not key.covers("198.51.100.8")
    assert "key" not in key.to_dict()
    assert key.to_dict()["cidr_ranges"] == ["203.0.113.0/24", "198.51.100.7"]


def test_api_key_requires_id():
    with pytest.raises(ValidationError, match="ApiKey.id"):
        ApiKey.from_dict({"name": "x"})


@pytest.mark.parametrize("key_id", ["", "  "])
def test_api_key_rejects_blank_id(key_id):
    with pytest.raises(ValidationError, match="ApiKey.id"):
        ApiKey.from_dict(key_record(key_id, ["203.0.113.5"]))
