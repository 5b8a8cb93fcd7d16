import json

import pytest

from myopicbot.events import (
    Challenge,
    Challenger,
    ClockTimeControl,
    Correspondence,
    EventParseError,
    GameStart,
    Opponent,
    Unlimited,
    Variant,
    parse_lichess_event,
    parse_lichess_event_json,
    parse_time_control,
)


def _challenge_event(challenge_id, time_control):
    return {
        "type": "challenge",
        "challenge": {
            "id": challenge_id,
            "status": "created",
            "challenger": {"id": "player-one", "rating": 1500, "title": None},
            "destUser": {"id": "myopic-bot", "title": "BOT"},
            "variant": {"key": "standard", "name": "Standard"},
            "rated": True,
            "timeControl": time_control,
            "color": "random",
        },
    }


def _expected(challenge_id, time_control):
    return Challenge(
        id=challenge_id,
        variant=Variant(key="standard"),
        challenger=Challenger(id="player-one"),
        time_control=time_control,
    )


def test_game_start_ignores_extra_fields():
    data = {"type": "gameStart", "game": {"id": "g1", "opponent": {"id": "player-one", "x": 1}}}
    assert parse_lichess_event_json(json.dumps(data)) == GameStart(
        id="g1", opponent=Opponent(id="player-one")
    )


def test_challenge_with_unlimited_time_control():
    data = _challenge_event("c1", {"type": "unlimited"})
    assert parse_lichess_event_json(json.dumps(data)) == _expected("c1", Unlimited())


def test_challenge_with_correspondence_time_control():
    data = _challenge_event("c2", {"type": "correspondence", "daysPerTurn": 2})
    assert parse_lichess_event(data) == _expected("c2", Correspondence(days_per_turn=2))


def test_challenge_with_clock_time_control():
    data = _challenge_event("c3", {"type": "clock", "limit": 600, "increment": 3, "show": "x"})
    assert parse_lichess_event(data) == _expected(
        "c3", ClockTimeControl(limit=600, increment=3)
    )


def test_unknown_event_type_rejected():
    with pytest.raises(EventParseError):
        parse_lichess_event({"type": "gameFinish", "game": {}})


def test_missing_field_rejected():
    with pytest.raises(EventParseError, match="opponent"):
        parse_lichess_event({"type": "gameStart", "game": {"id": "g1"}})


def test_invalid_json_rejected():
    with pytest.raises(EventParseError):
        parse_lichess_event_json("{not json")


def test_unknown_time_control_rejected():
    with pytest.raises(EventParseError):
        parse_time_control({"type": "hourglass"})


def test_negative_clock_limit_rejected():
    with pytest.raises(EventParseError):
        parse_time_control({"type": "clock", "limit": -1, "increment": 3})