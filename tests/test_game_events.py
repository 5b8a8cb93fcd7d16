import json

import pytest

from myopicbot.game_events import (
    ChatLine,
    Clock,
    GameEventError,
    GameFull,
    GameState,
    OpponentGone,
    Player,
    parse_game_event,
    parse_game_event_json,
)


def _state_data(moves, **extra):
    data = dict(moves=moves, wtime=1000, btime=1000, winc=0, binc=0, status="started")
    data.update(extra)
    return data


def test_opponent_gone_false_without_claim():
    event = parse_game_event_json(json.dumps({"type": "opponentGone", "gone": False}))
    assert event == OpponentGone(gone=False, claim_win_in_seconds=None)


def test_opponent_gone_true_with_claim():
    data = {"type": "opponentGone", "gone": True, "claimWinInSeconds": 8}
    assert parse_game_event(data) == OpponentGone(gone=True, claim_win_in_seconds=8)


def test_chat_line_with_null_room():
    data = {"type": "chatLine", "username": "player-one", "text": "Hi", "room": None}
    assert parse_game_event_json(json.dumps(data)) == ChatLine(
        username="player-one", text="Hi", room=None
    )


def test_chat_line_draw_offer_in_player_room():
    data = {"type": "chatLine", "room": "player", "username": "system", "text": "Draw?"}
    assert parse_game_event(data) == ChatLine(username="system", text="Draw?", room="player")


def test_state_ignores_unknown_fields():
    data = {"type": "gameState", **_state_data("e2e4 c7c5", wdraw=False, other="x")}
    assert parse_game_event_json(json.dumps(data)) == GameState(
        moves="e2e4 c7c5", wtime=1000, btime=1000, winc=0, binc=0, status="started"
    )


def test_game_full_nested_parts():
    data = {
        "type": "gameFull",
        "id": "123",
        "white": {"id": "player-one", "rating": 1500, "title": None},
        "black": {"id": "myopic-bot", "title": "BOT"},
        "clock": {"initial": 1200000, "increment": 10000},
        "state": _state_data("e2e4 e7e5", bdraw=False),
        "initialFen": "startpos",
    }
    event = parse_game_event_json(json.dumps(data))
    assert isinstance(event, GameFull)
    assert event.white == Player(id="player-one")
    assert event.black == Player(id="myopic-bot")
    assert event.clock == Clock(initial=1200000, increment=10000)
    assert event.state == GameState(
        moves="e2e4 e7e5", wtime=1000, btime=1000, winc=0, binc=0, status="started"
    )
    assert event.initial_fen == "startpos"


def test_chat_line_fields_all_optional():
    assert parse_game_event({"type": "chatLine"}) == ChatLine()


def test_unknown_type_rejected():
    with pytest.raises(GameEventError):
        parse_game_event({"type": "gameFinish"})


def test_missing_type_rejected():
    with pytest.raises(GameEventError):
        parse_game_event({"gone": True})


def test_state_missing_field_rejected():
    with pytest.raises(GameEventError):
        parse_game_event({"type": "gameState", "moves": "", "wtime": 1, "btime": 1, "winc": 0})


def test_negative_time_rejected():
    data = {"type": "gameState", **_state_data("")}
    data["wtime"] = -5
    with pytest.raises(GameEventError):
        parse_game_event(data)


def test_invalid_json_rejected():
    with pytest.raises(GameEventError):
        parse_game_event_json("{not json")


def test_error_is_value_error():
    with pytest.raises(ValueError):
        parse_game_event(["gameState"])