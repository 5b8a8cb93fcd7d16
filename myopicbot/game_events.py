"""Events received on a game's event stream."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

_U64_MAX = 2**64 - 1
_U32_MAX = 2**32 - 1


class GameEventError(ValueError):
    """A game event could not be decoded."""


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise GameEventError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise GameEventError(f"missing field {key!r}")
    return data[key]


def _uint(data: Mapping[str, Any], key: str, maximum: int = _U64_MAX) -> int:
    value = _require(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise GameEventError(f"field {key!r} must be an unsigned integer, got {value!r}")
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise GameEventError(f"field {key!r} must be a string, got {value!r}")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise GameEventError(f"field {key!r} must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class Player:
    id: str


@dataclass(frozen=True)
class Clock:
    initial: int
    increment: int


@dataclass(frozen=True)
class GameState:
    moves: str
    wtime: int
    btime: int
    winc: int
    binc: int
    status: str


@dataclass(frozen=True)
class GameFull:
    white: Player
    black: Player
    clock: Clock
    state: GameState
    initial_fen: str


@dataclass(frozen=True)
class ChatLine:
    username: Optional[str] = None
    text: Optional[str] = None
    room: Optional[str] = None


@dataclass(frozen=True)
class OpponentGone:
    gone: bool
    claim_win_in_seconds: Optional[int] = None


GameEvent = Union[GameFull, GameState, ChatLine, OpponentGone]


def _player(data: Any) -> Player:
    return Player(id=_str(_mapping(data, "player"), "id"))


def _clock(data: Any) -> Clock:
    data = _mapping(data, "clock")
    return Clock(initial=_uint(data, "initial"), increment=_uint(data, "increment"))


def _game_state(data: Any) -> GameState:
    data = _mapping(data, "game state")
    return GameState(
        moves=_str(data, "moves"),
        wtime=_uint(data, "wtime"),
        btime=_uint(data, "btime"),
        winc=_uint(data, "winc"),
        binc=_uint(data, "binc"),
        status=_str(data, "status"),
    )


def _game_full(data: Mapping[str, Any]) -> GameFull:
    return GameFull(
        white=_player(_require(data, "white")),
        black=_player(_require(data, "black")),
        clock=_clock(_require(data, "clock")),
        state=_game_state(_require(data, "state")),
        initial_fen=_str(data, "initialFen"),
    )


def _chat_line(data: Mapping[str, Any]) -> ChatLine:
    return ChatLine(
        username=_optional_str(data, "username"),
        text=_optional_str(data, "text"),
        room=_optional_str(data, "room"),
    )


def _opponent_gone(data: Mapping[str, Any]) -> OpponentGone:
    gone = _require(data, "gone")
    if not isinstance(gone, bool):
        raise GameEventError(f"field 'gone' must be a boolean, got {gone!r}")
    claim = None
    if data.get("claimWinInSeconds") is not None:
        claim = _uint(data, "claimWinInSeconds", _U32_MAX)
    return OpponentGone(gone=gone, claim_win_in_seconds=claim)


_PARSERS = {
    "gameFull": _game_full,
    "gameState": _game_state,
    "chatLine": _chat_line,
    "opponentGone": _opponent_gone,
}


def parse_game_event(data: Any) -> GameEvent:
    """Decode a game event from its parsed JSON object, dispatching on ``type``."""
    data = _mapping(data, "game event")
    kind = _require(data, "type")
    parser = _PARSERS.get(kind) if isinstance(kind, str) else None
    if parser is None:
        raise GameEventError(f"unknown game event type {kind!r}")
    return parser(data)


def parse_game_event_json(text: str) -> GameEvent:
    """Decode a game event from JSON text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as error:
        raise GameEventError(f"invalid JSON: {error}") from error
    return parse_game_event(data)