"""Events received on the account's event stream."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Union

_U32_MAX = 2**32 - 1


class EventParseError(ValueError):
    """An account event could not be decoded."""


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise EventParseError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise EventParseError(f"missing field {key!r}")
    return data[key]


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise EventParseError(f"field {key!r} must be a string, got {value!r}")
    return value


def _u32(data: Mapping[str, Any], key: str) -> int:
    value = _require(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U32_MAX:
        raise EventParseError(f"field {key!r} must be an unsigned 32-bit integer, got {value!r}")
    return value


@dataclass(frozen=True)
class Variant:
    key: str


@dataclass(frozen=True)
class Challenger:
    id: str


@dataclass(frozen=True)
class Opponent:
    id: str


@dataclass(frozen=True)
class Unlimited:
    """A game without a clock."""


@dataclass(frozen=True)
class Correspondence:
    days_per_turn: int


@dataclass(frozen=True)
class ClockTimeControl:
    limit: int
    increment: int


TimeControl = Union[Unlimited, Correspondence, ClockTimeControl]


@dataclass(frozen=True)
class Challenge:
    id: str
    variant: Variant
    time_control: TimeControl
    challenger: Challenger


@dataclass(frozen=True)
class GameStart:
    id: str
    opponent: Opponent


LichessEvent = Union[GameStart, Challenge]


def parse_time_control(data: Any) -> TimeControl:
    """Decode a time control, dispatching on its ``type`` field."""
    data = _mapping(data, "time control")
    kind = _require(data, "type")
    if kind == "unlimited":
        return Unlimited()
    if kind == "correspondence":
        return Correspondence(days_per_turn=_u32(data, "daysPerTurn"))
    if kind == "clock":
        return ClockTimeControl(limit=_u32(data, "limit"), increment=_u32(data, "increment"))
    raise EventParseError(f"unknown time control type {kind!r}")


def _game_start(data: Any) -> GameStart:
    data = _mapping(data, "game")
    opponent = _mapping(_require(data, "opponent"), "opponent")
    return GameStart(id=_str(data, "id"), opponent=Opponent(id=_str(opponent, "id")))


def _challenge(data: Any) -> Challenge:
    data = _mapping(data, "challenge")
    variant = _mapping(_require(data, "variant"), "variant")
    challenger = _mapping(_require(data, "challenger"), "challenger")
    return Challenge(
        id=_str(data, "id"),
        variant=Variant(key=_str(variant, "key")),
        time_control=parse_time_control(_require(data, "timeControl")),
        challenger=Challenger(id=_str(challenger, "id")),
    )


def parse_lichess_event(data: Any) -> LichessEvent:
    """Decode an account event from its parsed JSON object."""
    data = _mapping(data, "event")
    kind = _require(data, "type")
    if kind == "gameStart":
        return _game_start(_require(data, "game"))
    if kind == "challenge":
        return _challenge(_require(data, "challenge"))
    raise EventParseError(f"unknown event type {kind!r}")


def parse_lichess_event_json(text: str) -> LichessEvent:
    """Decode an account event from JSON text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as error:
        raise EventParseError(f"invalid JSON: {error}") from error
    return parse_lichess_event(data)