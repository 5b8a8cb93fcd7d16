"""Ratings, time limits and challenge descriptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

_U32_MAX = 2**32 - 1


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _uint(data: Mapping[str, Any], key: str) -> int:
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U32_MAX:
        raise ValueError(f"field {key!r} must be an unsigned 32-bit integer, got {value!r}")
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {value!r}")
    return value


def _optional_bool(data: Mapping[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise ValueError(f"field {key!r} must be a boolean, got {value!r}")
    return value


class TimeLimitType(Enum):
    """Speed categories of a game."""

    BLITZ = "blitz"
    BULLET = "bullet"
    RAPID = "rapid"
    ULTRA_BULLET = "ultraBullet"
    CLASSICAL = "classical"


@dataclass(frozen=True)
class TimeLimits:
    """A clock limit and increment, both in seconds."""

    limit: int
    increment: int

    def get_type(self) -> TimeLimitType:
        estimate = self.increment * 40 + self.limit
        if estimate < 30:
            return TimeLimitType.ULTRA_BULLET
        if estimate < 180:
            return TimeLimitType.BULLET
        if estimate < 480:
            return TimeLimitType.BLITZ
        if estimate < 1500:
            return TimeLimitType.RAPID
        return TimeLimitType.CLASSICAL

    @classmethod
    def from_json(cls, data: Any) -> "TimeLimits":
        data = _mapping(data, "time limits")
        return cls(limit=_uint(data, "limit"), increment=_uint(data, "increment"))


@dataclass(frozen=True)
class ChallengeRequest:
    rated: bool
    time_limit: TimeLimits
    target_user_id: str


@dataclass(frozen=True)
class UserDetailsGamePerf:
    rating: int
    prov: Optional[bool] = None

    @classmethod
    def from_json(cls, data: Any) -> "UserDetailsGamePerf":
        data = _mapping(data, "game performance")
        return cls(rating=_uint(data, "rating"), prov=_optional_bool(data, "prov"))


def _optional_perf(data: Mapping[str, Any], key: str) -> Optional[UserDetailsGamePerf]:
    value = data.get(key)
    return None if value is None else UserDetailsGamePerf.from_json(value)


@dataclass(frozen=True)
class UserDetailsPerfs:
    blitz: Optional[UserDetailsGamePerf] = None
    bullet: Optional[UserDetailsGamePerf] = None
    rapid: Optional[UserDetailsGamePerf] = None
    ultra_bullet: Optional[UserDetailsGamePerf] = None
    classical: Optional[UserDetailsGamePerf] = None

    @classmethod
    def from_json(cls, data: Any) -> "UserDetailsPerfs":
        data = _mapping(data, "performances")
        return cls(
            blitz=_optional_perf(data, "blitz"),
            bullet=_optional_perf(data, "bullet"),
            rapid=_optional_perf(data, "rapid"),
            ultra_bullet=_optional_perf(data, "ultraBullet"),
            classical=_optional_perf(data, "classical"),
        )

    def rating_for(self, time_limit_type: TimeLimitType) -> Optional[UserDetailsGamePerf]:
        return {
            TimeLimitType.BULLET: self.bullet,
            TimeLimitType.BLITZ: self.blitz,
            TimeLimitType.RAPID: self.rapid,
            TimeLimitType.ULTRA_BULLET: self.ultra_bullet,
            TimeLimitType.CLASSICAL: self.classical,
        }[time_limit_type]


@dataclass(frozen=True)
class UserDetails:
    perfs: UserDetailsPerfs

    @classmethod
    def from_json(cls, data: Any) -> "UserDetails":
        data = _mapping(data, "user details")
        if "perfs" not in data:
            raise ValueError("missing field 'perfs'")
        return cls(perfs=UserDetailsPerfs.from_json(data["perfs"]))


@dataclass(frozen=True)
class OnlineBot:
    id: str
    perfs: UserDetailsPerfs
    tos_violation: Optional[bool] = None

    @classmethod
    def from_json(cls, data: Any) -> "OnlineBot":
        data = _mapping(data, "online bot")
        if "perfs" not in data:
            raise ValueError("missing field 'perfs'")
        return cls(
            id=_str(data, "id"),
            perfs=UserDetailsPerfs.from_json(data["perfs"]),
            tos_violation=_optional_bool(data, "tosViolation"),
        )