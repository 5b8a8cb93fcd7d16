"""Opening book table description and weighted choice of a book move."""

from __future__ import annotations

import random
import re
from bisect import bisect_right
from dataclasses import dataclass
from itertools import accumulate
from typing import Any, Callable, Iterable, Mapping

MOVE_FREQ_SEPARATOR = ":"

_USIZE_MAX = 2**64 - 1
_U8_MAX = 2**8 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class OpeningTable:
    """Where the opening book lives and how its items are keyed."""

    name: str
    region: str
    position_key: str
    move_key: str
    max_depth: int

    @classmethod
    def from_json(cls, data: Any) -> "OpeningTable":
        data = _mapping(data, "opening table")
        if "maxDepth" not in data:
            raise ValueError("missing field 'maxDepth'")
        depth = data["maxDepth"]
        if isinstance(depth, bool) or not isinstance(depth, int) or not 0 <= depth <= _U8_MAX:
            raise ValueError(f"field 'maxDepth' must be an integer in 0..=255, got {depth!r}")
        return cls(
            name=_str(data, "name"),
            region=_str(data, "region"),
            position_key=_str(data, "positionKey"),
            move_key=_str(data, "moveKey"),
            max_depth=depth,
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "region": self.region,
            "positionKey": self.position_key,
            "moveKey": self.move_key,
            "maxDepth": self.max_depth,
        }


@dataclass(frozen=True)
class MoveRecord:
    """A book move together with how often it was played."""

    mv: str
    freq: int

    @classmethod
    def parse(cls, text: str) -> "MoveRecord":
        """Parse ``<move>:<frequency>``."""
        parts = text.split(MOVE_FREQ_SEPARATOR)
        if len(parts) < 2:
            raise ValueError(f"Cannot parse freq from {text}")
        freq_text = parts[1]
        if not _UNSIGNED.fullmatch(freq_text):
            raise ValueError(f"Cannot parse freq from {text}")
        freq = int(freq_text)
        if freq > _USIZE_MAX:
            raise ValueError(f"Frequency too large in {text}")
        return cls(mv=parts[0], freq=freq)


def position_index(fen: str) -> str:
    """The book key of a position: piece placement, active side and castling rights."""
    return " ".join(fen.split()[:3])


def _random_usize() -> int:
    return random.getrandbits(64)


def choose_move(available: Iterable[str], rng: Callable[[], int] = _random_usize) -> str:
    """Pick a move from ``move:freq`` strings with probability proportional to frequency.

    Unparseable entries are ignored.  ``rng`` supplies a non-negative integer
    which is reduced modulo the total frequency.
    """
    available = list(available)
    records = []
    for text in available:
        try:
            records.append(MoveRecord.parse(text))
        except ValueError:
            continue
    records.sort(key=lambda record: record.freq)

    bounds = list(accumulate(record.freq for record in records))
    total = bounds[-1] if bounds else 0
    if total == 0:
        raise ValueError(f"Freq is 0 for {available!r}")
    choice = rng() % total
    return records[bisect_right(bounds, choice)].mv