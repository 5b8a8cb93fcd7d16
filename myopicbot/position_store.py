"""Collection of positions and the moves played from them, with statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass
class MoveCount:
    """A move and how many times it was seen."""

    mv: str
    freq: int = 1

    def to_json(self) -> dict[str, Any]:
        return {"mv": self.mv, "freq": self.freq}


@dataclass(frozen=True)
class DatabaseEntry:
    position: str
    moves: list[MoveCount]

    def to_json(self) -> dict[str, Any]:
        return {"position": self.position, "moves": [move.to_json() for move in self.moves]}


@dataclass
class StoreStats:
    new_position_inserts: int = 0
    new_alternate_move_inserts: int = 0
    duplicates: int = 0

    def to_json(self) -> dict[str, int]:
        return {
            "new_position_inserts": self.new_position_inserts,
            "new_alternate_move_inserts": self.new_alternate_move_inserts,
            "duplicates": self.duplicates,
        }


class PositionStore:
    """Counts the moves suggested for each position."""

    def __init__(self) -> None:
        self._inner: dict[str, list[MoveCount]] = {}
        self._stats = StoreStats()

    @property
    def stats(self) -> StoreStats:
        return self._stats

    def process(self, position: str, suggested_move: str) -> None:
        records = self._inner.get(position)
        if records is None:
            self._stats.new_position_inserts += 1
            self._inner[position] = [MoveCount(suggested_move)]
            return
        for record in records:
            if record.mv == suggested_move:
                self._stats.duplicates += 1
                record.freq += 1
                return
        self._stats.new_alternate_move_inserts += 1
        records.append(MoveCount(suggested_move))

    def entries(self) -> Iterator[DatabaseEntry]:
        """Yield a copy of every position with its moves."""
        for position, records in self._inner.items():
            yield DatabaseEntry(
                position=position,
                moves=[MoveCount(record.mv, record.freq) for record in records],
            )


@dataclass
class ExtractionErrors:
    """Where games could not be read or parsed, by file and game index."""

    read_error_total: int = 0
    read_error_locations: dict[str, list[int]] = field(default_factory=dict)
    parse_error_total: int = 0
    parse_error_locations: dict[str, list[int]] = field(default_factory=dict)

    def add_read_error(self, file: str, game_index: int) -> None:
        self.read_error_total += 1
        self.read_error_locations.setdefault(file, []).append(game_index)

    def add_parse_error(self, file: str, game_index: int) -> None:
        self.parse_error_total += 1
        self.parse_error_locations.setdefault(file, []).append(game_index)

    def to_json(self) -> dict[str, Any]:
        return {
            "read_error_total": self.read_error_total,
            "read_error_locations": {k: list(v) for k, v in self.read_error_locations.items()},
            "parse_error_total": self.parse_error_total,
            "parse_error_locations": {k: list(v) for k, v in self.parse_error_locations.items()},
        }