"""Preparation of opening-book entries as batched table write requests."""

from __future__ import annotations

import argparse
import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, TypeVar

T = TypeVar("T")

PAUSE_DURATION_SECONDS = 1.0

_REGION = re.compile(r"[a-z]{2}(-gov|-iso|-isob)?-[a-z]+-[0-9]+")
_USIZE_MAX = 2**64 - 1


@dataclass(frozen=True)
class UploadOptions:
    source: Path
    table: str
    region: str
    wcu: int
    frequency_separator: str = ":"
    position_attribute: str = "PositionFEN"
    moves_attribute: str = "Moves"

    def to_json(self) -> dict[str, Any]:
        return {
            "source": str(self.source),
            "table": self.table,
            "region": self.region,
            "wcu": self.wcu,
            "frequency-separator": self.frequency_separator,
            "position-attribute": self.position_attribute,
            "moves-attribute": self.moves_attribute,
        }


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {value!r}")
    return value


def _usize(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _USIZE_MAX:
        raise ValueError(f"field {key!r} must be an unsigned integer, got {value!r}")
    return value


@dataclass(frozen=True)
class SourceEntry:
    """A position with the moves played from it and their frequencies."""

    position: str
    moves: list[tuple[str, int]]

    @classmethod
    def from_json(cls, data: Any) -> "SourceEntry":
        if not isinstance(data, Mapping):
            raise ValueError("source entry must be a JSON object")
        raw_moves = data.get("moves")
        if not isinstance(raw_moves, list):
            raise ValueError("field 'moves' must be a list")
        moves = []
        for record in raw_moves:
            if not isinstance(record, Mapping):
                raise ValueError("move record must be a JSON object")
            moves.append((_str(record, "mv"), _usize(record, "freq")))
        return cls(position=_str(data, "position"), moves=moves)

    def to_write_request(self, options: UploadOptions) -> dict[str, Any]:
        """Build a put request item keyed by position, holding a string set of moves."""
        move_set = [f"{mv}{options.frequency_separator}{freq}" for mv, freq in self.moves]
        return {
            "PutRequest": {
                "Item": {
                    options.position_attribute: {"S": self.position},
                    options.moves_attribute: {"SS": move_set},
                }
            }
        }


def draw_n_entries(source: list[T], n: int) -> list[T]:
    """Remove up to ``n`` entries from the end of ``source`` and return them, last first."""
    drawn = []
    for _ in range(n):
        if not source:
            break
        drawn.append(source.pop())
    return drawn


def load_write_requests(path: Path, options: UploadOptions) -> list[dict[str, Any]]:
    """Read one JSON entry per line, skipping lines that cannot be read or decoded."""
    requests = []
    with open(path, "rb") as handle:
        for raw in handle:
            try:
                entry = SourceEntry.from_json(json.loads(raw.decode("utf-8")))
            except (UnicodeDecodeError, ValueError):
                continue
            requests.append(entry.to_write_request(options))
    return requests


def _region(text: str) -> str:
    if not _REGION.fullmatch(text):
        raise argparse.ArgumentTypeError(f"not a valid region: {text!r}")
    return text


def _unsigned(text: str) -> int:
    try:
        value = int(text)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"not an unsigned integer: {text!r}") from error
    if value < 0:
        raise argparse.ArgumentTypeError(f"not an unsigned integer: {text!r}")
    return value


def parse_args(argv: Optional[Sequence[str]] = None) -> UploadOptions:
    """Parse the uploader's command line."""
    parser = argparse.ArgumentParser(prog="uploader")
    parser.add_argument(
        "-s", "--source", type=Path, required=True,
        help="The source file containing the table entries to write.",
    )
    parser.add_argument(
        "-t", "--table", required=True, help="The name of the table to write to."
    )
    parser.add_argument(
        "-r", "--region", type=_region, required=True,
        help="The region in which the target table lives.",
    )
    parser.add_argument(
        "-w", "--wcu", type=_unsigned, required=True,
        help="Write capacity units provisioned for the table.",
    )
    parser.add_argument(
        "--frequency-separator", default=":",
        help="Separator between a move and its frequency in the table.",
    )
    parser.add_argument(
        "--position-attribute", default="PositionFEN",
        help="The primary key column representing the board position.",
    )
    parser.add_argument(
        "--moves-attribute", default="Moves",
        help="The attribute representing the suggested moves.",
    )
    args = parser.parse_args(argv)
    return UploadOptions(
        source=args.source,
        table=args.table,
        region=args.region,
        wcu=args.wcu,
        frequency_separator=args.frequency_separator,
        position_attribute=args.position_attribute,
        moves_attribute=args.moves_attribute,
    )