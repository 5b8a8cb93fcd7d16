"""Extraction of move text from PGN files, one game at a time."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator, Union

_GAME_START = re.compile(r"1[.].*")
_GAME_CONTINUATION = re.compile(r"((1[0-9]+)|([2-9][0-9]*))[.].*")


def is_game_start(line: str) -> bool:
    """True for a move-text line beginning with the first move."""
    return _GAME_START.fullmatch(line) is not None


def is_game_continuation(line: str) -> bool:
    """True for a move-text line beginning with a move number other than 1."""
    return _GAME_CONTINUATION.fullmatch(line) is not None


def iter_games(lines: Iterable[str]) -> Iterator[str]:
    """Yield the move text of each game, its lines joined by single spaces.

    A game starts at a line opening with ``1.`` and runs over the following
    continuation lines; the first line that does not continue it is consumed.
    """
    remaining = iter(lines)
    for line in remaining:
        if not is_game_start(line):
            continue
        components = [line]
        for component in remaining:
            if not is_game_continuation(component):
                break
            components.append(component)
        yield " ".join(components)


def _file_lines(path: Union[str, Path]) -> Iterator[str]:
    with open(path, "rb") as handle:
        for raw in handle:
            line = raw.decode("utf-8")
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            yield line


def read_games(path: Union[str, Path]) -> Iterator[str]:
    """Yield the move text of each game in a PGN file."""
    yield from iter_games(_file_lines(path))