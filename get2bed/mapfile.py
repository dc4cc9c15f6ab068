"""Reading and validating `.ber` map files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from .messages import ErrorCode, MapError

_VALID_CHARS = frozenset("10CEP\n")


@dataclass(frozen=True)
class Level:
    """A validated map, rows without line terminators."""

    rows: tuple[str, ...]
    width: int
    height: int
    collectibles: int
    player: tuple[int, int]


def valid_char(c: str) -> bool:
    """Whether a character may appear in a map file."""
    return c in _VALID_CHARS


def line_length(line: str) -> int:
    """Length of a line up to its first newline."""
    end = line.find("\n")
    return len(line) if end < 0 else end


def read_map_lines(path: str | os.PathLike) -> list[str]:
    """Read a map file into lines, each keeping its trailing newline."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise MapError(ErrorCode.FORMAT) from exc
    text = data.decode("latin-1")
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def check_extension(path: str | os.PathLike) -> None:
    """Require the file name to end in `.ber`."""
    name = os.fspath(path)
    if len(name) < 4 or not name.endswith(".ber"):
        raise MapError(ErrorCode.FORMAT)


def check_rectangular(lines: Sequence[str]) -> tuple[int, int]:
    """Return (width, height) of a map whose rows all share one length."""
    if not lines:
        raise MapError(ErrorCode.SHAPE)
    width = line_length(lines[0])
    if any(line_length(line) != width for line in lines):
        raise MapError(ErrorCode.SHAPE)
    if len(lines) < 3:
        raise MapError(ErrorCode.SHAPE)
    return width, len(lines)


def check_borders(lines: Sequence[str], width: int) -> None:
    """Require the map to be enclosed by walls."""
    for line in lines:
        if line[0] != "1" or line[width - 1] != "1":
            raise MapError(ErrorCode.WALLS)
    top, bottom = lines[0], lines[-1]
    for x in range(width):
        if top[x] != "1" or bottom[x] != "1":
            raise MapError(ErrorCode.WALLS)


def count_items(lines: Iterable[str]) -> int:
    """Check characters and item counts; return the number of collectibles."""
    players = exits = collectibles = 0
    for line in lines:
        for c in line:
            if not valid_char(c):
                raise MapError(ErrorCode.CHARACTER)
            if c == "P":
                players += 1
            elif c == "E":
                exits += 1
            elif c == "C":
                collectibles += 1
    if players == 1 and exits == 1 and collectibles >= 1:
        return collectibles
    raise MapError(ErrorCode.ITEMS)


def find_player(lines: Sequence[str]) -> tuple[int, int]:
    """Return the (x, y) position of the player."""
    found = None
    for y, line in enumerate(lines):
        x = line.find("P")
        if x >= 0:
            found = (x, y)
    if found is None:
        raise MapError(ErrorCode.ITEMS)
    return found


def check_reachable(
    lines: Sequence[str], start: tuple[int, int]
) -> frozenset[tuple[int, int]]:
    """Flood-fill from start; every collectible and the exit must be reached.

    The exit is reached but never walked through. Returns the reached cells.
    """
    grid = [list(line) for line in lines]
    reached: set[tuple[int, int]] = set()
    stack = [start]
    while stack:
        x, y = stack.pop()
        cell = grid[y][x]
        if cell == "1":
            continue
        grid[y][x] = "1"
        reached.add((x, y))
        if cell == "E":
            continue
        for nx, ny in ((x, y + 1), (x, y - 1), (x + 1, y), (x - 1, y)):
            if grid[ny][nx] != "1":
                stack.append((nx, ny))
    if any("C" in row or "E" in row for row in grid):
        raise MapError(ErrorCode.REACHABILITY)
    return frozenset(reached)


def parse_level(lines: Sequence[str]) -> Level:
    """Validate map lines and build a Level."""
    lines = list(lines)
    width, height = check_rectangular(lines)
    check_borders(lines, width)
    collectibles = count_items(lines)
    player = find_player(lines)
    check_reachable(lines, player)
    rows = tuple(line[: line_length(line)] for line in lines)
    return Level(
        rows=rows,
        width=width,
        height=height,
        collectibles=collectibles,
        player=player,
    )


def load_level(path: str | os.PathLike) -> Level:
    """Read and validate a `.ber` map file."""
    if not os.fspath(path):
        raise MapError(ErrorCode.FORMAT)
    lines = read_map_lines(path)
    check_extension(path)
    return parse_level(lines)