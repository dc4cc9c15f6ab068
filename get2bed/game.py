"""Game state: player moves, the wandering enemy and the frame clock."""

from __future__ import annotations

import time
from enum import Enum, IntEnum

from .mapfile import Level

WALL_SPRITES = ("wall1.xpm", "wall2.xpm")
ROSE_SPRITES = ("rose.xpm", "rose2.xpm")
BLOOD_SPRITES = ("blud.xpm", "flo.xpm")

FRAME_INTERVAL_MS = 130


def milliseconds() -> int:
    """Current wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


class Direction(IntEnum):
    """Last direction the enemy walked in."""

    NONE = 0
    DOWN = 1
    LEFT = 2
    UP = 3
    RIGHT = 4


# Order of preference for the enemy, with the step and the direction it
# may not have come from.
_ENEMY_STEPS = (
    (Direction.DOWN, 0, 1, Direction.UP),
    (Direction.LEFT, -1, 0, Direction.RIGHT),
    (Direction.UP, 0, -1, Direction.DOWN),
    (Direction.RIGHT, 1, 0, Direction.LEFT),
)


class Outcome(Enum):
    """Result of a player action."""

    BLOCKED = "blocked"
    MOVED = "moved"
    WON = "won"
    LOST = "lost"
    QUIT = "quit"


class Key(IntEnum):
    """Key symbols the game reacts to."""

    W = 119
    S = 115
    A = 97
    D = 100
    ESC = 65307


_KEY_STEPS = {
    Key.W: (-1, 0),
    Key.S: (1, 0),
    Key.A: (0, -1),
    Key.D: (0, 1),
}

_FINAL = frozenset({Outcome.WON, Outcome.LOST, Outcome.QUIT})


class Game:
    """A game in progress on a validated level."""

    def __init__(self, level: Level) -> None:
        self._grid = [list(row) for row in level.rows]
        self.width = level.width
        self.height = level.height
        self.collectibles = level.collectibles
        self.player = level.player
        self.moves = 0
        self.enemy = (1, 1)
        self.direction = Direction.NONE
        self.outcome: Outcome | None = None
        self._walls = WALL_SPRITES
        self.spawn_enemy()

    @property
    def rows(self) -> tuple[str, ...]:
        """The current map as strings."""
        return tuple("".join(row) for row in self._grid)

    @property
    def finished(self) -> bool:
        """Whether the game has ended."""
        return self.outcome in _FINAL

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= y < len(self._grid) and 0 <= x < len(self._grid[y])

    def tile(self, x: int, y: int) -> str:
        """The character at column x, row y."""
        if not self._inside(x, y):
            raise IndexError(f"tile ({x}, {y}) is outside the map")
        return self._grid[y][x]

    def _set(self, x: int, y: int, c: str) -> None:
        self._grid[y][x] = c

    def _enemy_tile(self) -> str | None:
        x, y = self.enemy
        return self._grid[y][x] if self._inside(x, y) else None

    def spawn_enemy(self) -> bool:
        """Place the enemy on the first free cell of the diagonal from (1, 1)."""
        x, y = 1, 1
        while y < self.height:
            if self._inside(x, y) and self._grid[y][x] == "0":
                self.enemy = (x, y)
                self._set(x, y, "N")
                return True
            x += 1
            y += 1
        self.enemy = (x, y)
        return False

    def blink_enemy(self) -> None:
        """Toggle the enemy between visible and transparent."""
        cell = self._enemy_tile()
        x, y = self.enemy
        if cell == "T":
            self._set(x, y, "N")
        elif cell == "N":
            self._set(x, y, "T")

    def move_enemy(self) -> bool:
        """Step a visible enemy onto a free neighbouring cell; return whether it moved."""
        if self._enemy_tile() != "N":
            return False
        x, y = self.enemy
        for direction, dx, dy, reverse in _ENEMY_STEPS:
            nx, ny = x + dx, y + dy
            if (
                self._inside(nx, ny)
                and self._grid[ny][nx] == "0"
                and self.direction != reverse
            ):
                self._set(nx, ny, "N")
                self._set(x, y, "0")
                self.enemy = (nx, ny)
                self.direction = direction
                return True
        self.direction = Direction.NONE
        return False

    def move(self, dy: int, dx: int) -> Outcome:
        """Try to move the player by (dy, dx) and advance the enemy."""
        if self.outcome in _FINAL:
            return self.outcome
        x, y = self.player
        tx, ty = x + dx, y + dy
        target = self.tile(tx, ty)
        if target == "1":
            return Outcome.BLOCKED
        if target == "N":
            self.outcome = Outcome.LOST
            return self.outcome
        if target == "E":
            if self.collectibles == 0:
                self.outcome = Outcome.WON
                return self.outcome
            return Outcome.BLOCKED
        if target == "C":
            self.collectibles -= 1
        self._set(x, y, "0")
        self._set(tx, ty, "P")
        self.moves += 1
        self.player = (tx, ty)
        ex, ey = self.enemy
        if ex < self.width and ey < self.height:
            self.blink_enemy()
            self.move_enemy()
        self._walls = WALL_SPRITES
        if self.collectibles == 0:
            self._walls = ROSE_SPRITES
        if self.player == self.enemy:
            self._walls = BLOOD_SPRITES
            self.enemy = (0, 0)
        self.outcome = Outcome.MOVED
        return self.outcome

    def handle_key(self, keycode: int) -> Outcome | None:
        """React to a released key; unknown keys return None."""
        if keycode == Key.ESC:
            self.outcome = Outcome.QUIT
            return self.outcome
        step = _KEY_STEPS.get(keycode)
        if step is None:
            return None
        return self.move(*step)

    def wall_sprites(self) -> tuple[str, str]:
        """Names of the two wall animation frames currently in use."""
        return self._walls


class FrameClock:
    """Advances the animation frame once enough time has passed."""

    def __init__(self, interval: int = FRAME_INTERVAL_MS, now: int = 0) -> None:
        self.interval = interval
        self.last = now
        self.frame = 0

    def tick(self, now: int) -> bool:
        """Advance the frame if the interval has elapsed; return whether it did."""
        if now - self.last < self.interval:
            return False
        if now > self.last:
            self.last = now
        self.frame += 1
        return True