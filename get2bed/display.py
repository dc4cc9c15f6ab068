"""Drawing the game in a pygame window, and the command that starts it."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .game import (  # noqa: E402
    BLOOD_SPRITES,
    ROSE_SPRITES,
    WALL_SPRITES,
    FrameClock,
    Game,
    Key,
    Outcome,
    milliseconds,
)
from .mapfile import load_level  # noqa: E402
from .messages import (  # noqa: E402
    BAD_ENDING,
    GOOD_ENDING,
    ErrorCode,
    MapError,
    error_message,
)
from .xpm import TRANSPARENT, XpmImage, load_xpm  # noqa: E402

TILE_RES = 128
WINDOW_TITLE = "Get2Bed"
DEFAULT_ASSET_DIR = "xpm"
MOVE_COUNT_POSITION = (128, 128)
MOVE_COUNT_COLOR = (0x00, 0xFF, 0x00)

_SPRITE_FILES: dict[str, tuple[str, ...]] = {
    "floor": ("flo.xpm",),
    "me": ("me1.xpm", "me2.xpm", "me3.xpm", "me4.xpm"),
    "bed": ("exitclose.xpm", "exitopen.xpm"),
    "water": ("col1.xpm", "col2.xpm", "col3.xpm", "col4.xpm", "col5.xpm"),
    "enemy": ("enem1.xpm", "enem2.xpm"),
    "trans": ("trans.xpm", "trans2.xpm"),
}


def sprite_for(tile: str, frame: int, collectibles_left: int) -> tuple[str, int]:
    """Sprite group and animation index used to draw a map tile."""
    if tile == "1":
        return ("wall", frame % 2)
    if tile == "C":
        return ("water", frame % 5)
    if tile == "N":
        return ("enemy", frame % 2)
    if tile == "E":
        return ("bed", int(collectibles_left == 0))
    if tile == "P":
        return ("me", frame % 4)
    if tile == "T":
        return ("trans", frame % 2)
    return ("floor", 0)


def tile_position(x: int, y: int, tile: str) -> tuple[int, int]:
    """Window coordinates of the sprite for a tile; collectibles are inset."""
    offset = TILE_RES // 4 if tile == "C" else 0
    return (x * TILE_RES + offset, y * TILE_RES + offset)


def _to_surface(image: XpmImage) -> pygame.Surface:
    data = bytearray()
    for row in image.pixels:
        for value in row:
            if value == TRANSPARENT:
                data += b"\x00\x00\x00\x00"
            else:
                data += bytes(
                    ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 0xFF)
                )
    surface = pygame.image.frombuffer(
        bytes(data), (image.width, image.height), "RGBA"
    )
    return surface.copy()


class Renderer:
    """Owns the window and sprites and draws the current game state."""

    def __init__(self, game: Game, asset_dir: str | os.PathLike = DEFAULT_ASSET_DIR) -> None:
        pygame.init()
        self.game = game
        self.asset_dir = Path(asset_dir)
        self.frame = 0
        self.screen = pygame.display.set_mode(
            (game.width * TILE_RES, game.height * TILE_RES)
        )
        pygame.display.set_caption(WINDOW_TITLE)
        names = {name for files in _SPRITE_FILES.values() for name in files}
        names.update(WALL_SPRITES + ROSE_SPRITES + BLOOD_SPRITES)
        self._images = {
            name: _to_surface(load_xpm(self.asset_dir / name)) for name in sorted(names)
        }
        self._font = pygame.font.Font(None, 24)

    def draw(self) -> None:
        """Draw every tile and the move counter, then show the frame."""
        walls = self.game.wall_sprites()
        for y, row in enumerate(self.game.rows):
            for x, tile in enumerate(row):
                kind, index = sprite_for(tile, self.frame, self.game.collectibles)
                name = walls[index] if kind == "wall" else _SPRITE_FILES[kind][index]
                self.screen.blit(self._images[name], tile_position(x, y, tile))
        text = self._font.render(str(self.game.moves), True, MOVE_COUNT_COLOR)
        x, baseline = MOVE_COUNT_POSITION
        self.screen.blit(text, (x, baseline - self._font.get_ascent()))
        pygame.display.flip()


def run(game: Game, asset_dir: str | os.PathLike = DEFAULT_ASSET_DIR) -> Outcome:
    """Play the game in a window until it is won, lost or closed."""
    try:
        renderer = Renderer(game, asset_dir)
        clock = FrameClock(now=milliseconds())
        renderer.draw()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return Outcome.QUIT
                if event.type != pygame.KEYUP:
                    continue
                keycode = Key.ESC if event.key == pygame.K_ESCAPE else event.key
                outcome = game.handle_key(keycode)
                if outcome is Outcome.WON:
                    sys.stdout.write(GOOD_ENDING)
                    return outcome
                if outcome is Outcome.LOST:
                    sys.stdout.write(BAD_ENDING)
                    return outcome
                if outcome is Outcome.QUIT:
                    return outcome
                renderer.draw()
            if clock.tick(milliseconds()):
                renderer.frame = clock.frame
                renderer.draw()
            pygame.time.wait(5)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Validate the map named on the command line and play it."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1 or not args[0]:
        sys.stdout.write(error_message(ErrorCode.FORMAT))
        return 0
    try:
        level = load_level(args[0])
    except MapError as exc:
        sys.stdout.write(str(exc))
        return 0
    run(Game(level), DEFAULT_ASSET_DIR)
    return 0


if __name__ == "__main__":
    sys.exit(main())