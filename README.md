# get2bed

A small tile-based puzzle game. You have had one drink too many: pick up
every cup of water in the room, then get to your bed. A monster wanders
the room and blinks in and out of sight; walk into it while it is visible
and the night ends badly, catch it while it has faded and it is gone.

## Installing

```
pip install .
```

## Playing

```
get2bed path/to/room.ber
```

The same command can be started as `python -m get2bed.display room.ber`.

The game opens a pygame window titled "Get2Bed", with each map tile drawn
as a 128×128 sprite. The sprites are read from a directory named `xpm` in
the current working directory, so run the command from the directory that
holds it. It must contain these XPM images:

- `flo.xpm` (floor)
- `wall1.xpm`, `wall2.xpm` (wall frames)
- `rose.xpm`, `rose2.xpm` (wall frames once all water is drunk)
- `blud.xpm` (wall frame after the monster has been caught, alternating
  with `flo.xpm`)
- `me1.xpm` … `me4.xpm` (player)
- `exitclose.xpm`, `exitopen.xpm` (bed, closed until the water is gone)
- `col1.xpm` … `col5.xpm` (water, drawn inset by a quarter tile)
- `enem1.xpm`, `enem2.xpm` (monster)
- `trans.xpm`, `trans2.xpm` (faded monster)

Sprites animate every 130 milliseconds. The number of moves so far is
drawn in green near the top left of the window.

Controls (acted on when the key is released):

| Key   | Action     |
|-------|------------|
| W     | move up    |
| S     | move down  |
| A     | move left  |
| D     | move right |
| Esc   | quit       |

Closing the window also quits. Reaching the bed with no water left prints
a good ending; walking into the visible monster prints a bad ending. The
bed cannot be entered while water remains. After each player step the
monster toggles between visible and faded and, when visible, steps onto a
free floor cell, preferring down, left, up, then right, and never turning
straight back.

## Map files

A map is a text file ending in `.ber`, made of these characters only:

- `1` wall
- `0` floor
- `P` the player (exactly one)
- `E` the bed (exactly one)
- `C` a cup of water (at least one)

The map must be a rectangle of at least three rows, fully surrounded by
walls, and every cup and the bed must be reachable from the player
without walking through the bed. The monster is placed by the game on the
first floor cell of the diagonal starting at column 1, row 1, if there is
one. For example:

```
1111111
1P0C0E1
1111111
```

A map that breaks a rule, a missing file, or a wrong number of arguments
is refused with a message saying which rule was broken.

## Using it as a library

```python
from get2bed.mapfile import load_level
from get2bed.game import Game, Outcome

level = load_level("room.ber")    # raises get2bed.messages.MapError
game = Game(level)
outcome = game.move(0, 1)         # (dy, dx): one step right
print(outcome, game.moves, game.tile(2, 1))
print("\n".join(game.rows))
```

- `get2bed.mapfile`: `load_level`, `parse_level` and the individual checks
  (`check_extension`, `check_rectangular`, `check_borders`, `count_items`,
  `find_player`, `check_reachable`), producing a `Level`.
- `get2bed.game`: `Game` (`move`, `handle_key`, `spawn_enemy`,
  `blink_enemy`, `move_enemy`, `wall_sprites`), the `Outcome`, `Direction`
  and `Key` enums, and `FrameClock` for animation timing.
- `get2bed.messages`: `ErrorCode`, `MapError`, `error_message` and the
  ending texts.
- `get2bed.xpm`: `load_xpm` and `parse_xpm_text` read XPM images into an
  `XpmImage` of 0xRRGGBB pixel values; the colour "None" becomes
  `TRANSPARENT`.
- `get2bed.colors`: `lookup_color` resolves X11 colour names
  (case-insensitive); unknown names give 0 and "none" gives -1.
- `get2bed.display`: `Renderer`, `run` and the `main` command.

## What it does not include

The package ships no sprite images and no maps; both must be supplied by
the player.

## Running the tests

```
pip install .[test]
pytest
```