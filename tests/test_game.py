import time

import pytest

from get2bed.game import (
    BLOOD_SPRITES,
    ROSE_SPRITES,
    WALL_SPRITES,
    Direction,
    FrameClock,
    Game,
    Key,
    Outcome,
    milliseconds,
)
from get2bed.mapfile import parse_level

OPEN_MAP = (
    "1111111",
    "1P000C1",
    "1000001",
    "1000001",
    "10000E1",
    "1111111",
)

CORRIDOR_MAP = (
    "111111",
    "1EPC01",
    "111111",
)

ADJACENT_ENEMY_MAP = (
    "111111",
    "10P0C1",
    "100001",
    "1E0001",
    "111111",
)

TRAPPED_MAP = (
    "11111",
    "1PCE1",
    "11011",
    "11111",
)

NO_ENEMY_MAP = (
    "1111",
    "1PC1",
    "1CE1",
    "1111",
)


def make_game(rows):
    return Game(parse_level(rows))


def count(game, char):
    return sum(row.count(char) for row in game.rows)


def test_spawn_on_first_free_diagonal_cell():
    game = make_game(OPEN_MAP)
    assert game.enemy == (2, 2)
    assert game.tile(2, 2) == "N"
    assert count(game, "N") == 1
    assert game.direction is Direction.NONE


def test_no_spawn_when_diagonal_is_full():
    game = make_game(NO_ENEMY_MAP)
    assert count(game, "N") == 0
    assert game.enemy[1] == game.height
    assert game.move(0, 1) is Outcome.MOVED
    assert count(game, "N") == 0
    assert count(game, "T") == 0


def test_tile_outside_map_raises():
    game = make_game(OPEN_MAP)
    with pytest.raises(IndexError):
        game.tile(-1, 0)
    with pytest.raises(IndexError):
        game.tile(0, game.height)


def test_wall_blocks_move():
    game = make_game(OPEN_MAP)
    before = game.rows
    assert game.move(-1, 0) is Outcome.BLOCKED
    assert game.rows == before
    assert game.moves == 0
    assert game.player == (1, 1)


def test_first_move_hides_enemy_then_second_moves_it():
    game = make_game(OPEN_MAP)
    ex, ey = game.enemy
    assert game.move(0, 1) is Outcome.MOVED
    assert game.tile(ex, ey) == "T"
    assert game.enemy == (ex, ey)
    assert game.move(0, 1) is Outcome.MOVED
    assert game.enemy == (ex, ey + 1)
    assert game.direction is Direction.DOWN
    assert game.tile(ex, ey) == "0"
    assert game.tile(ex, ey + 1) == "N"
    assert game.moves == 2


def test_enemy_never_turns_straight_back():
    game = make_game(OPEN_MAP)
    directions = []
    for _ in range(5):
        assert game.move_enemy() is True
        directions.append(game.direction)
        assert count(game, "N") == 1
        x, y = game.enemy
        assert game.tile(x, y) == "N"
    assert directions == [
        Direction.DOWN,
        Direction.DOWN,
        Direction.LEFT,
        Direction.UP,
        Direction.UP,
    ]


def test_trapped_enemy_stays_and_resets_direction():
    game = make_game(TRAPPED_MAP)
    start = game.enemy
    game.blink_enemy()
    assert game.tile(*start) == "T"
    assert game.move_enemy() is False
    game.blink_enemy()
    assert game.tile(*start) == "N"
    assert game.move_enemy() is False
    assert game.enemy == start
    assert game.direction is Direction.NONE


def test_walking_into_visible_enemy_loses():
    game = make_game(ADJACENT_ENEMY_MAP)
    assert game.enemy == (1, 1)
    assert game.handle_key(Key.A) is Outcome.LOST
    assert game.finished
    assert game.moves == 0
    assert game.move(1, 0) is Outcome.LOST
    assert game.player == (2, 1)


def test_stepping_on_transparent_enemy_kills_it():
    game = make_game(OPEN_MAP)
    ex, ey = game.enemy
    assert game.move(1, 0) is Outcome.MOVED
    assert game.tile(ex, ey) == "T"
    assert game.move(0, 1) is Outcome.MOVED
    assert game.player == (ex, ey)
    assert game.wall_sprites() == BLOOD_SPRITES
    assert game.enemy == (0, 0)
    assert count(game, "N") == 0
    assert count(game, "T") == 0
    assert game.move(0, 1) is Outcome.MOVED
    assert game.wall_sprites() == WALL_SPRITES


def test_exit_blocked_until_water_collected_then_win():
    game = make_game(CORRIDOR_MAP)
    assert game.wall_sprites() == WALL_SPRITES
    assert game.move(0, -1) is Outcome.BLOCKED
    assert game.collectibles == 1
    assert game.handle_key(Key.D) is Outcome.MOVED
    assert game.collectibles == 0
    assert game.wall_sprites() == ROSE_SPRITES
    assert game.handle_key(Key.A) is Outcome.MOVED
    assert game.handle_key(Key.A) is Outcome.WON
    assert game.finished
    assert game.moves == 2


def test_move_leaves_floor_behind():
    game = make_game(CORRIDOR_MAP)
    x, y = game.player
    game.move(0, 1)
    assert game.tile(x, y) == "0"
    assert game.tile(x + 1, y) == "P"
    assert count(game, "P") == 1


def test_escape_quits_and_unknown_key_is_ignored():
    game = make_game(OPEN_MAP)
    before = game.rows
    assert game.handle_key(0) is None
    assert game.rows == before
    assert game.handle_key(Key.ESC) is Outcome.QUIT
    assert game.finished


def test_keys_map_to_directions():
    game = make_game(OPEN_MAP)
    assert game.handle_key(Key.S) is Outcome.MOVED
    assert game.player == (1, 2)
    assert game.handle_key(Key.W) is Outcome.MOVED
    assert game.player == (1, 1)


def test_frame_clock_waits_for_interval():
    clock = FrameClock(130, now=1000)
    assert clock.tick(1100) is False
    assert clock.frame == 0
    assert clock.tick(1130) is True
    assert clock.frame == 1
    assert clock.tick(1200) is False
    assert clock.frame == 1


def test_frame_clock_default_fires_at_once():
    clock = FrameClock()
    assert clock.tick(milliseconds()) is True
    assert clock.frame == 1


def test_milliseconds_tracks_wall_clock():
    before = int(time.time() * 1000)
    now = milliseconds()
    after = int(time.time() * 1000) + 1
    assert before - 1 <= now <= after