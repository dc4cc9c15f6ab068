import pytest

from get2bed.mapfile import (
    Level,
    check_borders,
    check_extension,
    check_reachable,
    check_rectangular,
    count_items,
    find_player,
    line_length,
    load_level,
    parse_level,
    read_map_lines,
    valid_char,
)
from get2bed.messages import ErrorCode, MapError

VALID = ["1111111\n", "1P0C0E1\n", "1111111\n"]


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return path


@pytest.mark.parametrize("c", list("10CEP\n"))
def test_valid_chars(c):
    assert valid_char(c) is True


@pytest.mark.parametrize("c", list("NTX \r"))
def test_invalid_chars(c):
    assert valid_char(c) is False


def test_line_length_stops_at_newline():
    assert line_length("abc\ndef") == 3
    assert line_length("abc") == 3
    assert line_length("\n") == 0


def test_read_map_lines_keeps_newlines(tmp_path):
    path = _write(tmp_path, "m.ber", "111\n1P1\n")
    assert read_map_lines(path) == ["111\n", "1P1\n"]


def test_read_map_lines_without_final_newline(tmp_path):
    path = _write(tmp_path, "m.ber", "111\n1P1")
    assert read_map_lines(path) == ["111\n", "1P1"]


def test_read_map_lines_missing_file(tmp_path):
    with pytest.raises(MapError) as info:
        read_map_lines(tmp_path / "nope.ber")
    assert info.value.code is ErrorCode.FORMAT


@pytest.mark.parametrize("name", ["map.ber", ".ber", "dir/x.ber"])
def test_extension_accepted(name, tmp_path):
    check_extension(name)
    path = _write(tmp_path, "ok.ber", "".join(VALID))
    assert load_level(path).width == 7


@pytest.mark.parametrize("name", ["map.txt", "ber", "map.be", "map.bers"])
def test_extension_rejected(name):
    with pytest.raises(MapError) as info:
        check_extension(name)
    assert info.value.code is ErrorCode.FORMAT


def test_rectangular_returns_size():
    assert check_rectangular(VALID) == (7, 3)


def test_rectangular_last_line_without_newline():
    lines = ["1111111\n", "1P0C0E1\n", "1111111"]
    assert check_rectangular(lines) == (7, 3)


def test_rectangular_rejects_ragged():
    with pytest.raises(MapError) as info:
        check_rectangular(["1111\n", "11111\n", "1111\n"])
    assert info.value.code is ErrorCode.SHAPE


def test_rectangular_rejects_two_rows():
    with pytest.raises(MapError) as info:
        check_rectangular(["1111\n", "1111\n"])
    assert info.value.code is ErrorCode.SHAPE


def test_rectangular_rejects_empty():
    with pytest.raises(MapError) as info:
        check_rectangular([])
    assert info.value.code is ErrorCode.SHAPE


def test_borders_side_hole():
    lines = ["1111\n", "1PC0\n", "1E11\n", "1111\n"]
    with pytest.raises(MapError) as info:
        check_borders(lines, 4)
    assert info.value.code is ErrorCode.WALLS


def test_borders_top_hole():
    lines = ["1101\n", "1PC1\n", "1E11\n", "1111\n"]
    with pytest.raises(MapError) as info:
        check_borders(lines, 4)
    assert info.value.code is ErrorCode.WALLS


def test_borders_bottom_hole():
    lines = ["1111\n", "1PC1\n", "1E11\n", "1011\n"]
    with pytest.raises(MapError) as info:
        check_borders(lines, 4)
    assert info.value.code is ErrorCode.WALLS


def test_count_items_returns_collectibles():
    lines = ["111111\n", "1PCCE1\n", "111111\n"]
    assert count_items(lines) == 2


@pytest.mark.parametrize("bad", ["X", "N", "T", " "])
def test_count_items_rejects_characters(bad):
    lines = ["11111\n", f"1P{bad}C1\n", "1E001\n", "11111\n"]
    with pytest.raises(MapError) as info:
        count_items(lines)
    assert info.value.code is ErrorCode.CHARACTER


@pytest.mark.parametrize(
    "row",
    ["1PPCE1\n", "1P0CEE\n", "1P00E1\n", "100CE1\n"],
)
def test_count_items_rejects_wrong_counts(row):
    with pytest.raises(MapError) as info:
        count_items(["111111\n", row, "111111\n"])
    assert info.value.code is ErrorCode.ITEMS


def test_find_player():
    assert find_player(VALID) == (1, 1)


def test_find_player_missing():
    with pytest.raises(MapError):
        find_player(["111\n", "101\n", "111\n"])


def test_reachable_cells():
    reached = check_reachable(VALID, (1, 1))
    assert {(1, 1), (3, 1), (5, 1)} <= reached
    assert (0, 0) not in reached


def test_reachable_does_not_modify_input():
    lines = list(VALID)
    check_reachable(lines, (1, 1))
    assert lines == VALID


def test_unreachable_collectible():
    lines = ["111111\n", "1P01C1\n", "1E0111\n", "111111\n"]
    with pytest.raises(MapError) as info:
        check_reachable(lines, (1, 1))
    assert info.value.code is ErrorCode.REACHABILITY


def test_exit_blocks_path():
    lines = ["1111111\n", "1PE0C01\n", "1111111\n"]
    with pytest.raises(MapError) as info:
        check_reachable(lines, (1, 1))
    assert info.value.code is ErrorCode.REACHABILITY


def test_parse_level():
    level = parse_level(VALID)
    assert level == Level(
        rows=("1111111", "1P0C0E1", "1111111"),
        width=7,
        height=3,
        collectibles=1,
        player=(1, 1),
    )


def test_parse_level_checks_shape_before_items():
    with pytest.raises(MapError) as info:
        parse_level(["1111\n", "1PX1\n"])
    assert info.value.code is ErrorCode.SHAPE


def test_load_level(tmp_path):
    path = _write(tmp_path, "room.ber", "".join(VALID))
    level = load_level(path)
    assert level.rows[1] == "1P0C0E1"
    assert level.height == 3


def test_load_level_wrong_extension(tmp_path):
    path = _write(tmp_path, "room.txt", "".join(VALID))
    with pytest.raises(MapError) as info:
        load_level(path)
    assert info.value.code is ErrorCode.FORMAT


def test_load_level_empty_path():
    with pytest.raises(MapError) as info:
        load_level("")
    assert info.value.code is ErrorCode.FORMAT


def test_load_level_missing_file(tmp_path):
    with pytest.raises(MapError) as info:
        load_level(tmp_path / "missing.ber")
    assert info.value.code is ErrorCode.FORMAT


def test_load_level_empty_file(tmp_path):
    path = _write(tmp_path, "empty.ber", "")
    with pytest.raises(MapError) as info:
        load_level(path)
    assert info.value.code is ErrorCode.SHAPE


def test_load_level_trailing_blank_line(tmp_path):
    path = _write(tmp_path, "blank.ber", "".join(VALID) + "\n")
    with pytest.raises(MapError) as info:
        load_level(path)
    assert info.value.code is ErrorCode.SHAPE