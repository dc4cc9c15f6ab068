import pytest

from get2bed.xpm import (
    TRANSPARENT,
    XpmError,
    XpmImage,
    load_xpm,
    parse_text_color,
    parse_xpm,
    parse_xpm_text,
    quoted_lines,
    split_words,
    strip_comments,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"3 2 3 1 ",
"  c None",
". c #FF0000",
"X c white",
/* pixels */
" .X",
"X. ",
};
"""


def test_strip_block_comment_keeps_length():
    text = "a /* b */ c"
    result = strip_comments(text)
    assert len(result) == len(text)
    assert result.split() == ["a", "c"]


def test_strip_line_comment():
    result = strip_comments("a // b\nc")
    assert result.split() == ["a", "c"]


def test_comment_markers_inside_quotes_are_kept():
    text = '"/* x */" "// y"'
    assert strip_comments(text) == text


def test_split_words_on_spaces_and_tabs():
    assert split_words("  3\t2  1 ") == ["3", "2", "1"]


def test_quoted_lines():
    assert list(quoted_lines('x "ab" y "c d" "open')) == ["ab", "c d"]


def test_parse_text_color_hex():
    assert parse_text_color("#00ff00", None) == 0x00FF00


def test_parse_text_color_two_words():
    assert parse_text_color("light", "grey") == 0xD3D3D3


def test_parse_text_color_none_and_unknown():
    assert parse_text_color("None", None) == -1
    assert parse_text_color("no-such-colour", None) == 0


def test_parse_sample():
    image = parse_xpm_text(SAMPLE)
    assert (image.width, image.height) == (3, 2)
    assert image.pixels[0] == (TRANSPARENT, 0xFF0000, 0xFFFFFF)
    assert image.pixels[1] == (0xFFFFFF, 0xFF0000, TRANSPARENT)


def test_pixel_accessor_and_bounds():
    image = parse_xpm_text(SAMPLE)
    assert image.pixel(2, 0) == image.pixels[0][2]
    with pytest.raises(IndexError):
        image.pixel(3, 0)


def test_two_chars_per_pixel():
    image = parse_xpm(["2 1 2 2", "aa c red", "bb c #0000FF", "aabb"])
    assert image.pixels == ((0xFF0000, 0x0000FF),)


def test_short_keys_later_definition_wins():
    image = parse_xpm(["1 1 2 1", "a c red", "a c blue", "a"])
    assert image.pixels == ((0x0000FF,),)


def test_long_keys_first_definition_wins():
    image = parse_xpm(["1 1 2 3", "abc c red", "abc c blue", "abc"])
    assert image.pixels == ((0xFF0000,),)


def test_unknown_pixel_key_is_black():
    image = parse_xpm(["2 1 1 1", "a c red", "az"])
    assert image.pixels == ((0xFF0000, 0),)


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["3 2 1"],
        ["0 2 1 1", "a c red", "aaa"],
        ["1 1 1 1", "a s red", "a"],
        ["1 1 1 1", "a c", "a"],
        ["1 2 1 1", "a c red", "a"],
    ],
)
def test_invalid_data_raises(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_load_matches_parse(tmp_path):
    path = tmp_path / "sample.xpm"
    path.write_text(SAMPLE)
    loaded = load_xpm(path)
    assert isinstance(loaded, XpmImage)
    assert loaded == parse_xpm_text(SAMPLE)


def test_load_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "missing.xpm")