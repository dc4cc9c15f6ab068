"""Reading XPM images: comment stripping, colour tables and pixel rows."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from .colors import lookup_color

TRANSPARENT = 0xFF000000
"""Pixel value stored for the colour "None"."""

_WORD_SPLIT = re.compile(r"[ \t]+")
_ATOI = re.compile(r"\s*([+-]?\d+)")
_HEX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or parsed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: rows of 0xRRGGBB values, TRANSPARENT for "None"."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """The value of the pixel at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the image")
        return self.pixels[y][x]


def strip_comments(text: str) -> str:
    """Blank out /* */ and // comments that lie outside quoted strings.

    Comments are replaced by spaces, so the length of the text is kept.
    """
    out = list(text)
    length = len(text)
    quoted = False
    i = 0
    while i < length:
        c = text[i]
        if c == '"':
            quoted = not quoted
            i += 1
            continue
        if not quoted and text.startswith("/*", i):
            end = text.find("*/", i + 2)
            stop = length if end < 0 else end + 2
        elif not quoted and text.startswith("//", i):
            end = text.find("\n", i + 2)
            stop = length if end < 0 else end + 1
        else:
            i += 1
            continue
        out[i:stop] = " " * (stop - i)
        i = stop
    return "".join(out)


def split_words(line: str) -> list[str]:
    """Split a line into words separated by spaces and tabs."""
    return [word for word in _WORD_SPLIT.split(line) if word]


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings."""
    pos = 0
    while True:
        start = text.find('"', pos)
        if start < 0:
            return
        end = text.find('"', start + 1)
        if end < 0:
            return
        yield text[start + 1 : end]
        pos = end + 1


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def parse_text_color(name: str, end: str | None) -> int:
    """Colour value of a specification: "#RRGGBB" or a (two-word) colour name."""
    if name.startswith("#"):
        match = _HEX.match(name, 1)
        digits = match.group(2) if match else ""
        if not digits:
            return 0
        value = int(digits, 16)
        if match.group(1) == "-":
            value = -value
        return _to_int32(value)
    if end is not None:
        name = f"{name} {end}"[:63]
    return lookup_color(name)


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"missing {what}") from None


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode an image from its quoted strings: header, colours, pixel rows."""
    source = iter(lines)
    header = split_words(_next_line(source, "header"))
    if len(header) < 4:
        raise XpmError("incomplete header")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if not (width and height and ncolors and cpp):
        raise XpmError("invalid header values")
    if width < 0 or height < 0 or ncolors < 0 or cpp < 0:
        raise XpmError("negative header values")

    # With one or two characters per pixel later definitions replace earlier
    # ones; with more, the first definition of a key is the one used.
    later_wins = cpp <= 2
    colors: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(source, "colour definition")
        words = split_words(line[cpp:])
        try:
            j = words.index("c") + 1
        except ValueError:
            raise XpmError(f"no colour in definition {line!r}") from None
        if j >= len(words):
            raise XpmError(f"empty colour in definition {line!r}")
        end = words[j + 1] if j + 1 < len(words) else None
        value = parse_text_color(words[j], end)
        key = line[:cpp]
        if later_wins or key not in colors:
            colors[key] = value

    rows = []
    for _ in range(height):
        line = _next_line(source, "pixel row")
        row = []
        for x in range(width):
            value = colors.get(line[cpp * x : cpp * x + cpp], 0)
            row.append(TRANSPARENT if value == -1 else value)
        rows.append(tuple(row))
    return XpmImage(width=width, height=height, pixels=tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode the text of an XPM file."""
    return parse_xpm(quoted_lines(strip_comments(text)))


def load_xpm(path: str | os.PathLike) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise XpmError(f"cannot read {os.fspath(path)!r}") from exc
    return parse_xpm_text(data.decode("latin-1"))