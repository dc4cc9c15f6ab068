"""Player-facing messages: map validation errors and game endings."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Reasons a map can be rejected."""

    FORMAT = 1
    CHARACTER = 2
    MEMORY = 3
    FILE = 4
    WALLS = 5
    ITEMS = 6
    SHAPE = 7
    REACHABILITY = 8


_MESSAGES = {
    ErrorCode.FORMAT: (
        "Error\nFormat error : You need a valid .be(e)r "
        "... or better, some water\n"
    ),
    ErrorCode.CHARACTER: (
        "Error\nChar error: I know you know the full alphabet, "
        "but please, use just PECN01 in your map\n"
    ),
    ErrorCode.MEMORY: "Error\nMalloc error: too drunk to explain why\n",
    ErrorCode.FILE: (
        "Error\nFD error: it seems to be empty or missing... "
        "as your wallet\n"
    ),
    ErrorCode.WALLS: (
        "Error\nMap error: the breeze coming from the holes in "
        "the wall is not good. Try to sorround the square map with walls\n"
    ),
    ErrorCode.ITEMS: (
        "Error\nChar error: too much alhool can make you see double, "
        "but there should be just one of you (P) and you should drink at least a cup "
        "of water (C) before going to sleep in the only bed you have (E)\n"
    ),
    ErrorCode.SHAPE: (
        "Error\nMap error: plz, too tired to argue, "
        "make the room a square\n"
    ),
    ErrorCode.REACHABILITY: (
        "Error\nReaching error: before going out make "
        "sure you can get to your water and bed\n"
    ),
}

BAD_ENDING = "Bad ending: you trow up\n"
GOOD_ENDING = "Good ending: you menage to get to the bed well hydrated\n"


def error_message(code: int) -> str:
    """Return the text shown for an error code; unknown codes raise ValueError."""
    return _MESSAGES[ErrorCode(code)]


class MapError(Exception):
    """Raised when a map file cannot be used to play."""

    def __init__(self, code: int) -> None:
        self.code = ErrorCode(code)
        super().__init__(error_message(self.code))