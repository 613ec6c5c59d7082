"""
Ball definitions - values, table counts and the colour potting order.

Defined once at import time; nothing here changes during play.
"""

from __future__ import annotations
from enum import Enum


class Ball(str, Enum):
    """The seven kinds of object ball on a snooker table."""
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BROWN = "brown"
    BLUE = "blue"
    PINK = "pink"
    BLACK = "black"

    @property
    def points(self) -> int:
        return BALL_VALUES[self]

    @property
    def table_count(self) -> int:
        return 15 if self is Ball.RED else 1

    @property
    def is_color(self) -> bool:
        return self is not Ball.RED

    @property
    def label(self) -> str:
        """Display name, e.g. "Red"."""
        return self.value.capitalize()

    @classmethod
    def parse(cls, text: str) -> Ball:
        """Look up a ball by name, case-insensitively."""
        if not isinstance(text, str):
            raise ValueError(f"Unknown ball: {text!r}")
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown ball: {text!r}") from None


BALL_VALUES: dict[Ball, int] = {
    Ball.RED: 1,
    Ball.YELLOW: 2,
    Ball.GREEN: 3,
    Ball.BROWN: 4,
    Ball.BLUE: 5,
    Ball.PINK: 6,
    Ball.BLACK: 7,
}

# Order the colours must be taken in once the reds are gone
COLOR_ORDER: tuple[Ball, ...] = (
    Ball.YELLOW,
    Ball.GREEN,
    Ball.BROWN,
    Ball.BLUE,
    Ball.PINK,
    Ball.BLACK,
)

INITIAL_REDS = Ball.RED.table_count

# Penalty values a referee can award
FOUL_VALUES: frozenset[int] = frozenset({4, 5, 6, 7})
