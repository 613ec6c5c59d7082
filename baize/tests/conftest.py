"""
Pytest fixtures for Baize tests.
"""

import pytest

from baize.engine_core import Ball, Frame, FrameState, LastAction, PlayerId


def pot_reds_with_black(frame: Frame, count: int = 15) -> None:
    """Pot `count` reds, each followed by the black."""
    for _ in range(count):
        frame.pot(Ball.RED)
        frame.pot(Ball.BLACK)


@pytest.fixture
def frame() -> Frame:
    """A fresh frame with default player names."""
    return Frame()


@pytest.fixture
def color_sequence_state() -> FrameState:
    """All reds gone, P1 at the table needing Yellow, P1 leads 40-30."""
    return FrameState(
        scores={PlayerId.P1: 40, PlayerId.P2: 30},
        reds_remaining=0,
        last_action=LastAction.ENDED_TURN,
    )


@pytest.fixture
def color_sequence_frame(color_sequence_state) -> Frame:
    return Frame(state=color_sequence_state)


@pytest.fixture
def tying_frame() -> Frame:
    """P1 trails 30-57 with all six colours left: clearing them ties the frame."""
    return Frame(state=FrameState(
        scores={PlayerId.P1: 30, PlayerId.P2: 57},
        reds_remaining=0,
        last_action=LastAction.ENDED_TURN,
    ))


@pytest.fixture
def tiebreak_frame(tying_frame) -> Frame:
    """Frame tied at 57-57, black respotted, awaiting the coin toss."""
    for color in (Ball.YELLOW, Ball.GREEN, Ball.BROWN, Ball.BLUE, Ball.PINK, Ball.BLACK):
        tying_frame.pot(color)
    return tying_frame
