"""
Legality Resolver - which balls (and which actions) are legal right now.

Used by:
1. The reducer, to reject out-of-sequence pots
2. Presentation layers, to decide which buttons are enabled

Everything here is a pure function of FrameState. The phase is derived
from reds_remaining, last_action and tie_break; history is never read.
"""

from __future__ import annotations
from enum import Enum

from .action import Action
from .balls import Ball, FOUL_VALUES
from .state import FrameState, LastAction, PlayerId


class FramePhase(Enum):
    """Where the frame is in the potting sequence."""
    FRAME_OVER = "frame_over"
    TIEBREAK_AWAITING_TOSS = "tiebreak_awaiting_toss"
    TIEBREAK_READY = "tiebreak_ready"
    RED_PHASE_EXPECT_RED = "red_phase_expect_red"
    RED_PHASE_EXPECT_COLOR = "red_phase_expect_color"
    FINAL_RED_FREE_COLOR = "final_red_free_color"
    COLOR_SEQUENCE = "color_sequence"


def frame_phase(state: FrameState) -> FramePhase:
    """Derive the current phase from state."""
    if state.frame_over:
        return FramePhase.FRAME_OVER

    if state.tie_break is not None:
        if state.tie_break.awaiting_toss:
            return FramePhase.TIEBREAK_AWAITING_TOSS
        return FramePhase.TIEBREAK_READY

    after_red = state.last_action == LastAction.POTTED_RED
    if state.reds_remaining > 0:
        if after_red:
            return FramePhase.RED_PHASE_EXPECT_COLOR
        return FramePhase.RED_PHASE_EXPECT_RED

    # No reds left: a red just potted must have been the last one
    if after_red:
        return FramePhase.FINAL_RED_FREE_COLOR
    return FramePhase.COLOR_SEQUENCE


def legal_balls(state: FrameState) -> frozenset[Ball]:
    """The set of balls that may legally be potted next."""
    phase = frame_phase(state)

    if phase in (FramePhase.FRAME_OVER, FramePhase.TIEBREAK_AWAITING_TOSS):
        return frozenset()

    if phase == FramePhase.TIEBREAK_READY:
        return frozenset({Ball.BLACK})

    if phase == FramePhase.RED_PHASE_EXPECT_RED:
        return frozenset({Ball.RED})

    if phase in (FramePhase.RED_PHASE_EXPECT_COLOR, FramePhase.FINAL_RED_FREE_COLOR):
        return frozenset(state.colors_remaining)

    # Colour sequence: lowest colour still on the table
    remaining = state.colors_remaining
    return frozenset(remaining[:1])


def can_play(state: FrameState) -> bool:
    """Whether a player is at the table (fouls and end turn allowed)."""
    return frame_phase(state) not in (
        FramePhase.FRAME_OVER,
        FramePhase.TIEBREAK_AWAITING_TOSS,
    )


def legal_actions(state: FrameState) -> list[Action]:
    """
    Generate every action the reducer would accept right now.

    Reset and rename are always accepted and are not listed.
    """
    phase = frame_phase(state)

    if phase == FramePhase.TIEBREAK_AWAITING_TOSS:
        return [Action.resolve_coin_toss(player) for player in PlayerId]

    if not can_play(state):
        return []

    actions = [Action.pot(ball) for ball in sorted(legal_balls(state), key=lambda b: b.points)]
    actions.extend(Action.foul(points) for points in sorted(FOUL_VALUES))
    actions.append(Action.end_turn())
    return actions
