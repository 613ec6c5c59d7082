"""
Engine Core - Snooker frame state and rules.

The engine:
1. Holds a FrameState
2. Derives the legal balls from it
3. Applies pots, fouls, end-of-turn and coin tosses via the reducer
4. Detects the end of the frame and runs the respotted-black tiebreak
"""

from .balls import Ball, BALL_VALUES, COLOR_ORDER, FOUL_VALUES, INITIAL_REDS
from .state import (
    FrameState,
    PlayerId,
    LastAction,
    TieBreak,
    HistoryEntry,
    EventKind,
)
from .action import Action, ActionType, ActionPayload, ActionResult
from .errors import ErrorCode, IllegalActionError
from .legality import FramePhase, can_play, frame_phase, legal_balls, legal_actions
from .reducer import Reducer, apply_action
from .frame import Frame
from .history import describe_entry, describe_history, reconcile_scores

__all__ = [
    "Ball",
    "BALL_VALUES",
    "COLOR_ORDER",
    "FOUL_VALUES",
    "INITIAL_REDS",
    "FrameState",
    "PlayerId",
    "LastAction",
    "TieBreak",
    "HistoryEntry",
    "EventKind",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCode",
    "IllegalActionError",
    "FramePhase",
    "frame_phase",
    "legal_balls",
    "legal_actions",
    "can_play",
    "Reducer",
    "apply_action",
    "Frame",
    "describe_entry",
    "describe_history",
    "reconcile_scores",
]
