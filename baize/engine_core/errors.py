"""
Engine errors.

The engine does no I/O, so the only failures are caller misuse. All of
them are recoverable: re-read legal_balls() and try again.
"""

from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable reasons an action was rejected."""
    FRAME_OVER = "FRAME_OVER"
    ILLEGAL_BALL = "ILLEGAL_BALL"
    INVALID_FOUL_VALUE = "INVALID_FOUL_VALUE"
    AWAITING_COIN_TOSS = "AWAITING_COIN_TOSS"
    NO_COIN_TOSS_PENDING = "NO_COIN_TOSS_PENDING"
    INVALID_PLAYER_NAME = "INVALID_PLAYER_NAME"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"


class IllegalActionError(Exception):
    """Raised when an action is not allowed in the current frame state."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.UNKNOWN_ACTION):
        self.message = message
        self.error_code = error_code
        super().__init__(message)
