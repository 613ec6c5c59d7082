"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a remote scorer (web or
mobile) and the engine.

Error Codes:
- FRAME_NOT_FOUND: Frame session does not exist or has expired
- FRAME_OVER: Frame already decided; only reset is allowed
- ILLEGAL_BALL: Ball is not legal to pot right now
- INVALID_FOUL_VALUE: Foul value outside 4-7
- AWAITING_COIN_TOSS: Tiebreak needs a coin toss before play resumes
- NO_COIN_TOSS_PENDING: Coin toss submitted outside the tiebreak
- INVALID_PLAYER_NAME: Name empty or longer than 20 characters
- VALIDATION_ERROR: Request body or path value failed validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core import Ball, PlayerId


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    FRAME_NOT_FOUND = "FRAME_NOT_FOUND"
    FRAME_OVER = "FRAME_OVER"
    ILLEGAL_BALL = "ILLEGAL_BALL"
    INVALID_FOUL_VALUE = "INVALID_FOUL_VALUE"
    AWAITING_COIN_TOSS = "AWAITING_COIN_TOSS"
    NO_COIN_TOSS_PENDING = "NO_COIN_TOSS_PENDING"
    INVALID_PLAYER_NAME = "INVALID_PLAYER_NAME"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: PlayerId
    name: str
    score: int = 0
    is_current_turn: bool = False

    model_config = {"from_attributes": True}


class TieBreakInfo(BaseModel):
    """Respotted-black tiebreak status."""
    awaiting_toss: bool
    coin_toss_winner: Optional[PlayerId] = None


class HistoryEntryInfo(BaseModel):
    """One structured frame log entry, plus its display text."""
    index: int
    player: PlayerId
    kind: str = Field(description="potted, foul, ended_turn, tie_announced, coin_toss")
    points: int = 0
    ball: Optional[Ball] = None
    winner: Optional[PlayerId] = None
    text: str


# =============================================================================
# Request Models
# =============================================================================

class CreateFrameRequest(BaseModel):
    """Request to open a new frame session."""
    player1_name: Optional[str] = Field(None, description="Display name for P1")
    player2_name: Optional[str] = Field(None, description="Display name for P2")


class PotRequest(BaseModel):
    """Request to record a pot."""
    ball: Ball = Field(..., description="red, yellow, green, brown, blue, pink, black")


class FoulRequest(BaseModel):
    """Request to record a foul by the player at the table."""
    points: int = Field(..., description="Penalty awarded to the opponent: 4-7")


class CoinTossRequest(BaseModel):
    """Request to record the respotted-black coin toss."""
    winner: PlayerId


class PlayerNameRequest(BaseModel):
    """Request to change a player's display name."""
    name: str = Field(..., description="1-20 characters")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class FrameStateResponse(BaseModel):
    """Complete frame state for display."""
    frame_id: str
    phase: str
    players: list[PlayerInfo] = Field(default_factory=list)
    current_player: PlayerId
    reds_remaining: int
    colors_on_table: dict[str, bool] = Field(default_factory=dict)
    break_score: int = 0
    frame_over: bool = False
    winner: Optional[PlayerId] = None
    tie_break: Optional[TieBreakInfo] = None
    legal_balls: list[Ball] = Field(
        default_factory=list, description="Balls that may be potted next, in value order"
    )
    history: list[HistoryEntryInfo] = Field(default_factory=list)
    api_version: str = "v1"


class FrameListResponse(BaseModel):
    """Response listing active frame sessions."""
    frames: list[str]
    count: int


class EndFrameResponse(BaseModel):
    """Response after ending a frame session."""
    success: bool
    frame_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
