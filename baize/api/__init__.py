"""
API Module - Remote scorer interface.

Exposes the engine via REST so a web or mobile scorer can:
1. Open a frame session
2. Send pots, fouls, end-of-turn and coin tosses
3. Read the frame state, legal balls and formatted history
4. Reset for the next frame

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    CreateFrameRequest,
    PotRequest,
    FoulRequest,
    CoinTossRequest,
    PlayerNameRequest,
    # Responses
    FrameStateResponse,
    FrameListResponse,
    EndFrameResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    ErrorCode,
    PlayerInfo,
    TieBreakInfo,
    HistoryEntryInfo,
)
from .service import APIService, frame_state_response

__all__ = [
    # Requests
    "CreateFrameRequest",
    "PotRequest",
    "FoulRequest",
    "CoinTossRequest",
    "PlayerNameRequest",
    # Responses
    "FrameStateResponse",
    "FrameListResponse",
    "EndFrameResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "ErrorCode",
    "PlayerInfo",
    "TieBreakInfo",
    "HistoryEntryInfo",
    # Service
    "APIService",
    "frame_state_response",
]
