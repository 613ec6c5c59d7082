"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Manages frame sessions
3. Holds each session's lock for the whole transition
4. Formats responses for remote scorers

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..engine_core import (
    Action,
    Ball,
    FrameState,
    IllegalActionError,
    PlayerId,
    describe_entry,
    frame_phase,
    legal_balls,
)
from ..session import Session, SessionManager
from .schemas import (
    CreateFrameRequest,
    ErrorCode,
    ErrorResponse,
    FrameStateResponse,
    HistoryEntryInfo,
    PlayerInfo,
    TieBreakInfo,
)

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service for remote scorers.

    Usage:
        service = APIService()
        frame = service.create_frame(CreateFrameRequest(player1_name="Ronnie"))
        response = service.pot(frame.frame_id, Ball.RED)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_frame(self, request: CreateFrameRequest) -> FrameStateResponse | ErrorResponse:
        """Open a new frame session."""
        names = {}
        if request.player1_name is not None:
            names[PlayerId.P1] = request.player1_name
        if request.player2_name is not None:
            names[PlayerId.P2] = request.player2_name

        try:
            session = self.session_manager.create_session(player_names=names)
        except IllegalActionError as e:
            return self._error(e)
        return self._session_to_response(session)

    def get_frame(self, frame_id: str) -> FrameStateResponse | ErrorResponse:
        """Get the current state of a frame session."""
        session = self.session_manager.get_session(frame_id)
        if not session:
            return self._not_found(frame_id)
        with session.lock:
            session.touch()
            return self._session_to_response(session)

    def list_frames(self) -> list[str]:
        """List active frame session IDs."""
        return self.session_manager.list_active_sessions()

    def end_frame(self, frame_id: str) -> bool:
        """End a frame session and release it."""
        return self.session_manager.end_session(frame_id)

    def pot(self, frame_id: str, ball: Ball) -> FrameStateResponse | ErrorResponse:
        return self._apply(frame_id, Action.pot(ball))

    def foul(self, frame_id: str, points: int) -> FrameStateResponse | ErrorResponse:
        return self._apply(frame_id, Action.foul(points))

    def end_turn(self, frame_id: str) -> FrameStateResponse | ErrorResponse:
        return self._apply(frame_id, Action.end_turn())

    def resolve_coin_toss(self, frame_id: str, winner: PlayerId) -> FrameStateResponse | ErrorResponse:
        return self._apply(frame_id, Action.resolve_coin_toss(winner))

    def reset_frame(self, frame_id: str) -> FrameStateResponse | ErrorResponse:
        return self._apply(frame_id, Action.reset_frame())

    def set_player_name(
        self, frame_id: str, player: PlayerId, name: str
    ) -> FrameStateResponse | ErrorResponse:
        return self._apply(frame_id, Action.set_player_name(player, name))

    def cleanup(self, max_age_seconds: int) -> int:
        """Drop idle sessions."""
        return self.session_manager.cleanup_stale_sessions(max_age_seconds)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _apply(self, frame_id: str, action: Action) -> FrameStateResponse | ErrorResponse:
        """Apply one action to a session's frame under its lock."""
        session = self.session_manager.get_session(frame_id)
        if not session:
            return self._not_found(frame_id)

        with session.lock:
            session.touch()
            try:
                session.frame.apply(action)
            except IllegalActionError as e:
                return self._error(e)
            logger.debug("Frame %s: applied %s", frame_id, action.action_type.value)
            return self._session_to_response(session)

    def _error(self, error: IllegalActionError) -> ErrorResponse:
        return ErrorResponse(
            error=error.message,
            error_code=ErrorCode(error.error_code.value),
        )

    def _not_found(self, frame_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Frame {frame_id} not found",
            error_code=ErrorCode.FRAME_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> FrameStateResponse:
        return frame_state_response(session.session_id, session.frame.state)


def frame_state_response(frame_id: str, state: FrameState) -> FrameStateResponse:
    """Convert a FrameState to its API representation."""
    tie_break = None
    if state.tie_break is not None:
        tie_break = TieBreakInfo(
            awaiting_toss=state.tie_break.awaiting_toss,
            coin_toss_winner=state.tie_break.coin_toss_winner,
        )

    return FrameStateResponse(
        frame_id=frame_id,
        phase=frame_phase(state).value,
        players=[
            PlayerInfo(
                player_id=player,
                name=state.name_of(player),
                score=state.scores[player],
                is_current_turn=player == state.current_player,
            )
            for player in PlayerId
        ],
        current_player=state.current_player,
        reds_remaining=state.reds_remaining,
        colors_on_table={ball.value: on for ball, on in state.colors_on_table.items()},
        break_score=state.break_score,
        frame_over=state.frame_over,
        winner=state.winner,
        tie_break=tie_break,
        legal_balls=sorted(legal_balls(state), key=lambda b: b.points),
        history=[
            HistoryEntryInfo(
                index=i,
                player=entry.player,
                kind=entry.kind.value,
                points=entry.points,
                ball=entry.ball,
                winner=entry.winner,
                text=describe_entry(entry, state.player_names),
            )
            for i, entry in enumerate(state.history)
        ],
    )
