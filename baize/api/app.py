"""
FastAPI Application - REST API for remote scorers.

Endpoints:
    POST   /api/v1/frames                         Open a frame session
    GET    /api/v1/frames                         List frame sessions
    GET    /api/v1/frames/{id}                    Get frame state
    DELETE /api/v1/frames/{id}                    End frame session
    POST   /api/v1/frames/{id}/pot                Record a pot
    POST   /api/v1/frames/{id}/foul               Record a foul
    POST   /api/v1/frames/{id}/end-turn           End the current visit
    POST   /api/v1/frames/{id}/coin-toss          Resolve the respotted-black toss
    POST   /api/v1/frames/{id}/reset              Start a new frame
    PUT    /api/v1/frames/{id}/players/{player}   Rename a player

Every frame response carries `legal_balls`, so a client enables exactly
those pot buttons. Rejected actions return 409 with an error code and
leave the frame unchanged.
"""

from typing import Union
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..engine_core import PlayerId
from .service import APIService
from .schemas import (
    CreateFrameRequest,
    PotRequest,
    FoulRequest,
    CoinTossRequest,
    PlayerNameRequest,
    FrameStateResponse,
    FrameListResponse,
    EndFrameResponse,
    ErrorResponse,
    HealthResponse,
    ErrorCode,
)

# Environment configuration
BAIZE_ENV = os.getenv("BAIZE_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
SESSION_TTL = int(os.getenv("BAIZE_SESSION_TTL", "3600"))

_STATUS_BY_CODE = {
    ErrorCode.FRAME_NOT_FOUND: 404,
    ErrorCode.VALIDATION_ERROR: 422,
}


def create_app(service: APIService | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Baize Snooker API",
        description="""
Snooker frame scoring - pots, fouls, breaks and the respotted black.

## Error Codes

| Code | Description |
|------|-------------|
| `FRAME_NOT_FOUND` | Frame session does not exist |
| `FRAME_OVER` | Frame decided; reset to play again |
| `ILLEGAL_BALL` | Ball not in `legal_balls` |
| `INVALID_FOUL_VALUE` | Foul value outside 4-7 |
| `AWAITING_COIN_TOSS` | Tiebreak needs a coin toss first |
| `NO_COIN_TOSS_PENDING` | No tiebreak awaiting a toss |
| `INVALID_PLAYER_NAME` | Name empty or over 20 characters |
| `VALIDATION_ERROR` | Malformed request body or path value (422) |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Wrap an ErrorResponse with the status code its error code maps to."""
        return JSONResponse(
            status_code=_STATUS_BY_CODE.get(error.error_code, 409),
            content=error.model_dump(mode="json"),
        )

    def respond(response) -> Union[FrameStateResponse, JSONResponse]:
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report malformed request bodies and path values as ErrorResponse."""
        problems = [
            {"location": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        return make_error_response(ErrorResponse(
            error="Invalid request",
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"errors": problems},
        ))

    # =========================================================================
    # Frame Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/frames",
        response_model=FrameStateResponse,
        responses={409: {"model": ErrorResponse}},
        tags=["Frames"],
        summary="Open a new frame session",
    )
    async def create_frame(body: CreateFrameRequest) -> Union[FrameStateResponse, JSONResponse]:
        """Open a new frame. Idle sessions older than the TTL are dropped first."""
        api_service.cleanup(SESSION_TTL)
        return respond(api_service.create_frame(body))

    @app.get(
        "/api/v1/frames",
        response_model=FrameListResponse,
        tags=["Frames"],
        summary="List frame sessions",
    )
    async def list_frames() -> FrameListResponse:
        frames = api_service.list_frames()
        return FrameListResponse(frames=frames, count=len(frames))

    @app.get(
        "/api/v1/frames/{frame_id}",
        response_model=FrameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Frames"],
        summary="Get frame state",
    )
    async def get_frame(frame_id: str) -> Union[FrameStateResponse, JSONResponse]:
        return respond(api_service.get_frame(frame_id))

    @app.delete(
        "/api/v1/frames/{frame_id}",
        response_model=EndFrameResponse,
        tags=["Frames"],
        summary="End a frame session",
    )
    async def end_frame(frame_id: str) -> EndFrameResponse:
        success = api_service.end_frame(frame_id)
        return EndFrameResponse(success=success, frame_id=frame_id)

    # =========================================================================
    # Play Endpoints
    # =========================================================================

    play_responses = {
        404: {"model": ErrorResponse, "description": "Frame not found"},
        409: {"model": ErrorResponse, "description": "Action not legal now"},
    }

    @app.post(
        "/api/v1/frames/{frame_id}/pot",
        response_model=FrameStateResponse,
        responses=play_responses,
        tags=["Play"],
        summary="Record a pot by the player at the table",
    )
    async def pot(frame_id: str, body: PotRequest) -> Union[FrameStateResponse, JSONResponse]:
        return respond(api_service.pot(frame_id, body.ball))

    @app.post(
        "/api/v1/frames/{frame_id}/foul",
        response_model=FrameStateResponse,
        responses=play_responses,
        tags=["Play"],
        summary="Record a foul; the opponent receives the points",
    )
    async def foul(frame_id: str, body: FoulRequest) -> Union[FrameStateResponse, JSONResponse]:
        return respond(api_service.foul(frame_id, body.points))

    @app.post(
        "/api/v1/frames/{frame_id}/end-turn",
        response_model=FrameStateResponse,
        responses=play_responses,
        tags=["Play"],
        summary="End the current visit without a foul",
    )
    async def end_turn(frame_id: str) -> Union[FrameStateResponse, JSONResponse]:
        return respond(api_service.end_turn(frame_id))

    @app.post(
        "/api/v1/frames/{frame_id}/coin-toss",
        response_model=FrameStateResponse,
        responses=play_responses,
        tags=["Play"],
        summary="Resolve the respotted-black coin toss",
    )
    async def coin_toss(frame_id: str, body: CoinTossRequest) -> Union[FrameStateResponse, JSONResponse]:
        return respond(api_service.resolve_coin_toss(frame_id, body.winner))

    @app.post(
        "/api/v1/frames/{frame_id}/reset",
        response_model=FrameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Play"],
        summary="Start a new frame, keeping player names",
    )
    async def reset_frame(frame_id: str) -> Union[FrameStateResponse, JSONResponse]:
        return respond(api_service.reset_frame(frame_id))

    @app.put(
        "/api/v1/frames/{frame_id}/players/{player_id}",
        response_model=FrameStateResponse,
        responses=play_responses,
        tags=["Play"],
        summary="Rename a player",
    )
    async def set_player_name(
        frame_id: str,
        player_id: PlayerId,
        body: PlayerNameRequest,
    ) -> Union[FrameStateResponse, JSONResponse]:
        return respond(api_service.set_player_name(frame_id, player_id, body.name))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="baize",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Baize Snooker API",
            "version": __version__,
            "env": BAIZE_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn baize.api.app:app
app = create_app()
