"""
FastAPI Application - JSON API for the presentation layer.

Endpoints:
    GET    /api/v1/health                           Liveness check
    GET    /api/v1/stats                            Stat schema
    POST   /api/v1/matches                          Create match (lobby)
    GET    /api/v1/matches                          List matches
    GET    /api/v1/matches/{id}                     Get match state
    DELETE /api/v1/matches/{id}                     End match
    POST   /api/v1/matches/{id}/restart             Play again
    POST   /api/v1/matches/{id}/start               lobby -> toss
    POST   /api/v1/matches/{id}/toss                toss -> first turn
    POST   /api/v1/matches/{id}/play                Play top card
    POST   /api/v1/matches/{id}/stat                Pick challenge stat
    POST   /api/v1/matches/{id}/next-round          Advance from round_over
    POST   /api/v1/matches/{id}/pause               Toggle pause
    GET    /api/v1/matches/{id}/notifications       Drain round results

Intent Flow:
    Intents return 200 with accepted=true/false and the current state.
    AI moves, reveals and countdown ticks run on server-side timers;
    poll GET /matches/{id} to render them.

All responses are JSON with explicit Pydantic schemas.
"""

from contextlib import asynccontextmanager
from typing import Optional, Union
import logging
import os

from .. import __version__
from ..config import EngineConfig

# Environment configuration
SQUADACE_ENV = os.getenv("SQUADACE_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Body
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        CreateMatchRequest,
        TossRequest,
        SelectStatRequest,
        MatchStateResponse,
        IntentResponse,
        NotificationsResponse,
        StatSchemaResponse,
        ErrorResponse,
        MatchListResponse,
        EndMatchResponse,
        HealthResponse,
        ErrorCode,
    )
    from ..session import MatchManager, ThreadingScheduler

    # Service instance
    api_service = service or APIService(
        match_manager=MatchManager(
            config=EngineConfig(),
            scheduler_factory=ThreadingScheduler,
        )
    )

    @asynccontextmanager
    async def lifespan(app):
        yield
        # Cancel every pending timer before the process exits
        for match_id in api_service.list_matches():
            api_service.end_match(match_id)

    app = FastAPI(
        lifespan=lifespan,
        title="Squad Ace Engine API",
        description="""
Cricket stat-battle engine - play your top card, pick a stat, beat the AI.

## Intent Flow

1. `POST /matches` creates a match in the `lobby`
2. `POST /start`, then `POST /toss`
3. On your turn: `POST /play`, then `POST /stat` when you lead
4. The opponent, the reveal and the countdown run on server timers;
   poll `GET /matches/{id}` and `GET /notifications`

Rejected intents return `accepted=false` with one of:
`WRONG_PHASE`, `NOT_YOUR_TURN`, `PAUSED`, `GAME_OVER`, `UNKNOWN_STAT`, `UNKNOWN_PLAYER`.
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

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def respond(response):
        """Map service-level ErrorResponse objects to HTTP errors."""
        if isinstance(response, ErrorResponse):
            status = 404 if response.error_code == ErrorCode.SESSION_NOT_FOUND else 400
            return make_error_response(response.error_code, response.error, status_code=status)
        return response

    # =========================================================================
    # Meta Endpoints
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Meta"])
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__, environment=SQUADACE_ENV)

    @app.get(
        "/api/v1/stats",
        response_model=StatSchemaResponse,
        tags=["Meta"],
        summary="Describe the stat schema",
    )
    async def stats() -> StatSchemaResponse:
        return api_service.stat_schema()

    # =========================================================================
    # Match Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/matches",
        response_model=MatchStateResponse,
        tags=["Matches"],
        summary="Create a match in the lobby",
    )
    async def create_match(
        body: Optional[CreateMatchRequest] = Body(None),
    ) -> MatchStateResponse:
        """Create a match. Re-using an id replaces the previous match."""
        return api_service.create_match(body or CreateMatchRequest())

    @app.get(
        "/api/v1/matches",
        response_model=MatchListResponse,
        tags=["Matches"],
        summary="List matches",
    )
    async def list_matches() -> MatchListResponse:
        matches = api_service.list_matches()
        return MatchListResponse(matches=matches, count=len(matches))

    @app.get(
        "/api/v1/matches/{match_id}",
        response_model=MatchStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Matches"],
        summary="Get match state",
    )
    async def get_match(match_id: str) -> Union[MatchStateResponse, JSONResponse]:
        return respond(api_service.get_state(match_id))

    @app.delete(
        "/api/v1/matches/{match_id}",
        response_model=EndMatchResponse,
        tags=["Matches"],
        summary="End a match",
    )
    async def end_match(match_id: str) -> EndMatchResponse:
        """End a match and cancel its timers."""
        success = api_service.end_match(match_id)
        return EndMatchResponse(success=success, match_id=match_id)

    @app.post(
        "/api/v1/matches/{match_id}/restart",
        response_model=MatchStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Matches"],
        summary="Play again with a fresh deal",
    )
    async def restart_match(match_id: str) -> Union[MatchStateResponse, JSONResponse]:
        return respond(api_service.restart(match_id))

    @app.get(
        "/api/v1/matches/{match_id}/notifications",
        response_model=NotificationsResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Matches"],
        summary="Drain round-result notifications",
    )
    async def notifications(match_id: str) -> Union[NotificationsResponse, JSONResponse]:
        return respond(api_service.get_notifications(match_id))

    # =========================================================================
    # Intent Endpoints
    # =========================================================================

    intent_responses = {404: {"model": ErrorResponse, "description": "Match not found"}}

    @app.post(
        "/api/v1/matches/{match_id}/start",
        response_model=IntentResponse,
        responses=intent_responses,
        tags=["Game Loop"],
        summary="Start the game (lobby -> toss)",
    )
    async def start_game(match_id: str) -> Union[IntentResponse, JSONResponse]:
        return respond(api_service.start_game(match_id))

    @app.post(
        "/api/v1/matches/{match_id}/toss",
        response_model=IntentResponse,
        responses=intent_responses,
        tags=["Game Loop"],
        summary="Complete the toss",
    )
    async def toss(
        match_id: str,
        body: Optional[TossRequest] = Body(None),
    ) -> Union[IntentResponse, JSONResponse]:
        """Omit winner_id to flip the coin on the server."""
        winner_id = body.winner_id if body else None
        return respond(api_service.toss(match_id, winner_id))

    @app.post(
        "/api/v1/matches/{match_id}/play",
        response_model=IntentResponse,
        responses=intent_responses,
        tags=["Game Loop"],
        summary="Play your top card",
    )
    async def play_top_card(match_id: str) -> Union[IntentResponse, JSONResponse]:
        return respond(api_service.play_top_card(match_id))

    @app.post(
        "/api/v1/matches/{match_id}/stat",
        response_model=IntentResponse,
        responses=intent_responses,
        tags=["Game Loop"],
        summary="Pick the challenge stat",
    )
    async def select_stat(
        match_id: str,
        body: SelectStatRequest,
    ) -> Union[IntentResponse, JSONResponse]:
        return respond(api_service.select_stat(match_id, body.stat_name))

    @app.post(
        "/api/v1/matches/{match_id}/next-round",
        response_model=IntentResponse,
        responses=intent_responses,
        tags=["Game Loop"],
        summary="Advance from round_over",
    )
    async def next_round(match_id: str) -> Union[IntentResponse, JSONResponse]:
        return respond(api_service.next_round(match_id))

    @app.post(
        "/api/v1/matches/{match_id}/pause",
        response_model=IntentResponse,
        responses=intent_responses,
        tags=["Game Loop"],
        summary="Pause or resume",
    )
    async def toggle_pause(match_id: str) -> Union[IntentResponse, JSONResponse]:
        return respond(api_service.toggle_pause(match_id))

    return app


# For running directly: uvicorn squadace.api.app:app
app = None
if SQUADACE_ENV != "test":
    try:
        app = create_app()
    except ImportError:
        logger.warning("FastAPI not installed; squadace.api.app.app is unavailable")
