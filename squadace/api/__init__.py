"""
API Module - Presentation layer interface.

Exposes the engine via a JSON API. The presentation layer:
1. Creates a match (lobby)
2. Sends intents: start, toss, play top card, pick stat, next round, pause
3. Polls the match state and drains round-result notifications

All state is match-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateMatchRequest,
    TossRequest,
    SelectStatRequest,
    # Responses
    MatchStateResponse,
    IntentResponse,
    NotificationsResponse,
    StatSchemaResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    CardInfo,
    StatInfo,
    MatchPhase,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateMatchRequest",
    "TossRequest",
    "SelectStatRequest",
    # Responses
    "MatchStateResponse",
    "IntentResponse",
    "NotificationsResponse",
    "StatSchemaResponse",
    "ErrorResponse",
    # Shared
    "PlayerInfo",
    "CardInfo",
    "StatInfo",
    "MatchPhase",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
