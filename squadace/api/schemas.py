"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between the presentation layer
and the engine. The presentation layer only renders these and sends
intents back.

Error Codes:
- SESSION_NOT_FOUND: Match does not exist or has ended
- VALIDATION_ERROR: Malformed request
- INTERNAL_ERROR: Unexpected failure

Rejected intents (wrong phase, not your turn, paused, unknown stat) are
NOT errors: they come back with accepted=false and the unchanged state.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class MatchPhase(str, Enum):
    """Match phase values."""
    LOBBY = "lobby"
    TOSS = "toss"
    PLAYER_TURN_SELECT_CARD = "player_turn_select_card"
    PLAYER_TURN_SELECT_STAT = "player_turn_select_stat"
    OPPONENT_TURN_SELECTING_CARD = "opponent_turn_selecting_card"
    OPPONENT_TURN_SELECT_CARD_AND_STAT = "opponent_turn_select_card_and_stat"
    PLAYER_TURN_RESPOND_TO_OPPONENT_CHALLENGE = "player_turn_respond_to_opponent_challenge"
    REVEAL = "reveal"
    ROUND_OVER = "round_over"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class StatInfo(BaseModel):
    """A stat printed on a card."""
    name: str
    label: str
    value: int
    higher_is_better: bool = True


class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    name: str
    image_url: str
    image_hint: Optional[str] = None
    stats: list[StatInfo] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    is_local_user: bool
    is_current_turn: bool = False
    has_initiative: bool = False
    card_count: int = 0
    avatar_url: Optional[str] = None
    top_card: Optional[CardInfo] = Field(
        None, description="Only filled for the local user"
    )
    hand: list[CardInfo] = Field(
        default_factory=list, description="Only filled for the local user"
    )

    model_config = {"from_attributes": True}


class SelectionInfo(BaseModel):
    """A card committed for the current round."""
    player_id: str
    card: CardInfo


class RoundResultInfo(BaseModel):
    """Outcome of the most recently resolved round."""
    stat_name: str
    values: dict[str, Optional[int]]
    winner_id: Optional[str] = None
    taken_card_id: Optional[str] = None
    is_draw: bool = False
    forced_draw: bool = False


class NotificationInfo(BaseModel):
    """A round-result toast."""
    title: str
    description: str


class StatDefinitionInfo(BaseModel):
    """Schema entry for a challengeable stat."""
    name: str
    label: str
    minimum: int
    maximum: int
    higher_is_better: bool


# =============================================================================
# Requests
# =============================================================================

class CreateMatchRequest(BaseModel):
    """Create a match; the id doubles as squad id and invite code seed."""
    match_id: Optional[str] = Field(None, min_length=1, max_length=64)


class TossRequest(BaseModel):
    """Complete the toss; omit winner_id to flip a coin server-side."""
    winner_id: Optional[str] = None


class SelectStatRequest(BaseModel):
    stat_name: str = Field(description="Stat name from the schema, e.g. runs")


# =============================================================================
# Responses
# =============================================================================

class MatchStateResponse(BaseModel):
    """Complete renderable match state."""
    match_id: str
    phase: MatchPhase
    message: str
    invite_code: str
    players: list[PlayerInfo] = Field(default_factory=list)
    current_player_id: Optional[str] = None
    turn_player_id: Optional[str] = None
    selections: list[SelectionInfo] = Field(default_factory=list)
    selected_stat: Optional[str] = None
    winner_id: Optional[str] = None
    last_round_winner_id: Optional[str] = None
    last_result: Optional[RoundResultInfo] = None
    is_paused: bool = False
    countdown: Optional[int] = None
    round_number: int = 0
    deck_size: int = 0


class IntentResponse(BaseModel):
    """Answer to a user intent."""
    accepted: bool
    error: Optional[str] = None
    error_code: Optional[str] = None
    changes: list[str] = Field(default_factory=list)
    state: MatchStateResponse


class NotificationsResponse(BaseModel):
    match_id: str
    notifications: list[NotificationInfo] = Field(default_factory=list)


class StatSchemaResponse(BaseModel):
    game_name: str
    version: str
    stats: list[StatDefinitionInfo]


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class MatchListResponse(BaseModel):
    matches: list[str]
    count: int


class EndMatchResponse(BaseModel):
    success: bool
    match_id: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    environment: str
