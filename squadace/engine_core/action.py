"""
Action System - Actions, payloads, and results.

Actions represent:
1. User intents forwarded by the presentation layer (start, toss, play, stat)
2. AI moves emitted by the engine's scheduled callbacks
3. System events (reveal resolution, round advance, countdown ticks, timeouts)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # User intents
    START_GAME = "start_game"
    COMPLETE_TOSS = "complete_toss"
    PLAY_TOP_CARD = "play_top_card"
    SELECT_STAT = "select_stat"
    ADVANCE_ROUND = "advance_round"
    TOGGLE_PAUSE = "toggle_pause"

    # AI actions
    OPPONENT_MOVE = "opponent_move"

    # Scheduled system actions
    RESOLVE_ROUND = "resolve_round"
    TICK = "tick"
    TIMEOUT = "timeout"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    player_id: str | None = None
    stat_name: str | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the match state.

    Actions are applied atomically by the reducer.
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def start_game(cls) -> Action:
        return cls(action_type=ActionType.START_GAME)

    @classmethod
    def complete_toss(cls, winner_id: str) -> Action:
        """Factory for toss completion."""
        return cls(
            action_type=ActionType.COMPLETE_TOSS,
            payload=ActionPayload(player_id=winner_id),
        )

    @classmethod
    def play_top_card(cls, player_id: str) -> Action:
        """Factory for committing the top card of a hand."""
        return cls(
            action_type=ActionType.PLAY_TOP_CARD,
            payload=ActionPayload(player_id=player_id),
        )

    @classmethod
    def select_stat(cls, player_id: str, stat_name: str) -> Action:
        """Factory for choosing the challenge stat."""
        return cls(
            action_type=ActionType.SELECT_STAT,
            payload=ActionPayload(player_id=player_id, stat_name=stat_name),
        )

    @classmethod
    def opponent_move(cls, player_id: str, stat_name: str | None = None) -> Action:
        """
        Factory for an AI move.

        stat_name is required when the AI opens the round
        and ignored when it responds to a challenge.
        """
        return cls(
            action_type=ActionType.OPPONENT_MOVE,
            payload=ActionPayload(player_id=player_id, stat_name=stat_name),
        )

    @classmethod
    def resolve_round(cls) -> Action:
        return cls(action_type=ActionType.RESOLVE_ROUND)

    @classmethod
    def advance_round(cls) -> Action:
        return cls(action_type=ActionType.ADVANCE_ROUND)

    @classmethod
    def tick(cls) -> Action:
        return cls(action_type=ActionType.TICK)

    @classmethod
    def timeout(cls, stat_name: str | None = None) -> Action:
        """Factory for the auto-play default; stat_name used in stat phase."""
        return cls(
            action_type=ActionType.TIMEOUT,
            payload=ActionPayload(stat_name=stat_name),
        )

    @classmethod
    def toggle_pause(cls) -> Action:
        return cls(action_type=ActionType.TOGGLE_PAUSE)


@dataclass(frozen=True)
class Notification:
    """A toast-style message for the presentation layer."""
    title: str
    description: str


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error and error code (if rejected)
    - Side effects for the presentation layer
    """
    success: bool
    new_state: Any | None = None  # MatchState
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)  # Human-readable changes
    notifications: list[Notification] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        notifications: list[Notification] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            notifications=notifications or [],
        )
