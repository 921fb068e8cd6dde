"""
Engine Core - Match state and the reducer that drives it.

The engine core is the pure part of the system:
1. Holds the MatchState data model
2. Defines the actions that can change it
3. Applies actions via the reducer
4. Resolves rounds and detects the end of the game
"""

from .state import (
    MatchState,
    Player,
    Card,
    Stat,
    Selection,
    RoundResult,
    Phase,
    USER_INPUT_PHASES,
    AI_PHASES,
)
from .action import Action, ActionType, ActionPayload, ActionResult, Notification
from .reducer import Reducer, apply_action, resolve_round, detect_game_over

__all__ = [
    "MatchState",
    "Player",
    "Card",
    "Stat",
    "Selection",
    "RoundResult",
    "Phase",
    "USER_INPUT_PHASES",
    "AI_PHASES",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Notification",
    "Reducer",
    "apply_action",
    "resolve_round",
    "detect_game_over",
]
