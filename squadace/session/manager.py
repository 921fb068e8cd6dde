"""
Match Manager - Creates and tracks match sessions.

A session is one table: a TurnEngine plus the notifications it has
produced that the presentation layer has not collected yet.

Sessions are EPHEMERAL:
- In-memory only, no persistence
- "Play again" re-initializes the engine inside the same session
- Ending a session cancels its timers and drops all state
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging
import threading
import time
import uuid

from ..config import EngineConfig
from ..engine_core.action import Notification
from ..engine_core.state import Phase
from .engine import TurnEngine
from .scheduler import Scheduler, ManualScheduler

logger = logging.getLogger(__name__)


@dataclass
class MatchSession:
    """
    An ephemeral match session.

    Contains:
    - The engine driving the match
    - Undelivered notifications (round results)
    - Session metadata
    """
    session_id: str
    engine: TurnEngine
    created_at: float
    pending_notifications: list[Notification] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def is_active(self) -> bool:
        """Active until the match is over."""
        return self.engine.state.phase != Phase.GAME_OVER

    def push_notification(self, notification: Notification) -> None:
        with self._lock:
            self.pending_notifications.append(notification)

    def get_notifications(self) -> list[Notification]:
        """Drain pending notifications."""
        with self._lock:
            notifications = self.pending_notifications.copy()
            self.pending_notifications.clear()
        return notifications


class MatchManager:
    """
    Manages match sessions.

    Responsibilities:
    - Create sessions with a fresh engine
    - Track active sessions
    - Clean up finished or stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        scheduler_factory: Callable[[], Scheduler] = ManualScheduler,
    ):
        self.config = config
        self.scheduler_factory = scheduler_factory
        self._sessions: dict[str, MatchSession] = {}

    def create_match(self, match_id: str | None = None, **engine_kwargs) -> MatchSession:
        """
        Create a new match session in the lobby.

        Args:
            match_id: Squad/match identifier (random if omitted)
            engine_kwargs: Extra TurnEngine arguments (bot, rng, spec)

        Returns:
            New MatchSession
        """
        session_id = match_id or uuid.uuid4().hex
        existing = self._sessions.get(session_id)
        if existing:
            existing.engine.shutdown()

        engine = TurnEngine(
            config=self.config,
            scheduler=self.scheduler_factory(),
            **engine_kwargs,
        )
        session = MatchSession(
            session_id=session_id,
            engine=engine,
            created_at=time.time(),
        )
        engine.on_notification(session.push_notification)
        engine.initialize_match(session_id)

        self._sessions[session_id] = session
        logger.info("Created match %s", session_id)
        return session

    def get_match(self, session_id: str) -> MatchSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_match(self, session_id: str) -> bool:
        """
        End a session and clean up.

        Pending timers are cancelled; the session is removed from memory.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.engine.shutdown()
        session.engine.scheduler.shutdown()
        session.pending_notifications.clear()
        logger.info("Ended match %s", session_id)
        return True

    def list_matches(self, active_only: bool = False) -> list[str]:
        """List session IDs."""
        return [
            sid for sid, session in self._sessions.items()
            if not active_only or session.is_active()
        ]

    def cleanup_stale_matches(self, max_age_seconds: int = 3600) -> list[str]:
        """
        Remove finished sessions older than max_age.

        Called periodically to free memory.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_match(session_id)
        return to_remove
