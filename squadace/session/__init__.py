"""
Session Module - Drives matches in time.

A session is one match at one table:
- Created when the user opens a match
- Holds the TurnEngine and its scheduler
- Collects round-result notifications for the presentation layer
- Destroyed when the user leaves

Sessions are EPHEMERAL: nothing is persisted.
"""

from .scheduler import Scheduler, TimerHandle, ManualScheduler, ThreadingScheduler
from .engine import TurnEngine
from .manager import MatchManager, MatchSession

__all__ = [
    "Scheduler",
    "TimerHandle",
    "ManualScheduler",
    "ThreadingScheduler",
    "TurnEngine",
    "MatchManager",
    "MatchSession",
]
