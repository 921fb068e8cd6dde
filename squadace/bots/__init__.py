"""
Bots module - AI opponent implementations.

Provides:
- BotPolicy: Interface for stat decisions
- RandomStatPolicy: Uniform random stat (default opponent, timeout auto-play)
- StrongestStatPolicy: Picks the card's relatively best stat
"""

from .policy import BotPolicy, BotDecision, RandomStatPolicy, StrongestStatPolicy

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomStatPolicy",
    "StrongestStatPolicy",
]
