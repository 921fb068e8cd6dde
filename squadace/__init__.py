"""
Squad Ace - Cricket Stat-Battle Engine

A turn-based engine for a two-player "top trumps" style card game
against a local AI opponent. The engine provides:
- Deck generation and dealing
- Match state management
- A pure reducer for every phase transition
- Cancelable scheduling for AI moves, reveals and turn timeouts
"""

__version__ = "0.1.0"
