"""
Cricket - The Squad Ace card set

Every card is a cricketer with nine numeric stats. Players take turns
challenging with a stat of their top card; the better value takes the
opponent's card. Bowling average and bowling strike rate are
lower-is-better.

This module contains:
- The cricket stat schema
- Deck generation
- Dealing and match initialization
"""

from .spec import create_cricket_spec, CRICKET_STATS
from .cards import generate_deck, PLAYER_NAMES
from .setup import (
    deal_cards,
    create_players,
    initialize_match,
    coin_toss,
    LOCAL_PLAYER_ID,
    OPPONENT_PLAYER_ID,
)

__all__ = [
    "create_cricket_spec",
    "CRICKET_STATS",
    "generate_deck",
    "PLAYER_NAMES",
    "deal_cards",
    "create_players",
    "initialize_match",
    "coin_toss",
    "LOCAL_PLAYER_ID",
    "OPPONENT_PLAYER_ID",
]
