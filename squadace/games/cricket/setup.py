"""
Squad Ace Match Setup - Creates the initial match state.

This module handles:
- Dealing a shuffled deck round-robin into hands
- Creating the local user and the AI opponent
- Building the lobby state of a fresh match
- The coin toss that decides who leads the first round

Initialization is re-invocable: "play again" simply builds a new state.
"""

from __future__ import annotations
import random
from typing import Sequence

from ...config import EngineConfig, DEFAULT_CONFIG
from ...engine_core.state import MatchState, Player, Card, Phase
from ...spec_schema import GameSpec
from .cards import generate_deck
from .spec import create_cricket_spec


LOCAL_PLAYER_ID = "player1"
OPPONENT_PLAYER_ID = "player2"

WELCOME_MESSAGE = 'Welcome to Squad Ace! Click "Start Game" to begin.'

USER_AVATAR = "https://placehold.co/100x100.png"
OPPONENT_AVATAR = "https://images.unsplash.com/photo-1494790108377-be9c29b29330?fit=max&w=1080"


def deal_cards(
    deck: Sequence[Card],
    num_players: int,
    rng: random.Random | None = None,
) -> list[list[Card]]:
    """
    Shuffle a copy of the deck and deal it round-robin.

    Hand sizes differ by at most one. The input deck is not modified.
    """
    if num_players < 1:
        raise ValueError("num_players must be >= 1")

    rng = rng or random.Random()
    shuffled = list(deck)
    rng.shuffle(shuffled)

    hands: list[list[Card]] = [[] for _ in range(num_players)]
    for index, card in enumerate(shuffled):
        hands[index % num_players].append(card)
    return hands


def create_players(hands: Sequence[Sequence[Card]], user_name: str = "You") -> list[Player]:
    """Create the local user (first hand) and the AI opponent (second hand)."""
    return [
        Player(
            player_id=LOCAL_PLAYER_ID,
            name=user_name,
            is_local_user=True,
            hand=tuple(hands[0]) if len(hands) > 0 else (),
            avatar_url=USER_AVATAR,
        ),
        Player(
            player_id=OPPONENT_PLAYER_ID,
            name="Opponent",
            is_local_user=False,
            hand=tuple(hands[1]) if len(hands) > 1 else (),
            avatar_url=OPPONENT_AVATAR,
        ),
    ]


def invite_code(match_id: str) -> str:
    return f"SQD-{match_id[:4].upper()}"


def initialize_match(
    match_id: str,
    spec: GameSpec | None = None,
    config: EngineConfig | None = None,
    rng: random.Random | None = None,
    user_name: str = "You",
) -> MatchState:
    """
    Set up a new match in the lobby.

    Args:
        match_id: Squad/match identifier (also seeds the invite code)
        spec: Game spec (cricket by default)
        config: Engine config providing table size
        rng: Random source for stats and shuffle

    Returns:
        Initial MatchState in the lobby phase
    """
    config = config or DEFAULT_CONFIG
    game_spec = spec or create_cricket_spec(config.cards_per_player)
    rng = rng or random.Random()

    deck = generate_deck(config.cards_per_player * config.num_players, game_spec, rng)
    hands = deal_cards(deck, config.num_players, rng)
    players = create_players(hands, user_name=user_name)

    return MatchState(
        match_id=match_id,
        players=tuple(players),
        deck=tuple(deck),
        current_player_id=None,
        turn_player_id=None,
        phase=Phase.LOBBY,
        selections=(),
        selected_stat=None,
        message=WELCOME_MESSAGE,
        winner_id=None,
        invite_code=invite_code(match_id),
        last_round_winner_id=None,
        is_paused=False,
    )


def coin_toss(state: MatchState, rng: random.Random | None = None) -> str:
    """Pick the toss winner uniformly at random, returns a player ID."""
    rng = rng or random.Random()
    return rng.choice([p.player_id for p in state.players])
