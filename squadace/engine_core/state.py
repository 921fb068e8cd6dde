"""
Match State - The authoritative record of a match.

Design principles:
- Immutable: all mutations return new state
- Serializable: plain dataclasses, no callbacks or timers inside
- Single writer: only the reducer produces new states

Invariant: cards are only ever moved between hands, so the total
number of cards in hands always equals the size of the canonical deck.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace as dc_replace
from enum import Enum


class Phase(Enum):
    """Every phase of a match. The set is exhaustive."""
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


# Phases where the local user is expected to act (countdown runs)
USER_INPUT_PHASES = frozenset({
    Phase.PLAYER_TURN_SELECT_CARD,
    Phase.PLAYER_TURN_SELECT_STAT,
    Phase.PLAYER_TURN_RESPOND_TO_OPPONENT_CHALLENGE,
})

# Phases where the AI is expected to act
AI_PHASES = frozenset({
    Phase.OPPONENT_TURN_SELECTING_CARD,
    Phase.OPPONENT_TURN_SELECT_CARD_AND_STAT,
})


@dataclass(frozen=True)
class Stat:
    """A labelled stat value printed on a card."""
    label: str
    value: int


@dataclass(frozen=True)
class Card:
    """
    A player card.

    Cards are immutable once generated. Identity is the card_id.
    """
    card_id: str
    name: str
    image: str
    image_hint: str = ""
    stats: dict[str, Stat] = field(default_factory=dict)

    def __hash__(self):
        return hash(self.card_id)

    def __eq__(self, other):
        if not isinstance(other, Card):
            return False
        return self.card_id == other.card_id

    def stat_value(self, stat_name: str) -> int | None:
        """Raw value of a stat, or None if the card lacks it."""
        entry = self.stats.get(stat_name)
        return entry.value if entry is not None else None


@dataclass(frozen=True)
class Player:
    """
    A seat at the table.

    Only the hand changes during a match. hand[0] is the top card.
    """
    player_id: str
    name: str
    is_local_user: bool = False
    hand: tuple[Card, ...] = ()
    avatar_url: str = ""

    @property
    def top_card(self) -> Card | None:
        return self.hand[0] if self.hand else None

    @property
    def card_count(self) -> int:
        return len(self.hand)

    def with_hand(self, hand) -> Player:
        """Return new player with a different hand."""
        return dc_replace(self, hand=tuple(hand))


@dataclass(frozen=True)
class Selection:
    """A card committed by a player for the current round."""
    player_id: str
    card: Card


@dataclass(frozen=True)
class RoundResult:
    """Outcome of a resolved round, kept for display."""
    stat_name: str
    values: dict[str, int | None]
    winner_id: str | None = None
    loser_id: str | None = None
    taken_card_id: str | None = None
    forced_draw: bool = False

    @property
    def is_draw(self) -> bool:
        return self.winner_id is None


@dataclass(frozen=True)
class MatchState:
    """
    Complete match state at a point in time.

    current_player_id holds the initiative (who leads the round),
    turn_player_id is the player whose action is awaited.
    """
    match_id: str
    players: tuple[Player, ...] = ()
    deck: tuple[Card, ...] = ()

    current_player_id: str | None = None
    turn_player_id: str | None = None
    phase: Phase = Phase.LOBBY

    # Current round
    selections: tuple[Selection, ...] = ()
    selected_stat: str | None = None

    message: str = ""
    winner_id: str | None = None
    invite_code: str = ""
    last_round_winner_id: str | None = None
    is_paused: bool = False

    # Remaining countdown units while the local user is expected to act
    countdown: int | None = None

    round_number: int = 0
    last_result: RoundResult | None = None

    @property
    def local_user(self) -> Player | None:
        for p in self.players:
            if p.is_local_user:
                return p
        return None

    @property
    def opponent(self) -> Player | None:
        """The first AI-controlled player."""
        for p in self.players:
            if not p.is_local_user:
                return p
        return None

    @property
    def total_cards(self) -> int:
        return sum(p.card_count for p in self.players)

    @property
    def is_user_input_phase(self) -> bool:
        return self.phase in USER_INPUT_PHASES

    @property
    def is_ai_phase(self) -> bool:
        return self.phase in AI_PHASES

    def get_player(self, player_id: str | None) -> Player | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def get_selection(self, player_id: str) -> Selection | None:
        for s in self.selections:
            if s.player_id == player_id:
                return s
        return None

    def other_player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.player_id != player_id:
                return p
        return None

    def with_player(self, player: Player) -> MatchState:
        """Return new state with updated player."""
        new_players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return self.replace(players=new_players)

    def replace(self, **changes) -> MatchState:
        """Create a copy with some fields replaced."""
        return dc_replace(self, **changes)
