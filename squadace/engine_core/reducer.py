"""
Reducer - Applies actions to match state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying; rejected actions leave the state untouched
- Returns ActionResult with success/failure
- No timers, no randomness: scheduled events and AI choices arrive as actions
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from ..config import EngineConfig, DEFAULT_CONFIG
from ..spec_schema import GameSpec
from .state import (
    MatchState,
    Phase,
    Player,
    Selection,
    RoundResult,
    USER_INPUT_PHASES,
    AI_PHASES,
)
from .action import Action, ActionType, ActionResult, Notification

logger = logging.getLogger(__name__)


# Phases in which each action type may be applied
ALLOWED_PHASES: dict[ActionType, frozenset[Phase]] = {
    ActionType.START_GAME: frozenset({Phase.LOBBY}),
    ActionType.COMPLETE_TOSS: frozenset({Phase.TOSS}),
    ActionType.PLAY_TOP_CARD: frozenset({
        Phase.PLAYER_TURN_SELECT_CARD,
        Phase.PLAYER_TURN_RESPOND_TO_OPPONENT_CHALLENGE,
    }),
    ActionType.SELECT_STAT: frozenset({Phase.PLAYER_TURN_SELECT_STAT}),
    ActionType.OPPONENT_MOVE: AI_PHASES,
    ActionType.RESOLVE_ROUND: frozenset({Phase.REVEAL}),
    ActionType.ADVANCE_ROUND: frozenset({Phase.ROUND_OVER}),
    ActionType.TICK: USER_INPUT_PHASES,
    ActionType.TIMEOUT: USER_INPUT_PHASES,
    ActionType.TOGGLE_PAUSE: frozenset(Phase) - {Phase.LOBBY, Phase.GAME_OVER},
}


def detect_game_over(state: MatchState) -> tuple[str, str] | None:
    """
    Check the end-of-game conditions.

    Returns (winner_id, message) or None if the match continues.
    """
    deck_size = len(state.deck)
    for player in state.players:
        if player.card_count == deck_size:
            return player.player_id, f"{player.name} has all the cards and wins the game!"

    if len(state.players) == 2:
        for player in state.players:
            if player.card_count == 0:
                winner = state.other_player(player.player_id)
                return (
                    winner.player_id,
                    f"{player.name} has no cards left! {winner.name} wins the game!",
                )

    return None


def _rotate(hand: tuple, card) -> tuple:
    """Move a played card from its place in the hand to the bottom."""
    return tuple(c for c in hand if c.card_id != card.card_id) + (card,)


def resolve_round(
    spec: GameSpec, state: MatchState
) -> tuple[MatchState, list[Notification]]:
    """
    Compare the two selections on the agreed stat and move cards.

    A tie, or a stat missing from either card, is a draw: both played
    cards go to the bottom of their owners' hands. Otherwise the winner's
    card goes to the bottom of the winner's hand followed by the loser's card.
    """
    stat_name = state.selected_stat
    first, second = state.selections[0], state.selections[1]
    stat_def = spec.get_stat(stat_name)
    label = stat_def.label if stat_def else stat_name

    value_a = first.card.stat_value(stat_name)
    value_b = second.card.stat_value(stat_name)
    values = {first.player_id: value_a, second.player_id: value_b}

    forced = stat_def is None or value_a is None or value_b is None
    outcome = 0 if forced else spec.compare(stat_name, value_a, value_b)

    if outcome == 0:
        players = tuple(
            p.with_hand(_rotate(p.hand, state.get_selection(p.player_id).card))
            if state.get_selection(p.player_id) else p
            for p in state.players
        )
        if forced:
            logger.warning(
                "Stat %r missing on %s or %s, forcing a draw",
                stat_name, first.card.card_id, second.card.card_id,
            )
            message = (
                f"Could not compare {label}: a card is missing that stat. "
                f"The round is a draw and cards return."
            )
            title = "Round Void"
        else:
            message = (
                f"It's a draw on {label} ({value_a} vs {value_b})! "
                f"Cards return to the bottom of each hand."
            )
            title = "Round Drawn"

        result = RoundResult(stat_name=stat_name, values=values, forced_draw=forced)
        new_state = state.replace(
            players=players,
            last_round_winner_id=None,
            last_result=result,
            message=message,
        )
        return new_state, [Notification(title=title, description=message)]

    winner_sel, loser_sel = (first, second) if outcome > 0 else (second, first)
    winner = state.get_player(winner_sel.player_id)
    loser = state.get_player(loser_sel.player_id)
    taken = loser_sel.card

    new_winner = winner.with_hand(_rotate(winner.hand, winner_sel.card) + (taken,))
    new_loser = loser.with_hand(c for c in loser.hand if c.card_id != taken.card_id)

    message = f"{winner.name} won the round! They take {taken.name} from {loser.name}."
    description = (
        f"{winner.name} wins the round with {label} "
        f"({values[winner.player_id]} vs {values[loser.player_id]})! "
        f"{taken.name} moves to {winner.name}'s hand."
    )

    result = RoundResult(
        stat_name=stat_name,
        values=values,
        winner_id=winner.player_id,
        loser_id=loser.player_id,
        taken_card_id=taken.card_id,
    )
    new_state = (
        state.with_player(new_winner)
        .with_player(new_loser)
        .replace(
            last_round_winner_id=winner.player_id,
            last_result=result,
            message=message,
        )
    )
    return new_state, [Notification(title="Round Result", description=description)]


@dataclass
class Reducer:
    """
    Reducer applies actions to match state.

    Stateless - all state is in MatchState.
    Spec provides the stat schema, config the turn time limit.
    """
    spec: GameSpec
    config: EngineConfig = DEFAULT_CONFIG

    def apply(self, state: MatchState, action: Action) -> ActionResult:
        """
        Apply an action to the match state.

        Returns ActionResult with new state or error.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            error, code = rejection
            return ActionResult.failure(error, error_code=code)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            return handler(state, action)
        except Exception as e:
            logger.exception("Handler for %s failed", action.action_type.value)
            return ActionResult.failure(str(e), error_code="HANDLER_ERROR")

    def _validate_action(self, state: MatchState, action: Action) -> tuple[str, str] | None:
        """
        Validate that an action is legal in the current state.

        Returns (error message, error code) if invalid, None if valid.
        """
        action_type = action.action_type
        payload = action.payload

        if state.phase == Phase.GAME_OVER:
            return "Game is over - no actions allowed", "GAME_OVER"

        if state.is_paused and action_type != ActionType.TOGGLE_PAUSE:
            return "Match is paused", "PAUSED"

        allowed = ALLOWED_PHASES.get(action_type, frozenset())
        if state.phase not in allowed:
            return (
                f"Cannot {action_type.value} during {state.phase.value}",
                "WRONG_PHASE",
            )

        if action_type == ActionType.COMPLETE_TOSS:
            if state.get_player(payload.player_id) is None:
                return f"Unknown player {payload.player_id}", "UNKNOWN_PLAYER"

        # Turn ownership
        if action_type in (ActionType.PLAY_TOP_CARD, ActionType.SELECT_STAT):
            player = state.get_player(payload.player_id)
            if player is None:
                return f"Unknown player {payload.player_id}", "UNKNOWN_PLAYER"
            if not player.is_local_user or state.turn_player_id != player.player_id:
                return f"Not {payload.player_id}'s turn", "NOT_YOUR_TURN"

        if action_type == ActionType.OPPONENT_MOVE:
            player = state.get_player(payload.player_id)
            if player is None:
                return f"Unknown player {payload.player_id}", "UNKNOWN_PLAYER"
            if player.is_local_user or state.turn_player_id != player.player_id:
                return f"Not {payload.player_id}'s turn", "NOT_YOUR_TURN"
            if state.phase == Phase.OPPONENT_TURN_SELECTING_CARD and not state.selected_stat:
                return "No challenge stat to respond to", "WRONG_PHASE"

        # Stat references
        needs_stat = (
            action_type == ActionType.SELECT_STAT
            or (action_type == ActionType.OPPONENT_MOVE
                and state.phase == Phase.OPPONENT_TURN_SELECT_CARD_AND_STAT)
            or (action_type == ActionType.TIMEOUT
                and state.phase == Phase.PLAYER_TURN_SELECT_STAT)
        )
        if needs_stat and not self.spec.has_stat(payload.stat_name):
            return f"Unknown stat: {payload.stat_name}", "UNKNOWN_STAT"

        if action_type == ActionType.TICK and not state.countdown:
            return "Countdown already expired", "COUNTDOWN_EXPIRED"
        if action_type == ActionType.TIMEOUT and state.countdown:
            return f"Countdown still running ({state.countdown})", "COUNTDOWN_RUNNING"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.START_GAME: self._handle_start_game,
            ActionType.COMPLETE_TOSS: self._handle_complete_toss,
            ActionType.PLAY_TOP_CARD: self._handle_play_top_card,
            ActionType.SELECT_STAT: self._handle_select_stat,
            ActionType.OPPONENT_MOVE: self._handle_opponent_move,
            ActionType.RESOLVE_ROUND: self._handle_resolve_round,
            ActionType.ADVANCE_ROUND: self._handle_advance_round,
            ActionType.TICK: self._handle_tick,
            ActionType.TIMEOUT: self._handle_timeout,
            ActionType.TOGGLE_PAUSE: self._handle_toggle_pause,
        }
        return handlers.get(action_type)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _enter_phase(self, state: MatchState, phase: Phase, **changes) -> MatchState:
        """Move to a phase, starting or clearing the user countdown."""
        countdown = self.config.turn_time_limit if phase in USER_INPUT_PHASES else None
        return state.replace(phase=phase, countdown=countdown, **changes)

    def _stat_label(self, stat_name: str) -> str:
        stat = self.spec.get_stat(stat_name)
        return stat.label if stat else stat_name

    def _prepare_turn(self, state: MatchState, leader: Player, message: str) -> MatchState:
        """Open a new round led by the given player."""
        phase = (
            Phase.PLAYER_TURN_SELECT_CARD
            if leader.is_local_user
            else Phase.OPPONENT_TURN_SELECT_CARD_AND_STAT
        )
        return self._enter_phase(
            state,
            phase,
            current_player_id=leader.player_id,
            turn_player_id=leader.player_id,
            selections=(),
            selected_stat=None,
            message=message,
        )

    def _finish_or_continue(self, state: MatchState, changes: list[str]) -> ActionResult:
        """
        Game-over detection followed by next-turn preparation.

        Initiative goes to the last round winner; a draw keeps it.
        """
        decided = detect_game_over(state)
        if decided:
            winner_id, message = decided
            new_state = state.replace(
                phase=Phase.GAME_OVER,
                winner_id=winner_id,
                turn_player_id=None,
                countdown=None,
                message=message,
            )
            return ActionResult.success_with_state(
                new_state,
                changes=changes + [f"Game over: {winner_id} wins"],
            )

        leader_id = state.last_round_winner_id or state.current_player_id
        leader = state.get_player(leader_id)
        new_state = self._prepare_turn(state, leader, f"It's {leader.name}'s turn.")
        return ActionResult.success_with_state(
            new_state,
            changes=changes + [f"Round {state.round_number + 1} led by {leader.name}"],
        )

    # =========================================================================
    # Handlers
    # =========================================================================

    def _handle_start_game(self, state: MatchState, action: Action) -> ActionResult:
        new_state = state.replace(
            phase=Phase.TOSS,
            message="Let's toss to see who starts!",
        )
        return ActionResult.success_with_state(new_state, changes=["Game started"])

    def _handle_complete_toss(self, state: MatchState, action: Action) -> ActionResult:
        """Toss winner takes the initiative for the first round."""
        winner = state.get_player(action.payload.player_id)
        new_state = self._prepare_turn(
            state,
            winner,
            f"{winner.name} won the toss! It's their turn to select a card.",
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{winner.name} won the toss"],
        )

    def _handle_play_top_card(self, state: MatchState, action: Action) -> ActionResult:
        """Commit the local user's top card, as challenger or responder."""
        player = state.get_player(action.payload.player_id)
        card = player.top_card
        if card is None:
            return self._finish_or_continue(state, [f"{player.name} has no cards to play"])

        selection = Selection(player_id=player.player_id, card=card)

        if state.phase == Phase.PLAYER_TURN_SELECT_CARD:
            new_state = self._enter_phase(
                state,
                Phase.PLAYER_TURN_SELECT_STAT,
                selections=(selection,),
                message=f"You selected {card.name}. Now pick a stat to challenge with.",
            )
        else:
            label = self._stat_label(state.selected_stat)
            new_state = self._enter_phase(
                state,
                Phase.REVEAL,
                selections=state.selections + (selection,),
                message=f"You respond with {card.name}. Comparing {label}!",
            )

        return ActionResult.success_with_state(
            new_state,
            changes=[f"{player.name} played {card.name}"],
        )

    def _handle_select_stat(self, state: MatchState, action: Action) -> ActionResult:
        """Fix the challenge stat and hand the turn to the opponent."""
        stat_name = action.payload.stat_name
        label = self._stat_label(stat_name)
        opponent = state.other_player(action.payload.player_id)

        new_state = self._enter_phase(
            state,
            Phase.OPPONENT_TURN_SELECTING_CARD,
            selected_stat=stat_name,
            turn_player_id=opponent.player_id,
            message=f"You chose {label}. {opponent.name} is selecting their card...",
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Challenge stat: {label}"],
        )

    def _handle_opponent_move(self, state: MatchState, action: Action) -> ActionResult:
        """AI commits its top card, choosing the stat when it leads."""
        ai = state.get_player(action.payload.player_id)
        card = ai.top_card
        if card is None:
            return self._finish_or_continue(state, [f"{ai.name} has no cards to play"])

        selection = Selection(player_id=ai.player_id, card=card)

        if state.phase == Phase.OPPONENT_TURN_SELECT_CARD_AND_STAT:
            stat_name = action.payload.stat_name
            label = self._stat_label(stat_name)
            user = state.other_player(ai.player_id)
            new_state = self._enter_phase(
                state,
                Phase.PLAYER_TURN_RESPOND_TO_OPPONENT_CHALLENGE,
                selections=(selection,),
                selected_stat=stat_name,
                turn_player_id=user.player_id,
                message=f"{ai.name} challenges with {label}! Play your top card to respond.",
            )
            changes = [f"{ai.name} played {card.name} and chose {label}"]
        else:
            label = self._stat_label(state.selected_stat)
            new_state = self._enter_phase(
                state,
                Phase.REVEAL,
                selections=state.selections + (selection,),
                message=f"Comparing {label}!",
            )
            changes = [f"{ai.name} responded with {card.name}"]

        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_resolve_round(self, state: MatchState, action: Action) -> ActionResult:
        if not state.selected_stat or len(state.selections) < len(state.players):
            return self._finish_or_continue(state, ["Round incomplete, skipping resolution"])

        resolved, notifications = resolve_round(self.spec, state)
        new_state = self._enter_phase(
            resolved,
            Phase.ROUND_OVER,
            round_number=state.round_number + 1,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[new_state.message],
            notifications=notifications,
        )

    def _handle_advance_round(self, state: MatchState, action: Action) -> ActionResult:
        return self._finish_or_continue(state, [])

    def _handle_tick(self, state: MatchState, action: Action) -> ActionResult:
        new_state = state.replace(countdown=max(state.countdown - 1, 0))
        return ActionResult.success_with_state(new_state)

    def _handle_timeout(self, state: MatchState, action: Action) -> ActionResult:
        """Default action on behalf of the local user when time runs out."""
        user = state.get_player(state.turn_player_id) or state.local_user
        if not user.hand:
            return self._finish_or_continue(state, [f"Time's up and {user.name} has no cards"])

        if state.phase == Phase.PLAYER_TURN_SELECT_STAT:
            result = self._handle_select_stat(
                state, Action.select_stat(user.player_id, action.payload.stat_name)
            )
        else:
            result = self._handle_play_top_card(state, Action.play_top_card(user.player_id))

        result.state_changes.insert(0, "Time's up! Playing automatically.")
        return result

    def _handle_toggle_pause(self, state: MatchState, action: Action) -> ActionResult:
        """Flip the pause flag; the countdown value is kept as is."""
        paused = not state.is_paused
        new_state = state.replace(is_paused=paused)
        return ActionResult.success_with_state(
            new_state,
            changes=["Game paused" if paused else "Game resumed"],
        )


def apply_action(
    spec: GameSpec,
    state: MatchState,
    action: Action,
    config: EngineConfig | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(spec=spec, config=config or DEFAULT_CONFIG)
    return reducer.apply(state, action)
