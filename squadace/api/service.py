"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine entry points
2. Manages match sessions
3. Formats match state for rendering

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable

from ..engine_core.action import ActionResult
from ..engine_core.state import Card, MatchState, Player
from ..games.cricket.spec import create_cricket_spec
from ..session import MatchManager, MatchSession, TurnEngine
from .schemas import (
    # Requests
    CreateMatchRequest,
    # Responses
    MatchStateResponse,
    IntentResponse,
    NotificationsResponse,
    StatSchemaResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    CardInfo,
    StatInfo,
    SelectionInfo,
    RoundResultInfo,
    NotificationInfo,
    StatDefinitionInfo,
    # Enums
    MatchPhase,
    ErrorCode,
)


def _not_found(match_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Match {match_id} not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


@dataclass
class APIService:
    """
    Main API service for the presentation layer.

    Usage:
        service = APIService()

        state = service.create_match(CreateMatchRequest(match_id="abcd"))
        service.start_game("abcd")
        service.toss("abcd", winner_id="player1")
        service.play_top_card("abcd")
        service.select_stat("abcd", "runs")
    """
    match_manager: MatchManager = field(default_factory=MatchManager)

    def create_match(self, request: CreateMatchRequest) -> MatchStateResponse:
        """Create (or replace) a match in the lobby."""
        session = self.match_manager.create_match(request.match_id)
        return self._build_state(session.engine)

    def get_state(self, match_id: str) -> MatchStateResponse | ErrorResponse:
        session = self.match_manager.get_match(match_id)
        if not session:
            return _not_found(match_id)
        return self._build_state(session.engine)

    def restart(self, match_id: str) -> MatchStateResponse | ErrorResponse:
        """Play again: re-deal and return to the lobby."""
        session = self.match_manager.get_match(match_id)
        if not session:
            return _not_found(match_id)
        session.engine.initialize_match(match_id)
        session.get_notifications()
        return self._build_state(session.engine)

    # =========================================================================
    # Intents
    # =========================================================================

    def start_game(self, match_id: str) -> IntentResponse | ErrorResponse:
        return self._intent(match_id, lambda engine: engine.start_game())

    def toss(self, match_id: str, winner_id: str | None = None) -> IntentResponse | ErrorResponse:
        if winner_id is None:
            return self._intent(match_id, lambda engine: engine.toss())
        return self._intent(match_id, lambda engine: engine.complete_toss(winner_id))

    def play_top_card(self, match_id: str) -> IntentResponse | ErrorResponse:
        return self._intent(match_id, lambda engine: engine.play_top_card())

    def select_stat(self, match_id: str, stat_name: str) -> IntentResponse | ErrorResponse:
        return self._intent(match_id, lambda engine: engine.select_stat(stat_name))

    def next_round(self, match_id: str) -> IntentResponse | ErrorResponse:
        return self._intent(match_id, lambda engine: engine.advance_to_next_round())

    def toggle_pause(self, match_id: str) -> IntentResponse | ErrorResponse:
        return self._intent(match_id, lambda engine: engine.toggle_pause())

    # =========================================================================
    # Session management
    # =========================================================================

    def get_notifications(self, match_id: str) -> NotificationsResponse | ErrorResponse:
        session = self.match_manager.get_match(match_id)
        if not session:
            return _not_found(match_id)
        return NotificationsResponse(
            match_id=match_id,
            notifications=[
                NotificationInfo(title=n.title, description=n.description)
                for n in session.get_notifications()
            ],
        )

    def end_match(self, match_id: str) -> bool:
        return self.match_manager.end_match(match_id)

    def list_matches(self) -> list[str]:
        return self.match_manager.list_matches()

    def stat_schema(self) -> StatSchemaResponse:
        """Describe the challengeable stats."""
        spec = create_cricket_spec()
        return StatSchemaResponse(
            game_name=spec.game_name,
            version=spec.version,
            stats=[
                StatDefinitionInfo(
                    name=s.name,
                    label=s.label,
                    minimum=s.minimum,
                    maximum=s.maximum,
                    higher_is_better=s.higher_is_better,
                )
                for s in spec.stats
            ],
        )

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _intent(
        self,
        match_id: str,
        call: Callable[[TurnEngine], ActionResult],
    ) -> IntentResponse | ErrorResponse:
        session: MatchSession | None = self.match_manager.get_match(match_id)
        if not session:
            return _not_found(match_id)

        result = call(session.engine)
        return IntentResponse(
            accepted=result.success,
            error=result.error,
            error_code=result.error_code,
            changes=result.state_changes,
            state=self._build_state(session.engine),
        )

    def _build_state(self, engine: TurnEngine) -> MatchStateResponse:
        """Build complete match state response."""
        state = engine.state
        result = state.last_result

        return MatchStateResponse(
            match_id=state.match_id,
            phase=MatchPhase(state.phase.value),
            message=state.message,
            invite_code=state.invite_code,
            players=[self._player_info(engine, state, p) for p in state.players],
            current_player_id=state.current_player_id,
            turn_player_id=state.turn_player_id,
            selections=[
                SelectionInfo(player_id=s.player_id, card=self._card_info(engine, s.card))
                for s in state.selections
            ],
            selected_stat=state.selected_stat,
            winner_id=state.winner_id,
            last_round_winner_id=state.last_round_winner_id,
            last_result=RoundResultInfo(
                stat_name=result.stat_name,
                values=result.values,
                winner_id=result.winner_id,
                taken_card_id=result.taken_card_id,
                is_draw=result.is_draw,
                forced_draw=result.forced_draw,
            ) if result else None,
            is_paused=state.is_paused,
            countdown=state.countdown,
            round_number=state.round_number,
            deck_size=len(state.deck),
        )

    def _player_info(self, engine: TurnEngine, state: MatchState, player: Player) -> PlayerInfo:
        """The opponent's hand stays hidden; only its size is shown."""
        visible = player.is_local_user
        return PlayerInfo(
            player_id=player.player_id,
            name=player.name,
            is_local_user=player.is_local_user,
            is_current_turn=player.player_id == state.turn_player_id,
            has_initiative=player.player_id == state.current_player_id,
            card_count=player.card_count,
            avatar_url=player.avatar_url,
            top_card=(
                self._card_info(engine, player.top_card)
                if visible and player.top_card else None
            ),
            hand=[self._card_info(engine, c) for c in player.hand] if visible else [],
        )

    def _card_info(self, engine: TurnEngine, card: Card) -> CardInfo:
        stats = []
        for name, stat in card.stats.items():
            definition = engine.spec.get_stat(name)
            stats.append(
                StatInfo(
                    name=name,
                    label=stat.label,
                    value=stat.value,
                    higher_is_better=definition.higher_is_better if definition else True,
                )
            )
        return CardInfo(
            card_id=card.card_id,
            name=card.name,
            image_url=card.image,
            image_hint=card.image_hint or None,
            stats=stats,
        )
