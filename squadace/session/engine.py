"""
Turn Engine - Drives a match through the reducer and the scheduler.

The engine:
1. Owns the current MatchState (replaced, never mutated)
2. Turns user intents into actions and feeds them to the reducer
3. Schedules the AI's moves, the reveal, the round-over pause and
   the per-turn countdown as cancelable timers
4. Forwards round-result notifications to listeners

Timer slots: at most one pending callback per slot. Whenever the phase,
the awaited player or the pause flag changes, every slot is cancelled
before new timers are scheduled, and a generation counter makes any
callback that still fires for an older state a no-op.
"""

from __future__ import annotations
from typing import Callable
import logging
import random
import threading

from ..bots import BotPolicy, RandomStatPolicy
from ..config import EngineConfig, DEFAULT_CONFIG
from ..engine_core.action import Action, ActionResult, ActionType, Notification
from ..engine_core.reducer import Reducer, detect_game_over
from ..engine_core.state import MatchState, Phase
from ..games.cricket.setup import initialize_match as setup_match, coin_toss
from ..games.cricket.spec import create_cricket_spec
from ..spec_schema import GameSpec, SpecValidationError, validate_deck, validate_spec
from .scheduler import Scheduler, TimerHandle, ManualScheduler

logger = logging.getLogger(__name__)

SLOT_AI = "ai"
SLOT_REVEAL = "reveal"
SLOT_ADVANCE = "advance"
SLOT_COUNTDOWN = "countdown"

NotificationListener = Callable[[Notification], None]
RejectionListener = Callable[[Action, ActionResult], None]


class TurnEngine:
    """
    The match driver used by the presentation layer.

    Usage:
        engine = TurnEngine(scheduler=ThreadingScheduler())
        engine.initialize_match("squad-42")
        engine.start_game()
        engine.complete_toss(engine.state.local_user.player_id)
        engine.play_top_card()
        engine.select_stat("runs")
        # AI response, reveal and resolution follow on the scheduler
    """

    def __init__(
        self,
        spec: GameSpec | None = None,
        config: EngineConfig | None = None,
        scheduler: Scheduler | None = None,
        bot: BotPolicy | None = None,
        autoplay: BotPolicy | None = None,
        rng: random.Random | None = None,
        user_name: str = "You",
    ):
        self.config = config or DEFAULT_CONFIG
        self.spec = spec or create_cricket_spec(self.config.cards_per_player)
        for warning in validate_spec(self.spec, raise_on_error=True).warnings:
            logger.warning("Spec %s: %s", self.spec.game_id, warning)
        self.scheduler = scheduler or ManualScheduler()
        self.rng = rng or random.Random()
        self.user_name = user_name
        self.bot = bot or RandomStatPolicy(rng=self.rng)
        self.autoplay = autoplay or RandomStatPolicy(rng=self.rng)
        self.reducer = Reducer(spec=self.spec, config=self.config)

        self._state: MatchState | None = None
        self._timers: dict[str, TimerHandle] = {}
        self._generation = 0
        self._lock = threading.RLock()

        self._notification_listeners: list[NotificationListener] = []
        self._rejection_listeners: list[RejectionListener] = []
        self.diagnostics: list[str] = []
        self.max_diagnostics = 50

    # =========================================================================
    # Read-only view
    # =========================================================================

    @property
    def state(self) -> MatchState:
        if self._state is None:
            raise RuntimeError("Match not initialized - call initialize_match() first")
        return self._state

    @property
    def local_player_id(self) -> str:
        return self.state.local_user.player_id

    @property
    def pending_timers(self) -> list[str]:
        """Names of timer slots with a live callback."""
        with self._lock:
            return sorted(k for k, h in self._timers.items() if not h.cancelled)

    def on_notification(self, listener: NotificationListener) -> None:
        self._notification_listeners.append(listener)

    def on_rejected(self, listener: RejectionListener) -> None:
        """Register a diagnostic hook for dropped intents."""
        self._rejection_listeners.append(listener)

    # =========================================================================
    # Entry points
    # =========================================================================

    def initialize_match(self, match_id: str) -> MatchState:
        """(Re)start a match; any pending timers are discarded."""
        with self._lock:
            self._cancel_all()
            self._generation += 1
            state = setup_match(
                match_id, self.spec, self.config, self.rng, user_name=self.user_name
            )
            deck_check = validate_deck(self.spec, state.deck)
            if not deck_check.valid:
                raise SpecValidationError(deck_check.errors)
            self._state = state
            logger.info("Match %s initialized (%d cards)", match_id, len(self._state.deck))
            return self._state

    def start_game(self) -> ActionResult:
        return self.dispatch(Action.start_game())

    def complete_toss(self, winner_id: str) -> ActionResult:
        return self.dispatch(Action.complete_toss(winner_id))

    def toss(self) -> ActionResult:
        """Run the coin toss and complete it with the random winner."""
        return self.complete_toss(coin_toss(self.state, self.rng))

    def play_top_card(self) -> ActionResult:
        return self.dispatch(Action.play_top_card(self.local_player_id))

    def select_stat(self, stat_name: str) -> ActionResult:
        return self.dispatch(Action.select_stat(self.local_player_id, stat_name))

    def advance_to_next_round(self) -> ActionResult:
        return self.dispatch(Action.advance_round())

    def toggle_pause(self) -> ActionResult:
        return self.dispatch(Action.toggle_pause())

    def shutdown(self) -> None:
        with self._lock:
            self._cancel_all()
            self._generation += 1

    # =========================================================================
    # Dispatch
    # =========================================================================

    def dispatch(self, action: Action) -> ActionResult:
        """
        Apply an action and reschedule timers.

        Rejected actions leave the state untouched; they are logged and
        reported to rejection listeners.
        """
        with self._lock:
            previous = self.state
            result = self.reducer.apply(previous, action)

            if not result.success:
                self._record_rejection(action, result)
                return result

            self._state = result.new_state
            for change in result.state_changes:
                logger.debug("[%s] %s", previous.match_id, change)
            if previous.phase != self._state.phase:
                logger.info(
                    "[%s] %s -> %s",
                    previous.match_id, previous.phase.value, self._state.phase.value,
                )

            self._sync_timers(previous, self._state, action)

        for notification in result.notifications:
            for listener in list(self._notification_listeners):
                try:
                    listener(notification)
                except Exception:
                    logger.exception("Notification listener failed: %s", notification.title)
        return result

    def _record_rejection(self, action: Action, result: ActionResult) -> None:
        logger.debug(
            "Ignored %s: %s (%s)", action.action_type.value, result.error, result.error_code
        )
        self.diagnostics.append(f"{action.action_type.value}: {result.error_code}")
        del self.diagnostics[:-self.max_diagnostics]
        for listener in list(self._rejection_listeners):
            try:
                listener(action, result)
            except Exception:
                logger.exception("Rejection listener failed for %s", action.action_type.value)

    # =========================================================================
    # Timers
    # =========================================================================

    def _sync_timers(self, previous: MatchState, current: MatchState, action: Action) -> None:
        changed = (
            previous.phase != current.phase
            or previous.turn_player_id != current.turn_player_id
            or previous.is_paused != current.is_paused
        )
        if changed:
            self._cancel_all()
            self._generation += 1
            self._schedule_for(current)
        elif action.action_type == ActionType.TICK:
            self._schedule_countdown(current)

    def _schedule_for(self, state: MatchState) -> None:
        """Schedule the callbacks the phase calls for."""
        if state.is_paused:
            return

        if state.is_ai_phase:
            self._schedule(SLOT_AI, self.config.ai_delay, self._run_ai)
        elif state.phase == Phase.REVEAL:
            self._schedule(
                SLOT_REVEAL, self.config.reveal_delay,
                lambda: self.dispatch(Action.resolve_round()),
            )
        elif state.phase == Phase.ROUND_OVER:
            if self.config.auto_advance or detect_game_over(state):
                self._schedule(
                    SLOT_ADVANCE, self.config.round_over_delay,
                    lambda: self.dispatch(Action.advance_round()),
                )
        elif state.is_user_input_phase:
            self._schedule_countdown(state)

    def _schedule_countdown(self, state: MatchState) -> None:
        if state.countdown is None:
            return
        if state.countdown <= 0:
            self._schedule(SLOT_COUNTDOWN, 0, self._run_timeout)
        else:
            self._schedule(
                SLOT_COUNTDOWN, self.config.tick_interval,
                lambda: self.dispatch(Action.tick()),
            )

    def _schedule(self, slot: str, delay: float, callback: Callable[[], object]) -> None:
        existing = self._timers.pop(slot, None)
        if existing is not None:
            existing.cancel()

        generation = self._generation

        def fire():
            with self._lock:
                if generation != self._generation:
                    logger.debug("Dropped stale %s callback", slot)
                    return
                self._timers.pop(slot, None)
                callback()

        self._timers[slot] = self.scheduler.call_later(delay, fire)

    def _cancel_all(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()

    # =========================================================================
    # Scheduled behaviour
    # =========================================================================

    def _run_ai(self) -> None:
        state = self.state
        ai = state.get_player(state.turn_player_id)
        stat_name = None
        if state.phase == Phase.OPPONENT_TURN_SELECT_CARD_AND_STAT and ai and ai.top_card:
            decision = self.bot.choose_stat(state, self.spec, ai.top_card)
            logger.debug("%s chose %s: %s", ai.name, decision.stat_name, decision.explanation)
            stat_name = decision.stat_name
        self.dispatch(Action.opponent_move(state.turn_player_id, stat_name))

    def _run_timeout(self) -> None:
        """Countdown hit zero: play the default move for the local user."""
        state = self.state
        stat_name = None
        if state.phase == Phase.PLAYER_TURN_SELECT_STAT:
            card = state.selections[0].card if state.selections else state.local_user.top_card
            if card is not None:
                stat_name = self.autoplay.choose_stat(state, self.spec, card).stat_name
        logger.info("[%s] Turn timed out in %s", state.match_id, state.phase.value)
        self.dispatch(Action.timeout(stat_name))
