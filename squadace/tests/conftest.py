"""
Pytest fixtures for Squad Ace tests.
"""

import random

import pytest

from ..config import EngineConfig
from ..spec_schema import GameSpec
from ..engine_core.state import MatchState, Card, Stat, Phase
from ..games.cricket.spec import create_cricket_spec
from ..games.cricket.setup import create_players
from ..session import TurnEngine, ManualScheduler


# Mid-range values for every cricket stat; tests override the ones they compare.
BASE_STATS = {
    "runs": 400,
    "batting_average": 35,
    "bowling_average": 30,
    "wickets": 80,
    "batting_strike_rate": 110,
    "bowling_strike_rate": 30,
    "centuries": 10,
    "half_centuries": 25,
    "overs_bowled": 700,
}


@pytest.fixture
def cricket_spec() -> GameSpec:
    """Create the Squad Ace stat schema."""
    return create_cricket_spec()


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def make_card(cricket_spec):
    """Factory for cards with known stats."""

    def _make(card_id: str, **values) -> Card:
        stats = {}
        for stat in cricket_spec.stats:
            value = values.get(stat.name, BASE_STATS[stat.name])
            if value is not None:
                stats[stat.name] = Stat(label=stat.label, value=value)
        return Card(card_id=card_id, name=f"Player {card_id}", image="", stats=stats)

    return _make


@pytest.fixture
def make_state():
    """Factory for a two-player state from explicit hands."""

    def _make(user_hand, ai_hand, phase: Phase = Phase.TOSS, **changes) -> MatchState:
        players = create_players([list(user_hand), list(ai_hand)])
        state = MatchState(
            match_id="test-match",
            players=tuple(players),
            deck=tuple(user_hand) + tuple(ai_hand),
            phase=phase,
            message="",
            invite_code="SQD-TEST",
        )
        return state.replace(**changes) if changes else state

    return _make


@pytest.fixture
def ten_card_state(make_card, make_state) -> MatchState:
    """Five cards each; the user's top card has runs=500, the AI's runs=300."""
    user_hand = [make_card("u1", runs=500)] + [make_card(f"u{i}") for i in range(2, 6)]
    ai_hand = [make_card("a1", runs=300)] + [make_card(f"a{i}") for i in range(2, 6)]
    return make_state(user_hand, ai_hand)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def engine(config, scheduler) -> TurnEngine:
    """An initialized engine on a fake clock with a seeded random source."""
    engine = TurnEngine(config=config, scheduler=scheduler, rng=random.Random(7))
    engine.initialize_match("test-match")
    return engine
