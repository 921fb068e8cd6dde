"""
Tests for bot stat selection.

Tests:
- Random policy only picks schema stats
- Strongest-stat policy respects stat direction
"""

import pytest

from ..bots import BotPolicy, RandomStatPolicy, StrongestStatPolicy
from ..spec_schema import GameSpec


class TestRandomStatPolicy:
    """Tests for the default opponent."""

    def test_picks_schema_stat(self, cricket_spec, ten_card_state, make_card):
        bot = RandomStatPolicy(seed=42)
        card = make_card("c1")

        for _ in range(20):
            decision = bot.choose_stat(ten_card_state, cricket_spec, card)
            assert decision.stat_name in cricket_spec.stat_names

    def test_seed_is_reproducible(self, cricket_spec, ten_card_state, make_card):
        card = make_card("c1")
        first = RandomStatPolicy(seed=3).choose_stat(ten_card_state, cricket_spec, card)
        second = RandomStatPolicy(seed=3).choose_stat(ten_card_state, cricket_spec, card)

        assert first.stat_name == second.stat_name

    def test_covers_all_stats(self, cricket_spec, ten_card_state, make_card):
        bot = RandomStatPolicy(seed=1)
        card = make_card("c1")

        chosen = {bot.choose_stat(ten_card_state, cricket_spec, card).stat_name for _ in range(300)}

        assert chosen == set(cricket_spec.stat_names)

    def test_empty_schema_raises(self, ten_card_state, make_card):
        spec = GameSpec(game_id="empty", game_name="Empty")

        with pytest.raises(ValueError):
            RandomStatPolicy(seed=1).choose_stat(ten_card_state, spec, make_card("c1"))

    def test_name(self):
        assert RandomStatPolicy().get_name() == "RandomStatPolicy"
        assert isinstance(RandomStatPolicy(), BotPolicy)


class TestStrongestStatPolicy:
    """Tests for the relative-strength policy."""

    def test_prefers_top_of_range(self, cricket_spec, ten_card_state, make_card):
        card = make_card("c1", runs=1049)

        decision = StrongestStatPolicy().choose_stat(ten_card_state, cricket_spec, card)

        assert decision.stat_name == "runs"
        assert decision.scores["runs"] == pytest.approx(1.0)

    def test_lower_is_better_inverted(self, cricket_spec, ten_card_state, make_card):
        """A bowling average at the bottom of its range is the best stat."""
        card = make_card("c1", bowling_average=15)

        decision = StrongestStatPolicy().choose_stat(ten_card_state, cricket_spec, card)

        assert decision.stat_name == "bowling_average"
        assert decision.confidence == pytest.approx(1.0)

    def test_skips_missing_stats(self, cricket_spec, ten_card_state, make_card):
        card = make_card("c1", runs=None)

        decision = StrongestStatPolicy().choose_stat(ten_card_state, cricket_spec, card)

        assert "runs" not in decision.scores
        assert len(decision.scores) == len(cricket_spec.stats) - 1
