"""
Tests for engine configuration.
"""

import pytest
from pydantic import ValidationError

from ..config import EngineConfig, DEFAULT_CONFIG


class TestEngineConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.cards_per_player == 5
        assert DEFAULT_CONFIG.ai_delay == 1.0
        assert DEFAULT_CONFIG.turn_time_limit == 10
        assert DEFAULT_CONFIG.auto_advance

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SQUADACE_AI_DELAY", "0.25")
        monkeypatch.setenv("SQUADACE_TURN_TIME_LIMIT", "15")
        monkeypatch.setenv("SQUADACE_AUTO_ADVANCE", "false")
        monkeypatch.setenv("SQUADACE_CARDS_PER_PLAYER", "")

        config = EngineConfig()

        assert config.ai_delay == 0.25
        assert config.turn_time_limit == 15
        assert config.auto_advance is False
        assert config.cards_per_player == 5

    def test_arguments_override_environment(self, monkeypatch):
        monkeypatch.setenv("SQUADACE_REVEAL_DELAY", "3")

        assert EngineConfig().reveal_delay == 3.0
        assert EngineConfig(reveal_delay=0.5).reveal_delay == 0.5

    def test_unrelated_variables_ignored(self, monkeypatch):
        monkeypatch.setenv("SQUADACE_ENV", "test")

        assert EngineConfig().num_players == 2

    @pytest.mark.parametrize("changes", [
        {"num_players": 3},
        {"cards_per_player": 0},
        {"ai_delay": -1},
        {"turn_time_limit": 0},
        {"tick_interval": 0},
    ])
    def test_invalid_values(self, changes):
        with pytest.raises(ValidationError):
            EngineConfig(**changes)

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("SQUADACE_TURN_TIME_LIMIT", "soon")

        with pytest.raises(ValueError):
            EngineConfig()

    def test_frozen(self):
        config = EngineConfig()

        with pytest.raises(ValidationError):
            config.ai_delay = 5.0
