"""
Tests for API Pydantic schemas.

Validates that:
- Request/response models serialize correctly
- Error codes are properly structured
- Phase values match the engine's phases
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_match_phase_matches_engine(self):
        """Every engine phase has an API value."""
        from squadace.api.schemas import MatchPhase
        from squadace.engine_core.state import Phase

        assert {p.value for p in MatchPhase} == {p.value for p in Phase}

    def test_match_state_response_schema(self):
        """MatchStateResponse serializes phases as strings."""
        from squadace.api.schemas import (
            MatchStateResponse,
            MatchPhase,
            PlayerInfo,
            CardInfo,
            StatInfo,
        )

        card = CardInfo(
            card_id="card-1",
            name="Virat K. #1",
            image_url="https://placehold.co/300x400.png",
            stats=[StatInfo(name="runs", label="Runs", value=812)],
        )
        response = MatchStateResponse(
            match_id="abcd",
            phase=MatchPhase.PLAYER_TURN_SELECT_CARD,
            message="It's You's turn.",
            invite_code="SQD-ABCD",
            players=[
                PlayerInfo(
                    player_id="player1",
                    name="You",
                    is_local_user=True,
                    is_current_turn=True,
                    card_count=5,
                    top_card=card,
                    hand=[card],
                ),
                PlayerInfo(
                    player_id="player2",
                    name="Opponent",
                    is_local_user=False,
                    card_count=5,
                ),
            ],
            countdown=10,
        )

        data = response.model_dump(mode="json")
        assert data["phase"] == "player_turn_select_card"
        assert data["players"][0]["top_card"]["stats"][0]["value"] == 812
        assert data["players"][1]["hand"] == []
        assert data["countdown"] == 10
        assert data["selections"] == []

    def test_intent_response_schema(self):
        from squadace.api.schemas import IntentResponse, MatchStateResponse, MatchPhase

        state = MatchStateResponse(
            match_id="abcd",
            phase=MatchPhase.LOBBY,
            message="",
            invite_code="SQD-ABCD",
        )
        response = IntentResponse(
            accepted=False,
            error="Cannot play_top_card during lobby",
            error_code="WRONG_PHASE",
            state=state,
        )

        data = response.model_dump()
        assert data["accepted"] is False
        assert data["error_code"] == "WRONG_PHASE"
        assert data["changes"] == []

    def test_error_response_schema(self):
        """ErrorResponse uses structured error codes."""
        from squadace.api.schemas import ErrorResponse, ErrorCode

        response = ErrorResponse(
            error="Match x not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

        data = response.model_dump(mode="json")
        assert data["error_code"] == "SESSION_NOT_FOUND"
        assert data["details"] is None

    def test_create_match_request_limits(self):
        from squadace.api.schemas import CreateMatchRequest

        assert CreateMatchRequest().match_id is None
        with pytest.raises(ValidationError):
            CreateMatchRequest(match_id="")
        with pytest.raises(ValidationError):
            CreateMatchRequest(match_id="x" * 65)

    def test_select_stat_request_requires_name(self):
        from squadace.api.schemas import SelectStatRequest

        with pytest.raises(ValidationError):
            SelectStatRequest()

    def test_round_result_allows_missing_values(self):
        from squadace.api.schemas import RoundResultInfo

        result = RoundResultInfo(
            stat_name="centuries",
            values={"player1": None, "player2": 12},
            is_draw=True,
            forced_draw=True,
        )

        assert result.model_dump()["values"]["player1"] is None
