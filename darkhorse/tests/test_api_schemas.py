"""
Tests for the pydantic snapshot and score models.
"""

import json

import pydantic
import pytest

from ..api.schemas import (
    ActionCardInfo,
    BettingScoreInfo,
    GameStateResponse,
    HorseInfo,
    ScoreboardResponse,
)
from ..engine_core.state import ActionCard, Direction, GamePhase
from ..games.dark_horse.scoring import calculate_all_scores


class TestGameStateResponse:
    """Tests for snapshot encoding."""

    def test_from_playing_state(self, playing_state):
        response = GameStateResponse.from_state(playing_state)

        assert response.phase == "playing"
        assert response.turn_phase == "take_token"
        assert response.current_player_id == "player-1"
        assert [p.is_current_turn for p in response.players] == [True, False]
        assert [h.number for h in response.horses] == [5, 3, 1, 2, 4, 6, 7]
        assert response.horses[-1].rank == 1
        assert response.horses[-1].is_dark_horse
        assert response.pending_card is None
        assert len(response.players[0].action_cards) == 8

    def test_from_setup_state(self, setup_state):
        response = GameStateResponse.from_state(setup_state)
        assert response.phase == "setup"
        assert response.turn_phase is None
        assert response.horses == []
        assert response.dark_horse_number is None

    def test_json_round_trip(self, playing_state):
        data = json.loads(GameStateResponse.from_state(playing_state).model_dump_json())
        assert data["available_tokens"] == 1
        assert data["players"][1]["name"] == "Bob"


class TestActionCardInfo:
    """Tests for card encoding."""

    def test_choice_card(self):
        info = ActionCardInfo.from_card(ActionCard.dual_movement((2, 5), 1, Direction.CHOICE))
        assert info.card_type == "dual_movement"
        assert info.horse_numbers == [2, 5]
        assert info.direction == "choice"

    def test_rider_fall_off(self):
        info = ActionCardInfo.from_card(ActionCard.rider_fall_off())
        assert info.horse_numbers == []
        assert info.direction is None


class TestScoreboardResponse:
    """Tests for the final scoreboard."""

    def test_from_scores(self, make_state, make_player):
        state = make_state(
            order=(1, 2, 4, 5, 6, 7, 3),
            players=[
                make_player("player-1", bets=(3, 3)),
                make_player("player-2", bets=(7,), token=True),
            ],
            phase=GamePhase.SCORING,
            turn_phase=None,
            dark_horse=7,
        )
        board = ScoreboardResponse.from_scores(state, calculate_all_scores(state))

        assert board.race_order == [3, 7, 6, 5, 4, 2, 1]
        assert [s.total_score for s in board.scores] == [36, 12]
        assert board.winner_ids == ["player-1"]
        assert board.scores[0].betting_scores[0].rank == 1


class TestValidation:
    """Tests for field constraints."""

    @pytest.mark.parametrize("rank", [0, 8])
    def test_rank_out_of_range(self, rank):
        with pytest.raises(pydantic.ValidationError):
            BettingScoreInfo(horse_number=1, rank=rank, points=0)

    def test_horse_number_out_of_range(self):
        with pytest.raises(pydantic.ValidationError):
            HorseInfo(number=9, position=0, rank=1)
