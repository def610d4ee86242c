"""
Tests for the turn phase ladder and end of game.
"""

import pytest

from ..engine_core.errors import PreconditionError, ValidationError
from ..engine_core.rules import (
    advance_turn_phase,
    can_take_dark_horse_token,
    end_game,
    is_game_over,
    next_turn,
    play_action_card,
    take_dark_horse_token,
)
from ..engine_core.state import ActionCard, Direction, GamePhase, TurnPhase

CARDS = (
    ActionCard.single_movement(1, 1, Direction.FORWARD),
    ActionCard.rider_fall_off(),
    ActionCard.exchange_betting(),
)


@pytest.fixture
def two_players(make_player):
    return [
        make_player("player-1", bets=(1, 2, 3), cards=CARDS),
        make_player("player-2", bets=(4, 5, 6), cards=CARDS),
    ]


class TestDarkHorseToken:
    """Tests for taking the dark horse token."""

    def test_can_take(self, make_state, two_players):
        assert can_take_dark_horse_token(make_state(players=two_players))

    def test_cannot_take_twice(self, make_state, make_player, two_players):
        holder = make_player("player-1", cards=CARDS, token=True)
        state = make_state(players=[holder, two_players[1]], tokens=2)
        assert not can_take_dark_horse_token(state)

    def test_cannot_take_when_none_left(self, make_state, two_players):
        assert not can_take_dark_horse_token(make_state(players=two_players, tokens=0))

    def test_must_keep_a_card(self, make_state, make_player, two_players):
        one_card = make_player("player-1", cards=CARDS[:1])
        state = make_state(players=[one_card, two_players[1]])
        assert not can_take_dark_horse_token(state)

    def test_take_marks_holder_and_decrements(self, make_state, two_players):
        state = make_state(players=two_players, tokens=2)
        new_state = take_dark_horse_token(state)

        assert new_state.players[0].has_dark_horse_token
        assert not new_state.players[1].has_dark_horse_token
        assert new_state.available_tokens == 1
        # Old snapshot untouched
        assert not state.players[0].has_dark_horse_token
        assert state.available_tokens == 2

    def test_take_when_disallowed(self, make_state, two_players):
        with pytest.raises(PreconditionError):
            take_dark_horse_token(make_state(players=two_players, tokens=0))


class TestAdvanceTurnPhase:
    """Tests for the turn phase ladder."""

    def test_ladder(self, make_state, two_players):
        state = make_state(players=two_players)
        state = advance_turn_phase(state)
        assert state.turn_phase == TurnPhase.PLAY_CARD
        state = advance_turn_phase(state)
        assert state.turn_phase == TurnPhase.EXECUTE_CARD

    def test_stops_at_execute(self, make_state, two_players):
        state = make_state(players=two_players, turn_phase=TurnPhase.EXECUTE_CARD)
        assert advance_turn_phase(advance_turn_phase(state)).turn_phase == TurnPhase.EXECUTE_CARD

    def test_noop_outside_play(self, make_state, two_players):
        state = make_state(players=two_players, phase=GamePhase.SETUP, turn_phase=None)
        assert advance_turn_phase(state) is state


class TestPlayActionCard:
    """Tests for removing a card from hand."""

    def test_play_removes_and_records(self, make_state, two_players):
        state = make_state(players=two_players, turn_phase=TurnPhase.PLAY_CARD)
        new_state, card = play_action_card(state, 1)

        assert card == CARDS[1]
        assert new_state.players[0].action_cards == (CARDS[0], CARDS[2])
        assert new_state.played_cards == (CARDS[1],)
        assert state.players[0].action_cards == CARDS

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_invalid_index(self, make_state, two_players, index):
        state = make_state(players=two_players, turn_phase=TurnPhase.PLAY_CARD)
        with pytest.raises(ValidationError):
            play_action_card(state, index)


class TestNextTurn:
    """Tests for handing over to the next player."""

    def test_cycles_players(self, make_state, two_players):
        state = make_state(players=two_players, turn_phase=TurnPhase.EXECUTE_CARD)
        state = next_turn(state)
        assert state.current_player_idx == 1
        assert state.turn_phase == TurnPhase.TAKE_TOKEN
        assert next_turn(state).current_player_idx == 0

    def test_only_while_playing(self, make_state, two_players):
        state = make_state(players=two_players, phase=GamePhase.HORSE_PLACEMENT, turn_phase=None)
        with pytest.raises(PreconditionError):
            next_turn(state)


class TestGameOver:
    """Tests for end-of-game detection."""

    def test_over_when_all_hands_empty(self, make_state, make_player):
        state = make_state(players=[make_player("player-1"), make_player("player-2")])
        assert is_game_over(state)

    def test_not_over_with_one_card_left(self, make_state, make_player):
        state = make_state(players=[
            make_player("player-1"),
            make_player("player-2", cards=CARDS[:1]),
        ])
        assert not is_game_over(state)

    def test_not_over_outside_play(self, make_state, make_player):
        state = make_state(
            players=[make_player("player-1"), make_player("player-2")],
            phase=GamePhase.SCORING,
            turn_phase=None,
        )
        assert not is_game_over(state)

    def test_end_game(self, make_state, make_player):
        state = make_state(players=[make_player("player-1"), make_player("player-2")])
        ended = end_game(state)
        assert ended.phase == GamePhase.SCORING
        assert ended.turn_phase is None

    def test_end_game_with_cards_left(self, make_state, two_players):
        with pytest.raises(PreconditionError):
            end_game(make_state(players=two_players))
