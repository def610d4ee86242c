"""
Turn Rules - The per-turn phase ladder and end-of-game detection.

take_token -> play_card -> execute_card, then NEXT_TURN hands over to
the next player at take_token. The game ends once every action card
has been played.
"""

from __future__ import annotations
import logging

from .errors import PreconditionError, ValidationError
from .state import ActionCard, GamePhase, GameState, TurnPhase

logger = logging.getLogger(__name__)

_NEXT_TURN_PHASE = {
    TurnPhase.TAKE_TOKEN: TurnPhase.PLAY_CARD,
    TurnPhase.PLAY_CARD: TurnPhase.EXECUTE_CARD,
}


def can_take_dark_horse_token(state: GameState) -> bool:
    """
    Check whether the current player may take a dark horse token.

    The player must not hold one yet, a token must be left, and the
    player must keep at least one action card to play afterwards.
    """
    player = state.current_player
    if player.has_dark_horse_token:
        return False
    if state.available_tokens <= 0:
        return False
    if len(player.action_cards) <= 1:
        return False
    return True


def take_dark_horse_token(state: GameState) -> GameState:
    if not can_take_dark_horse_token(state):
        raise PreconditionError("Cannot take dark horse token")

    player = state.current_player
    logger.debug("%s took a dark horse token", player.name)
    new_state = state.with_player(player._copy_with(has_dark_horse_token=True))
    return new_state._copy_with(available_tokens=state.available_tokens - 1)


def advance_turn_phase(state: GameState) -> GameState:
    """Step one rung up the turn ladder. No-op outside play and at execute_card."""
    if state.phase != GamePhase.PLAYING:
        return state

    next_phase = _NEXT_TURN_PHASE.get(state.turn_phase)
    if next_phase is None:
        return state
    return state._copy_with(turn_phase=next_phase)


def play_action_card(state: GameState, card_index: int) -> tuple[GameState, ActionCard]:
    """
    Remove a card from the current player's hand.

    Returns (new state, removed card). The card is appended to the
    played cards; its effect is applied separately.
    """
    player = state.current_player
    if not 0 <= card_index < len(player.action_cards):
        raise ValidationError(f"Invalid card index: {card_index}")

    cards = list(player.action_cards)
    played = cards.pop(card_index)

    new_state = state.with_player(player._copy_with(action_cards=tuple(cards)))
    new_state = new_state._copy_with(played_cards=state.played_cards + (played,))
    return new_state, played


def next_turn(state: GameState) -> GameState:
    if state.phase != GamePhase.PLAYING:
        raise PreconditionError("Can only advance turn during playing phase")

    next_idx = (state.current_player_idx + 1) % state.num_players
    return state._copy_with(
        current_player_idx=next_idx,
        turn_phase=TurnPhase.TAKE_TOKEN,
    )


def is_game_over(state: GameState) -> bool:
    """True while playing once every hand of action cards is empty."""
    if state.phase != GamePhase.PLAYING:
        return False
    return all(len(p.action_cards) == 0 for p in state.players)


def end_game(state: GameState) -> GameState:
    if not is_game_over(state):
        raise PreconditionError("Cannot end game - players still have cards")

    logger.info("Game over, final race order %s", state.race_order)
    return state._copy_with(phase=GamePhase.SCORING, turn_phase=None)
