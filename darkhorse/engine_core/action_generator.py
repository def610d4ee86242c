"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Drivers to gate their affordances
2. Tests (every generated action must apply cleanly)

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations

from .action import Action, ExchangeBettingChoice, MovementChoice
from .rules import can_take_dark_horse_token, is_game_over
from .state import (
    NUM_HORSES,
    ActionCard,
    CardType,
    Direction,
    GamePhase,
    GameState,
    PlacementSide,
    TurnPhase,
    available_horses,
)


class ActionGenerator:
    """Generates legal actions for the current game state."""

    def generate(self, state: GameState | None) -> list[Action]:
        """
        Generate all legal actions for the current player.

        Returns a list of fully-specified Action objects.
        """
        if state is None:
            return []

        if state.phase == GamePhase.SETUP:
            return [Action.advance_horse_placement()]

        if state.phase == GamePhase.HORSE_PLACEMENT:
            return self._generate_placement_actions(state)

        if state.phase != GamePhase.PLAYING:
            return []

        if is_game_over(state):
            return [Action.end_game()]

        if state.turn_phase == TurnPhase.TAKE_TOKEN:
            actions = []
            if can_take_dark_horse_token(state):
                actions.append(Action.take_dark_horse_token())
            actions.append(Action.skip_dark_horse_token())
            return actions

        if state.turn_phase == TurnPhase.PLAY_CARD:
            return [
                Action.play_action_card(i)
                for i in range(len(state.current_player.action_cards))
            ]

        if state.pending_card is not None:
            return self._generate_execute_actions(state, state.pending_card)
        return [Action.next_turn()]

    def _generate_placement_actions(self, state: GameState) -> list[Action]:
        if len(state.horses) == NUM_HORSES:
            return [Action.start_game()]
        return [
            Action.place_horse(number, side)
            for number in available_horses(state.horses)
            for side in PlacementSide
        ]

    def _generate_execute_actions(self, state: GameState, card: ActionCard) -> list[Action]:
        """One execute action per valid choice for the card."""
        if card.needs_direction_choice:
            return [
                Action.execute_action_card(card, MovementChoice(direction=d))
                for d in (Direction.FORWARD, Direction.BACKWARD)
            ]

        if card.card_type == CardType.EXCHANGE_BETTING:
            return [
                Action.execute_action_card(
                    card,
                    ExchangeBettingChoice(target_player_id=p.player_id, card_index=i),
                )
                for p in state.players
                for i in range(len(p.betting_cards))
            ]

        return [Action.execute_action_card(card)]


def legal_actions(state: GameState | None) -> list[Action]:
    """Convenience function to get legal actions."""
    return ActionGenerator().generate(state)
