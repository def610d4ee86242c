"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state, the old state is untouched
- Validates phase before dispatching
- Errors propagate to the caller; nothing is caught here
- Delegates card effects to EffectResolver
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .action import Action, ActionResult, ActionType
from .effect_resolver import EffectResolver
from .errors import PreconditionError
from .randomness import RandomSource, make_rng
from .rules import (
    advance_turn_phase,
    end_game,
    next_turn,
    play_action_card,
    take_dark_horse_token,
)
from .state import GamePhase, GameState, TurnPhase

logger = logging.getLogger(__name__)

# Turn phase each turn action is legal in
_REQUIRED_TURN_PHASE = {
    ActionType.TAKE_DARK_HORSE_TOKEN: TurnPhase.TAKE_TOKEN,
    ActionType.SKIP_DARK_HORSE_TOKEN: TurnPhase.TAKE_TOKEN,
    ActionType.PLAY_ACTION_CARD: TurnPhase.PLAY_CARD,
    ActionType.EXECUTE_ACTION_CARD: TurnPhase.EXECUTE_CARD,
}


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState. The random source is
    used for dealing and for exchange draws.
    """
    rng: RandomSource = field(default_factory=make_rng)

    def apply(self, state: GameState | None, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state. Raises ValidationError,
        PreconditionError or MissingChoiceError on contract violations.
        """
        if state is None and action.action_type != ActionType.INITIALIZE_GAME:
            raise PreconditionError("Game not initialized")

        if state is not None:
            self._validate_action(state, action)

        handler = self._get_handler(action.action_type)
        result = handler(state, action)

        logger.debug("Applied %s", action.action_type.value)
        history = () if state is None else state.action_history
        result.new_state = result.new_state._copy_with(
            action_history=history + (action,),
        )
        return result

    def _validate_action(self, state: GameState, action: Action) -> None:
        """Raise PreconditionError if the action is illegal in this phase."""
        required = _REQUIRED_TURN_PHASE.get(action.action_type)
        if required is None:
            return

        if state.phase != GamePhase.PLAYING:
            raise PreconditionError(
                f"{action.action_type.value} is only allowed while playing"
            )
        if state.turn_phase != required:
            raise PreconditionError(
                f"{action.action_type.value} is only allowed during {required.value}"
            )

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.INITIALIZE_GAME: self._handle_initialize_game,
            ActionType.ADVANCE_HORSE_PLACEMENT: self._handle_advance_horse_placement,
            ActionType.PLACE_HORSE: self._handle_place_horse,
            ActionType.START_GAME: self._handle_start_game,
            ActionType.TAKE_DARK_HORSE_TOKEN: self._handle_take_token,
            ActionType.SKIP_DARK_HORSE_TOKEN: self._handle_skip_token,
            ActionType.PLAY_ACTION_CARD: self._handle_play_card,
            ActionType.EXECUTE_ACTION_CARD: self._handle_execute_card,
            ActionType.NEXT_TURN: self._handle_next_turn,
            ActionType.END_GAME: self._handle_end_game,
        }
        return handlers[action_type]

    def _handle_initialize_game(self, state: GameState | None, action: Action) -> ActionResult:
        from ..games.dark_horse.setup import initialize_game

        names = list(action.payload.player_names)
        new_state = initialize_game(names, rng=self.rng)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"New game for {', '.join(names)}"],
        )

    def _handle_advance_horse_placement(self, state: GameState, action: Action) -> ActionResult:
        from ..games.dark_horse.setup import advance_horse_placement

        return ActionResult.success_with_state(
            advance_horse_placement(state),
            changes=["Horse placement started"],
        )

    def _handle_place_horse(self, state: GameState, action: Action) -> ActionResult:
        from ..games.dark_horse.setup import place_horse

        payload = action.payload
        new_state = place_horse(state, payload.horse_number, payload.side)

        changes = [f"Horse {payload.horse_number} placed on the {payload.side.value}"]
        if state.dark_horse_number is None and new_state.dark_horse_number is not None:
            changes.append(f"Horse {new_state.dark_horse_number} is the dark horse")
        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_start_game(self, state: GameState, action: Action) -> ActionResult:
        from ..games.dark_horse.setup import start_game

        new_state = start_game(state)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Race started. First player: {new_state.current_player.name}"],
        )

    def _handle_take_token(self, state: GameState, action: Action) -> ActionResult:
        new_state = advance_turn_phase(take_dark_horse_token(state))
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{state.current_player.name} took a dark horse token"],
        )

    def _handle_skip_token(self, state: GameState, action: Action) -> ActionResult:
        return ActionResult.success_with_state(advance_turn_phase(state))

    def _handle_play_card(self, state: GameState, action: Action) -> ActionResult:
        new_state, card = play_action_card(state, action.payload.card_index)
        new_state = advance_turn_phase(new_state._copy_with(pending_card=card))
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{state.current_player.name} played {card.describe()}"],
            played_card=card,
        )

    def _handle_execute_card(self, state: GameState, action: Action) -> ActionResult:
        if state.pending_card is None:
            raise PreconditionError("No played card awaiting execution")

        card = action.payload.card or state.pending_card
        resolver = EffectResolver(rng=self.rng)
        new_state = resolver.resolve(state, card, action.payload.choice)
        new_state = advance_turn_phase(new_state._copy_with(pending_card=None))
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Executed {card.describe()}"],
        )

    def _handle_next_turn(self, state: GameState, action: Action) -> ActionResult:
        new_state = next_turn(state)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Turn ended. Next player: {new_state.current_player.name}"],
        )

    def _handle_end_game(self, state: GameState, action: Action) -> ActionResult:
        return ActionResult.success_with_state(end_game(state), changes=["Race finished"])


def apply_action(
    state: GameState | None,
    action: Action,
    rng: RandomSource | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(rng=rng or make_rng())
    return reducer.apply(state, action)
