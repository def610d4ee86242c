"""
Action System - Actions, payloads, choices and results.

The action alphabet is closed: the ten ActionTypes below are the
whole boundary of the engine. All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .state import ActionCard, Direction, GameState, PlacementSide


class ActionType(Enum):
    """Types of actions in the system."""
    # Setup and placement
    INITIALIZE_GAME = "initialize_game"
    ADVANCE_HORSE_PLACEMENT = "advance_horse_placement"
    PLACE_HORSE = "place_horse"
    START_GAME = "start_game"

    # Turn
    TAKE_DARK_HORSE_TOKEN = "take_dark_horse_token"
    SKIP_DARK_HORSE_TOKEN = "skip_dark_horse_token"
    PLAY_ACTION_CARD = "play_action_card"
    EXECUTE_ACTION_CARD = "execute_action_card"
    NEXT_TURN = "next_turn"

    # End
    END_GAME = "end_game"


@dataclass(frozen=True)
class MovementChoice:
    """Direction picked for a movement card printed with 'choice'."""
    direction: Direction


@dataclass(frozen=True)
class ExchangeBettingChoice:
    """Which betting card gets replaced by an exchange."""
    target_player_id: str
    card_index: int


CardChoice = Union[MovementChoice, ExchangeBettingChoice, None]


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    # INITIALIZE_GAME
    player_names: tuple[str, ...] = ()

    # PLACE_HORSE
    horse_number: int | None = None
    side: PlacementSide | None = None

    # PLAY_ACTION_CARD
    card_index: int | None = None

    # EXECUTE_ACTION_CARD
    card: ActionCard | None = None
    choice: CardChoice = None


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    Actions are logged for replay in GameState.action_history.
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def initialize_game(cls, player_names: list[str]) -> Action:
        return cls(
            action_type=ActionType.INITIALIZE_GAME,
            payload=ActionPayload(player_names=tuple(player_names)),
        )

    @classmethod
    def advance_horse_placement(cls) -> Action:
        return cls(action_type=ActionType.ADVANCE_HORSE_PLACEMENT)

    @classmethod
    def place_horse(cls, horse_number: int, side: PlacementSide) -> Action:
        return cls(
            action_type=ActionType.PLACE_HORSE,
            payload=ActionPayload(horse_number=horse_number, side=side),
        )

    @classmethod
    def start_game(cls) -> Action:
        return cls(action_type=ActionType.START_GAME)

    @classmethod
    def take_dark_horse_token(cls) -> Action:
        return cls(action_type=ActionType.TAKE_DARK_HORSE_TOKEN)

    @classmethod
    def skip_dark_horse_token(cls) -> Action:
        return cls(action_type=ActionType.SKIP_DARK_HORSE_TOKEN)

    @classmethod
    def play_action_card(cls, card_index: int) -> Action:
        return cls(
            action_type=ActionType.PLAY_ACTION_CARD,
            payload=ActionPayload(card_index=card_index),
        )

    @classmethod
    def execute_action_card(
        cls,
        card: ActionCard | None = None,
        choice: CardChoice = None,
    ) -> Action:
        """Factory for execute. card defaults to the pending card when omitted."""
        return cls(
            action_type=ActionType.EXECUTE_ACTION_CARD,
            payload=ActionPayload(card=card, choice=choice),
        )

    @classmethod
    def next_turn(cls) -> Action:
        return cls(action_type=ActionType.NEXT_TURN)

    @classmethod
    def end_game(cls) -> Action:
        return cls(action_type=ActionType.END_GAME)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - The new state
    - Human-readable changes (for the driver to show or log)
    - The removed card, for PLAY_ACTION_CARD
    """
    new_state: GameState
    state_changes: list[str] = field(default_factory=list)
    played_card: ActionCard | None = None

    @classmethod
    def success_with_state(
        cls,
        state: GameState,
        changes: list[str] | None = None,
        played_card: ActionCard | None = None,
    ) -> ActionResult:
        """Create a result with new state."""
        return cls(
            new_state=state,
            state_changes=changes or [],
            played_card=played_card,
        )
