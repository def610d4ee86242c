"""
Engine Core - Deterministic game state transitions.

The engine is the runtime that:
1. Holds the immutable GameState
2. Applies actions via the reducer
3. Resolves action card effects
4. Drives the turn phase ladder
5. Generates legal actions
"""

from .errors import EngineError, ValidationError, PreconditionError, MissingChoiceError
from .state import (
    GameState,
    PlayerState,
    Horse,
    ActionCard,
    BettingCard,
    CardType,
    Direction,
    GamePhase,
    TurnPhase,
    PlacementSide,
)
from .action import (
    Action,
    ActionType,
    ActionPayload,
    ActionResult,
    MovementChoice,
    ExchangeBettingChoice,
)
from .randomness import RandomSource, make_rng
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions
from .effect_resolver import EffectResolver

__all__ = [
    "EngineError",
    "ValidationError",
    "PreconditionError",
    "MissingChoiceError",
    "GameState",
    "PlayerState",
    "Horse",
    "ActionCard",
    "BettingCard",
    "CardType",
    "Direction",
    "GamePhase",
    "TurnPhase",
    "PlacementSide",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "MovementChoice",
    "ExchangeBettingChoice",
    "RandomSource",
    "make_rng",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "EffectResolver",
]
