"""
Pytest fixtures for Dark Horse tests.
"""

import random

import pytest

from ..engine_core.action import Action, ExchangeBettingChoice, MovementChoice
from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import Reducer
from ..engine_core.state import (
    ActionCard,
    BettingCard,
    CardType,
    Direction,
    GamePhase,
    GameState,
    PlacementSide,
    PlayerState,
    TurnPhase,
    reindex,
)

# 1L 2R 3L 4R 5L 6R, dark horse 7 appended
ALTERNATING_PLACEMENTS = [
    (1, PlacementSide.LEFT),
    (2, PlacementSide.RIGHT),
    (3, PlacementSide.LEFT),
    (4, PlacementSide.RIGHT),
    (5, PlacementSide.LEFT),
    (6, PlacementSide.RIGHT),
]


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def reducer(rng) -> Reducer:
    return Reducer(rng=rng)


@pytest.fixture
def make_player():
    """Build a player from betting horse numbers and action cards."""
    def _make(player_id="player-1", bets=(), cards=(), token=False, name=None):
        return PlayerState(
            player_id=player_id,
            name=name or player_id.replace("player-", "P"),
            betting_cards=tuple(BettingCard(horse_number=n) for n in bets),
            action_cards=tuple(cards),
            has_dark_horse_token=token,
        )
    return _make


@pytest.fixture
def make_state():
    """Build a state with a given race order (worst rank first)."""
    def _make(
        order=(1, 2, 3, 4, 5, 6, 7),
        players=(),
        phase=GamePhase.PLAYING,
        turn_phase=TurnPhase.TAKE_TOKEN,
        dark_horse=7,
        tokens=1,
    ):
        return GameState(
            phase=phase,
            turn_phase=turn_phase,
            players=tuple(players),
            horses=reindex(order),
            dark_horse_number=dark_horse,
            horses_placed=len(order),
            available_tokens=tokens,
        )
    return _make


@pytest.fixture
def setup_state(reducer) -> GameState:
    """A freshly dealt 2-player game."""
    return reducer.apply(None, Action.initialize_game(["Ann", "Bob"])).new_state


@pytest.fixture
def placed_state(reducer, setup_state) -> GameState:
    """2-player game with all horses placed by alternating sides."""
    state = reducer.apply(setup_state, Action.advance_horse_placement()).new_state
    for number, side in ALTERNATING_PLACEMENTS:
        state = reducer.apply(state, Action.place_horse(number, side)).new_state
    return state


@pytest.fixture
def playing_state(reducer, placed_state) -> GameState:
    """2-player game at the first player's take_token step."""
    return reducer.apply(placed_state, Action.start_game()).new_state


def choice_for(card: ActionCard, state: GameState):
    """A valid choice for a card, or None if it needs none."""
    if card.needs_direction_choice:
        return MovementChoice(direction=Direction.FORWARD)
    if card.card_type == CardType.EXCHANGE_BETTING:
        return ExchangeBettingChoice(
            target_player_id=state.current_player.player_id,
            card_index=0,
        )
    return None


@pytest.fixture
def card_choice():
    return choice_for


def first_legal(state: GameState, actions: list[Action]) -> Action:
    """Always pick the first legal action."""
    return actions[0]


def random_chooser(seed: int):
    """Pick uniformly among the legal actions with a seeded source."""
    picker = random.Random(seed)

    def _choose(state: GameState, actions: list[Action]) -> Action:
        return picker.choice(actions)
    return _choose


def play_game(names, choose, rng, max_steps=1000) -> list[GameState]:
    """
    Drive one game from the deal to scoring.

    choose(state, legal_actions) picks each action. Returns every
    snapshot, the initial deal first. Raises RuntimeError if the game
    has not reached scoring after max_steps actions.
    """
    reducer = Reducer(rng=rng)
    state = reducer.apply(None, Action.initialize_game(names)).new_state
    snapshots = [state]

    steps = 0
    while state.phase != GamePhase.SCORING:
        if steps >= max_steps:
            raise RuntimeError(f"Game did not finish within {max_steps} steps")
        state = reducer.apply(state, choose(state, legal_actions(state))).new_state
        snapshots.append(state)
        steps += 1
    return snapshots
