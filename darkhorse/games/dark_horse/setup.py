"""
Dark Horse Game Setup - Dealing and pre-race horse placement.

This module handles:
- Validating the player count
- Shuffling both decks with an injectable random source
- Dealing per the player-count table (undealt cards are discarded)
- Placing horses on either end of the race order
- Resolving the dark horse after the sixth placement
- Starting the race
"""

from __future__ import annotations
import logging

from ...engine_core.errors import PreconditionError, ValidationError
from ...engine_core.randomness import RandomSource, make_rng, shuffled
from ...engine_core.state import (
    HORSE_NUMBERS,
    NUM_HORSES,
    GamePhase,
    GameState,
    Horse,
    PlacementSide,
    PlayerState,
    TurnPhase,
    available_horses,
    reindex,
)
from .cards import (
    MAX_PLAYERS,
    MIN_PLAYERS,
    action_cards_per_player,
    betting_cards_per_player,
    create_action_card_deck,
    create_betting_card_deck,
    dark_horse_token_count,
)

logger = logging.getLogger(__name__)


def _deal(deck: list, player_count: int, per_player: int) -> list[tuple]:
    """Slice consecutive hands off the top of a shuffled deck."""
    return [
        tuple(deck[i * per_player:(i + 1) * per_player])
        for i in range(player_count)
    ]


def initialize_game(
    player_names: list[str],
    rng: RandomSource | None = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        player_names: Names in seat order (2-6)
        rng: Random source for shuffling (fresh unseeded one if omitted)

    Returns:
        Initial GameState in the setup phase
    """
    player_count = len(player_names)
    if player_count < MIN_PLAYERS or player_count > MAX_PLAYERS:
        raise ValidationError(
            f"Player count must be between {MIN_PLAYERS} and {MAX_PLAYERS}"
        )

    rng = rng or make_rng()

    betting_hands = _deal(
        shuffled(create_betting_card_deck(), rng),
        player_count,
        betting_cards_per_player(player_count),
    )
    action_hands = _deal(
        shuffled(create_action_card_deck(), rng),
        player_count,
        action_cards_per_player(player_count),
    )

    players = tuple(
        PlayerState(
            player_id=f"player-{i + 1}",
            name=name,
            betting_cards=betting_hands[i],
            action_cards=action_hands[i],
        )
        for i, name in enumerate(player_names)
    )

    logger.info("Dealt a %s player game", player_count)
    return GameState(
        phase=GamePhase.SETUP,
        turn_phase=None,
        players=players,
        available_tokens=dark_horse_token_count(player_count),
        current_player_idx=0,
    )


def advance_horse_placement(state: GameState) -> GameState:
    if state.phase != GamePhase.SETUP:
        raise PreconditionError("Can only advance to horse placement from setup phase")
    return state._copy_with(phase=GamePhase.HORSE_PLACEMENT)


def place_horse_card(
    horses: tuple[Horse, ...],
    horse_number: int,
    side: PlacementSide,
) -> tuple[Horse, ...]:
    """Place a horse on the left (worst rank) or right (best rank) end."""
    numbers = [h.number for h in horses]
    if side == PlacementSide.LEFT:
        numbers.insert(0, horse_number)
    else:
        numbers.append(horse_number)
    return reindex(numbers)


def is_horse_placement_complete(horses: tuple[Horse, ...]) -> bool:
    return len(horses) == NUM_HORSES


def determine_dark_horse(horses: tuple[Horse, ...]) -> int:
    """The single horse left unplaced after six placements."""
    remaining = available_horses(horses)
    if len(remaining) != 1:
        raise PreconditionError(
            "Dark horse can only be determined when exactly 6 horses are placed"
        )
    return remaining[0]


def place_horse(state: GameState, horse_number: int, side: PlacementSide) -> GameState:
    """
    Place one horse during the placement phase.

    After the sixth placement the remaining horse becomes the dark
    horse and is appended at the best-rank end.
    """
    if state.phase != GamePhase.HORSE_PLACEMENT:
        raise PreconditionError("Horses can only be placed during horse placement")
    if horse_number not in HORSE_NUMBERS:
        raise ValidationError(f"Unknown horse number: {horse_number}")
    if not isinstance(side, PlacementSide):
        raise ValidationError(f"Unknown placement side: {side}")
    if horse_number not in available_horses(state.horses):
        raise PreconditionError(f"Horse {horse_number} is already placed")

    horses = place_horse_card(state.horses, horse_number, side)

    if len(horses) == NUM_HORSES - 1:
        dark_horse = determine_dark_horse(horses)
        horses = reindex([h.number for h in horses] + [dark_horse])
        logger.info("Horse %s is the dark horse", dark_horse)
        return state._copy_with(
            horses=horses,
            horses_placed=len(horses),
            dark_horse_number=dark_horse,
        )

    return state._copy_with(horses=horses, horses_placed=len(horses))


def start_game(state: GameState) -> GameState:
    if state.phase != GamePhase.HORSE_PLACEMENT:
        raise PreconditionError("Can only start game from horse_placement phase")
    if not is_horse_placement_complete(state.horses):
        raise PreconditionError("All horses must be placed before starting the game")
    if state.dark_horse_number is None:
        raise PreconditionError("Dark horse must be determined before starting the game")

    return state._copy_with(phase=GamePhase.PLAYING, turn_phase=TurnPhase.TAKE_TOKEN)
