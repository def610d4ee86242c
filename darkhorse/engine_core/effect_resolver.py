"""
Effect Resolver - Applies action card effects.

Movement and rider fall off are pure permutations of the race order.
Exchange betting swaps one betting card for a random card from the
pool of cards nobody holds both copies of.

The four card shapes are dispatched in EffectResolver.resolve and
nowhere else.
"""

from __future__ import annotations
import logging
from collections import Counter
from dataclasses import dataclass

from .action import CardChoice, ExchangeBettingChoice, MovementChoice
from .errors import MissingChoiceError, ValidationError
from .randomness import RandomSource, make_rng
from .state import (
    HORSE_NUMBERS,
    ActionCard,
    BettingCard,
    CardType,
    Direction,
    GameState,
    Horse,
    horse_index,
    horse_rank,
    reindex,
)

logger = logging.getLogger(__name__)

COPIES_PER_HORSE = 2
FALL_OFF_RANK = 3


def can_move_forward(horses: tuple[Horse, ...], horse_number: int) -> bool:
    return horse_index(horses, horse_number) > 0


def can_move_backward(horses: tuple[Horse, ...], horse_number: int) -> bool:
    return horse_index(horses, horse_number) < len(horses) - 1


def move_horse(
    horses: tuple[Horse, ...],
    horse_number: int,
    spaces: int,
    direction: Direction,
) -> tuple[Horse, ...]:
    """
    Move one horse along the race order.

    Forward lowers the index, backward raises it. A horse that cannot
    move at all in the requested direction (it sits at that end) moves
    the opposite way instead. The target is clamped into the order, so
    the result is always a permutation.
    """
    if direction not in (Direction.FORWARD, Direction.BACKWARD):
        raise ValidationError(f"Cannot move in direction {direction}")

    current = horse_index(horses, horse_number)
    if current < 0:
        raise ValidationError(f"Horse {horse_number} not found")

    actual = direction
    if direction == Direction.FORWARD and not can_move_forward(horses, horse_number):
        actual = Direction.BACKWARD
    elif direction == Direction.BACKWARD and not can_move_backward(horses, horse_number):
        actual = Direction.FORWARD

    target = current - spaces if actual == Direction.FORWARD else current + spaces
    target = max(0, min(len(horses) - 1, target))

    numbers = [h.number for h in horses]
    numbers.insert(target, numbers.pop(current))
    if actual != direction:
        logger.debug("Horse %s flipped to %s at the edge", horse_number, actual.value)
    logger.debug("Horse %s moved from index %s to %s", horse_number, current, target)
    return reindex(numbers)


def move_multiple_horses(
    horses: tuple[Horse, ...],
    horse_numbers: tuple[int, ...],
    spaces: int,
    direction: Direction,
) -> tuple[Horse, ...]:
    """
    Move several horses the same way.

    Horses are moved one at a time, the one further along the
    direction of travel first: ascending index going forward,
    descending going backward.
    """
    ordered = sorted(
        horse_numbers,
        key=lambda n: horse_index(horses, n),
        reverse=direction == Direction.BACKWARD,
    )
    for number in ordered:
        horses = move_horse(horses, number, spaces, direction)
    return horses


def execute_rider_fall_off(horses: tuple[Horse, ...]) -> tuple[Horse, ...]:
    """Send the rank 3 horse to the worst-rank end. No-op without one."""
    for index, horse in enumerate(horses):
        if horse_rank(horses, horse.number) == FALL_OFF_RANK:
            numbers = [h.number for h in horses]
            numbers.insert(0, numbers.pop(index))
            logger.debug("Rider of horse %s fell off", horse.number)
            return reindex(numbers)
    return tuple(horses)


def betting_pool(state: GameState) -> list[BettingCard]:
    """
    Betting cards that can still be drawn by an exchange.

    Every deck card whose horse number is held fewer than two times
    across all players.
    """
    held = Counter(
        card.horse_number
        for player in state.players
        for card in player.betting_cards
    )
    return [
        BettingCard(horse_number=n)
        for n in HORSE_NUMBERS
        for _ in range(COPIES_PER_HORSE)
        if held[n] < COPIES_PER_HORSE
    ]


def execute_exchange_betting(
    state: GameState,
    choice: ExchangeBettingChoice,
    rng: RandomSource,
) -> GameState:
    """Replace the chosen betting card with a random card from the pool."""
    target = state.get_player(choice.target_player_id)
    if target is None:
        raise ValidationError(f"Player {choice.target_player_id} not found")

    if not 0 <= choice.card_index < len(target.betting_cards):
        raise ValidationError(f"Invalid betting card index: {choice.card_index}")

    pool = betting_pool(state)
    if not pool:
        logger.debug("Betting pool empty, exchange skipped")
        return state

    new_card = rng.choice(pool)
    cards = list(target.betting_cards)
    old_card = cards[choice.card_index]
    cards[choice.card_index] = new_card
    logger.debug(
        "%s exchanged bet on %s for bet on %s",
        target.name, old_card.horse_number, new_card.horse_number,
    )
    return state.with_player(target._copy_with(betting_cards=tuple(cards)))


@dataclass
class EffectResolver:
    """
    Resolves one action card against a game state.

    Stateless apart from the random source used by exchanges.
    """
    rng: RandomSource

    def resolve(self, state: GameState, card: ActionCard, choice: CardChoice = None) -> GameState:
        """Apply the card's effect, returning the new state."""
        if card.card_type == CardType.SINGLE_MOVEMENT:
            direction = self._movement_direction(card, choice)
            horses = move_horse(state.horses, card.horse_number, card.spaces, direction)
            return state._copy_with(horses=horses)

        if card.card_type == CardType.DUAL_MOVEMENT:
            direction = self._movement_direction(card, choice)
            horses = move_multiple_horses(state.horses, card.horse_numbers, card.spaces, direction)
            return state._copy_with(horses=horses)

        if card.card_type == CardType.RIDER_FALL_OFF:
            return state._copy_with(horses=execute_rider_fall_off(state.horses))

        if card.card_type == CardType.EXCHANGE_BETTING:
            if not isinstance(choice, ExchangeBettingChoice):
                raise MissingChoiceError("Exchange betting choice required")
            return execute_exchange_betting(state, choice, self.rng)

        raise ValidationError(f"Unknown card type: {card.card_type}")

    def _movement_direction(self, card: ActionCard, choice: CardChoice) -> Direction:
        if card.direction != Direction.CHOICE:
            return card.direction
        if not isinstance(choice, MovementChoice):
            raise MissingChoiceError("Direction choice required for this card")
        if choice.direction == Direction.CHOICE:
            raise ValidationError("Chosen direction must be forward or backward")
        return choice.direction


def execute_action_card(
    state: GameState,
    card: ActionCard,
    choice: CardChoice = None,
    rng: RandomSource | None = None,
) -> GameState:
    """Convenience function: resolve one card with a fresh resolver."""
    return EffectResolver(rng=rng or make_rng()).resolve(state, card, choice)
