"""
Dark Horse Cards - Deck composition and per-player-count tables.

Action deck (33 cards):
- 14 single movement, 1 space forward and 1 space backward for each horse
- 7 single movement, 2 spaces, direction of choice, one per horse
- 5 dual movement, 1 space, direction of choice
- 4 rider fall off
- 3 exchange betting

Betting deck (14 cards): two per horse.
"""

from __future__ import annotations

from ...engine_core.errors import ValidationError
from ...engine_core.state import HORSE_NUMBERS, ActionCard, BettingCard, Direction

DUAL_MOVEMENT_PAIRS = [(1, 2), (3, 4), (5, 6), (2, 7), (4, 6)]
RIDER_FALL_OFF_COUNT = 4
EXCHANGE_BETTING_COUNT = 3
BETTING_COPIES = 2

ACTION_DECK_SIZE = 33
BETTING_DECK_SIZE = 14

MIN_PLAYERS = 2
MAX_PLAYERS = 6

# players -> (action cards each, betting cards each, dark horse tokens)
DEAL_TABLE = {
    2: (8, 3, 1),
    3: (7, 2, 2),
    4: (6, 2, 2),
    5: (6, 2, 3),
    6: (5, 2, 3),
}


def create_action_card_deck() -> list[ActionCard]:
    """Build the unshuffled action deck."""
    deck = []
    for n in HORSE_NUMBERS:
        deck.append(ActionCard.single_movement(n, 1, Direction.FORWARD))
        deck.append(ActionCard.single_movement(n, 1, Direction.BACKWARD))
    for n in HORSE_NUMBERS:
        deck.append(ActionCard.single_movement(n, 2, Direction.CHOICE))
    for pair in DUAL_MOVEMENT_PAIRS:
        deck.append(ActionCard.dual_movement(pair, 1, Direction.CHOICE))
    deck.extend(ActionCard.rider_fall_off() for _ in range(RIDER_FALL_OFF_COUNT))
    deck.extend(ActionCard.exchange_betting() for _ in range(EXCHANGE_BETTING_COUNT))
    return deck


def create_betting_card_deck() -> list[BettingCard]:
    """Build the unshuffled betting deck."""
    return [
        BettingCard(horse_number=n)
        for n in HORSE_NUMBERS
        for _ in range(BETTING_COPIES)
    ]


def _lookup(player_count: int) -> tuple[int, int, int]:
    if player_count not in DEAL_TABLE:
        raise ValidationError(
            f"Player count must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {player_count}"
        )
    return DEAL_TABLE[player_count]


def action_cards_per_player(player_count: int) -> int:
    return _lookup(player_count)[0]


def betting_cards_per_player(player_count: int) -> int:
    return _lookup(player_count)[1]


def dark_horse_token_count(player_count: int) -> int:
    return _lookup(player_count)[2]
