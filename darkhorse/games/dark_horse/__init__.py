"""
Dark Horse - A card-driven horse race for 2-6 players.

Players order seven horses into a starting line, then take turns
playing action cards that shuffle the race order. Betting cards
score by each horse's final rank; the dark horse token pays off if
the one horse nobody placed finishes in the top three.

This module contains:
- Deck composition and deal tables
- Dealing and horse placement
- Scoring
"""

from .cards import (
    DEAL_TABLE,
    create_action_card_deck,
    create_betting_card_deck,
    action_cards_per_player,
    betting_cards_per_player,
    dark_horse_token_count,
)
from .setup import (
    initialize_game,
    advance_horse_placement,
    place_horse,
    place_horse_card,
    determine_dark_horse,
    is_horse_placement_complete,
    start_game,
)
from .scoring import (
    SCORING_TABLE,
    BettingScore,
    PlayerScore,
    calculate_player_score,
    calculate_all_scores,
    determine_winner,
)

__all__ = [
    "DEAL_TABLE",
    "create_action_card_deck",
    "create_betting_card_deck",
    "action_cards_per_player",
    "betting_cards_per_player",
    "dark_horse_token_count",
    "initialize_game",
    "advance_horse_placement",
    "place_horse",
    "place_horse_card",
    "determine_dark_horse",
    "is_horse_placement_complete",
    "start_game",
    "SCORING_TABLE",
    "BettingScore",
    "PlayerScore",
    "calculate_player_score",
    "calculate_all_scores",
    "determine_winner",
]
