"""
Dark Horse Scoring - Final scores once the race is over.

Each betting card scores by its horse's rank. A pair of cards on the
same horse adds a bonus of twice the single-card value, so a pair is
worth four times the table value in total. The dark horse token is
+5 if the dark horse finishes in the top three, -3 otherwise.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass

from ...engine_core.errors import PreconditionError, ValidationError
from ...engine_core.state import BettingCard, GamePhase, GameState, horse_rank

SCORING_TABLE = {1: 9, 2: 7, 3: 5, 4: 3, 5: 2, 6: 1, 7: 0}

DOUBLE_BETTING_MULTIPLIER = 2
DARK_HORSE_TOP_RANK = 3
DARK_HORSE_BONUS = 5
DARK_HORSE_PENALTY = -3

_SCORING_PHASES = {GamePhase.SCORING, GamePhase.FINISHED}


@dataclass(frozen=True)
class BettingScore:
    horse_number: int
    rank: int
    points: int


@dataclass(frozen=True)
class PlayerScore:
    """Score breakdown for one player. Derived, never stored on the state."""
    player_id: str
    player_name: str
    betting_scores: tuple[BettingScore, ...]
    has_double_betting: bool
    double_betting_bonus: int
    dark_horse_token_bonus: int
    total_score: int

    @property
    def base_score(self) -> int:
        return sum(s.points for s in self.betting_scores)


def calculate_betting_score(rank: int) -> int:
    return SCORING_TABLE[rank]


def check_double_betting(betting_cards: tuple[BettingCard, ...]) -> int | None:
    """Horse number bet on exactly twice, or None."""
    counts = Counter(card.horse_number for card in betting_cards)
    for horse_number, count in counts.items():
        if count == 2:
            return horse_number
    return None


def calculate_dark_horse_bonus(has_token: bool, dark_horse_rank: int) -> int:
    if not has_token:
        return 0
    if dark_horse_rank <= DARK_HORSE_TOP_RANK:
        return DARK_HORSE_BONUS
    return DARK_HORSE_PENALTY


def calculate_player_score(state: GameState, player_id: str) -> PlayerScore:
    if state.phase not in _SCORING_PHASES:
        raise PreconditionError("Scores are only available once the game has ended")
    if state.dark_horse_number is None:
        raise PreconditionError("Dark horse must be determined before scoring")

    player = state.get_player(player_id)
    if player is None:
        raise ValidationError(f"Player {player_id} not found")

    betting_scores = []
    for card in player.betting_cards:
        rank = horse_rank(state.horses, card.horse_number)
        betting_scores.append(BettingScore(
            horse_number=card.horse_number,
            rank=rank,
            points=calculate_betting_score(rank),
        ))

    double_horse = check_double_betting(player.betting_cards)
    double_bonus = 0
    if double_horse is not None:
        single = calculate_betting_score(horse_rank(state.horses, double_horse))
        double_bonus = single * DOUBLE_BETTING_MULTIPLIER

    token_bonus = calculate_dark_horse_bonus(
        player.has_dark_horse_token,
        horse_rank(state.horses, state.dark_horse_number),
    )

    base = sum(s.points for s in betting_scores)
    return PlayerScore(
        player_id=player.player_id,
        player_name=player.name,
        betting_scores=tuple(betting_scores),
        has_double_betting=double_horse is not None,
        double_betting_bonus=double_bonus,
        dark_horse_token_bonus=token_bonus,
        total_score=base + double_bonus + token_bonus,
    )


def calculate_all_scores(state: GameState) -> list[PlayerScore]:
    return [calculate_player_score(state, p.player_id) for p in state.players]


def determine_winner(scores: list[PlayerScore]) -> list[PlayerScore]:
    """Everyone tied at the top score. Ties are not broken."""
    if not scores:
        return []
    best = max(s.total_score for s in scores)
    return [s for s in scores if s.total_score == best]
