"""
Pydantic Schemas - Structured encoding of game snapshots and scores.

The engine owns no wire format. These models are what a driver
renders, logs or stores: a GameStateResponse per snapshot and a
ScoreboardResponse once the race is over.
"""

from typing import Annotated, Optional
from pydantic import BaseModel, Field

from ..engine_core.state import ActionCard, GameState, PlayerState
from ..games.dark_horse.scoring import PlayerScore, determine_winner


HorseNumber = Annotated[int, Field(ge=1, le=7)]
Rank = Annotated[int, Field(ge=1, le=7)]


# =============================================================================
# Shared Models
# =============================================================================

class HorseInfo(BaseModel):
    """A horse in the race order."""
    number: HorseNumber
    position: int = Field(ge=0, le=6)
    rank: Rank
    is_dark_horse: bool = False


class ActionCardInfo(BaseModel):
    """An action card."""
    card_type: str = Field(description="single_movement, dual_movement, rider_fall_off, exchange_betting")
    horse_numbers: list[int] = Field(default_factory=list)
    spaces: int = 0
    direction: Optional[str] = Field(None, description="forward, backward, choice")
    label: str = ""

    @classmethod
    def from_card(cls, card: ActionCard) -> "ActionCardInfo":
        return cls(
            card_type=card.card_type.value,
            horse_numbers=list(card.horse_numbers),
            spaces=card.spaces,
            direction=card.direction.value if card.direction else None,
            label=card.describe(),
        )


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    is_current_turn: bool = False
    has_dark_horse_token: bool = False
    betting_cards: list[int] = Field(default_factory=list, description="Horse numbers bet on")
    action_cards: list[ActionCardInfo] = Field(default_factory=list)

    @classmethod
    def from_player(cls, player: PlayerState, is_current_turn: bool = False) -> "PlayerInfo":
        return cls(
            player_id=player.player_id,
            name=player.name,
            is_current_turn=is_current_turn,
            has_dark_horse_token=player.has_dark_horse_token,
            betting_cards=[c.horse_number for c in player.betting_cards],
            action_cards=[ActionCardInfo.from_card(c) for c in player.action_cards],
        )


# =============================================================================
# Snapshot Models
# =============================================================================

class GameStateResponse(BaseModel):
    """Full snapshot of a game state."""
    phase: str
    turn_phase: Optional[str] = None
    players: list[PlayerInfo] = Field(default_factory=list)
    horses: list[HorseInfo] = Field(default_factory=list, description="Worst rank first")
    dark_horse_number: Optional[int] = Field(None, ge=1, le=7)
    horses_placed: int = Field(0, ge=0, le=7)
    available_tokens: int = Field(0, ge=0)
    current_player_id: Optional[str] = None
    played_cards: list[ActionCardInfo] = Field(default_factory=list)
    pending_card: Optional[ActionCardInfo] = None

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateResponse":
        current_id = state.current_player.player_id if state.players else None
        return cls(
            phase=state.phase.value,
            turn_phase=state.turn_phase.value if state.turn_phase else None,
            players=[
                PlayerInfo.from_player(p, is_current_turn=p.player_id == current_id)
                for p in state.players
            ],
            horses=[
                HorseInfo(
                    number=h.number,
                    position=h.position,
                    rank=state.rank_of(h.number),
                    is_dark_horse=h.number == state.dark_horse_number,
                )
                for h in state.horses
            ],
            dark_horse_number=state.dark_horse_number,
            horses_placed=state.horses_placed,
            available_tokens=state.available_tokens,
            current_player_id=current_id,
            played_cards=[ActionCardInfo.from_card(c) for c in state.played_cards],
            pending_card=(
                ActionCardInfo.from_card(state.pending_card)
                if state.pending_card else None
            ),
        )


# =============================================================================
# Score Models
# =============================================================================

class BettingScoreInfo(BaseModel):
    """Points scored by one betting card."""
    horse_number: HorseNumber
    rank: Rank
    points: int = Field(ge=0, le=9)


class PlayerScoreInfo(BaseModel):
    """Score breakdown for one player."""
    player_id: str
    player_name: str
    betting_scores: list[BettingScoreInfo] = Field(default_factory=list)
    base_score: int = 0
    has_double_betting: bool = False
    double_betting_bonus: int = 0
    dark_horse_token_bonus: int = 0
    total_score: int = 0

    @classmethod
    def from_score(cls, score: PlayerScore) -> "PlayerScoreInfo":
        return cls(
            player_id=score.player_id,
            player_name=score.player_name,
            betting_scores=[
                BettingScoreInfo(horse_number=s.horse_number, rank=s.rank, points=s.points)
                for s in score.betting_scores
            ],
            base_score=score.base_score,
            has_double_betting=score.has_double_betting,
            double_betting_bonus=score.double_betting_bonus,
            dark_horse_token_bonus=score.dark_horse_token_bonus,
            total_score=score.total_score,
        )


class ScoreboardResponse(BaseModel):
    """Final scores and winners."""
    race_order: list[int] = Field(default_factory=list, description="Best rank first")
    dark_horse_number: Optional[int] = Field(None, ge=1, le=7)
    scores: list[PlayerScoreInfo] = Field(default_factory=list)
    winner_ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_scores(cls, state: GameState, scores: list[PlayerScore]) -> "ScoreboardResponse":
        return cls(
            race_order=list(reversed(state.race_order)),
            dark_horse_number=state.dark_horse_number,
            scores=[PlayerScoreInfo.from_score(s) for s in scores],
            winner_ids=[w.player_id for w in determine_winner(scores)],
        )
