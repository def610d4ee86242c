"""
Game State - Immutable snapshot of one game.

Design principles:
- Immutable: frozen dataclasses holding tuples, every change returns a new state
- Serializable: plain values only, see api.schemas for the structured encoding
- Derived, not stored: a horse's rank comes from its index in the race order
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .errors import ValidationError

HORSE_NUMBERS = (1, 2, 3, 4, 5, 6, 7)
NUM_HORSES = len(HORSE_NUMBERS)


class GamePhase(Enum):
    """High-level game phases."""
    SETUP = "setup"
    HORSE_PLACEMENT = "horse_placement"
    PLAYING = "playing"
    SCORING = "scoring"
    FINISHED = "finished"


class TurnPhase(Enum):
    """Steps of a single player's turn."""
    TAKE_TOKEN = "take_token"
    PLAY_CARD = "play_card"
    EXECUTE_CARD = "execute_card"


class Direction(Enum):
    """Movement direction printed on a card."""
    FORWARD = "forward"
    BACKWARD = "backward"
    CHOICE = "choice"


class PlacementSide(Enum):
    """
    End of the race order a horse is placed on.

    LEFT prepends at index 0 (worst rank), RIGHT appends at the
    current end (best rank).
    """
    LEFT = "left"
    RIGHT = "right"


class CardType(Enum):
    """The four action card shapes."""
    SINGLE_MOVEMENT = "single_movement"
    DUAL_MOVEMENT = "dual_movement"
    RIDER_FALL_OFF = "rider_fall_off"
    EXCHANGE_BETTING = "exchange_betting"


@dataclass(frozen=True)
class Horse:
    """A horse in the race order. position mirrors its index."""
    number: int
    position: int


@dataclass(frozen=True)
class BettingCard:
    """A bet on a horse number."""
    horse_number: int


@dataclass(frozen=True)
class ActionCard:
    """
    An action card.

    Tagged by card_type. Movement cards carry the horses they move,
    the number of spaces and a direction; rider fall off and exchange
    betting carry nothing.
    """
    card_type: CardType
    horse_numbers: tuple[int, ...] = ()
    spaces: int = 0
    direction: Direction | None = None

    @classmethod
    def single_movement(cls, horse_number: int, spaces: int, direction: Direction) -> ActionCard:
        return cls(
            card_type=CardType.SINGLE_MOVEMENT,
            horse_numbers=(horse_number,),
            spaces=spaces,
            direction=direction,
        )

    @classmethod
    def dual_movement(cls, horse_numbers: tuple[int, int], spaces: int, direction: Direction) -> ActionCard:
        return cls(
            card_type=CardType.DUAL_MOVEMENT,
            horse_numbers=tuple(horse_numbers),
            spaces=spaces,
            direction=direction,
        )

    @classmethod
    def rider_fall_off(cls) -> ActionCard:
        return cls(card_type=CardType.RIDER_FALL_OFF)

    @classmethod
    def exchange_betting(cls) -> ActionCard:
        return cls(card_type=CardType.EXCHANGE_BETTING)

    @property
    def horse_number(self) -> int:
        """The horse moved by a single movement card."""
        if self.card_type != CardType.SINGLE_MOVEMENT:
            raise AttributeError(f"{self.card_type.value} card has no single horse")
        return self.horse_numbers[0]

    @property
    def is_movement(self) -> bool:
        return self.card_type in (CardType.SINGLE_MOVEMENT, CardType.DUAL_MOVEMENT)

    @property
    def needs_direction_choice(self) -> bool:
        return self.is_movement and self.direction == Direction.CHOICE

    @property
    def needs_choice(self) -> bool:
        """Whether executing this card requires an extra choice payload."""
        return self.needs_direction_choice or self.card_type == CardType.EXCHANGE_BETTING

    def describe(self) -> str:
        """Short human-readable label."""
        if self.card_type == CardType.SINGLE_MOVEMENT:
            return f"move horse {self.horse_number} {self.spaces} {self.direction.value}"
        if self.card_type == CardType.DUAL_MOVEMENT:
            a, b = self.horse_numbers
            return f"move horses {a}+{b} {self.spaces} {self.direction.value}"
        return self.card_type.value.replace("_", " ")


@dataclass(frozen=True)
class PlayerState:
    """State for a single player."""
    player_id: str
    name: str
    betting_cards: tuple[BettingCard, ...] = ()
    action_cards: tuple[ActionCard, ...] = ()
    has_dark_horse_token: bool = False

    def _copy_with(self, **kwargs) -> PlayerState:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state the engine operates on.
    All state changes go through the reducer, which returns a new
    GameState and leaves the old one intact.
    """
    phase: GamePhase = GamePhase.SETUP
    turn_phase: TurnPhase | None = None

    # Players, fixed membership after setup
    players: tuple[PlayerState, ...] = ()
    current_player_idx: int = 0

    # Race order: index 0 is rank 7, last index is rank 1
    horses: tuple[Horse, ...] = ()
    dark_horse_number: int | None = None
    horses_placed: int = 0

    available_tokens: int = 0

    # Cards played this game, and the one played this turn awaiting execution
    played_cards: tuple[ActionCard, ...] = ()
    pending_card: ActionCard | None = None

    # Replay log
    action_history: tuple[Any, ...] = field(default=(), compare=False)

    @property
    def current_player(self) -> PlayerState:
        """Get the current player."""
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def race_order(self) -> tuple[int, ...]:
        """Horse numbers from worst rank to best rank."""
        return tuple(h.number for h in self.horses)

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with updated player."""
        new_players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def rank_of(self, horse_number: int) -> int:
        return horse_rank(self.horses, horse_number)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


def reindex(numbers) -> tuple[Horse, ...]:
    """Build a race order from horse numbers, positions matching indices."""
    return tuple(Horse(number=n, position=i) for i, n in enumerate(numbers))


def horse_index(horses: tuple[Horse, ...], horse_number: int) -> int:
    """Index of a horse in the race order, -1 if absent."""
    for i, h in enumerate(horses):
        if h.number == horse_number:
            return i
    return -1


def horse_rank(horses: tuple[Horse, ...], horse_number: int) -> int:
    """Rank derived from index: rank 7 at index 0, rank 1 at index 6."""
    index = horse_index(horses, horse_number)
    if index < 0:
        raise ValidationError(f"Horse {horse_number} is not in the race order")
    return NUM_HORSES - index


def available_horses(horses: tuple[Horse, ...]) -> list[int]:
    """Horse numbers not yet in the race order."""
    placed = {h.number for h in horses}
    return [n for n in HORSE_NUMBERS if n not in placed]
