"""
API Module - Structured snapshots for drivers.

The engine itself has no I/O. A driver that renders, logs or stores
games encodes states and scores with these pydantic models.
"""

from .schemas import (
    HorseInfo,
    ActionCardInfo,
    PlayerInfo,
    GameStateResponse,
    BettingScoreInfo,
    PlayerScoreInfo,
    ScoreboardResponse,
)

__all__ = [
    "HorseInfo",
    "ActionCardInfo",
    "PlayerInfo",
    "GameStateResponse",
    "BettingScoreInfo",
    "PlayerScoreInfo",
    "ScoreboardResponse",
]
