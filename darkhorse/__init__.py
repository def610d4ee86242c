"""
Dark Horse - Horse Race Card Game Engine

A deterministic rules engine for a turn-based, card-driven horse race.
The engine provides:
- Dealing and pre-race horse placement
- The per-turn phase ladder
- Action card effect resolution
- Scoring
"""

__version__ = "0.1.0"
