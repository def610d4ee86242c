"""
Games module - Game-specific rules.

Each game has its own subpackage with:
- Card definitions and deal tables
- Setup
- Scoring
"""
