# context/__init__.py
"""
Game context - input contracts for alert generation.

Module Structure:
- game.py: GameWithPrediction schema, value bets, injuries, confidence ordinal
"""

from context.game import (
    Confidence,
    GameWithPrediction,
    GamePrediction,
    ValueBet,
    Sport,
    meets_confidence,
)

__all__ = [
    "Confidence",
    "GameWithPrediction",
    "GamePrediction",
    "ValueBet",
    "Sport",
    "meets_confidence",
]
