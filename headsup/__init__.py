"""
Headsup - Heads-Up Texas Hold'em against a heuristic AI

A two-player no-limit-style Hold'em engine with:
- Pure Python game core (deck, hand evaluator, betting rules, hand flow)
- Heuristic AI opponent with three personalities
- FastAPI server exposing a single local table

Usage:
    from headsup.core import HeadsUpGame, ActionType
    from headsup.agents import Personality
"""

__version__ = "0.1.0"

from headsup.core.card import Card, Deck
from headsup.core.player import Player
from headsup.core.game import HeadsUpGame
from headsup.core.hand import HandType, evaluate_hand

__all__ = [
    "Card",
    "Deck",
    "Player",
    "HeadsUpGame",
    "HandType",
    "evaluate_hand",
    "__version__",
]
