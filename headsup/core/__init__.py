"""
Headsup Core - Pure Python heads-up Texas Hold'em game logic

This module contains all game logic without any network dependencies.
"""

from headsup.core.card import Card, Deck
from headsup.core.player import Player
from headsup.core.hand import HandType, PokerHand, evaluate_hand, compare_hands
from headsup.core.rules import GamePhase, ActionType, ActionError, TableConfig
from headsup.core.betting import ChipConservationError
from headsup.core.game import HeadsUpGame, ActionResult, HandResult, GameEvent, EventType

__all__ = [
    "Card",
    "Deck",
    "Player",
    "HandType",
    "PokerHand",
    "evaluate_hand",
    "compare_hands",
    "GamePhase",
    "ActionType",
    "ActionError",
    "TableConfig",
    "ChipConservationError",
    "HeadsUpGame",
    "ActionResult",
    "HandResult",
    "GameEvent",
    "EventType",
]
