"""
Player class for heads-up Texas Hold'em.

Manages player state including:
- Chip count
- Hole cards
- Current bet in the betting round
- Blind assignment, fold and has-acted flags
"""

from __future__ import annotations
from typing import List, Dict, Any
from dataclasses import dataclass, field

from headsup.core.card import Card


@dataclass
class Player:
    """
    A player at the heads-up table.

    Attributes:
        player_id: Unique identifier for the player
        name: Display name
        chips: Chips behind (not yet in the pot)
        cards: Hole cards, empty or exactly 2
        current_bet: Amount put in during the current betting round
        is_small_blind / is_big_blind: Blind assignment for this hand
        has_folded: Player has folded this hand
        has_acted_this_round: Player has acted since the last raise
        is_human: Seat is driven by a person rather than the AI
    """
    player_id: str
    name: str
    chips: int
    cards: List[Card] = field(default_factory=list)
    current_bet: int = 0
    is_small_blind: bool = False
    is_big_blind: bool = False
    has_folded: bool = False
    has_acted_this_round: bool = False
    is_human: bool = True

    def reset_for_new_hand(self) -> None:
        """Reset player state for a new hand."""
        self.cards = []
        self.current_bet = 0
        self.has_folded = False
        self.has_acted_this_round = False

    def reset_for_new_round(self) -> None:
        """Reset player state for a new betting round (flop, turn, river)."""
        self.current_bet = 0
        self.has_acted_this_round = False

    def deal_card(self, card: Card) -> None:
        """Give the player one hole card."""
        if len(self.cards) >= 2:
            raise ValueError(f"Player {self.player_id} already holds two cards")
        self.cards.append(card)

    def commit(self, amount: int) -> int:
        """
        Move chips from the stack into the current bet.

        Returns:
            Amount committed (capped at the stack)
        """
        if amount <= 0:
            return 0
        actual = min(amount, self.chips)
        self.chips -= actual
        self.current_bet += actual
        return actual

    def fold(self) -> None:
        self.has_folded = True
        self.has_acted_this_round = True

    def award(self, amount: int) -> None:
        """Add pot winnings to the stack."""
        self.chips += amount

    @property
    def is_all_in(self) -> bool:
        """Still in the hand with no chips behind."""
        return not self.has_folded and self.chips == 0

    @property
    def blind_label(self) -> str:
        if self.is_small_blind:
            return "SB"
        if self.is_big_blind:
            return "BB"
        return ""

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "id": self.player_id,
            "name": self.name,
            "chips": self.chips,
            "bet": self.current_bet,
            "is_small_blind": self.is_small_blind,
            "is_big_blind": self.is_big_blind,
            "has_folded": self.has_folded,
            "has_acted": self.has_acted_this_round,
            "is_human": self.is_human,
            "card_count": len(self.cards),
        }

        if not hide_cards and self.cards:
            result["cards"] = [card.to_dict() for card in self.cards]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.player_id}, chips={self.chips}, "
            f"bet={self.current_bet}, folded={self.has_folded})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.cards) if self.cards else "??"
        return f"{self.name} [{cards_str}] ${self.chips}"
