"""
Card and Deck classes for heads-up Texas Hold'em.

Cards carry their rank as the integer 2-14 (Ace high) so hand evaluation and
AI heuristics can do arithmetic on ranks directly, while suits are plain
string-valued enums that serialize cleanly for the presentation layer.
"""

from __future__ import annotations
import random
from typing import List, Optional
from enum import Enum, IntEnum


class Suit(str, Enum):
    """Card suits."""
    HEARTS = "hearts"      # ♥
    DIAMONDS = "diamonds"  # ♦
    CLUBS = "clubs"        # ♣
    SPADES = "spades"      # ♠


class Rank(IntEnum):
    """Card ranks from 2 (lowest) to Ace (14, highest)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


# String mappings
SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
    Suit.SPADES: "s",
}

DISPLAY_RANKS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Reverse mappings
CHAR_TO_RANK = {v: k for k, v in DISPLAY_RANKS.items()}
CHAR_TO_RANK["T"] = Rank.TEN  # Also accept "T"
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}

DECK_SIZE = 52


class Card:
    """
    An immutable playing card.

    Cards can be created from:
    - Rank and Suit: Card(Rank.ACE, Suit.SPADES) or Card(14, "spades")
    - String notation: Card.from_string("As"), Card.from_string("10♥")

    Two cards are equal when suit and rank match.
    """

    __slots__ = ("_rank", "_suit")

    def __init__(self, rank: int, suit: Suit):
        object.__setattr__(self, "_rank", Rank(rank))
        object.__setattr__(self, "_suit", Suit(suit))

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def display_rank(self) -> str:
        """Rank as shown on the card face: '2'..'10', 'J', 'Q', 'K', 'A'."""
        return DISPLAY_RANKS[self._rank]

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "10d", "2c" (rank + suit char)
        - "A♠", "K♥", "10♦", "2♣" (rank + suit symbol)
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_part = s[:-1].upper()
        suit_part = s[-1]

        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(CHAR_TO_RANK[rank_part], suit)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._rank == other._rank and self._suit == other._suit
        return False

    def __hash__(self) -> int:
        return hash((self._suit.value, int(self._rank)))

    def __lt__(self, other: Card) -> bool:
        """Compare by rank only (for sorting)."""
        return self._rank < other._rank

    def __repr__(self) -> str:
        return f"Card({self.display_rank}{SUIT_CHARS[self._suit]})"

    def __str__(self) -> str:
        return f"{self.display_rank}{SUIT_SYMBOLS[self._suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', '10h'."""
        return f"{self.display_rank}{SUIT_CHARS[self._suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self._suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "suit": self._suit.value,
            "rank": int(self._rank),
            "display_rank": self.display_rank,
            "text": str(self),
            "color": self.color,
        }


class Deck:
    """
    A standard 52-card deck, consumed from the top.

    Running out of cards is not an error: deal_card() returns None and
    deal_cards() returns however many cards were left.

    Usage:
        deck = Deck(rng=random.Random(7))
        deck.shuffle()
        hole_cards = deck.deal_cards(2)
        deck.burn()
        flop = deck.deal_cards(3)
    """

    def __init__(self, shuffle: bool = True, rng: Optional[random.Random] = None):
        """Initialize a new deck, optionally shuffled."""
        self._rng = rng if rng is not None else random.Random()
        self.reset()
        if shuffle:
            self.shuffle()

    def reset(self) -> None:
        """Reset the deck to a full 52 cards in order."""
        self._cards: List[Card] = [
            Card(rank, suit)
            for suit in Suit
            for rank in Rank
        ]
        self._dealt: List[Card] = []
        self._burned: List[Card] = []

    def shuffle(self) -> None:
        """Shuffle the remaining cards in place (Fisher-Yates)."""
        self._rng.shuffle(self._cards)

    def deal_card(self) -> Optional[Card]:
        """Deal the top card, or None if the deck is empty."""
        if not self._cards:
            return None
        card = self._cards.pop(0)
        self._dealt.append(card)
        return card

    def deal_cards(self, n: int = 1) -> List[Card]:
        """Deal up to n cards from the top of the deck."""
        dealt = []
        for _ in range(n):
            card = self.deal_card()
            if card is None:
                break
            dealt.append(card)
        return dealt

    def burn(self) -> Optional[Card]:
        """Burn (discard face down) the top card."""
        card = self.deal_card()
        if card is not None:
            self._burned.append(card)
        return card

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    @property
    def dealt_cards(self) -> List[Card]:
        """Cards that have left the deck, burns included."""
        return self._dealt.copy()

    @property
    def burned_cards(self) -> List[Card]:
        """Cards burned this hand."""
        return self._burned.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse space-separated cards, e.g. "Ah Kh 10h" or "A♥ K♥ T♥".
    """
    return [Card.from_string(s) for s in cards_str.split()]
