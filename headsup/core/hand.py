"""
Hand Evaluation for heads-up Texas Hold'em.

evaluate_hand() takes a player's 2 hole cards plus up to 5 community cards
and returns the best 5-card PokerHand. Categories are tried strictly from the
strongest down, so the first one that matches is the best hand:

10. Royal Flush: A K Q J 10 of one suit
 9. Straight Flush: 5 consecutive cards of one suit
 8. Four of a Kind
 7. Full House
 6. Flush
 5. Straight
 4. Three of a Kind
 3. Two Pair
 2. One Pair
 1. High Card

Each PokerHand lists its cards by descending significance (the made group(s)
first, then kickers high to low), so two hands of the same category can be
compared position by position. In the wheel (A-2-3-4-5) the Ace plays low
and is listed last.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum

from headsup.core.card import Card, Rank, Suit


class HandType(str, Enum):
    """Hand categories."""
    ROYAL_FLUSH = "royal-flush"
    STRAIGHT_FLUSH = "straight-flush"
    FOUR_OF_A_KIND = "four-of-a-kind"
    FULL_HOUSE = "full-house"
    FLUSH = "flush"
    STRAIGHT = "straight"
    THREE_OF_A_KIND = "three-of-a-kind"
    TWO_PAIR = "two-pair"
    ONE_PAIR = "pair"
    HIGH_CARD = "high-card"


# Category strength, 1 (worst) to 10 (best)
HAND_RANKS = {
    HandType.ROYAL_FLUSH: 10,
    HandType.STRAIGHT_FLUSH: 9,
    HandType.FOUR_OF_A_KIND: 8,
    HandType.FULL_HOUSE: 7,
    HandType.FLUSH: 6,
    HandType.STRAIGHT: 5,
    HandType.THREE_OF_A_KIND: 4,
    HandType.TWO_PAIR: 3,
    HandType.ONE_PAIR: 2,
    HandType.HIGH_CARD: 1,
}

HAND_TYPE_NAMES = {
    HandType.ROYAL_FLUSH: "Royal Flush",
    HandType.STRAIGHT_FLUSH: "Straight Flush",
    HandType.FOUR_OF_A_KIND: "Four of a Kind",
    HandType.FULL_HOUSE: "Full House",
    HandType.FLUSH: "Flush",
    HandType.STRAIGHT: "Straight",
    HandType.THREE_OF_A_KIND: "Three of a Kind",
    HandType.TWO_PAIR: "Two Pair",
    HandType.ONE_PAIR: "One Pair",
    HandType.HIGH_CARD: "High Card",
}

HAND_SIZE = 5

# Cards that make up the category itself; the rest are kickers
MADE_CARDS = {
    HandType.ROYAL_FLUSH: 5,
    HandType.STRAIGHT_FLUSH: 5,
    HandType.FULL_HOUSE: 5,
    HandType.STRAIGHT: 5,
    HandType.FOUR_OF_A_KIND: 4,
    HandType.TWO_PAIR: 4,
    HandType.THREE_OF_A_KIND: 3,
    HandType.ONE_PAIR: 2,
}
WHEEL_RANKS = [Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO, Rank.ACE]


@dataclass(frozen=True)
class PokerHand:
    """
    The best hand found for a set of cards.

    Attributes:
        hand_type: Category of the hand
        rank: Category strength, 1 (high card) to 10 (royal flush)
        cards: Up to 5 cards ordered by descending significance
        description: Human-readable summary, e.g. "Pair of Kings"
    """
    hand_type: HandType
    rank: int
    cards: Tuple[Card, ...]
    description: str

    @property
    def name(self) -> str:
        return HAND_TYPE_NAMES[self.hand_type]

    def to_dict(self) -> dict:
        return {
            "type": self.hand_type.value,
            "rank": self.rank,
            "name": self.name,
            "cards": [c.to_dict() for c in self.cards],
            "description": self.description,
        }


def _make_hand(hand_type: HandType, cards: Sequence[Card], description: str) -> PokerHand:
    return PokerHand(hand_type, HAND_RANKS[hand_type], tuple(cards), description)


# ---------------------------------------------------------------------------
# Grouping helpers
# ---------------------------------------------------------------------------

def sort_by_rank(cards: Iterable[Card]) -> List[Card]:
    """Sort cards by rank, highest first."""
    return sorted(cards, key=lambda c: c.rank, reverse=True)


def group_by_rank(cards: Iterable[Card]) -> Dict[Rank, List[Card]]:
    groups: Dict[Rank, List[Card]] = defaultdict(list)
    for card in cards:
        groups[card.rank].append(card)
    return groups


def group_by_suit(cards: Iterable[Card]) -> Dict[Suit, List[Card]]:
    groups: Dict[Suit, List[Card]] = defaultdict(list)
    for card in cards:
        groups[card.suit].append(card)
    return groups


def _ranked_groups(cards: Sequence[Card]) -> List[List[Card]]:
    """Rank groups ordered by size, then by rank (both descending)."""
    groups = group_by_rank(cards)
    return sorted(groups.values(), key=lambda g: (len(g), g[0].rank), reverse=True)


def _kickers(cards: Sequence[Card], used: Sequence[Card], count: int) -> List[Card]:
    """Highest `count` cards not already part of the made hand."""
    return sort_by_rank(c for c in cards if c not in used)[:count]


def _find_straight(cards: Sequence[Card]) -> Optional[List[Card]]:
    """
    Find the highest 5-card straight among cards.

    Scans every window of 5 distinct ranks from the top, then falls back to
    the wheel. Returns the cards high to low (wheel: 5-4-3-2-A) or None.
    """
    by_rank: Dict[Rank, Card] = {}
    for card in sort_by_rank(cards):
        by_rank.setdefault(card.rank, card)

    unique_ranks = sorted(by_rank, reverse=True)
    for i in range(len(unique_ranks) - HAND_SIZE + 1):
        window = unique_ranks[i:i + HAND_SIZE]
        if window[0] - window[-1] == HAND_SIZE - 1:
            return [by_rank[r] for r in window]

    if all(r in by_rank for r in WHEEL_RANKS):
        return [by_rank[r] for r in WHEEL_RANKS]

    return None


# ---------------------------------------------------------------------------
# Category checks, strongest first. Each returns a PokerHand or None.
# ---------------------------------------------------------------------------

def find_royal_flush(cards: Sequence[Card]) -> Optional[PokerHand]:
    straight_flush = find_straight_flush(cards)
    if straight_flush and straight_flush.cards[0].rank == Rank.ACE:
        return _make_hand(HandType.ROYAL_FLUSH, straight_flush.cards, "Royal Flush")
    return None


def find_straight_flush(cards: Sequence[Card]) -> Optional[PokerHand]:
    best: Optional[List[Card]] = None
    for suit_cards in group_by_suit(cards).values():
        if len(suit_cards) < HAND_SIZE:
            continue
        straight = _find_straight(suit_cards)
        if straight and (best is None or straight[0].rank > best[0].rank):
            best = straight
    if best is None:
        return None
    return _make_hand(
        HandType.STRAIGHT_FLUSH, best,
        f"Straight Flush, {rank_name(best[0].rank)} high",
    )


def find_four_of_a_kind(cards: Sequence[Card]) -> Optional[PokerHand]:
    groups = _ranked_groups(cards)
    if not groups or len(groups[0]) < 4:
        return None
    quads = groups[0][:4]
    hand = quads + _kickers(cards, quads, 1)
    return _make_hand(
        HandType.FOUR_OF_A_KIND, hand,
        f"Four of a Kind, {plural_rank_name(quads[0].rank)}",
    )


def find_full_house(cards: Sequence[Card]) -> Optional[PokerHand]:
    groups = _ranked_groups(cards)
    if not groups or len(groups[0]) < 3:
        return None
    trips = groups[0][:3]
    pairs = sorted(
        (g for g in groups[1:] if len(g) >= 2),
        key=lambda g: g[0].rank, reverse=True,
    )
    if not pairs:
        return None
    pair = pairs[0][:2]
    return _make_hand(
        HandType.FULL_HOUSE, trips + pair,
        f"Full House, {plural_rank_name(trips[0].rank)} full of "
        f"{plural_rank_name(pair[0].rank)}",
    )


def find_flush(cards: Sequence[Card]) -> Optional[PokerHand]:
    best: Optional[List[Card]] = None
    for suit_cards in group_by_suit(cards).values():
        if len(suit_cards) < HAND_SIZE:
            continue
        top = sort_by_rank(suit_cards)[:HAND_SIZE]
        if best is None or [c.rank for c in top] > [c.rank for c in best]:
            best = top
    if best is None:
        return None
    return _make_hand(HandType.FLUSH, best, f"Flush, {rank_name(best[0].rank)} high")


def find_straight(cards: Sequence[Card]) -> Optional[PokerHand]:
    straight = _find_straight(cards)
    if straight is None:
        return None
    if straight[-1].rank == Rank.ACE:
        description = "Straight, Five high (Wheel)"
    else:
        description = f"Straight, {rank_name(straight[0].rank)} high"
    return _make_hand(HandType.STRAIGHT, straight, description)


def find_three_of_a_kind(cards: Sequence[Card]) -> Optional[PokerHand]:
    groups = _ranked_groups(cards)
    if not groups or len(groups[0]) < 3:
        return None
    trips = groups[0][:3]
    hand = trips + _kickers(cards, trips, 2)
    return _make_hand(
        HandType.THREE_OF_A_KIND, hand,
        f"Three of a Kind, {plural_rank_name(trips[0].rank)}",
    )


def find_two_pair(cards: Sequence[Card]) -> Optional[PokerHand]:
    pairs = sorted(
        (g for g in group_by_rank(cards).values() if len(g) >= 2),
        key=lambda g: g[0].rank, reverse=True,
    )
    if len(pairs) < 2:
        return None
    high_pair, low_pair = pairs[0][:2], pairs[1][:2]
    hand = high_pair + low_pair + _kickers(cards, high_pair + low_pair, 1)
    return _make_hand(
        HandType.TWO_PAIR, hand,
        f"Two Pair, {plural_rank_name(high_pair[0].rank)} and "
        f"{plural_rank_name(low_pair[0].rank)}",
    )


def find_one_pair(cards: Sequence[Card]) -> Optional[PokerHand]:
    groups = _ranked_groups(cards)
    if not groups or len(groups[0]) < 2:
        return None
    pair = groups[0][:2]
    hand = pair + _kickers(cards, pair, 3)
    return _make_hand(
        HandType.ONE_PAIR, hand, f"Pair of {plural_rank_name(pair[0].rank)}",
    )


def find_high_card(cards: Sequence[Card]) -> PokerHand:
    hand = sort_by_rank(cards)[:HAND_SIZE]
    description = f"High Card, {rank_name(hand[0].rank)}" if hand else "No cards"
    return _make_hand(HandType.HIGH_CARD, hand, description)


_CATEGORY_CHECKS = (
    find_royal_flush,
    find_straight_flush,
    find_four_of_a_kind,
    find_full_house,
    find_flush,
    find_straight,
    find_three_of_a_kind,
    find_two_pair,
    find_one_pair,
)


def evaluate_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card] = ()) -> PokerHand:
    """
    Evaluate the best hand from hole cards plus community cards.

    Args:
        hole_cards: The player's 2 private cards
        community_cards: 0-5 shared board cards

    Returns:
        The best PokerHand. With fewer than 5 cards in total the hand holds
        every card available and can only be a pair-type or high card hand.
    """
    all_cards = list(hole_cards) + list(community_cards)
    for check in _CATEGORY_CHECKS:
        hand = check(all_cards)
        if hand is not None:
            return hand
    return find_high_card(all_cards)


def compare_hands(hand1: PokerHand, hand2: PokerHand) -> int:
    """
    Compare two evaluated hands.

    Returns:
        1 if hand1 wins, -1 if hand2 wins, 0 if tie
    """
    if hand1.rank != hand2.rank:
        return 1 if hand1.rank > hand2.rank else -1

    for card1, card2 in zip(hand1.cards, hand2.cards):
        if card1.rank != card2.rank:
            return 1 if card1.rank > card2.rank else -1

    return 0


# ---------------------------------------------------------------------------
# Descriptions
# ---------------------------------------------------------------------------

def get_description_with_kicker(hand: PokerHand) -> str:
    """
    Hand description plus the kicker that matters for hands that have one.

    e.g. "Pair of Kings (Ace kicker)", "High Card, Ace (Queen kicker)"
    """
    if hand.hand_type == HandType.ONE_PAIR:
        kicker_index = 2
    elif hand.hand_type == HandType.TWO_PAIR:
        kicker_index = 4
    elif hand.hand_type == HandType.THREE_OF_A_KIND:
        kicker_index = 3
    elif hand.hand_type == HandType.HIGH_CARD:
        kicker_index = 1
    else:
        return hand.description

    if len(hand.cards) <= kicker_index:
        return hand.description
    return f"{hand.description} ({rank_name(hand.cards[kicker_index].rank)} kicker)"


def get_tiebreak_description(winner: PokerHand, loser: PokerHand) -> str:
    """
    Explain why `winner` beat `loser`.

    For different categories this is just the winning description. For the
    same category it names the first card that separated the hands, e.g.
    "Pair of Kings, Ace kicker beats Queen". Exact ties say so.
    """
    if winner.rank != loser.rank:
        return winner.description

    made = MADE_CARDS.get(winner.hand_type, 1)
    for i, (card1, card2) in enumerate(zip(winner.cards, loser.cards)):
        if card1.rank != card2.rank:
            if i < made:
                return winner.description
            return (
                f"{winner.description}, {rank_name(card1.rank)} kicker "
                f"beats {rank_name(card2.rank)}"
            )

    return f"{winner.description} (split pot)"


_RANK_NAMES = {
    Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
    Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
    Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
    Rank.ACE: "Ace",
}


def rank_name(rank: int) -> str:
    """Get the name of a rank."""
    return _RANK_NAMES[Rank(rank)]


def plural_rank_name(rank: int) -> str:
    name = rank_name(rank)
    return f"{name}es" if name == "Six" else f"{name}s"
