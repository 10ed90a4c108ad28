"""
Heuristic AI opponent.

make_decision() is a pure function of what the AI can see: its own hole
cards and chips, the board, the bet it faces and the pot. It estimates a hand
strength between 0 and 1, weighs it against pot odds and the personality's
thresholds, and returns fold, call or raise with a short reasoning string.

Randomness only picks between raise and call for strong hands and decides
bluffs. Pass a seeded random.Random (or any object with a random() method)
to make decisions reproducible.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence
from collections import Counter
from dataclasses import dataclass
from enum import Enum
import logging
import random

from headsup.core.card import Card, Rank
from headsup.core.hand import evaluate_hand
from headsup.core.player import Player
from headsup.core.rules import GamePhase


logger = logging.getLogger(__name__)


class Personality(str, Enum):
    AGGRESSIVE = "aggressive"
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"


class AIAction(str, Enum):
    FOLD = "fold"
    CALL = "call"
    RAISE = "raise"


@dataclass(frozen=True)
class AIDecision:
    """
    An AI decision.

    Attributes:
        action: fold, call (a check when nothing is owed) or raise
        amount: Raise increment on top of the call, for raises only
        reasoning: Why the AI chose this, for display and logs
    """
    action: AIAction
    reasoning: str
    amount: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "action": self.action.value,
            "amount": self.amount,
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True)
class Thresholds:
    raise_: float
    call: float
    fold: float


PERSONALITY_THRESHOLDS = {
    Personality.AGGRESSIVE: Thresholds(raise_=0.6, call=0.3, fold=0.1),
    Personality.CONSERVATIVE: Thresholds(raise_=0.8, call=0.5, fold=0.2),
    Personality.BALANCED: Thresholds(raise_=0.7, call=0.4, fold=0.15),
}

RAISE_SIZE_MULTIPLIERS = {
    Personality.AGGRESSIVE: 1.5,
    Personality.CONSERVATIVE: 0.7,
    Personality.BALANCED: 1.0,
}

# Chance to keep calling a medium hand the pot odds say to fold
BLUFF_CALL_CHANCE = {
    Personality.AGGRESSIVE: 0.3,
    Personality.CONSERVATIVE: 0.05,
    Personality.BALANCED: 0.15,
}

# Chance to raise a near-hopeless hand late in the hand
BLUFF_RAISE_CHANCE = {
    Personality.AGGRESSIVE: 0.2,
    Personality.CONSERVATIVE: 0.05,
    Personality.BALANCED: 0.05,
}

# Rough showdown equity of each hand category (PokerHand.rank 1-10)
CATEGORY_EQUITY = {
    10: 1.0,   # Royal Flush
    9: 0.98,   # Straight Flush
    8: 0.95,   # Four of a Kind
    7: 0.90,   # Full House
    6: 0.85,   # Flush
    5: 0.75,   # Straight
    4: 0.65,   # Three of a Kind
    3: 0.55,   # Two Pair
    2: 0.45,   # One Pair
    1: 0.35,   # High Card
}

# Community cards visible to the AI in each phase
VISIBLE_BOARD = {
    GamePhase.WAITING: 0,
    GamePhase.PREFLOP: 0,
    GamePhase.FLOP: 3,
    GamePhase.TURN: 4,
    GamePhase.RIVER: 5,
    GamePhase.SHOWDOWN: 5,
}

FLUSH_DRAW_OUTS = 9
OPEN_ENDED_STRAIGHT_OUTS = 8
STRONG_DRAW_OUTS = 20
BLUFF_MAX_STRENGTH = 0.2
BLUFF_MAX_POT_ODDS = 0.3


def make_decision(
    player: Player,
    community_cards: Sequence[Card],
    current_bet: int,
    pot: int,
    phase: GamePhase,
    active_players_count: int,
    personality: Personality = Personality.BALANCED,
    rng=None,
) -> AIDecision:
    """
    Decide the AI's next action.

    Args:
        player: The AI player (its cards, chips and current bet)
        community_cards: Board cards dealt so far
        current_bet: Highest bet in the current round
        pot: Chips in the pot, current-round bets included
        phase: Current phase
        active_players_count: Players who have not folded
        personality: Risk profile driving thresholds and sizing
        rng: Source of random() for raise and bluff rolls

    Returns:
        An AIDecision. Never raises.
    """
    rng = rng if rng is not None else random
    personality = Personality(personality)
    phase = GamePhase(phase)

    if len(player.cards) != 2:
        return AIDecision(AIAction.CALL, "No cards to evaluate - defaulting to call")

    strength = evaluate_hand_strength(player.cards, community_cards, phase)
    call_amount = max(0, current_bet - player.current_bet)
    pot_odds = calculate_pot_odds(call_amount, pot)

    decision = _decide_action(
        strength, pot_odds, call_amount, player.chips,
        phase, active_players_count, personality, rng,
    )
    logger.debug(
        f"AI {player.player_id} ({personality.value}) strength={strength:.2f} "
        f"pot_odds={pot_odds:.2f} -> {decision.action.value}: {decision.reasoning}"
    )
    return decision


def evaluate_hand_strength(
    hole_cards: Sequence[Card], community_cards: Sequence[Card], phase: GamePhase
) -> float:
    """Hand strength in [0, 1]: category equity times the phase's potential factor."""
    if len(hole_cards) != 2:
        return 0.0

    board = list(community_cards)[:VISIBLE_BOARD[phase]]
    hand = evaluate_hand(hole_cards, board)
    base = CATEGORY_EQUITY[hand.rank]

    if phase == GamePhase.PREFLOP:
        potential = preflop_potential(hole_cards)
    elif phase in (GamePhase.FLOP, GamePhase.TURN):
        potential = postflop_potential(hole_cards, board)
    else:
        potential = 1.0

    return min(1.0, max(0.0, base * potential))


def preflop_potential(hole_cards: Sequence[Card]) -> float:
    """Starting hand multiplier: premium pairs and big aces highest, junk lowest."""
    card1, card2 = hole_cards
    suited = card1.suit == card2.suit
    pair = card1.rank == card2.rank
    high = max(card1.rank, card2.rank)
    low = min(card1.rank, card2.rank)
    connected = high - low <= 4

    if pair and high >= Rank.JACK:
        return 1.5
    if high == Rank.ACE and low >= Rank.TEN:
        return 1.4
    if pair and high >= Rank.EIGHT:
        return 1.3
    if suited and high >= Rank.QUEEN and low >= Rank.TEN:
        return 1.3
    if suited and connected:
        return 1.2
    if pair:
        return 1.1
    if high >= Rank.QUEEN:
        return 1.0
    if suited:
        return 0.9
    if connected:
        return 0.8
    return 0.6


def postflop_potential(hole_cards: Sequence[Card], board: Sequence[Card]) -> float:
    """Draw multiplier between 0.8 (no draw) and 1.2 (20+ outs)."""
    outs = count_outs(hole_cards, board)
    return 0.8 + min(1.0, outs / STRONG_DRAW_OUTS) * 0.4


def count_outs(hole_cards: Sequence[Card], board: Sequence[Card]) -> int:
    """Outs for a flush draw and an open-ended straight draw that use a hole card."""
    all_cards = list(hole_cards) + list(board)
    outs = 0

    suit_counts = Counter(c.suit for c in all_cards)
    for suit, count in suit_counts.items():
        if count >= 4 and any(c.suit == suit for c in hole_cards):
            outs += FLUSH_DRAW_OUTS
            break

    if _has_open_ended_draw(hole_cards, all_cards):
        outs += OPEN_ENDED_STRAIGHT_OUTS

    return outs


def _has_open_ended_draw(hole_cards: Sequence[Card], all_cards: List[Card]) -> bool:
    """Four consecutive ranks, open at the top, that include a hole card."""
    ranks = sorted({c.rank for c in all_cards})
    hole_ranks = {c.rank for c in hole_cards}
    for i in range(len(ranks) - 3):
        run = ranks[i:i + 4]
        if run[3] - run[0] != 3 or run[3] == Rank.ACE:
            continue
        if hole_ranks.intersection(run):
            return True
    return False


def calculate_pot_odds(call_amount: int, pot: int) -> float:
    """Share of the final pot the call would be; 0 when the check is free."""
    if call_amount <= 0:
        return 0.0
    return call_amount / (pot + call_amount)


def calculate_raise_amount(
    call_amount: int, chips: int, strength: float, personality: Personality
) -> int:
    """Raise increment scaled by strength and personality, floored to an int."""
    min_raise = call_amount + 1
    max_raise = min(chips - call_amount, call_amount * 4)
    if max_raise <= min_raise:
        return min_raise

    target = call_amount * (1 + 2 * strength) * RAISE_SIZE_MULTIPLIERS[personality]
    return int(max(min_raise, min(max_raise, target)))


def _should_raise(
    strength: float, call_amount: int, chips: int, phase: GamePhase,
    personality: Personality, rng,
) -> bool:
    if call_amount * 3 > chips:
        return False

    probability = strength * (1.2 if phase == GamePhase.PREFLOP else 0.8)
    if personality == Personality.AGGRESSIVE:
        probability = min(0.8, probability + 0.2)
    elif personality == Personality.CONSERVATIVE:
        probability = max(0.1, probability - 0.2)

    return rng.random() < probability


def _is_bluff_opportunity(
    phase: GamePhase, active_players_count: int, personality: Personality, rng
) -> bool:
    if phase == GamePhase.PREFLOP or active_players_count != 2:
        return False
    return rng.random() < BLUFF_CALL_CHANCE[personality]


def _should_bluff_raise(
    strength: float, phase: GamePhase, active_players_count: int,
    pot_odds: float, personality: Personality, rng,
) -> bool:
    if strength > BLUFF_MAX_STRENGTH:
        return False
    if phase not in (GamePhase.TURN, GamePhase.RIVER):
        return False
    if active_players_count != 2 or pot_odds > BLUFF_MAX_POT_ODDS:
        return False
    return rng.random() < BLUFF_RAISE_CHANCE[personality]


def _decide_action(
    strength: float,
    pot_odds: float,
    call_amount: int,
    chips: int,
    phase: GamePhase,
    active_players_count: int,
    personality: Personality,
    rng,
) -> AIDecision:
    thresholds = PERSONALITY_THRESHOLDS[personality]
    pct = f"{strength * 100:.0f}%"

    if call_amount > chips:
        return AIDecision(AIAction.FOLD, "Insufficient chips to call")

    if strength >= thresholds.raise_:
        if _should_raise(strength, call_amount, chips, phase, personality, rng):
            return AIDecision(
                AIAction.RAISE,
                f"Strong hand ({pct} strength) - raising",
                calculate_raise_amount(call_amount, chips, strength, personality),
            )
        return AIDecision(AIAction.CALL, f"Strong hand ({pct} strength) - calling")

    if strength >= thresholds.call:
        if strength >= pot_odds:
            return AIDecision(
                AIAction.CALL, f"Decent hand ({pct} strength) - calling to see more cards"
            )
        if _is_bluff_opportunity(phase, active_players_count, personality, rng):
            return AIDecision(
                AIAction.CALL, f"Decent hand ({pct} strength) - floating despite pot odds"
            )
        return AIDecision(
            AIAction.FOLD, f"Decent hand ({pct} strength) but pot odds too steep - folding"
        )

    if call_amount == 0:
        return AIDecision(AIAction.CALL, f"Weak hand ({pct} strength) - checking for free")

    if _should_bluff_raise(strength, phase, active_players_count, pot_odds, personality, rng):
        return AIDecision(
            AIAction.RAISE,
            f"Weak hand ({pct} strength) - bluffing",
            calculate_raise_amount(call_amount, chips, strength, personality),
        )

    if strength >= thresholds.fold:
        return AIDecision(
            AIAction.CALL, f"Weak hand ({pct} strength) - calling to see if it improves"
        )

    return AIDecision(AIAction.FOLD, "Very weak hand and poor pot odds - folding")


def decision_summary(decisions: Sequence[AIDecision]) -> Dict[str, int]:
    """Count decisions by action, for self-play reports."""
    counts = Counter(d.action.value for d in decisions)
    return {action.value: counts.get(action.value, 0) for action in AIAction}
