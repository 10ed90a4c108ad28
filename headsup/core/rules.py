"""
Heads-up Texas Hold'em Rules and Constants.

Table rules implemented by this engine:

1. Exactly two players. The dealer posts the small blind, the other player
   posts the big blind, and the blinds swap every hand.

2. Preflop the small blind acts first. On the flop, turn and river the big
   blind acts first.

3. A raise is a fixed increment on top of the amount needed to call. The
   increment must be at least the table minimum ($5), and the opponent must
   be able to afford to call the whole raise: nobody can be bet off their
   stack because there are no side pots.

4. A player who cannot cover the big blind after a pot is awarded has lost
   the match.
"""

from enum import Enum
from dataclasses import dataclass


class GamePhase(str, Enum):
    """Phases of a hand."""
    WAITING = "waiting"      # Between hands
    PREFLOP = "preflop"      # After hole cards dealt, before flop
    FLOP = "flop"            # After 3 community cards
    TURN = "turn"            # After 4th community card
    RIVER = "river"          # After 5th community card
    SHOWDOWN = "showdown"    # Hand decided, pot awarded


class ActionType(str, Enum):
    """Possible player actions. A call of 0 is a check."""
    FOLD = "fold"
    CALL = "call"
    RAISE = "raise"


class ActionError(str, Enum):
    """Reasons an action can be rejected."""
    OUT_OF_TURN = "OutOfTurn"
    ALREADY_ACTED = "AlreadyActed"
    ALREADY_FOLDED = "AlreadyFolded"
    INVALID_PHASE = "InvalidPhaseForAction"
    INSUFFICIENT_CHIPS_TO_CALL = "InsufficientChipsToCall"
    RAISE_BELOW_MINIMUM = "RaiseBelowMinimumIncrement"
    RAISE_EXCEEDS_OWN_STACK = "RaiseExceedsOwnStack"
    RAISE_EXCEEDS_OPPONENT_COVERAGE = "RaiseExceedsOpponentCoverage"


BETTING_PHASES = (GamePhase.PREFLOP, GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER)

# Phase that follows each betting round
NEXT_PHASE = {
    GamePhase.PREFLOP: GamePhase.FLOP,
    GamePhase.FLOP: GamePhase.TURN,
    GamePhase.TURN: GamePhase.RIVER,
    GamePhase.RIVER: GamePhase.SHOWDOWN,
}

# Default table settings
DEFAULT_STARTING_STACK = 100
DEFAULT_SMALL_BLIND = 5
DEFAULT_BIG_BLIND = 10
DEFAULT_MIN_RAISE_INCREMENT = 5
DEFAULT_BUST_THRESHOLD = 10
NUM_PLAYERS = 2

# Cards per phase
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Community cards dealt when entering each phase
CARDS_FOR_PHASE = {
    GamePhase.FLOP: FLOP_CARDS,
    GamePhase.TURN: TURN_CARDS,
    GamePhase.RIVER: RIVER_CARDS,
}


@dataclass
class TableConfig:
    """Stakes and limits for a match."""
    starting_stack: int = DEFAULT_STARTING_STACK
    small_blind: int = DEFAULT_SMALL_BLIND
    big_blind: int = DEFAULT_BIG_BLIND
    min_raise_increment: int = DEFAULT_MIN_RAISE_INCREMENT
    bust_threshold: int = DEFAULT_BUST_THRESHOLD

    def __post_init__(self):
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.small_blind > self.big_blind:
            raise ValueError("Small blind cannot exceed big blind")
        if self.min_raise_increment <= 0:
            raise ValueError("Minimum raise increment must be positive")
        if self.starting_stack < self.big_blind:
            raise ValueError("Starting stack must cover the big blind")
        if self.bust_threshold < 0:
            raise ValueError("Bust threshold cannot be negative")

    @property
    def total_bankroll(self) -> int:
        """Chips in play for the whole match."""
        return self.starting_stack * NUM_PLAYERS


def is_betting_phase(phase: GamePhase) -> bool:
    return phase in BETTING_PHASES


def round_to_increment(amount: int, increment: int) -> int:
    """Round an amount down to a multiple of the table increment (at least one increment)."""
    return max(increment, (int(amount) // increment) * increment)
