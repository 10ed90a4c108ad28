"""
Betting validation and turn order for heads-up play.

Validators are pure: they look at players and table state and return either
an approval carrying the computed chip amounts for that action kind, or a
Rejected with the error code and a message for the player. Nothing here
mutates a Player; HeadsUpGame applies approved actions.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass, field
import logging

from headsup.core.player import Player
from headsup.core.rules import (
    GamePhase, ActionError, is_betting_phase, DEFAULT_MIN_RAISE_INCREMENT,
)


logger = logging.getLogger(__name__)


class ChipConservationError(AssertionError):
    """Chips plus pot no longer add up to the match bankroll."""


@dataclass(frozen=True)
class Rejected:
    """An action that failed validation."""
    error: ActionError
    reason: str
    valid: bool = field(default=False, init=False)


@dataclass(frozen=True)
class FoldApproved:
    valid: bool = field(default=True, init=False)


@dataclass(frozen=True)
class CallApproved:
    """A legal call; call_amount 0 is a check."""
    call_amount: int
    valid: bool = field(default=True, init=False)

    @property
    def is_check(self) -> bool:
        return self.call_amount == 0


@dataclass(frozen=True)
class RaiseApproved:
    """A legal raise: call_amount to match, then raise_increment on top."""
    call_amount: int
    raise_increment: int
    total_amount: int
    valid: bool = field(default=True, init=False)


FoldValidation = Union[FoldApproved, Rejected]
CallValidation = Union[CallApproved, Rejected]
RaiseValidation = Union[RaiseApproved, Rejected]


@dataclass(frozen=True)
class ChipAudit:
    """Outcome of a chip accounting check."""
    valid: bool
    total: int
    expected: int


def get_call_amount(player: Player, current_bet: int) -> int:
    """Chips the player needs to put in to match the current bet."""
    return max(0, current_bet - player.current_bet)


def get_opponent(player: Player, players: Sequence[Player]) -> Optional[Player]:
    """The other unfolded player, if any."""
    for other in players:
        if other.player_id != player.player_id and not other.has_folded:
            return other
    return None


def validate_fold(player: Player, phase: GamePhase) -> FoldValidation:
    if not is_betting_phase(phase):
        return Rejected(ActionError.INVALID_PHASE, "Cannot fold outside of betting rounds")
    if player.has_folded:
        return Rejected(ActionError.ALREADY_FOLDED, "Player has already folded")
    return FoldApproved()


def validate_call(player: Player, current_bet: int, phase: GamePhase) -> CallValidation:
    if not is_betting_phase(phase):
        return Rejected(ActionError.INVALID_PHASE, "Cannot call outside of betting rounds")
    if player.has_folded:
        return Rejected(ActionError.ALREADY_FOLDED, "Player has already folded")

    call_amount = get_call_amount(player, current_bet)
    if call_amount > player.chips:
        return Rejected(
            ActionError.INSUFFICIENT_CHIPS_TO_CALL,
            f"Insufficient chips. Need ${call_amount} to call, but only have ${player.chips}",
        )
    return CallApproved(call_amount)


def _parse_increment(value) -> Optional[int]:
    """Read a raise increment typed as int, float or text; None if not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def validate_raise(
    player: Player,
    current_bet: int,
    raise_increment,
    phase: GamePhase,
    players: Sequence[Player],
    min_increment: int = DEFAULT_MIN_RAISE_INCREMENT,
) -> RaiseValidation:
    """
    Validate a raise of `raise_increment` chips on top of a call.

    The raise is capped twice: by the raiser's own stack (call plus increment)
    and by what the opponent has left to call it with.
    """
    if not is_betting_phase(phase):
        return Rejected(ActionError.INVALID_PHASE, "Cannot raise outside of betting rounds")
    if player.has_folded:
        return Rejected(ActionError.ALREADY_FOLDED, "Player has already folded")
    if player.chips == 0:
        return Rejected(ActionError.RAISE_EXCEEDS_OWN_STACK, "No funds remaining")

    increment = _parse_increment(raise_increment)
    if increment is None or increment < min_increment:
        return Rejected(
            ActionError.RAISE_BELOW_MINIMUM,
            f"Raise amount must be at least ${min_increment}",
        )

    call_amount = get_call_amount(player, current_bet)
    total_amount = call_amount + increment
    if total_amount > player.chips:
        return Rejected(
            ActionError.RAISE_EXCEEDS_OWN_STACK,
            f"Insufficient chips. Need ${total_amount} to raise, but only have ${player.chips}",
        )

    opponent = get_opponent(player, players)
    if opponent is not None:
        opponent_to_call = get_call_amount(opponent, current_bet) + increment
        if opponent_to_call > opponent.chips:
            max_increment = opponent.chips - get_call_amount(opponent, current_bet)
            return Rejected(
                ActionError.RAISE_EXCEEDS_OPPONENT_COVERAGE,
                f"Raise too large. Opponent can only afford to call ${max(0, max_increment)} more. "
                f"Maximum raise: ${max(0, max_increment)}",
            )

    return RaiseApproved(call_amount, increment, total_amount)


def get_raise_bounds(
    player: Player,
    current_bet: int,
    players: Sequence[Player],
    min_increment: int = DEFAULT_MIN_RAISE_INCREMENT,
) -> Optional[Tuple[int, int]]:
    """
    Legal raise increments for the player as (min, max), or None if the
    player cannot raise at all.
    """
    if player.has_folded or player.chips == 0:
        return None
    call_amount = get_call_amount(player, current_bet)
    max_increment = player.chips - call_amount
    opponent = get_opponent(player, players)
    if opponent is not None:
        max_increment = min(max_increment, opponent.chips - get_call_amount(opponent, current_bet))
    if max_increment < min_increment:
        return None
    return min_increment, max_increment


def is_betting_round_complete(players: Sequence[Player], current_bet: int) -> bool:
    """
    A round is complete when at most one player is left, or every unfolded
    player has acted and matched the current bet.
    """
    active_players = [p for p in players if not p.has_folded]
    if len(active_players) <= 1:
        return True
    return all(
        p.has_acted_this_round and p.current_bet == current_bet
        for p in active_players
    )


def get_first_player_index(players: Sequence[Player], phase: GamePhase) -> Optional[int]:
    """
    Seat index of the first player to act in a betting round.

    Heads-up: the small blind acts first preflop, the big blind acts first
    on every later street.
    """
    active = [i for i, p in enumerate(players) if not p.has_folded]
    if not active:
        return None

    for i in active:
        player = players[i]
        if phase == GamePhase.PREFLOP and player.is_small_blind:
            return i
        if phase != GamePhase.PREFLOP and player.is_big_blind:
            return i

    return active[0]


def get_next_active_player_index(players: Sequence[Player], current_index: int) -> Optional[int]:
    """Next unfolded seat after current_index, or None if one player (or none) is left."""
    if sum(1 for p in players if not p.has_folded) <= 1:
        return None

    num_players = len(players)
    for step in range(1, num_players + 1):
        index = (current_index + step) % num_players
        if not players[index].has_folded:
            return index
    return None


def reset_actions_except(players: List[Player], raiser_index: int) -> None:
    """A raise reopens the action for everyone else still in the hand."""
    for i, player in enumerate(players):
        if i != raiser_index and not player.has_folded:
            player.has_acted_this_round = False


def verify_chip_accounting(players: Sequence[Player], pot: int, expected_total: int) -> ChipAudit:
    total = sum(p.chips for p in players) + pot
    return ChipAudit(valid=total == expected_total, total=total, expected=expected_total)


def assert_chip_conservation(
    players: Sequence[Player], pot: int, expected_total: int, context: str
) -> None:
    """Raise ChipConservationError if chips were created or lost."""
    audit = verify_chip_accounting(players, pot, expected_total)
    if not audit.valid:
        logger.error(
            f"Chip accounting broken after {context}: "
            f"total={audit.total} expected={audit.expected}"
        )
        raise ChipConservationError(
            f"Chip accounting broken after {context}: "
            f"{audit.total} in play, expected {audit.expected}"
        )
