"""
Heads-Up Texas Hold'em Game Engine - State Machine Implementation.

This module implements the hand and match flow for a two-player game:
- Blind rotation and posting, hole card dealing
- Turn order and action validation (fold, call/check, raise)
- Phase advancement with burn cards, all-in run-outs
- Showdown, pot award and split pots
- Bust-out detection at the end of each hand

Every transition runs synchronously and returns the ordered list of events
it produced (cards dealt, phases entered, pots awarded) so a UI can animate
them at its own pace. Chips plus pot always add up to the match bankroll;
a transition that breaks this raises ChipConservationError.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Tuple, Any, Sequence
from dataclasses import dataclass, field
from enum import Enum
import logging
import random

from headsup.core.card import Card, Deck
from headsup.core.player import Player
from headsup.core.hand import (
    PokerHand, evaluate_hand, compare_hands,
    get_description_with_kicker, get_tiebreak_description,
)
from headsup.core.rules import (
    GamePhase, ActionType, ActionError, TableConfig,
    NEXT_PHASE, CARDS_FOR_PHASE, HOLE_CARDS, TOTAL_COMMUNITY_CARDS,
    is_betting_phase, round_to_increment,
)
from headsup.core.betting import (
    Rejected, CallApproved, RaiseApproved,
    validate_fold, validate_call, validate_raise, get_raise_bounds,
    get_call_amount, is_betting_round_complete,
    get_first_player_index, get_next_active_player_index,
    reset_actions_except, assert_chip_conservation,
)
from headsup.agents.heuristic import (
    AIAction, AIDecision, Personality, make_decision,
)


logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Things that happen during a hand, in the order they happen."""
    HAND_STARTED = "hand_started"
    BLIND_POSTED = "blind_posted"
    HOLE_CARD_DEALT = "hole_card_dealt"
    PLAYER_ACTED = "player_acted"
    PHASE_CHANGED = "phase_changed"
    CARD_BURNED = "card_burned"
    COMMUNITY_DEALT = "community_dealt"
    HANDS_REVEALED = "hands_revealed"
    POT_AWARDED = "pot_awarded"
    MATCH_OVER = "match_over"


@dataclass
class GameEvent:
    """One observable step of a transition."""
    type: EventType
    phase: GamePhase
    player_id: Optional[str] = None
    cards: List[Card] = field(default_factory=list)
    amount: int = 0
    message: str = ""

    def to_dict(self, viewer_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Burned cards and other players' hole cards are hidden when a
        viewer is given.
        """
        hidden = viewer_id is not None and (
            self.type == EventType.CARD_BURNED
            or (self.type == EventType.HOLE_CARD_DEALT and self.player_id != viewer_id)
        )
        return {
            "type": self.type.value,
            "phase": self.phase.value,
            "player_id": self.player_id,
            "cards": [] if hidden else [c.to_dict() for c in self.cards],
            "amount": self.amount,
            "message": self.message,
        }


@dataclass
class ActionResult:
    """Result of starting a hand or applying an action."""
    success: bool
    message: str
    error: Optional[ActionError] = None
    action_type: Optional[ActionType] = None
    amount: int = 0
    events: List[GameEvent] = field(default_factory=list)
    decision: Optional[AIDecision] = None


@dataclass
class HandResult:
    """How a finished hand was decided."""
    winners: List[str]
    pot_amount: int
    awards: Dict[str, int]
    showdown: bool = False
    is_tie: bool = False
    hands: Dict[str, PokerHand] = field(default_factory=dict)
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winners": list(self.winners),
            "pot": self.pot_amount,
            "awards": dict(self.awards),
            "showdown": self.showdown,
            "is_tie": self.is_tie,
            "hands": {
                pid: {**hand.to_dict(), "detail": get_description_with_kicker(hand)}
                for pid, hand in self.hands.items()
            },
            "description": self.description,
        }


class HeadsUpGame:
    """
    Heads-up Texas Hold'em match implementing a state machine.

    Usage:
        game = HeadsUpGame(personality=Personality.BALANCED)
        game.start_hand()

        while game.is_hand_running():
            player = game.current_player
            if player.is_human:
                result = game.apply_action(player.player_id, ActionType.CALL)
            else:
                result = game.play_ai_turn()

        print(game.last_result.description)
    """

    def __init__(
        self,
        config: Optional[TableConfig] = None,
        player_ids: Sequence[str] = ("human", "ai"),
        player_names: Optional[Sequence[str]] = None,
        ai_player_ids: Sequence[str] = ("ai",),
        dealer_first: Optional[str] = None,
        personality: Personality = Personality.BALANCED,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a new match.

        Args:
            config: Stakes and limits (defaults: $100 stacks, $5/$10 blinds)
            player_ids: Exactly two player IDs, in seat order
            player_names: Display names, defaults to the IDs
            ai_player_ids: Seats driven by the AI
            dealer_first: Player who has the button (and small blind) on hand 1
            personality: AI personality
            rng: Random source for shuffling and AI decisions
        """
        if len(player_ids) != 2 or len(set(player_ids)) != 2:
            raise ValueError("Heads-up play needs exactly two distinct players")
        if player_names is None:
            player_names = list(player_ids)
        if len(player_names) != 2:
            raise ValueError("Need a name for each player")

        self.config = config or TableConfig()
        self.personality = Personality(personality)
        self.rng = rng if rng is not None else random.Random()

        self.players: List[Player] = [
            Player(
                player_id=pid,
                name=name,
                chips=self.config.starting_stack,
                is_human=pid not in ai_player_ids,
            )
            for pid, name in zip(player_ids, player_names)
        ]
        self.total_bankroll = sum(p.chips for p in self.players)

        if dealer_first is None:
            dealer_first = player_ids[0]
        dealer_index = self._index_of(dealer_first)
        if dealer_index is None:
            raise ValueError(f"Unknown dealer: {dealer_first}")
        self.players[dealer_index].is_small_blind = True
        self.players[1 - dealer_index].is_big_blind = True

        # Game state
        self.deck = Deck(shuffle=False, rng=self.rng)
        self.community_cards: List[Card] = []
        self.phase = GamePhase.WAITING
        self.hand_number = 0
        self.pot = 0
        self.current_bet = 0
        self.current_player_index: Optional[int] = None

        # Outcome tracking
        self.last_result: Optional[HandResult] = None
        self.game_over = False
        self.overall_winner: Optional[Player] = None

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if not self.is_hand_running() or self.current_player_index is None:
            return None
        return self.players[self.current_player_index]

    @property
    def small_blind_player(self) -> Player:
        return next(p for p in self.players if p.is_small_blind)

    @property
    def big_blind_player(self) -> Player:
        return next(p for p in self.players if p.is_big_blind)

    @property
    def num_active_players(self) -> int:
        """Number of players who have not folded."""
        return sum(1 for p in self.players if not p.has_folded)

    @property
    def burned_cards(self) -> List[Card]:
        return self.deck.burned_cards

    @property
    def is_game_over(self) -> bool:
        return self.game_over

    def is_hand_running(self) -> bool:
        """Check if a betting round is in progress."""
        return is_betting_phase(self.phase)

    def get_player(self, player_id: str) -> Optional[Player]:
        index = self._index_of(player_id)
        return self.players[index] if index is not None else None

    def _index_of(self, player_id: str) -> Optional[int]:
        for i, player in enumerate(self.players):
            if player.player_id == player_id:
                return i
        return None

    # ------------------------------------------------------------------
    # Hand setup
    # ------------------------------------------------------------------

    def start_hand(self) -> ActionResult:
        """
        Start a new hand: rotate blinds, post them, deal hole cards.

        Returns:
            ActionResult with the setup events, or a failure if the match
            is over or a hand is still being played.
        """
        if self.game_over:
            return ActionResult(False, "Match is over", ActionError.INVALID_PHASE)
        if self.is_hand_running():
            return ActionResult(False, "Hand already in progress", ActionError.INVALID_PHASE)

        events: List[GameEvent] = []
        self.hand_number += 1
        if self.hand_number > 1:
            self._rotate_blinds()

        self.phase = GamePhase.WAITING
        self.deck.reset()
        self.deck.shuffle()
        self.community_cards = []
        self.pot = 0
        self.current_bet = 0
        self.last_result = None
        for player in self.players:
            player.reset_for_new_hand()

        sb_player = self.small_blind_player
        bb_player = self.big_blind_player
        logger.info(
            f"Starting hand #{self.hand_number} "
            f"(SB={sb_player.player_id}, BB={bb_player.player_id})"
        )
        events.append(GameEvent(
            EventType.HAND_STARTED, self.phase,
            message=f"Hand #{self.hand_number}",
        ))

        self._post_blinds(events)
        self._deal_hole_cards(events)

        self.phase = GamePhase.PREFLOP
        events.append(GameEvent(EventType.PHASE_CHANGED, self.phase, message="Preflop"))
        self.current_player_index = get_first_player_index(self.players, self.phase)

        self._check_chips("start_hand")
        return ActionResult(True, f"Hand #{self.hand_number} started", events=events)

    def _rotate_blinds(self) -> None:
        """Swap small and big blind between the two players."""
        for player in self.players:
            player.is_small_blind, player.is_big_blind = player.is_big_blind, player.is_small_blind

    def _post_blinds(self, events: List[GameEvent]) -> None:
        """Post small and big blinds."""
        for player, blind in (
            (self.small_blind_player, self.config.small_blind),
            (self.big_blind_player, self.config.big_blind),
        ):
            posted = player.commit(blind)
            self.pot += posted
            events.append(GameEvent(
                EventType.BLIND_POSTED, self.phase, player.player_id,
                amount=posted, message=f"{player.name} posts {player.blind_label} ${posted}",
            ))

        self.current_bet = max(p.current_bet for p in self.players)
        logger.debug(f"Blinds posted: pot={self.pot} current_bet={self.current_bet}")

    def _deal_hole_cards(self, events: List[GameEvent]) -> None:
        """Deal one card at a time, big blind first."""
        order = [self.big_blind_player, self.small_blind_player]
        for _ in range(HOLE_CARDS):
            for player in order:
                card = self.deck.deal_card()
                player.deal_card(card)
                events.append(GameEvent(
                    EventType.HOLE_CARD_DEALT, self.phase, player.player_id, cards=[card],
                ))

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def apply_action(self, player_id: str, action_type, amount=0) -> ActionResult:
        """
        Process a player action.

        Args:
            player_id: Player taking the action
            action_type: FOLD, CALL (a check when nothing is owed) or RAISE
            amount: For RAISE, the increment on top of the call

        Returns:
            ActionResult; on failure the game state is unchanged
        """
        try:
            action_type = ActionType(action_type)
        except ValueError:
            return ActionResult(False, f"Unknown action: {action_type}")

        if not self.is_hand_running():
            return self._reject(Rejected(ActionError.INVALID_PHASE, "No hand in progress"))

        index = self._index_of(player_id)
        if index is None:
            return self._reject(Rejected(ActionError.OUT_OF_TURN, f"Unknown player: {player_id}"))
        if index != self.current_player_index:
            return self._reject(Rejected(ActionError.OUT_OF_TURN, "It is not your turn"))

        player = self.players[index]
        if player.has_folded:
            return self._reject(Rejected(ActionError.ALREADY_FOLDED, "Player has already folded"))
        if player.has_acted_this_round:
            return self._reject(Rejected(ActionError.ALREADY_ACTED, "Player has already acted this round"))

        if action_type == ActionType.FOLD:
            validation = validate_fold(player, self.phase)
        elif action_type == ActionType.CALL:
            validation = validate_call(player, self.current_bet, self.phase)
        else:
            validation = validate_raise(
                player, self.current_bet, amount, self.phase, self.players,
                self.config.min_raise_increment,
            )

        if not validation.valid:
            return self._reject(validation)

        events: List[GameEvent] = []
        committed, message = self._execute(index, player, validation)
        events.append(GameEvent(
            EventType.PLAYER_ACTED, self.phase, player.player_id,
            amount=committed, message=message,
        ))
        logger.debug(f"{player.player_id}: {message} (pot={self.pot})")
        self._check_chips(f"{action_type.value} by {player.player_id}")

        self._advance(events)
        return ActionResult(True, message, None, action_type, committed, events)

    def _reject(self, rejection: Rejected) -> ActionResult:
        logger.debug(f"Action rejected ({rejection.error.value}): {rejection.reason}")
        return ActionResult(False, rejection.reason, rejection.error)

    def _execute(self, index: int, player: Player, validation) -> Tuple[int, str]:
        """Apply an approved action. Returns (chips committed, message)."""
        if isinstance(validation, CallApproved):
            committed = player.commit(validation.call_amount)
            self.pot += committed
            player.has_acted_this_round = True
            if validation.is_check:
                return 0, f"{player.name} checks"
            return committed, f"{player.name} calls ${committed}"

        if isinstance(validation, RaiseApproved):
            committed = player.commit(validation.total_amount)
            self.pot += committed
            player.has_acted_this_round = True
            self.current_bet = player.current_bet
            reset_actions_except(self.players, index)
            return committed, f"{player.name} raises ${validation.raise_increment} to ${player.current_bet}"

        player.fold()
        return 0, f"{player.name} folds"

    def _advance(self, events: List[GameEvent]) -> None:
        """Move the hand on after an action."""
        active = [p for p in self.players if not p.has_folded]

        if len(active) == 1:
            self._award_uncontested(active[0], events)
            return

        if is_betting_round_complete(self.players, self.current_bet):
            if any(p.chips == 0 for p in active):
                self._run_out_board(events)
                self._showdown(events)
            else:
                self._advance_phase(events)
            return

        self.current_player_index = get_next_active_player_index(
            self.players, self.current_player_index
        )

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _advance_phase(self, events: List[GameEvent]) -> None:
        """Deal the next street and open its betting round, or show down after the river."""
        next_phase = NEXT_PHASE[self.phase]
        if next_phase == GamePhase.SHOWDOWN:
            self._showdown(events)
            return

        self._deal_street(next_phase, events)
        for player in self.players:
            player.reset_for_new_round()
        self.current_bet = 0
        self.current_player_index = get_first_player_index(self.players, self.phase)

    def _deal_street(self, next_phase: GamePhase, events: List[GameEvent]) -> None:
        """Burn one card, then deal the community cards for next_phase."""
        self.phase = next_phase
        events.append(GameEvent(EventType.PHASE_CHANGED, self.phase, message=self.phase.name.title()))

        burned = self.deck.burn()
        events.append(GameEvent(EventType.CARD_BURNED, self.phase, cards=[burned]))

        cards = self.deck.deal_cards(CARDS_FOR_PHASE[next_phase])
        self.community_cards.extend(cards)
        events.append(GameEvent(
            EventType.COMMUNITY_DEALT, self.phase, cards=cards,
            message=" ".join(str(c) for c in cards),
        ))
        logger.info(
            f"Hand #{self.hand_number} {self.phase.value}: "
            f"{' '.join(str(c) for c in self.community_cards)}"
        )

    def _run_out_board(self, events: List[GameEvent]) -> None:
        """A player is all-in: deal every remaining street with no more betting."""
        logger.info(f"Hand #{self.hand_number}: all-in, running out the board")
        while len(self.community_cards) < TOTAL_COMMUNITY_CARDS:
            self._deal_street(NEXT_PHASE[self.phase], events)

    def _showdown(self, events: List[GameEvent]) -> None:
        """Compare both hands and award the pot."""
        self.phase = GamePhase.SHOWDOWN
        self.current_player_index = None
        events.append(GameEvent(EventType.PHASE_CHANGED, self.phase, message="Showdown"))

        contenders = [p for p in self.players if not p.has_folded]
        hands = {p.player_id: evaluate_hand(p.cards, self.community_cards) for p in contenders}
        for player in contenders:
            events.append(GameEvent(
                EventType.HANDS_REVEALED, self.phase, player.player_id,
                cards=list(player.cards), message=hands[player.player_id].description,
            ))

        first, second = contenders
        comparison = compare_hands(hands[first.player_id], hands[second.player_id])
        pot = self.pot

        if comparison == 0:
            share = pot // 2
            awards = {first.player_id: share, second.player_id: share}
            # Odd chip goes to the big blind (first seat left of the button)
            awards[self.big_blind_player.player_id] += pot - 2 * share
            winners = [first.player_id, second.player_id]
            description = get_tiebreak_description(hands[first.player_id], hands[second.player_id])
        else:
            winner, loser = (first, second) if comparison > 0 else (second, first)
            awards = {winner.player_id: pot}
            winners = [winner.player_id]
            description = (
                f"{winner.name} wins with "
                f"{get_tiebreak_description(hands[winner.player_id], hands[loser.player_id])}"
            )

        self._pay_out(awards, events)
        self.last_result = HandResult(
            winners=winners, pot_amount=pot, awards=awards,
            showdown=True, is_tie=comparison == 0, hands=hands,
            description=description,
        )
        logger.info(f"Hand #{self.hand_number} showdown: {description} (pot ${pot})")
        self._check_bust(events)

    def _award_uncontested(self, winner: Player, events: List[GameEvent]) -> None:
        """Everyone else folded: the last player takes the pot, no cards shown."""
        self.phase = GamePhase.SHOWDOWN
        self.current_player_index = None
        pot = self.pot

        self._pay_out({winner.player_id: pot}, events)
        description = f"{winner.name} wins ${pot} - opponent folded"
        self.last_result = HandResult(
            winners=[winner.player_id], pot_amount=pot,
            awards={winner.player_id: pot}, description=description,
        )
        logger.info(f"Hand #{self.hand_number}: {description}")
        self._check_bust(events)

    def _pay_out(self, awards: Dict[str, int], events: List[GameEvent]) -> None:
        for player_id, amount in awards.items():
            player = self.get_player(player_id)
            player.award(amount)
            events.append(GameEvent(
                EventType.POT_AWARDED, self.phase, player_id, amount=amount,
                message=f"{player.name} wins ${amount}",
            ))
        self.pot = 0
        self._check_chips("pot award")

    def _check_bust(self, events: List[GameEvent]) -> None:
        """End the match if someone can no longer post the big blind."""
        busted = [p for p in self.players if p.chips < self.config.bust_threshold]
        if not busted:
            return

        self.game_over = True
        self.overall_winner = max(self.players, key=lambda p: p.chips)
        events.append(GameEvent(
            EventType.MATCH_OVER, self.phase, self.overall_winner.player_id,
            amount=self.overall_winner.chips,
            message=f"{self.overall_winner.name} wins the match",
        ))
        logger.info(
            f"Match over after hand #{self.hand_number}: "
            f"{self.overall_winner.player_id} wins with ${self.overall_winner.chips}"
        )

    def _check_chips(self, context: str) -> None:
        assert_chip_conservation(self.players, self.pot, self.total_bankroll, context)

    # ------------------------------------------------------------------
    # AI
    # ------------------------------------------------------------------

    def get_ai_action(self, player_id: Optional[str] = None) -> AIDecision:
        """
        Ask the AI what the given player (default: current player) should do.

        The decision is not applied; pass it through resolve_ai_decision()
        and apply_action(), or use play_ai_turn().
        """
        player = self.get_player(player_id) if player_id else self.current_player
        if player is None or not self.is_hand_running():
            return AIDecision(AIAction.CALL, "No hand in progress - defaulting to call")

        return make_decision(
            player,
            self.community_cards,
            self.current_bet,
            self.pot,
            self.phase,
            self.num_active_players,
            self.personality,
            self.rng,
        )

    def resolve_ai_decision(self, player_id: str, decision: AIDecision) -> Tuple[ActionType, int]:
        """
        Turn an AI decision into an action the table accepts.

        Raise sizes are rounded down to the table increment and capped to the
        legal window; a raise that cannot be made becomes a call, and a call
        that cannot be afforded becomes a fold.
        """
        player = self.get_player(player_id)
        if decision.action == AIAction.FOLD:
            return ActionType.FOLD, 0

        if decision.action == AIAction.RAISE:
            bounds = get_raise_bounds(
                player, self.current_bet, self.players, self.config.min_raise_increment
            )
            if bounds is not None:
                low, high = bounds
                increment = round_to_increment(decision.amount or 0, self.config.min_raise_increment)
                return ActionType.RAISE, min(max(increment, low), high)

        if get_call_amount(player, self.current_bet) > player.chips:
            return ActionType.FOLD, 0
        return ActionType.CALL, 0

    def play_ai_turn(self) -> ActionResult:
        """Let the AI act for the current player, if that seat is AI-driven."""
        player = self.current_player
        if player is None:
            return self._reject(Rejected(ActionError.INVALID_PHASE, "No hand in progress"))
        if player.is_human:
            return self._reject(Rejected(ActionError.OUT_OF_TURN, "It is not the AI's turn"))

        decision = self.get_ai_action(player.player_id)
        action_type, amount = self.resolve_ai_decision(player.player_id, decision)
        result = self.apply_action(player.player_id, action_type, amount)
        result.decision = decision
        return result

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def get_legal_actions(self, player_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Legal actions for the given player (or current player).

        Returns:
            List of action dicts with type and constraints
        """
        player = self.get_player(player_id) if player_id else self.current_player
        if player is None or player is not self.current_player or player.has_acted_this_round:
            return []

        actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]

        call_amount = get_call_amount(player, self.current_bet)
        if call_amount <= player.chips:
            actions.append({
                "type": ActionType.CALL.value,
                "amount": call_amount,
                "is_check": call_amount == 0,
            })

        bounds = get_raise_bounds(
            player, self.current_bet, self.players, self.config.min_raise_increment
        )
        if bounds is not None:
            actions.append({"type": ActionType.RAISE.value, "min": bounds[0], "max": bounds[1]})

        return actions

    def get_state(self, for_player_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Get the current game state.

        Args:
            for_player_id: If specified, include private info for this player

        Returns:
            Game state dictionary
        """
        revealed = set()
        if self.last_result is not None and self.last_result.showdown:
            revealed = set(self.last_result.hands)

        players = []
        for player in self.players:
            players.append(player.to_dict(hide_cards=player.player_id not in revealed))

        current = self.current_player
        public_info = {
            "phase": self.phase.value,
            "hand_number": self.hand_number,
            "pot": self.pot,
            "current_bet": self.current_bet,
            "board": [c.to_dict() for c in self.community_cards],
            "burned_count": len(self.deck.burned_cards),
            "current_player": current.player_id if current else None,
            "small_blind": self.small_blind_player.player_id,
            "big_blind": self.big_blind_player.player_id,
            "players": players,
            "hand_complete": self.phase == GamePhase.SHOWDOWN,
            "last_result": self.last_result.to_dict() if self.last_result else None,
            "game_over": self.game_over,
            "overall_winner": self.overall_winner.player_id if self.overall_winner else None,
            "total_bankroll": self.total_bankroll,
        }

        private_info: Dict[str, Any] = {}
        if for_player_id:
            player = self.get_player(for_player_id)
            if player:
                hand = None
                if player.cards:
                    hand = evaluate_hand(player.cards, self.community_cards).description
                private_info = {
                    "hand": [c.to_dict() for c in player.cards],
                    "hand_description": hand,
                    "chips_to_call": get_call_amount(player, self.current_bet),
                    "legal_actions": self.get_legal_actions(player.player_id),
                }

        return {
            "public_info": public_info,
            "private_info": private_info,
        }
