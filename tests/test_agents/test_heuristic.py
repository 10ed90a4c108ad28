"""
Tests for the heuristic AI opponent.
"""

import pytest
from headsup.core.card import parse_cards
from headsup.core.player import Player
from headsup.core.rules import GamePhase
from headsup.agents.heuristic import (
    AIAction, AIDecision, Personality, PERSONALITY_THRESHOLDS,
    make_decision, evaluate_hand_strength, preflop_potential, count_outs, _decide_action,
    calculate_pot_odds, calculate_raise_amount, decision_summary,
)


def ai_player(cards="", chips=90, current_bet=0):
    return Player(
        player_id="ai", name="AI", chips=chips, current_bet=current_bet,
        cards=parse_cards(cards), is_human=False,
    )


class TestMakeDecision:
    """Tests for the decision branches."""

    def test_no_cards_defaults_to_call(self, fixed_random):
        decision = make_decision(ai_player(), [], 10, 15, GamePhase.PREFLOP, 2, rng=fixed_random(0.5))
        assert decision.action == AIAction.CALL
        assert "No cards" in decision.reasoning

    def test_cannot_afford_call(self, fixed_random):
        player = ai_player("As Ad", chips=20)
        decision = make_decision(player, [], 50, 60, GamePhase.PREFLOP, 2, rng=fixed_random(0.0))
        assert decision.action == AIAction.FOLD
        assert decision.reasoning == "Insufficient chips to call"

    def test_strong_hand_raises_on_good_roll(self, fixed_random):
        player = ai_player("As Ad")
        board = parse_cards("Ac Ah 2s 3d 7c")
        decision = make_decision(player, board, 10, 30, GamePhase.RIVER, 2, rng=fixed_random(0.0))
        assert decision.action == AIAction.RAISE
        assert 11 <= decision.amount <= 40
        assert "Strong hand" in decision.reasoning

    def test_strong_hand_calls_on_bad_roll(self, fixed_random):
        player = ai_player("As Ad")
        board = parse_cards("Ac Ah 2s 3d 7c")
        decision = make_decision(player, board, 10, 30, GamePhase.RIVER, 2, rng=fixed_random(0.99))
        assert decision.action == AIAction.CALL
        assert decision.amount is None

    def test_strong_hand_does_not_raise_when_short(self, fixed_random):
        player = ai_player("As Ad", chips=25)
        board = parse_cards("Ac Ah 2s 3d 7c")
        decision = make_decision(player, board, 10, 30, GamePhase.RIVER, 2, rng=fixed_random(0.0))
        assert decision.action == AIAction.CALL

    def test_medium_hand_folds_to_steep_pot_odds(self, fixed_random):
        player = ai_player("Kh 8d")
        board = parse_cards("Ks 9c 5d 3h 2s")
        decision = make_decision(player, board, 80, 20, GamePhase.RIVER, 2, rng=fixed_random(0.99))
        assert decision.action == AIAction.FOLD
        assert "pot odds" in decision.reasoning

    def test_medium_hand_floats_on_bluff_roll(self, fixed_random):
        player = ai_player("Kh 8d")
        board = parse_cards("Ks 9c 5d 3h 2s")
        decision = make_decision(player, board, 80, 20, GamePhase.RIVER, 2, rng=fixed_random(0.0))
        assert decision.action == AIAction.CALL

    def test_medium_hand_calls_good_pot_odds(self, fixed_random):
        player = ai_player("Kh 8d")
        board = parse_cards("Ks 9c 5d 3h 2s")
        decision = make_decision(player, board, 10, 40, GamePhase.RIVER, 2, rng=fixed_random(0.99))
        assert decision.action == AIAction.CALL

    def test_weak_hand_checks_for_free(self, fixed_random):
        player = ai_player("7c 2d")
        board = parse_cards("Ks Qh 9s 4c 3h")
        decision = make_decision(player, board, 0, 20, GamePhase.RIVER, 2, rng=fixed_random(0.99))
        assert decision.action == AIAction.CALL
        assert "checking" in decision.reasoning

    def test_weak_hand_calls_above_fold_floor(self, fixed_random):
        player = ai_player("7c 2d")
        board = parse_cards("Ks Qh 9s")
        decision = make_decision(player, board, 10, 20, GamePhase.FLOP, 2, rng=fixed_random(0.99))
        assert decision.action == AIAction.CALL
        assert "improves" in decision.reasoning

    def test_ignores_unrevealed_board_cards(self, fixed_random):
        player = ai_player("7c 2d")
        board = parse_cards("7s 7h 2h Kd Qc")
        preflop = evaluate_hand_strength(player.cards, board, GamePhase.PREFLOP)
        river = evaluate_hand_strength(player.cards, board, GamePhase.RIVER)
        assert preflop < river

    def test_decision_to_dict(self):
        decision = AIDecision(AIAction.RAISE, "Strong hand", 20)
        assert decision.to_dict() == {"action": "raise", "amount": 20, "reasoning": "Strong hand"}


class TestHandStrength:
    """Tests for hand strength estimation."""

    def test_strength_is_bounded(self):
        strength = evaluate_hand_strength(parse_cards("As Ad"), [], GamePhase.PREFLOP)
        assert 0.0 <= strength <= 1.0

    def test_premium_pair_beats_junk_preflop(self):
        aces = evaluate_hand_strength(parse_cards("As Ad"), [], GamePhase.PREFLOP)
        junk = evaluate_hand_strength(parse_cards("7c 2d"), [], GamePhase.PREFLOP)
        assert aces > junk

    @pytest.mark.parametrize("cards,expected", [
        ("As Ad", 1.5),
        ("Ah Kd", 1.4),
        ("9s 9d", 1.3),
        ("Qs Js", 1.3),
        ("8h 7h", 1.2),
        ("3s 3d", 1.1),
        ("Qs Td", 1.0),
        ("Qc 2d", 1.0),
        ("Ad 3c", 1.0),
        ("Jh 2h", 0.9),
        ("8h 5d", 0.8),
        ("Jc 2d", 0.6),
    ])
    def test_preflop_potential(self, cards, expected):
        assert preflop_potential(parse_cards(cards)) == expected

    def test_flush_draw_outs(self):
        assert count_outs(parse_cards("Ah 2h"), parse_cards("Kh 9h 4c")) == 9

    def test_five_card_flush_with_hole_card_counts_as_draw(self):
        assert count_outs(parse_cards("Ah 2c"), parse_cards("Kh 9h 4h 3h")) == 9

    def test_open_ended_straight_draw_outs(self):
        assert count_outs(parse_cards("8c 9d"), parse_cards("10h Js 2c")) == 8

    def test_combo_draw_outs(self):
        assert count_outs(parse_cards("8h 9h"), parse_cards("10h Jh 2c")) == 17

    def test_ace_high_run_is_not_open_ended(self):
        assert count_outs(parse_cards("Ac Kd"), parse_cards("Qh Js 2c")) == 0

    def test_board_only_draw_does_not_count(self):
        assert count_outs(parse_cards("2c 3d"), parse_cards("Ah Kh Qh Jh")) == 0


class TestSizing:
    """Tests for pot odds and raise sizing."""

    def test_pot_odds(self):
        assert calculate_pot_odds(0, 30) == 0.0
        assert calculate_pot_odds(10, 30) == 0.25

    def test_raise_amount_within_window(self):
        amount = calculate_raise_amount(10, 90, 0.9, Personality.AGGRESSIVE)
        assert 11 <= amount <= 40

    def test_raise_amount_when_window_closed(self):
        assert calculate_raise_amount(0, 90, 0.9, Personality.BALANCED) == 1

    def test_personality_thresholds_ordered(self):
        aggressive = PERSONALITY_THRESHOLDS[Personality.AGGRESSIVE]
        conservative = PERSONALITY_THRESHOLDS[Personality.CONSERVATIVE]
        assert aggressive.raise_ < conservative.raise_
        assert aggressive.call < conservative.call

    def test_decision_summary(self):
        decisions = [
            AIDecision(AIAction.CALL, "a"),
            AIDecision(AIAction.CALL, "b"),
            AIDecision(AIAction.RAISE, "c", 10),
        ]
        assert decision_summary(decisions) == {"fold": 0, "call": 2, "raise": 1}


class TestDecisionRolls:
    """Forced rolls through every random branch of the decision tree."""

    def test_flop_raise_uses_later_street_factor(self, fixed_random):
        decision = _decide_action(
            0.75, 0.2, 10, 90, GamePhase.FLOP, 2, Personality.BALANCED, fixed_random(0.8)
        )
        assert decision.action == AIAction.CALL

        decision = _decide_action(
            0.75, 0.2, 10, 90, GamePhase.FLOP, 2, Personality.BALANCED, fixed_random(0.5)
        )
        assert decision.action == AIAction.RAISE

    def test_preflop_raise_factor(self, fixed_random):
        decision = _decide_action(
            0.75, 0.2, 10, 90, GamePhase.PREFLOP, 2, Personality.BALANCED, fixed_random(0.8)
        )
        assert decision.action == AIAction.RAISE

    def test_bluff_raise(self, fixed_random):
        decision = _decide_action(
            0.15, 0.25, 10, 90, GamePhase.TURN, 2, Personality.AGGRESSIVE, fixed_random(0.0)
        )
        assert decision.action == AIAction.RAISE
        assert "bluffing" in decision.reasoning
        assert decision.amount >= 11

    def test_failed_bluff_roll_calls_above_fold_floor(self, fixed_random):
        decision = _decide_action(
            0.15, 0.25, 10, 90, GamePhase.TURN, 2, Personality.AGGRESSIVE, fixed_random(0.99)
        )
        assert decision.action == AIAction.CALL
        assert "improves" in decision.reasoning

    def test_no_bluff_raise_on_flop(self, fixed_random):
        decision = _decide_action(
            0.15, 0.25, 10, 90, GamePhase.FLOP, 2, Personality.AGGRESSIVE, fixed_random(0.0)
        )
        assert decision.action == AIAction.CALL

    def test_very_weak_hand_folds(self, fixed_random):
        decision = _decide_action(
            0.05, 0.25, 10, 90, GamePhase.TURN, 2, Personality.AGGRESSIVE, fixed_random(0.99)
        )
        assert decision.action == AIAction.FOLD
        assert decision.reasoning == "Very weak hand and poor pot odds - folding"
