"""
Tests for hand evaluation.
"""

import random
from itertools import combinations

import pytest
from headsup.core.card import Deck, Rank, parse_cards
from headsup.core.hand import (
    HandType, evaluate_hand, compare_hands,
    get_description_with_kicker, get_tiebreak_description,
)


def best_of_five_subsets(cards):
    best = None
    for five in combinations(cards, 5):
        hand = evaluate_hand(list(five))
        if best is None or compare_hands(hand, best) > 0:
            best = hand
    return best


class TestHandRanking:
    """Tests for hand ranking."""

    def test_royal_flush(self, royal_flush):
        hand = evaluate_hand(royal_flush)
        assert hand.hand_type == HandType.ROYAL_FLUSH
        assert hand.rank == 10

    def test_royal_flush_from_hole_and_board(self):
        hand = evaluate_hand(parse_cards("Ah Kh"), parse_cards("Qh Jh 10h 9c 8d"))
        assert hand.hand_type == HandType.ROYAL_FLUSH
        assert hand.rank == 10
        assert hand.description == "Royal Flush"

    @pytest.mark.parametrize("cards,expected", [
        ("9h 8h 7h 6h 5h", HandType.STRAIGHT_FLUSH),
        ("As Ah Ad Ac Ks", HandType.FOUR_OF_A_KIND),
        ("As Ah Ad Kc Ks", HandType.FULL_HOUSE),
        ("As Js 8s 5s 2s", HandType.FLUSH),
        ("10s 9h 8d 7c 6s", HandType.STRAIGHT),
        ("As Ah Ad Kc Qs", HandType.THREE_OF_A_KIND),
        ("As Ah Kd Kc Qs", HandType.TWO_PAIR),
        ("As Ah Kd Qc Js", HandType.ONE_PAIR),
        ("As Kh 9d 7c 2s", HandType.HIGH_CARD),
    ])
    def test_categories(self, cards, expected):
        assert evaluate_hand(parse_cards(cards)).hand_type == expected

    def test_category_ranks(self):
        assert evaluate_hand(parse_cards("As Kh 9d 7c 2s")).rank == 1
        assert evaluate_hand(parse_cards("9h 8h 7h 6h 5h")).rank == 9

    def test_wheel_straight(self):
        hand = evaluate_hand(parse_cards("As 2h 3d 4c 5s"))
        assert hand.hand_type == HandType.STRAIGHT
        assert [c.rank for c in hand.cards] == [5, 4, 3, 2, 14]
        assert hand.description == "Straight, Five high (Wheel)"

    def test_six_high_beats_wheel(self):
        wheel = evaluate_hand(parse_cards("As 2h 3d 4c 5s"))
        six_high = evaluate_hand(parse_cards("2h 3d 4c 5s 6h"))
        assert compare_hands(six_high, wheel) == 1

    def test_steel_wheel_is_not_royal(self):
        hand = evaluate_hand(parse_cards("Ah 2h 3h 4h 5h"))
        assert hand.hand_type == HandType.STRAIGHT_FLUSH

    def test_best_straight_from_seven_cards(self):
        hand = evaluate_hand(parse_cards("9c 10d"), parse_cards("5h 6s 7d 8c Jh"))
        assert hand.hand_type == HandType.STRAIGHT
        assert hand.cards[0].rank == Rank.JACK

    def test_flush_beats_straight_when_both_present(self):
        hand = evaluate_hand(parse_cards("9h 8h"), parse_cards("5h 6h 7h 2c 4d"))
        assert hand.hand_type == HandType.STRAIGHT_FLUSH

        hand = evaluate_hand(parse_cards("Kh 9c"), parse_cards("5h 6h 7h 8c 2h"))
        assert hand.hand_type == HandType.FLUSH

    def test_two_trips_make_full_house(self):
        hand = evaluate_hand(parse_cards("Kh Kd"), parse_cards("Ks Qh Qd Qc 2s"))
        assert hand.hand_type == HandType.FULL_HOUSE
        assert hand.description == "Full House, Kings full of Queens"

    def test_fewer_than_five_cards(self):
        pair = evaluate_hand(parse_cards("6h 6d"))
        assert pair.hand_type == HandType.ONE_PAIR
        assert pair.description == "Pair of Sixes"

        high = evaluate_hand(parse_cards("Ah 7d"))
        assert high.hand_type == HandType.HIGH_CARD
        assert high.description == "High Card, Ace"


class TestHandComparison:
    """Tests for comparing hands."""

    def test_higher_category_wins(self):
        flush = evaluate_hand(parse_cards("As Js 8s 5s 2s"))
        straight = evaluate_hand(parse_cards("10s 9h 8d 7c 6s"))
        assert compare_hands(flush, straight) == 1
        assert compare_hands(straight, flush) == -1

    def test_kicker_decides_same_pair(self):
        ace_kicker = evaluate_hand(parse_cards("Kh Ad"), parse_cards("Ks 9c 7d 4h 2s"))
        queen_kicker = evaluate_hand(parse_cards("Kc Qd"), parse_cards("Ks 9c 7d 4h 2s"))
        assert compare_hands(ace_kicker, queen_kicker) == 1

    def test_exact_tie(self):
        board = parse_cards("10s Js Qs Ks As")
        hand1 = evaluate_hand(parse_cards("2c 3d"), board)
        hand2 = evaluate_hand(parse_cards("4c 5d"), board)
        assert compare_hands(hand1, hand2) == 0

    def test_second_pair_decides_two_pair(self):
        hand1 = evaluate_hand(parse_cards("Ks Kh 9d 9c 2s"))
        hand2 = evaluate_hand(parse_cards("Kd Kc 8d 8c As"))
        assert compare_hands(hand1, hand2) == 1

    def test_seven_cards_match_best_five_card_subset(self):
        rng = random.Random(1234)
        for _ in range(60):
            cards = Deck(rng=rng).deal_cards(7)
            best = best_of_five_subsets(cards)
            hand = evaluate_hand(cards[:2], cards[2:])
            assert hand.rank == best.rank
            assert compare_hands(hand, best) == 0

    def test_comparison_is_antisymmetric_and_transitive(self):
        rng = random.Random(99)
        hands = [evaluate_hand(Deck(rng=rng).deal_cards(7)) for _ in range(25)]

        for a in hands:
            for b in hands:
                assert compare_hands(a, b) == -compare_hands(b, a)

        for a, b, c in combinations(hands, 3):
            if compare_hands(a, b) >= 0 and compare_hands(b, c) >= 0:
                assert compare_hands(a, c) >= 0


class TestHandDescription:
    """Tests for hand descriptions."""

    def test_kicker_description(self):
        hand = evaluate_hand(parse_cards("Kh Ad"), parse_cards("Ks 9c 7d 4h 2s"))
        assert get_description_with_kicker(hand) == "Pair of Kings (Ace kicker)"

    def test_no_kicker_for_made_hands(self, royal_flush):
        hand = evaluate_hand(royal_flush)
        assert get_description_with_kicker(hand) == "Royal Flush"

    def test_tiebreak_names_kickers(self):
        board = parse_cards("Ks 9c 7d 4h 2s")
        winner = evaluate_hand(parse_cards("Kh Ad"), board)
        loser = evaluate_hand(parse_cards("Kc Qd"), board)
        assert get_tiebreak_description(winner, loser) == "Pair of Kings, Ace kicker beats Queen"

    def test_tiebreak_higher_pair(self):
        winner = evaluate_hand(parse_cards("Ah Ad"))
        loser = evaluate_hand(parse_cards("Kh Kd"))
        assert get_tiebreak_description(winner, loser) == "Pair of Aces"

    def test_tiebreak_split(self):
        board = parse_cards("10s Js Qs Ks As")
        hand1 = evaluate_hand(parse_cards("2c 3d"), board)
        hand2 = evaluate_hand(parse_cards("4c 5d"), board)
        assert get_tiebreak_description(hand1, hand2) == "Royal Flush (split pot)"

    def test_to_dict(self):
        data = evaluate_hand(parse_cards("As Ah Kd Kc Qs")).to_dict()
        assert data["type"] == "two-pair"
        assert data["rank"] == 3
        assert data["description"] == "Two Pair, Aces and Kings"
        assert len(data["cards"]) == 5
