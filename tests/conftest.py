"""
Pytest configuration and shared fixtures for Headsup tests.
"""

import random
import pytest

from headsup.core.card import Card, Deck, Rank, Suit, parse_cards
from headsup.core.player import Player
from headsup.core.game import HeadsUpGame
from headsup.core.rules import TableConfig
from headsup.agents.heuristic import Personality


class FixedRandom:
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class StackedRandom(random.Random):
    """
    Random source that "shuffles" chosen cards to the top of the deck.

    random() returns a fixed roll so AI decisions are predictable too.
    """

    def __init__(self, top_cards=(), roll: float = 0.99):
        super().__init__(0)
        self.top_cards = list(top_cards)
        self.roll = roll

    def shuffle(self, x):
        rest = [c for c in x if c not in self.top_cards]
        x[:] = self.top_cards + rest

    def random(self) -> float:
        return self.roll


def stacked_order(bb_cards: str, sb_cards: str, board: str = ""):
    """
    Deck order that deals the given hole cards and board.

    Hole cards go out big blind first, one at a time; a spare card is burned
    before each street.
    """
    bb, sb, board_cards = parse_cards(bb_cards), parse_cards(sb_cards), parse_cards(board)
    used = set(bb + sb + board_cards)
    spare = [c for c in Deck(shuffle=False).deal_cards(52) if c not in used]

    order = [bb[0], sb[0], bb[1], sb[1]]
    for street in (board_cards[:3], board_cards[3:4], board_cards[4:5]):
        if not street:
            break
        order.append(spare.pop(0))
        order.extend(street)
    return order


def make_game(top_cards=(), roll=0.99, config=None, personality=Personality.BALANCED,
              dealer_first="human") -> HeadsUpGame:
    """Human vs AI game; the human has the button (small blind) on hand 1 by default."""
    return HeadsUpGame(
        config=config,
        player_ids=("human", "ai"),
        player_names=("Player1", "AI Player"),
        dealer_first=dealer_first,
        personality=personality,
        rng=StackedRandom(top_cards, roll),
    )


def act_all(game: HeadsUpGame, action_type="call"):
    """Have whoever is to act take the same action until the hand is over."""
    results = []
    while game.is_hand_running():
        results.append(game.apply_action(game.current_player.player_id, action_type))
    return results


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    return Deck(shuffle=True, rng=random.Random(42))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def game():
    """Human vs balanced AI with default stakes, human on the button."""
    return make_game()


@pytest.fixture
def started_game(game):
    """Game with the first hand dealt: human SB to act, pot 15."""
    game.start_hand()
    return game


@pytest.fixture
def table_config():
    return TableConfig()


@pytest.fixture
def heads_up_players():
    """Two players mid-hand with 10 in each, 90 behind."""
    p1 = Player(player_id="p1", name="P1", chips=90, current_bet=10, is_small_blind=True)
    p2 = Player(player_id="p2", name="P2", chips=90, current_bet=10, is_big_blind=True)
    return [p1, p2]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def game_factory():
    """Factory for games with a stacked deck: game_factory(top_cards, roll, ...)."""
    return make_game


@pytest.fixture
def deck_order():
    """Factory for stacked deck orders: deck_order(bb_cards, sb_cards, board)."""
    return stacked_order


@pytest.fixture
def play_out():
    """Helper that repeats one action for whoever is to act until the hand ends."""
    return act_all


@pytest.fixture
def fixed_random():
    """Factory for a random source with a fixed roll."""
    return FixedRandom
