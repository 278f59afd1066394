from collections import Counter

import pytest

from klondike.cards import RANKS, SUITS, Card
from klondike.deal import deal_game
from klondike.deck import create_deck, seeded_random, shuffle_deck
from klondike.state import all_cards


def _identity(cards):
    return [(card.suit, card.rank) for card in cards]


def test_create_deck_is_canonical_and_face_down():
    deck = create_deck()
    assert len(deck) == 52
    assert all(not card.face_up for card in deck)
    assert deck[0] == Card("hearts", 1)
    assert deck[12] == Card("hearts", 13)
    assert deck[13] == Card("diamonds", 1)
    assert deck[-1] == Card("spades", 13)
    assert Counter(card.suit for card in deck) == {suit: 13 for suit in SUITS}


def test_seeded_random_is_deterministic_and_in_range():
    first = seeded_random(42)
    second = seeded_random(42)
    values = [first() for _ in range(500)]
    assert values == [second() for _ in range(500)]
    assert all(0.0 <= value < 1.0 for value in values)


def test_seeded_random_follows_lcg_formula():
    rng = seeded_random(1)
    expected_state = (1 * 1103515245 + 12345) % 2**31
    assert rng() == expected_state / 2**31


def test_shuffle_keeps_cards_and_leaves_input_alone():
    deck = create_deck()
    shuffled = shuffle_deck(deck, 7)
    assert deck == create_deck()
    assert len(shuffled) == len(deck)
    assert Counter(shuffled) == Counter(deck)


def test_shuffle_is_deterministic_per_seed():
    deck = create_deck()
    assert shuffle_deck(deck, 12345) == shuffle_deck(deck, 12345)
    assert shuffle_deck(deck, 1) != shuffle_deck(deck, 2)


def test_unseeded_shuffle_keeps_cards():
    deck = create_deck()
    assert Counter(shuffle_deck(deck)) == Counter(deck)


def test_deal_shape():
    state = deal_game(42)
    for index, column in enumerate(state.tableau.columns):
        assert len(column) == index + 1
        assert column[-1].face_up
        assert all(not card.face_up for card in column[:-1])
    assert len(state.stock_and_waste.stock) == 24
    assert all(not card.face_up for card in state.stock_and_waste.stock)
    assert state.stock_and_waste.waste == ()
    assert all(len(pile) == 0 for _, pile in state.foundations.piles())
    assert state.is_won is False


def test_deal_uses_shuffled_order():
    shuffled = shuffle_deck(create_deck(), 99)
    state = deal_game(99)
    dealt = [card for column in state.tableau.columns for card in column]
    assert _identity(dealt) == _identity(shuffled[:28])
    assert state.stock_and_waste.stock == shuffled[28:]


def test_initial_stats_use_clock():
    state = deal_game(1, clock=lambda: 1234.5)
    assert state.stats.moves == 0
    assert state.stats.score == 0
    assert state.stats.start_time == 1234.5
    assert state.stats.elapsed_seconds == 0


@pytest.mark.parametrize("seed", [0, 1, 42, 12345, 2**40])
def test_same_seed_deals_same_game(seed):
    first = deal_game(seed)
    second = deal_game(seed)
    for left, right in zip(first.tableau.columns, second.tableau.columns):
        assert _identity(left) == _identity(right)
    assert _identity(first.stock_and_waste.stock) == _identity(second.stock_and_waste.stock)


def test_deal_contains_full_deck_once():
    state = deal_game(3)
    identities = _identity(all_cards(state))
    assert len(identities) == 52
    assert set(identities) == {(suit, rank) for suit in SUITS for rank in RANKS}
