import dataclasses

import pytest

from klondike.cards import (
    Card,
    can_stack_on_foundation,
    can_stack_on_tableau,
    card_color,
    display_string,
    flip_down,
    flip_up,
    has_alternating_colors,
    is_ace,
    is_king,
    suit_color,
)


@pytest.mark.parametrize(
    "suit,expected",
    [
        ("hearts", "red"),
        ("diamonds", "red"),
        ("clubs", "black"),
        ("spades", "black"),
    ],
)
def test_suit_colors(suit, expected):
    assert suit_color(suit) == expected
    assert card_color(Card(suit, 7)) == expected
    assert Card(suit, 7).color == expected


def test_alternating_colors():
    assert has_alternating_colors(Card("hearts", 5), Card("spades", 6))
    assert not has_alternating_colors(Card("hearts", 5), Card("diamonds", 6))
    assert not has_alternating_colors(Card("clubs", 5), Card("spades", 6))


def test_cards_default_face_down_and_are_frozen():
    card = Card("spades", 1)
    assert card.face_up is False
    with pytest.raises(dataclasses.FrozenInstanceError):
        card.face_up = True  # type: ignore[misc]


@pytest.mark.parametrize("suit,rank", [("stars", 1), ("hearts", 0), ("hearts", 14), ("hearts", True)])
def test_invalid_cards_rejected(suit, rank):
    with pytest.raises(ValueError):
        Card(suit, rank)


def test_flip_up_returns_new_card_when_face_down():
    card = Card("hearts", 9)
    flipped = flip_up(card)
    assert flipped is not card
    assert flipped == Card("hearts", 9, True)


def test_flip_is_identity_when_orientation_matches():
    up = Card("hearts", 9, True)
    down = Card("clubs", 2)
    assert flip_up(up) is up
    assert flip_down(down) is down


def test_flip_down_turns_card_over():
    assert flip_down(Card("clubs", 2, True)) == Card("clubs", 2, False)


@pytest.mark.parametrize(
    "card,expected",
    [
        (Card("spades", 1), "A♠"),
        (Card("hearts", 10), "10♥"),
        (Card("diamonds", 11), "J♦"),
        (Card("clubs", 12), "Q♣"),
        (Card("hearts", 13), "K♥"),
        (Card("clubs", 7), "7♣"),
    ],
)
def test_display_string(card, expected):
    assert display_string(card) == expected


def test_tableau_stacking_rules():
    assert can_stack_on_tableau(Card("hearts", 5), Card("spades", 6))
    assert can_stack_on_tableau(Card("hearts", 12), Card("clubs", 13))
    assert not can_stack_on_tableau(Card("hearts", 5), Card("diamonds", 6))
    assert not can_stack_on_tableau(Card("hearts", 4), Card("spades", 6))


def test_foundation_stacking_rules():
    assert can_stack_on_foundation(Card("hearts", 1), None, "hearts")
    assert not can_stack_on_foundation(Card("hearts", 2), None, "hearts")
    assert can_stack_on_foundation(Card("hearts", 2), Card("hearts", 1), "hearts")
    assert not can_stack_on_foundation(Card("spades", 1), None, "hearts")
    assert not can_stack_on_foundation(Card("hearts", 3), Card("hearts", 1), "hearts")


def test_king_and_ace_predicates():
    assert is_king(Card("spades", 13))
    assert is_ace(Card("spades", 1))
    assert not is_king(Card("spades", 7))
    assert not is_ace(Card("spades", 7))
