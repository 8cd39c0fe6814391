"""Tests for Card and Deck classes."""

import pytest
from random import Random

from dos.cards import (
    LOWEST_CARD,
    Card,
    Deck,
    Rank,
    Suit,
    cards_to_labels,
    full_deck,
    parse_cards,
)


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value_extremes(self):
        """3C is the lowest card and 2D the highest."""
        assert Card(Rank.THREE, Suit.CLUBS).value == 0
        assert Card(Rank.TWO, Suit.DIAMONDS).value == 51
        assert LOWEST_CARD == Card(Rank.THREE, Suit.CLUBS)

    def test_rank_dominates_suit(self):
        """A higher rank beats any suit of a lower rank."""
        assert Card(Rank.FOUR, Suit.CLUBS).value > Card(Rank.THREE, Suit.DIAMONDS).value
        assert Card(Rank.TWO, Suit.CLUBS).value > Card(Rank.ACE, Suit.DIAMONDS).value

    def test_suit_tie_break_order(self):
        """Within a rank, clubs < spades < hearts < diamonds."""
        values = [Card(Rank.NINE, suit).value for suit in (Suit.CLUBS, Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS)]
        assert values == sorted(values)
        assert values == [24, 25, 26, 27]

    def test_values_are_unique(self):
        """Every card has its own value in [0, 52)."""
        values = [card.value for card in full_deck()]
        assert sorted(values) == list(range(52))

    def test_card_from_string(self):
        """Test creating cards from labels."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("TD") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("2h") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string(" 3c ") == LOWEST_CARD

    @pytest.mark.parametrize("label", ["", "3", "10D", "1C", "3X", "XX"])
    def test_card_from_string_rejects_bad_labels(self, label):
        """Malformed labels raise ValueError."""
        with pytest.raises(ValueError):
            Card.from_string(label)

    def test_card_str_is_label(self):
        """Test string representation."""
        card = Card(Rank.TEN, Suit.HEARTS)
        assert str(card) == "TH"
        assert card.label == "TH"

    def test_card_hash(self):
        """Test that cards can be used in sets/dicts."""
        cards = {Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.SPADES)}
        assert len(cards) == 1


class TestParsing:
    """Tests for label helpers."""

    def test_parse_list(self):
        assert parse_cards(["5C", "5S"]) == [
            Card(Rank.FIVE, Suit.CLUBS),
            Card(Rank.FIVE, Suit.SPADES),
        ]

    def test_parse_space_separated(self):
        assert parse_cards("JC QS  KH") == parse_cards(["JC", "QS", "KH"])

    def test_labels_round_trip(self):
        labels = ["3C", "TD", "2S"]
        assert cards_to_labels(parse_cards(labels)) == labels


class TestDeck:
    """Tests for the Deck class."""

    def test_deck_creation(self):
        """A new deck holds 52 cards in ascending value order."""
        deck = Deck()
        assert len(deck) == 52
        assert [card.value for card in deck] == list(range(52))

    def test_deck_shuffle(self):
        """Shuffling keeps the cards and changes the order."""
        deck = Deck(rng=Random(42))
        order_before = list(deck)

        deck.shuffle()
        order_after = list(deck)

        assert set(order_before) == set(order_after)
        assert order_before != order_after

    def test_seeded_shuffle_is_reproducible(self):
        """The same seed gives the same permutation."""
        first, second = Deck(rng=Random(7)), Deck(rng=Random(7))
        first.shuffle()
        second.shuffle()
        assert list(first) == list(second)

    def test_deal(self):
        """Dealing takes cards off the top."""
        deck = Deck()
        hand = deck.deal(13)
        assert len(hand) == 13
        assert len(deck) == 39
        assert hand[0] == LOWEST_CARD

    def test_deal_too_many(self):
        """Test dealing from an exhausted deck."""
        deck = Deck()
        deck.deal(52)
        assert deck.cards_remaining == 0
        with pytest.raises(IndexError):
            deck.deal(1)
