"""Pytest fixtures for Dos engine tests."""

from random import Random

import pytest
from hypothesis import strategies as st

from dos.cards import Card, Rank, Suit, full_deck
from dos.game import DosRound
from dos.game.table import HAND_SIZE, NUM_SEATS


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def dealt_round(rng):
    """A freshly dealt round from a seeded shuffle."""
    return DosRound.deal(rng)


def _fill_hands(
    fixed: dict[int, list[str]],
    sizes: dict[int, int] | None = None,
) -> dict[int, list[str]]:
    """Give each seat its fixed labels, then top up from the rest of the deck in order."""
    targets = {seat: HAND_SIZE for seat in range(NUM_SEATS)}
    targets.update(sizes or {})

    taken = {label for labels in fixed.values() for label in labels}
    pool = [card.label for card in full_deck() if card.label not in taken]

    hands = {}
    for seat in range(NUM_SEATS):
        hand = list(fixed.get(seat, []))
        need = targets[seat] - len(hand)
        hand.extend(pool[:need])
        del pool[:need]
        hands[seat] = hand
    return hands


@pytest.fixture
def make_round():
    """
    Factory for rounds with chosen cards.

    ``make_round({0: ["3C", "5C", "5S"]})`` puts those cards in seat 0 and
    deals the rest of the deck in order so every seat ends with 13 cards.
    ``sizes`` overrides hand sizes; they must still add up to 52.
    """

    def _make(fixed: dict[int, list[str]], sizes: dict[int, int] | None = None) -> DosRound:
        return DosRound.from_hands(_fill_hands(fixed, sizes))

    return _make


@pytest.fixture
def short_round(make_round):
    """
    Seats 0-2 hold one card each, seat 3 holds the other 49.

    Seat 0 leads 3C and goes out immediately.
    """
    return make_round(
        {0: ["3C"], 1: ["4C"], 2: ["5C"]},
        sizes={0: 1, 1: 1, 2: 1, 3: 49},
    )


# Hypothesis strategies for property-based testing


@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


def distinct_cards(size: int):
    """Generate ``size`` distinct cards."""
    return st.lists(card_strategy(), min_size=size, max_size=size, unique=True)
