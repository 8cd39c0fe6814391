"""Combination evaluation for Dos plays."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Iterator

from dos.cards import Card, Rank, parse_cards

logger = logging.getLogger(__name__)

# Five-card kinds are separated by this factor so any higher kind outranks
# every lower kind; comparison values never exceed 51.
KIND_WEIGHT = 1000

WRAPAROUND_STRAIGHT = frozenset(
    {Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE, Rank.TWO}
)


class Combination(IntEnum):
    """Five-card kinds, in ascending strength."""

    NONE = 0
    STRAIGHT = 1
    FLUSH = 2
    FULL_HOUSE = 3
    QUADRO = 4
    STRAIGHT_FLUSH = 5

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


def _run_position(card: Card) -> int:
    """Position of a card's rank in A-2-3-...-K run order."""
    return (card.rank.index + 2) % 13


def _is_run(positions: list[int]) -> bool:
    return positions[0] + 4 == positions[4]


def straight_value(cards: list[Card]) -> int | None:
    """
    Value of the top card of a straight, or None.

    Runs use the order A 2 3 ... K. The ace may also sit above the king
    (T J Q K A), and J Q K A 2 counts as a wraparound run topped by the two.
    """
    by_position = {_run_position(card): card for card in cards}
    if len(by_position) != 5:
        return None

    positions = sorted(by_position)
    if _is_run(positions):
        return by_position[positions[4]].value

    if positions[0] == 0:
        # Ace high
        high = sorted(positions[1:] + [13])
        if _is_run(high):
            return by_position[0].value

    if {card.rank for card in cards} == WRAPAROUND_STRAIGHT:
        return next(card.value for card in cards if card.rank == Rank.TWO)

    return None


def flush_value(cards: list[Card]) -> int | None:
    """
    Flush comparison value, or None.

    Suit outweighs rank: a flush in diamonds beats any flush in hearts.
    """
    if any(card.suit != cards[0].suit for card in cards):
        return None
    top = max(cards, key=lambda c: c.value)
    return top.suit.index * 13 + top.rank.index


def _rank_counts(cards: list[Card]) -> set[int]:
    return set(Counter(card.rank for card in cards).values())


def quadro_value(cards: list[Card]) -> int | None:
    """Four of a kind plus a kicker."""
    if 4 not in _rank_counts(cards):
        return None
    # Sorted ascending, position 1 is inside the quad wherever the kicker lands
    return cards[1].value


def full_house_value(cards: list[Card]) -> int | None:
    """Three of a kind plus a pair."""
    counts = _rank_counts(cards)
    if counts != {2, 3}:
        return None
    # Sorted ascending, the middle card always belongs to the trio
    return cards[2].value


def classify(cards: Iterable[Card]) -> tuple[Combination, int]:
    """
    Classify five cards.

    Returns:
        (kind, comparison value); (Combination.NONE, 0) when the cards
        form no five-card combination
    """
    ordered = sorted(cards, key=lambda c: c.value)
    if len(ordered) != 5:
        return Combination.NONE, 0

    straight = straight_value(ordered)
    if straight is not None:
        if flush_value(ordered) is not None:
            return Combination.STRAIGHT_FLUSH, straight
        return Combination.STRAIGHT, straight

    value = quadro_value(ordered)
    if value is not None:
        return Combination.QUADRO, value

    value = full_house_value(ordered)
    if value is not None:
        return Combination.FULL_HOUSE, value

    value = flush_value(ordered)
    if value is not None:
        return Combination.FLUSH, value

    return Combination.NONE, 0


def evaluate(cards: Iterable[Card]) -> int | None:
    """
    Compute the comparable value of a play.

    Singles score the card value, pairs the higher card, triples the lowest
    card. Five-card plays score ``kind * 1000 + comparison value``.

    Returns:
        The value, or None if the cards are not a valid combination
    """
    ordered = sorted(cards, key=lambda c: c.value)
    size = len(ordered)

    if size == 1:
        return ordered[0].value

    if size == 2:
        if ordered[0].rank == ordered[1].rank:
            return ordered[1].value
        logger.debug("Pair doesn't match: %s", _labels(ordered))
        return None

    if size == 3:
        if len({card.rank for card in ordered}) == 1:
            return ordered[0].value
        logger.debug("Trio doesn't match: %s", _labels(ordered))
        return None

    if size == 5:
        kind, value = classify(ordered)
        if kind == Combination.NONE:
            logger.debug("Invalid 5-card combination: %s", _labels(ordered))
            return None
        return kind * KIND_WEIGHT + value

    logger.debug("No combination has %d cards", size)
    return None


def _labels(cards: list[Card]) -> str:
    return " ".join(card.label for card in cards)


@dataclass(frozen=True)
class Play:
    """
    Cards put on the table together, kept in ascending value order.

    ``seat`` is None for plays built only for evaluation.
    """

    cards: tuple[Card, ...]
    seat: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "cards", tuple(sorted(self.cards, key=lambda c: c.value))
        )

    @classmethod
    def from_string(cls, labels: str | Iterable[str], seat: int | None = None) -> "Play":
        """Build a play from labels like '5C 5S' or ['5C', '5S']."""
        return cls(tuple(parse_cards(labels)), seat)

    @property
    def value(self) -> int | None:
        """Comparable value, or None for an invalid combination."""
        return evaluate(self.cards)

    @property
    def is_valid(self) -> bool:
        return self.value is not None

    @property
    def kind(self) -> Combination:
        """Five-card kind; NONE for shorter plays."""
        return classify(self.cards)[0]

    def beats(self, other: "Play") -> bool:
        """Whether this play may be put on top of ``other``."""
        mine, theirs = self.value, other.value
        if mine is None or theirs is None:
            return False
        return len(self) == len(other) and mine > theirs

    @property
    def labels(self) -> list[str]:
        return [card.label for card in self.cards]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        return " ".join(self.labels)
