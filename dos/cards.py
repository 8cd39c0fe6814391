"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterable, Iterator


RANKS = "3456789TJQKA2"
SUITS = "CSHD"


class Suit(Enum):
    """Card suits, ascending in tie-break order."""

    CLUBS = "C"
    SPADES = "S"
    HEARTS = "H"
    DIAMONDS = "D"

    def __str__(self) -> str:
        return self.value

    @property
    def index(self) -> int:
        """Position in the tie-break order (clubs lowest)."""
        return SUITS.index(self.value)


class Rank(Enum):
    """Card ranks. Three is the lowest, two the highest."""

    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"
    TWO = "2"

    def __str__(self) -> str:
        return self.value

    @property
    def index(self) -> int:
        """Position in the climbing order (three is 0, two is 12)."""
        return RANKS.index(self.value)


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """
        Total order over the deck: rank dominates, suit breaks ties.

        Ranges from 0 (3C) to 51 (2D).
        """
        return self.rank.index * 4 + self.suit.index

    @property
    def label(self) -> str:
        """Two-character text form, e.g. '3C' or 'TD'."""
        return str(self)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from its label, like '3C', 'AS' or 'td'."""
        s = s.strip().upper()
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str, suit_str = s[0], s[1]
        if rank_str not in RANKS:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in SUITS:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(Rank(rank_str), Suit(suit_str))


LOWEST_CARD = Card(Rank.THREE, Suit.CLUBS)


def parse_cards(labels: str | Iterable[str]) -> list[Card]:
    """Parse a sequence of labels (or a single space separated string)."""
    if isinstance(labels, str):
        labels = labels.split()
    return [Card.from_string(label) for label in labels]


def cards_to_labels(cards: Iterable[Card]) -> list[str]:
    return [card.label for card in cards]


class Deck:
    """A standard 52-card deck."""

    def __init__(self, rng: Random | None = None) -> None:
        """
        Initialize a new deck in ascending value order.

        Args:
            rng: Random source used by shuffle(); anything with a
                ``shuffle(list)`` method producing an unbiased permutation
        """
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to all 52 cards in order."""
        self._cards = [Card(rank, suit) for rank in Rank for suit in Suit]

    def shuffle(self) -> None:
        """Shuffle the deck."""
        self._rng.shuffle(self._cards)

    def deal(self, count: int) -> list[Card]:
        """Take ``count`` cards off the top of the deck."""
        if count > len(self._cards):
            raise IndexError("Not enough cards left in deck")
        cards = self._cards[:count]
        del self._cards[:count]
        return cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)


def full_deck() -> list[Card]:
    """All 52 cards in ascending value order."""
    return list(Deck())
