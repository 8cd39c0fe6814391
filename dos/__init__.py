"""Core Dos rules engine - 100% transport-agnostic."""

from dos.cards import Card, Deck, Rank, Suit, LOWEST_CARD
from dos.combinations import Combination, Play, evaluate

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "LOWEST_CARD",
    "Combination",
    "Play",
    "evaluate",
]
