"""Per-round table state: hands, discards, the live play and winners."""

import logging
from dataclasses import dataclass, field

from dos.cards import Card, full_deck
from dos.combinations import Play

logger = logging.getLogger(__name__)

NUM_SEATS = 4
HAND_SIZE = 13
# The round ends when this many seats have gone out
WINNERS_TO_FINISH = NUM_SEATS - 1


class InvariantViolation(RuntimeError):
    """Internal bookkeeping went wrong. Indicates a bug, not a bad move."""


def next_active_seat(
    seat: int,
    winners: list[int],
    num_seats: int = NUM_SEATS,
) -> int:
    """
    Walk the rotation forward from ``seat`` to the next seat still holding cards.

    ``seat`` itself is only returned when every other seat has gone out.

    Raises:
        InvariantViolation: if every seat has gone out
    """
    for step in range(1, num_seats + 1):
        candidate = (seat + step) % num_seats
        if candidate in winners:
            logger.debug("Skipping seat %d", candidate)
            continue
        return candidate
    raise InvariantViolation("No active seat left in rotation")


@dataclass
class RoundState:
    """
    Authoritative state of one round.

    Owned by exactly one DosRound and mutated only by its accepted moves.
    """

    hands: dict[int, list[Card]]
    first_turn_seat: int
    current_seat: int | None = None
    has_started: bool = False
    discard_history: list[list[Card]] = field(default_factory=list)
    last_play: Play | None = None
    winners: list[int] = field(default_factory=list)
    remaining: dict[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.current_seat is None and len(self.winners) < WINNERS_TO_FINISH:
            self.current_seat = self.first_turn_seat
        if not self.remaining:
            self.sync_remaining()

    @property
    def seats(self) -> list[int]:
        return sorted(self.hands)

    @property
    def is_complete(self) -> bool:
        return len(self.winners) >= WINNERS_TO_FINISH

    @property
    def active_seats(self) -> list[int]:
        """Seats still in the rotation, in seat order."""
        return [seat for seat in self.seats if seat not in self.winners]

    @property
    def loser(self) -> int | None:
        """The seat left holding cards once the round is complete."""
        if not self.is_complete:
            return None
        return self.active_seats[0]

    def next_seat(self, seat: int) -> int:
        """Next seat to act after ``seat``, skipping seats that went out."""
        return next_active_seat(seat, self.winners, len(self.hands))

    def holds(self, seat: int, cards: list[Card]) -> bool:
        """Whether ``seat`` holds every card in ``cards``."""
        hand = self.hands[seat]
        return all(card in hand for card in cards)

    def remove_from_hand(self, seat: int, cards: list[Card]) -> None:
        hand = self.hands[seat]
        for card in cards:
            hand.remove(card)
        self.remaining[seat] = len(hand)

    def sync_remaining(self) -> None:
        self.remaining = {seat: len(hand) for seat, hand in self.hands.items()}

    def all_cards(self) -> list[Card]:
        """Every card in hands and discards."""
        cards = [card for hand in self.hands.values() for card in hand]
        cards.extend(card for group in self.discard_history for card in group)
        return cards

    def check_invariants(self) -> None:
        """
        Verify deck accounting and winner bookkeeping.

        Raises:
            InvariantViolation: if any check fails
        """
        cards = self.all_cards()
        if len(cards) != len(set(cards)) or set(cards) != set(full_deck()):
            raise InvariantViolation(
                f"Deck accounting mismatch: {len(cards)} cards, "
                f"{len(set(cards))} distinct"
            )

        if len(self.winners) != len(set(self.winners)):
            raise InvariantViolation(f"Duplicate winners: {self.winners}")

        for seat, hand in self.hands.items():
            if self.remaining.get(seat) != len(hand):
                raise InvariantViolation(f"Remaining count out of sync for seat {seat}")
            if (seat in self.winners) != (not hand):
                raise InvariantViolation(f"Seat {seat} winner status disagrees with hand")
