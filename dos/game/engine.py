"""Dos round engine with state machine."""

import logging
from random import Random
from typing import Callable, Iterable, Mapping

from transitions import Machine

from config import config
from dos.cards import LOWEST_CARD, Card, Deck, full_deck
from dos.combinations import Play
from dos.game.events import EventEmitter, EventType, GameEvent
from dos.game.moves import MoveAction, MoveResult, RejectReason
from dos.game.state import RoundPhase
from dos.game.table import HAND_SIZE, NUM_SEATS, RoundState
from dos.schemas import MoveRequest

logger = logging.getLogger(__name__)

CardLike = Card | str


class DosRound:
    """
    One round of Dos driven by a state machine.

    This is the core rules logic, completely transport-agnostic. Callers
    submit moves for a seat and read the verdict and the next seat to act
    from the returned MoveResult.
    """

    # State machine states
    STATES = [p.name.lower() for p in RoundPhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "open_round", "source": "awaiting_first_lead", "dest": "in_play"},
        {"trigger": "finish_round", "source": "in_play", "dest": "round_complete"},
    ]

    def __init__(
        self,
        table: RoundState,
        check_invariants: bool | None = None,
    ) -> None:
        """
        Wrap a dealt table in a state machine.

        Args:
            table: Round state to own; no other object should mutate it
            check_invariants: Verify deck accounting after every accepted
                move (defaults to the configured value)
        """
        self.table = table
        self.events = EventEmitter()
        self._check_invariants = (
            config.game.check_invariants if check_invariants is None else check_invariants
        )

        if table.is_complete:
            initial = RoundPhase.ROUND_COMPLETE
        elif table.has_started:
            initial = RoundPhase.IN_PLAY
        else:
            initial = RoundPhase.AWAITING_FIRST_LEAD

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=initial.name.lower(),
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        if self._check_invariants:
            self.table.check_invariants()

        if initial == RoundPhase.AWAITING_FIRST_LEAD:
            self.events.emit_new(EventType.ROUND_STARTED, first_turn_seat=table.first_turn_seat)

    @classmethod
    def deal(cls, rng: Random | None = None, **kwargs) -> "DosRound":
        """
        Shuffle a fresh deck and deal 13 cards to each of the 4 seats.

        Args:
            rng: Random source for the shuffle; seeded from configuration
                when omitted
        """
        if rng is None:
            rng = Random(config.game.seed)

        deck = Deck(rng=rng)
        deck.shuffle()
        hands = {seat: deck.deal(HAND_SIZE) for seat in range(NUM_SEATS)}
        first_turn = next(seat for seat, hand in hands.items() if LOWEST_CARD in hand)

        round_ = cls(RoundState(hands=hands, first_turn_seat=first_turn), **kwargs)
        logger.debug("Dealt round, seat %d holds %s", first_turn, LOWEST_CARD)
        return round_

    @classmethod
    def from_hands(
        cls,
        hands: Mapping[int, Iterable[CardLike]],
        **kwargs,
    ) -> "DosRound":
        """
        Start a round from explicit hands instead of a shuffle.

        Hands may have any sizes but together must hold the whole deck
        exactly once.

        Raises:
            ValueError: if the hands do not partition the deck across 4 seats
        """
        parsed = {seat: [_to_card(c) for c in cards] for seat, cards in hands.items()}

        if sorted(parsed) != list(range(NUM_SEATS)):
            raise ValueError(f"Expected seats 0-{NUM_SEATS - 1}, got {sorted(parsed)}")
        for seat, hand in parsed.items():
            if not hand:
                raise ValueError(f"Seat {seat} has no cards")

        dealt = [card for hand in parsed.values() for card in hand]
        if len(dealt) != len(set(dealt)) or set(dealt) != set(full_deck()):
            raise ValueError("Hands must hold each of the 52 cards exactly once")

        first_turn = next(seat for seat, hand in parsed.items() if LOWEST_CARD in hand)
        return cls(RoundState(hands=parsed, first_turn_seat=first_turn), **kwargs)

    @property
    def phase(self) -> RoundPhase:
        """Get current phase as enum."""
        return RoundPhase[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to round events."""
        self.events.subscribe(handler, event_type)

    def apply_move(self, seat: int, move: MoveRequest) -> MoveResult:
        """Dispatch a validated move request to play or pass."""
        if move.action == MoveAction.PASS:
            return self.pass_turn(seat)
        return self.play(seat, move.cards)

    def play(self, seat: int, cards: Iterable[CardLike]) -> MoveResult:
        """
        Put cards from ``seat``'s hand on the table.

        Args:
            seat: Seat making the play
            cards: Cards or labels, in any order

        Returns:
            Accepted result with the next seat to act, or a rejection
        """
        play, reason = self._check_play(seat, cards)
        if reason is not None:
            return self._reject(MoveAction.PLAY, seat, reason)
        assert play is not None

        table = self.table
        table.remove_from_hand(seat, list(play.cards))
        table.discard_history.append(list(play.cards))
        table.last_play = play

        if not table.has_started:
            table.has_started = True
            self.open_round()

        self.events.emit_new(
            EventType.CARDS_PLAYED,
            seat=seat,
            cards=play.labels,
            value=play.value,
            remaining=table.remaining[seat],
        )
        logger.debug("Seat %d played %s", seat, play)

        table_cleared = False
        if not table.hands[seat]:
            # Going out cannot be beaten; whoever is next leads freely
            table.winners.append(seat)
            table.last_play = None
            table_cleared = True
            self.events.emit_new(
                EventType.PLAYER_FINISHED,
                seat=seat,
                place=len(table.winners),
            )
            self.events.emit_new(EventType.TABLE_CLEARED, reason="player_finished")
            logger.info("Seat %d went out in place %d", seat, len(table.winners))

        next_seat = self._advance_from(seat)
        self._verify()

        return MoveResult(
            action=MoveAction.PLAY,
            seat=seat,
            accepted=True,
            next_seat=next_seat,
            play=play,
            table_cleared=table_cleared,
            round_complete=next_seat is None,
        )

    def pass_turn(self, seat: int) -> MoveResult:
        """
        Decline to beat the play on the table.

        When the rotation comes back around to the play's owner, the table
        is cleared and that owner leads next.
        """
        reason = self._check_turn(seat)
        if reason is None and self.table.last_play is None:
            reason = RejectReason.NO_ACTIVE_PLAY_TO_PASS_ON
        if reason is not None:
            return self._reject(MoveAction.PASS, seat, reason)

        table = self.table
        assert table.last_play is not None
        self.events.emit_new(EventType.PLAYER_PASSED, seat=seat)

        table_cleared = False
        if table.next_seat(seat) == table.last_play.seat:
            # Others passed
            table.last_play = None
            table_cleared = True
            self.events.emit_new(EventType.TABLE_CLEARED, reason="all_passed")
            logger.debug("Everyone passed, table cleared")

        next_seat = self._advance_from(seat)
        self._verify()

        return MoveResult(
            action=MoveAction.PASS,
            seat=seat,
            accepted=True,
            next_seat=next_seat,
            table_cleared=table_cleared,
        )

    def validate_play(self, seat: int, cards: Iterable[CardLike]) -> RejectReason | None:
        """Dry-run a play: the reason it would be rejected, or None if legal."""
        return self._check_play(seat, cards)[1]

    @property
    def can_pass(self) -> bool:
        """Check if the seat holding priority may pass."""
        return not self.table.is_complete and self.table.last_play is not None

    def next_seat(self, seat: int) -> int:
        """Seat that acts after ``seat``, skipping seats that went out."""
        return self.table.next_seat(seat)

    @property
    def current_seat(self) -> int | None:
        return self.table.current_seat

    @property
    def is_complete(self) -> bool:
        return self.phase == RoundPhase.ROUND_COMPLETE

    @property
    def winners(self) -> list[int]:
        """Seats that went out, in finishing order."""
        return list(self.table.winners)

    @property
    def loser(self) -> int | None:
        return self.table.loser

    def _check_turn(self, seat: int) -> RejectReason | None:
        if self.is_complete:
            return RejectReason.ROUND_OVER
        if seat != self.table.current_seat:
            return RejectReason.NOT_YOUR_TURN
        return None

    def _check_play(
        self,
        seat: int,
        cards: Iterable[CardLike],
    ) -> tuple[Play | None, RejectReason | None]:
        reason = self._check_turn(seat)
        if reason is not None:
            return None, reason

        table = self.table
        resolved = _resolve_cards(cards)
        if resolved is None or not table.holds(seat, resolved):
            return None, RejectReason.NOT_IN_HAND

        play = Play(tuple(resolved), seat)
        value = play.value
        if value is None:
            return None, RejectReason.INVALID_COMBINATION

        last = table.last_play
        if last is None:
            if not table.has_started and LOWEST_CARD not in play.cards:
                return None, RejectReason.MUST_LEAD_WITH_LOWEST_CARD
        else:
            if len(play) != len(last):
                return None, RejectReason.LENGTH_MISMATCH
            if value <= last.value:  # type: ignore[operator]
                return None, RejectReason.VALUE_TOO_LOW

        return play, None

    def _advance_from(self, seat: int) -> int | None:
        """Hand priority on after an accepted move from ``seat``."""
        table = self.table
        if table.is_complete:
            table.current_seat = None
            self.finish_round()
            self.events.emit_new(
                EventType.ROUND_ENDED,
                winners=list(table.winners),
                loser=table.loser,
            )
            logger.info("Round complete, winners %s, loser %s", table.winners, table.loser)
            return None

        next_seat = table.next_seat(seat)
        table.current_seat = next_seat
        self.events.emit_new(EventType.TURN_ADVANCED, seat=next_seat)
        return next_seat

    def _reject(self, action: MoveAction, seat: int, reason: RejectReason) -> MoveResult:
        logger.info("Rejected %s from seat %d: %s", action.value, seat, reason.message)
        self.events.emit_new(
            EventType.INVALID_ACTION,
            seat=seat,
            action=action.value,
            reason=reason.value,
            message=reason.message,
        )
        return MoveResult.rejected(action, seat, reason, self.table.current_seat)

    def _verify(self) -> None:
        if self._check_invariants:
            self.table.check_invariants()


def _to_card(card: CardLike) -> Card:
    return card if isinstance(card, Card) else Card.from_string(card)


def _resolve_cards(cards: Iterable[CardLike]) -> list[Card] | None:
    """Parse submitted cards; None if any is malformed or repeated."""
    try:
        resolved = [_to_card(card) for card in cards]
    except ValueError:
        return None
    if len(resolved) != len(set(resolved)):
        return None
    return resolved


def setup(rng: Random | None = None) -> DosRound:
    """Deal a new round from a shuffled deck."""
    return DosRound.deal(rng)


def apply_move(round_: DosRound, seat: int, move: MoveRequest) -> MoveResult:
    """Apply a play or pass for ``seat``; rejections leave the round untouched."""
    return round_.apply_move(seat, move)


def is_round_complete(round_: DosRound) -> bool:
    return round_.is_complete


def winners(round_: DosRound) -> list[int]:
    return round_.winners
