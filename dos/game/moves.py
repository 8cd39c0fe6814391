"""Move outcomes and rejection reasons."""

from dataclasses import dataclass
from enum import Enum

from dos.combinations import Play


class RejectReason(str, Enum):
    """Why a move was refused. Every rejection leaves the round untouched."""

    NOT_IN_HAND = "NOT_IN_HAND"
    INVALID_COMBINATION = "INVALID_COMBINATION"
    MUST_LEAD_WITH_LOWEST_CARD = "MUST_LEAD_WITH_LOWEST_CARD"
    LENGTH_MISMATCH = "LENGTH_MISMATCH"
    VALUE_TOO_LOW = "VALUE_TOO_LOW"
    NO_ACTIVE_PLAY_TO_PASS_ON = "NO_ACTIVE_PLAY_TO_PASS_ON"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    ROUND_OVER = "ROUND_OVER"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    RejectReason.NOT_IN_HAND: "Play not from hand",
    RejectReason.INVALID_COMBINATION: "Cards do not form a valid combination",
    RejectReason.MUST_LEAD_WITH_LOWEST_CARD: "First play of the round must include 3C",
    RejectReason.LENGTH_MISMATCH: "Play not same length as last play",
    RejectReason.VALUE_TOO_LOW: "Play does not beat last play",
    RejectReason.NO_ACTIVE_PLAY_TO_PASS_ON: "Nothing on the table to pass on",
    RejectReason.NOT_YOUR_TURN: "Seat does not hold priority",
    RejectReason.ROUND_OVER: "Round is already complete",
}


class MoveAction(str, Enum):
    PLAY = "play"
    PASS = "pass"


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a play or pass.

    ``next_seat`` is the seat to act after an accepted move, None once the
    round is complete. Rejected moves report the seat that still holds
    priority.
    """

    action: MoveAction
    seat: int
    accepted: bool
    reason: RejectReason | None = None
    next_seat: int | None = None
    play: Play | None = None
    table_cleared: bool = False
    round_complete: bool = False

    @classmethod
    def rejected(
        cls,
        action: MoveAction,
        seat: int,
        reason: RejectReason,
        next_seat: int | None,
    ) -> "MoveResult":
        return cls(
            action=action,
            seat=seat,
            accepted=False,
            reason=reason,
            next_seat=next_seat,
        )

    def __bool__(self) -> bool:
        return self.accepted
