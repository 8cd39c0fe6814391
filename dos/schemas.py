"""Pydantic schemas for moves and round snapshots.

Cards cross this boundary only in their two-character text form.
"""

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from dos.cards import Card
from dos.combinations import Play

if TYPE_CHECKING:
    from dos.game.engine import DosRound
    from dos.game.moves import MoveResult


def _normalize_label(label: str) -> str:
    # Raises ValueError, which pydantic reports as a validation error
    return Card.from_string(label).label


class MoveRequest(BaseModel):
    """Request to play cards or pass."""

    action: Literal["play", "pass"]
    cards: list[str] = Field(default_factory=list, description="Card labels, e.g. ['5C', '5S']")

    @field_validator("cards")
    @classmethod
    def _check_labels(cls, cards: list[str]) -> list[str]:
        return [_normalize_label(label) for label in cards]

    @model_validator(mode="after")
    def _check_action_cards(self) -> "MoveRequest":
        if self.action == "pass" and self.cards:
            raise ValueError("A pass carries no cards")
        if self.action == "play" and not self.cards:
            raise ValueError("A play needs at least one card")
        return self

    @classmethod
    def play(cls, *labels: str) -> "MoveRequest":
        return cls(action="play", cards=list(labels))

    @classmethod
    def pass_(cls) -> "MoveRequest":
        return cls(action="pass")


class PlayResponse(BaseModel):
    """A play on the table."""

    model_config = ConfigDict(frozen=True)

    cards: list[str]
    seat: int | None
    value: int | None

    @classmethod
    def from_play(cls, play: Play) -> "PlayResponse":
        return cls(cards=play.labels, seat=play.seat, value=play.value)


class MoveResultResponse(BaseModel):
    """Verdict on a submitted move."""

    action: Literal["play", "pass"]
    seat: int
    accepted: bool
    reason: str | None = None
    message: str | None = None
    next_seat: int | None = None
    play: PlayResponse | None = None
    table_cleared: bool = False
    round_complete: bool = False

    @classmethod
    def from_result(cls, result: "MoveResult") -> "MoveResultResponse":
        return cls(
            action=result.action.value,
            seat=result.seat,
            accepted=result.accepted,
            reason=result.reason.value if result.reason else None,
            message=result.reason.message if result.reason else None,
            next_seat=result.next_seat,
            play=PlayResponse.from_play(result.play) if result.play else None,
            table_cleared=result.table_cleared,
            round_complete=result.round_complete,
        )


class RoundSnapshot(BaseModel):
    """
    Label-only view of a round.

    Built for a ``viewer`` seat, every other seat's hand is stripped and only
    its card count remains visible.
    """

    phase: str
    hands: dict[int, list[str]]
    remaining: dict[int, int]
    first_turn_seat: int
    current_seat: int | None
    has_started: bool
    discard_history: list[list[str]]
    last_play: PlayResponse | None
    winners: list[int]
    loser: int | None
    viewer: int | None = None

    @classmethod
    def from_round(cls, round_: "DosRound", viewer: int | None = None) -> "RoundSnapshot":
        table = round_.table
        hands = {
            seat: [card.label for card in hand]
            for seat, hand in table.hands.items()
            if viewer is None or seat == viewer
        }
        return cls(
            phase=round_.phase.name,
            hands=hands,
            remaining=dict(table.remaining),
            first_turn_seat=table.first_turn_seat,
            current_seat=table.current_seat,
            has_started=table.has_started,
            discard_history=[[card.label for card in group] for group in table.discard_history],
            last_play=PlayResponse.from_play(table.last_play) if table.last_play else None,
            winners=list(table.winners),
            loser=table.loser,
            viewer=viewer,
        )
