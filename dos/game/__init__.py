"""Round engine and state management."""

from dos.game.events import GameEvent, EventType
from dos.game.state import RoundPhase
from dos.game.moves import MoveAction, MoveResult, RejectReason
from dos.game.table import InvariantViolation, RoundState
from dos.game.engine import DosRound, apply_move, is_round_complete, setup, winners

__all__ = [
    "GameEvent",
    "EventType",
    "RoundPhase",
    "MoveAction",
    "MoveResult",
    "RejectReason",
    "InvariantViolation",
    "RoundState",
    "DosRound",
    "apply_move",
    "is_round_complete",
    "setup",
    "winners",
]
