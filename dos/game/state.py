"""Round phase enumeration."""

from enum import Enum, auto


class RoundPhase(Enum):
    """
    Round state machine phases.

    Flow: AWAITING_FIRST_LEAD → IN_PLAY → ROUND_COMPLETE
    """

    # Dealt, nobody has played 3C yet
    AWAITING_FIRST_LEAD = auto()

    # Normal rotation
    IN_PLAY = auto()

    # Three seats have emptied their hands
    ROUND_COMPLETE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid phase transitions
VALID_TRANSITIONS: dict[RoundPhase, list[RoundPhase]] = {
    RoundPhase.AWAITING_FIRST_LEAD: [RoundPhase.IN_PLAY],
    RoundPhase.IN_PLAY: [RoundPhase.IN_PLAY, RoundPhase.ROUND_COMPLETE],
    RoundPhase.ROUND_COMPLETE: [],  # Terminal; a new round gets a new instance
}


def is_valid_transition(from_phase: RoundPhase, to_phase: RoundPhase) -> bool:
    """
    Check if a phase transition is valid.

    Args:
        from_phase: Current phase
        to_phase: Desired phase

    Returns:
        True if the transition is allowed
    """
    return to_phase in VALID_TRANSITIONS.get(from_phase, [])
