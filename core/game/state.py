"""Table phase enumeration."""

from enum import Enum, auto


class Phase(Enum):
    """
    Table state machine phases.

    Flow: IDLE → DEALING → PLAYER_TURN → DEALER_TURN → SETTLED → (IDLE | DEALING)
    """

    # No round in play
    IDLE = auto()

    # Shoe being prepared and initial cards drawn
    DEALING = auto()

    # Player may hit or stand
    PLAYER_TURN = auto()

    # Dealer draws automatically, no player input
    DEALER_TURN = auto()

    # Outcome recorded, waiting for the next round
    SETTLED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid phase transitions
VALID_TRANSITIONS: dict[Phase, list[Phase]] = {
    Phase.IDLE: [Phase.DEALING],
    Phase.DEALING: [Phase.PLAYER_TURN, Phase.IDLE],  # IDLE if the deck service fails
    Phase.PLAYER_TURN: [Phase.DEALER_TURN, Phase.SETTLED, Phase.IDLE],  # SETTLED on player bust
    Phase.DEALER_TURN: [Phase.SETTLED, Phase.IDLE],
    Phase.SETTLED: [Phase.DEALING, Phase.IDLE],
}


def is_valid_transition(from_phase: Phase, to_phase: Phase) -> bool:
    """
    Check if a phase transition is valid.

    Args:
        from_phase: Current phase
        to_phase: Desired phase

    Returns:
        True if the transition is allowed
    """
    return to_phase in VALID_TRANSITIONS.get(from_phase, [])
