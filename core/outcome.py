"""Round outcome evaluation."""

from dataclasses import dataclass
from enum import Enum

from core.hand import BLACKJACK, Hand


class Outcome(Enum):
    """Result of a round from the player's side."""

    WIN = "win"
    LOSE = "lose"
    TIE = "tie"


class Reason(Enum):
    """Why a round ended the way it did."""

    BLACKJACK = "blackjack"
    PLAYER_BUST = "player_bust"
    DEALER_BUST = "dealer_bust"
    HIGHER_SCORE = "higher_score"
    LOWER_SCORE = "lower_score"
    PUSH = "push"


_MESSAGES = {
    Reason.BLACKJACK: "Blackjack, you win",
    Reason.PLAYER_BUST: "You bust",
    Reason.DEALER_BUST: "Dealer busts, you win",
    Reason.HIGHER_SCORE: "You win",
    Reason.LOWER_SCORE: "You lose",
    Reason.PUSH: "Push",
}


@dataclass(frozen=True)
class RoundResult:
    """Outcome of a settled round, tagged with its reason."""

    outcome: Outcome
    reason: Reason

    @property
    def message(self) -> str:
        """Return the message shown to the player."""
        return _MESSAGES[self.reason]

    def __str__(self) -> str:
        return f"{self.outcome.name}({self.reason.value})"


def evaluate(player_hand: Hand, dealer_hand: Hand) -> RoundResult:
    """
    Compare the final player and dealer hands.

    Rules apply in priority order. A dealer natural is not special-cased:
    it only blocks the player's blackjack win and otherwise compares as 21.
    """
    player_value = player_hand.value
    dealer_value = dealer_hand.value

    if player_hand.is_blackjack and dealer_value != BLACKJACK:
        return RoundResult(Outcome.WIN, Reason.BLACKJACK)

    # Player busts always loses, even if the dealer busts too
    if player_value > BLACKJACK:
        return RoundResult(Outcome.LOSE, Reason.PLAYER_BUST)

    if dealer_value > BLACKJACK:
        return RoundResult(Outcome.WIN, Reason.DEALER_BUST)

    if player_value > dealer_value:
        return RoundResult(Outcome.WIN, Reason.HIGHER_SCORE)
    if dealer_value > player_value:
        return RoundResult(Outcome.LOSE, Reason.LOWER_SCORE)
    return RoundResult(Outcome.TIE, Reason.PUSH)
