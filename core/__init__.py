"""Core blackjack engine - 100% UI-agnostic."""

from core.cards import Card, Rank, Suit
from core.hand import Hand, score
from core.outcome import Outcome, Reason, RoundResult, evaluate

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "Hand",
    "score",
    "Outcome",
    "Reason",
    "RoundResult",
    "evaluate",
]
