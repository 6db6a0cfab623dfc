"""Read-only table snapshots handed to presentation adapters."""

from dataclasses import dataclass
from typing import Any

from core.cards import Card
from core.game.state import Phase
from core.outcome import RoundResult


def card_to_dict(card: Card | None) -> dict[str, Any] | None:
    """Serialize a card for rendering. Hidden cards serialize to None."""
    if card is None:
        return None
    return {
        "code": card.code,
        "value": card.rank.value,
        "suit": card.suit.value,
        "label": card.label,
        "symbol": str(card.suit),
        "is_red": card.is_red,
    }


@dataclass(frozen=True)
class TableSnapshot:
    """
    Everything a presentation adapter needs to render the table.

    While `dealer_hidden` is set, the dealer's first card is None and
    `dealer_score` is None, so no scoring rule leaks to the adapter.
    """

    phase: Phase
    player_cards: tuple[Card, ...]
    dealer_cards: tuple[Card | None, ...]
    dealer_hidden: bool
    player_score: int
    dealer_score: int | None
    status: str
    result: RoundResult | None = None
    error: str | None = None
    can_start: bool = False
    can_hit: bool = False
    can_stand: bool = False

    @property
    def is_settled(self) -> bool:
        return self.phase == Phase.SETTLED

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready representation."""
        return {
            "phase": self.phase.name,
            "player_cards": [card_to_dict(c) for c in self.player_cards],
            "dealer_cards": [card_to_dict(c) for c in self.dealer_cards],
            "dealer_hidden": self.dealer_hidden,
            "player_score": self.player_score,
            "dealer_score": self.dealer_score,
            "status": self.status,
            "outcome": self.result.outcome.value if self.result else None,
            "reason": self.result.reason.value if self.result else None,
            "message": self.result.message if self.result else None,
            "error": self.error,
            "can_start": self.can_start,
            "can_hit": self.can_hit,
            "can_stand": self.can_stand,
        }
