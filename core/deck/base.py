"""Abstract deck service contract consumed by the game engine."""

from abc import ABC, abstractmethod
from typing import NewType

from core.cards import Card

# Opaque identifier bound to one shuffled shoe on the deck service
DeckHandle = NewType("DeckHandle", str)


class DeckServiceError(Exception):
    """Base class for deck service errors."""


class ServiceUnavailable(DeckServiceError):
    """The deck service could not be reached or returned a failure."""


class DeckService(ABC):
    """
    A service that shuffles shoes and draws cards from them.

    Draws are treated as infinite: replenishing an exhausted shoe and card
    uniqueness within a shoe are the service's responsibility. Every method
    raises ServiceUnavailable on failure.
    """

    @abstractmethod
    async def create_shuffled_deck(self, deck_count: int) -> DeckHandle:
        """Create a new shuffled shoe of `deck_count` decks."""
        ...

    @abstractmethod
    async def reshuffle(self, handle: DeckHandle) -> None:
        """Return all drawn cards to the shoe and shuffle it."""
        ...

    @abstractmethod
    async def draw(self, handle: DeckHandle, count: int) -> list[Card]:
        """Draw exactly `count` cards, in draw order."""
        ...

    def discard(self, handle: DeckHandle) -> None:
        """Forget a shoe the table no longer uses. Unknown handles are ignored."""

    async def aclose(self) -> None:
        """Release any resources held by the service."""
