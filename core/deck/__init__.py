"""Deck service clients."""

from core.deck.base import DeckHandle, DeckService, DeckServiceError, ServiceUnavailable
from core.deck.local import LocalDeckService, Shoe
from core.deck.remote import RemoteDeckService

__all__ = [
    "DeckHandle",
    "DeckService",
    "DeckServiceError",
    "ServiceUnavailable",
    "LocalDeckService",
    "RemoteDeckService",
    "Shoe",
]
