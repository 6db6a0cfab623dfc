"""Deck service client for the deckofcardsapi.com REST contract."""

import logging
from typing import Any

import httpx

from core.cards import Card
from core.deck.base import DeckHandle, DeckService, ServiceUnavailable

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://deckofcardsapi.com/api/deck"


class RemoteDeckService(DeckService):
    """
    Deck service backed by a remote HTTP API.

    Endpoints used (relative to the base URL):
        GET new/shuffle/?deck_count=N -> {"success": true, "deck_id": ...}
        GET {deck_id}/shuffle/        -> {"success": true, ...}
        GET {deck_id}/draw/?count=N   -> {"success": true, "cards": [...]}
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Root URL of the deck API
            timeout: Request timeout in seconds (ignored when `client` is given)
            client: Pre-configured HTTP client; the service will not close it
        """
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Issue a GET request and return the decoded success payload."""
        url = f"{self._base_url}/{path}"
        logger.debug("GET %s params=%s", url, params)

        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise ServiceUnavailable(f"Deck service request failed: {exc}") from exc
        except ValueError as exc:
            raise ServiceUnavailable("Deck service returned invalid JSON") from exc

        if not isinstance(payload, dict):
            raise ServiceUnavailable("Deck service returned an unexpected payload")
        if payload.get("success") is False:
            raise ServiceUnavailable(payload.get("error", "Deck service reported failure"))
        return payload

    async def create_shuffled_deck(self, deck_count: int) -> DeckHandle:
        payload = await self._get("new/shuffle/", params={"deck_count": deck_count})
        deck_id = payload.get("deck_id")
        if not deck_id:
            raise ServiceUnavailable("Deck service response has no deck_id")
        return DeckHandle(deck_id)

    async def reshuffle(self, handle: DeckHandle) -> None:
        await self._get(f"{handle}/shuffle/")

    async def draw(self, handle: DeckHandle, count: int) -> list[Card]:
        payload = await self._get(f"{handle}/draw/", params={"count": count})

        try:
            cards = [Card.from_api(c) for c in payload.get("cards", [])]
        except (TypeError, ValueError) as exc:
            raise ServiceUnavailable(f"Deck service returned a bad card: {exc}") from exc

        if len(cards) != count:
            raise ServiceUnavailable(f"Asked for {count} cards, got {len(cards)}")
        return cards

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
