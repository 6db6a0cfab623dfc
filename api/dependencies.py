"""Shared deck service and table construction for the API layer."""

import logging

from config import DeckServiceConfig, GameConfig, config
from core.deck import DeckService, LocalDeckService, RemoteDeckService
from core.game import BlackjackTable

logger = logging.getLogger(__name__)

# Global deck service instance
_deck_service: DeckService | None = None


def create_deck_service(deck_config: DeckServiceConfig) -> DeckService:
    """
    Create the deck service selected by configuration.

    Args:
        deck_config: Deck service configuration section

    Returns:
        A LocalDeckService for backend "local", otherwise a RemoteDeckService
    """
    if deck_config.backend == "local":
        logger.info("Using in-process deck service")
        return LocalDeckService()
    logger.info("Using remote deck service at %s", deck_config.base_url)
    return RemoteDeckService(base_url=deck_config.base_url, timeout=deck_config.timeout)


def get_deck_service() -> DeckService:
    """Get or create the deck service."""
    global _deck_service
    if _deck_service is None:
        _deck_service = create_deck_service(config.deck)
    return _deck_service


def set_deck_service(service: DeckService | None) -> None:
    """Replace the shared deck service."""
    global _deck_service
    _deck_service = service


async def close_deck_service() -> None:
    """Close the shared deck service, if one was created."""
    global _deck_service
    if _deck_service is not None:
        await _deck_service.aclose()
        _deck_service = None


def create_table(paced: bool = True, game_config: GameConfig | None = None) -> BlackjackTable:
    """
    Create a table on the shared deck service.

    Args:
        paced: Keep the dealer pacing delays; request/response adapters
            that render only the final state pass False
        game_config: Table rules (defaults to the global configuration)
    """
    game_config = game_config or config.game
    return BlackjackTable(
        get_deck_service(),
        deck_count=game_config.deck_count,
        dealer_stands_on=game_config.dealer_stands_on,
        dealer_draw_delay=game_config.dealer_draw_delay if paced else 0.0,
        settle_delay=game_config.settle_delay if paced else 0.0,
    )
