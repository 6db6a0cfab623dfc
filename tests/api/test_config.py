"""Tests for configuration classes."""

import os
from unittest.mock import patch

import pytest

from api.dependencies import create_deck_service, create_table
from config import (
    AppConfig,
    CORSConfig,
    DeckServiceConfig,
    GameConfig,
    RateLimitConfig,
    SecurityConfig,
    _parse_cors_origins,
)
from core.deck import LocalDeckService, RemoteDeckService


class TestCORSConfig:
    """Tests for CORSConfig class."""

    def test_cors_default_origins(self):
        with patch.dict(os.environ, {}, clear=True):
            assert "http://localhost:8000" in CORSConfig().allowed_origins

    def test_cors_parses_env_var(self):
        env_origins = "http://example.com,  http://localhost:3000  ,"
        with patch.dict(os.environ, {"CORS_ORIGINS": env_origins}):
            assert _parse_cors_origins() == ["http://example.com", "http://localhost:3000"]


class TestRateLimitConfig:
    """Tests for RateLimitConfig class."""

    def test_rate_limit_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = RateLimitConfig()

            assert config.enabled is True
            assert config.requests_per_minute == 60

    def test_rate_limit_from_env(self):
        with patch.dict(os.environ, {"RATE_LIMIT_ENABLED": "FALSE", "RATE_LIMIT_RPM": "120"}):
            config = RateLimitConfig()

            assert config.enabled is False
            assert config.requests_per_minute == 120


class TestSecurityConfig:
    """Tests for SecurityConfig class."""

    def test_secret_key_auto_generates(self):
        with patch.dict(os.environ, {}, clear=True):
            assert SecurityConfig().secret_key

    def test_secret_key_from_env(self):
        with patch.dict(os.environ, {"SECRET_KEY": "my-super-secret-key-12345"}):
            assert SecurityConfig().secret_key == "my-super-secret-key-12345"


class TestDeckServiceConfig:
    """Tests for DeckServiceConfig class."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = DeckServiceConfig()

            assert config.backend == "remote"
            assert config.base_url == "https://deckofcardsapi.com/api/deck"
            assert config.timeout == 10.0

    def test_from_env(self):
        env = {
            "DECK_BACKEND": "Local",
            "DECK_API_URL": "http://decks.internal/api/deck",
            "DECK_API_TIMEOUT": "2.5",
        }
        with patch.dict(os.environ, env):
            config = DeckServiceConfig()

            assert config.backend == "local"
            assert config.base_url == "http://decks.internal/api/deck"
            assert config.timeout == 2.5

    def test_unknown_backend(self):
        with patch.dict(os.environ, {"DECK_BACKEND": "carrier-pigeon"}):
            with pytest.raises(ValueError):
                DeckServiceConfig()


class TestGameConfig:
    """Tests for GameConfig class."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = GameConfig()

            assert config.deck_count == 6
            assert config.dealer_stands_on == 17
            assert config.dealer_draw_delay == 0.75
            assert config.settle_delay == 0.4

    def test_delays_from_env(self):
        with patch.dict(os.environ, {"DEALER_DRAW_DELAY": "0", "SETTLE_DELAY": "0"}):
            config = GameConfig()

            assert config.dealer_draw_delay == 0.0
            assert config.settle_delay == 0.0


class TestAppConfig:
    """Tests for AppConfig class."""

    def test_log_level_normalized(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            assert AppConfig().log_level == "DEBUG"


class TestFactories:
    """Tests for building services and tables from configuration."""

    def test_local_backend(self):
        with patch.dict(os.environ, {"DECK_BACKEND": "local"}):
            assert isinstance(create_deck_service(DeckServiceConfig()), LocalDeckService)

    @pytest.mark.asyncio
    async def test_remote_backend(self):
        with patch.dict(os.environ, {"DECK_BACKEND": "remote"}):
            service = create_deck_service(DeckServiceConfig())

        assert isinstance(service, RemoteDeckService)
        await service.aclose()

    def test_create_table_unpaced(self, deck):
        with patch("api.dependencies._deck_service", deck):
            table = create_table(paced=False, game_config=GameConfig(dealer_draw_delay=0.75))

        assert table.deck_service is deck
        assert table.dealer_draw_delay == 0.0
        assert table.settle_delay == 0.0
        assert table.deck_count == 6

    def test_create_table_paced(self, deck):
        game_config = GameConfig(dealer_draw_delay=0.5, settle_delay=0.25)
        with patch("api.dependencies._deck_service", deck):
            table = create_table(paced=True, game_config=game_config)

        assert table.dealer_draw_delay == 0.5
        assert table.settle_delay == 0.25
