"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field
from typing import Literal


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _parse_backend() -> Literal["remote", "local"]:
    """Parse DECK_BACKEND environment variable."""
    backend = os.getenv("DECK_BACKEND", "remote").strip().lower()
    if backend not in ("remote", "local"):
        raise ValueError(f"DECK_BACKEND must be 'remote' or 'local', got {backend!r}")
    return backend  # type: ignore[return-value]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(
        default_factory=lambda: os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    )
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class DeckServiceConfig:
    """Deck service connection configuration."""

    backend: Literal["remote", "local"] = field(default_factory=_parse_backend)
    base_url: str = field(
        default_factory=lambda: os.getenv("DECK_API_URL", "https://deckofcardsapi.com/api/deck")
    )
    timeout: float = field(
        default_factory=lambda: float(os.getenv("DECK_API_TIMEOUT", "10"))
    )


@dataclass(frozen=True)
class GameConfig:
    """Table rules and dealer pacing."""

    deck_count: int = 6
    dealer_stands_on: int = 17
    # Seconds to wait before each dealer draw, and before settling
    dealer_draw_delay: float = field(
        default_factory=lambda: float(os.getenv("DEALER_DRAW_DELAY", "0.75"))
    )
    settle_delay: float = field(
        default_factory=lambda: float(os.getenv("SETTLE_DELAY", "0.4"))
    )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    session_ttl: int = 3600  # Session timeout in seconds

    deck: DeckServiceConfig = field(default_factory=DeckServiceConfig)
    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()
