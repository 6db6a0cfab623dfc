"""Pydantic schemas for API requests and responses."""

from typing import Literal

from pydantic import BaseModel


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand"]


class SessionResponse(BaseModel):
    """A newly created table session."""

    session_id: str


class CardResponse(BaseModel):
    """Card representation."""

    code: str
    value: str
    suit: str
    label: str
    symbol: str
    is_red: bool


class HandResponse(BaseModel):
    """Hand representation. Hidden cards are null."""

    cards: list[CardResponse | None]
    score: int | None


class TableStateResponse(BaseModel):
    """Current table state."""

    phase: str
    player_hand: HandResponse
    dealer_hand: HandResponse
    dealer_hidden: bool
    status: str
    outcome: Literal["win", "lose", "tie"] | None = None
    reason: str | None = None
    message: str | None = None
    error: str | None = None
    can_start: bool
    can_hit: bool
    can_stand: bool
