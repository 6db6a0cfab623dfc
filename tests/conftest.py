"""Pytest fixtures for blackjack table tests."""

from typing import Callable

import pytest

from core.cards import Card
from core.deck.base import DeckHandle, DeckService, ServiceUnavailable
from core.game import BlackjackTable
from core.hand import Hand


class ScriptedDeckService(DeckService):
    """
    Deck service that deals a fixed card sequence.

    Cards come out in the order they were loaded. Running out of script
    fails the test, which also bounds the dealer's drawing loop.
    """

    def __init__(self) -> None:
        self.cards: list[Card] = []
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()
        self.fail_draw_after: int | None = None
        self.on_draw: Callable[[], None] | None = None
        self.discarded: list[DeckHandle] = []
        self._decks = 0
        self._draws = 0

    def load(self, *codes: str) -> "ScriptedDeckService":
        """Append cards (e.g. "AS", "0H") to the script."""
        self.cards.extend(Card.from_string(c) for c in codes)
        return self

    def _check(self, name: str) -> None:
        if name in self.fail_on:
            raise ServiceUnavailable(f"{name} failed")

    async def create_shuffled_deck(self, deck_count: int) -> DeckHandle:
        self.calls.append(("create", deck_count))
        self._check("create")
        self._decks += 1
        return DeckHandle(f"deck-{self._decks}")

    async def reshuffle(self, handle: DeckHandle) -> None:
        self.calls.append(("reshuffle", handle))
        self._check("reshuffle")

    async def draw(self, handle: DeckHandle, count: int) -> list[Card]:
        self.calls.append(("draw", handle, count))
        if self.on_draw is not None:
            self.on_draw()
        self._check("draw")
        if self.fail_draw_after is not None and self._draws >= self.fail_draw_after:
            raise ServiceUnavailable("draw failed")
        self._draws += 1

        if len(self.cards) < count:
            pytest.fail(f"Script exhausted: asked for {count}, {len(self.cards)} left")
        drawn, self.cards = self.cards[:count], self.cards[count:]
        return drawn

    def discard(self, handle: DeckHandle) -> None:
        self.discarded.append(handle)

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def deck():
    """A scripted deck service with no cards loaded."""
    return ScriptedDeckService()


@pytest.fixture
def sleeps():
    """Delays requested by the table, in order."""
    return []


@pytest.fixture
def table(deck, sleeps):
    """A table on the scripted deck whose pauses are recorded, not slept."""

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return BlackjackTable(
        deck,
        deck_count=6,
        dealer_draw_delay=0.75,
        settle_delay=0.4,
        sleep=fake_sleep,
    )


@pytest.fixture
def make_hand():
    """Build a hand from card strings."""

    def _make_hand(*codes: str) -> Hand:
        hand = Hand()
        for code in codes:
            hand.add_card(Card.from_string(code))
        return hand

    return _make_hand


@pytest.fixture
def blackjack_hand(make_hand):
    """A natural blackjack hand."""
    return make_hand("AS", "KH")


@pytest.fixture
def soft_17_hand(make_hand):
    """A soft 17 hand (A-6)."""
    return make_hand("AS", "6H")


@pytest.fixture
def hard_16_hand(make_hand):
    """A hard 16 hand (10-6)."""
    return make_hand("0S", "6H")


@pytest.fixture
def bust_hand(make_hand):
    """A busted hand."""
    return make_hand("0S", "6H", "KC")
