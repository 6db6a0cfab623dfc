"""In-process deck service backed by multi-deck shoes."""

from random import Random
from uuid import uuid4

from core.cards import Card, Rank, Suit
from core.deck.base import DeckHandle, DeckService, ServiceUnavailable


class Shoe:
    """A multi-deck shoe that refills itself when it runs out."""

    def __init__(self, num_decks: int = 6, rng: Random | None = None) -> None:
        """
        Initialize a shuffled shoe with multiple decks.

        Args:
            num_decks: Number of decks in the shoe (typically 6 or 8)
            rng: Random number generator for shuffling
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")

        self._num_decks = num_decks
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.shuffle()

    def shuffle(self) -> None:
        """Return every card to the shoe and shuffle it."""
        self._cards = [
            Card(rank, suit)
            for _ in range(self._num_decks)
            for suit in Suit
            for rank in Rank
        ]
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card, reshuffling a full shoe first if this one is empty."""
        if not self._cards:
            self.shuffle()
        return self._cards.pop()

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def total_cards(self) -> int:
        """Return the total number of cards in a full shoe."""
        return self._num_decks * 52

    @property
    def num_decks(self) -> int:
        return self._num_decks

    def __len__(self) -> int:
        return len(self._cards)


class LocalDeckService(DeckService):
    """Deck service that keeps its shoes in memory. Useful offline."""

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or Random()
        self._shoes: dict[DeckHandle, Shoe] = {}

    def _shoe(self, handle: DeckHandle) -> Shoe:
        try:
            return self._shoes[handle]
        except KeyError:
            raise ServiceUnavailable(f"Unknown deck: {handle}") from None

    async def create_shuffled_deck(self, deck_count: int) -> DeckHandle:
        if deck_count < 1:
            raise ServiceUnavailable("deck_count must be at least 1")
        handle = DeckHandle(uuid4().hex[:12])
        self._shoes[handle] = Shoe(num_decks=deck_count, rng=self._rng)
        return handle

    async def reshuffle(self, handle: DeckHandle) -> None:
        self._shoe(handle).shuffle()

    async def draw(self, handle: DeckHandle, count: int) -> list[Card]:
        shoe = self._shoe(handle)
        return [shoe.draw() for _ in range(count)]

    def discard(self, handle: DeckHandle) -> None:
        self._shoes.pop(handle, None)

    @property
    def shoe_count(self) -> int:
        """Return the number of live shoes."""
        return len(self._shoes)

    def shoe(self, handle: DeckHandle) -> Shoe:
        """Return the shoe behind a handle."""
        return self._shoe(handle)
