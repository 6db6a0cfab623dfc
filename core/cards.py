"""Card, Rank and Suit - immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class Suit(Enum):
    """Card suits, valued by their deck service names."""

    SPADES = "SPADES"
    HEARTS = "HEARTS"
    DIAMONDS = "DIAMONDS"
    CLUBS = "CLUBS"

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Check if this suit is printed in red."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks, valued by their deck service names."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "JACK"
    QUEEN = "QUEEN"
    KING = "KING"
    ACE = "ACE"

    def __str__(self) -> str:
        # Face ranks print as their initial, numbers as themselves
        return self.value[0] if len(self.value) > 2 else self.value

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value.isdigit():
            return int(self.value)
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def code(self) -> str:
        """Return the one-character code used by the deck service ("0" for ten)."""
        return "0" if self == Rank.TEN else str(self)


_RANK_CODES = {
    "2": Rank.TWO,
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "0": Rank.TEN,
    "T": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
    "A": Rank.ACE,
}

_SUIT_CODES = {
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @property
    def is_red(self) -> bool:
        return self.suit.is_red

    @property
    def label(self) -> str:
        """Return the corner label printed on the card face."""
        return str(self.rank)

    @property
    def code(self) -> str:
        """Return the deck service card code, e.g. 'KH' or '0S'."""
        return f"{self.rank.code}{self.suit.value[0]}"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh', '0D'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANK_CODES:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_CODES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_CODES[rank_str], _SUIT_CODES[suit_str])

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Card":
        """
        Create a card from a deck service card object.

        Args:
            data: Mapping with at least "value" (e.g. "KING", "7") and
                "suit" (e.g. "HEARTS")

        Raises:
            ValueError: If the value or suit is missing or unknown
        """
        try:
            return cls(Rank(str(data["value"]).upper()), Suit(str(data["suit"]).upper()))
        except KeyError as exc:
            raise ValueError(f"Card payload missing field {exc}") from exc

    def to_api(self) -> dict[str, str]:
        """Return the deck service representation of this card."""
        return {"code": self.code, "value": self.rank.value, "suit": self.suit.value}
