"""Tests for Card, Rank and Suit."""

import pytest

from core.cards import Card, Rank, Suit


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test card blackjack values."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.NINE, Suit.HEARTS).value == 9
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_card_is_ace(self):
        """Test ace detection."""
        assert Card(Rank.ACE, Suit.SPADES).is_ace
        assert not Card(Rank.KING, Suit.SPADES).is_ace

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10♠") == Card(Rank.TEN, Suit.SPADES)
        assert Card.from_string("0D") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("kc") == Card(Rank.KING, Suit.CLUBS)

    def test_card_from_string_invalid(self):
        """Test that bad strings are rejected."""
        with pytest.raises(ValueError):
            Card.from_string("X")
        with pytest.raises(ValueError):
            Card.from_string("1S")
        with pytest.raises(ValueError):
            Card.from_string("AX")

    def test_card_from_api(self):
        """Test parsing a deck service card object."""
        card = Card.from_api({
            "code": "KH",
            "image": "https://deckofcardsapi.com/static/img/KH.png",
            "value": "KING",
            "suit": "HEARTS",
        })
        assert card == Card(Rank.KING, Suit.HEARTS)

        assert Card.from_api({"value": "10", "suit": "SPADES"}) == Card(Rank.TEN, Suit.SPADES)

    def test_card_from_api_invalid(self):
        """Test that unknown or missing fields are rejected."""
        with pytest.raises(ValueError):
            Card.from_api({"value": "KNIGHT", "suit": "HEARTS"})
        with pytest.raises(ValueError):
            Card.from_api({"value": "KING", "suit": "STARS"})
        with pytest.raises(ValueError):
            Card.from_api({"value": "KING"})

    def test_card_to_api(self):
        """Test the deck service representation."""
        assert Card(Rank.TEN, Suit.SPADES).to_api() == {
            "code": "0S",
            "value": "10",
            "suit": "SPADES",
        }
        card = Card(Rank.QUEEN, Suit.DIAMONDS)
        assert Card.from_api(card.to_api()) == card

    def test_card_labels(self):
        """Test corner labels and card strings."""
        assert Card(Rank.KING, Suit.HEARTS).label == "K"
        assert Card(Rank.ACE, Suit.SPADES).label == "A"
        assert Card(Rank.TEN, Suit.CLUBS).label == "10"
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"

    def test_card_colors(self):
        """Test red and black suits."""
        assert Card(Rank.TWO, Suit.HEARTS).is_red
        assert Card(Rank.TWO, Suit.DIAMONDS).is_red
        assert not Card(Rank.TWO, Suit.SPADES).is_red
        assert not Card(Rank.TWO, Suit.CLUBS).is_red


class TestRank:
    """Tests for the Rank enum."""

    def test_all_thirteen_ranks(self):
        assert len(Rank) == 13

    def test_codes(self):
        """Test deck service rank codes."""
        assert Rank.TEN.code == "0"
        assert Rank.JACK.code == "J"
        assert Rank.SEVEN.code == "7"
