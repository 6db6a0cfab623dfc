"""Blackjack table engine with state machine."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

from transitions import Machine

from core.cards import Card
from core.deck.base import DeckHandle, DeckService, ServiceUnavailable
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.snapshot import TableSnapshot
from core.game.state import Phase
from core.hand import BLACKJACK, Hand
from core.outcome import RoundResult, evaluate

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]

STATUS_DEALING = "Shuffling..."
STATUS_PLAYER_TURN = "Hit or stand"
STATUS_DRAWING = "Drawing card..."
STATUS_HIT_AGAIN = "Hit again or stand"
STATUS_DEALER_TURN = "Dealer's turn..."
STATUS_CONNECTION_ERROR = "Connection error. Try again."


class BlackjackTable:
    """
    One player against an automated dealer, dealt from a deck service.

    This is the core game logic, completely UI-agnostic. The table owns the
    deck handle, both hands and the phase; they change only through its
    methods. Communication happens through events and return values only.
    """

    # State machine states
    STATES = [p.name.lower() for p in Phase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal", "source": ["idle", "settled"], "dest": "dealing"},
        {"trigger": "cards_dealt", "source": "dealing", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "player_busts", "source": "player_turn", "dest": "settled"},
        {"trigger": "settle", "source": "dealer_turn", "dest": "settled"},
        {"trigger": "abort", "source": ["dealing", "player_turn", "dealer_turn"], "dest": "idle"},
        {"trigger": "reset", "source": "settled", "dest": "idle"},
    ]

    def __init__(
        self,
        deck_service: DeckService,
        deck_count: int = 6,
        dealer_stands_on: int = 17,
        dealer_draw_delay: float = 0.75,
        settle_delay: float = 0.4,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """
        Initialize an idle table.

        Args:
            deck_service: Where shoes are shuffled and cards drawn
            deck_count: Decks per shoe when a new shoe is requested
            dealer_stands_on: Dealer stops drawing at this score or above
            dealer_draw_delay: Pause before each dealer draw, in seconds
            settle_delay: Pause between the dealer's last card and settlement
            sleep: Coroutine used for the pauses
        """
        self.deck_service = deck_service
        self.deck_count = deck_count
        self.dealer_stands_on = dealer_stands_on
        self.dealer_draw_delay = dealer_draw_delay
        self.settle_delay = settle_delay
        self._sleep = sleep

        self.deck_handle: DeckHandle | None = None
        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.dealer_hidden = True
        self.result: RoundResult | None = None
        self.status = ""
        self.error: str | None = None
        self.events = EventEmitter()
        self._request_pending = False

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="idle",
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_on_phase_change",
        )

    @property
    def phase(self) -> Phase:
        """Get current phase as enum."""
        return Phase[self._machine_state.upper()]  # type: ignore

    @property
    def is_active(self) -> bool:
        """Check if the player is the one to act."""
        return self.phase == Phase.PLAYER_TURN

    @property
    def request_pending(self) -> bool:
        """Check if a deck service request is in flight."""
        return self._request_pending

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to table events."""
        self.events.subscribe(handler, event_type)

    def unsubscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Unsubscribe from table events."""
        self.events.unsubscribe(handler, event_type)

    def snapshot(self) -> TableSnapshot:
        """Return what the presentation layer may see right now."""
        dealer_cards = tuple(
            None if self.dealer_hidden and i == 0 else card
            for i, card in enumerate(self.dealer_hand.cards)
        )
        return TableSnapshot(
            phase=self.phase,
            player_cards=tuple(self.player_hand.cards),
            dealer_cards=dealer_cards,
            dealer_hidden=self.dealer_hidden,
            player_score=self.player_hand.value,
            dealer_score=None if self.dealer_hidden else self.dealer_hand.value,
            status=self.status,
            result=self.result,
            error=self.error,
            can_start=self.can_start,
            can_hit=self.can_hit,
            can_stand=self.can_stand,
        )

    def _emit(self, event_type: EventType, **data) -> GameEvent:
        """Emit an event carrying a snapshot of the table."""
        return self.events.emit_new(event_type, snapshot=self.snapshot(), **data)

    def _on_phase_change(self) -> None:
        self._emit(EventType.PHASE_CHANGED, phase=self.phase.name)

    @asynccontextmanager
    async def _deck_request(self) -> AsyncIterator[None]:
        """Hold the action gates closed while a deck request is in flight."""
        self._request_pending = True
        try:
            yield
        finally:
            self._request_pending = False

    async def _draw(self, count: int) -> list[Card]:
        """Draw cards from the current shoe."""
        if self.deck_handle is None:
            raise ServiceUnavailable("No shoe on the table")
        async with self._deck_request():
            return await self.deck_service.draw(self.deck_handle, count)

    async def _prepare_shoe(self) -> None:
        """Reshuffle the current shoe, or request a fresh one."""
        async with self._deck_request():
            if self.deck_handle is None:
                self.deck_handle = await self.deck_service.create_shuffled_deck(self.deck_count)
                logger.info("New %d-deck shoe %s", self.deck_count, self.deck_handle)
            else:
                await self.deck_service.reshuffle(self.deck_handle)
        self._emit(EventType.SHOE_SHUFFLED, deck=self.deck_handle)

    def _clear_hands(self) -> None:
        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.dealer_hidden = True
        self.result = None

    def _abort(self, exc: ServiceUnavailable) -> None:
        """Drop the round and the shoe after a deck service failure."""
        logger.warning("Deck service failed during %s, resetting table: %s", self.phase, exc)
        if self.deck_handle is not None:
            self.deck_service.discard(self.deck_handle)
            self.deck_handle = None
        self._clear_hands()
        self.error = STATUS_CONNECTION_ERROR
        self.status = STATUS_CONNECTION_ERROR
        self.abort()
        self._emit(EventType.SERVICE_ERROR, detail=str(exc))

    async def start_round(self) -> bool:
        """
        Shuffle and deal a new round.

        Returns:
            True if the round was dealt, False if the table was not ready
            or the deck service failed
        """
        if not self.can_start:
            logger.debug("start_round ignored during %s", self.phase)
            return False

        # History holds the current round only
        self.events.clear_history()
        self._clear_hands()
        self.error = None
        self.status = STATUS_DEALING
        self.deal()

        try:
            await self._prepare_shoe()
            cards = await self._draw(4)
        except ServiceUnavailable as exc:
            self._abort(exc)
            return False

        # Deal: player, dealer (face down), player, dealer
        for i, card in enumerate(cards):
            hand = self.player_hand if i % 2 == 0 else self.dealer_hand
            hand.add_card(card)
            self._emit(
                EventType.CARD_DEALT,
                card="??" if i == 1 else str(card),
                hand="player" if hand is self.player_hand else "dealer",
            )

        logger.info(
            "Round started: player %s, dealer shows %s",
            self.player_hand,
            self.dealer_hand.cards[1],
        )
        self._emit(EventType.ROUND_STARTED)

        if self.player_hand.value == BLACKJACK:
            # A natural takes no player action
            self.status = STATUS_DEALER_TURN
            self.cards_dealt()
            self._emit(EventType.PLAYER_BLACKJACK)
            return await self._play_dealer()

        self.status = STATUS_PLAYER_TURN
        self.cards_dealt()
        return True

    async def hit(self) -> bool:
        """
        Player hits (takes another card).

        Returns:
            True if a card was drawn, False if hitting was not allowed
            or the deck service failed
        """
        if not self.can_hit:
            logger.debug("hit ignored during %s", self.phase)
            return False

        self.status = STATUS_DRAWING
        try:
            card = (await self._draw(1))[0]
        except ServiceUnavailable as exc:
            self._abort(exc)
            return False

        self.player_hand.add_card(card)
        value = self.player_hand.value
        if value < BLACKJACK:
            self.status = STATUS_HIT_AGAIN
        elif value == BLACKJACK:
            self.status = STATUS_DEALER_TURN
        self._emit(EventType.PLAYER_HIT, card=str(card), hand_value=value)

        if value > BLACKJACK:
            # Dealer hand is shown as dealt, the dealer does not play
            self.dealer_hidden = False
            self._emit(EventType.PLAYER_BUSTS, hand_value=value)
            self._settle(self.player_busts)
            return True

        if value == BLACKJACK:
            return await self._play_dealer()

        return True

    async def stand(self) -> bool:
        """
        Player stands (keeps current hand).

        Returns:
            True unless standing was not allowed or the dealer's turn
            was cut short by a deck service failure
        """
        if not self.can_stand:
            logger.debug("stand ignored during %s", self.phase)
            return False

        self._emit(EventType.PLAYER_STAND, hand_value=self.player_hand.value)
        return await self._play_dealer()

    def clear(self) -> bool:
        """Return a settled table to idle. The shoe is kept."""
        if self.phase != Phase.SETTLED:
            return False
        self._clear_hands()
        self.status = ""
        self.reset()
        return True

    async def _play_dealer(self) -> bool:
        """Reveal the hole card and draw until the dealer stands."""
        self.status = STATUS_DEALER_TURN
        self.dealer_hidden = False
        self.player_done()
        self._emit(
            EventType.DEALER_REVEALS,
            card=str(self.dealer_hand.cards[0]),
            hand_value=self.dealer_hand.value,
        )

        # Stands on every 17, soft or hard
        while self.dealer_hand.value < self.dealer_stands_on:
            await self._sleep(self.dealer_draw_delay)
            try:
                card = (await self._draw(1))[0]
            except ServiceUnavailable as exc:
                self._abort(exc)
                return False
            self.dealer_hand.add_card(card)
            self._emit(EventType.DEALER_HITS, card=str(card), hand_value=self.dealer_hand.value)

        if self.dealer_hand.is_busted:
            self._emit(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
        else:
            self._emit(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)

        await self._sleep(self.settle_delay)
        self._settle(self.settle)
        return True

    def _settle(self, trigger: Callable[[], bool]) -> None:
        """Record the outcome and fire the transition into SETTLED."""
        self.result = evaluate(self.player_hand, self.dealer_hand)
        self.status = self.result.message
        trigger()
        logger.info(
            "Round settled: %s (player %d, dealer %d)",
            self.result,
            self.player_hand.value,
            self.dealer_hand.value,
        )
        self._emit(
            EventType.ROUND_SETTLED,
            outcome=self.result.outcome.value,
            reason=self.result.reason.value,
        )

    @property
    def can_start(self) -> bool:
        """Check if a new round may be dealt."""
        return self.phase in (Phase.IDLE, Phase.SETTLED) and not self._request_pending

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return (
            self.phase == Phase.PLAYER_TURN
            and not self._request_pending
            and self.player_hand.value < BLACKJACK
        )

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.can_hit
