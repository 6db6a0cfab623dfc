"""Table engine and state management."""

from core.game.events import GameEvent, EventType
from core.game.state import Phase
from core.game.snapshot import TableSnapshot
from core.game.engine import BlackjackTable

__all__ = [
    "GameEvent",
    "EventType",
    "Phase",
    "TableSnapshot",
    "BlackjackTable",
]
