"""Table API endpoints."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Header

from api.dependencies import create_table
from api.schemas import (
    ActionRequest,
    CardResponse,
    HandResponse,
    SessionResponse,
    TableStateResponse,
)
from api.session import create_session, get_session, touch_session
from core.game import BlackjackTable, TableSnapshot

router = APIRouter()


def _state_response(snapshot: TableSnapshot) -> TableStateResponse:
    """Convert a table snapshot to a response."""
    data = snapshot.to_dict()
    return TableStateResponse(
        phase=data["phase"],
        player_hand=HandResponse(
            cards=[CardResponse(**c) for c in data["player_cards"]],
            score=data["player_score"],
        ),
        dealer_hand=HandResponse(
            cards=[CardResponse(**c) if c is not None else None for c in data["dealer_cards"]],
            score=data["dealer_score"],
        ),
        dealer_hidden=data["dealer_hidden"],
        status=data["status"],
        outcome=data["outcome"],
        reason=data["reason"],
        message=data["message"],
        error=data["error"],
        can_start=data["can_start"],
        can_hit=data["can_hit"],
        can_stand=data["can_stand"],
    )


async def _get_table(session_id: str) -> BlackjackTable:
    """Look up the session's table, refreshing its expiry."""
    table = await get_session(session_id)
    if table is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    await touch_session(session_id, table)
    return table


@router.post("/new")
async def new_table() -> SessionResponse:
    """Open a table and return its session id."""
    # Responses carry only the final state, so the dealer is not paced
    table = create_table(paced=False)
    session_id = await create_session(table)
    return SessionResponse(session_id=session_id)


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TableStateResponse:
    """Get current table state."""
    table = await _get_table(session_id)
    return _state_response(table.snapshot())


@router.post("/deal")
async def deal(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TableStateResponse:
    """Shuffle and deal a new round. Out of phase this is a no-op."""
    table = await _get_table(session_id)
    allowed = table.can_start

    if not await table.start_round() and allowed:
        raise HTTPException(status_code=503, detail=table.status)

    return _state_response(table.snapshot())


@router.post("/action")
async def player_action(
    request: ActionRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TableStateResponse:
    """Execute a player action. Out of phase this is a no-op."""
    table = await _get_table(session_id)

    actions = {
        "hit": table.hit,
        "stand": table.stand,
    }

    allowed = table.can_hit if request.action == "hit" else table.can_stand

    if not await actions[request.action]() and allowed:
        raise HTTPException(status_code=503, detail=table.status)

    return _state_response(table.snapshot())


@router.post("/clear")
async def clear(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TableStateResponse:
    """Clear a settled table back to idle."""
    table = await _get_table(session_id)
    table.clear()
    return _state_response(table.snapshot())
