"""
Sessions Routes

POST /sessions - Open an editing session with a freshly initialized arrangement.
DELETE /sessions/{session_id} - Drop a session and its arrangement.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from seatplan.core.sessions import SessionRegistry
from seatplan.models.api import SessionCreateRequest, SessionResponse
from seatplan.routes.deps import get_registry


router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(
    request: Optional[SessionCreateRequest] = None,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionResponse:
    """
    Open an editing session.

    The session starts with the default menu options and one room, which
    is the current room.
    """
    table_limit = request.table_limit if request else None
    session_id = registry.create(table_limit=table_limit)
    store = registry.get(session_id)
    return SessionResponse(
        session_id=session_id,
        table_limit=store.table_limit,
        state=store.initialize(),
    )


@router.delete("/{session_id}", status_code=204)
async def close_session(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> Response:
    registry.close(session_id)
    return Response(status_code=204)
