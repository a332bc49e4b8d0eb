"""
Route Dependencies

Resolve the session registry from the application and the store of the
session named in the path.
"""

from fastapi import Depends, Request

from seatplan.core.sessions import SessionRegistry
from seatplan.core.store import ArrangementStore


def get_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_store(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> ArrangementStore:
    return registry.get(session_id)
