"""
Tables Routes

CRUD for the tables of a session. Seats follow table capacity and are
never created or deleted here directly.
"""

from typing import List

from fastapi import APIRouter, Depends

from seatplan.core.errors import NotFound
from seatplan.core.store import ArrangementStore
from seatplan.models.api import TableDetail, TableView
from seatplan.models.arrangement import Seat, SeatAnchor, Table, TableCreate, TableUpdate
from seatplan.routes.deps import get_store


router = APIRouter(prefix="/sessions/{session_id}/tables", tags=["Tables"])


def _view(store: ArrangementStore, table: Table) -> TableView:
    return TableView(
        **table.model_dump(),
        seat_count=len(store.seats_for_table(table.id)),
        seats_over_capacity=store.seats_over_capacity(table.id),
    )


@router.get("", response_model=List[TableView])
async def list_tables(store: ArrangementStore = Depends(get_store)) -> List[TableView]:
    return [_view(store, table) for table in store.list_tables()]


@router.post("", response_model=TableView, status_code=201)
async def add_table(request: TableCreate, store: ArrangementStore = Depends(get_store)) -> TableView:
    """
    Add a table.

    Capacity, width and height default to the shape's catalog values.
    Fails with 409 once the session's table limit is reached.
    """
    table = store.add_table(request.model_dump(exclude_unset=True))
    return _view(store, table)


@router.get("/{table_id}", response_model=TableDetail)
async def get_table(table_id: str, store: ArrangementStore = Depends(get_store)) -> TableDetail:
    table = store.get_table(table_id)
    if table is None:
        raise NotFound("table", table_id)
    return TableDetail(**_view(store, table).model_dump(), seats=store.seats_for_table(table_id))


@router.patch("/{table_id}", response_model=TableView)
async def update_table(table_id: str, request: TableUpdate, store: ArrangementStore = Depends(get_store)) -> TableView:
    """
    Update a table.

    A capacity change adds or removes seats. Occupied seats are never
    removed; `seats_over_capacity` reports how many were kept.
    """
    table = store.update_table(table_id, request.model_dump(exclude_unset=True))
    return _view(store, table)


@router.delete("/{table_id}", response_model=Table)
async def remove_table(table_id: str, store: ArrangementStore = Depends(get_store)) -> Table:
    return store.remove_table(table_id)


@router.get("/{table_id}/seats", response_model=List[Seat])
async def table_seats(table_id: str, store: ArrangementStore = Depends(get_store)) -> List[Seat]:
    if store.get_table(table_id) is None:
        raise NotFound("table", table_id)
    return store.seats_for_table(table_id)


@router.get("/{table_id}/layout", response_model=List[SeatAnchor])
async def table_layout(table_id: str, store: ArrangementStore = Depends(get_store)) -> List[SeatAnchor]:
    """Room coordinates of the seats around the table."""
    return store.seat_layout(table_id)
