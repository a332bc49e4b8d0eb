"""
Reports Routes

GET /statistics - Occupancy and menu usage.
GET /export - The arrangement as JSON or CSV.
GET/PUT /table-limit - The tier's table ceiling.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from seatplan.core.store import ArrangementStore
from seatplan.models.api import SeatingStatistics, TableLimitRequest, TableLimitResponse
from seatplan.routes.deps import get_store


router = APIRouter(prefix="/sessions/{session_id}", tags=["Reports"])

MEDIA_TYPES = {"json": "application/json", "csv": "text/csv"}


@router.get("/statistics", response_model=SeatingStatistics)
async def statistics(store: ArrangementStore = Depends(get_store)) -> SeatingStatistics:
    return store.statistics()


@router.get("/export", response_class=PlainTextResponse)
async def export_arrangement(
    format: Literal["json", "csv"] = Query("json", description="Export format"),
    store: ArrangementStore = Depends(get_store),
) -> PlainTextResponse:
    """
    Export the arrangement.

    `json` returns the full snapshot; `csv` returns one row per seat.
    """
    return PlainTextResponse(store.export(format), media_type=MEDIA_TYPES[format])


def _limit(store: ArrangementStore) -> TableLimitResponse:
    return TableLimitResponse(
        limit=store.table_limit,
        table_count=len(store.list_tables()),
        reached=store.is_table_limit_reached(),
    )


@router.get("/table-limit", response_model=TableLimitResponse)
async def get_table_limit(store: ArrangementStore = Depends(get_store)) -> TableLimitResponse:
    return _limit(store)


@router.put("/table-limit", response_model=TableLimitResponse)
async def set_table_limit(request: TableLimitRequest, store: ArrangementStore = Depends(get_store)) -> TableLimitResponse:
    store.set_table_limit(request.limit)
    return _limit(store)
