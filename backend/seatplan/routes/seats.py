"""
Seats Routes

Guest placement, menu selection and special requirements per seat.
"""

from typing import List

from fastapi import APIRouter, Depends

from seatplan.core.errors import NotFound
from seatplan.core.store import ArrangementStore
from seatplan.models.api import GuestAssignmentRequest, MenuAssignmentRequest, SpecialRequirementsRequest
from seatplan.models.arrangement import Seat
from seatplan.routes.deps import get_store


router = APIRouter(prefix="/sessions/{session_id}", tags=["Seats"])


@router.get("/seats", response_model=List[Seat])
async def list_seats(store: ArrangementStore = Depends(get_store)) -> List[Seat]:
    return store.list_seats()


@router.get("/seats/{seat_id}", response_model=Seat)
async def get_seat(seat_id: str, store: ArrangementStore = Depends(get_store)) -> Seat:
    seat = store.get_seat(seat_id)
    if seat is None:
        raise NotFound("seat", seat_id)
    return seat


@router.put("/seats/{seat_id}/guest", response_model=Seat)
async def assign_guest(
    seat_id: str,
    request: GuestAssignmentRequest,
    store: ArrangementStore = Depends(get_store),
) -> Seat:
    """
    Seat a guest.

    A guest already seated elsewhere is moved: their previous seat is vacated.
    """
    return store.assign_guest_to_seat(seat_id, request.guest_id)


@router.delete("/seats/{seat_id}/guest", response_model=Seat)
async def remove_guest(seat_id: str, store: ArrangementStore = Depends(get_store)) -> Seat:
    return store.remove_guest_from_seat(seat_id)


@router.put("/seats/{seat_id}/menu", response_model=Seat)
async def assign_menu(
    seat_id: str,
    request: MenuAssignmentRequest,
    store: ArrangementStore = Depends(get_store),
) -> Seat:
    return store.assign_menu_to_seat(seat_id, request.menu_option_id)


@router.put("/seats/{seat_id}/requirements", response_model=Seat)
async def set_requirements(
    seat_id: str,
    request: SpecialRequirementsRequest,
    store: ArrangementStore = Depends(get_store),
) -> Seat:
    return store.add_special_requirements(seat_id, request.special_requirements)


@router.get("/guests/{guest_id}/seat", response_model=Seat)
async def guest_seat(guest_id: str, store: ArrangementStore = Depends(get_store)) -> Seat:
    seat = store.seat_for_guest(guest_id)
    if seat is None:
        raise NotFound("seat for guest", guest_id)
    return seat
