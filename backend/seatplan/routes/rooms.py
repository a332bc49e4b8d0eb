"""
Rooms & Obstacles Routes

Layout canvases of a session and the non-seating elements placed on them.
"""

from typing import List

from fastapi import APIRouter, Depends

from seatplan.core.errors import NotFound
from seatplan.core.store import ArrangementStore
from seatplan.models.api import CurrentRoomRequest, OutOfBoundsResponse
from seatplan.models.arrangement import (
    Obstacle,
    ObstacleCreate,
    ObstacleUpdate,
    Room,
    RoomCreate,
    RoomUpdate,
)
from seatplan.routes.deps import get_store


router = APIRouter(prefix="/sessions/{session_id}", tags=["Rooms"])


# ============ Rooms ============

@router.get("/rooms", response_model=List[Room])
async def list_rooms(store: ArrangementStore = Depends(get_store)) -> List[Room]:
    return store.list_rooms()


@router.post("/rooms", response_model=Room, status_code=201)
async def add_room(request: RoomCreate, store: ArrangementStore = Depends(get_store)) -> Room:
    return store.add_room(request.model_dump(exclude_unset=True))


@router.get("/rooms/{room_id}", response_model=Room)
async def get_room(room_id: str, store: ArrangementStore = Depends(get_store)) -> Room:
    room = store.get_room(room_id)
    if room is None:
        raise NotFound("room", room_id)
    return room


@router.patch("/rooms/{room_id}", response_model=Room)
async def update_room(room_id: str, request: RoomUpdate, store: ArrangementStore = Depends(get_store)) -> Room:
    return store.update_room(room_id, request.model_dump(exclude_unset=True))


@router.delete("/rooms/{room_id}", response_model=Room)
async def remove_room(room_id: str, store: ArrangementStore = Depends(get_store)) -> Room:
    """Remove a room. The last room and the current room cannot be removed."""
    return store.remove_room(room_id)


@router.get("/current-room", response_model=Room)
async def get_current_room(store: ArrangementStore = Depends(get_store)) -> Room:
    return store.require_current_room()


@router.put("/current-room", response_model=Room)
async def set_current_room(request: CurrentRoomRequest, store: ArrangementStore = Depends(get_store)) -> Room:
    return store.set_current_room(request.room_id)


@router.get("/out-of-bounds", response_model=OutOfBoundsResponse)
async def out_of_bounds(store: ArrangementStore = Depends(get_store)) -> OutOfBoundsResponse:
    """Tables and obstacles that extend beyond the current room canvas."""
    return OutOfBoundsResponse(room_id=store.current_room_id, element_ids=store.elements_outside_room())


# ============ Obstacles ============

@router.get("/obstacles", response_model=List[Obstacle])
async def list_obstacles(store: ArrangementStore = Depends(get_store)) -> List[Obstacle]:
    return store.list_obstacles()


@router.post("/obstacles", response_model=Obstacle, status_code=201)
async def add_obstacle(request: ObstacleCreate, store: ArrangementStore = Depends(get_store)) -> Obstacle:
    return store.add_obstacle(request.model_dump(exclude_unset=True))


@router.get("/obstacles/{obstacle_id}", response_model=Obstacle)
async def get_obstacle(obstacle_id: str, store: ArrangementStore = Depends(get_store)) -> Obstacle:
    obstacle = store.get_obstacle(obstacle_id)
    if obstacle is None:
        raise NotFound("obstacle", obstacle_id)
    return obstacle


@router.patch("/obstacles/{obstacle_id}", response_model=Obstacle)
async def update_obstacle(
    obstacle_id: str,
    request: ObstacleUpdate,
    store: ArrangementStore = Depends(get_store),
) -> Obstacle:
    return store.update_obstacle(obstacle_id, request.model_dump(exclude_unset=True))


@router.delete("/obstacles/{obstacle_id}", response_model=Obstacle)
async def remove_obstacle(obstacle_id: str, store: ArrangementStore = Depends(get_store)) -> Obstacle:
    return store.remove_obstacle(obstacle_id)
