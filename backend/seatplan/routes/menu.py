"""
Menu Options Routes

CRUD for the meal choices of a session.
"""

from typing import List

from fastapi import APIRouter, Depends

from seatplan.core.errors import NotFound
from seatplan.core.store import ArrangementStore
from seatplan.models.arrangement import MenuOption, MenuOptionCreate, MenuOptionUpdate
from seatplan.routes.deps import get_store


router = APIRouter(prefix="/sessions/{session_id}/menu-options", tags=["Menu"])


@router.get("", response_model=List[MenuOption])
async def list_menu_options(store: ArrangementStore = Depends(get_store)) -> List[MenuOption]:
    return store.list_menu_options()


@router.post("", response_model=MenuOption, status_code=201)
async def add_menu_option(request: MenuOptionCreate, store: ArrangementStore = Depends(get_store)) -> MenuOption:
    return store.add_menu_option(request.model_dump(exclude_unset=True))


@router.get("/{menu_option_id}", response_model=MenuOption)
async def get_menu_option(menu_option_id: str, store: ArrangementStore = Depends(get_store)) -> MenuOption:
    option = store.get_menu_option(menu_option_id)
    if option is None:
        raise NotFound("menu option", menu_option_id)
    return option


@router.patch("/{menu_option_id}", response_model=MenuOption)
async def update_menu_option(
    menu_option_id: str,
    request: MenuOptionUpdate,
    store: ArrangementStore = Depends(get_store),
) -> MenuOption:
    return store.update_menu_option(menu_option_id, request.model_dump(exclude_unset=True))


@router.delete("/{menu_option_id}", response_model=MenuOption)
async def remove_menu_option(menu_option_id: str, store: ArrangementStore = Depends(get_store)) -> MenuOption:
    """Remove a menu option. Fails with 409 while any seat still selects it."""
    return store.remove_menu_option(menu_option_id)
