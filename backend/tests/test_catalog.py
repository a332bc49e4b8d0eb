"""
Tests for initialization, menu options, rooms, obstacles and queries
"""

import re

import pytest

from seatplan.core.catalog import DEFAULT_MENU_OPTIONS
from seatplan.core.errors import NotFound, ReferentialConflict, ValidationFailed
from seatplan.core.store import ArrangementStore


class TestInitialize:
    """Test session initialization"""

    def test_seeds_menu_options_and_room(self, settings):
        store = ArrangementStore(settings=settings)
        state = store.initialize()

        assert [option.name for option in state.menu_options] == [o["name"] for o in DEFAULT_MENU_OPTIONS]
        assert len(state.rooms) == 1
        assert state.current_room_id == state.rooms[0].id
        assert state.rooms[0].name == settings.default_room_name
        assert (state.rooms[0].width, state.rooms[0].height) == (800, 600)
        assert store.initialized

    def test_second_call_is_a_no_op(self, store):
        before = store.snapshot()
        state = store.initialize()
        assert store.snapshot() == before
        assert len(state.rooms) == 1
        assert len(state.menu_options) == len(DEFAULT_MENU_OPTIONS)

    def test_uninitialized_store_is_empty(self, settings):
        store = ArrangementStore(settings=settings)
        assert store.list_rooms() == []
        assert store.current_room() is None

    def test_keeps_rooms_added_before_initialization(self, settings):
        store = ArrangementStore(settings=settings)
        mine = store.add_room({"name": "Mine"})

        state = store.initialize()

        assert [room.name for room in state.rooms] == ["Mine"]
        assert state.current_room_id == mine.id
        assert len(state.menu_options) == len(DEFAULT_MENU_OPTIONS)

    def test_keeps_menu_options_added_before_initialization(self, settings):
        store = ArrangementStore(settings=settings)
        store.add_menu_option({"name": "Tasting Menu"})

        state = store.initialize()

        assert [option.name for option in state.menu_options] == ["Tasting Menu"]
        assert len(state.rooms) == 1

    def test_require_current_room_without_rooms(self, settings):
        store = ArrangementStore(settings=settings)
        with pytest.raises(NotFound) as exc_info:
            store.require_current_room()
        assert exc_info.value.message == "No current room is set"

    def test_require_current_room(self, store):
        assert store.require_current_room().id == store.current_room_id


class TestMenuOptions:
    """Test menu option lifecycle"""

    def test_add_with_defaults(self, store):
        option = store.add_menu_option({"name": "Gluten Free"})
        assert option.id.startswith("menu_")
        assert option.type == "main"
        assert re.fullmatch(r"#[0-9A-F]{6}", option.color)

    def test_name_required(self, store):
        count = len(store.list_menu_options())
        with pytest.raises(ValidationFailed):
            store.add_menu_option({"type": "dessert"})
        assert len(store.list_menu_options()) == count

    def test_invalid_color_rejected(self, store):
        with pytest.raises(ValidationFailed):
            store.add_menu_option({"name": "Dessert", "color": "red"})

    def test_update_keeps_id(self, store):
        option = store.list_menu_options()[0]
        updated = store.update_menu_option(option.id, {"id": "menu_x", "name": "Steak", "type": "special"})
        assert updated.id == option.id
        assert (updated.name, updated.type, updated.color) == ("Steak", "special", option.color)

    def test_update_unknown(self, store):
        with pytest.raises(NotFound):
            store.update_menu_option("menu_missing", {"name": "X"})

    def test_remove_unused(self, store):
        option = store.add_menu_option({"name": "Dessert"})
        store.remove_menu_option(option.id)
        assert store.get_menu_option(option.id) is None

    def test_remove_in_use_rejected(self, store):
        table = store.add_table({"name": "A", "capacity": 3})
        option = store.list_menu_options()[0]
        for seat in store.seats_for_table(table.id)[:2]:
            store.assign_menu_to_seat(seat.id, option.id)
        before = store.snapshot()

        with pytest.raises(ReferentialConflict) as exc_info:
            store.remove_menu_option(option.id)

        assert exc_info.value.context["usage_count"] == 2
        assert store.snapshot() == before

    def test_remove_after_clearing_selection(self, store):
        table = store.add_table({"name": "A", "capacity": 1})
        seat = store.seats_for_table(table.id)[0]
        option = store.list_menu_options()[0]
        store.assign_menu_to_seat(seat.id, option.id)
        store.assign_menu_to_seat(seat.id, None)

        store.remove_menu_option(option.id)
        assert store.get_menu_option(option.id) is None

    def test_remove_unknown(self, store):
        with pytest.raises(NotFound):
            store.remove_menu_option("menu_missing")


class TestRooms:
    """Test room lifecycle and the current-room pointer"""

    def test_add_room_defaults(self, store):
        room = store.add_room({"name": "Garden"})
        assert (room.width, room.height, room.background_image) == (800, 600, None)
        assert store.current_room_id != room.id

    def test_first_room_of_empty_store_becomes_current(self, settings):
        store = ArrangementStore(settings=settings)
        room = store.add_room({"name": "Barn"})
        assert store.current_room().id == room.id

    def test_name_required(self, store):
        with pytest.raises(ValidationFailed):
            store.add_room({"width": 300})

    def test_update_room(self, store):
        room = store.current_room()
        updated = store.update_room(room.id, {"background_image": "floor.png", "width": 1200})
        assert (updated.width, updated.height, updated.background_image) == (1200, 600, "floor.png")

    def test_cannot_remove_last_room(self, store):
        with pytest.raises(ReferentialConflict):
            store.remove_room(store.current_room_id)
        assert len(store.list_rooms()) == 1

    def test_cannot_remove_current_room(self, store):
        store.add_room({"name": "Garden"})
        with pytest.raises(ReferentialConflict) as exc_info:
            store.remove_room(store.current_room_id)
        assert "current room" in exc_info.value.message
        assert len(store.list_rooms()) == 2

    def test_remove_other_room_with_tables_present(self, store):
        store.add_table({"name": "A"})
        garden = store.add_room({"name": "Garden"})
        store.remove_room(garden.id)
        assert store.get_room(garden.id) is None
        assert len(store.list_tables()) == 1

    def test_switch_then_remove_previous(self, store):
        hall = store.current_room()
        garden = store.add_room({"name": "Garden"})

        assert store.set_current_room(garden.id).id == garden.id
        store.remove_room(hall.id)

        assert [room.id for room in store.list_rooms()] == [garden.id]

    def test_set_unknown_current_room(self, store):
        current = store.current_room_id
        with pytest.raises(NotFound):
            store.set_current_room("room_missing")
        assert store.current_room_id == current


class TestObstacles:
    """Test obstacle lifecycle"""

    def test_add_with_defaults(self, store):
        obstacle = store.add_obstacle({"name": "Pillar"})
        assert obstacle.id.startswith("obstacle_")
        assert (obstacle.type, obstacle.x, obstacle.y) == ("other", 0, 0)
        assert (obstacle.width, obstacle.height, obstacle.rotation) == (50, 50, 0)

    def test_add_explicit(self, store):
        obstacle = store.add_obstacle({"name": "Dance Floor", "type": "dancefloor", "x": 300, "width": 200})
        assert (obstacle.type, obstacle.x, obstacle.width, obstacle.height) == ("dancefloor", 300, 200, 50)

    def test_name_required(self, store):
        with pytest.raises(ValidationFailed):
            store.add_obstacle({"type": "stage"})

    def test_update_and_remove(self, store):
        obstacle = store.add_obstacle({"name": "Stage"})
        assert store.update_obstacle(obstacle.id, {"rotation": 90}).rotation == 90
        store.remove_obstacle(obstacle.id)
        assert store.list_obstacles() == []

    def test_unknown_obstacle(self, store):
        with pytest.raises(NotFound):
            store.update_obstacle("obstacle_missing", {"x": 1})
        with pytest.raises(NotFound):
            store.remove_obstacle("obstacle_missing")


class TestQueries:
    """Test read accessors"""

    def test_lookups_return_none_when_missing(self, store):
        assert store.get_table("x") is None
        assert store.get_seat("x") is None
        assert store.get_menu_option("x") is None
        assert store.get_room("x") is None
        assert store.get_obstacle("x") is None
        assert store.seat_for_guest("nobody") is None
        assert store.seats_for_table("x") == []

    def test_listings_are_copies(self, store):
        table = store.add_table({"name": "A", "capacity": 2})

        store.list_tables()[0].name = "changed"
        store.list_seats()[0].guest_id = "intruder"
        store.get_table(table.id).capacity = 99

        assert store.get_table(table.id).name == "A"
        assert store.get_table(table.id).capacity == 2
        assert store.seat_for_guest("intruder") is None

    def test_returned_entity_is_detached(self, store):
        table = store.add_table({"name": "A", "capacity": 2})
        table.name = "changed"
        assert store.get_table(table.id).name == "A"
