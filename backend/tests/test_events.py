"""
Tests for store notifications
"""

import pytest

from seatplan.core import events
from seatplan.core.errors import ReferentialConflict
from seatplan.core.events import EventBus
from seatplan.models.arrangement import GuestRemoval


class TestEventBus:
    """Test the observer registry"""

    def test_subscribe_and_unsubscribe(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe("ping", received.append)

        bus.emit("ping", 1)
        unsubscribe()
        bus.emit("ping", 2)

        assert [event.payload for event in received] == [1]

    def test_failing_listener_does_not_stop_others(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe("ping", broken)
        bus.subscribe_all(received.append)
        bus.emit("ping", "payload")

        assert [event.name for event in received] == ["ping"]


class TestStoreEvents:
    """Test events emitted by store mutations"""

    @pytest.fixture
    def received(self, store):
        captured = []
        store.events.subscribe_all(captured.append)
        return captured

    def test_table_added_fires_after_commit(self, store):
        seen = []
        store.events.subscribe(
            events.TABLE_ADDED,
            lambda event: seen.append(len(store.seats_for_table(event.payload.id))),
        )
        store.add_table({"name": "A", "capacity": 3})
        assert seen == [3]

    def test_event_names_per_operation(self, store, received):
        table = store.add_table({"name": "A", "capacity": 2})
        seat = store.seats_for_table(table.id)[0]
        store.update_table(table.id, {"name": "B"})
        store.assign_guest_to_seat(seat.id, "g1")
        store.assign_menu_to_seat(seat.id, None)
        store.add_special_requirements(seat.id, "none")
        store.remove_guest_from_seat(seat.id)
        store.remove_table(table.id)

        assert [event.name for event in received] == [
            events.TABLE_ADDED,
            events.TABLE_UPDATED,
            events.GUEST_ASSIGNED,
            events.MENU_ASSIGNED,
            events.SPECIAL_REQUIREMENTS_ADDED,
            events.GUEST_REMOVED,
            events.TABLE_REMOVED,
        ]
        assert received[-1].payload.id == table.id

    def test_guest_removed_carries_previous_guest(self, store, received):
        table = store.add_table({"name": "A", "capacity": 1})
        seat = store.seats_for_table(table.id)[0]
        store.assign_guest_to_seat(seat.id, "g1")
        store.remove_guest_from_seat(seat.id)

        payload = received[-1].payload
        assert isinstance(payload, GuestRemoval)
        assert payload.guest_id == "g1"
        assert payload.seat.guest_id is None

    def test_room_and_menu_events(self, store, received):
        room = store.add_room({"name": "Garden"})
        store.set_current_room(room.id)
        option = store.add_menu_option({"name": "Dessert"})
        store.remove_menu_option(option.id)
        obstacle = store.add_obstacle({"name": "Stage"})
        store.remove_obstacle(obstacle.id)

        assert [event.name for event in received] == [
            events.ROOM_ADDED,
            events.CURRENT_ROOM_CHANGED,
            events.MENU_OPTION_ADDED,
            events.MENU_OPTION_REMOVED,
            events.OBSTACLE_ADDED,
            events.OBSTACLE_REMOVED,
        ]

    def test_rejected_operation_emits_nothing(self, store, received):
        table = store.add_table({"name": "A", "capacity": 1})
        store.assign_guest_to_seat(store.seats_for_table(table.id)[0].id, "g1")
        received.clear()

        with pytest.raises(ReferentialConflict):
            store.remove_table(table.id)

        assert received == []

    def test_payload_is_detached_from_store(self, store):
        store.events.subscribe(events.TABLE_ADDED, lambda event: setattr(event.payload, "name", "hijacked"))
        table = store.add_table({"name": "A"})
        assert store.get_table(table.id).name == "A"
