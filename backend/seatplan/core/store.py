"""
Arrangement Store

The seating engine: one instance per editing session owns every room,
table, seat, menu option and obstacle of that session. All mutations go
through the store; each one either commits completely or raises an
`ArrangementError` before touching any state, and notifies the store's
event bus after it commits.

Seats are derived from table capacity. They are created when a table is
added and reconciled only when its capacity changes, so seat ids and
seat-local data (guest, menu, requirements) survive unrelated edits.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from seatplan.config import Settings, get_settings
from seatplan.core import events
from seatplan.core.catalog import DEFAULT_MENU_OPTIONS, DEFAULT_OBSTACLE, DEFAULT_TABLE_POSITION, shape_defaults
from seatplan.core.errors import CapacityExceeded, NotFound, ReferentialConflict, ValidationFailed
from seatplan.core.events import EventBus
from seatplan.core.geometry import is_within_room, seat_anchors
from seatplan.core.ids import generate_id, random_color
from seatplan.core.reports import compute_statistics, export_snapshot
from seatplan.models.api import SeatingStatistics
from seatplan.models.arrangement import (
    ArrangementSnapshot,
    GuestRemoval,
    Initialization,
    MenuOption,
    MenuOptionCreate,
    MenuOptionUpdate,
    Obstacle,
    ObstacleCreate,
    ObstacleUpdate,
    Room,
    RoomCreate,
    RoomUpdate,
    Seat,
    SeatAnchor,
    Table,
    TableCreate,
    TableUpdate,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
Payload = Union[BaseModel, Mapping[str, Any], None]


def _error_summary(exc: ValidationError) -> List[dict]:
    return [{"loc": [str(part) for part in err["loc"]], "msg": err["msg"]} for err in exc.errors()]


def _coerce(model_cls: Type[ModelT], data: Payload) -> ModelT:
    """Validate caller input into `model_cls`, keeping track of unset fields."""
    if isinstance(data, model_cls):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return model_cls.model_validate(dict(data or {}))
    except ValidationError as exc:
        raise ValidationFailed(f"Invalid {model_cls.__name__} input", {"errors": _error_summary(exc)})


def _build(model_cls: Type[ModelT], **fields) -> ModelT:
    try:
        return model_cls(**fields)
    except ValidationError as exc:
        raise ValidationFailed(f"Invalid {model_cls.__name__.lower()}", {"errors": _error_summary(exc)})


def _require_name(name: Optional[str], kind: str) -> str:
    if name is None or not name.strip():
        raise ValidationFailed(f"The {kind} name is required", {"field": "name", "kind": kind})
    return name


def _copies(items: Iterable[ModelT]) -> List[ModelT]:
    return [item.model_copy(deep=True) for item in items]


class ArrangementStore:
    """
    In-memory seating arrangement for a single editing session.

    The store assumes a single logical writer. Callers sharing it between
    workers must serialize access themselves.
    """

    def __init__(self, table_limit: Optional[int] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.events = EventBus()
        self._tables: Dict[str, Table] = {}
        self._seats: Dict[str, Seat] = {}
        self._menu_options: Dict[str, MenuOption] = {}
        self._rooms: Dict[str, Room] = {}
        self._obstacles: Dict[str, Obstacle] = {}
        self._current_room_id: Optional[str] = None
        self._table_limit = self.settings.default_table_limit
        self._initialized = False
        if table_limit is not None:
            self._table_limit = self._validate_limit(table_limit)

    # ============ Helpers ============

    def _new_id(self, prefix: str, collection: Mapping[str, Any]) -> str:
        return generate_id(prefix, collection)

    @staticmethod
    def _require(collection: Mapping[str, ModelT], kind: str, entity_id: str) -> ModelT:
        entity = collection.get(entity_id)
        if entity is None:
            raise NotFound(kind, entity_id)
        return entity

    @staticmethod
    def _merge(entity: ModelT, patch_cls: Type[BaseModel], patch: Payload) -> ModelT:
        """Apply the fields set in `patch` to `entity` and validate the result."""
        changes = _coerce(patch_cls, patch).model_dump(exclude_unset=True)
        data = entity.model_dump()
        data.update(changes)
        data["id"] = entity.id
        try:
            return type(entity).model_validate(data)
        except ValidationError as exc:
            raise ValidationFailed(
                f"Invalid {type(entity).__name__.lower()} update",
                {"id": entity.id, "errors": _error_summary(exc)},
            )

    def _emit(self, name: str, payload: Any) -> None:
        self.events.emit(name, payload)

    def _table_seats(self, table_id: str) -> List[Seat]:
        return sorted(
            (seat for seat in self._seats.values() if seat.table_id == table_id),
            key=lambda seat: seat.position,
        )

    def _find_guest_seat(self, guest_id: str) -> Optional[Seat]:
        for seat in self._seats.values():
            if seat.guest_id == guest_id:
                return seat
        return None

    @staticmethod
    def _validate_limit(limit: int) -> int:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise ValidationFailed("The table limit must be a non-negative integer", {"limit": limit})
        return limit

    # ============ Initialization ============

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> Initialization:
        """
        Seed the default menu options and the default room.

        Calling it again on an initialized store changes nothing and
        returns the current state. Rooms and menu options the caller
        added beforehand are kept, and so is their current room.
        """
        if self._initialized:
            logger.debug("Store already initialized; returning current state")
            return self._initialization()

        if not self._menu_options:
            for option in DEFAULT_MENU_OPTIONS:
                menu_id = self._new_id("menu_", self._menu_options)
                self._menu_options[menu_id] = MenuOption(id=menu_id, **option)

        if not self._rooms:
            room_id = self._new_id("room_", self._rooms)
            self._rooms[room_id] = Room(
                id=room_id,
                name=self.settings.default_room_name,
                width=self.settings.default_room_width,
                height=self.settings.default_room_height,
            )
            self._current_room_id = room_id
        elif self._current_room_id is None:
            self._current_room_id = next(iter(self._rooms))
        self._initialized = True

        state = self._initialization()
        logger.info(
            "Initialized arrangement with %d menu options and current room %s",
            len(state.menu_options), self._current_room_id,
        )
        self._emit(events.INITIALIZED, state)
        return state

    def _initialization(self) -> Initialization:
        return Initialization(
            menu_options=self.list_menu_options(),
            rooms=self.list_rooms(),
            current_room_id=self._current_room_id,
        )

    # ============ Capacity Tier ============

    @property
    def table_limit(self) -> int:
        return self._table_limit

    def set_table_limit(self, limit: int) -> int:
        """
        Replace the tier's table ceiling.

        Lowering it below the current table count keeps existing tables
        and only blocks further adds.
        """
        self._table_limit = self._validate_limit(limit)
        logger.info("Table limit set to %d (%d tables present)", limit, len(self._tables))
        self._emit(events.TABLE_LIMIT_CHANGED, limit)
        return limit

    def is_table_limit_reached(self) -> bool:
        return len(self._tables) >= self._table_limit

    # ============ Tables ============

    def add_table(self, data: Payload) -> Table:
        """
        Create a table and its seats.

        Capacity, width and height left unset fall back to the shape's
        defaults. Seats are created at positions 0..capacity-1.

        Raises:
            CapacityExceeded: the table limit is reached
            ValidationFailed: the name is missing or a field is invalid
        """
        if self.is_table_limit_reached():
            raise CapacityExceeded(self._table_limit)

        request = _coerce(TableCreate, data)
        name = _require_name(request.name, "table")
        defaults = shape_defaults(request.shape)

        table = _build(
            Table,
            id=self._new_id("table_", self._tables),
            name=name,
            shape=request.shape,
            capacity=request.capacity if request.capacity is not None else defaults.capacity,
            width=request.width if request.width is not None else defaults.width,
            height=request.height if request.height is not None else defaults.height,
            x=request.x if request.x is not None else DEFAULT_TABLE_POSITION[0],
            y=request.y if request.y is not None else DEFAULT_TABLE_POSITION[1],
            rotation=request.rotation if request.rotation is not None else 0,
        )

        self._tables[table.id] = table
        self._create_seats(table.id, start=0, count=table.capacity)

        logger.info("Added table %s '%s' with %d seats", table.id, table.name, table.capacity)
        self._emit(events.TABLE_ADDED, table.model_copy(deep=True))
        return table.model_copy(deep=True)

    def update_table(self, table_id: str, patch: Payload) -> Table:
        """
        Merge `patch` into a table; a capacity change reconciles its seats.

        Raises:
            NotFound: the table does not exist
            ValidationFailed: the merged table is invalid
        """
        table = self._require(self._tables, "table", table_id)
        updated = self._merge(table, TableUpdate, patch)

        self._tables[table_id] = updated
        if updated.capacity != table.capacity:
            self._reconcile_seats(updated)

        logger.debug("Updated table %s", table_id)
        self._emit(events.TABLE_UPDATED, updated.model_copy(deep=True))
        return updated.model_copy(deep=True)

    def remove_table(self, table_id: str) -> Table:
        """
        Delete a table and its seats.

        Raises:
            NotFound: the table does not exist
            ReferentialConflict: guests are still seated at the table
        """
        table = self._require(self._tables, "table", table_id)
        seats = self._table_seats(table_id)
        assigned = sum(1 for seat in seats if seat.is_occupied)
        if assigned > 0:
            raise ReferentialConflict(
                f"Table '{table.name}' cannot be removed because {assigned} guest(s) are assigned. "
                "Reassign the guests to another table first.",
                {"table_id": table_id, "assigned_guests": assigned},
            )

        del self._tables[table_id]
        for seat in seats:
            del self._seats[seat.id]

        logger.info("Removed table %s '%s' and %d seats", table_id, table.name, len(seats))
        self._emit(events.TABLE_REMOVED, table.model_copy(deep=True))
        return table

    def seats_over_capacity(self, table_id: str) -> int:
        """Seats kept above the table's capacity because they hold guests."""
        table = self._require(self._tables, "table", table_id)
        return max(0, len(self._table_seats(table_id)) - table.capacity)

    def _create_seats(self, table_id: str, start: int, count: int) -> None:
        for position in range(start, start + count):
            seat_id = self._new_id("seat_", self._seats)
            self._seats[seat_id] = Seat(id=seat_id, table_id=table_id, position=position)

    def _reconcile_seats(self, table: Table) -> None:
        seats = self._table_seats(table.id)

        if len(seats) < table.capacity:
            self._create_seats(table.id, start=len(seats), count=table.capacity - len(seats))
            return

        # Shrink from the highest position down, keeping occupied seats
        for seat in reversed(seats):
            if seat.position < table.capacity:
                break
            if not seat.is_occupied:
                del self._seats[seat.id]
        self._renumber_seats(table.id)

        blocked = len(self._table_seats(table.id)) - table.capacity
        if blocked > 0:
            logger.warning(
                "Table %s keeps %d occupied seat(s) above its capacity of %d",
                table.id, blocked, table.capacity,
            )

    def _renumber_seats(self, table_id: str) -> None:
        for index, seat in enumerate(self._table_seats(table_id)):
            if seat.position != index:
                self._seats[seat.id] = seat.model_copy(update={"position": index})

    # ============ Seats ============

    def assign_guest_to_seat(self, seat_id: str, guest_id: str) -> Seat:
        """
        Seat a guest, moving them off any seat they held before.

        Raises:
            NotFound: the seat does not exist
            ValidationFailed: the guest id is blank
        """
        seat = self._require(self._seats, "seat", seat_id)
        if not isinstance(guest_id, str) or not guest_id.strip():
            raise ValidationFailed("A guest id is required", {"field": "guest_id"})

        previous = self._find_guest_seat(guest_id)
        if previous is not None and previous.id != seat_id:
            self._seats[previous.id] = previous.model_copy(update={"guest_id": None})
            logger.debug("Moved guest %s from seat %s to %s", guest_id, previous.id, seat_id)

        updated = seat.model_copy(update={"guest_id": guest_id})
        self._seats[seat_id] = updated

        self._emit(events.GUEST_ASSIGNED, updated.model_copy(deep=True))
        return updated.model_copy(deep=True)

    def remove_guest_from_seat(self, seat_id: str) -> Seat:
        seat = self._require(self._seats, "seat", seat_id)
        updated = seat.model_copy(update={"guest_id": None})
        self._seats[seat_id] = updated

        self._emit(events.GUEST_REMOVED, GuestRemoval(seat=updated.model_copy(deep=True), guest_id=seat.guest_id))
        return updated.model_copy(deep=True)

    def assign_menu_to_seat(self, seat_id: str, menu_option_id: Optional[str]) -> Seat:
        """Select a menu option for a seat; None clears the selection."""
        seat = self._require(self._seats, "seat", seat_id)
        if menu_option_id is not None:
            self._require(self._menu_options, "menu option", menu_option_id)

        updated = seat.model_copy(update={"menu_option_id": menu_option_id})
        self._seats[seat_id] = updated

        self._emit(events.MENU_ASSIGNED, updated.model_copy(deep=True))
        return updated.model_copy(deep=True)

    def add_special_requirements(self, seat_id: str, requirements: Optional[str]) -> Seat:
        seat = self._require(self._seats, "seat", seat_id)
        updated = seat.model_copy(update={"special_requirements": requirements})
        self._seats[seat_id] = updated

        self._emit(events.SPECIAL_REQUIREMENTS_ADDED, updated.model_copy(deep=True))
        return updated.model_copy(deep=True)

    # ============ Menu Options ============

    def add_menu_option(self, data: Payload) -> MenuOption:
        request = _coerce(MenuOptionCreate, data)
        name = _require_name(request.name, "menu option")

        option = _build(
            MenuOption,
            id=self._new_id("menu_", self._menu_options),
            name=name,
            type=request.type or "main",
            color=request.color or random_color(),
            description=request.description,
        )
        self._menu_options[option.id] = option

        logger.info("Added menu option %s '%s'", option.id, option.name)
        self._emit(events.MENU_OPTION_ADDED, option.model_copy(deep=True))
        return option.model_copy(deep=True)

    def update_menu_option(self, menu_option_id: str, patch: Payload) -> MenuOption:
        option = self._require(self._menu_options, "menu option", menu_option_id)
        updated = self._merge(option, MenuOptionUpdate, patch)
        self._menu_options[menu_option_id] = updated

        self._emit(events.MENU_OPTION_UPDATED, updated.model_copy(deep=True))
        return updated.model_copy(deep=True)

    def remove_menu_option(self, menu_option_id: str) -> MenuOption:
        """
        Raises:
            NotFound: the menu option does not exist
            ReferentialConflict: seats still select the option
        """
        option = self._require(self._menu_options, "menu option", menu_option_id)
        in_use = sum(1 for seat in self._seats.values() if seat.menu_option_id == menu_option_id)
        if in_use > 0:
            raise ReferentialConflict(
                f"Menu option '{option.name}' cannot be removed because {in_use} seat(s) use it.",
                {"menu_option_id": menu_option_id, "usage_count": in_use},
            )

        del self._menu_options[menu_option_id]
        logger.info("Removed menu option %s '%s'", menu_option_id, option.name)
        self._emit(events.MENU_OPTION_REMOVED, option.model_copy(deep=True))
        return option

    # ============ Rooms ============

    def add_room(self, data: Payload) -> Room:
        """Create a room. The first room of a store without a current room becomes current."""
        request = _coerce(RoomCreate, data)
        name = _require_name(request.name, "room")

        room = _build(
            Room,
            id=self._new_id("room_", self._rooms),
            name=name,
            width=request.width or self.settings.default_room_width,
            height=request.height or self.settings.default_room_height,
            background_image=request.background_image,
        )
        self._rooms[room.id] = room
        if self._current_room_id is None:
            self._current_room_id = room.id

        logger.info("Added room %s '%s'", room.id, room.name)
        self._emit(events.ROOM_ADDED, room.model_copy(deep=True))
        return room.model_copy(deep=True)

    def update_room(self, room_id: str, patch: Payload) -> Room:
        room = self._require(self._rooms, "room", room_id)
        updated = self._merge(room, RoomUpdate, patch)
        self._rooms[room_id] = updated

        self._emit(events.ROOM_UPDATED, updated.model_copy(deep=True))
        return updated.model_copy(deep=True)

    def remove_room(self, room_id: str) -> Room:
        """
        Raises:
            NotFound: the room does not exist
            ReferentialConflict: it is the last room or the current room
        """
        room = self._require(self._rooms, "room", room_id)
        if len(self._rooms) <= 1:
            raise ReferentialConflict("The last room cannot be removed.", {"room_id": room_id})
        if room_id == self._current_room_id:
            raise ReferentialConflict(
                "The current room cannot be removed. Switch to another room first.",
                {"room_id": room_id},
            )

        del self._rooms[room_id]
        logger.info("Removed room %s '%s'", room_id, room.name)
        self._emit(events.ROOM_REMOVED, room.model_copy(deep=True))
        return room

    def set_current_room(self, room_id: str) -> Room:
        room = self._require(self._rooms, "room", room_id)
        self._current_room_id = room_id

        self._emit(events.CURRENT_ROOM_CHANGED, room.model_copy(deep=True))
        return room.model_copy(deep=True)

    @property
    def current_room_id(self) -> Optional[str]:
        return self._current_room_id

    def current_room(self) -> Optional[Room]:
        return self.get_room(self._current_room_id) if self._current_room_id else None

    def require_current_room(self) -> Room:
        """
        Raises:
            NotFound: no room has been created or selected yet
        """
        room = self.current_room()
        if room is None:
            raise NotFound("room", None, "No current room is set")
        return room

    # ============ Obstacles ============

    def add_obstacle(self, data: Payload) -> Obstacle:
        request = _coerce(ObstacleCreate, data)
        name = _require_name(request.name, "obstacle")

        fields = dict(DEFAULT_OBSTACLE)
        fields.update(request.model_dump(exclude_none=True))
        fields["name"] = name
        obstacle = _build(Obstacle, id=self._new_id("obstacle_", self._obstacles), **fields)
        self._obstacles[obstacle.id] = obstacle

        logger.info("Added obstacle %s '%s'", obstacle.id, obstacle.name)
        self._emit(events.OBSTACLE_ADDED, obstacle.model_copy(deep=True))
        return obstacle.model_copy(deep=True)

    def update_obstacle(self, obstacle_id: str, patch: Payload) -> Obstacle:
        obstacle = self._require(self._obstacles, "obstacle", obstacle_id)
        updated = self._merge(obstacle, ObstacleUpdate, patch)
        self._obstacles[obstacle_id] = updated

        self._emit(events.OBSTACLE_UPDATED, updated.model_copy(deep=True))
        return updated.model_copy(deep=True)

    def remove_obstacle(self, obstacle_id: str) -> Obstacle:
        obstacle = self._require(self._obstacles, "obstacle", obstacle_id)
        del self._obstacles[obstacle_id]

        self._emit(events.OBSTACLE_REMOVED, obstacle.model_copy(deep=True))
        return obstacle

    # ============ Queries ============

    @staticmethod
    def _lookup(collection: Mapping[str, ModelT], entity_id: Optional[str]) -> Optional[ModelT]:
        entity = collection.get(entity_id) if entity_id is not None else None
        return entity.model_copy(deep=True) if entity is not None else None

    def get_table(self, table_id: str) -> Optional[Table]:
        return self._lookup(self._tables, table_id)

    def get_seat(self, seat_id: str) -> Optional[Seat]:
        return self._lookup(self._seats, seat_id)

    def get_menu_option(self, menu_option_id: str) -> Optional[MenuOption]:
        return self._lookup(self._menu_options, menu_option_id)

    def get_room(self, room_id: str) -> Optional[Room]:
        return self._lookup(self._rooms, room_id)

    def get_obstacle(self, obstacle_id: str) -> Optional[Obstacle]:
        return self._lookup(self._obstacles, obstacle_id)

    def list_tables(self) -> List[Table]:
        return _copies(self._tables.values())

    def list_seats(self) -> List[Seat]:
        return _copies(self._seats.values())

    def list_menu_options(self) -> List[MenuOption]:
        return _copies(self._menu_options.values())

    def list_rooms(self) -> List[Room]:
        return _copies(self._rooms.values())

    def list_obstacles(self) -> List[Obstacle]:
        return _copies(self._obstacles.values())

    def seats_for_table(self, table_id: str) -> List[Seat]:
        """Seats of a table ordered by position (empty for unknown tables)."""
        return _copies(self._table_seats(table_id))

    def seat_for_guest(self, guest_id: str) -> Optional[Seat]:
        seat = self._find_guest_seat(guest_id)
        return seat.model_copy(deep=True) if seat is not None else None

    # ============ Layout ============

    def seat_layout(self, table_id: str) -> List[SeatAnchor]:
        """Room coordinates of every seat around a table."""
        table = self._require(self._tables, "table", table_id)
        seats = self._table_seats(table_id)
        anchors = seat_anchors(table, len(seats), offset=self.settings.seat_offset)
        return [
            SeatAnchor(seat_id=seat.id, position=seat.position, x=x, y=y)
            for seat, (x, y) in zip(seats, anchors)
        ]

    def elements_outside_room(self) -> List[str]:
        """Ids of tables and obstacles not fully inside the current room canvas."""
        room = self._rooms.get(self._current_room_id) if self._current_room_id else None
        if room is None:
            return []
        elements = list(self._tables.values()) + list(self._obstacles.values())
        return [element.id for element in elements if not is_within_room(element, room)]

    # ============ Reports ============

    def statistics(self) -> SeatingStatistics:
        return compute_statistics(self.snapshot())

    def export(self, fmt: str = "json") -> str:
        """Serialize the arrangement as "json" (full snapshot) or "csv" (one row per seat)."""
        return export_snapshot(self.snapshot(), fmt)

    def snapshot(self) -> ArrangementSnapshot:
        return ArrangementSnapshot(
            tables=self.list_tables(),
            seats=sorted(self.list_seats(), key=lambda seat: (seat.table_id, seat.position)),
            menu_options=self.list_menu_options(),
            rooms=self.list_rooms(),
            obstacles=self.list_obstacles(),
            current_room_id=self._current_room_id,
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Union[ArrangementSnapshot, Mapping[str, Any], str],
        table_limit: Optional[int] = None,
        settings: Optional[Settings] = None,
    ) -> "ArrangementStore":
        """
        Rebuild a store from a snapshot, e.g. a previously exported JSON document.

        Raises:
            ValidationFailed: the snapshot is malformed or breaks a store invariant
        """
        try:
            if isinstance(snapshot, str):
                snapshot = ArrangementSnapshot.model_validate_json(snapshot)
            elif not isinstance(snapshot, ArrangementSnapshot):
                snapshot = ArrangementSnapshot.model_validate(dict(snapshot))
        except ValidationError as exc:
            raise ValidationFailed("Invalid arrangement snapshot", {"errors": _error_summary(exc)})

        _check_snapshot(snapshot)

        store = cls(table_limit=table_limit, settings=settings)
        store._tables = {table.id: table for table in _copies(snapshot.tables)}
        store._seats = {seat.id: seat for seat in _copies(snapshot.seats)}
        store._menu_options = {option.id: option for option in _copies(snapshot.menu_options)}
        store._rooms = {room.id: room for room in _copies(snapshot.rooms)}
        store._obstacles = {obstacle.id: obstacle for obstacle in _copies(snapshot.obstacles)}
        store._current_room_id = snapshot.current_room_id
        store._initialized = bool(store._rooms)
        logger.info("Restored arrangement with %d tables and %d seats", len(store._tables), len(store._seats))
        return store


def _check_snapshot(snapshot: ArrangementSnapshot) -> None:
    def fail(message: str, **context) -> None:
        raise ValidationFailed(f"Invalid arrangement snapshot: {message}", context)

    for kind, items in (
        ("table", snapshot.tables),
        ("seat", snapshot.seats),
        ("menu option", snapshot.menu_options),
        ("room", snapshot.rooms),
        ("obstacle", snapshot.obstacles),
    ):
        ids = [item.id for item in items]
        if len(ids) != len(set(ids)):
            fail(f"duplicate {kind} ids")

    tables = {table.id: table for table in snapshot.tables}
    menu_ids = {option.id for option in snapshot.menu_options}
    positions: Dict[str, List[int]] = {table_id: [] for table_id in tables}
    guests = set()

    for seat in snapshot.seats:
        if seat.table_id not in tables:
            fail("seat references an unknown table", seat_id=seat.id, table_id=seat.table_id)
        if seat.menu_option_id is not None and seat.menu_option_id not in menu_ids:
            fail("seat references an unknown menu option", seat_id=seat.id)
        if seat.guest_id is not None:
            if seat.guest_id in guests:
                fail("guest is seated twice", guest_id=seat.guest_id)
            guests.add(seat.guest_id)
        positions[seat.table_id].append(seat.position)

    for table_id, table_positions in positions.items():
        if sorted(table_positions) != list(range(len(table_positions))):
            fail("seat positions are not dense", table_id=table_id)
        if len(table_positions) < tables[table_id].capacity:
            fail("table has fewer seats than its capacity", table_id=table_id)

    room_ids = {room.id for room in snapshot.rooms}
    if snapshot.current_room_id is not None and snapshot.current_room_id not in room_ids:
        fail("current room does not exist", room_id=snapshot.current_room_id)
    if snapshot.current_room_id is None and room_ids:
        fail("current room is not set")
