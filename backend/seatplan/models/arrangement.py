"""
Arrangement Data Models

These Pydantic models define the entities of a seating arrangement:
rooms, tables, seats, menu options and obstacles. They are the
"contract" between the arrangement store, the HTTP routes and any
caller that persists a session.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class TableShape(str, Enum):
    """Supported table shapes."""
    ROUND = "round"
    RECTANGLE = "rectangle"
    CUSTOM = "custom"


# ============ Entities ============

class Room(BaseModel):
    """A named layout canvas. Tables are placed by coordinate, not by room."""
    id: str
    name: str = Field(..., min_length=1)
    width: int = Field(default=800, gt=0)
    height: int = Field(default=600, gt=0)
    background_image: Optional[str] = None


class Table(BaseModel):
    """
    A seating unit that owns `capacity` seats.

    Attributes:
        id: Store-generated identifier (e.g., "table_k3j9x0a1b")
        name: Display name (e.g., "Head Table")
        shape: Round, rectangle or custom outline
        capacity: Number of seats the table should have
        width: Bounding box width
        height: Bounding box height
        x: X coordinate of the top-left corner
        y: Y coordinate of the top-left corner
        rotation: Rotation in degrees around the table centre
    """
    id: str
    name: str = Field(..., min_length=1)
    shape: TableShape = TableShape.ROUND
    capacity: int = Field(..., ge=0)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    x: float = 100
    y: float = 100
    rotation: float = 0


class Seat(BaseModel):
    """A seat at a table. Created and removed only through table capacity."""
    id: str
    table_id: str
    position: int = Field(..., ge=0, description="0-based, dense within the table")
    guest_id: Optional[str] = None
    menu_option_id: Optional[str] = None
    special_requirements: Optional[str] = None

    @property
    def is_occupied(self) -> bool:
        return self.guest_id is not None


class MenuOption(BaseModel):
    """A meal choice that seats can reference."""
    id: str
    name: str = Field(..., min_length=1)
    type: str = "main"
    color: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$")
    description: Optional[str] = None


class Obstacle(BaseModel):
    """A non-seating layout element (stage, dance floor, pillar, ...)."""
    id: str
    name: str = Field(..., min_length=1)
    type: str = "other"
    x: float = 0
    y: float = 0
    width: float = Field(default=50, gt=0)
    height: float = Field(default=50, gt=0)
    rotation: float = 0


# ============ Inputs ============
# Create inputs leave `name` optional so that a missing name surfaces as
# the store's ValidationFailed rather than a schema error.

class TableCreate(BaseModel):
    name: Optional[str] = None
    shape: TableShape = TableShape.ROUND
    capacity: Optional[int] = Field(default=None, ge=0)
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    x: Optional[float] = None
    y: Optional[float] = None
    rotation: Optional[float] = None


class TableUpdate(BaseModel):
    name: Optional[str] = None
    shape: Optional[TableShape] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    x: Optional[float] = None
    y: Optional[float] = None
    rotation: Optional[float] = None


class MenuOptionCreate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None


class MenuOptionUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None


class RoomCreate(BaseModel):
    name: Optional[str] = None
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    background_image: Optional[str] = None


class RoomUpdate(BaseModel):
    name: Optional[str] = None
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    background_image: Optional[str] = None


class ObstacleCreate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    rotation: Optional[float] = None


class ObstacleUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    rotation: Optional[float] = None


# ============ Results ============

class Initialization(BaseModel):
    """State returned by `ArrangementStore.initialize`."""
    menu_options: List[MenuOption]
    rooms: List[Room]
    current_room_id: Optional[str]


class GuestRemoval(BaseModel):
    """Payload of the guest-removed event."""
    seat: Seat
    guest_id: Optional[str] = None


class SeatAnchor(BaseModel):
    """Where a seat sits around its table, in room coordinates."""
    seat_id: str
    position: int
    x: float
    y: float


class ArrangementSnapshot(BaseModel):
    """
    Complete state of a store, as written by the JSON export.

    This is the document a caller persists; `ArrangementStore.from_snapshot`
    rebuilds a store from it.
    """
    tables: List[Table] = Field(default_factory=list)
    seats: List[Seat] = Field(default_factory=list)
    menu_options: List[MenuOption] = Field(default_factory=list)
    rooms: List[Room] = Field(default_factory=list)
    obstacles: List[Obstacle] = Field(default_factory=list)
    current_room_id: Optional[str] = None
