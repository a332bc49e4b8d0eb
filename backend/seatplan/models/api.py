"""
API Request/Response Schemas

Pydantic models for API endpoints and for the statistics report.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from seatplan.models.arrangement import Initialization, Seat, Table


# ============ Statistics ============

class TableStatistics(BaseModel):
    """Occupancy of a single table."""
    name: str
    capacity: int
    seat_count: int
    assigned: int
    unassigned: int
    occupancy_rate: float = Field(..., ge=0, description="assigned / capacity * 100")
    seats_over_capacity: int = Field(default=0, ge=0)


class MenuStatistics(BaseModel):
    """Usage of a single menu option."""
    name: str
    count: int
    percentage: float = Field(..., ge=0, le=100, description="count / total seats * 100")


class SeatingStatistics(BaseModel):
    """Occupancy report for a whole arrangement."""
    total_tables: int
    total_seats: int
    assigned_seats: int
    unassigned_seats: int
    occupancy_rate: float = Field(..., ge=0, le=100)
    table_stats: Dict[str, TableStatistics] = Field(default_factory=dict)
    menu_stats: Dict[str, MenuStatistics] = Field(default_factory=dict)


# ============ Sessions ============

class SessionCreateRequest(BaseModel):
    """Request body for creating an editing session."""
    table_limit: Optional[int] = Field(None, ge=0, description="Tier limit; defaults to settings")


class SessionResponse(BaseModel):
    """A freshly initialized editing session."""
    session_id: str
    table_limit: int
    state: Initialization


# ============ Tables & Seats ============

class TableView(Table):
    """Table plus its live seat count."""
    seat_count: int
    seats_over_capacity: int = 0


class TableDetail(TableView):
    seats: List[Seat] = Field(default_factory=list)


class GuestAssignmentRequest(BaseModel):
    guest_id: str = Field(..., min_length=1, description="Id from the guest directory")


class MenuAssignmentRequest(BaseModel):
    menu_option_id: Optional[str] = Field(None, description="Null clears the selection")


class SpecialRequirementsRequest(BaseModel):
    special_requirements: Optional[str] = None


# ============ Rooms ============

class CurrentRoomRequest(BaseModel):
    room_id: str


# ============ Capacity Tier ============

class TableLimitRequest(BaseModel):
    limit: int = Field(..., ge=0)


class TableLimitResponse(BaseModel):
    limit: int
    table_count: int
    reached: bool


class OutOfBoundsResponse(BaseModel):
    """Elements whose footprint leaves the current room canvas."""
    room_id: Optional[str]
    element_ids: List[str] = Field(default_factory=list)


# ============ Health Check ============

class HealthResponse(BaseModel):
    """Response from /health endpoint."""
    status: str = "ok"
    version: str
    message: str = "Seating Planner API is running"


# ============ Error Response ============

class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
    error_code: Optional[str] = None
    context: Optional[dict] = None
