"""
Seating Planner API

FastAPI application exposing the seating arrangement engine, one
in-memory arrangement per editing session.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from seatplan.config import get_settings
from seatplan.core.errors import ArrangementError, ValidationFailed
from seatplan.core.sessions import SessionRegistry
from seatplan.models.api import ErrorResponse, HealthResponse
from seatplan.routes import menu, reports, rooms, seats, sessions, tables


# Get settings
settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    **Seating Planner API** - Table and seat arrangement for wedding receptions.

    ## Features
    - **Tables**: Add round, rectangle or custom tables; seats follow capacity
    - **Seats**: Assign guests, menu choices and special requirements
    - **Rooms & Obstacles**: Manage layout canvases and non-seating elements
    - **Reports**: Occupancy statistics and JSON/CSV export

    ## Workflow
    1. Open a session → `/api/v1/sessions`
    2. Add tables → `/api/v1/sessions/{id}/tables`
    3. Seat guests → `/api/v1/sessions/{id}/seats/{seat_id}/guest`
    4. Export the plan → `/api/v1/sessions/{id}/export?format=csv`
    """,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.state.sessions = SessionRegistry(settings)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(sessions.router, prefix=settings.api_prefix)
app.include_router(tables.router, prefix=settings.api_prefix)
app.include_router(seats.router, prefix=settings.api_prefix)
app.include_router(menu.router, prefix=settings.api_prefix)
app.include_router(rooms.router, prefix=settings.api_prefix)
app.include_router(reports.router, prefix=settings.api_prefix)


# ============ Error Handling ============

@app.exception_handler(ArrangementError)
async def arrangement_error_handler(request: Request, exc: ArrangementError) -> JSONResponse:
    """Render store errors as `ErrorResponse` with the error's status code."""
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    body = ErrorResponse(detail=exc.message, error_code=exc.error_code, context=exc.context or None)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render schema failures in the same shape as the store's ValidationFailed."""
    errors = [{"loc": [str(part) for part in err["loc"]], "msg": err["msg"]} for err in exc.errors()]
    logger.info("%s %s rejected: %d invalid field(s)", request.method, request.url.path, len(errors))
    body = ErrorResponse(detail="Request validation failed", error_code=ValidationFailed.error_code, context={"errors": errors})
    return JSONResponse(status_code=ValidationFailed.status_code, content=body.model_dump())


# ============ Health Check ============

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """Root endpoint - health check."""
    return HealthResponse(
        status="ok",
        version=settings.app_version,
        message="Seating Planner API is running. Visit /docs for API documentation."
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        version=settings.app_version
    )


# ============ Run with Uvicorn ============

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "seatplan.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
