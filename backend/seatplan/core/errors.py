"""
Arrangement Errors

Every failure of the arrangement store is raised synchronously as one of
these exceptions, before any state has been changed.
"""

from typing import Any, Dict, Optional


class ArrangementError(Exception):
    """Base class for all arrangement store errors."""

    error_code = "arrangement_error"
    status_code = 400

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class NotFound(ArrangementError):
    """An id did not resolve to an entity in the store."""

    error_code = "not_found"
    status_code = 404

    def __init__(self, kind: str, entity_id: Optional[str], message: Optional[str] = None):
        super().__init__(
            message or f"{kind.capitalize()} '{entity_id}' not found",
            {"kind": kind, "id": entity_id},
        )
        self.kind = kind
        self.entity_id = entity_id


class ValidationFailed(ArrangementError):
    """Input was missing a required field or held an invalid value."""

    error_code = "validation_failed"
    status_code = 422


class CapacityExceeded(ArrangementError):
    """The table limit of the current tier has been reached."""

    error_code = "capacity_exceeded"
    status_code = 409

    def __init__(self, limit: int):
        super().__init__(
            f"The table limit of {limit} has been reached. "
            "Upgrade to a higher plan to add more tables.",
            {"limit": limit},
        )
        self.limit = limit


class ReferentialConflict(ArrangementError):
    """A delete was attempted on an entity that is still referenced."""

    error_code = "referential_conflict"
    status_code = 409
