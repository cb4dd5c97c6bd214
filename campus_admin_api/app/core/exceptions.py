"""Exceptions raised by the campus administration services."""

from typing import List, Optional


class CampusAdminError(Exception):
    """Base exception for service errors."""


class NotFoundError(CampusAdminError, LookupError):
    """The requested record does not exist in the store."""

    def __init__(self, entity: str, record_id: str) -> None:
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class ValidationFailedError(CampusAdminError, ValueError):
    """A payload or state transition was rejected.

    ``errors`` holds every field error reported for the failing record;
    the exception message is the first of them.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = errors or [message]


class UpstreamFailureError(CampusAdminError):
    """The record API reported a top-level failure or could not be reached."""
