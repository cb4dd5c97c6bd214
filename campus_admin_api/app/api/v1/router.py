"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers (students, courses,
events, library, etc.) under a unified prefix.  When new domains are
introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import (
    announcements,
    courses,
    events,
    library,
    meta,
    statistics,
    students,
)

# Create a router for version 1 and include sub‑routers for each domain.
router = APIRouter()

router.include_router(students.router, prefix="/students", tags=["students"])
router.include_router(courses.router, prefix="/courses", tags=["courses"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(announcements.router, prefix="/announcements", tags=["announcements"])
router.include_router(library.router, prefix="/library", tags=["library"])
router.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
router.include_router(meta.router, prefix="/meta", tags=["meta"])
