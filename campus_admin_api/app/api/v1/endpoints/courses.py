"""
Course endpoints for API v1.

Besides CRUD, ``/courses/utilization`` reports how full each course is
and ``/courses/stats`` the enrollment summary.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from campus_admin_api.app.api.dependencies import get_course_service
from campus_admin_api.app.core.exceptions import NotFoundError
from campus_admin_api.app.schemas.course import CourseCreate, CourseRead, CourseUpdate
from campus_admin_api.app.schemas.stats import CourseStats, CourseUtilization
from campus_admin_api.app.services.course_service import CourseService


router = APIRouter()


@router.post("/", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
async def create_course(
    course: CourseCreate,
    service: CourseService = Depends(get_course_service),
) -> CourseRead:
    """Create a course.

    The schedule may be sent either as ``{"days": [...], "time": "..."}``
    or as flat ``schedule_days``/``schedule_time`` fields.
    """
    return await service.create(course)


@router.get("/", response_model=List[CourseRead])
async def list_courses(
    q: Optional[str] = Query(None, description="Substring of the name, code or instructor"),
    service: CourseService = Depends(get_course_service),
) -> List[CourseRead]:
    if q:
        return await service.search(q)
    return await service.list_all()


@router.get("/stats", response_model=CourseStats)
async def course_stats(service: CourseService = Depends(get_course_service)) -> CourseStats:
    return await service.get_stats()


@router.get("/utilization", response_model=List[CourseUtilization])
async def course_utilization(service: CourseService = Depends(get_course_service)) -> List[CourseUtilization]:
    """Per-course utilization with its band (healthy, warning, critical)."""
    return await service.get_utilization()


@router.get("/{course_id}", response_model=CourseRead)
async def get_course(course_id: str, service: CourseService = Depends(get_course_service)) -> CourseRead:
    course = await service.get_by_id(course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Course {course_id} not found")
    return course


@router.put("/{course_id}", response_model=CourseRead)
async def update_course(
    course_id: str,
    updates: CourseUpdate,
    service: CourseService = Depends(get_course_service),
) -> CourseRead:
    try:
        return await service.update(course_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(course_id: str, service: CourseService = Depends(get_course_service)) -> None:
    try:
        await service.delete(course_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
