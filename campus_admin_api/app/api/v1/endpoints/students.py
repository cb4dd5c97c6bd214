"""
Student endpoints for API v1.

CRUD operations for students plus search by name or e‑mail, filtering
by program and summary statistics.  Invalid payloads are answered with
422 and unknown ids with 404.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from campus_admin_api.app.api.dependencies import get_student_service
from campus_admin_api.app.core.exceptions import NotFoundError
from campus_admin_api.app.schemas.stats import StudentStats
from campus_admin_api.app.schemas.student import StudentCreate, StudentRead, StudentUpdate
from campus_admin_api.app.services.student_service import StudentService


router = APIRouter()


@router.post("/", response_model=StudentRead, status_code=status.HTTP_201_CREATED)
async def create_student(
    student: StudentCreate,
    service: StudentService = Depends(get_student_service),
) -> StudentRead:
    """Create a new student."""
    return await service.create(student)


@router.get("/", response_model=List[StudentRead])
async def list_students(
    q: Optional[str] = Query(None, description="Substring of the name or e-mail"),
    program: Optional[str] = Query(None, description="Exact program name, case-insensitive"),
    service: StudentService = Depends(get_student_service),
) -> List[StudentRead]:
    """Получить список студентов.

    - **q** — поиск по имени или e‑mail (без учёта регистра).
    - **program** — фильтр по программе обучения.

    Если указаны оба параметра, применяются оба фильтра.
    """
    if q is not None and program is not None:
        matches = await service.search_by_name(q)
        return [s for s in matches if s.program.lower() == program.strip().lower()]
    if q is not None:
        return await service.search_by_name(q)
    if program is not None:
        return await service.filter_by_program(program)
    return await service.list_all()


@router.get("/stats", response_model=StudentStats)
async def student_stats(service: StudentService = Depends(get_student_service)) -> StudentStats:
    return await service.get_stats()


@router.get("/{student_id}", response_model=StudentRead)
async def get_student(
    student_id: str,
    service: StudentService = Depends(get_student_service),
) -> StudentRead:
    student = await service.get_by_id(student_id)
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student {student_id} not found")
    return student


@router.put("/{student_id}", response_model=StudentRead)
async def update_student(
    student_id: str,
    updates: StudentUpdate,
    service: StudentService = Depends(get_student_service),
) -> StudentRead:
    """Update a student.

    Partial updates are supported; fields left out of the payload keep
    their current values.
    """
    try:
        return await service.update(student_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: str,
    service: StudentService = Depends(get_student_service),
) -> None:
    try:
        await service.delete(student_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
