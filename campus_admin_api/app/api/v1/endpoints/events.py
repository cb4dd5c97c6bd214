"""
Event endpoints for API v1.

These routes provide CRUD operations for calendar events plus the
calendar queries: events on a given day, events in a month and the next
upcoming events.  Lists are always in chronological order.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from campus_admin_api.app.api.dependencies import get_event_service
from campus_admin_api.app.core.exceptions import NotFoundError
from campus_admin_api.app.schemas.event import EventCreate, EventRead, EventUpdate
from campus_admin_api.app.services.event_service import EventService


router = APIRouter()


@router.post("/", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: EventCreate,
    service: EventService = Depends(get_event_service),
) -> EventRead:
    """Create a new event.

    Dates without a timezone are taken as UTC.
    """
    return await service.create(event)


@router.get("/", response_model=List[EventRead])
async def list_events(
    on: Optional[date] = Query(None, description="Only events on this day"),
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    service: EventService = Depends(get_event_service),
) -> List[EventRead]:
    """Получить список мероприятий.

    - **on** — только мероприятия в указанный день (ISO‑дата).
    - **year**, **month** — мероприятия за месяц (нужны оба параметра).
    """
    if on is not None:
        return await service.list_on_date(on)
    if year is not None and month is not None:
        return await service.list_in_month(year, month)
    if year is not None or month is not None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="year and month must be given together",
        )
    return await service.list_all()


@router.get("/upcoming", response_model=List[EventRead])
async def upcoming_events(
    limit: int = Query(5, ge=0, le=100),
    service: EventService = Depends(get_event_service),
) -> List[EventRead]:
    """Next events dated now or later, soonest first."""
    return await service.get_upcoming(limit)


@router.get("/{event_id}", response_model=EventRead)
async def get_event(event_id: str, service: EventService = Depends(get_event_service)) -> EventRead:
    """Retrieve a single event by its ID.

    Raises 404 if the event is not found.
    """
    event = await service.get_by_id(event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Event {event_id} not found")
    return event


@router.put("/{event_id}", response_model=EventRead)
async def update_event(
    event_id: str,
    updates: EventUpdate,
    service: EventService = Depends(get_event_service),
) -> EventRead:
    """Update an existing event.

    Partial updates are supported; any unspecified fields remain
    unchanged.
    """
    try:
        return await service.update(event_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: str, service: EventService = Depends(get_event_service)) -> None:
    try:
        await service.delete(event_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
