"""
Announcement endpoints for API v1.

Announcements are listed newest first.  ``/announcements/recent``
returns the latest few for the dashboard.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from campus_admin_api.app.api.dependencies import get_announcement_service
from campus_admin_api.app.core.exceptions import NotFoundError
from campus_admin_api.app.schemas.announcement import AnnouncementCreate, AnnouncementRead, AnnouncementUpdate
from campus_admin_api.app.schemas.stats import AnnouncementStats
from campus_admin_api.app.services.announcement_service import AnnouncementService


router = APIRouter()


@router.post("/", response_model=AnnouncementRead, status_code=status.HTTP_201_CREATED)
async def create_announcement(
    announcement: AnnouncementCreate,
    service: AnnouncementService = Depends(get_announcement_service),
) -> AnnouncementRead:
    """Post an announcement; its timestamp is set to the current time."""
    return await service.create(announcement)


@router.get("/", response_model=List[AnnouncementRead])
async def list_announcements(
    service: AnnouncementService = Depends(get_announcement_service),
) -> List[AnnouncementRead]:
    return await service.list_all()


@router.get("/recent", response_model=List[AnnouncementRead])
async def recent_announcements(
    limit: int = Query(5, ge=0, le=100),
    service: AnnouncementService = Depends(get_announcement_service),
) -> List[AnnouncementRead]:
    return await service.get_recent(limit)


@router.get("/stats", response_model=AnnouncementStats)
async def announcement_stats(
    service: AnnouncementService = Depends(get_announcement_service),
) -> AnnouncementStats:
    return await service.get_stats()


@router.get("/{announcement_id}", response_model=AnnouncementRead)
async def get_announcement(
    announcement_id: str,
    service: AnnouncementService = Depends(get_announcement_service),
) -> AnnouncementRead:
    announcement = await service.get_by_id(announcement_id)
    if announcement is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Announcement {announcement_id} not found"
        )
    return announcement


@router.put("/{announcement_id}", response_model=AnnouncementRead)
async def update_announcement(
    announcement_id: str,
    updates: AnnouncementUpdate,
    service: AnnouncementService = Depends(get_announcement_service),
) -> AnnouncementRead:
    try:
        return await service.update(announcement_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_announcement(
    announcement_id: str,
    service: AnnouncementService = Depends(get_announcement_service),
) -> None:
    try:
        await service.delete(announcement_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
