"""
Metadata endpoints for API v1.

Clients build their tables and forms from these descriptions instead of
hard-coding them per entity: each entity lists its display columns and
the default values of its create payload.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from campus_admin_api.app.api.dependencies import get_services
from campus_admin_api.app.core.config import settings
from campus_admin_api.app.schemas.descriptors import DESCRIPTORS
from campus_admin_api.app.services.container import ServiceContainer

router = APIRouter()


@router.get("/", response_model=Dict[str, Any])
async def get_meta(services: ServiceContainer = Depends(get_services)) -> Dict[str, Any]:
    """Return the API name and version, the data backend and the entity names."""
    return {
        "project": settings.project_name,
        "version": settings.api_version,
        "backend": settings.data_backend,
        "latency_scale": services.students.latency.scale,
        "entities": list(DESCRIPTORS),
    }


@router.get("/entities", response_model=List[Dict[str, Any]])
async def list_entities() -> List[Dict[str, Any]]:
    return [descriptor.describe() for descriptor in DESCRIPTORS.values()]


@router.get("/entities/{entity}", response_model=Dict[str, Any])
async def get_entity(entity: str) -> Dict[str, Any]:
    """Describe one entity: label, display columns and create defaults."""
    descriptor = DESCRIPTORS.get(entity)
    if descriptor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown entity {entity!r}")
    return descriptor.describe()
