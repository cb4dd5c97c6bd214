"""
FastAPI dependencies giving endpoints access to the services.

The services are built once per application by ``create_app`` and kept
on ``app.state.services``.
"""

from fastapi import Depends, Request

from ..services.announcement_service import AnnouncementService
from ..services.container import ServiceContainer
from ..services.course_service import CourseService
from ..services.event_service import EventService
from ..services.library_service import LibraryService
from ..services.statistics_service import StatisticsService
from ..services.student_service import StudentService


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_student_service(services: ServiceContainer = Depends(get_services)) -> StudentService:
    return services.students


def get_course_service(services: ServiceContainer = Depends(get_services)) -> CourseService:
    return services.courses


def get_event_service(services: ServiceContainer = Depends(get_services)) -> EventService:
    return services.events


def get_announcement_service(services: ServiceContainer = Depends(get_services)) -> AnnouncementService:
    return services.announcements


def get_library_service(services: ServiceContainer = Depends(get_services)) -> LibraryService:
    return services.library


def get_statistics_service(services: ServiceContainer = Depends(get_services)) -> StatisticsService:
    return services.statistics
