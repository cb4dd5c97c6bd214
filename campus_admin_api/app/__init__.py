"""
Application package initializer.

The project is organised into layers: ``core`` (configuration,
logging, stores, repositories and the record API client), ``schemas``
(pydantic models and entity descriptors), ``services`` (business logic)
and ``api`` (FastAPI routers).  Each domain (students, courses, events,
announcements, library) exposes a router defined in
``api/v1/endpoints``.  Versioning is handled by grouping routers under
the ``api/<version>/`` hierarchy.
"""
