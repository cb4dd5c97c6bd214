"""
Pydantic schema definitions for API payloads.

Each domain (students, courses, events, announcements, library) defines
its own Pydantic models for request and response bodies.  The entity
descriptors in ``descriptors`` tie those models to the record layout
used by the stores and the record API.
"""
