"""
Top‑level package for the Campus Admin API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``campus_admin_api.app.main:app``.
"""

__all__ = []
