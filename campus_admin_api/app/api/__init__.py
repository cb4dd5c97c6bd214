"""
HTTP layer of the Campus Admin API.

Routes are grouped per API version (``v1`` …); ``dependencies`` exposes
the services built by ``create_app`` to the route handlers.
"""
