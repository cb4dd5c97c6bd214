"""
Service layer.

Each service encapsulates business logic for a domain and talks to its
data through a ``RecordRepository``, so the same service code runs on
the in‑memory stores and on the remote record API without changing the
API handlers.  ``container.build_container`` wires them together.
"""
