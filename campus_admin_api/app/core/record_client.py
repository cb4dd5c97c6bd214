"""Record API client.

The remote data backend does not talk HTTP itself; it depends on a
*record client*, an object exposing five coroutine methods that mirror
the record‑management SDK the dashboard was built against:

* :meth:`fetch_records` – ``{"Fields": [...], "where": [...]}``
* :meth:`get_record_by_id` – ``{"fields": [...]}``
* :meth:`create_record` / :meth:`update_record` – ``{"records": [{...}]}``
* :meth:`delete_record` – ``{"RecordIds": [...]}``

Every method returns the SDK response envelope unchanged::

    {"success": bool, "message": str?, "data": record | [record]?,
     "results": [{"success": bool, "data": record?, "errors": [...]?,
                  "message": str?}]?}

Interpreting the envelope is the job of
:class:`campus_admin_api.app.core.repository.RemoteRepository`.  Tests
inject a mock; production uses :class:`HttpRecordClient`, which posts
each call as JSON to ``<base_url>/<operation>`` using ``requests``.
Transport failures are folded into a ``success: false`` envelope so the
caller sees a single failure shape.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Protocol

import requests


logger = logging.getLogger(__name__)

Response = Dict[str, Any]


class RecordClient(Protocol):
    """Capability the remote repository depends on."""

    async def fetch_records(self, table: str, params: Dict[str, Any]) -> Response: ...

    async def get_record_by_id(self, table: str, record_id: Any, params: Dict[str, Any]) -> Response: ...

    async def create_record(self, table: str, params: Dict[str, Any]) -> Response: ...

    async def update_record(self, table: str, params: Dict[str, Any]) -> Response: ...

    async def delete_record(self, table: str, params: Dict[str, Any]) -> Response: ...


class HttpRecordClient:
    """Record client speaking JSON over HTTP.

    Args:
        base_url: Base URL of the record API, e.g. ``https://records.example.com/api``.
        project_id: Project identifier sent with every request.
        public_key: Optional key.  If set, an ``Authorization`` header with
            the value ``Bearer <public_key>`` is included in all requests.
        timeout: Request timeout in seconds.
        session: Optional requests session.  If not supplied a session is
            created automatically.
    """

    def __init__(
        self,
        *,
        base_url: str,
        project_id: str,
        public_key: Optional[str] = None,
        timeout: int = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.project_id = project_id
        self.public_key = public_key
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # SDK surface
    # ------------------------------------------------------------------
    async def fetch_records(self, table: str, params: Dict[str, Any]) -> Response:
        return await self._call("fetchRecords", {"tableName": table, "params": params})

    async def get_record_by_id(self, table: str, record_id: Any, params: Dict[str, Any]) -> Response:
        return await self._call(
            "getRecordById", {"tableName": table, "recordId": record_id, "params": params}
        )

    async def create_record(self, table: str, params: Dict[str, Any]) -> Response:
        return await self._call("createRecord", {"tableName": table, "params": params})

    async def update_record(self, table: str, params: Dict[str, Any]) -> Response:
        return await self._call("updateRecord", {"tableName": table, "params": params})

    async def delete_record(self, table: str, params: Dict[str, Any]) -> Response:
        return await self._call("deleteRecord", {"tableName": table, "params": params})

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    async def _call(self, operation: str, body: Dict[str, Any]) -> Response:
        # requests is blocking; keep the event loop free while it runs.
        return await asyncio.to_thread(self._request, operation, body)

    def _request(self, operation: str, body: Dict[str, Any]) -> Response:
        """POST ``body`` to ``<base_url>/<operation>`` and return the envelope.

        On HTTP or connection errors a ``{"success": False, "message": ...}``
        envelope is returned instead of raising.
        """
        url = f"{self.base_url}/{operation}"
        headers: Dict[str, str] = {"X-Project-Id": self.project_id}
        if self.public_key:
            headers["Authorization"] = f"Bearer {self.public_key}"
        try:
            logger.debug("Sending %s request to %s", operation, url)
            response = self.session.post(url, json=body, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            if response.content:
                return response.json()
            return {"success": True}
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    if isinstance(err_json, dict):
                        message = err_json.get("message") or err_json.get("detail") or ""
                    message = message or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("Record API request failed (%s): %s", status, message)
            return {"success": False, "message": message}
        except requests.RequestException as exc:
            logger.error("Record API request failed: %s", exc)
            return {"success": False, "message": str(exc)}
