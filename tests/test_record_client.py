from unittest.mock import MagicMock

import pytest
import requests

from campus_admin_api.app.core.record_client import HttpRecordClient


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    response = MagicMock()
    response.content = b'{"success": true}'
    response.json.return_value = {"success": True, "data": []}
    session.post.return_value = response
    return session


@pytest.fixture
def client(session):
    return HttpRecordClient(
        base_url="https://records.test/api/",
        project_id="proj-1",
        public_key="secret",
        session=session,
    )


async def test_fetch_records_posts_table_and_params(client, session):
    response = await client.fetch_records("student", {"Fields": ["Name"]})
    assert response == {"success": True, "data": []}
    session.post.assert_called_once_with(
        "https://records.test/api/fetchRecords",
        json={"tableName": "student", "params": {"Fields": ["Name"]}},
        headers={"X-Project-Id": "proj-1", "Authorization": "Bearer secret"},
        timeout=15,
    )


async def test_get_record_by_id_sends_record_id(client, session):
    await client.get_record_by_id("book", 3, {"fields": ["Name"]})
    url = session.post.call_args.args[0]
    body = session.post.call_args.kwargs["json"]
    assert url.endswith("/getRecordById")
    assert body == {"tableName": "book", "recordId": 3, "params": {"fields": ["Name"]}}


async def test_no_authorization_header_without_key(session):
    client = HttpRecordClient(base_url="https://records.test", project_id="p", session=session)
    await client.delete_record("fine", {"RecordIds": [1]})
    assert session.post.call_args.kwargs["headers"] == {"X-Project-Id": "p"}
    assert session.post.call_args.args[0] == "https://records.test/deleteRecord"


async def test_empty_body_is_success(client, session):
    session.post.return_value.content = b""
    assert await client.update_record("book", {"records": []}) == {"success": True}


async def test_http_error_becomes_failure_envelope(client, session):
    error_response = MagicMock()
    error_response.status_code = 400
    error_response.json.return_value = {"message": "Unknown table"}
    session.post.return_value.raise_for_status.side_effect = requests.HTTPError(response=error_response)
    assert await client.create_record("nope", {"records": []}) == {"success": False, "message": "Unknown table"}


async def test_connection_error_becomes_failure_envelope(client, session):
    session.post.side_effect = requests.ConnectionError("connection refused")
    response = await client.fetch_records("student", {})
    assert response == {"success": False, "message": "connection refused"}
