from unittest.mock import AsyncMock

import pytest

from campus_admin_api.app.core.exceptions import NotFoundError, UpstreamFailureError, ValidationFailedError
from campus_admin_api.app.core.latency import Latency
from campus_admin_api.app.core.repository import RemoteRepository
from campus_admin_api.app.schemas.descriptors import COURSE, ISSUE, STUDENT, SYSTEM_FIELDS
from campus_admin_api.app.services.container import build_services, remote_repositories
from campus_admin_api.app.services.course_service import CourseService
from campus_admin_api.app.services.student_service import StudentService


STUDENT_ROW = {
    "Id": 7,
    "Name": "Ada Lovelace",
    "CreatedOn": "2026-01-01T00:00:00Z",
    "email": "ada@uni.edu",
    "program": "Mathematics",
    "year": 2,
    "gpa": 3.9,
    "status": "Active",
}


def ok(**extra):
    return {"success": True, **extra}


@pytest.fixture
def client():
    return AsyncMock()


@pytest.fixture
def students(client):
    return StudentService(RemoteRepository(STUDENT, client), Latency(0))


async def test_list_maps_rows_to_local_records(students, client):
    client.fetch_records.return_value = ok(data=[STUDENT_ROW])
    [student] = await students.list_all()
    assert student.id == "7"
    assert student.name == "Ada Lovelace"
    assert student.enrolled_courses == []
    table, params = client.fetch_records.call_args.args
    assert table == "student"
    assert params["Fields"][: len(SYSTEM_FIELDS)] == list(SYSTEM_FIELDS)
    assert "gpa" in params["Fields"]


async def test_filter_by_program_sends_where_clause(students, client):
    client.fetch_records.return_value = ok(data=[STUDENT_ROW])
    await students.filter_by_program("Mathematics")
    params = client.fetch_records.call_args.args[1]
    assert params["where"] == [{"FieldName": "program", "Operator": "ExactMatch", "Values": ["Mathematics"]}]


async def test_empty_data_is_an_empty_list(students, client):
    client.fetch_records.return_value = ok(data=None)
    assert await students.list_all() == []


async def test_top_level_failure_raises_upstream_error(students, client):
    client.fetch_records.return_value = {"success": False, "message": "Table not found"}
    with pytest.raises(UpstreamFailureError, match="Table not found"):
        await students.list_all()


async def test_get_by_id_uses_numeric_wire_id(students, client):
    client.get_record_by_id.return_value = ok(data=STUDENT_ROW)
    student = await students.get_by_id("7")
    assert student.email == "ada@uni.edu"
    assert client.get_record_by_id.call_args.args[1] == 7


async def test_get_missing_returns_none(students, client):
    client.get_record_by_id.return_value = ok(data=None)
    assert await students.get_by_id("8") is None


async def test_create_sends_name_and_entity_fields(students, client):
    client.create_record.return_value = ok(results=[{"success": True, "data": STUDENT_ROW}])
    created = await students.create({"name": "Ada Lovelace", "email": "ada@uni.edu", "program": "Mathematics"})
    assert created.id == "7"
    table, params = client.create_record.call_args.args
    assert table == "student"
    [row] = params["records"]
    assert row["Name"] == "Ada Lovelace"
    assert row["program"] == "Mathematics"
    assert "enrolled_courses" not in row
    assert "id" not in row


async def test_rejected_record_raises_with_all_field_errors(students, client):
    client.create_record.return_value = ok(
        results=[
            {
                "success": False,
                "errors": [
                    {"fieldLabel": "Email", "message": "is invalid"},
                    {"fieldLabel": "GPA", "message": "is too high"},
                ],
            }
        ]
    )
    with pytest.raises(ValidationFailedError) as exc_info:
        await students.create({"name": "Ada", "email": "ada", "program": "Mathematics"})
    assert str(exc_info.value) == "Email: is invalid"
    assert exc_info.value.errors == ["Email: is invalid", "GPA: is too high"]


async def test_rejected_record_with_message_only(students, client):
    client.create_record.return_value = ok(results=[{"success": False, "message": "Duplicate record"}])
    with pytest.raises(ValidationFailedError, match="Duplicate record"):
        await students.create({"name": "Ada", "email": "ada@uni.edu", "program": "Mathematics"})


async def test_update_sends_only_changes(students, client):
    client.get_record_by_id.return_value = ok(data=STUDENT_ROW)
    client.update_record.return_value = ok(results=[{"success": True, "data": {**STUDENT_ROW, "gpa": 3.2}}])
    updated = await students.update("7", {"gpa": 3.2})
    assert updated.gpa == 3.2
    [row] = client.update_record.call_args.args[1]["records"]
    assert row == {"gpa": 3.2, "Id": 7}


async def test_update_without_result_data_reads_back(students, client):
    client.get_record_by_id.return_value = ok(data=STUDENT_ROW)
    client.update_record.return_value = ok()
    updated = await students.update("7", {"status": "Active"})
    assert updated.id == "7"
    assert client.get_record_by_id.await_count == 2


async def test_update_missing_raises_not_found(students, client):
    client.get_record_by_id.return_value = ok(data=None)
    with pytest.raises(NotFoundError):
        await students.update("99", {"gpa": 3.0})
    client.update_record.assert_not_awaited()


async def test_delete(students, client):
    client.get_record_by_id.return_value = ok(data=STUDENT_ROW)
    client.delete_record.return_value = ok()
    assert await students.delete("7") is True
    assert client.delete_record.call_args.args == ("student", {"RecordIds": [7]})


async def test_delete_missing_raises_not_found(students, client):
    client.get_record_by_id.return_value = ok(data=None)
    with pytest.raises(NotFoundError):
        await students.delete("99")
    client.delete_record.assert_not_awaited()


async def test_course_schedule_is_flattened_for_the_record_api(client):
    courses = CourseService(RemoteRepository(COURSE, client), Latency(0))
    row = {
        "Id": 3,
        "Name": "Linear Algebra",
        "code": "MATH220",
        "instructor": "Dr. Rao",
        "capacity": 60,
        "enrollment_count": 38,
        "schedule_days": "Monday,Wednesday",
        "schedule_time": "1:00 PM",
        "room": "S310",
    }
    client.create_record.return_value = ok(results=[{"success": True, "data": row}])
    created = await courses.create(
        {"name": "Linear Algebra", "code": "MATH220", "capacity": 60, "schedule": {"days": ["Monday", "Wednesday"], "time": "1:00 PM"}}
    )
    assert created.schedule.days == ["Monday", "Wednesday"]
    [sent] = client.create_record.call_args.args[1]["records"]
    assert sent["schedule_days"] == "Monday,Wednesday"
    assert sent["schedule_time"] == "1:00 PM"
    assert "schedule" not in sent


def test_reference_fields_round_trip():
    row = ISSUE.to_remote({"book_id": "12", "book_title": "Clean Code", "status": "active"})
    assert row["book_id"] == 12
    assert row["Name"] == "Clean Code"
    assert ISSUE.from_remote({"Id": 5, **row})["book_id"] == "12"


async def test_library_coordination_over_remote_backend(client):
    library = build_services(remote_repositories(client)).library
    book_row = {"Id": 1, "Name": "Clean Code", "title": "Clean Code", "status": "available"}
    issue_row = {"Id": 4, "Name": "Clean Code", "book_id": 1, "student_name": "Emma", "issue_date": "2026-10-01", "due_date": "2026-10-15", "status": "active"}
    client.get_record_by_id.return_value = ok(data=book_row)
    client.create_record.return_value = ok(results=[{"success": True, "data": issue_row}])
    client.update_record.return_value = ok(results=[{"success": True, "data": {**book_row, "status": "issued"}}])
    issue = await library.create_issue({"book_id": "1", "student_name": "Emma", "issue_date": "2026-10-01"})
    assert issue.id == "4"
    table, params = client.update_record.call_args.args
    assert table == "book"
    assert params == {"records": [{"status": "issued", "Id": 1}]}


async def test_partial_schedule_update_keeps_remote_days(client):
    courses = CourseService(RemoteRepository(COURSE, client), Latency(0))
    row = {
        "Id": 3,
        "Name": "Linear Algebra",
        "code": "MATH220",
        "capacity": 60,
        "schedule_days": "Monday,Wednesday",
        "schedule_time": "1:00 PM",
    }
    client.get_record_by_id.return_value = ok(data=row)
    client.update_record.return_value = ok(results=[{"success": True, "data": {**row, "schedule_time": "2:00 PM"}}])
    updated = await courses.update("3", {"schedule_time": "2:00 PM"})
    assert updated.schedule.days == ["Monday", "Wednesday"]
    [sent] = client.update_record.call_args.args[1]["records"]
    assert sent["schedule_days"] == "Monday,Wednesday"
    assert sent["schedule_time"] == "2:00 PM"
