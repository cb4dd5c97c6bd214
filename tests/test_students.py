import pytest

from campus_admin_api.app.core.exceptions import NotFoundError, ValidationFailedError
from campus_admin_api.app.schemas.student import StudentCreate
from tests.conftest import make_services, make_student


@pytest.fixture
def students():
    return make_services(
        students=[
            make_student("1", name="Emma Johnson", email="emma@uni.edu", gpa=3.0, status="Active"),
            make_student("2", name="Liam Chen", email="lchen@uni.edu", gpa=3.5, status="Active", program="Mathematics"),
            make_student("3", name="Ava Stone", email="ava.stone@uni.edu", gpa=4.0, status="Inactive"),
        ]
    ).students


async def test_stats_scenario(students):
    stats = await students.get_stats()
    assert stats.total == 3
    assert stats.active == 2
    assert stats.average_gpa == 3.5


async def test_stats_on_empty_store(services):
    stats = await services.students.get_stats()
    assert (stats.total, stats.active, stats.average_gpa) == (0, 0, 0.0)


async def test_stats_total_tracks_creates_and_deletes(students):
    created = await students.create({"name": "New", "email": "new@uni.edu", "program": "Biology"})
    assert (await students.get_stats()).total == 4
    await students.delete(created.id)
    assert (await students.get_stats()).total == 3


async def test_average_gpa_is_rounded_to_two_decimals(services):
    for gpa in (3.0, 3.0, 3.1):
        await services.students.create({"name": "x", "email": "x@uni.edu", "program": "p", "gpa": gpa})
    assert (await services.students.get_stats()).average_gpa == 3.03


async def test_create_assigns_fresh_id_and_defaults(students):
    created = await students.create(StudentCreate(name="Noah", email="noah@uni.edu", program="Biology"))
    assert created.id == "4"
    assert created.status == "Active"
    assert created.enrolled_courses == []
    assert await students.get_by_id(created.id) == created


async def test_create_accepts_camel_case_fields(students):
    created = await students.create(
        {"name": "Mia", "email": "mia@uni.edu", "program": "Physics", "enrolledCourses": [1, "2"]}
    )
    assert created.enrolled_courses == ["1", "2"]


async def test_create_rejects_invalid_payload(students):
    with pytest.raises(ValidationFailedError) as exc_info:
        await students.create({"name": "Bad", "email": "bad@uni.edu", "program": "x", "year": 7})
    assert exc_info.value.errors[0].startswith("year")


async def test_get_missing_returns_none(students):
    assert await students.get_by_id("999") is None


async def test_returned_models_do_not_share_state(students):
    student = await students.get_by_id("1")
    student.enrolled_courses.append("42")
    student.name = "Changed"
    again = await students.get_by_id("1")
    assert again.name == "Emma Johnson"
    assert again.enrolled_courses == []


async def test_update_merges_only_given_fields(students):
    updated = await students.update("2", {"gpa": 3.9})
    assert updated.gpa == 3.9
    assert updated.name == "Liam Chen"
    assert updated.program == "Mathematics"
    assert (await students.get_by_id("2")).gpa == 3.9


async def test_update_rejects_invalid_merge(students):
    with pytest.raises(ValidationFailedError):
        await students.update("2", {"gpa": 4.5})
    with pytest.raises(ValidationFailedError):
        await students.update("2", {"name": None})
    assert (await students.get_by_id("2")).gpa == 3.5


async def test_update_and_delete_missing_raise_not_found(students):
    with pytest.raises(NotFoundError):
        await students.update("999", {"gpa": 2.0})
    with pytest.raises(NotFoundError):
        await students.delete("999")


async def test_delete(students):
    assert await students.delete("1") is True
    assert await students.get_by_id("1") is None
    assert [s.id for s in await students.list_all()] == ["2", "3"]


async def test_search_by_name_matches_name_or_email(students):
    assert [s.id for s in await students.search_by_name("EMMA")] == ["1"]
    assert [s.id for s in await students.search_by_name("lchen@")] == ["2"]
    assert await students.search_by_name("nobody") == []


async def test_filter_by_program_is_exact_and_case_insensitive(students):
    assert [s.id for s in await students.filter_by_program("computer science")] == ["1", "3"]
    assert await students.filter_by_program("Computer") == []


async def test_update_missing_with_invalid_payload_raises_not_found(students):
    with pytest.raises(NotFoundError):
        await students.update("999", {"gpa": 9})
