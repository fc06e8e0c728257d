import json
from datetime import date

import pytest

from karoli_portal.core.exceptions import ApiEnvelopeError, ApiRequestError
from karoli_portal.integrations.university.faculty_api import FacultyApi
from karoli_portal.schemas.forms import (
    AssignmentCreate,
    CourseCreate,
    ExamCreate,
    ExamUpdate,
    GradeUpsert,
    MaterialCreate,
    MaterialUpdate,
)

COURSES = [
    {"id": "c1", "code": "CS101", "name": "Intro to CS", "credits": 3, "students": 45, "maxCapacity": 50},
    {"id": "c2", "code": "CS201", "name": "Data Structures", "credits": 4, "students": 38, "maxCapacity": 40},
]


@pytest.fixture
def api(rest_client) -> FacultyApi:
    return FacultyApi(rest_client)


def sent_json(backend, method, path):
    return json.loads(backend.last(method, path).content)


async def test_get_courses_with_search(api, backend):
    backend.reply("GET", "/api/faculty/courses", data=COURSES)

    courses = await api.get_courses("CS")

    assert [c.code for c in courses] == ["CS101", "CS201"]
    assert courses[0].max_capacity == 50
    assert backend.last("GET", "/api/faculty/courses").url.params["search"] == "CS"


async def test_get_course_finds_by_id(api, backend):
    backend.reply("GET", "/api/faculty/courses", data=COURSES)

    course = await api.get_course("c2")

    assert course is not None
    assert course.name == "Data Structures"


async def test_get_course_unknown_id(api, backend):
    backend.reply("GET", "/api/faculty/courses", data=COURSES)

    assert await api.get_course("missing") is None


async def test_create_course_sends_camel_case_without_unset_fields(api, backend):
    backend.reply("POST", "/api/faculty/courses", data={"id": "c3"})

    await api.create_course(CourseCreate(
        course_code="CS301", name="Web Development", department_id="d1", credits=3,
        max_capacity=60, start_date=date(2025, 9, 1),
    ))

    assert sent_json(backend, "POST", "/api/faculty/courses") == {
        "courseCode": "CS301",
        "name": "Web Development",
        "departmentId": "d1",
        "credits": 3,
        "maxCapacity": 60,
        "startDate": "2025-09-01",
    }


async def test_create_course_rejected_by_backend(api, backend):
    backend.reply("POST", "/api/faculty/courses", success=False, message="Department not found")

    with pytest.raises(ApiEnvelopeError, match="Department not found"):
        await api.create_course(CourseCreate(course_code="X", name="X", department_id="d0", credits=1))


async def test_departments_and_course_students(api, backend):
    backend.reply("GET", "/api/faculty/departments", data=[{"id": "d1", "name": "Computer Science", "code": "CS"}])
    backend.reply("GET", "/api/faculty/courses/c1/students", data=[
        {"id": "s1", "name": "Alice Johnson", "email": "alice@uni.edu", "enrollmentDate": "2024-09-01", "status": "enrolled"},
    ])

    departments = await api.get_departments()
    students = await api.get_course_students("c1")

    assert departments[0].code == "CS"
    assert students[0].enrollment_date == "2024-09-01"


async def test_assignments_filters(api, backend):
    backend.reply("GET", "/api/faculty/assignments", data=[{"id": "a1", "title": "Binary Trees", "dueDate": "2025-01-10"}])

    assignments = await api.get_assignments("all", "trees")

    params = backend.last("GET", "/api/faculty/assignments").url.params
    assert "status" not in params
    assert params["search"] == "trees"
    assert assignments[0].due_date == "2025-01-10"


async def test_create_assignment(api, backend):
    backend.reply("POST", "/api/faculty/assignments", data={"id": "a2"})

    await api.create_assignment(AssignmentCreate(course_id="c1", title="Graphs", due_date="2025-02-01T23:59"))

    assert sent_json(backend, "POST", "/api/faculty/assignments") == {
        "courseId": "c1", "title": "Graphs", "dueDate": "2025-02-01T23:59",
    }


async def test_material_crud(api, backend):
    backend.reply("GET", "/api/faculty/materials", data=[])
    backend.reply("POST", "/api/faculty/materials", data={"id": "m1"})
    backend.reply("PUT", "/api/faculty/materials/m1", data={"id": "m1"})
    backend.reply("DELETE", "/api/faculty/materials/m1", data=None)

    await api.get_materials()
    await api.create_material(MaterialCreate(course_id="c1", title="Slides", material_type="slides"))
    await api.update_material("m1", MaterialUpdate(title="Slides v2"))
    await api.delete_material("m1")

    assert sent_json(backend, "POST", "/api/faculty/materials") == {
        "courseId": "c1", "title": "Slides", "materialType": "slides",
    }
    assert sent_json(backend, "PUT", "/api/faculty/materials/m1") == {"title": "Slides v2"}
    assert backend.last("DELETE", "/api/faculty/materials/m1").content == b""


async def test_delete_material_failure_message(api, backend):
    backend.fail("DELETE", "/api/faculty/materials/m1", status_code=403)

    with pytest.raises(ApiRequestError, match="Failed to delete course material"):
        await api.delete_material("m1")


async def test_exam_lifecycle(api, backend):
    backend.reply("POST", "/api/faculty/exams", data={"id": "x1"})
    backend.reply("PUT", "/api/faculty/exams/x1", data={"id": "x1"})
    backend.reply("DELETE", "/api/faculty/exams/x1", data=None)

    await api.create_exam(ExamCreate(
        course_id="c1", title="Midterm", exam_type="midterm", total_marks=100, passing_marks=40,
        duration_minutes=90,
    ))
    await api.update_exam("x1", ExamUpdate(is_published=True))
    await api.delete_exam("x1")

    assert sent_json(backend, "POST", "/api/faculty/exams") == {
        "courseId": "c1", "title": "Midterm", "examType": "midterm",
        "totalMarks": 100.0, "passingMarks": 40.0, "durationMinutes": 90,
    }
    assert sent_json(backend, "PUT", "/api/faculty/exams/x1") == {"isPublished": True}


async def test_upsert_and_publish_grades(api, backend):
    backend.reply("POST", "/api/faculty/grades", data={"id": "g1"})
    backend.reply("POST", "/api/faculty/grades/publish", data={"published": 12})

    await api.upsert_grade(GradeUpsert(
        enrollment_id="e1", exam_id="x1", student_id="s1", course_id="c1",
        marks_obtained=78, total_marks=100, letter_grade="B+",
    ))
    result = await api.publish_grades("x1")

    assert sent_json(backend, "POST", "/api/faculty/grades") == {
        "enrollmentId": "e1", "examId": "x1", "studentId": "s1", "courseId": "c1",
        "marksObtained": 78.0, "totalMarks": 100.0, "letterGrade": "B+",
    }
    assert sent_json(backend, "POST", "/api/faculty/grades/publish") == {"examId": "x1"}
    assert result == {"published": 12}


async def test_dashboard_defaults_when_backend_sends_partial_data(api, backend):
    backend.reply("GET", "/api/faculty/dashboard", data={"stats": {"activeCourses": 3}})

    dashboard = await api.get_dashboard()

    assert dashboard.stats.active_courses == 3
    assert dashboard.stats.total_students == 0
    assert dashboard.upcoming_classes == []
