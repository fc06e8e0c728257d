"""
Faculty dashboard pages and form handlers
"""
from datetime import date
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from karoli_portal.api.deps import get_faculty_api, redirect_to, render_page
from karoli_portal.core.exceptions import UpstreamError
from karoli_portal.core.logging_config import logger
from karoli_portal.core.security import CurrentUser, require_faculty
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

router = APIRouter(prefix="/faculty", tags=["faculty_pages"])

ASSIGNMENT_STATUSES = ["all", "active", "closed", "draft"]
MATERIAL_TYPES = ["lecture_notes", "slides", "video", "assignment", "reading", "other"]
EXAM_TYPES = ["midterm", "final", "quiz", "assignment", "practical"]


def course_url(course_id: Optional[str]) -> str:
    return f"/faculty/courses/{quote(course_id, safe='')}" if course_id else "/faculty/courses"


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    try:
        dashboard = await api.get_dashboard()
    except UpstreamError as e:
        return render_page(request, "faculty/dashboard.html", user, "faculty", error=e.message)
    return render_page(request, "faculty/dashboard.html", user, "faculty", dashboard=dashboard)


# ============================================
# Courses
# ============================================

@router.get("/courses", response_class=HTMLResponse)
async def courses_page(
    request: Request,
    search: str = "",
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    try:
        courses = await api.get_courses(search or None)
    except UpstreamError as e:
        return render_page(request, "faculty/courses.html", user, "faculty", error=e.message,
                           search=search)

    # The create form still works without the department list
    try:
        departments = await api.get_departments()
    except UpstreamError as e:
        logger.warning(f"Department list unavailable for course form: {e.message}")
        departments = []

    return render_page(request, "faculty/courses.html", user, "faculty",
                       courses=courses, departments=departments, search=search)


@router.post("/courses")
async def create_course(
    course_code: str = Form(...),
    name: str = Form(...),
    department_id: str = Form(...),
    credits: int = Form(...),
    description: Optional[str] = Form(None),
    max_capacity: Optional[int] = Form(None),
    semester: Optional[str] = Form(None),
    academic_year: Optional[str] = Form(None),
    course_level: Optional[str] = Form(None),
    prerequisites: Optional[str] = Form(None),
    syllabus_url: Optional[str] = Form(None),
    start_date: Optional[date] = Form(None),
    end_date: Optional[date] = Form(None),
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    course = CourseCreate(
        course_code=course_code, name=name, department_id=department_id, credits=credits,
        description=description, max_capacity=max_capacity, semester=semester,
        academic_year=academic_year, course_level=course_level, prerequisites=prerequisites,
        syllabus_url=syllabus_url, start_date=start_date, end_date=end_date,
    )
    try:
        await api.create_course(course)
    except UpstreamError as e:
        return redirect_to("/faculty/courses", error=e.message)
    logger.info(f"Course {course_code} created", extra={"course_code": course_code})
    return redirect_to("/faculty/courses", notice=f"Course {course_code} created")


@router.get("/courses/{course_id}", response_class=HTMLResponse)
async def course_detail_page(
    request: Request,
    course_id: str,
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    context = {"course_id": course_id, "exam_types": EXAM_TYPES}
    try:
        course = await api.get_course(course_id)
    except UpstreamError as e:
        return render_page(request, "faculty/course_detail.html", user, "faculty", error=e.message,
                           **context)
    if course is None:
        return render_page(request, "faculty/course_detail.html", user, "faculty",
                           error="Course not found", **context)

    students = []
    students_error = None
    try:
        students = await api.get_course_students(course_id)
    except UpstreamError as e:
        students_error = e.message

    return render_page(request, "faculty/course_detail.html", user, "faculty",
                       course=course, students=students, students_error=students_error, **context)


# ============================================
# Assignments
# ============================================

@router.get("/assignments", response_class=HTMLResponse)
async def assignments_page(
    request: Request,
    status: str = "all",
    search: str = "",
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    context = {"status": status, "search": search, "statuses": ASSIGNMENT_STATUSES}
    try:
        assignments = await api.get_assignments(status, search or None)
        courses = await api.get_courses()
    except UpstreamError as e:
        return render_page(request, "faculty/assignments.html", user, "faculty", error=e.message,
                           **context)
    return render_page(request, "faculty/assignments.html", user, "faculty",
                       assignments=assignments, courses=courses, **context)


@router.post("/assignments")
async def create_assignment(
    course_id: str = Form(...),
    title: str = Form(...),
    due_date: str = Form(...),
    description: Optional[str] = Form(None),
    file_url: Optional[str] = Form(None),
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    assignment = AssignmentCreate(
        course_id=course_id, title=title, due_date=due_date,
        description=description, file_url=file_url,
    )
    try:
        await api.create_assignment(assignment)
    except UpstreamError as e:
        return redirect_to("/faculty/assignments", error=e.message)
    return redirect_to("/faculty/assignments", notice="Assignment created")


# ============================================
# Materials
# ============================================

@router.get("/materials", response_class=HTMLResponse)
async def materials_page(
    request: Request,
    search: str = "",
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    context = {"search": search, "material_types": MATERIAL_TYPES}
    try:
        materials = await api.get_materials(search or None)
        courses = await api.get_courses()
    except UpstreamError as e:
        return render_page(request, "faculty/materials.html", user, "faculty", error=e.message,
                           **context)
    return render_page(request, "faculty/materials.html", user, "faculty",
                       materials=materials, courses=courses, **context)


@router.post("/materials")
async def create_material(
    course_id: str = Form(...),
    title: str = Form(...),
    material_type: str = Form(...),
    description: Optional[str] = Form(None),
    file_url: Optional[str] = Form(None),
    due_date: Optional[str] = Form(None),
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    material = MaterialCreate(
        course_id=course_id, title=title, material_type=material_type,
        description=description, file_url=file_url, due_date=due_date,
    )
    try:
        await api.create_material(material)
    except UpstreamError as e:
        return redirect_to("/faculty/materials", error=e.message)
    return redirect_to("/faculty/materials", notice="Material uploaded")


@router.post("/materials/{material_id}")
async def update_material(
    material_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    file_url: Optional[str] = Form(None),
    due_date: Optional[str] = Form(None),
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    changes = MaterialUpdate(title=title, description=description, file_url=file_url, due_date=due_date)
    try:
        await api.update_material(material_id, changes)
    except UpstreamError as e:
        return redirect_to("/faculty/materials", error=e.message)
    return redirect_to("/faculty/materials", notice="Material updated")


@router.post("/materials/{material_id}/delete")
async def delete_material(
    material_id: str,
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    try:
        await api.delete_material(material_id)
    except UpstreamError as e:
        return redirect_to("/faculty/materials", error=e.message)
    return redirect_to("/faculty/materials", notice="Material deleted")


# ============================================
# Exams and grades
# ============================================

@router.post("/exams")
async def create_exam(
    course_id: str = Form(...),
    title: str = Form(...),
    exam_type: str = Form(...),
    total_marks: float = Form(...),
    passing_marks: float = Form(...),
    description: Optional[str] = Form(None),
    duration_minutes: Optional[int] = Form(None),
    scheduled_date: Optional[str] = Form(None),
    exam_location: Optional[str] = Form(None),
    instructions: Optional[str] = Form(None),
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    exam = ExamCreate(
        course_id=course_id, title=title, exam_type=exam_type,
        total_marks=total_marks, passing_marks=passing_marks, description=description,
        duration_minutes=duration_minutes, scheduled_date=scheduled_date,
        exam_location=exam_location, instructions=instructions,
    )
    try:
        await api.create_exam(exam)
    except UpstreamError as e:
        return redirect_to(course_url(course_id), error=e.message)
    return redirect_to(course_url(course_id), notice="Exam created")


@router.post("/exams/{exam_id}")
async def update_exam(
    exam_id: str,
    course_id: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    exam_type: Optional[str] = Form(None),
    total_marks: Optional[float] = Form(None),
    passing_marks: Optional[float] = Form(None),
    duration_minutes: Optional[int] = Form(None),
    scheduled_date: Optional[str] = Form(None),
    exam_location: Optional[str] = Form(None),
    instructions: Optional[str] = Form(None),
    is_published: Optional[bool] = Form(None),
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    changes = ExamUpdate(
        title=title, description=description, exam_type=exam_type,
        total_marks=total_marks, passing_marks=passing_marks,
        duration_minutes=duration_minutes, scheduled_date=scheduled_date,
        exam_location=exam_location, instructions=instructions, is_published=is_published,
    )
    try:
        await api.update_exam(exam_id, changes)
    except UpstreamError as e:
        return redirect_to(course_url(course_id), error=e.message)
    return redirect_to(course_url(course_id), notice="Exam updated")


@router.post("/exams/{exam_id}/delete")
async def delete_exam(
    exam_id: str,
    course_id: Optional[str] = Form(None),
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    try:
        await api.delete_exam(exam_id)
    except UpstreamError as e:
        return redirect_to(course_url(course_id), error=e.message)
    return redirect_to(course_url(course_id), notice="Exam deleted")


@router.post("/grades")
async def save_grade(
    enrollment_id: str = Form(...),
    exam_id: str = Form(...),
    student_id: str = Form(...),
    course_id: str = Form(...),
    marks_obtained: float = Form(...),
    total_marks: float = Form(...),
    letter_grade: Optional[str] = Form(None),
    grade_points: Optional[float] = Form(None),
    remarks: Optional[str] = Form(None),
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    grade = GradeUpsert(
        enrollment_id=enrollment_id, exam_id=exam_id, student_id=student_id,
        course_id=course_id, marks_obtained=marks_obtained, total_marks=total_marks,
        letter_grade=letter_grade, grade_points=grade_points, remarks=remarks,
    )
    try:
        await api.upsert_grade(grade)
    except UpstreamError as e:
        return redirect_to(course_url(course_id), error=e.message)
    return redirect_to(course_url(course_id), notice="Grade saved")


@router.post("/grades/publish")
async def publish_grades(
    exam_id: str = Form(...),
    course_id: Optional[str] = Form(None),
    user: CurrentUser = Depends(require_faculty),
    api: FacultyApi = Depends(get_faculty_api),
):
    try:
        await api.publish_grades(exam_id)
    except UpstreamError as e:
        return redirect_to(course_url(course_id), error=e.message)
    logger.info(f"Grades published for exam {exam_id}", extra={"exam_id": exam_id})
    return redirect_to(course_url(course_id), notice="Grades published")
