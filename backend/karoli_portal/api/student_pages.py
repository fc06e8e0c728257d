"""
Student dashboard pages
"""
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from karoli_portal.api.deps import get_student_api, redirect_to, render_page
from karoli_portal.core.exceptions import UpstreamError
from karoli_portal.core.logging_config import logger
from karoli_portal.core.security import CurrentUser, require_student
from karoli_portal.integrations.university.student_api import StudentApi
from karoli_portal.services import presenters

router = APIRouter(prefix="/student", tags=["student_pages"])

COURSE_STATUSES = ["all", "enrolled", "completed", "dropped"]
PAYMENT_STATUSES = ["all", "completed", "pending", "failed", "refunded", "cancelled"]


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    user: CurrentUser = Depends(require_student),
    api: StudentApi = Depends(get_student_api),
):
    try:
        dashboard = await api.get_dashboard()
    except UpstreamError as e:
        return render_page(request, "student/dashboard.html", user, "student", error=e.message)
    return render_page(request, "student/dashboard.html", user, "student", dashboard=dashboard)


@router.get("/courses", response_class=HTMLResponse)
async def courses_page(
    request: Request,
    status: str = "all",
    search: str = "",
    user: CurrentUser = Depends(require_student),
    api: StudentApi = Depends(get_student_api),
):
    context = {"status": status, "search": search, "statuses": COURSE_STATUSES}
    try:
        enrollments = await api.get_enrolled_courses(status)
    except UpstreamError as e:
        return render_page(request, "student/courses.html", user, "student", error=e.message, **context)

    needle = search.strip().lower()
    if needle:
        enrollments = [
            item for item in enrollments
            if needle in (item.course.name or "").lower()
            or needle in (item.course.course_code or "").lower()
        ]
    return render_page(request, "student/courses.html", user, "student",
                       enrollments=enrollments, **context)


@router.post("/courses/enroll")
async def enroll(
    course_id: str = Form(...),
    user: CurrentUser = Depends(require_student),
    api: StudentApi = Depends(get_student_api),
):
    try:
        await api.enroll_in_course(course_id)
    except UpstreamError as e:
        logger.warning(f"Enrollment in {course_id} failed: {e.message}")
        return redirect_to("/student/courses", error=e.message)
    return redirect_to("/student/courses", notice="Enrolled in course")


@router.post("/courses/{enrollment_id}/drop")
async def drop(
    enrollment_id: str,
    user: CurrentUser = Depends(require_student),
    api: StudentApi = Depends(get_student_api),
):
    try:
        await api.drop_course(enrollment_id)
    except UpstreamError as e:
        logger.warning(f"Dropping enrollment {enrollment_id} failed: {e.message}")
        return redirect_to("/student/courses", error=e.message)
    return redirect_to("/student/courses", notice="Course dropped")


@router.get("/grades", response_class=HTMLResponse)
async def grades_page(
    request: Request,
    course: str = "all",
    user: CurrentUser = Depends(require_student),
    api: StudentApi = Depends(get_student_api),
):
    try:
        grades = await api.get_grades()
    except UpstreamError as e:
        return render_page(request, "student/grades.html", user, "student", error=e.message,
                           selected_course=course)
    return render_page(
        request, "student/grades.html", user, "student",
        summary=presenters.grade_summary(grades),
        grades=presenters.filter_grades(grades, course),
        selected_course=course,
    )


@router.get("/materials", response_class=HTMLResponse)
async def materials_page(
    request: Request,
    search: str = "",
    course_id: Optional[str] = None,
    user: CurrentUser = Depends(require_student),
    api: StudentApi = Depends(get_student_api),
):
    try:
        materials = await api.get_course_materials(course_id)
    except UpstreamError as e:
        return render_page(request, "student/materials.html", user, "student", error=e.message,
                           search=search)
    return render_page(
        request, "student/materials.html", user, "student",
        groups=presenters.group_materials_by_course(materials, search),
        search=search,
    )


@router.get("/timetable", response_class=HTMLResponse)
async def timetable_page(
    request: Request,
    user: CurrentUser = Depends(require_student),
    api: StudentApi = Depends(get_student_api),
):
    try:
        entries = await api.get_timetable()
    except UpstreamError as e:
        return render_page(request, "student/timetable.html", user, "student", error=e.message)
    return render_page(request, "student/timetable.html", user, "student",
                       days=presenters.group_timetable_by_day(entries))


@router.get("/payments", response_class=HTMLResponse)
async def payments_page(
    request: Request,
    status: str = "all",
    user: CurrentUser = Depends(require_student),
    api: StudentApi = Depends(get_student_api),
):
    context = {"status": status, "statuses": PAYMENT_STATUSES}
    try:
        payments = await api.get_payment_history()
    except UpstreamError as e:
        return render_page(request, "student/payments.html", user, "student", error=e.message, **context)
    return render_page(
        request, "student/payments.html", user, "student",
        totals=presenters.payment_totals(payments),
        payments=presenters.filter_payments(payments, status),
        **context,
    )
