"""
Request-scoped dependencies and helpers shared by the page routers.
"""
from typing import AsyncIterator, Optional
from urllib.parse import urlencode

from fastapi import Depends, Request
from fastapi.responses import RedirectResponse

from karoli_portal.core.security import CurrentUser, get_current_user
from karoli_portal.core.templates import render_template
from karoli_portal.integrations.university.admin_api import AdminApi
from karoli_portal.integrations.university.faculty_api import FacultyApi
from karoli_portal.integrations.university.rest_client import UniversityRestClient
from karoli_portal.integrations.university.student_api import StudentApi
from karoli_portal.integrations.university.users_api import UsersApi

NAVIGATION = {
    "student": [
        ("Dashboard", "/student/dashboard"),
        ("My Courses", "/student/courses"),
        ("Grades", "/student/grades"),
        ("Materials", "/student/materials"),
        ("Timetable", "/student/timetable"),
        ("Payments", "/student/payments"),
    ],
    "faculty": [
        ("Dashboard", "/faculty/dashboard"),
        ("My Courses", "/faculty/courses"),
        ("Assignments", "/faculty/assignments"),
        ("Materials", "/faculty/materials"),
    ],
    "admin": [
        ("Dashboard", "/admin/dashboard"),
        ("Users", "/admin/users"),
        ("Departments", "/admin/departments"),
        ("Payments", "/admin/payments"),
        ("Reports", "/admin/reports"),
    ],
}


async def get_university_client(
    user: CurrentUser = Depends(get_current_user),
) -> AsyncIterator[UniversityRestClient]:
    async with UniversityRestClient(user.token) as client:
        yield client


def get_student_api(client: UniversityRestClient = Depends(get_university_client)) -> StudentApi:
    return StudentApi(client)


def get_faculty_api(client: UniversityRestClient = Depends(get_university_client)) -> FacultyApi:
    return FacultyApi(client)


def get_admin_api(client: UniversityRestClient = Depends(get_university_client)) -> AdminApi:
    return AdminApi(client)


def get_users_api(client: UniversityRestClient = Depends(get_university_client)) -> UsersApi:
    return UsersApi(client)


def render_page(
    request: Request,
    template_name: str,
    user: CurrentUser,
    area: str,
    error: Optional[str] = None,
    **context,
):
    """
    Render a dashboard page inside its area's layout.

    `error` shows the inline banner with a retry link; post/redirect/get
    messages arrive as `notice` and `error` query parameters.
    """
    return render_template(
        template_name,
        {
            "user": user,
            "area": area,
            "navigation": NAVIGATION.get(area, []),
            "error": error or request.query_params.get("error"),
            "notice": request.query_params.get("notice"),
            "retry_url": request.url.remove_query_params(["error", "notice"]),
            **context,
        },
        request,
    )


def redirect_to(path: str, notice: Optional[str] = None, error: Optional[str] = None) -> RedirectResponse:
    params = {key: value for key, value in (("notice", notice), ("error", error)) if value}
    url = f"{path}?{urlencode(params)}" if params else path
    return RedirectResponse(url, status_code=303)
