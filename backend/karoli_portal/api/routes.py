"""
Landing, onboarding and role routing pages
"""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from karoli_portal.api.deps import get_users_api, render_page
from karoli_portal.core.exceptions import UpstreamError
from karoli_portal.core.logging_config import logger
from karoli_portal.core.security import CurrentUser, Role, get_current_user
from karoli_portal.integrations.university.users_api import UsersApi
from karoli_portal.services.presenters import role_home

router = APIRouter(tags=["pages"])

ROLE_OPTIONS = [
    {
        "id": Role.STUDENT.value,
        "title": "Student",
        "description": "Access courses, assignments, and track your academic progress",
    },
    {
        "id": Role.FACULTY.value,
        "title": "Faculty",
        "description": "Manage courses, grade students, and share learning materials",
    },
    {
        "id": Role.ADMIN.value,
        "title": "Administrator",
        "description": "Oversee the entire system, manage users and departments",
    },
]


@router.get("/")
async def index():
    return RedirectResponse("/dashboard", status_code=303)


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(request: Request, user: CurrentUser = Depends(get_current_user)):
    role = user.role or Role.STUDENT.value
    if role == Role.ADMIN.value:
        return RedirectResponse("/admin/dashboard", status_code=303)
    return render_page(request, "dashboard.html", user, "common",
                       role=role, role_home=role_home(role))


@router.get("/onboarding", response_class=HTMLResponse)
async def onboarding_page(request: Request, user: CurrentUser = Depends(get_current_user)):
    return render_page(request, "onboarding.html", user, "common", role_options=ROLE_OPTIONS)


@router.post("/onboarding")
async def complete_onboarding(
    role: Role = Form(...),
    user: CurrentUser = Depends(get_current_user),
    api: UsersApi = Depends(get_users_api),
):
    # A failed sync must not block the user from reaching the dashboard
    try:
        await api.sync_user(role.value)
    except UpstreamError as e:
        logger.warning(f"User sync failed during onboarding: {e.message}",
                       extra={"selected_role": role.value})
    else:
        logger.info(f"User synced with role {role.value}")
    return RedirectResponse("/dashboard", status_code=303)
