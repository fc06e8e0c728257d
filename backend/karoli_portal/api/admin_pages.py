"""
Admin dashboard pages and form handlers
"""
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from karoli_portal.api.deps import get_admin_api, get_users_api, redirect_to, render_page
from karoli_portal.core.exceptions import UpstreamError
from karoli_portal.core.logging_config import logger
from karoli_portal.core.security import CurrentUser, Role, require_admin
from karoli_portal.integrations.university.admin_api import ACTIVITY_LIMIT, USERS_PAGE_SIZE, AdminApi
from karoli_portal.integrations.university.users_api import UsersApi
from karoli_portal.schemas.forms import DepartmentIn

router = APIRouter(prefix="/admin", tags=["admin_pages"])

USER_TYPES = ["student", "faculty", "staff", "admin"]
USER_STATUSES = ["active", "inactive", "suspended"]


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    user: CurrentUser = Depends(require_admin),
    api: AdminApi = Depends(get_admin_api),
):
    # Both requests must succeed for the page to render
    try:
        stats = await api.get_analytics()
        activities = await api.get_activity(limit=ACTIVITY_LIMIT)
    except UpstreamError as e:
        return render_page(request, "admin/dashboard.html", user, "admin", error=e.message)
    return render_page(request, "admin/dashboard.html", user, "admin",
                       stats=stats, activities=activities)


# ============================================
# Users
# ============================================

@router.get("/users", response_class=HTMLResponse)
async def users_page(
    request: Request,
    page: int = 1,
    limit: int = USERS_PAGE_SIZE,
    user_type: str = "",
    status: str = "",
    search: str = "",
    user: CurrentUser = Depends(require_admin),
    api: AdminApi = Depends(get_admin_api),
):
    context = {
        "user_type": user_type,
        "status": status,
        "search": search,
        "user_types": USER_TYPES,
        "user_statuses": USER_STATUSES,
        "roles": [role.value for role in Role],
    }
    try:
        result = await api.list_users(
            page=max(page, 1), limit=limit,
            user_type=user_type or None, status=status or None, search=search or None,
        )
    except UpstreamError as e:
        return render_page(request, "admin/users.html", user, "admin", error=e.message, **context)
    return render_page(request, "admin/users.html", user, "admin",
                       users=result.users, pagination=result.pagination, **context)


@router.post("/users/{user_id}/status")
async def update_user_status(
    user_id: str,
    status: str = Form(...),
    user: CurrentUser = Depends(require_admin),
    api: AdminApi = Depends(get_admin_api),
):
    try:
        await api.update_user_status(user_id, status)
    except UpstreamError as e:
        return redirect_to("/admin/users", error=e.message)
    logger.info(f"User {user_id} status set to {status}", extra={"target_user_id": user_id})
    return redirect_to("/admin/users", notice="Status updated")


@router.post("/users/{user_id}/role")
async def update_user_role(
    user_id: str,
    role: str = Form(...),
    user: CurrentUser = Depends(require_admin),
    api: UsersApi = Depends(get_users_api),
):
    try:
        await api.update_role(user_id, role)
    except UpstreamError as e:
        return redirect_to("/admin/users", error=e.message)
    logger.info(f"User {user_id} role set to {role}", extra={"target_user_id": user_id})
    return redirect_to("/admin/users", notice="Role updated")


# ============================================
# Departments
# ============================================

@router.get("/departments", response_class=HTMLResponse)
async def departments_page(
    request: Request,
    edit: Optional[str] = None,
    user: CurrentUser = Depends(require_admin),
    api: AdminApi = Depends(get_admin_api),
):
    try:
        departments = await api.list_departments()
    except UpstreamError as e:
        return render_page(request, "admin/departments.html", user, "admin", error=e.message)
    editing = next((d for d in departments if d.id == edit), None)
    return render_page(request, "admin/departments.html", user, "admin",
                       departments=departments, editing=editing)


def department_form(
    name: str = Form(...),
    code: str = Form(...),
    description: str = Form(""),
    building: str = Form(""),
    office_location: str = Form(""),
    phone: str = Form(""),
    email: str = Form(""),
    website: str = Form(""),
) -> DepartmentIn:
    return DepartmentIn(
        name=name, code=code, description=description, building=building,
        office_location=office_location, phone=phone, email=email, website=website,
    )


@router.post("/departments")
async def create_department(
    department: DepartmentIn = Depends(department_form),
    user: CurrentUser = Depends(require_admin),
    api: AdminApi = Depends(get_admin_api),
):
    try:
        await api.create_department(department)
    except UpstreamError as e:
        return redirect_to("/admin/departments", error=e.message)
    return redirect_to("/admin/departments", notice=f"Department {department.code} created")


@router.post("/departments/{department_id}")
async def update_department(
    department_id: str,
    department: DepartmentIn = Depends(department_form),
    user: CurrentUser = Depends(require_admin),
    api: AdminApi = Depends(get_admin_api),
):
    try:
        await api.update_department(department_id, department)
    except UpstreamError as e:
        return redirect_to("/admin/departments", error=e.message)
    return redirect_to("/admin/departments", notice=f"Department {department.code} updated")


# ============================================
# Payments and reports
# ============================================

@router.get("/payments", response_class=HTMLResponse)
async def payments_page(
    request: Request,
    user: CurrentUser = Depends(require_admin),
    api: AdminApi = Depends(get_admin_api),
):
    try:
        overview = await api.get_payments()
    except UpstreamError as e:
        return render_page(request, "admin/payments.html", user, "admin", error=e.message)
    return render_page(request, "admin/payments.html", user, "admin",
                       stats=overview.stats, payments=overview.recent_payments)


@router.get("/reports", response_class=HTMLResponse)
async def reports_page(
    request: Request,
    user: CurrentUser = Depends(require_admin),
    api: AdminApi = Depends(get_admin_api),
):
    try:
        course_stats = await api.get_course_stats()
    except UpstreamError as e:
        return render_page(request, "admin/reports.html", user, "admin", error=e.message)
    return render_page(request, "admin/reports.html", user, "admin",
                       stats=course_stats.stats, courses=course_stats.courses)
