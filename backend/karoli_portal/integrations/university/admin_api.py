"""
Admin endpoints of the university backend.
"""
from typing import Any, List, Optional

from karoli_portal.integrations.university.rest_client import UniversityRestClient
from karoli_portal.schemas.admin import ActivityLog, CourseStats, DashboardStats, Department, UserPage
from karoli_portal.schemas.finance import PaymentOverview
from karoli_portal.schemas.forms import DepartmentIn

ACTIVITY_LIMIT = 10
USERS_PAGE_SIZE = 20


class AdminApi:
    def __init__(self, client: UniversityRestClient) -> None:
        self.client = client

    async def get_analytics(self) -> DashboardStats:
        return await self.client.fetch_model(
            DashboardStats, "GET", "/api/admin/analytics",
            error_message="Failed to fetch analytics",
        )

    async def get_activity(self, limit: int = ACTIVITY_LIMIT) -> List[ActivityLog]:
        return await self.client.fetch_list(
            ActivityLog, "GET", "/api/admin/activity",
            params={"limit": limit},
            error_message="Failed to fetch activity",
        )

    async def list_users(
        self,
        page: int = 1,
        limit: int = USERS_PAGE_SIZE,
        user_type: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> UserPage:
        return await self.client.fetch_model(
            UserPage, "GET", "/api/admin/users",
            params={
                "page": page,
                "limit": limit,
                "userType": user_type,
                "status": status,
                "search": search,
            },
            error_message="Failed to fetch users",
        )

    async def update_user_status(self, user_id: str, status: str) -> Any:
        return await self.client.fetch_data(
            "PATCH", f"/api/admin/users/{user_id}/status",
            json={"status": status},
            error_message="Failed to update status",
        )

    async def list_departments(self) -> List[Department]:
        return await self.client.fetch_list(
            Department, "GET", "/api/admin/departments",
            error_message="Failed to fetch departments",
        )

    async def create_department(self, department: DepartmentIn) -> Any:
        return await self.client.fetch_data(
            "POST", "/api/admin/departments",
            json=department.to_payload(),
            error_message="Failed to save department",
        )

    async def update_department(self, department_id: str, department: DepartmentIn) -> Any:
        return await self.client.fetch_data(
            "PATCH", f"/api/admin/departments/{department_id}",
            json=department.to_payload(),
            error_message="Failed to save department",
        )

    async def get_payments(self) -> PaymentOverview:
        return await self.client.fetch_model(
            PaymentOverview, "GET", "/api/admin/payments",
            error_message="Failed to fetch payments",
        )

    async def get_course_stats(self) -> CourseStats:
        return await self.client.fetch_model(
            CourseStats, "GET", "/api/admin/courses/stats",
            error_message="Failed to fetch course stats",
        )
