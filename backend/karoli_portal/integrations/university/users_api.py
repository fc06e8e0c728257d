"""
Role-agnostic user endpoints: onboarding sync and role changes.
"""
from typing import Any

from karoli_portal.integrations.university.rest_client import UniversityRestClient


class UsersApi:
    def __init__(self, client: UniversityRestClient) -> None:
        self.client = client

    async def update_role(self, user_id: str, role: str) -> Any:
        return await self.client.fetch_data(
            "PATCH", f"/api/users/{user_id}/role",
            json={"role": role},
            error_message="Failed to update role",
        )

    async def sync_user(self, role: str) -> Any:
        return await self.client.fetch_data(
            "POST", "/api/users/sync",
            json={"role": role},
            error_message="Failed to sync user data",
        )
