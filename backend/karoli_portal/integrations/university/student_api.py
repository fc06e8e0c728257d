"""
Student endpoints of the university backend.
"""
from typing import Any, List, Optional

from karoli_portal.integrations.university.rest_client import UniversityRestClient
from karoli_portal.schemas.academics import (
    AcademicPerformance,
    Enrollment,
    Grade,
    Material,
    StudentDashboard,
    TimetableEntry,
)
from karoli_portal.schemas.finance import Payment


class StudentApi:
    def __init__(self, client: UniversityRestClient) -> None:
        self.client = client

    async def get_dashboard(self) -> StudentDashboard:
        return await self.client.fetch_model(
            StudentDashboard, "GET", "/api/students/dashboard",
            error_message="Failed to fetch dashboard data",
        )

    async def get_enrolled_courses(self, status: Optional[str] = None) -> List[Enrollment]:
        # "all" is the UI's no-filter value
        return await self.client.fetch_list(
            Enrollment, "GET", "/api/students/courses",
            params={"status": status if status != "all" else None},
            error_message="Failed to fetch enrolled courses",
        )

    async def enroll_in_course(self, course_id: str) -> Any:
        return await self.client.fetch_data(
            "POST", "/api/students/courses/enroll",
            json={"courseId": course_id},
            error_message="Failed to enroll in course",
        )

    async def drop_course(self, enrollment_id: str) -> Any:
        return await self.client.fetch_data(
            "PUT", f"/api/students/courses/{enrollment_id}/drop",
            error_message="Failed to drop course",
        )

    async def get_grades(self, course_id: Optional[str] = None) -> List[Grade]:
        return await self.client.fetch_list(
            Grade, "GET", "/api/students/grades",
            params={"courseId": course_id},
            error_message="Failed to fetch grades",
        )

    async def get_course_materials(self, course_id: Optional[str] = None) -> List[Material]:
        return await self.client.fetch_list(
            Material, "GET", "/api/students/materials",
            params={"courseId": course_id},
            error_message="Failed to fetch course materials",
        )

    async def get_timetable(self) -> List[TimetableEntry]:
        return await self.client.fetch_list(
            TimetableEntry, "GET", "/api/students/timetable",
            error_message="Failed to fetch timetable",
        )

    async def get_payment_history(self, status: Optional[str] = None) -> List[Payment]:
        return await self.client.fetch_list(
            Payment, "GET", "/api/students/payments",
            params={"status": status},
            error_message="Failed to fetch payment history",
        )

    async def get_academic_performance(self) -> AcademicPerformance:
        return await self.client.fetch_model(
            AcademicPerformance, "GET", "/api/students/performance",
            error_message="Failed to fetch academic performance",
        )
