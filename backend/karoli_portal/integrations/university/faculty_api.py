"""
Faculty endpoints of the university backend.
"""
from typing import Any, List, Optional

from karoli_portal.integrations.university.rest_client import UniversityRestClient
from karoli_portal.schemas.academics import Assignment, CourseStudent, FacultyCourse, FacultyDashboard, Material
from karoli_portal.schemas.common import DepartmentRef
from karoli_portal.schemas.forms import (
    AssignmentCreate,
    CourseCreate,
    ExamCreate,
    ExamUpdate,
    GradeUpsert,
    MaterialCreate,
    MaterialUpdate,
)


class FacultyApi:
    def __init__(self, client: UniversityRestClient) -> None:
        self.client = client

    async def get_dashboard(self) -> FacultyDashboard:
        return await self.client.fetch_model(
            FacultyDashboard, "GET", "/api/faculty/dashboard",
            error_message="Failed to fetch dashboard data",
        )

    # Courses

    async def get_courses(self, search: Optional[str] = None) -> List[FacultyCourse]:
        return await self.client.fetch_list(
            FacultyCourse, "GET", "/api/faculty/courses",
            params={"search": search},
            error_message="Failed to fetch courses",
        )

    async def get_course(self, course_id: str) -> Optional[FacultyCourse]:
        """There is no single-course endpoint; look the course up in the list"""
        for course in await self.get_courses():
            if course.id == course_id:
                return course
        return None

    async def create_course(self, course: CourseCreate) -> Any:
        return await self.client.fetch_data(
            "POST", "/api/faculty/courses",
            json=course.to_payload(),
            error_message="Failed to create course",
        )

    async def get_departments(self) -> List[DepartmentRef]:
        return await self.client.fetch_list(
            DepartmentRef, "GET", "/api/faculty/departments",
            error_message="Failed to fetch departments",
        )

    async def get_course_students(self, course_id: str) -> List[CourseStudent]:
        return await self.client.fetch_list(
            CourseStudent, "GET", f"/api/faculty/courses/{course_id}/students",
            error_message="Failed to fetch course students",
        )

    # Assignments

    async def get_assignments(
        self, status: Optional[str] = None, search: Optional[str] = None
    ) -> List[Assignment]:
        return await self.client.fetch_list(
            Assignment, "GET", "/api/faculty/assignments",
            params={"status": status if status != "all" else None, "search": search},
            error_message="Failed to fetch assignments",
        )

    async def create_assignment(self, assignment: AssignmentCreate) -> Any:
        return await self.client.fetch_data(
            "POST", "/api/faculty/assignments",
            json=assignment.to_payload(),
            error_message="Failed to create assignment",
        )

    # Materials

    async def get_materials(self, search: Optional[str] = None) -> List[Material]:
        return await self.client.fetch_list(
            Material, "GET", "/api/faculty/materials",
            params={"search": search},
            error_message="Failed to fetch materials",
        )

    async def create_material(self, material: MaterialCreate) -> Any:
        return await self.client.fetch_data(
            "POST", "/api/faculty/materials",
            json=material.to_payload(),
            error_message="Failed to create course material",
        )

    async def update_material(self, material_id: str, changes: MaterialUpdate) -> Any:
        return await self.client.fetch_data(
            "PUT", f"/api/faculty/materials/{material_id}",
            json=changes.to_payload(),
            error_message="Failed to update course material",
        )

    async def delete_material(self, material_id: str) -> Any:
        return await self.client.fetch_data(
            "DELETE", f"/api/faculty/materials/{material_id}",
            error_message="Failed to delete course material",
        )

    # Exams and grades

    async def create_exam(self, exam: ExamCreate) -> Any:
        return await self.client.fetch_data(
            "POST", "/api/faculty/exams",
            json=exam.to_payload(),
            error_message="Failed to create exam",
        )

    async def update_exam(self, exam_id: str, changes: ExamUpdate) -> Any:
        return await self.client.fetch_data(
            "PUT", f"/api/faculty/exams/{exam_id}",
            json=changes.to_payload(),
            error_message="Failed to update exam",
        )

    async def delete_exam(self, exam_id: str) -> Any:
        return await self.client.fetch_data(
            "DELETE", f"/api/faculty/exams/{exam_id}",
            error_message="Failed to delete exam",
        )

    async def upsert_grade(self, grade: GradeUpsert) -> Any:
        return await self.client.fetch_data(
            "POST", "/api/faculty/grades",
            json=grade.to_payload(),
            error_message="Failed to save grade",
        )

    async def publish_grades(self, exam_id: str) -> Any:
        return await self.client.fetch_data(
            "POST", "/api/faculty/grades/publish",
            json={"examId": exam_id},
            error_message="Failed to publish grades",
        )
