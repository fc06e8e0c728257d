"""
Write payloads sent to the backend from the dashboard forms.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel

from karoli_portal.schemas.common import PayloadModel


class CourseCreate(PayloadModel):
    course_code: str
    name: str
    department_id: str
    credits: int
    description: Optional[str] = None
    max_capacity: Optional[int] = None
    semester: Optional[str] = None
    academic_year: Optional[str] = None
    course_level: Optional[str] = None
    prerequisites: Optional[str] = None
    syllabus_url: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class AssignmentCreate(PayloadModel):
    course_id: str
    title: str
    due_date: str
    description: Optional[str] = None
    file_url: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None


class MaterialCreate(PayloadModel):
    course_id: str
    title: str
    material_type: str
    description: Optional[str] = None
    file_url: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    due_date: Optional[str] = None


class MaterialUpdate(PayloadModel):
    title: Optional[str] = None
    description: Optional[str] = None
    file_url: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    due_date: Optional[str] = None


class ExamCreate(PayloadModel):
    course_id: str
    title: str
    exam_type: str
    total_marks: float
    passing_marks: float
    description: Optional[str] = None
    duration_minutes: Optional[int] = None
    scheduled_date: Optional[str] = None
    exam_location: Optional[str] = None
    instructions: Optional[str] = None


class ExamUpdate(PayloadModel):
    title: Optional[str] = None
    description: Optional[str] = None
    exam_type: Optional[str] = None
    total_marks: Optional[float] = None
    passing_marks: Optional[float] = None
    duration_minutes: Optional[int] = None
    scheduled_date: Optional[str] = None
    exam_location: Optional[str] = None
    instructions: Optional[str] = None
    is_published: Optional[bool] = None


class GradeUpsert(PayloadModel):
    enrollment_id: str
    exam_id: str
    student_id: str
    course_id: str
    marks_obtained: float
    total_marks: float
    letter_grade: Optional[str] = None
    grade_points: Optional[float] = None
    remarks: Optional[str] = None


class DepartmentIn(BaseModel):
    """Department form; the admin endpoints take snake_case keys"""

    name: str
    code: str
    description: str = ""
    building: str = ""
    office_location: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""

    def to_payload(self) -> dict:
        return self.model_dump()
