"""
Shared building blocks for view DTOs.

The backend owns validation, so these models accept whatever it sends:
unknown keys are kept and almost every field is optional.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)


class PayloadModel(BaseModel):
    """Body sent to the backend, serialised with camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class PersonRef(ApiModel):
    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class DepartmentRef(ApiModel):
    id: Optional[str] = None
    name: Optional[str] = None
    code: Optional[str] = None


class CourseRef(ApiModel):
    id: Optional[str] = None
    name: Optional[str] = None
    course_code: Optional[str] = None
    credits: Optional[int] = None
    instructor: Optional[PersonRef] = None


class ExamRef(ApiModel):
    id: Optional[str] = None
    title: Optional[str] = None
    exam_type: Optional[str] = None
    total_marks: Optional[float] = None
