from typing import List, Optional

from pydantic import Field

from karoli_portal.schemas.common import ApiModel, PersonRef


class UserCounts(ApiModel):
    total: int = 0
    students: int = 0
    faculty: int = 0
    staff: int = 0
    admins: int = 0
    active: int = 0
    inactive: int = 0
    suspended: int = 0


class Revenue(ApiModel):
    total: float = 0
    pending: float = 0
    last_30_days: float = Field(default=0, alias="last30Days")


class DashboardStats(ApiModel):
    users: UserCounts = Field(default_factory=UserCounts)
    courses: int = 0
    departments: int = 0
    enrollments: int = 0
    revenue: Revenue = Field(default_factory=Revenue)


class ActivityLog(ApiModel):
    type: str
    timestamp: Optional[str] = None
    description: str = ""
    status: Optional[str] = None


class PortalUser(ApiModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    user_type: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    phone: Optional[str] = None


class Pagination(ApiModel):
    page: int = 1
    limit: int = 20
    total: int = 0
    total_pages: int = Field(default=0, alias="totalPages")


class UserPage(ApiModel):
    users: List[PortalUser] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class Department(ApiModel):
    id: str
    name: str
    code: str
    description: Optional[str] = None
    head: Optional[PersonRef] = None
    building: Optional[str] = None
    office_location: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    course_count: Optional[int] = Field(default=None, alias="courseCount")


class CourseStatsSummary(ApiModel):
    total: int = 0
    active: int = 0
    completed: int = 0
    total_enrollments: int = Field(default=0, alias="totalEnrollments")
    average_capacity: Optional[str] = Field(default=None, alias="averageCapacity")


class CourseUtilisation(ApiModel):
    id: str
    name: str
    course_code: str
    current_enrollment: int = 0
    max_capacity: Optional[int] = None
    status: Optional[str] = None


class CourseStats(ApiModel):
    stats: CourseStatsSummary = Field(default_factory=CourseStatsSummary)
    courses: List[CourseUtilisation] = Field(default_factory=list)
