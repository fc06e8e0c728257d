from typing import List, Optional

from pydantic import Field

from karoli_portal.schemas.common import ApiModel, CourseRef, DepartmentRef, ExamRef, PersonRef


class CourseDetail(CourseRef):
    description: Optional[str] = None
    current_enrollment: Optional[int] = None
    max_capacity: Optional[int] = None
    semester: Optional[str] = None
    academic_year: Optional[str] = None
    status: Optional[str] = None
    department: Optional[DepartmentRef] = None


class Enrollment(ApiModel):
    id: str
    enrollment_id: Optional[str] = None
    status: Optional[str] = None
    enrollment_date: Optional[str] = None
    course: CourseDetail
    grade_points: Optional[float] = None
    attendance_percentage: Optional[float] = None


class FacultyCourse(ApiModel):
    """Course as listed on the faculty side"""

    id: str
    code: Optional[str] = None
    name: str
    description: Optional[str] = None
    credits: Optional[int] = None
    students: int = 0
    max_capacity: Optional[int] = Field(default=None, alias="maxCapacity")
    status: Optional[str] = None
    schedule: Optional[str] = None
    room: Optional[str] = None
    semester: Optional[str] = None
    academic_year: Optional[str] = Field(default=None, alias="academicYear")
    syllabus_url: Optional[str] = Field(default=None, alias="syllabusUrl")
    department: Optional[str] = None


class CourseStudent(ApiModel):
    id: str
    name: str
    email: Optional[str] = None
    enrollment_date: Optional[str] = Field(default=None, alias="enrollmentDate")
    status: Optional[str] = None
    grade: Optional[str] = None
    attendance: Optional[float] = None


class Grade(ApiModel):
    id: str
    marks_obtained: Optional[float] = None
    total_marks: Optional[float] = None
    percentage: Optional[float] = None
    letter_grade: Optional[str] = None
    grade_points: Optional[float] = None
    graded_at: Optional[str] = None
    course: CourseRef
    exam: Optional[ExamRef] = None


class Material(ApiModel):
    id: str
    title: str
    description: Optional[str] = None
    material_type: Optional[str] = None
    file_url: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    due_date: Optional[str] = None
    created_at: Optional[str] = None
    course: CourseRef
    uploaded_by_user: Optional[PersonRef] = None


class TimetableEntry(ApiModel):
    id: str
    day_of_week: int
    start_time: str
    end_time: str
    room_number: Optional[str] = None
    building: Optional[str] = None
    session_type: Optional[str] = None
    course: CourseRef


class Assignment(ApiModel):
    id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    status: Optional[str] = None
    course: Optional[CourseRef] = None
    submissions: Optional[int] = None


class UpcomingExam(ApiModel):
    id: str
    title: str
    course: CourseRef
    scheduled_date: Optional[str] = None
    exam_location: Optional[str] = None


class StudentDashboard(ApiModel):
    enrolled_courses: int = Field(default=0, alias="enrolledCourses")
    upcoming_exams: List[UpcomingExam] = Field(default_factory=list, alias="upcomingExams")
    recent_grades: List[Grade] = Field(default_factory=list, alias="recentGrades")
    gpa: Optional[str] = None
    pending_assignments: int = Field(default=0, alias="pendingAssignments")


class FacultyStats(ApiModel):
    active_courses: int = Field(default=0, alias="activeCourses")
    total_students: int = Field(default=0, alias="totalStudents")
    pending_assignments: int = Field(default=0, alias="pendingAssignments")
    upcoming_classes: int = Field(default=0, alias="upcomingClasses")


class UpcomingClass(ApiModel):
    id: str
    course: str
    time: Optional[str] = None
    room: Optional[str] = None
    students: Optional[int] = None


class RecentSubmission(ApiModel):
    id: str
    student: str
    assignment: str
    course: Optional[str] = None
    submitted_at: Optional[str] = Field(default=None, alias="submittedAt")
    status: Optional[str] = None


class FacultyDashboard(ApiModel):
    stats: FacultyStats = Field(default_factory=FacultyStats)
    upcoming_classes: List[UpcomingClass] = Field(default_factory=list, alias="upcomingClasses")
    recent_submissions: List[RecentSubmission] = Field(default_factory=list, alias="recentSubmissions")


class AcademicPerformance(ApiModel):
    gpa: Optional[str] = None
    total_credits: Optional[int] = Field(default=None, alias="totalCredits")
    completed_courses: Optional[int] = Field(default=None, alias="completedCourses")
    average_percentage: Optional[float] = Field(default=None, alias="averagePercentage")
