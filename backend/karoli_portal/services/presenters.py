"""
View computations shared by the dashboard pages.

Everything here is pure: it takes DTOs already fetched from the backend and
shapes them for the templates.
"""
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence

from karoli_portal.schemas.academics import Grade, Material, TimetableEntry
from karoli_portal.schemas.common import PersonRef
from karoli_portal.schemas.finance import Payment

DAYS_OF_WEEK = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

ROLE_HOME = {
    "student": "/student/dashboard",
    "faculty": "/faculty/dashboard",
    "admin": "/admin/dashboard",
}

ALL = "all"


def format_time(value: Optional[str]) -> str:
    """'14:05:00' -> '2:05 PM'"""
    if not value:
        return ""
    hours, _, rest = value.partition(":")
    minutes = rest[:2] or "00"
    try:
        hour = int(hours)
    except ValueError:
        return value
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minutes} {suffix}"


def group_timetable_by_day(entries: Iterable[TimetableEntry]) -> "OrderedDict[int, List[TimetableEntry]]":
    grouped: Dict[int, List[TimetableEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.day_of_week, []).append(entry)
    return OrderedDict(
        (day, sorted(grouped[day], key=lambda e: e.start_time)) for day in sorted(grouped)
    )


def day_name(day: int) -> str:
    return DAYS_OF_WEEK[day % 7]


def grade_summary(grades: Sequence[Grade]) -> dict:
    if not grades:
        return {"gpa": "0.00", "average_percentage": "0.0", "courses": []}
    # Ungraded rows count as zero
    gpa = sum(g.grade_points or 0 for g in grades) / len(grades)
    average = sum(g.percentage or 0 for g in grades) / len(grades)
    courses = sorted({g.course.course_code for g in grades if g.course.course_code})
    return {"gpa": f"{gpa:.2f}", "average_percentage": f"{average:.1f}", "courses": courses}


def filter_grades(grades: Sequence[Grade], course_code: Optional[str]) -> List[Grade]:
    if not course_code or course_code == ALL:
        return list(grades)
    return [g for g in grades if g.course.course_code == course_code]


def payment_totals(payments: Sequence[Payment]) -> dict:
    return {
        "paid": sum(p.amount or 0 for p in payments if p.status == "completed"),
        "pending": sum(p.amount or 0 for p in payments if p.status == "pending"),
    }


def filter_payments(payments: Sequence[Payment], status: Optional[str]) -> List[Payment]:
    if not status or status == ALL:
        return list(payments)
    return [p for p in payments if p.status == status]


def _matches(material: Material, needle: str) -> bool:
    if needle in material.title.lower():
        return True
    return bool(material.description) and needle in material.description.lower()


def group_materials_by_course(materials: Iterable[Material], search: str = "") -> "OrderedDict[str, dict]":
    """
    Group materials under their course code.

    A course is kept when at least one of its materials matches the search
    text; the kept course lists only its matching materials.
    """
    needle = (search or "").strip().lower()
    grouped: "OrderedDict[str, dict]" = OrderedDict()
    for material in materials:
        code = material.course.course_code or "OTHER"
        group = grouped.setdefault(code, {"course": material.course, "materials": []})
        if _matches(material, needle):
            group["materials"].append(material)
    return OrderedDict((code, group) for code, group in grouped.items() if group["materials"])


def full_name(person: Optional[PersonRef]) -> str:
    if person is None:
        return ""
    return person.full_name


def role_home(role: Optional[str]) -> str:
    return ROLE_HOME.get(role or "student", "/dashboard")


def capacity_percent(current: Optional[int], maximum: Optional[int]) -> int:
    if not maximum:
        return 0
    return round((current or 0) * 100 / maximum)
