from typing import List, Optional

from pydantic import Field

from karoli_portal.schemas.common import ApiModel, PersonRef


class Payment(ApiModel):
    id: str
    amount: Optional[float] = None
    currency: str = "USD"
    payment_type: Optional[str] = None
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    reference_number: Optional[str] = None
    description: Optional[str] = None
    academic_year: Optional[str] = None
    semester: Optional[str] = None
    status: Optional[str] = None
    payment_date: Optional[str] = None
    due_date: Optional[str] = None
    created_at: Optional[str] = None
    student: Optional[PersonRef] = None


class PaymentStats(ApiModel):
    total: int = 0
    completed: int = 0
    pending: int = 0
    failed: int = 0
    total_amount: float = Field(default=0, alias="totalAmount")
    pending_amount: float = Field(default=0, alias="pendingAmount")


class PaymentOverview(ApiModel):
    stats: PaymentStats = Field(default_factory=PaymentStats)
    recent_payments: List[Payment] = Field(default_factory=list, alias="recentPayments")


PAYMENT_TYPE_LABELS = {
    "tuition": "Tuition Fee",
    "registration_fee": "Registration Fee",
    "lab_fee": "Lab Fee",
    "library_fee": "Library Fee",
    "accommodation": "Accommodation",
    "exam_fee": "Exam Fee",
    "other": "Other",
}
