from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def utc_today() -> str:
    """Current UTC calendar day as YYYY-MM-DD"""
    return datetime.now(timezone.utc).date().isoformat()


# ==================== ENUMS ====================

class Role(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    APPROVE = "approve"
    REJECT = "reject"


# role <-> teacher application status cascades
ROLE_TO_APPLICATION_STATUS = {
    Role.TEACHER: ApplicationStatus.APPROVE,
    Role.STUDENT: ApplicationStatus.PENDING,
}

APPLICATION_STATUS_TO_ROLE = {
    ApplicationStatus.APPROVE: Role.TEACHER,
    ApplicationStatus.PENDING: Role.STUDENT,
    ApplicationStatus.REJECT: Role.STUDENT,
}


# ==================== DATABASE MODELS ====================

class MongoModel(BaseModel):
    """
    Base for stored documents. Python attributes are snake_case,
    stored keys keep the camelCase names the web client reads.
    """
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    def to_mongo(self) -> dict:
        return self.model_dump(by_alias=True)


class User(MongoModel):
    email: str
    username: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
    phone: Optional[str] = None
    role: Role = Role.STUDENT


class TeacherApplication(MongoModel):
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None
    experience: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.PENDING


class Assignment(MongoModel):
    """Embedded in CourseClass.assignments"""
    title: str
    description: Optional[str] = None
    deadline: Optional[str] = None
    marks: Optional[float] = None
    created_at: str = Field(default_factory=utc_now_iso, alias="createdAt")


class CourseClass(MongoModel):
    class_title: str = Field(..., alias="classTitle")
    description: Optional[str] = None
    image: Optional[str] = None
    name: Optional[str] = None  # teacher display name
    email: str  # owning teacher
    price: float = 0
    enroll: int = 0
    status: ApplicationStatus = ApplicationStatus.PENDING
    assignments: List[Assignment] = Field(default_factory=list)


class PaymentStudent(MongoModel):
    email: str
    name: Optional[str] = None


class PaymentClass(MongoModel):
    class_id: str = Field(..., alias="classId")
    class_title: Optional[str] = Field(None, alias="classTitle")


class Payment(MongoModel):
    student: PaymentStudent
    class_info: PaymentClass = Field(..., alias="class")
    price: float
    transaction_id: Optional[str] = Field(None, alias="transactionId")
    date: str = Field(default_factory=utc_now_iso)


class Feedback(MongoModel):
    class_id: str = Field(..., alias="classId")
    class_title: Optional[str] = Field(None, alias="classTitle")
    email: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[float] = None
    feedback: str


class AssignmentSubmission(MongoModel):
    email: str
    class_id: str = Field(..., alias="classId")
    assignment_id: Optional[str] = Field(None, alias="assignmentId")
    submission: str
    date: str = Field(default_factory=utc_now_iso)
