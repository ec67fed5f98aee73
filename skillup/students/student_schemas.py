from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

# ==================== REQUEST SCHEMAS ====================


class SubmissionCreate(BaseModel):
    """
    A student's answer to one assignment. `date` defaults to the
    server time when the client does not send one.
    """
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    class_id: str = Field(..., alias="classId", min_length=1)
    assignment_id: Optional[str] = Field(None, alias="assignmentId")
    submission: str = Field(..., min_length=1)
    date: Optional[str] = None


class FeedbackCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_id: str = Field(..., alias="classId", min_length=1)
    class_title: Optional[str] = Field(None, alias="classTitle")
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    feedback: str = Field(..., min_length=1)

# ==================== RESPONSE SCHEMAS ====================


class FeedbackResult(BaseModel):
    success: bool
    message: str
