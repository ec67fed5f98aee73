from typing import List, Optional

from pydantic import BaseModel, Field

# ==================== REQUEST SCHEMAS ====================


class AssignmentCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    deadline: Optional[str] = None
    marks: Optional[float] = Field(None, ge=0)

# ==================== RESPONSE SCHEMAS ====================


class ApplicationsByStatus(BaseModel):
    """
    Applications of one email split by review state,
    so the dashboard does not filter client-side
    """
    pending: List[dict]
    approve: List[dict]
    rejected: List[dict]
