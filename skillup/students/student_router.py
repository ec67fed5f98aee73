import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from skillup.auth.auth_utils import verify_token
from skillup.database import get_db
from skillup.students import student_service as service
from skillup.students.student_schemas import FeedbackCreate, FeedbackResult, SubmissionCreate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Student Portal"], dependencies=[Depends(verify_token)])

# ==================== ENROLLED CLASSES ====================

@router.get("/enrolled-classes/{email}")
async def get_enrolled_classes(email: str, db: AsyncIOMotorDatabase = Depends(get_db)) -> List[dict]:
    """
    Get every class the student has a payment record for
    """
    try:
        return await service.get_enrolled_classes(db, email)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Enrolled classes lookup failed for %s", email)
        raise HTTPException(status_code=500, detail="Internal Server Error")

# ==================== ASSIGNMENTS ====================

@router.post("/submit-assignment")
async def submit_assignment(data: SubmissionCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await service.submit_assignment(db, data.model_dump(by_alias=True))
    except Exception:
        logger.exception("Assignment submission failed for %s", data.email)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/check-assignment")
async def check_assignment(
    email: str,
    class_id: str = Query(..., alias="classId"),
    db: AsyncIOMotorDatabase = Depends(get_db)
) -> List[dict]:
    """
    Submissions of one student in one class, used to show submission state
    """
    try:
        return await service.get_submissions(db, email, class_id)
    except Exception:
        logger.exception("Submission check failed for %s", email)
        raise HTTPException(status_code=500, detail="Internal Server Error")

# ==================== FEEDBACK ====================

@router.post("/feedbacks", response_model=FeedbackResult)
@router.post("/submit-feedback", response_model=FeedbackResult)
async def submit_feedback(data: FeedbackCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await service.submit_feedback(db, data.model_dump(by_alias=True))
    except Exception:
        logger.exception("Feedback submission failed for class %s", data.class_id)
        raise HTTPException(status_code=500, detail="Internal Server Error")
