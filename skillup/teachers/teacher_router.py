import logging

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from skillup.auth.auth_utils import verify_token
from skillup.database import get_db
from skillup.teachers import teacher_service as service
from skillup.teachers.teacher_schemas import ApplicationsByStatus, AssignmentCreate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Teacher Management"], dependencies=[Depends(verify_token)])

# ==================== APPLICATION STATUS ====================

@router.get("/teachers", response_model=ApplicationsByStatus)
async def get_my_applications(email: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Get the caller's teacher applications split into pending/approve/rejected
    """
    try:
        return await service.get_applications_by_status(db, email)
    except Exception:
        logger.exception("Application lookup failed for %s", email)
        raise HTTPException(status_code=500, detail="Internal Server Error")

# ==================== ASSIGNMENT MANAGEMENT ====================

@router.post("/classes/add-assignment/{class_id}")
async def add_assignment(
    class_id: str,
    data: AssignmentCreate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        return await service.add_assignment(db, class_id, data.model_dump())
    except HTTPException:
        raise
    except Exception:
        logger.exception("Adding assignment to class %s failed", class_id)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/submitted-assignments/{class_id}")
async def submitted_today(class_id: str, db: AsyncIOMotorDatabase = Depends(get_db)) -> int:
    """
    Number of submissions received today for a class
    """
    try:
        return await service.count_submissions_today(db, class_id)
    except Exception:
        logger.exception("Counting submissions failed for class %s", class_id)
        raise HTTPException(status_code=500, detail="Internal Server Error")
