import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from skillup.database import get_db
from skillup.public import public_service as service
from skillup.public.public_schemas import ClassCreate, TeacherApplicationCreate, UserCreate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Public"])

# ==================== USERS ====================

@router.post("/users")
async def create_user(data: UserCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Store a newly signed-up user
    """
    try:
        return await service.register_user(db, data.model_dump())
    except Exception:
        logger.exception("Failed to store user %s", data.email)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/users/{email}")
async def get_user_role(email: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    return await service.get_user_by_email(db, email)

# ==================== TEACHER APPLICATIONS ====================

@router.post("/teachers")
async def apply_for_teaching(data: TeacherApplicationCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await service.create_teacher_application(db, data.model_dump())
    except Exception:
        logger.exception("Failed to store teacher application for %s", data.email)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.patch("/teachers/update-status/{email}")
async def request_review_again(email: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Send an existing application back to pending
    """
    try:
        return await service.reapply_teacher(db, email)
    except Exception:
        logger.exception("Failed to reset application status for %s", email)
        raise HTTPException(status_code=500, detail="Internal Server Error")

# ==================== CLASSES ====================

@router.get("/classes")
async def get_all_classes(
    search: Optional[str] = None,
    db: AsyncIOMotorDatabase = Depends(get_db)
) -> List[dict]:
    return await service.list_classes(db, search)


@router.get("/classes/single/{class_id}")
async def get_single_class(class_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    return await service.get_class(db, class_id)


@router.get("/classes/{email}")
async def get_classes_of_teacher(email: str, db: AsyncIOMotorDatabase = Depends(get_db)) -> List[dict]:
    return await service.get_teacher_classes(db, email)


@router.post("/classes")
async def add_class(data: ClassCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await service.create_class(db, data.model_dump(by_alias=True))
    except Exception:
        logger.exception("Failed to add class for %s", data.email)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/feedbacks")
async def get_all_feedbacks(db: AsyncIOMotorDatabase = Depends(get_db)) -> List[dict]:
    return await service.list_feedbacks(db)

# ==================== HOME PAGE AGGREGATES ====================

@router.get("/top-teachers")
async def top_teachers(
    limit: Optional[int] = Query(None, ge=1),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Teachers ordered by total enrollment across their classes
    """
    try:
        return await service.get_top_teachers(db, limit)
    except Exception:
        logger.exception("Top teachers aggregation failed")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/featured-courses")
async def featured_courses(db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Four most enrolled approved classes
    """
    try:
        return await service.get_featured_courses(db)
    except Exception:
        logger.exception("Featured courses aggregation failed")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/stats")
async def site_stats(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await service.get_site_stats(db)
    except Exception:
        logger.exception("Stats aggregation failed")
        raise HTTPException(status_code=500, detail="Internal Server Error")
