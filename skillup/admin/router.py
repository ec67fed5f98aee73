"""
Admin API Router
User directory, teacher application review, class moderation
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from skillup.admin import admin_service as service
from skillup.admin.admin_schemas import (
    ApplicationStatusUpdate, ClassStatusUpdate, ClassUpdateRequest, UserUpdate
)
from skillup.auth.auth_utils import verify_token
from skillup.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin"], dependencies=[Depends(verify_token)])


# ============================================================================
# USER MANAGEMENT
# ============================================================================

@router.get("/users")
async def get_users(
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    db: AsyncIOMotorDatabase = Depends(get_db)
) -> List[dict]:
    """
    All users, or those whose username/email contains the search term
    """
    try:
        return await service.list_users(db, search_term)
    except Exception:
        logger.exception("User search failed")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/profile")
async def get_profile(email: Optional[str] = None, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await service.get_profile(db, email)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Profile lookup failed for %s", email)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.put("/users/update/{email}")
async def update_user(email: str, data: UserUpdate, db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Upsert a user; a submitted role also moves the linked teacher application
    """
    try:
        return await service.update_user(db, email, data.model_dump(mode="json", exclude_none=True))
    except Exception:
        logger.exception("User update failed for %s", email)
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ============================================================================
# TEACHER APPLICATIONS
# ============================================================================

@router.get("/teachers/requests")
async def get_teacher_requests(db: AsyncIOMotorDatabase = Depends(get_db)) -> List[dict]:
    try:
        return await service.list_applications(db)
    except Exception:
        logger.exception("Listing teacher applications failed")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.put("/teachers/update-status/{application_id}")
async def review_teacher_application(
    application_id: str,
    data: ApplicationStatusUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Approve, reject or reset an application and move the user's role with it
    """
    try:
        return await service.review_application(db, application_id, data.status)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Reviewing application %s failed", application_id)
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ============================================================================
# CLASS MODERATION
# ============================================================================

@router.patch("/classes/update-status/{class_id}")
async def update_class_status(
    class_id: str,
    data: ClassStatusUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        return await service.update_class_status(db, class_id, data.status)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Class status update failed for %s", class_id)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.patch("/classes/update/{class_id}")
async def update_class(
    class_id: str,
    data: ClassUpdateRequest,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        updates = data.update_data.model_dump(by_alias=True, exclude_none=True)
        return await service.patch_class(db, class_id, updates)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Class update failed for %s", class_id)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.delete("/classes/{class_id}")
async def delete_class(class_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await service.delete_class(db, class_id)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Deleting class %s failed", class_id)
        raise HTTPException(status_code=500, detail="Internal Server Error")


# ============================================================================
# FEEDBACK
# ============================================================================

@router.get("/feedbacks/{class_id}")
async def get_class_feedbacks(class_id: str, db: AsyncIOMotorDatabase = Depends(get_db)) -> List[dict]:
    try:
        return await service.get_class_feedbacks(db, class_id)
    except Exception:
        logger.exception("Feedback lookup failed for class %s", class_id)
        raise HTTPException(status_code=500, detail="Internal Server Error")
