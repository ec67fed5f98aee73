"""
Admin operations: user directory, teacher application review and class moderation.

Role and application status live in two collections. Updates that touch both
write one side, then the other, and undo the first write if the second fails.
"""

import logging
import re
from typing import List, Optional

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from skillup.common.models import (
    APPLICATION_STATUS_TO_ROLE, ROLE_TO_APPLICATION_STATUS, ApplicationStatus, Role
)
from skillup.database import (
    CLASSES, FEEDBACKS, TEACHERS, USERS,
    parse_object_id, serialize_many, serialize_mongo, update_result
)

logger = logging.getLogger(__name__)

# ==================== USERS ====================

async def list_users(db: AsyncIOMotorDatabase, search_term: Optional[str] = None) -> List[dict]:
    query = {}
    if search_term:
        pattern = re.escape(search_term)
        query = {
            "$or": [
                {"username": {"$regex": pattern, "$options": "i"}},
                {"email": {"$regex": pattern, "$options": "i"}}
            ]
        }

    users = await db[USERS].find(query).to_list(length=None)
    return serialize_many(users)


async def get_profile(db: AsyncIOMotorDatabase, email: Optional[str]) -> dict:
    if not email:
        raise HTTPException(status_code=400, detail="Email parameter is missing")

    user = await db[USERS].find_one({"email": email})

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return serialize_mongo(user)


async def _restore_application(db: AsyncIOMotorDatabase, previous: Optional[dict], upserted_id):
    """Compensate an application status write after the user write failed"""
    try:
        if previous is not None:
            await db[TEACHERS].update_one(
                {"_id": previous["_id"]},
                {"$set": {"status": previous.get("status")}}
            )
        elif upserted_id is not None:
            await db[TEACHERS].delete_one({"_id": upserted_id})
    except Exception:
        logger.exception("Compensation failed: teacher application left inconsistent")


async def update_user(db: AsyncIOMotorDatabase, email: str, data: dict) -> dict:
    """
    Upsert the user and mirror the submitted role into the linked application:
    teacher -> approve, student -> pending, admin -> untouched.
    """
    role = data.get("role")
    application_status = ROLE_TO_APPLICATION_STATUS.get(Role(role)) if role else None

    previous = None
    upserted_id = None
    if application_status is not None:
        previous = await db[TEACHERS].find_one({"email": email}, {"status": 1})
        app_result = await db[TEACHERS].update_one(
            {"email": email},
            {"$set": {"status": application_status.value}},
            upsert=True
        )
        upserted_id = app_result.upserted_id

    try:
        result = await db[USERS].update_one(
            {"email": email},
            {"$set": {**data, "email": email}},
            upsert=True
        )
    except Exception:
        logger.error("User update failed for %s, restoring application status", email)
        if application_status is not None:
            await _restore_application(db, previous, upserted_id)
        raise

    logger.info("User %s updated (role=%s)", email, role)
    return update_result(result)

# ==================== TEACHER APPLICATIONS ====================

async def list_applications(db: AsyncIOMotorDatabase) -> List[dict]:
    applications = await db[TEACHERS].find().to_list(length=None)
    return serialize_many(applications)


async def review_application(
    db: AsyncIOMotorDatabase,
    application_id: str,
    status: ApplicationStatus
) -> dict:
    """
    Set the application status and cascade the user role:
    approve -> teacher, pending/reject -> student. Repeating a status is a no-op.
    """
    oid = parse_object_id(application_id, "teacher")
    application = await db[TEACHERS].find_one({"_id": oid})

    if not application:
        raise HTTPException(status_code=404, detail="Teacher application not found")

    previous_status = application.get("status")
    await db[TEACHERS].update_one({"_id": oid}, {"$set": {"status": status.value}})

    role = APPLICATION_STATUS_TO_ROLE[status]
    try:
        await db[USERS].update_one(
            {"email": application.get("email")},
            {"$set": {"role": role.value}}
        )
    except Exception:
        logger.error("Role cascade failed for %s, restoring status %s", application.get("email"), previous_status)
        await _restore_application(db, application, None)
        raise

    logger.info("Application %s set to %s", application_id, status.value)
    return {"message": "Status updated successfully"}

# ==================== CLASSES ====================

async def update_class_status(db: AsyncIOMotorDatabase, class_id: str, status: ApplicationStatus) -> dict:
    result = await db[CLASSES].update_one(
        {"_id": parse_object_id(class_id)},
        {"$set": {"status": status.value}}
    )

    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Class not found")

    return update_result(result)


async def patch_class(db: AsyncIOMotorDatabase, class_id: str, updates: dict) -> dict:
    oid = parse_object_id(class_id)

    if not updates:
        raise HTTPException(status_code=400, detail="No class fields to update")

    result = await db[CLASSES].update_one({"_id": oid}, {"$set": updates})

    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Class not found")

    return {"status": "success", "message": "Class updated successfully"}


async def delete_class(db: AsyncIOMotorDatabase, class_id: str) -> dict:
    result = await db[CLASSES].delete_one({"_id": parse_object_id(class_id)})

    if result.deleted_count != 1:
        raise HTTPException(status_code=404, detail="Class not found")

    logger.info("Class %s deleted", class_id)
    return {"status": "success", "message": "Class deleted successfully"}

# ==================== FEEDBACK ====================

async def get_class_feedbacks(db: AsyncIOMotorDatabase, class_id: str) -> List[dict]:
    feedbacks = await db[FEEDBACKS].find({"classId": class_id}).to_list(length=None)
    return serialize_many(feedbacks)
