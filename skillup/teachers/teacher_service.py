import logging
import re

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from skillup.common.models import ApplicationStatus, Assignment, utc_today
from skillup.database import ASSIGNMENT_SUBMISSIONS, CLASSES, TEACHERS, parse_object_id, serialize_many

logger = logging.getLogger(__name__)

# ==================== APPLICATIONS ====================

async def get_applications_by_status(db: AsyncIOMotorDatabase, email: str) -> dict:
    """Three lists instead of one, keyed the way the dashboard renders them"""
    async def with_status(status: ApplicationStatus):
        docs = await db[TEACHERS].find({"email": email, "status": status.value}).to_list(length=None)
        return serialize_many(docs)

    return {
        "pending": await with_status(ApplicationStatus.PENDING),
        "approve": await with_status(ApplicationStatus.APPROVE),
        "rejected": await with_status(ApplicationStatus.REJECT),
    }

# ==================== ASSIGNMENTS ====================

async def add_assignment(db: AsyncIOMotorDatabase, class_id: str, data: dict) -> dict:
    oid = parse_object_id(class_id)
    assignment = Assignment(**data)

    result = await db[CLASSES].update_one(
        {"_id": oid},
        {"$push": {"assignments": assignment.to_mongo()}}
    )

    if result.modified_count == 0:
        raise HTTPException(status_code=404, detail="Class not found")

    logger.info("Assignment '%s' added to class %s", assignment.title, class_id)
    return {"status": "success", "message": "Assignment added successfully"}


async def count_submissions_today(db: AsyncIOMotorDatabase, class_id: str) -> int:
    """
    Submissions whose `date` string contains today's UTC day.
    Matches on the text, so dates stored in another format are missed.
    """
    return await db[ASSIGNMENT_SUBMISSIONS].count_documents({
        "classId": class_id,
        "date": {"$regex": re.escape(utc_today())}
    })
