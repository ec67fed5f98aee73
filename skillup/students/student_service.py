import logging
from typing import List

from bson import ObjectId
from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from skillup.common.models import AssignmentSubmission, Feedback
from skillup.database import (
    ASSIGNMENT_SUBMISSIONS, CLASSES, FEEDBACKS, PAYMENTS,
    insert_result, serialize_many
)

logger = logging.getLogger(__name__)

# ==================== ENROLLMENTS ====================

async def get_enrolled_classes(db: AsyncIOMotorDatabase, email: str) -> List[dict]:
    """
    Classes a student has paid for.
    Payment records are the only source of enrollment.
    """
    payments = await db[PAYMENTS].find({"student.email": email}).to_list(length=None)

    if not payments:
        raise HTTPException(status_code=404, detail="Student not found in payment records")

    class_ids = []
    for payment in payments:
        class_id = (payment.get("class") or {}).get("classId")
        if not ObjectId.is_valid(class_id or ""):
            logger.warning("Skipping payment %s with malformed class id", payment.get("_id"))
            continue
        oid = ObjectId(class_id)
        if oid not in class_ids:
            class_ids.append(oid)

    classes = await db[CLASSES].find({"_id": {"$in": class_ids}}).to_list(length=None)
    return serialize_many(classes)

# ==================== SUBMISSIONS ====================

async def submit_assignment(db: AsyncIOMotorDatabase, data: dict) -> dict:
    """Every call inserts; resubmissions are kept side by side"""
    if not data.get("date"):
        data.pop("date", None)
    submission = AssignmentSubmission(**data)
    result = await db[ASSIGNMENT_SUBMISSIONS].insert_one(submission.to_mongo())
    return insert_result(result)


async def get_submissions(db: AsyncIOMotorDatabase, email: str, class_id: str) -> List[dict]:
    submissions = await db[ASSIGNMENT_SUBMISSIONS].find({
        "email": email,
        "classId": class_id
    }).to_list(length=None)
    return serialize_many(submissions)

# ==================== FEEDBACK ====================

async def submit_feedback(db: AsyncIOMotorDatabase, data: dict) -> dict:
    feedback = Feedback(**data)
    result = await db[FEEDBACKS].insert_one(feedback.to_mongo())

    if result.acknowledged:
        return {"success": True, "message": "Feedback submitted successfully!"}

    logger.warning("Unacknowledged feedback insert for class %s", feedback.class_id)
    return {"success": False, "message": "Failed to submit feedback."}
