import asyncio
import logging
import re
from typing import List, Optional

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from skillup.common.models import ApplicationStatus, CourseClass, TeacherApplication, User
from skillup.database import (
    CLASSES, FEEDBACKS, TEACHERS, USERS,
    insert_result, parse_object_id, serialize_many, serialize_mongo, update_result
)

logger = logging.getLogger(__name__)

FEATURED_COURSES_LIMIT = 4

FEATURED_COURSE_FIELDS = {
    "_id": 1,
    "classTitle": 1,
    "description": 1,
    "image": 1,
    "name": 1,
    "email": 1,
    "price": 1,
    "enroll": 1,
}

# ==================== USERS ====================

async def register_user(db: AsyncIOMotorDatabase, data: dict) -> dict:
    user = User(**data)
    result = await db[USERS].insert_one(user.to_mongo())
    logger.info("Registered user %s", user.email)
    return insert_result(result)


async def get_user_by_email(db: AsyncIOMotorDatabase, email: str) -> Optional[dict]:
    """Role lookup used right after login; None when the user is unknown"""
    return serialize_mongo(await db[USERS].find_one({"email": email}))

# ==================== TEACHER APPLICATIONS ====================

async def create_teacher_application(db: AsyncIOMotorDatabase, data: dict) -> dict:
    application = TeacherApplication(**data)
    result = await db[TEACHERS].insert_one(application.to_mongo())
    logger.info("Teacher application received from %s", application.email)
    return insert_result(result)


async def reapply_teacher(db: AsyncIOMotorDatabase, email: str) -> dict:
    """Put a (usually rejected) application back into review"""
    result = await db[TEACHERS].update_one(
        {"email": email},
        {"$set": {"status": ApplicationStatus.PENDING.value}}
    )
    return update_result(result)

# ==================== CLASSES ====================

async def list_classes(db: AsyncIOMotorDatabase, search: Optional[str] = None) -> List[dict]:
    query = {}
    if search:
        query = {"classTitle": {"$regex": re.escape(search), "$options": "i"}}

    classes = await db[CLASSES].find(query).to_list(length=None)
    return serialize_many(classes)


async def get_teacher_classes(db: AsyncIOMotorDatabase, email: str) -> List[dict]:
    classes = await db[CLASSES].find({"email": email}).to_list(length=None)
    return serialize_many(classes)


async def get_class(db: AsyncIOMotorDatabase, class_id: str) -> dict:
    course_class = await db[CLASSES].find_one({"_id": parse_object_id(class_id)})

    if not course_class:
        raise HTTPException(status_code=404, detail="Class not found")

    return serialize_mongo(course_class)


async def create_class(db: AsyncIOMotorDatabase, data: dict) -> dict:
    """New classes always start pending with no enrollments"""
    course_class = CourseClass(**data)
    result = await db[CLASSES].insert_one(course_class.to_mongo())
    logger.info("Class '%s' submitted by %s", course_class.class_title, course_class.email)
    return insert_result(result)


async def list_feedbacks(db: AsyncIOMotorDatabase) -> List[dict]:
    feedbacks = await db[FEEDBACKS].find().to_list(length=None)
    return serialize_many(feedbacks)

# ==================== AGGREGATES ====================

async def get_top_teachers(db: AsyncIOMotorDatabase, limit: Optional[int] = None) -> List[dict]:
    """
    Teachers ranked by the summed enrollment of all their classes.

    Unbounded unless `limit` is given.
    """
    pipeline = [
        {"$group": {"_id": "$email", "totalEnrollment": {"$sum": "$enroll"}}},
        {"$sort": {"totalEnrollment": -1}},
    ]
    if limit:
        pipeline.append({"$limit": limit})

    rows = await db[CLASSES].aggregate(pipeline).to_list(length=None)

    async def with_teacher_details(row: dict) -> dict:
        teacher = await db[TEACHERS].find_one(
            {"email": row["_id"]},
            {"image": 1, "name": 1, "_id": 0}
        ) or {}
        return {
            "email": row["_id"],
            "image": teacher.get("image"),
            "name": teacher.get("name"),
            "totalEnrollment": row["totalEnrollment"],
        }

    return list(await asyncio.gather(*(with_teacher_details(row) for row in rows)))


async def get_featured_courses(db: AsyncIOMotorDatabase) -> List[dict]:
    pipeline = [
        {"$match": {"status": ApplicationStatus.APPROVE.value}},
        {"$sort": {"enroll": -1}},
        {"$limit": FEATURED_COURSES_LIMIT},
        {"$project": FEATURED_COURSE_FIELDS},
    ]
    courses = await db[CLASSES].aggregate(pipeline).to_list(length=FEATURED_COURSES_LIMIT)
    return serialize_many(courses)


async def get_site_stats(db: AsyncIOMotorDatabase) -> dict:
    total_users = await db[USERS].count_documents({})
    total_classes = await db[CLASSES].count_documents({"status": ApplicationStatus.APPROVE.value})

    enrollment = await db[CLASSES].aggregate([
        {"$group": {"_id": None, "totalEnrollment": {"$sum": "$enroll"}}}
    ]).to_list(length=1)

    return {
        "totalUsers": total_users,
        "totalClasses": total_classes,
        "totalEnrollment": enrollment[0]["totalEnrollment"] if enrollment else 0,
    }
