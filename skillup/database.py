import logging
from typing import List, Optional

from bson import ObjectId
from fastapi import HTTPException, Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from skillup import config

logger = logging.getLogger(__name__)

USERS = "users"
TEACHERS = "teachers"
CLASSES = "classes"
PAYMENTS = "payments"
FEEDBACKS = "feedbacks"
ASSIGNMENT_SUBMISSIONS = "assignmentSubmit"

COLLECTIONS = (USERS, TEACHERS, CLASSES, PAYMENTS, FEEDBACKS, ASSIGNMENT_SUBMISSIONS)


# ==================== CONNECTION ====================

def connect(mongo_url: str = None, db_name: str = None):
    """Create the shared Motor client; the driver pools connections internally"""
    client = AsyncIOMotorClient(mongo_url or config.MONGO_URL)
    return client, client[db_name or config.DB_NAME]


async def get_db(request: Request) -> AsyncIOMotorDatabase:
    """Database dependency"""
    return request.app.state.db


async def create_indexes(db: AsyncIOMotorDatabase):
    """
    Create lookup indexes. Email indexes are not unique:
    one user may hold several teacher applications over time.
    """
    await db[USERS].create_index("email")

    await db[TEACHERS].create_index("email")
    await db[TEACHERS].create_index("status")

    await db[CLASSES].create_index("email")
    await db[CLASSES].create_index([("status", 1), ("enroll", -1)])

    await db[PAYMENTS].create_index("student.email")

    await db[ASSIGNMENT_SUBMISSIONS].create_index([("classId", 1), ("email", 1)])
    await db[ASSIGNMENT_SUBMISSIONS].create_index([("classId", 1), ("date", 1)])

    await db[FEEDBACKS].create_index("classId")

    logger.info("SkillUp indexes created")


# ==================== HELPERS ====================

def parse_object_id(value: str, label: str = "class") -> ObjectId:
    if not ObjectId.is_valid(value):
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID")
    return ObjectId(value)


def serialize_mongo(doc: Optional[dict]) -> Optional[dict]:
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_many(docs: List[dict]) -> List[dict]:
    return [serialize_mongo(doc) for doc in docs]


def insert_result(result) -> dict:
    return {
        "acknowledged": result.acknowledged,
        "insertedId": str(result.inserted_id),
    }


def update_result(result) -> dict:
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedId": str(result.upserted_id) if result.upserted_id is not None else None,
    }
