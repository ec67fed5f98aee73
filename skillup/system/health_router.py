import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from skillup.database import COLLECTIONS, get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


@router.get("/", response_class=PlainTextResponse)
async def root():
    return "Hello from SkillUP Server.."


@router.get("/health")
async def health(db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Ping the database and report which of our collections exist
    """
    record = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": {"api": "UP"},
    }

    try:
        await db.command("ping")
        existing = await db.list_collection_names()
        record["status"]["database"] = "UP"
        record["collections"] = [name for name in COLLECTIONS if name in existing]
    except Exception as e:
        logger.warning("Database health check failed: %s", e)
        record["status"]["database"] = "DOWN"
        return JSONResponse(status_code=503, content=record)

    return record
