import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillup import config
from skillup.admin.router import router as admin_router
from skillup.auth.auth_router import router as auth_router
from skillup.database import connect, create_indexes
from skillup.payments.payment_router import router as payment_router
from skillup.public.public_router import router as public_router
from skillup.students.student_router import router as student_router
from skillup.system.health_router import router as health_router
from skillup.teachers.teacher_router import router as teacher_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="SkillUp API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    app.state.mongo_client, app.state.db = connect()
    try:
        await create_indexes(app.state.db)
    except Exception as e:
        logger.warning("Index creation warning: %s", e)
    logger.info("SkillUp connected to database '%s'", config.DB_NAME)


@app.on_event("shutdown")
async def shutdown_event():
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()
        logger.info("Database connection closed")


# ==================== ROUTER REGISTRATION ====================
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(public_router)
app.include_router(student_router)
app.include_router(teacher_router)
app.include_router(admin_router)
app.include_router(payment_router)
# ============================================================


if __name__ == "__main__":
    logger.info("SkillUP is running on port %s", config.PORT)
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
