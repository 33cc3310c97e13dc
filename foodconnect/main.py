# foodconnect/main.py

import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from redis.exceptions import RedisError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from foodconnect.core.config import settings as config
from foodconnect.core.limiter import limiter
from foodconnect.core.logging_config import setup_logging
from foodconnect.core.redis import redis_client
from foodconnect.dependencies import get_db, get_db_context
from foodconnect.routers import (
    admin as admin_router,
    applications,
    auth,
    campaigns,
    content,
    messages,
    notifications,
    payments,
    profiles,
    reference,
    users,
)
from foodconnect.services.auth import ensure_default_admin
from foodconnect.services.maintenance import (
    cleanup_old_notifications_task,
    close_expired_campaigns_task,
    purge_expired_tokens_task,
)
from foodconnect.services.storage import get_upload_dir

# --- Init ---
logger = logging.getLogger(__name__)
scheduler = AsyncIOScheduler(timezone=config.SCHEDULER_TIMEZONE)


# --- Unhandled errors ---
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Logs any exception that escaped the endpoints and answers with a generic 500.
    """
    logger.critical(f"Unhandled exception for request: {request.method} {request.url}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error"},
    )


def _seed_admin():
    try:
        with get_db_context() as db:
            ensure_default_admin(db)
    except SQLAlchemyError:
        logger.error("Could not create the default admin account. Are migrations applied?", exc_info=True)


# --- Lifespan ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Application lifespan startup...")

    # Only one worker seeds data and runs the scheduler
    try:
        is_main_worker = await redis_client.set("app_startup_lock", "1", ex=60, nx=True)
    except RedisError:
        logger.warning("Redis is unavailable, assuming a single worker.")
        is_main_worker = True

    if is_main_worker:
        logger.info("This is the main worker. Running initial setup...")
        _seed_admin()

        if config.SCHEDULER_ENABLED and not scheduler.running:
            scheduler.add_job(close_expired_campaigns_task, "cron", hour=0, minute=5)
            scheduler.add_job(cleanup_old_notifications_task, "cron", hour=3, minute=30)
            scheduler.add_job(purge_expired_tokens_task, "cron", hour=4, minute=0)
            scheduler.start()
            logger.info("Scheduler started with background jobs.")
    else:
        logger.info("This is a secondary worker. Skipping initial setup.")

    yield

    if is_main_worker:
        logger.info("Main worker shutting down...")
        if scheduler.running:
            scheduler.shutdown()
            logger.info("Scheduler shut down.")
        try:
            await redis_client.delete("app_startup_lock")
        except RedisError:
            logger.warning("Could not release the startup lock in Redis.")
    else:
        logger.info("Secondary worker shutting down.")


# --- FastAPI app ---
app = FastAPI(
    title=config.PROJECT_NAME,
    description="Marketplace connecting Malaysian restaurants with food influencers",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(users.router, tags=["Users"])
api_router.include_router(profiles.router, tags=["Profiles"])
api_router.include_router(campaigns.router, tags=["Campaigns"])
api_router.include_router(applications.router, tags=["Applications"])
api_router.include_router(content.router, tags=["Content"])
api_router.include_router(payments.router, tags=["Payments"])
api_router.include_router(messages.router, tags=["Messages"])
api_router.include_router(notifications.router, tags=["Notifications"])
api_router.include_router(reference.router, tags=["Reference"])

api_router.include_router(admin_router.router, prefix="/admin", tags=["Admin"])

app.include_router(api_router)

# Uploaded images and videos
app.mount("/uploads", StaticFiles(directory=get_upload_dir()), name="uploads")


def _health(db: Session) -> dict:
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError:
        logger.error("Health check: database is unreachable.", exc_info=True)
        database = "disconnected"
    return {"status": "ok", "service": config.PROJECT_NAME, "database": database}


@app.get("/", tags=["Health"])
def read_root(db: Session = Depends(get_db)):
    return _health(db)


@app.get("/health", tags=["Health"])
def health_check(db: Session = Depends(get_db)):
    return _health(db)
