# app/main.py
from dotenv import load_dotenv

load_dotenv()

import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config.appconfig import settings

# Apply logging configuration
logging.config.dictConfig(settings.LOGGING_CONFIG)

import app.model_registry  # noqa: F401
from app.database.connection import init_db

# Import routers
from app.audit.routes import router as audit_router
from app.billing.routes import router as billing_router
from app.notes.routes import router as notes_router
from app.reference.routes import router as reference_router
from app.rendering.routes import router as rendering_router
from app.system_services.system_routes import router as system_router
from app.timeline.routes import router as timeline_router
from app.users.auth_routers import router as auth_router

logger = logging.getLogger("app.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    await init_db()
    logger.info("===============================================================================")
    logger.info(f" 🚀 Starting {settings.APP_NAME} ({settings.ENVIRONMENT})")
    logger.info(f" ✅ Database: {settings.DATABASE_URL.split('///')[0]}")
    logger.info(f" ✅ Practice timezone: {settings.PRACTICE_TIMEZONE} ({settings.PRACTICE_TIMEZONE_LABEL})")
    logger.info(f" ✅ Default location: {settings.DEFAULT_LOCATION_ID}")
    logger.info(f" ✅ Audit retention: {settings.AUDIT_LOG_MAX_ENTRIES} entries")
    logger.info("===============================================================================")
    yield
    # Shutdown
    logger.info("👋 Shutting down")


app = FastAPI(
    title=settings.APP_NAME,
    description="Patient charts, progress notes, visit timeline and audit trail for a behavioral-health practice",
    version="1.0.0",
    lifespan=lifespan,
)

# Include routers with prefixes
app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
app.include_router(system_router, prefix="/api", tags=["Patients & Appointments"])
app.include_router(notes_router, prefix="/api", tags=["Notes"])
app.include_router(timeline_router, prefix="/api", tags=["Timeline"])
app.include_router(rendering_router, prefix="/api", tags=["Printing"])
app.include_router(reference_router, prefix="/api/reference", tags=["Reference Data"])
app.include_router(billing_router, prefix="/api", tags=["Billing"])
app.include_router(audit_router, prefix="/api", tags=["Audit Trail"])


@app.get("/health", tags=["System"])
async def health():
    return {"status": "ok", "app": settings.APP_NAME}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
