import logging
from datetime import datetime

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sweetshop.api.v1.api import api_router
from sweetshop.core.config import settings
from sweetshop.core.database import Base, SessionLocal, engine, get_db
from sweetshop.core.errors import register_exception_handlers
from sweetshop.core.observability import RequestLoggingMiddleware, configure_logging
from sweetshop.schemas.common import HealthResponse
from sweetshop.services.auth import ensure_admin
import sweetshop.models  # noqa: F401

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json"
)

# Set CORS for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_PREFIX)

@app.on_event("startup")
def startup_event():
    """
    Create tables and, when configured, the bootstrap admin account.
    """
    Base.metadata.create_all(bind=engine)
    if settings.FIRST_ADMIN_EMAIL and settings.FIRST_ADMIN_PASSWORD:
        db = SessionLocal()
        try:
            ensure_admin(
                db,
                settings.FIRST_ADMIN_EMAIL,
                settings.FIRST_ADMIN_PASSWORD,
                settings.FIRST_ADMIN_NAME,
            )
        finally:
            db.close()
    logger.info(f"{settings.PROJECT_NAME} API started")

@app.get("/health", response_model=HealthResponse)
def health(db: Session = Depends(get_db)):
    timestamp = datetime.utcnow().isoformat()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "message": "Database unavailable",
                "data": {"status": "DEGRADED", "database": "down", "timestamp": timestamp},
            },
        )
    return {
        "success": True,
        "message": "OK",
        "data": {"status": "OK", "database": "up", "timestamp": timestamp},
    }
