from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.db.database import SessionLocal, engine, Base, get_db
from app.api.v1.endpoints import auth, posts
from app.crud.users import ensure_builtin_users

from app.core.config import settings
from app.core.exception import (
    AppError,
    app_error_handler,
    validation_exception_handler,
    http_exception_handler,
    database_exception_handler,
    general_exception_handler
)
from app.core.constants import APIConfig, LoggingConfig

# Import models to register them with SQLAlchemy
from app.models import user, posts as post_models

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=LoggingConfig.LOG_FORMAT,
    datefmt=LoggingConfig.DATE_FORMAT,
)
logging.getLogger("sqlalchemy.engine").setLevel(LoggingConfig.DATABASE_LOG_LEVEL)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create all tables in the database and seed the reserved identities
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_builtin_users(db)
    finally:
        db.close()
    logger.info(f"{APIConfig.API_TITLE} started ({settings.ENVIRONMENT})")
    yield


# Create FastAPI app with centralized configuration
app = FastAPI(
    title=APIConfig.API_TITLE,
    description=APIConfig.API_DESCRIPTION,
    version=APIConfig.API_VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Register exception handlers
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(SQLAlchemyError, database_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers with centralized prefix
app.include_router(auth.router, prefix=APIConfig.API_PREFIX)
app.include_router(posts.router, prefix=APIConfig.API_PREFIX)


@app.get("/")
def read_root():
    return {"message": "Welcome to the CivicConnect Reports API!"}


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    db_status = "connected"
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {e}")
        db_status = "unavailable"
    return {"status": "ok" if db_status == "connected" else "degraded", "dbStatus": db_status}
