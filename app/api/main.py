"""
CyberShield Content API - FastAPI Application

Article authoring, review and publishing for the CyberShield learning portal.

Usage:
    uvicorn app.api.main:app --reload --host 0.0.0.0 --port 8000

Docs:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

from dotenv import load_dotenv
import os

load_dotenv()  # load .env from current working directory (project root)

from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.auth import init_firebase, require_admin
from app.core.exceptions import (
    AppError,
    app_error_handler,
    http_exception_handler,
    internal_error_handler,
    validation_error_handler,
)
from app.core.logging import setup_logger
from app.core.middleware import request_logger
from app.utils.storage_service import PUBLIC_PREFIX, get_image_dir, get_upload_root

setup_logger()
logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown."""
    logger.info("CyberShield API starting...")

    try:
        init_firebase()
    except Exception as e:
        logger.warning(f"Firebase Auth not available: {e}")

    try:
        from app.database.session import async_engine
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection OK")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")

    logger.info("API ready")
    yield
    logger.info("CyberShield API shutting down...")


app = FastAPI(
    title="CyberShield Content API",
    description="Topics, CTF writeups and articles with an author -> admin review workflow.",
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS – allow frontend origins (configurable via .env CORS_ORIGINS, comma-separated)
_DEFAULT_CORS = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000"
_CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_CORS).split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.middleware("http")(request_logger)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(Exception, internal_error_handler)


# Health endpoints
@app.get("/", tags=["Health"])
async def root():
    return {
        "name": "CyberShield Content API",
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    health = {"status": "healthy", "components": {"api": "ok"}}
    try:
        from app.database.session import async_engine
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        health["components"]["database"] = "ok"
    except Exception as e:
        health["status"] = "degraded"
        health["components"]["database"] = f"error: {str(e)}"
    return health


# Register routers
from app.api.routers import admin, articles, auth, topics, upload

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(topics.router, prefix="/api/topics", tags=["Topics"])
app.include_router(articles.router, prefix="/api/articles", tags=["Articles"])
app.include_router(
    admin.router,
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)
app.include_router(upload.router, prefix="/api/upload", tags=["Upload"])

# Uploaded images (local backend)
get_image_dir()
app.mount(PUBLIC_PREFIX, StaticFiles(directory=str(get_upload_root())), name="uploads")

logger.info("Routers registered: auth, topics, articles, admin, upload")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.api.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=True)
