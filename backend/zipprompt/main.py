"""
ZipPrompt - Main FastAPI Application
Upload a zipped codebase, get back its file tree and a single LLM-ready document
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from zipprompt.db.database import init_db, close_db
from zipprompt.core.config import settings
from zipprompt.api.routes import uploads
from zipprompt.api.exception_handlers import setup_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Silence noisy loggers
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("multipart").setLevel(logging.WARNING)
logging.getLogger("python_multipart").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}...")
    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

app.include_router(uploads.router, prefix="/api", tags=["Uploads"])


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.get("/api/info")
async def api_info():
    """API information"""
    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "max_upload_size_mb": settings.MAX_UPLOAD_SIZE_MB,
        "allowed_mime_types": settings.ALLOWED_ARCHIVE_MIME_TYPES,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "zipprompt.main:app",
        host=settings.BACKEND_HOST,
        port=settings.BACKEND_PORT,
        reload=settings.DEBUG
    )
