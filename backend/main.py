"""
FastAPI application entry point
"""
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from backend.app.api.v1 import auth, resume
from backend.app.core.config import settings
from backend.app.core.logging_config import get_logger, setup_logging
from backend.app.db.base import Base
from backend.app.db import session as db_session
from backend.app.services.resume_upload import ResumeUploadError
from backend.app.utils import cache

# Import models so they register with Base.metadata
import backend.app.models  # noqa: F401

setup_logging()
logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables (alembic/ holds the same schema for managed databases)
    Base.metadata.create_all(bind=db_session.engine)
    await cache.connect()
    yield
    await cache.close()


# Initialize FastAPI app
app = FastAPI(
    title="Resume Bank API",
    description="Resume repository: PDF upload with metadata extraction, search and filters",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ResumeUploadError)
async def resume_upload_error_handler(request: Request, exc: ResumeUploadError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])
app.include_router(resume.router, prefix="/api/resumes", tags=["resumes"])

# Serve locally stored resumes when S3 is not configured (create dir if missing)
if not settings.s3_enabled:
    upload_path = Path(settings.upload_dir)
    upload_path.mkdir(parents=True, exist_ok=True)
    app.mount(f"/{settings.upload_dir.strip('/')}", StaticFiles(directory=settings.upload_dir), name="resumes")


@app.get("/")
def read_root():
    """Root endpoint"""
    return {"message": "Resume Bank API", "version": settings.app_version}


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
