"""
Dependency injection utilities
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from backend.app.core.config import ADMIN_ID, ADMIN_ROLE
from backend.app.core.security import InvalidTokenError, decode_admin_token, decode_member_token
from backend.app.db.session import SessionLocal
from backend.app.services.resume_extractor import extract_resume_metadata
from backend.app.services.resume_upload.extraction import MetadataExtractor
from backend.app.services.storage import ArtifactStore, get_artifact_store

security = HTTPBearer(auto_error=False)


def get_db() -> Session:
    """Get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store() -> ArtifactStore:
    """Artifact store for the current configuration"""
    return get_artifact_store()


def get_extractor() -> MetadataExtractor:
    """Resume metadata extractor"""
    return extract_resume_metadata


def _require_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict:
    """Admin principal from the shared-password session token"""
    token = _require_token(credentials)
    try:
        decode_admin_token(token)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired admin token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"id": ADMIN_ID, "role": ADMIN_ROLE, "email": None}


def get_current_reader(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict:
    """Admin or member principal - anyone allowed to browse resumes"""
    token = _require_token(credentials)
    try:
        decode_admin_token(token)
        return {"id": ADMIN_ID, "role": ADMIN_ROLE, "email": None}
    except InvalidTokenError:
        pass
    try:
        return decode_member_token(token)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
