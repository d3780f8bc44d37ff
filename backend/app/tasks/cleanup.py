"""
Periodic cleanup: delete stored PDFs of soft-deleted resumes whose artifact removal failed earlier.
Run via cron or: python -c "from backend.app.tasks.cleanup import run_cleanup; print(run_cleanup())"
"""
from sqlalchemy.orm import Session

from backend.app.core.logging_config import get_logger
from backend.app.db.session import SessionLocal
from backend.app.models.resume import Resume
from backend.app.services.storage import ArtifactStore, get_artifact_store

logger = get_logger("tasks.cleanup")


def purge_deleted_artifacts(db: Session, store: ArtifactStore) -> dict:
    """
    Retry artifact deletion for inactive resumes with artifact_deleted = False.
    Returns counts of purged and still-failing artifacts.
    """
    pending = (
        db.query(Resume)
        .filter(Resume.is_active.is_(False))
        .filter(Resume.artifact_deleted.is_(False))
        .all()
    )
    purged = 0
    for resume in pending:
        if store.delete(resume.s3_key):
            resume.artifact_deleted = True
            purged += 1
    db.commit()
    failed = len(pending) - purged
    if failed:
        logger.warning("Artifact cleanup incomplete purged=%d failed=%d", purged, failed)
    return {"purged": purged, "failed": failed}


def run_cleanup() -> dict:
    """Run cleanup using a new DB session."""
    db = SessionLocal()
    try:
        return purge_deleted_artifacts(db, get_artifact_store())
    except Exception as e:
        db.rollback()
        logger.exception("Artifact cleanup failed")
        return {"error": str(e), "purged": 0, "failed": 0}
    finally:
        db.close()
