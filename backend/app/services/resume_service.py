"""
Resume service - read paths (search, detail, filters) and the update / soft-delete flows.
Every read filters on is_active; soft-deleted resumes are invisible everywhere.
"""
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from backend.app.core.logging_config import get_logger
from backend.app.models.company import Company
from backend.app.models.keyword import Keyword
from backend.app.models.resume import Resume
from backend.app.schemas.resume import (
    ResumeDetailOut,
    ResumeFiltersOut,
    ResumeOut,
    ResumeUpdateIn,
)
from backend.app.services.resume_upload.normalizer import FieldNormalizer
from backend.app.services.storage import ArtifactStore
from backend.app.services.tag_service import get_or_create_companies, get_or_create_keywords

logger = get_logger("services.resume")


def _active_query(db: Session):
    return (
        db.query(Resume)
        .options(selectinload(Resume.companies), selectinload(Resume.keywords))
        .filter(Resume.is_active.is_(True))
    )


def resume_to_out(resume: Resume) -> ResumeOut:
    return ResumeOut(
        id=resume.id,
        name=resume.name,
        major=resume.major,
        graduationYear=resume.graduation_year,
        pdfUrl=resume.pdf_url,
        companies=[c.name for c in resume.companies],
        keywords=[k.name for k in resume.keywords],
    )


def resume_to_detail(resume: Resume) -> ResumeDetailOut:
    return ResumeDetailOut(
        **resume_to_out(resume).model_dump(),
        uploadedBy=resume.uploaded_by,
        createdAt=resume.created_at,
        updatedAt=resume.updated_at,
    )


def search_resumes(
    db: Session,
    query: str | None = None,
    major: str | None = None,
    company: str | None = None,
    graduation_year: str | None = None,
    keyword: str | None = None,
) -> list[Resume]:
    """
    Active resumes, newest first.
    query matches resume name, company names or keyword names (substring, case-insensitive);
    the other filters are case-insensitive equality.
    """
    q = _active_query(db)
    if major:
        q = q.filter(func.lower(Resume.major) == major.strip().lower())
    if graduation_year:
        q = q.filter(func.lower(Resume.graduation_year) == graduation_year.strip().lower())
    if company:
        q = q.filter(Resume.companies.any(func.lower(Company.name) == company.strip().lower()))
    if keyword:
        q = q.filter(Resume.keywords.any(func.lower(Keyword.name) == keyword.strip().lower()))
    if query and query.strip():
        pattern = f"%{query.strip()}%"
        q = q.filter(
            or_(
                Resume.name.ilike(pattern),
                Resume.companies.any(Company.name.ilike(pattern)),
                Resume.keywords.any(Keyword.name.ilike(pattern)),
            )
        )
    return q.order_by(Resume.created_at.desc(), Resume.id.desc()).all()


def get_active_resume(db: Session, resume_id: int) -> Resume | None:
    return _active_query(db).filter(Resume.id == resume_id).first()


def list_filters(db: Session) -> ResumeFiltersOut:
    """Distinct majors, graduation years and companies among active resumes."""
    majors = db.query(Resume.major).filter(Resume.is_active.is_(True)).distinct().all()
    years = db.query(Resume.graduation_year).filter(Resume.is_active.is_(True)).distinct().all()
    companies = (
        db.query(Company.name)
        .filter(Company.resumes.any(Resume.is_active.is_(True)))
        .distinct()
        .all()
    )
    return ResumeFiltersOut(
        majors=sorted(m for (m,) in majors if m),
        graduationYears=sorted(y for (y,) in years if y),
        companies=sorted(c for (c,) in companies if c),
    )


def update_resume(
    db: Session,
    resume: Resume,
    payload: ResumeUpdateIn,
    normalizer: FieldNormalizer | None = None,
) -> tuple[Resume, list[str]]:
    """Apply present fields with the upload normalization rules. Tag fields replace the whole set."""
    normalizer = normalizer or FieldNormalizer()
    warnings: list[str] = []
    try:
        if payload.name is not None and payload.name.strip():
            resume.name = normalizer.name(payload.name)
        if payload.major is not None and payload.major.strip():
            resume.major = normalizer.major(payload.major)
        if payload.graduationYear is not None and payload.graduationYear.strip():
            resume.graduation_year = normalizer.graduation_year(payload.graduationYear)
        if payload.companies is not None:
            names = normalizer.companies(payload.companies, [], warnings)
            resume.companies = get_or_create_companies(db, names)
        if payload.keywords is not None:
            names = normalizer.keywords(payload.keywords, [], warnings)
            resume.keywords = get_or_create_keywords(db, names)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(resume)
    logger.info("Resume updated id=%s warnings=%d", resume.id, len(warnings))
    return resume, warnings


def _purge_artifact(resume: Resume, store: ArtifactStore) -> None:
    if resume.artifact_deleted:
        return
    if store.delete(resume.s3_key):
        resume.artifact_deleted = True
    else:
        logger.warning("Artifact delete failed; left for cleanup resume_id=%s key=%s", resume.id, resume.s3_key)


def soft_delete_resume(db: Session, resume: Resume, store: ArtifactStore) -> None:
    """Deactivate first, then delete the stored PDF best-effort."""
    resume.is_active = False
    db.commit()
    _purge_artifact(resume, store)
    db.commit()
    logger.info("Resume soft-deleted id=%s artifact_deleted=%s", resume.id, resume.artifact_deleted)


def soft_delete_all(db: Session, store: ArtifactStore) -> int:
    resumes = db.query(Resume).filter(Resume.is_active.is_(True)).all()
    for resume in resumes:
        resume.is_active = False
    db.commit()
    for resume in resumes:
        _purge_artifact(resume, store)
    db.commit()
    logger.info("Soft-deleted all resumes count=%d", len(resumes))
    return len(resumes)
