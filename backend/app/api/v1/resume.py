"""
Resume endpoints - upload pipeline, search/filters for members, update and soft delete for admins
"""
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.config import FILTERS_CACHE_KEY, settings
from backend.app.core.dependencies import (
    get_current_admin,
    get_current_reader,
    get_db,
    get_extractor,
    get_store,
)
from backend.app.core.logging_config import get_logger
from backend.app.schemas.resume import (
    ErrorOut,
    ResumeDetailOut,
    ResumeFiltersOut,
    ResumeOverrides,
    ResumeSearchOut,
    ResumeUpdateIn,
    ResumeUpdateOut,
)
from backend.app.services.resume_service import (
    get_active_resume,
    list_filters,
    resume_to_detail,
    resume_to_out,
    search_resumes,
    soft_delete_all,
    soft_delete_resume,
    update_resume,
)
from backend.app.services.resume_upload import ResumeUploadPipeline, UploadRequest
from backend.app.services.resume_upload.extraction import MetadataExtractor
from backend.app.services.storage import ArtifactStore
from backend.app.utils import cache

logger = get_logger("api.resume")
router = APIRouter()


def _get_or_404(db: Session, resume_id: int):
    resume = get_active_resume(db, resume_id)
    if not resume:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found.")
    return resume


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}, 502: {"model": ErrorOut}},
)
async def upload_resume(
    file: UploadFile | None = File(None),
    name: str | None = Form(None),
    major: str | None = Form(None),
    graduationYear: str | None = Form(None),
    companies: str | None = Form(None),
    keywords: str | None = Form(None),
    db: Session = Depends(get_db),
    store: ArtifactStore = Depends(get_store),
    extractor: MetadataExtractor = Depends(get_extractor),
    admin: dict = Depends(get_current_admin),
):
    """
    Upload a resume PDF (max UPLOAD_LIMIT_MB). Metadata is parsed from the PDF; any form field
    supplied here overrides the parsed value.

    - **companies** / **keywords**: comma-separated
    - **parsingWarning**: present when parsing failed and defaults were used
    """
    data = await file.read() if file is not None else b""
    request = UploadRequest(
        data=data,
        filename=file.filename if file is not None else None,
        overrides=ResumeOverrides(
            name=name,
            major=major,
            graduationYear=graduationYear,
            companies=companies,
            keywords=keywords,
        ),
        uploaded_by=admin["id"],
    )
    pipeline = ResumeUploadPipeline(db, store, extractor, max_bytes=settings.max_upload_bytes)
    result = pipeline.run(request)
    await cache.delete(FILTERS_CACHE_KEY)
    return result.to_response()


@router.get("/search", response_model=ResumeSearchOut)
def search(
    query: str | None = None,
    major: str | None = None,
    company: str | None = None,
    graduationYear: str | None = None,
    keyword: str | None = None,
    db: Session = Depends(get_db),
    reader: dict = Depends(get_current_reader),
):
    """Search active resumes, newest first"""
    resumes = search_resumes(
        db,
        query=query,
        major=major,
        company=company,
        graduation_year=graduationYear,
        keyword=keyword,
    )
    return ResumeSearchOut(count=len(resumes), resumes=[resume_to_out(r) for r in resumes])


@router.get("/filters", response_model=ResumeFiltersOut)
async def filters(
    db: Session = Depends(get_db),
    reader: dict = Depends(get_current_reader),
):
    """Distinct majors, graduation years and companies for the search UI"""
    cached = await cache.get(FILTERS_CACHE_KEY)
    if cached is not None:
        return cached
    result = list_filters(db).model_dump()
    await cache.set(FILTERS_CACHE_KEY, result, ttl=settings.filters_cache_ttl)
    return result


@router.delete("/all/delete")
async def delete_all_resumes(
    db: Session = Depends(get_db),
    store: ArtifactStore = Depends(get_store),
    admin: dict = Depends(get_current_admin),
):
    """Soft delete every active resume"""
    count = soft_delete_all(db, store)
    await cache.delete(FILTERS_CACHE_KEY)
    return {"deleted": count}


@router.get("/{resume_id}", response_model=ResumeDetailOut)
def get_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    reader: dict = Depends(get_current_reader),
):
    """Resume detail"""
    return resume_to_detail(_get_or_404(db, resume_id))


@router.get("/{resume_id}/file")
def get_resume_file(
    resume_id: int,
    db: Session = Depends(get_db),
    store: ArtifactStore = Depends(get_store),
    reader: dict = Depends(get_current_reader),
):
    """Redirect to a presigned S3 URL, or stream the file when stored locally"""
    resume = _get_or_404(db, resume_id)
    url = store.signed_url(resume.s3_key)
    if url:
        return RedirectResponse(url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    path_for = getattr(store, "path_for", None)
    if path_for is not None:
        path = path_for(resume.s3_key)
        if path.exists():
            return FileResponse(path, media_type="application/pdf", filename=path.name)
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume file not found.")


@router.put("/{resume_id}", response_model=ResumeUpdateOut)
async def put_resume(
    resume_id: int,
    payload: ResumeUpdateIn,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    """
    Update metadata. companies / keywords (comma-separated) replace the existing sets.
    warnings reports entries dropped by the per-list cap.
    """
    resume = _get_or_404(db, resume_id)
    try:
        resume, warnings = update_resume(db, resume, payload)
    except SQLAlchemyError as e:
        logger.exception("Resume update failed id=%s", resume_id)
        raise HTTPException(status_code=500, detail="Error updating resume.") from e
    await cache.delete(FILTERS_CACHE_KEY)
    return ResumeUpdateOut(**resume_to_out(resume).model_dump(), warnings=warnings)


@router.delete("/{resume_id}")
async def delete_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    store: ArtifactStore = Depends(get_store),
    admin: dict = Depends(get_current_admin),
):
    """Soft delete a resume and remove its stored PDF"""
    resume = _get_or_404(db, resume_id)
    soft_delete_resume(db, resume, store)
    await cache.delete(FILTERS_CACHE_KEY)
    return {"message": "Resume deleted successfully."}
