"""
Resume upload pipeline.

validation -> parsing -> normalization -> storage_put -> db_create
-> associate_companies -> associate_keywords -> commit

The artifact put happens outside the database transaction, so a failure after it
is compensated by deleting the stored file. What gets compensated is decided only
by the step the failure happened at (see steps.py).
"""
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TypeVar

from sqlalchemy.orm import Session

from backend.app.core.config import ADMIN_ID, PDF_CONTENT_TYPE, settings
from backend.app.core.logging_config import get_logger
from backend.app.models.resume import Resume
from backend.app.schemas.resume import ResumeOverrides, UploadResultOut
from backend.app.services.resume_upload.errors import (
    AssociationFailure,
    CompensationFailure,
    PersistenceFailure,
    ResumeUploadError,
    StorageFailure,
)
from backend.app.services.resume_upload.extraction import (
    MetadataExtractor,
    extract_with_fallback,
    fallback_label_for,
    fallback_metadata,
    parsing_warning,
)
from backend.app.services.resume_upload.normalizer import FieldNormalizer, current_millis
from backend.app.services.resume_upload.steps import (
    FailurePolicy,
    UploadStep,
    artifact_stored,
    policy_for,
)
from backend.app.services.resume_upload.validation import validate_pdf_upload
from backend.app.services.storage import ArtifactStore
from backend.app.services.tag_service import get_or_create_companies, get_or_create_keywords

logger = get_logger("services.resume_upload")

T = TypeVar("T")

_KEY_SEGMENT_MAX = 100


def build_storage_key(name: str, now_ms: int | None = None, prefix: str | None = None) -> str:
    """<prefix>/<sanitized lowercase name>_<millis>.pdf"""
    segment = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")[:_KEY_SEGMENT_MAX].strip("_")
    stamp = now_ms if now_ms is not None else current_millis()
    key_prefix = (prefix if prefix is not None else settings.s3_key_prefix).strip("/")
    file_name = f"{segment or 'resume'}_{stamp}.pdf"
    return f"{key_prefix}/{file_name}" if key_prefix else file_name


@dataclass
class UploadRequest:
    data: Optional[bytes]
    filename: Optional[str] = None
    overrides: ResumeOverrides = field(default_factory=ResumeOverrides)
    uploaded_by: str = ADMIN_ID


@dataclass
class UploadState:
    """How far one upload got. The failure handler reads nothing else."""
    step: UploadStep = UploadStep.VALIDATION
    artifact_key: Optional[str] = None
    artifact_url: Optional[str] = None
    parsing_warning: Optional[str] = None
    companies: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class UploadResult:
    resume: Resume
    artifact_url: str
    parsing_warning: Optional[str] = None
    companies: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_response(self) -> dict:
        out = UploadResultOut(
            id=self.resume.id,
            name=self.resume.name,
            major=self.resume.major,
            graduationYear=self.resume.graduation_year,
            artifactUrl=self.artifact_url,
            parsingWarning=self.parsing_warning,
            companies=self.companies,
            keywords=self.keywords,
            warnings=self.warnings,
        )
        return out.model_dump(exclude_none=True)


class ResumeUploadPipeline:
    def __init__(
        self,
        db: Session,
        store: ArtifactStore,
        extractor: MetadataExtractor,
        normalizer: FieldNormalizer | None = None,
        max_bytes: int | None = None,
    ):
        self.db = db
        self.store = store
        self.extractor = extractor
        self.normalizer = normalizer or FieldNormalizer()
        self.max_bytes = max_bytes

    def run(self, request: UploadRequest) -> UploadResult:
        state = UploadState()
        try:
            return self._execute(request, state)
        except Exception as exc:
            error = self._fail(state, exc)
            if error is exc:
                raise
            raise error from exc

    def _execute(self, request: UploadRequest, state: UploadState) -> UploadResult:
        self._run_step(state, UploadStep.VALIDATION, lambda: validate_pdf_upload(request.data, self.max_bytes))
        data = request.data

        now_ms = current_millis()
        label = fallback_label_for(request.filename, now_ms)
        parsed = self._run_step(
            state, UploadStep.PARSING, lambda: extract_with_fallback(self.extractor, data, label)
        )
        extracted, state.parsing_warning = parsed or (fallback_metadata(label), parsing_warning())

        normalized = self._run_step(
            state,
            UploadStep.NORMALIZATION,
            lambda: self.normalizer.normalize(request.overrides, extracted, now_ms=now_ms),
        )
        state.warnings.extend(normalized.warnings)

        key = build_storage_key(normalized.name, now_ms)
        state.artifact_url = self._run_step(
            state, UploadStep.STORAGE_PUT, lambda: self.store.put(data, key, PDF_CONTENT_TYPE)
        )
        state.artifact_key = key

        resume = self._run_step(
            state,
            UploadStep.DB_CREATE,
            lambda: self._create_resume(request, normalized.name, normalized.major, normalized.graduation_year, state),
        )
        state.companies = self._run_step(
            state,
            UploadStep.ASSOCIATE_COMPANIES,
            lambda: self._associate(resume, "companies", get_or_create_companies, normalized.companies),
        ) or []
        state.keywords = self._run_step(
            state,
            UploadStep.ASSOCIATE_KEYWORDS,
            lambda: self._associate(resume, "keywords", get_or_create_keywords, normalized.keywords),
        ) or []
        self._run_step(state, UploadStep.COMMIT, self.db.commit)
        self.db.refresh(resume)

        logger.info(
            "Resume uploaded id=%s key=%s companies=%d keywords=%d parsing_warning=%s warnings=%d",
            resume.id,
            state.artifact_key,
            len(state.companies),
            len(state.keywords),
            bool(state.parsing_warning),
            len(state.warnings),
        )
        return UploadResult(
            resume=resume,
            artifact_url=state.artifact_url,
            parsing_warning=state.parsing_warning,
            companies=state.companies,
            keywords=state.keywords,
            warnings=state.warnings,
        )

    def _run_step(self, state: UploadState, step: UploadStep, action: Callable[[], T]) -> Optional[T]:
        """Advance to step and run it. Continue-policy steps log and return None on failure."""
        state.step = step
        if policy_for(step) is FailurePolicy.ABORT:
            return action()
        try:
            return action()
        except Exception as exc:
            failure = AssociationFailure(step=step) if step > UploadStep.DB_CREATE else None
            message = failure.message if failure else f"Step {step.label} failed; continuing with defaults."
            logger.warning("Upload step failed, continuing step=%s error_type=%s error=%s", step.label, type(exc).__name__, exc)
            state.warnings.append(message)
            return None

    def _create_resume(
        self, request: UploadRequest, name: str, major: str, graduation_year: str, state: UploadState
    ) -> Resume:
        resume = Resume(
            name=name,
            major=major,
            graduation_year=graduation_year,
            pdf_url=state.artifact_url,
            s3_key=state.artifact_key,
            uploaded_by=request.uploaded_by,
            is_active=True,
        )
        self.db.add(resume)
        self.db.flush()
        return resume

    def _associate(self, resume: Resume, attr: str, lookup: Callable, names: List[str]) -> List[str]:
        """
        Attach tags inside a savepoint so a failure leaves the resume row intact.
        Returns the attached tag names in the order they were supplied.
        """
        if not names:
            return []
        with self.db.begin_nested():
            tags = lookup(self.db, names)
            setattr(resume, attr, tags)
            self.db.flush()
        return [tag.name for tag in tags]

    # --- failure handling ---

    def _fail(self, state: UploadState, exc: Exception) -> ResumeUploadError:
        step = state.step
        self._rollback(step)
        if artifact_stored(step) and state.artifact_key:
            self._delete_artifact(state.artifact_key, step)

        error = self._classify(step, exc)
        log = logger.info if error.status_code < 500 else logger.error
        log(
            "Resume upload failed step=%s error_type=%s error=%s artifact_key=%s",
            step.label,
            type(exc).__name__,
            exc,
            state.artifact_key,
        )
        return error

    def _classify(self, step: UploadStep, exc: Exception) -> ResumeUploadError:
        if isinstance(exc, ResumeUploadError):
            return exc
        if step is UploadStep.STORAGE_PUT:
            return StorageFailure(step=step)
        if step >= UploadStep.DB_CREATE:
            return PersistenceFailure(step=step)
        return ResumeUploadError(step=step)

    def _rollback(self, step: UploadStep) -> None:
        if not self.db.in_transaction():
            return
        try:
            self.db.rollback()
        except Exception as e:
            failure = CompensationFailure(f"Rollback failed: {e}", step=step)
            logger.error("Compensation failed action=rollback step=%s error=%s", step.label, failure.message)

    def _delete_artifact(self, key: str, step: UploadStep) -> None:
        try:
            deleted = self.store.delete(key)
        except Exception as e:
            deleted = False
            logger.error("Compensation failed action=delete_artifact step=%s key=%s error=%s", step.label, key, e)
        if deleted:
            logger.info("Deleted orphaned artifact step=%s key=%s", step.label, key)
        else:
            failure = CompensationFailure(step=step, details={"key": key})
            logger.warning("%s key=%s", failure.message, key)
