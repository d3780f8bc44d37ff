"""
Parser adapter - runs the metadata extractor and never lets its failure stop an upload.
"""
from pathlib import Path
from typing import Callable, Optional, Tuple

from backend.app.core.config import UNSPECIFIED
from backend.app.core.logging_config import get_logger
from backend.app.schemas.resume import ExtractedMetadata
from backend.app.services.resume_upload.errors import ParsingFailure
from backend.app.services.resume_upload.normalizer import current_millis
from backend.app.services.resume_upload.steps import UploadStep

logger = get_logger("services.resume_upload.extraction")

MetadataExtractor = Callable[[bytes, str], ExtractedMetadata]


def fallback_label_for(filename: Optional[str], now_ms: int | None = None) -> str:
    """Original filename without extension, or resume_<millis> when there is none."""
    stem = Path(filename).stem.strip() if filename else ""
    return stem or f"resume_{now_ms if now_ms is not None else current_millis()}"


def fallback_metadata(label: str) -> ExtractedMetadata:
    return ExtractedMetadata(name=label, major=UNSPECIFIED, graduationYear=UNSPECIFIED)


def parsing_warning() -> str:
    failure = ParsingFailure(step=UploadStep.PARSING)
    return f"{failure.message}. Fields not supplied with the upload were set to defaults."


def extract_with_fallback(
    extractor: MetadataExtractor,
    data: bytes,
    fallback_label: str,
) -> Tuple[ExtractedMetadata, Optional[str]]:
    """Returns (metadata, warning). warning is None when the extractor succeeded."""
    try:
        result = extractor(data, fallback_label)
        metadata = result if isinstance(result, ExtractedMetadata) else ExtractedMetadata.model_validate(result)
    except Exception as e:
        logger.warning(
            "Resume parsing failed, using fallback metadata label=%s error_type=%s error=%s",
            fallback_label,
            type(e).__name__,
            e,
        )
        return fallback_metadata(fallback_label), parsing_warning()
    return metadata, None
