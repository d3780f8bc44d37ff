"""
Diagnose a PDF before uploading it: runs the upload validator and pdfplumber text extraction.
Run: python -m backend.app.tasks.check_pdf path/to/resume.pdf
"""
import sys
from pathlib import Path

from backend.app.core.logging_config import get_logger, setup_logging
from backend.app.services.resume_extractor import count_pages, extract_text_from_pdf
from backend.app.services.resume_upload.errors import UploadValidationError
from backend.app.services.resume_upload.validation import validate_pdf_upload

logger = get_logger("tasks.check_pdf")

_PREVIEW_CHARS = 500


def check_pdf(path: str | Path) -> dict:
    """
    Returns {ok, size_bytes, pages, text_length, preview, error}.
    ok is False when the file would be rejected or cannot be parsed; an image-only PDF is ok
    but reports text_length 0 (uploads of it fall back to default metadata).
    """
    file_path = Path(path)
    report = {"ok": False, "size_bytes": 0, "pages": 0, "text_length": 0, "preview": "", "error": None}
    if not file_path.is_file():
        report["error"] = f"File not found: {file_path}"
        return report

    data = file_path.read_bytes()
    report["size_bytes"] = len(data)
    try:
        validate_pdf_upload(data)
    except UploadValidationError as e:
        report["error"] = e.message
        return report

    try:
        report["pages"] = count_pages(data)
        text = extract_text_from_pdf(data)
    except Exception as e:
        report["error"] = f"PDF parsing failed: {e}"
        return report

    report["text_length"] = len(text.strip())
    report["preview"] = text.strip()[:_PREVIEW_CHARS]
    report["ok"] = True
    return report


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: python -m backend.app.tasks.check_pdf <pdf-file-path>")
        return 1
    setup_logging()
    report = check_pdf(args[0])
    if not report["ok"]:
        logger.error("PDF CHECK FAILED path=%s error=%s", args[0], report["error"])
        return 1
    logger.info(
        "PDF CHECK PASSED path=%s size_kb=%.2f pages=%d text_length=%d",
        args[0],
        report["size_bytes"] / 1024,
        report["pages"],
        report["text_length"],
    )
    if not report["text_length"]:
        logger.warning("PDF contains no extractable text (image-only or protected); parsing will fall back to defaults")
    return 0


if __name__ == "__main__":
    sys.exit(main())
