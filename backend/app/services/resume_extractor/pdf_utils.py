"""
PDF utilities for resume extraction - text extraction from in-memory uploads.
"""
import io
from pathlib import Path

import pdfplumber


def _open(source: bytes | str | Path):
    if isinstance(source, (bytes, bytearray)):
        return pdfplumber.open(io.BytesIO(source))
    return pdfplumber.open(source)


def extract_text_from_pdf(source: bytes | str | Path) -> str:
    """Extract raw text from PDF bytes or a PDF path using pdfplumber."""
    text_parts = []
    with _open(source) as pdf:
        for page in pdf.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
    return "\n".join(text_parts)


def count_pages(source: bytes | str | Path) -> int:
    with _open(source) as pdf:
        return len(pdf.pages)
