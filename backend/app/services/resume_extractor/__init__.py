"""
Resume extraction module - LangGraph pipeline over pdfplumber text, LLM or heuristics.
"""
from .extractor import ResumeExtractionError, extract_resume_metadata
from .pdf_utils import count_pages, extract_text_from_pdf

__all__ = [
    "ResumeExtractionError",
    "count_pages",
    "extract_resume_metadata",
    "extract_text_from_pdf",
]
