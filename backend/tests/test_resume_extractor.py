"""Tests for resume metadata extraction: heuristics and the LangGraph flow (text extraction patched)"""
from unittest.mock import patch

import pytest

from backend.app.services.resume_extractor import ResumeExtractionError, extract_resume_metadata
from backend.app.services.resume_extractor.heuristics import (
    extract_companies,
    extract_graduation_year,
    extract_keywords,
    extract_major,
    extract_name,
)

RESUME_TEXT = """Jane Doe
jane.doe@example.com | 555-123-4567

Education
University of Somewhere
Bachelor of Science in Computer Science
Expected May 2024

Experience
Software Engineering Intern at Acme Corp | Jun 2023 - Aug 2023
- Built data pipelines
Globex | Research Assistant | Jan 2022 - May 2023
- Analyzed results

Skills
Languages: Python, SQL, Java
Tools: Docker; Git
"""


def test_extract_name():
    assert extract_name(RESUME_TEXT) == "Jane Doe"


def test_extract_name_skips_contact_lines():
    assert extract_name("jane@example.com\nJohn Roe\n") == "John Roe"


def test_extract_graduation_year():
    assert extract_graduation_year(RESUME_TEXT) == "2024"


def test_graduation_year_from_education_section():
    text = "Education\nState University 2019 - 2023\nSkills\nExcel"
    assert extract_graduation_year(text) == "2023"


def test_extract_major():
    assert extract_major(RESUME_TEXT) == "Computer Science"


def test_extract_companies():
    assert extract_companies(RESUME_TEXT) == ["Acme Corp", "Globex"]


def test_extract_keywords():
    assert extract_keywords(RESUME_TEXT) == ["Python", "SQL", "Java", "Docker", "Git"]


def test_nothing_found():
    assert extract_name("") is None
    assert extract_major("no degree here") is None
    assert extract_companies("no sections") == []
    assert extract_keywords("no sections") == []


@patch("backend.app.services.resume_extractor.extractor.settings.openai_api_key", "")
@patch("backend.app.services.resume_extractor.extractor.extract_text_from_pdf", return_value=RESUME_TEXT)
def test_graph_uses_heuristics_without_llm_key(_mock_text):
    metadata = extract_resume_metadata(b"%PDF-1.4", "jane")
    assert metadata.name == "Jane Doe"
    assert metadata.major == "Computer Science"
    assert metadata.graduationYear == "2024"
    assert metadata.companies == ["Acme Corp", "Globex"]


@patch("backend.app.services.resume_extractor.extractor.extract_text_from_pdf", return_value="   ")
def test_graph_raises_when_pdf_has_no_text(_mock_text):
    with pytest.raises(ResumeExtractionError):
        extract_resume_metadata(b"%PDF-1.4", "scan")


@patch("backend.app.services.resume_extractor.extractor.extract_text_from_pdf", side_effect=ValueError("bad xref"))
def test_graph_raises_when_pdf_unreadable(_mock_text):
    with pytest.raises(ResumeExtractionError, match="bad xref"):
        extract_resume_metadata(b"%PDF-1.4", "broken")
