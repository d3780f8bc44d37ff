"""Tests for FieldNormalizer: defaults, truncation, tag parsing, capping, dedup and company casing"""
import pytest

from backend.app.schemas.resume import ExtractedMetadata, ResumeOverrides
from backend.app.services.resume_upload import FieldNormalizer
from backend.app.services.resume_upload.normalizer import dedupe, parse_comma_separated


@pytest.fixture
def normalizer():
    return FieldNormalizer(max_length=255, max_tags=100)


def test_missing_fields_get_defaults(normalizer):
    result = normalizer.normalize(ResumeOverrides(), ExtractedMetadata(), now_ms=1700000000000)
    assert result.name == "Unknown_Resume_1700000000000"
    assert result.major == "Unspecified"
    assert result.graduation_year == "Unspecified"
    assert result.companies == []
    assert result.keywords == []
    assert result.warnings == []


def test_blank_values_treated_as_missing(normalizer):
    result = normalizer.normalize(
        ResumeOverrides(name="   ", major=""),
        ExtractedMetadata(name="Jane Doe", major="  "),
    )
    assert result.name == "Jane Doe"
    assert result.major == "Unspecified"


def test_override_beats_extracted(normalizer):
    result = normalizer.normalize(
        ResumeOverrides(name="Janet Doe", graduationYear="2025", companies="Initech"),
        ExtractedMetadata(name="Jane Doe", major="Math", graduationYear="2024", companies=["Acme"]),
    )
    assert result.name == "Janet Doe"
    assert result.major == "Math"
    assert result.graduation_year == "2025"
    assert result.companies == ["Initech"]


def test_name_truncated_with_ellipsis(normalizer):
    name = normalizer.name("N" * 300)
    assert len(name) == 255
    assert name == "N" * 252 + "..."


def test_value_at_limit_unchanged(normalizer):
    assert normalizer.major("M" * 255) == "M" * 255


def test_long_graduation_year_replaced_not_truncated(normalizer):
    assert normalizer.graduation_year("2" * 256) == "Unspecified"
    assert normalizer.graduation_year("Spring 2024") == "Spring 2024"


def test_companies_deduplicated_case_insensitively(normalizer):
    warnings = []
    companies = normalizer.companies("Acme Corp, acme corp, Other Inc", None, warnings)
    assert companies == ["Acme Corp", "Other Inc"]
    assert warnings == []


def test_empty_entries_dropped(normalizer):
    assert normalizer.keywords(" Python ,, ,SQL,", None, []) == ["Python", "SQL"]


def test_keywords_keep_first_spelling(normalizer):
    assert normalizer.keywords("Python, python, PYTHON, Go", None, []) == ["Python", "Go"]


def test_tag_list_capped_before_dedup(normalizer):
    warnings = []
    raw = ",".join(f"skill{i}" for i in range(150))
    keywords = normalizer.keywords(raw, None, warnings)
    assert len(keywords) == 100
    assert keywords[-1] == "skill99"
    assert warnings == ["Only the first 100 keywords were kept (150 supplied)."]


def test_long_tag_truncated(normalizer):
    (keyword,) = normalizer.keywords("k" * 400, None, [])
    assert len(keyword) == 255
    assert keyword.endswith("...")


def test_extracted_list_used_when_no_override(normalizer):
    assert normalizer.keywords(None, ["Docker", "docker"], []) == ["Docker"]


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("acme corp", "Acme Corp"),
        ("IBM", "IBM"),
        ("ibm research", "IBM Research"),
        ("bank of america", "Bank of America"),
        ("the home depot", "The Home Depot"),
        ("AT&T", "AT&T"),
        ("coca-cola", "Coca-Cola"),
        ("jp morgan and co.", "JP Morgan and Co."),
    ],
)
def test_company_casing(normalizer, raw, expected):
    assert normalizer.company_name(raw) == expected


def test_custom_abbreviation_and_minor_word_lists():
    normalizer = FieldNormalizer(abbreviations=["XYZ"], minor_words=["von"])
    assert normalizer.company_name("xyz labs von braun") == "XYZ Labs von Braun"
    assert normalizer.company_name("ibm") == "Ibm"


def test_parse_comma_separated():
    assert parse_comma_separated(None) is None
    assert parse_comma_separated("   ") is None
    assert parse_comma_separated("a,b") == ["a", "b"]


def test_dedupe_preserves_order():
    assert dedupe(["b", "A", "a", "B", "c"]) == ["b", "A", "c"]
