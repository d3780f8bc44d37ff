"""
Rule-based resume field extraction - used when no LLM is configured.
Works on plain text produced by pdfplumber.
"""
import re
from typing import List, Optional

SECTION_HEADERS = [
    "experience", "work experience", "professional experience", "work history", "employment",
    "education", "academics", "skills", "technical skills", "technologies", "tools",
    "projects", "summary", "objective", "leadership", "activities", "involvement",
    "certifications", "awards", "honors", "references", "contact", "coursework",
    "relevant coursework", "interests",
]

EXPERIENCE_SECTIONS = [
    "experience", "work experience", "professional experience", "work history", "employment",
]
EDUCATION_SECTIONS = ["education", "academics"]
SKILL_SECTIONS = ["skills", "technical skills", "technologies", "tools"]

_YEAR = re.compile(r"\b(19|20)\d{2}\b")
_GRAD_PHRASE = re.compile(
    r"(?:class of|expected|anticipated|graduat(?:ion|ing|e|ed)|grad\.?)\D{0,25}?((?:19|20)\d{2})",
    re.IGNORECASE,
)
_MAJOR_PHRASE = re.compile(
    r"\b(?:bachelor(?:'s)?|master(?:'s)?|b\.?\s?s\.?|b\.?\s?a\.?|m\.?\s?s\.?|b\.?\s?eng\.?|ph\.?\s?d\.?)"
    r"(?:\s+of\s+(?:science|arts|engineering|business administration))?"
    r"\s*(?:in|,|:|-)\s*([A-Z][A-Za-z&/ ]{2,60})",
    re.IGNORECASE,
)
_DATE_RANGE = re.compile(
    r"((?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s*\d{4}|\d{1,2}/\d{2,4}|(?:19|20)\d{2})"
    r"\s*[-–—to]+\s*"
    r"(present|current|(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s*\d{4}|\d{1,2}/\d{2,4}|(?:19|20)\d{2})",
    re.IGNORECASE,
)


def _is_header(line: str) -> bool:
    return line.strip().rstrip(":").lower() in SECTION_HEADERS


def extract_section(text: str, section_names: list[str]) -> str:
    """Extract content under a section header until the next known header or end."""
    wanted = {s.lower() for s in section_names}
    content_lines = []
    in_section = False
    for line in text.split("\n"):
        stripped = line.strip()
        header = stripped.rstrip(":").lower()
        if header in wanted:
            in_section = True
            continue
        if in_section:
            if _is_header(stripped):
                break
            if stripped:
                content_lines.append(stripped)
    return "\n".join(content_lines)


def extract_name(text: str) -> Optional[str]:
    """First short, capitalized, contact-free line near the top."""
    lines = [l.strip() for l in text.split("\n") if l.strip()][:5]
    for line in lines:
        if "@" in line or re.search(r"\d{3}[-.\s]\d{3}", line) or _is_header(line):
            continue
        parts = line.split()
        if 1 < len(parts) <= 4 and all(p[0].isupper() for p in parts if p[0].isalpha()):
            return " ".join(parts)
    return None


def extract_graduation_year(text: str) -> Optional[str]:
    match = _GRAD_PHRASE.search(text)
    if match:
        return match.group(1)
    education = extract_section(text, EDUCATION_SECTIONS)
    years = [m.group(0) for m in _YEAR.finditer(education)]
    return max(years) if years else None


def extract_major(text: str) -> Optional[str]:
    education = extract_section(text, EDUCATION_SECTIONS) or text
    match = _MAJOR_PHRASE.search(education)
    if not match:
        return None
    major = re.split(r"\s{2,}|,|\||\d", match.group(1))[0].strip()
    return major or None


def extract_companies(text: str) -> List[str]:
    """Company names from experience headings: 'Title at Company' or 'Company | Title | Dates'."""
    section = extract_section(text, EXPERIENCE_SECTIONS)
    companies = []
    for line in section.split("\n"):
        if line.startswith(("•", "-", "*")):
            continue
        heading = _DATE_RANGE.sub("", line).strip(" |,-–—")
        if not heading:
            continue
        at_idx = heading.lower().find(" at ")
        if at_idx > 0:
            companies.append(heading[at_idx + 4:].split("|")[0].strip(" ,"))
        elif "|" in heading and _DATE_RANGE.search(line):
            companies.append(heading.split("|")[0].strip())
    return [c for c in companies if 1 < len(c) <= 80]


def extract_keywords(text: str) -> List[str]:
    """Tokens from the skills section, with 'Languages:'-style labels stripped."""
    section = extract_section(text, SKILL_SECTIONS)
    if not section:
        return []
    keywords = []
    for line in section.split("\n"):
        if ":" in line:
            line = line.split(":", 1)[1]
        for token in re.split(r"[,;•|/]", line):
            token = token.strip()
            if 1 < len(token) <= 50 and not re.fullmatch(r"\d+", token):
                keywords.append(token)
    return keywords


def extract_fields(text: str) -> dict:
    """Run every heuristic; keys match ExtractedMetadata."""
    return {
        "name": extract_name(text),
        "major": extract_major(text),
        "graduationYear": extract_graduation_year(text),
        "companies": extract_companies(text),
        "keywords": extract_keywords(text),
    }
