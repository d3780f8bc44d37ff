"""
Field normalization - merges caller overrides with parser output and applies the storage rules:
sentinel defaults, length limits, tag list parsing/capping/dedup and company name casing.
Precedence for every field: explicit override > extracted value > default.
"""
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from backend.app.core.config import ELLIPSIS, UNKNOWN_RESUME_PREFIX, UNSPECIFIED, settings
from backend.app.schemas.resume import ExtractedMetadata, ResumeOverrides

_PUNCTUATION = ".,()"


def current_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class NormalizedResume:
    name: str
    major: str
    graduation_year: str
    companies: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _first_non_blank(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def parse_comma_separated(raw: Optional[str]) -> Optional[List[str]]:
    """'a, b,,c' -> ['a', 'b', '', 'c']; None when nothing was supplied."""
    if raw is None or not raw.strip():
        return None
    return raw.split(",")


def dedupe(values: Iterable[str], key: Callable[[str], str] = str.lower) -> List[str]:
    """Drop repeats by key, keeping the first spelling and the original order."""
    seen = set()
    out = []
    for value in values:
        k = key(value)
        if k in seen:
            continue
        seen.add(k)
        out.append(value)
    return out


class FieldNormalizer:
    def __init__(
        self,
        max_length: int | None = None,
        max_tags: int | None = None,
        abbreviations: Iterable[str] | None = None,
        minor_words: Iterable[str] | None = None,
    ):
        self.max_length = max_length or settings.max_field_length
        self.max_tags = max_tags or settings.max_tag_entries
        self.abbreviations = {
            a.upper() for a in (abbreviations if abbreviations is not None else settings.company_abbreviations)
        }
        self.minor_words = {
            w.lower() for w in (minor_words if minor_words is not None else settings.company_minor_words)
        }

    # --- scalar fields ---

    def truncate(self, value: str) -> str:
        if len(value) <= self.max_length:
            return value
        return value[: self.max_length - len(ELLIPSIS)] + ELLIPSIS

    def name(self, *candidates: Optional[str], now_ms: int | None = None) -> str:
        value = _first_non_blank(*candidates)
        if value is None:
            value = f"{UNKNOWN_RESUME_PREFIX}{now_ms if now_ms is not None else current_millis()}"
        return self.truncate(value)

    def major(self, *candidates: Optional[str]) -> str:
        return self.truncate(_first_non_blank(*candidates) or UNSPECIFIED)

    def graduation_year(self, *candidates: Optional[str]) -> str:
        value = _first_non_blank(*candidates) or UNSPECIFIED
        # a "year" this long is garbage, not something to abbreviate
        if len(value) > self.max_length:
            return UNSPECIFIED
        return value

    # --- tag lists ---

    def company_name(self, raw: str) -> str:
        """Title-case a company name, keeping abbreviations upper and minor words lower (except first)."""
        words = raw.split()
        out = []
        for i, word in enumerate(words):
            if i > 0 and word.lower() in self.minor_words:
                out.append(word.lower())
            else:
                out.append("-".join(self._format_part(part) for part in word.split("-")))
        return " ".join(out)

    def _format_part(self, part: str) -> str:
        if part.strip(_PUNCTUATION).upper() in self.abbreviations:
            return part.upper()
        return part[:1].upper() + part[1:].lower()

    def _clean(self, entries: Iterable[Optional[str]], kind: str, warnings: List[str]) -> List[str]:
        cleaned = [e.strip() for e in entries if e and e.strip()]
        if len(cleaned) > self.max_tags:
            warnings.append(
                f"Only the first {self.max_tags} {kind} were kept ({len(cleaned)} supplied)."
            )
            cleaned = cleaned[: self.max_tags]
        return [self.truncate(e) for e in cleaned]

    def companies(
        self, override: Optional[str], extracted: Iterable[str] | None, warnings: List[str]
    ) -> List[str]:
        entries = parse_comma_separated(override)
        if entries is None:
            entries = list(extracted or [])
        cleaned = self._clean(entries, "companies", warnings)
        return dedupe(self.company_name(c) for c in cleaned)

    def keywords(
        self, override: Optional[str], extracted: Iterable[str] | None, warnings: List[str]
    ) -> List[str]:
        entries = parse_comma_separated(override)
        if entries is None:
            entries = list(extracted or [])
        return dedupe(self._clean(entries, "keywords", warnings))

    # --- whole record ---

    def normalize(
        self,
        overrides: ResumeOverrides | None,
        extracted: ExtractedMetadata | None,
        now_ms: int | None = None,
    ) -> NormalizedResume:
        overrides = overrides or ResumeOverrides()
        extracted = extracted or ExtractedMetadata()
        warnings: List[str] = []
        return NormalizedResume(
            name=self.name(overrides.name, extracted.name, now_ms=now_ms),
            major=self.major(overrides.major, extracted.major),
            graduation_year=self.graduation_year(overrides.graduationYear, extracted.graduationYear),
            companies=self.companies(overrides.companies, extracted.companies, warnings),
            keywords=self.keywords(overrides.keywords, extracted.keywords, warnings),
            warnings=warnings,
        )
