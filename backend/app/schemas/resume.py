"""
Resume Pydantic schemas - camelCase fields to match the web client payloads
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ExtractedMetadata(BaseModel):
    """Best-effort parser output. Any field may be absent."""
    name: Optional[str] = None
    major: Optional[str] = None
    graduationYear: Optional[str] = None
    companies: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)


class ResumeOverrides(BaseModel):
    """Explicit form fields supplied with an upload. Tag fields are comma-separated."""
    name: Optional[str] = None
    major: Optional[str] = None
    graduationYear: Optional[str] = None
    companies: Optional[str] = None
    keywords: Optional[str] = None


class ResumeUpdateIn(ResumeOverrides):
    """PUT /api/resumes/{id} body. Same shape as upload overrides; absent fields are left unchanged."""


class ResumeOut(BaseModel):
    id: int
    name: str
    major: str
    graduationYear: str
    pdfUrl: str
    companies: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)


class ResumeUpdateOut(ResumeOut):
    """PUT response. warnings lists tags dropped by the per-list cap."""
    warnings: List[str] = Field(default_factory=list)


class ResumeDetailOut(ResumeOut):
    uploadedBy: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class ResumeSearchOut(BaseModel):
    count: int
    resumes: List[ResumeOut] = Field(default_factory=list)


class ResumeFiltersOut(BaseModel):
    majors: List[str] = Field(default_factory=list)
    graduationYears: List[str] = Field(default_factory=list)
    companies: List[str] = Field(default_factory=list)


class UploadResultOut(BaseModel):
    """Successful upload. parsingWarning is only present when the parser fell back."""
    id: int
    name: str
    major: str
    graduationYear: str
    artifactUrl: str
    parsingWarning: Optional[str] = None
    companies: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class ErrorOut(BaseModel):
    error: bool = True
    message: str
    details: Optional[dict] = None
