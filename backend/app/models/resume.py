"""
Resume - one uploaded PDF plus its extracted metadata. Soft-deleted via is_active.
"""
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from backend.app.db.base import Base

resume_companies = Table(
    "resume_companies",
    Base.metadata,
    Column("resume_id", Integer, ForeignKey("resumes.id", ondelete="CASCADE"), primary_key=True),
    Column("company_id", Integer, ForeignKey("companies.id", ondelete="CASCADE"), primary_key=True),
)

resume_keywords = Table(
    "resume_keywords",
    Base.metadata,
    Column("resume_id", Integer, ForeignKey("resumes.id", ondelete="CASCADE"), primary_key=True),
    Column("keyword_id", Integer, ForeignKey("keywords.id", ondelete="CASCADE"), primary_key=True),
)


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=False, index=True)
    major = Column(String(255), nullable=False, index=True)
    graduation_year = Column(String(255), nullable=False, index=True)

    pdf_url = Column(String(1024), nullable=False)
    s3_key = Column(String(512), nullable=False)  # storage key, used for deletion
    uploaded_by = Column(String(255), nullable=False)  # "admin" for the shared admin account

    is_active = Column(Boolean, nullable=False, default=True, index=True)
    artifact_deleted = Column(Boolean, nullable=False, default=False)  # set once the stored PDF is gone

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    companies = relationship(
        "Company",
        secondary=resume_companies,
        back_populates="resumes",
        order_by="Company.name",
    )
    keywords = relationship(
        "Keyword",
        secondary=resume_keywords,
        back_populates="resumes",
        order_by="Keyword.name",
    )
