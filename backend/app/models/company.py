"""
Company - deduplicated, case-normalized company vocabulary shared across resumes
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from backend.app.db.base import Base
from backend.app.models.resume import resume_companies


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    resumes = relationship("Resume", secondary=resume_companies, back_populates="companies")
