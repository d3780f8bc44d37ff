"""
Keyword - deduplicated skill/keyword vocabulary shared across resumes
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from backend.app.db.base import Base
from backend.app.models.resume import resume_keywords


class Keyword(Base):
    __tablename__ = "keywords"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    resumes = relationship("Resume", secondary=resume_keywords, back_populates="keywords")
