from backend.app.models.resume import Resume, resume_companies, resume_keywords
from backend.app.models.company import Company
from backend.app.models.keyword import Keyword
