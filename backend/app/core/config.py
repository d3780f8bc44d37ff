"""
Application configuration settings.
Loads from .env file first (overrides shell env for local dev), then pydantic reads from environment.
Production: set env vars in the platform (Docker, K8s, etc.); .env is optional.

All backend-related configs and constants are centralized here.
"""
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env path: backend/.env (absolute path, works regardless of cwd)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = (_BASE_DIR / ".env").resolve()

# Load .env into environment BEFORE pydantic reads. override=True ensures .env
# values override any shell env (e.g. stale AWS_ACCESS_KEY_ID from elsewhere).
# When .env doesn't exist (prod), this is a no-op; platform env vars are used.
if _ENV_FILE.exists():
    load_dotenv(_ENV_FILE, override=True)


# Company names: words kept upper-case regardless of input casing
DEFAULT_COMPANY_ABBREVIATIONS: list[str] = [
    "AI", "AMD", "AT&T", "AWS", "BCG", "BP", "CVS", "EU", "EY", "GE", "GM", "HP",
    "HSBC", "IBM", "IT", "JP", "KPMG", "LLC", "LLP", "MIT", "NASA", "NBA", "NCR",
    "NFL", "NSA", "NYC", "PNC", "SAP", "UBS", "UK", "UN", "UPS", "US", "USA",
]

# Company names: words lower-cased unless they start the name
DEFAULT_COMPANY_MINOR_WORDS: list[str] = [
    "a", "an", "and", "as", "at", "but", "by", "for", "from", "in", "nor",
    "of", "on", "or", "so", "the", "to", "via", "with", "yet",
]


class Settings(BaseSettings):
    """Application settings. Source: env vars (after dotenv load)."""

    # App
    app_name: str = "Resume Bank"
    app_version: str = "1.0.0"
    port: int = 8001

    # Database
    database_url: str = "sqlite:///./resume_bank.db"

    # Auth
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    admin_password: str = ""

    # Member identity provider (Supabase-issued JWTs)
    supabase_jwt_secret: str = ""
    supabase_jwt_audience: str = "authenticated"

    # Upload & storage
    upload_dir: str = "uploads/resumes"
    upload_limit_mb: int = 10

    # Redis
    redis_url: str = ""
    filters_cache_ttl: int = 300

    # AWS S3
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = "us-east-1"
    aws_bucket_name: str = "resume-bank"
    s3_presigned_url_expiration: int = 3600
    s3_key_prefix: str = "resumes"

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Metadata normalization
    max_field_length: int = 255
    max_tag_entries: int = 100
    tag_upsert_attempts: int = 3
    company_abbreviations: list[str] = DEFAULT_COMPANY_ABBREVIATIONS
    company_minor_words: list[str] = DEFAULT_COMPANY_MINOR_WORDS

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def max_upload_bytes(self) -> int:
        return self.upload_limit_mb * 1024 * 1024

    @property
    def s3_enabled(self) -> bool:
        return bool(self.aws_access_key_id and self.aws_secret_access_key)


settings = Settings()


# --- Constants (non-env, business config) ---

# Placeholder for required fields that are missing or malformed
UNSPECIFIED: str = "Unspecified"

# Prefix of the synthesized name when neither override nor parser yields one
UNKNOWN_RESUME_PREFIX: str = "Unknown_Resume_"

PDF_SIGNATURE: bytes = b"%PDF"
PDF_CONTENT_TYPE: str = "application/pdf"
ELLIPSIS: str = "..."

ADMIN_ROLE: str = "admin"
MEMBER_ROLE: str = "member"
ADMIN_ID: str = "admin"

FILTERS_CACHE_KEY: str = "resume_filters"
