"""
Artifact stores - where uploaded resume PDFs live.
S3 when AWS credentials are configured, otherwise the local upload directory (served by main.py).
"""
from pathlib import Path
from typing import Protocol

from backend.app.core.config import settings
from backend.app.core.logging_config import get_logger
from backend.app.services.s3_service import (
    delete_file_from_s3,
    generate_presigned_url,
    upload_file_to_s3,
)

logger = get_logger("services.storage")


class ArtifactStore(Protocol):
    def put(self, data: bytes, key: str, content_type: str) -> str:
        """Store bytes under key and return a URL/handle. Raises on failure."""

    def delete(self, key: str) -> bool:
        """Remove the object. Never raises; returns False when deletion failed."""

    def signed_url(self, key: str) -> str | None:
        """Temporary download URL, or None when the store serves files itself."""


class S3ArtifactStore:
    def put(self, data: bytes, key: str, content_type: str) -> str:
        return upload_file_to_s3(data, key, content_type)

    def delete(self, key: str) -> bool:
        return delete_file_from_s3(key)

    def signed_url(self, key: str) -> str | None:
        return generate_presigned_url(key) or None


class LocalArtifactStore:
    """Stores files under upload_dir, flattening the key to a single file name."""

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root or settings.upload_dir)

    def path_for(self, key: str) -> Path:
        return self.root / Path(key).name

    def put(self, data: bytes, key: str, content_type: str) -> str:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        path.write_bytes(data)
        logger.info("Stored resume locally key=%s path=%s size_bytes=%d", key, path, len(data))
        return f"/{settings.upload_dir.strip('/')}/{path.name}"

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to delete local resume key=%s path=%s error=%s", key, path, e)
            return False
        logger.info("Deleted local resume key=%s path=%s", key, path)
        return True

    def signed_url(self, key: str) -> str | None:
        return None


def get_artifact_store() -> ArtifactStore:
    """Pick the store for the current configuration."""
    if settings.s3_enabled:
        return S3ArtifactStore()
    return LocalArtifactStore()
