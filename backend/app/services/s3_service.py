"""
S3 client helpers for resume PDFs.
Keys look like {s3_key_prefix}/{name}_{millis}.pdf and are stored on the resume row;
the public object URL is derived from bucket, region and key.
"""
import boto3
from botocore.exceptions import BotoCoreError, ClientError

from backend.app.core.config import settings
from backend.app.core.logging_config import get_logger

logger = get_logger("services.s3")

_S3_ERRORS = (ClientError, BotoCoreError)


def _get_s3_client():
    if not settings.s3_enabled:
        raise ValueError("AWS credentials not configured (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY)")
    return boto3.client(
        "s3",
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.aws_region,
    )


def _describe(e: Exception) -> str:
    """'Code: Message' for S3 rejections, str(e) for transport errors."""
    if isinstance(e, ClientError):
        error = e.response.get("Error", {})
        return f"{error.get('Code', '')}: {error.get('Message', str(e))}"
    return str(e)


def object_url(key: str) -> str:
    return f"https://{settings.aws_bucket_name}.s3.{settings.aws_region}.amazonaws.com/{key}"


def upload_file_to_s3(file_buffer: bytes, key: str, mime_type: str = "application/octet-stream") -> str:
    """
    Put bytes under key and return the object URL.

    Raises:
        RuntimeError: S3 rejected the put or could not be reached
    """
    bucket = settings.aws_bucket_name
    logger.info("S3 upload started bucket=%s key=%s size_bytes=%d", bucket, key, len(file_buffer))
    try:
        _get_s3_client().put_object(Bucket=bucket, Key=key, Body=file_buffer, ContentType=mime_type)
    except _S3_ERRORS as e:
        reason = _describe(e)
        logger.error("S3 upload failed bucket=%s region=%s key=%s error=%s", bucket, settings.aws_region, key, reason)
        raise RuntimeError(f"S3 upload failed - {reason}") from e

    url = object_url(key)
    logger.info("S3 upload success bucket=%s key=%s", bucket, key)
    return url


def generate_presigned_url(key: str, expiration: int | None = None) -> str:
    """Temporary GET URL for key, or "" when S3 is not configured or signing fails."""
    if not settings.s3_enabled:
        return ""
    try:
        url = _get_s3_client().generate_presigned_url(
            "get_object",
            Params={"Bucket": settings.aws_bucket_name, "Key": key},
            ExpiresIn=expiration if expiration is not None else settings.s3_presigned_url_expiration,
        )
    except _S3_ERRORS as e:
        logger.warning("Presigned URL generation failed key=%s error=%s", key, _describe(e))
        return ""
    return url or ""


def delete_file_from_s3(key: str) -> bool:
    """False when S3 is not configured or the delete failed; a missing object counts as deleted."""
    if not settings.s3_enabled:
        return False
    try:
        _get_s3_client().delete_object(Bucket=settings.aws_bucket_name, Key=key)
    except _S3_ERRORS as e:
        logger.warning("S3 delete failed key=%s error=%s", key, _describe(e))
        return False
    logger.info("S3 delete success bucket=%s key=%s", settings.aws_bucket_name, key)
    return True
