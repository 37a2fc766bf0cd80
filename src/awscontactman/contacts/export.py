"""Export of List results to S3."""

import json
import logging
from datetime import datetime
from typing import Optional

from .classifier import ErrorKind
from .exceptions import S3AccessDeniedError, S3BucketNotFoundError, S3UploadError
from .models import BatchResult
from .retry import RetryExecutor

logger = logging.getLogger(__name__)

EXPORT_FILENAME_PREFIX = "alternate-contact-list"
EXPORT_TIMESTAMP_FORMAT = "%d-%m-%Y_%H-%M-%S"


def normalize_prefix(prefix: Optional[str]) -> str:
    """Strip surrounding whitespace and make a non-empty prefix end with '/'."""
    prefix = (prefix or "").strip().lstrip("/")
    if prefix and not prefix.endswith("/"):
        prefix += "/"
    return prefix


def build_export_key(prefix: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """
    Build the object key for an exported List result.

    Args:
        prefix: Folder prefix inside the bucket
        now: Timestamp to embed (defaults to the local time)

    Returns:
        Key such as ``reports/alternate-contact-list_31-01-2025_14-05-09.json``
    """
    timestamp = (now or datetime.now()).strftime(EXPORT_TIMESTAMP_FORMAT)
    return f"{normalize_prefix(prefix)}{EXPORT_FILENAME_PREFIX}_{timestamp}.json"


def render_result_document(result: BatchResult) -> dict:
    """Wrap the contact map in the exported document shape."""
    return {"AlternateContact": result.to_contact_map()}


async def upload_result(
    s3_client,
    result: BatchResult,
    bucket: str,
    prefix: Optional[str] = None,
    executor: Optional[RetryExecutor] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Upload a List result as JSON.

    Args:
        s3_client: S3ClientWrapper
        result: Result of a List batch
        bucket: Destination bucket
        prefix: Folder prefix inside the bucket
        executor: Retry executor for the upload
        now: Timestamp used in the key

    Returns:
        The key that was written

    Raises:
        S3BucketNotFoundError: If the bucket does not exist
        S3AccessDeniedError: If the bucket denies access
        S3UploadError: For any other failure
    """
    executor = executor or RetryExecutor()
    key = build_export_key(prefix, now)
    body = json.dumps(render_result_document(result)).encode("utf-8")

    try:
        await executor.execute("put_object", lambda: s3_client.put_object(bucket, key, body))
    except Exception as e:
        classification = executor.classifier.classify(e)
        if classification.kind == ErrorKind.NOT_FOUND:
            raise S3BucketNotFoundError(bucket) from e
        if classification.kind == ErrorKind.ACCESS_DENIED:
            raise S3AccessDeniedError(bucket) from e
        raise S3UploadError(bucket, key, classification.message) from e

    logger.info(f"Uploaded alternate contact list to s3://{bucket}/{key}")
    return key
