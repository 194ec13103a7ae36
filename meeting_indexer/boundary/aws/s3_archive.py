"""
S3 archive sink for chunking results.

Writes a JSON copy of each processed document to S3 as a write-only
backup. Archive failures never propagate: ingestion has already
committed by the time the archive runs.

Dependencies: boto3, tenacity
System role: Best-effort archival of formatted pipeline output
"""

import json
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from meeting_indexer.configs import S3ArchiveSettings
from meeting_indexer.core.exceptions import ArchiveError
from meeting_indexer.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class S3ArchiveSink:
    """Upload chunking results as JSON objects."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        prefix: str = "chunking-results",
        client: Any | None = None,
    ) -> None:
        """
        Initialize S3 archive sink.

        Args:
            bucket: Target bucket name
            region: AWS region for the bucket
            prefix: Key prefix for archived objects
            client: Preconfigured boto3 S3 client (created if None)
        """
        self._bucket = bucket
        self._prefix = prefix.strip("/")
        self._s3_client = client or boto3.client("s3", region_name=region)

    @classmethod
    def from_settings(cls, settings: S3ArchiveSettings) -> "S3ArchiveSink | None":
        """Build a sink when archiving is enabled, else None."""
        if not settings.enabled:
            return None
        return cls(bucket=settings.bucket, region=settings.region, prefix=settings.prefix)

    def key_for(self, document_id: str) -> str:
        return f"{self._prefix}/{document_id}.json" if self._prefix else f"{document_id}.json"

    @retry(
        retry=retry_if_exception_type((ClientError, BotoCoreError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential_jitter(initial=1, max=10, jitter=1),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:_put_with_retry - Retry {retry_state.attempt_number}/3 after S3 error"
        ),
        reraise=True,
    )
    def _put_with_retry(self, key: str, body: bytes) -> None:
        self._s3_client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=body,
            ContentType="application/json",
        )

    def upload(self, document_id: str, payload: dict[str, Any]) -> str:
        """
        Upload one document's formatted result.

        Args:
            document_id: Document identifier used in the object key
            payload: JSON-serializable result

        Returns:
            str: Object key written

        Raises:
            ArchiveError: Serialization failed or S3 rejected the object after retries
        """
        key = self.key_for(document_id)
        try:
            body = json.dumps(payload, default=str).encode("utf-8")
            self._put_with_retry(key, body)
        except (ClientError, BotoCoreError, TypeError, ValueError) as e:
            raise ArchiveError(
                f"Archive upload failed: {type(e).__name__}: {e}",
                key=key,
                details={"bucket": self._bucket},
            ) from e
        return key

    def archive(self, document_id: str, payload: dict[str, Any]) -> bool:
        """
        Best-effort wrapper around ``upload``; failures are logged, never raised.

        Returns:
            bool: True when the object was written
        """
        try:
            key = self.upload(document_id, payload)
        except ArchiveError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:archive - Archive skipped",
                e,
                document_id=document_id,
            )
            return False

        logger.info(
            f"{__name__}:archive - Result archived",
            extra={"document_id": document_id, "bucket": self._bucket, "key": key},
        )
        return True
