"""
Document status updater.

Records document state changes that happen outside the ingestion unit of
work with single raw UPDATE statements: FAILED with an error message, and
the ``vector_processed`` flip once every chunk has been embedded.

Each call commits on success and rolls back on failure, so it can be used
right after another unit of work has been rolled back.

Dependencies: sqlalchemy
System role: Document state transitions for ingestion and the vectorization worker
"""

import logging
from uuid import UUID

from sqlalchemy import Uuid, bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.types import DateTime

from meeting_indexer.boundary.db.base import utcnow
from meeting_indexer.boundary.db.models import DocumentStatus
from meeting_indexer.observability.log_utils import truncate_error

logger = logging.getLogger(__name__)


def _document_update(set_clause: str):
    return text(
        f"""
        UPDATE documents
        SET {set_clause}, updated_at = :now
        WHERE id = :doc_id
        RETURNING id
        """
    ).bindparams(
        bindparam("doc_id", type_=Uuid(as_uuid=True)),
        bindparam("now", type_=DateTime(timezone=True)),
    )


class DocumentStatusUpdater:
    """Update document status during ingestion and vectorization."""

    def __init__(self, db_session: AsyncSession) -> None:
        """
        Initialize with database session.

        Args:
            db_session: AsyncSession bound to the documents table
        """
        self.db = db_session

    async def _execute(self, method: str, set_clause: str, document_id: UUID, **params) -> None:
        try:
            result = await self.db.execute(
                _document_update(set_clause),
                {"doc_id": document_id, "now": utcnow(), **params},
            )
            row = result.fetchone()

            if not row:
                raise ValueError(f"Document {document_id} not found")

            await self.db.commit()

        except Exception as e:
            logger.error(f"{__name__}:{method} - {type(e).__name__}: {e}")
            await self.db.rollback()
            raise

    async def mark_failed(self, document_id: UUID, error_message: str) -> None:
        """
        Mark document as FAILED with error details.

        Args:
            document_id: Document UUID
            error_message: Human-readable error description

        Raises:
            ValueError: Document not found
        """
        truncated_error = truncate_error(error_message)
        await self._execute(
            "mark_failed",
            "status = :status, error_message = :error_msg",
            document_id,
            status=DocumentStatus.FAILED.value,
            error_msg=truncated_error,
        )
        logger.info(
            f"{__name__}:mark_failed - Document marked as FAILED",
            extra={"document_id": str(document_id), "error_message": truncated_error},
        )

    async def mark_embedding_complete(self, document_id: UUID) -> None:
        """
        Flag every chunk of the document as embedded.

        Args:
            document_id: Document UUID

        Raises:
            ValueError: Document not found
        """
        await self._execute(
            "mark_embedding_complete",
            "vector_processed = :flag, embedded_at = :now",
            document_id,
            flag=True,
        )
        logger.info(
            f"{__name__}:mark_embedding_complete - Document vectors complete",
            extra={"document_id": str(document_id)},
        )
