"""
Document CRUD operations.

Provides Create, Read, Update operations for DocumentModel with
document-specific writes for pipeline aggregates.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.models
System role: Document persistence operations
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from meeting_indexer.boundary.db.CRUD.base_crud import BaseCRUD
from meeting_indexer.boundary.db.models import DocumentModel, DocumentStatus
from meeting_indexer.models import ChunkingResult


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with the aggregate write that follows a successful
    pipeline run.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def store_aggregates(
        self,
        session: AsyncSession,
        id: UUID,
        result: ChunkingResult,
    ) -> DocumentModel | None:
        """
        Write pipeline aggregates and mark the document COMPLETED.

        Args:
            session: Async database session
            id: Document UUID
            result: Pipeline output for the document

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        metadata = result.metadata
        entity_index = {
            entity_type.value: [entity.model_dump(mode="json") for entity in entities]
            for entity_type, entities in metadata.entities.items()
            if entities
        }
        return await self.update_by_id(
            session,
            id,
            status=DocumentStatus.COMPLETED,
            strategy=result.strategy.value,
            chunk_count=metadata.chunk_count,
            total_tokens=metadata.total_tokens,
            topics=metadata.topics,
            speakers=metadata.speakers or [],
            entity_index=entity_index,
            summary=metadata.summary,
            vector_processed=False,
            error_message=None,
        )


document_crud = DocumentCRUD()
