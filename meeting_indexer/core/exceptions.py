"""
Exception hierarchy for the meeting indexer.

Provides layered exception structure for domain-specific errors.
All exceptions carry a details dict for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class MeetingIndexerError(Exception):
    """Base exception for all meeting indexer errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(MeetingIndexerError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(MeetingIndexerError):
    """Raised at startup when configuration is missing or inconsistent.

    Permanent: callers must fail fast instead of retrying.
    """

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if setting:
            details["setting"] = setting
        super().__init__(message, details)


class DocumentProcessingError(MeetingIndexerError):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class EntityExtractionError(MeetingIndexerError):
    """Raised when one entity type's patterns cannot be applied."""

    def __init__(
        self,
        message: str,
        entity_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if entity_type:
            details["entity_type"] = entity_type
        super().__init__(message, details)


class EmbeddingError(DocumentProcessingError):
    """Raised when embedding generation fails."""

    pass


class VectorStoreError(MeetingIndexerError):
    """Raised when vector persistence or search fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (persist, search, decode)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class TaskNotFoundError(MeetingIndexerError):
    """Raised when a processing task cannot be found."""

    def __init__(self, task_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["task_id"] = task_id
        super().__init__(f"Processing task not found: {task_id}", details)


class ArchiveError(MeetingIndexerError):
    """Raised when an archive upload fails (non-critical)."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if key:
            details["key"] = key
        super().__init__(message, details)
