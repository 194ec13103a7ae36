"""
Similarity search result model.

Dependencies: pydantic
System role: Return type for SearchService.search()
"""

from datetime import datetime

from pydantic import BaseModel


class SearchHit(BaseModel):
    """One chunk ranked by cosine similarity to a query."""

    chunk_id: str
    document_id: str
    title: str | None = None
    occurred_at: datetime | None = None
    preview: str
    similarity: float
    relevance_score: float
