"""Structure detection and segmentation strategies."""

from meeting_indexer.core.segmentation.segmentation_engine import (
    SegmentationEngine,
    generate_chunk_id,
)
from meeting_indexer.core.segmentation.structure_detector import StructureDetector
from meeting_indexer.core.segmentation.text_stats import estimate_tokens

__all__ = [
    "SegmentationEngine",
    "StructureDetector",
    "estimate_tokens",
    "generate_chunk_id",
]
