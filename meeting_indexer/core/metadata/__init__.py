"""Document-level metadata aggregation."""

from meeting_indexer.core.metadata.metadata_aggregator import MetadataAggregator, action_item_details

__all__ = ["MetadataAggregator", "action_item_details"]
