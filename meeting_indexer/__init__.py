"""
Meeting indexer.

Turns meeting transcripts and business documents into content-addressed
chunks, typed entities, a chunk relationship graph and per-chunk embeddings.
"""

__version__ = "0.1.0"
