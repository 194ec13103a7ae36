"""AWS adapters."""

from meeting_indexer.boundary.aws.s3_archive import S3ArchiveSink

__all__ = ["S3ArchiveSink"]
