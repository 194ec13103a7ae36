"""Unit tests for processing task payload parsing."""

import pydantic
import pytest

from meeting_indexer.models import TaskType, VectorizePayload, parse_task_payload


def test_parse_vectorize_payload():
    payload = parse_task_payload(
        TaskType.VECTORIZE,
        {"task_type": "vectorize", "document_id": "d-1", "chunk_ids": ["a", "b"]},
    )

    assert isinstance(payload, VectorizePayload)
    assert payload.chunk_ids == ["a", "b"]
    assert payload.force is False


def test_parse_accepts_stored_string_type():
    payload = parse_task_payload("vectorize", {"document_id": "d-1"})

    assert payload.chunk_ids is None


def test_unknown_task_type_rejected():
    with pytest.raises(ValueError):
        parse_task_payload("summarize", {"document_id": "d-1"})


def test_malformed_payload_rejected():
    with pytest.raises(pydantic.ValidationError):
        parse_task_payload(TaskType.VECTORIZE, {"chunk_ids": ["a"]})
