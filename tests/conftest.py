"""Shared fixtures."""

from typing import List

import pytest

from loregen.common.openai import StreamError, StreamEvent
from tests.fakes import FakeClient


@pytest.fixture
def fake_client_factory():
    def _make(responses: List[object], fragment_size: int = 7) -> FakeClient:
        return FakeClient(responses, fragment_size=fragment_size)
    return _make


@pytest.fixture
def broken_stream() -> List[object]:
    """Two fragments, then a transport failure."""
    return [
        StreamEvent("content", '{"names": ["Ana", '),
        StreamEvent("content", '"Bo'),
        StreamError("connection reset"),
    ]
