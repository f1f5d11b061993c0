# ABOUTME: Shared fixtures for extraction tests
# ABOUTME: In-memory content store that answers point queries from a dict of path to bytes

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

import pytest

from voiceline_extractor.store.base import ResourceNotFound, ResourceReadError


class FakeStore:
    """Dict-backed store recording every path it was asked for."""

    def __init__(self, files: dict[str, bytes] | None = None, unreadable: Iterable[str] = ()):
        self.files = dict(files or {})
        self.unreadable = set(unreadable)
        self.fetched: list[str] = []

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.unreadable

    def fetch(self, path: str) -> bytes:
        self.fetched.append(path)
        if path in self.unreadable:
            raise ResourceReadError(path, "corrupt block table")
        try:
            return self.files[path]
        except KeyError:
            raise ResourceNotFound(path) from None


class SteppingClock:
    """Clock advancing one second per call so every sink gets its own log file."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 7, 2, 9, 30, 15, tzinfo=UTC)

    def __call__(self) -> datetime:
        now = self.current
        self.current += timedelta(seconds=1)
        return now


@pytest.fixture
def fake_store():
    return FakeStore


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()
