from __future__ import annotations

from typing import Optional

import pytest

from config.settings import get_settings
from services.errors import PersistenceError


class FakeStorage:
    """Dict-backed stand-in for the durable key/value store."""

    def __init__(self, items: Optional[dict[str, str]] = None) -> None:
        self.items: dict[str, str] = dict(items or {})
        self.writes: list[tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False

    def get_item(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise PersistenceError("read failed")
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceError("write failed")
        self.items[key] = value
        self.writes.append((key, value))

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):  # noqa: ANN001
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-anthropic-key")
    monkeypatch.setenv("GOOGLE_API_KEY", "test-google-key")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()
