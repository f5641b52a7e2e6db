"""Shared fixtures for userprops tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tests.fakes.fake_persistence import INITIAL_DOCUMENT, FakePropertyPersistence
from userprops.persistence.memory_backend import MemoryPropertyPersistence
from userprops.registry import reset_user_properties
from userprops.store import UserProperties


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the caller's USERPROPS_* env vars and the shared store out of tests."""
    for var in (
        "USERPROPS_PERSISTENCE_BACKEND",
        "USERPROPS_PERSISTENCE_FILE_PATH",
        "USERPROPS_PERSISTENCE_SYNCHRONIZED",
        "USERPROPS_OBSERVABILITY_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_user_properties()
    yield
    reset_user_properties()


@pytest.fixture
def memory_backend() -> MemoryPropertyPersistence:
    return MemoryPropertyPersistence()


@pytest.fixture
def store(memory_backend: MemoryPropertyPersistence) -> UserProperties:
    """Empty store over an in-memory backend."""
    return UserProperties(memory_backend)


@pytest.fixture
def seeded_backend() -> FakePropertyPersistence:
    """Backend that already holds a string, an int and a double property."""
    return FakePropertyPersistence(INITIAL_DOCUMENT.encode("utf-8"))
