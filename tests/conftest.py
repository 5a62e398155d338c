# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Hashable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from shared_registry import SharedInstanceRegistry


class FakeClock:
    """Manually advanced clock returning timezone-aware datetimes."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def registry() -> SharedInstanceRegistry[Hashable, Any]:
    """Return an empty registry owned by the test."""
    return SharedInstanceRegistry(name="test")


@pytest.fixture
def clock() -> FakeClock:
    """Return a fake clock starting at a fixed instant."""
    return FakeClock(datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture(autouse=True)
def _clear_locking_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHARED_REGISTRY_LOCKING", raising=False)
