# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Concurrency guarantees of the shared-instance registry."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from shared_registry import ConstructionFailedError, SharedInstanceRegistry

WORKERS = 16


@pytest.mark.parametrize("locking", ["per-key", "global"])
def test_racing_callers_construct_once_and_share_instance(locking: str) -> None:
    calls = {"count": 0}
    calls_lock = threading.Lock()
    barrier = threading.Barrier(WORKERS)

    def slow_constructor(key: str) -> object:
        with calls_lock:
            calls["count"] += 1
        time.sleep(0.05)
        return object()

    registry: SharedInstanceRegistry[str, object] = SharedInstanceRegistry(locking=locking)

    def worker() -> object:
        barrier.wait(timeout=5)
        return registry.get("session", slow_constructor)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        results = list(pool.map(lambda _: worker(), range(WORKERS)))

    assert calls["count"] == 1
    assert all(result is results[0] for result in results)
    info = registry.metadata()
    assert info.constructions == 1
    assert info.hits == WORKERS - 1


def test_slow_construction_does_not_block_other_keys() -> None:
    started = threading.Event()
    release = threading.Event()

    def blocking_constructor(key: str) -> str:
        started.set()
        release.wait(timeout=5)
        return f"loaded-{key}"

    registry: SharedInstanceRegistry[str, str] = SharedInstanceRegistry(locking="per-key")
    with ThreadPoolExecutor(max_workers=1) as pool:
        pending = pool.submit(registry.get, "slow", blocking_constructor)
        assert started.wait(timeout=5)

        assert registry.get("fast", str.upper) == "FAST"
        assert "slow" not in registry

        release.set()
        assert pending.result(timeout=5) == "loaded-slow"

    assert set(registry.keys()) == {"slow", "fast"}


def test_waiters_retry_after_racing_failure() -> None:
    attempts = {"count": 0}
    attempts_lock = threading.Lock()
    barrier = threading.Barrier(WORKERS)

    def flaky(key: str) -> object:
        with attempts_lock:
            attempts["count"] += 1
            first = attempts["count"] == 1
        time.sleep(0.02)
        if first:
            raise RuntimeError("transient")
        return object()

    registry: SharedInstanceRegistry[str, object] = SharedInstanceRegistry()

    def worker() -> object | None:
        barrier.wait(timeout=5)
        try:
            return registry.get("config", flaky)
        except ConstructionFailedError:
            return None

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        results = list(pool.map(lambda _: worker(), range(WORKERS)))

    successes = [result for result in results if result is not None]
    assert results.count(None) == 1
    assert len(successes) == WORKERS - 1
    assert all(result is successes[0] for result in successes)
    assert attempts["count"] == 2


def test_key_locks_are_released_after_racing_callers() -> None:
    barrier = threading.Barrier(WORKERS)

    def broken(key: str) -> object:
        time.sleep(0.01)
        raise RuntimeError("unavailable")

    registry: SharedInstanceRegistry[str, object] = SharedInstanceRegistry()

    def worker(index: int) -> None:
        barrier.wait(timeout=5)
        with pytest.raises(ConstructionFailedError):
            registry.get(f"key-{index % 4}", broken)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(worker, range(WORKERS)))

    assert registry._key_locks == {}
    assert registry.metadata().failures == WORKERS
