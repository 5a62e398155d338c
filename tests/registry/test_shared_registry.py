# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the thread-safe shared-instance registry."""

from __future__ import annotations

import pytest

from shared_registry import ConstructionFailedError, MissingConstructorError, SharedInstanceRegistry


class Profile:
    def __init__(self, name: str) -> None:
        self.name = name


@pytest.mark.parametrize("locking", ["per-key", "global"])
def test_same_key_returns_same_instance_and_constructs_once(locking: str) -> None:
    calls = {"count": 0}

    def load_profile(key: str) -> Profile:
        calls["count"] += 1
        return Profile(key)

    registry: SharedInstanceRegistry[str, Profile] = SharedInstanceRegistry(locking=locking)
    first = registry.get("alice", load_profile)
    second = registry.get("alice", load_profile)

    assert first is second
    assert first.name == "alice"
    assert calls["count"] == 1


def test_distinct_keys_get_distinct_instances() -> None:
    calls = {"a": 0, "b": 0}

    def load_a(key: str) -> Profile:
        calls["a"] += 1
        return Profile(key)

    def load_b(key: str) -> Profile:
        calls["b"] += 1
        return Profile(key)

    registry: SharedInstanceRegistry[str, Profile] = SharedInstanceRegistry()
    alice = registry.get("alice", load_a)
    bob = registry.get("bob", load_b)

    assert alice is not bob
    assert (alice.name, bob.name) == ("alice", "bob")
    assert calls == {"a": 1, "b": 1}
    assert registry.keys() == ("alice", "bob")


def test_present_key_ignores_new_constructor() -> None:
    registry: SharedInstanceRegistry[str, Profile] = SharedInstanceRegistry(Profile)
    original = registry.get("alice")

    def never(key: str) -> Profile:
        raise AssertionError("constructor must not run for a present key")

    assert registry.get("alice", never) is original


def test_default_constructor_is_used_when_none_given() -> None:
    registry: SharedInstanceRegistry[str, Profile] = SharedInstanceRegistry(Profile)

    assert registry.get("carol").name == "carol"
    assert "carol" in registry
    assert len(registry) == 1


def test_missing_constructor_raises_without_recording_entry() -> None:
    registry: SharedInstanceRegistry[str, Profile] = SharedInstanceRegistry(name="bare")

    with pytest.raises(MissingConstructorError, match="bare"):
        registry.get("alice")
    assert "alice" not in registry


@pytest.mark.parametrize("locking", ["per-key", "global"])
def test_failed_construction_leaves_no_entry_and_can_retry(locking: str) -> None:
    def broken(key: str) -> Profile:
        raise OSError("disk unavailable")

    registry: SharedInstanceRegistry[str, Profile] = SharedInstanceRegistry(locking=locking, name="profiles")

    with pytest.raises(ConstructionFailedError) as excinfo:
        registry.get("alice", broken)

    assert excinfo.value.key == "alice"
    assert excinfo.value.registry == "profiles"
    assert isinstance(excinfo.value.__cause__, OSError)
    assert "alice" not in registry
    assert len(registry) == 0

    recovered = registry.get("alice", Profile)
    assert recovered.name == "alice"
    assert registry.get("alice", broken) is recovered
    info = registry.metadata()
    assert (info.constructions, info.failures, info.hits) == (1, 1, 1)


def test_constructor_returning_none_counts_as_failure() -> None:
    registry: SharedInstanceRegistry[str, object] = SharedInstanceRegistry()

    with pytest.raises(ConstructionFailedError, match="returned None"):
        registry.get("ghost", lambda key: None)
    assert "ghost" not in registry


def test_construction_failed_error_from_constructor_propagates_unchanged() -> None:
    error = ConstructionFailedError("alice", registry="upstream", reason="profile service rejected")

    def reject(key: str) -> Profile:
        raise error

    registry: SharedInstanceRegistry[str, Profile] = SharedInstanceRegistry()
    with pytest.raises(ConstructionFailedError) as excinfo:
        registry.get("alice", reject)
    assert excinfo.value is error


def test_unhashable_key_is_rejected() -> None:
    registry: SharedInstanceRegistry[object, Profile] = SharedInstanceRegistry()

    with pytest.raises(TypeError, match="hashable"):
        registry.get(["alice"], lambda key: Profile("x"))
    assert ["alice"] not in registry


def test_reset_forces_reconstruction() -> None:
    calls = {"count": 0}

    def load_profile(key: str) -> Profile:
        calls["count"] += 1
        return Profile(key)

    registry: SharedInstanceRegistry[str, Profile] = SharedInstanceRegistry(load_profile)
    before = registry.get("alice")
    registry.reset()

    assert len(registry) == 0
    assert registry.metadata().constructions == 0
    after = registry.get("alice")
    assert after is not before
    assert calls["count"] == 2


def test_metadata_tracks_hits_and_size() -> None:
    registry: SharedInstanceRegistry[str, Profile] = SharedInstanceRegistry(Profile)
    for name in ("alice", "bob", "alice", "alice"):
        registry.get(name)

    info = registry.metadata()
    assert info.current_size == 2
    assert info.hits == 2
    assert info.constructions == 2
    assert info.failures == 0


def test_unknown_locking_mode_is_rejected() -> None:
    with pytest.raises(ValueError, match="locking"):
        SharedInstanceRegistry(locking="optimistic")  # type: ignore[arg-type]


def test_failed_and_missing_constructions_release_key_locks() -> None:
    def broken(key: str) -> Profile:
        raise OSError("disk unavailable")

    registry: SharedInstanceRegistry[str, Profile] = SharedInstanceRegistry()
    for index in range(100):
        with pytest.raises(ConstructionFailedError):
            registry.get(f"broken-{index}", broken)
        with pytest.raises(MissingConstructorError):
            registry.get(f"missing-{index}")

    assert registry._key_locks == {}
    assert len(registry) == 0

    registry.get("alice", Profile)
    assert registry._key_locks == {}
