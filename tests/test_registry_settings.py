# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for registry settings resolution."""

from __future__ import annotations

import pytest

from shared_registry import RegistrySettings, create_registry, resolve_registry_settings


def test_defaults_without_environment_override() -> None:
    settings = resolve_registry_settings(env={})

    assert settings == RegistrySettings(locking="per-key", name="shared")


@pytest.mark.parametrize("value", ["global", " GLOBAL ", "Global"])
def test_environment_selects_global_locking(value: str) -> None:
    settings = resolve_registry_settings(env={"SHARED_REGISTRY_LOCKING": value})

    assert settings.locking == "global"


def test_explicit_settings_win_over_environment() -> None:
    explicit = RegistrySettings(locking="per-key", name="profiles")

    resolved = resolve_registry_settings(explicit, env={"SHARED_REGISTRY_LOCKING": "global"})

    assert resolved is explicit


def test_unknown_locking_mode_is_rejected() -> None:
    with pytest.raises(ValueError, match="SHARED_REGISTRY_LOCKING"):
        resolve_registry_settings(env={"SHARED_REGISTRY_LOCKING": "optimistic"})


def test_create_registry_uses_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHARED_REGISTRY_LOCKING", "global")

    registry = create_registry()

    assert registry.locking == "global"
    assert len(registry) == 0


def test_create_registry_installs_default_constructor() -> None:
    registry = create_registry(RegistrySettings(name="lengths"), constructor=len)

    assert registry.name == "lengths"
    assert registry.get("abcd") == 4
