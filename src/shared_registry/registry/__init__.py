# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Provide shared-instance registries and their configuration helpers."""

from __future__ import annotations

import os
from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import Any, Final

from ..interfaces.registry import ValueConstructor
from .async_registry import AsyncSharedInstanceRegistry
from .in_memory import GLOBAL, PER_KEY, LockingMode, SharedInstanceRegistry
from .slot import SharedSlot

_LOCKING_ENV_VAR: Final[str] = "SHARED_REGISTRY_LOCKING"
_LOCKING_MODES: Final[tuple[LockingMode, ...]] = (PER_KEY, GLOBAL)


@dataclass(frozen=True, slots=True)
class RegistrySettings:
    """Define registry construction parameters.

    Attributes:
        locking: ``"per-key"`` runs constructors outside the map lock so that
            unrelated keys proceed in parallel, while ``"global"`` serialises
            every lookup and construction behind one lock.
        name: Label attached to log records and raised errors.
    """

    locking: LockingMode = PER_KEY
    name: str = "shared"


def _settings_from_environment(env: Mapping[str, str]) -> RegistrySettings | None:
    """Parse registry settings from ``env`` when an override is configured.

    Args:
        env: Environment mapping consulted for the locking override.

    Returns:
        RegistrySettings | None: Settings parsed from the environment when
        present; otherwise ``None`` to indicate defaults should apply.

    Raises:
        ValueError: If an unsupported locking mode is requested.
    """

    requested = env.get(_LOCKING_ENV_VAR)
    if not requested:
        return None

    token = requested.strip().lower()
    for mode in _LOCKING_MODES:
        if token == mode:
            return RegistrySettings(locking=mode)

    raise ValueError(f"Unsupported locking mode specified via {_LOCKING_ENV_VAR}: {requested!r}")


def resolve_registry_settings(
    settings: RegistrySettings | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> RegistrySettings:
    """Return registry settings honouring overrides and defaults.

    Args:
        settings: Explicit settings that take precedence over the environment.
        env: Optional environment mapping used instead of :mod:`os.environ`.

    Returns:
        RegistrySettings: Effective settings after applying overrides or
        falling back to per-key defaults.
    """

    if settings is not None:
        return settings

    environment = env if env is not None else os.environ
    env_settings = _settings_from_environment(environment)
    if env_settings is not None:
        return env_settings

    return RegistrySettings()


def create_registry(
    settings: RegistrySettings | None = None,
    constructor: ValueConstructor[Any, Any] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> SharedInstanceRegistry[Hashable, Any]:
    """Build a registry configured according to ``settings``.

    Args:
        settings: Registry settings; resolved from the environment when omitted.
        constructor: Optional default constructor for the new registry.
        env: Optional environment mapping used instead of :mod:`os.environ`.

    Returns:
        SharedInstanceRegistry[Hashable, Any]: Empty registry owned by the caller.
    """

    resolved = resolve_registry_settings(settings, env=env)
    return SharedInstanceRegistry(constructor, locking=resolved.locking, name=resolved.name)


__all__ = [
    "GLOBAL",
    "PER_KEY",
    "AsyncSharedInstanceRegistry",
    "LockingMode",
    "RegistrySettings",
    "SharedInstanceRegistry",
    "SharedSlot",
    "create_registry",
    "resolve_registry_settings",
]
