# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Keyed shared-instance registries with identity-stable lazy construction."""

from __future__ import annotations

from importlib import metadata

from .errors import AccessDeniedError, ConstructionFailedError, MissingConstructorError, RegistryError
from .interfaces.registry import InstanceRegistry, RegistryInfo
from .registry import (
    AsyncSharedInstanceRegistry,
    RegistrySettings,
    SharedInstanceRegistry,
    SharedSlot,
    create_registry,
    resolve_registry_settings,
)

__all__ = [
    "AccessDeniedError",
    "AsyncSharedInstanceRegistry",
    "ConstructionFailedError",
    "InstanceRegistry",
    "MissingConstructorError",
    "RegistryError",
    "RegistryInfo",
    "RegistrySettings",
    "SharedInstanceRegistry",
    "SharedSlot",
    "__version__",
    "create_registry",
    "resolve_registry_settings",
]

try:
    __version__ = metadata.version("shared-registry")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
