# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exception hierarchy shared by registries and the scenarios built on them."""

from __future__ import annotations

from collections.abc import Hashable


class RegistryError(RuntimeError):
    """Base class for failures raised by shared-instance registries."""


class ConstructionFailedError(RegistryError):
    """Raise when a constructor cannot produce a value for ``key``.

    Attributes:
        key: Key whose construction failed.
        registry: Name of the registry that attempted the construction.
        reason: Short human-readable explanation of the failure.
    """

    def __init__(self, key: Hashable, *, registry: str = "shared", reason: str = "constructor raised") -> None:
        """Initialise the error with the failing key and context.

        Args:
            key: Key whose construction failed.
            registry: Name of the registry that attempted the construction.
            reason: Short explanation describing the failure.
        """

        self.key = key
        self.registry = registry
        self.reason = reason
        super().__init__(f"registry '{registry}' could not construct a value for {key!r}: {reason}")


class MissingConstructorError(RegistryError, TypeError):
    """Raise when an absent key is requested without any constructor available."""

    def __init__(self, key: Hashable, *, registry: str = "shared") -> None:
        self.key = key
        self.registry = registry
        super().__init__(f"registry '{registry}' has no constructor for absent key {key!r}")


class AccessDeniedError(RegistryError):
    """Raise when a guarded proxy refuses access for the caller's role."""

    def __init__(self, resource: str, role: str) -> None:
        self.resource = resource
        self.role = role
        super().__init__(f"role '{role}' may not access '{resource}'")


__all__ = [
    "AccessDeniedError",
    "ConstructionFailedError",
    "MissingConstructorError",
    "RegistryError",
]
