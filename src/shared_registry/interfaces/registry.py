# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Registry contracts shared across shared_registry."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, runtime_checkable

KeyT = TypeVar("KeyT", bound=Hashable)
KeyContraT = TypeVar("KeyContraT", bound=Hashable, contravariant=True)
ValueT = TypeVar("ValueT")
ValueCoT = TypeVar("ValueCoT", covariant=True)


@dataclass(frozen=True, slots=True)
class RegistryInfo:
    """Describe registry state at a point in time.

    Attributes:
        current_size: Number of constructed entries currently stored.
        hits: Number of lookups served from an existing entry.
        constructions: Number of successful constructions since the last reset.
        failures: Number of constructor failures since the last reset.
    """

    current_size: int
    hits: int
    constructions: int
    failures: int


class ValueConstructor(Protocol[KeyContraT, ValueCoT]):
    """Build the shared value associated with a key."""

    def __call__(self, key: KeyContraT, /) -> ValueCoT:
        """Return a freshly constructed value for ``key``.

        Args:
            key: Key the value is being constructed for.

        Returns:
            ValueCoT: Newly constructed value. ``None`` is treated as a failure.
        """
        ...


@runtime_checkable
class InstanceRegistry(Protocol, Generic[KeyT, ValueT]):
    """Define the contract implemented by shared-instance registries.

    Implementations guarantee identity stability: repeated lookups for equal
    keys return the same instance and each key is constructed at most once
    until :meth:`reset` is called. A failing constructor must leave the key
    absent so that later lookups retry construction.
    """

    @abstractmethod
    def get(self, key: KeyT, constructor: ValueConstructor[KeyT, ValueT] | None = None) -> ValueT:
        """Return the shared value for ``key``, constructing it on first use.

        Args:
            key: Hashable identifier of the shared value.
            constructor: Optional constructor overriding the registry default.

        Returns:
            ValueT: Shared value associated with ``key``.
        """
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Discard every entry so later lookups reconstruct their values."""
        raise NotImplementedError

    @abstractmethod
    def metadata(self) -> RegistryInfo:
        """Return a statistics snapshot for the registry.

        Returns:
            RegistryInfo: Current size together with hit and construction counters.
        """
        raise NotImplementedError

    @abstractmethod
    def __contains__(self, key: object) -> bool:
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError


__all__ = ["InstanceRegistry", "RegistryInfo", "ValueConstructor"]
