# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Single shared instance stored in an explicitly owned registry."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any, Generic, TypeVar

from .in_memory import GLOBAL, SharedInstanceRegistry

ValueT = TypeVar("ValueT")


class SharedSlot(Generic[ValueT]):
    """Create one shared instance lazily from a zero-argument factory.

    The instance is stored in ``registry`` under ``key``. When no key is given
    the factory itself is the key, so passing a class keys the instance by the
    type.
    """

    def __init__(
        self,
        factory: Callable[[], ValueT],
        *,
        registry: SharedInstanceRegistry[Hashable, Any] | None = None,
        key: Hashable | None = None,
    ) -> None:
        self._factory = factory
        self._owns_registry = registry is None
        self._registry = registry if registry is not None else SharedInstanceRegistry(locking=GLOBAL, name="slot")
        self._key: Hashable = key if key is not None else factory

    @property
    def key(self) -> Hashable:
        return self._key

    def get(self) -> ValueT:
        """Return the shared instance, building it on first access.

        Returns:
            ValueT: Instance produced by the factory on the first call.
        """

        return self._registry.get(self._key, self._build)

    def is_set(self) -> bool:
        """Return whether the shared instance has been constructed."""

        return self._key in self._registry

    def reset(self) -> None:
        """Forget the instance when the slot owns its registry.

        A slot sharing a registry supplied by the caller leaves that registry
        untouched; reset the registry itself instead.
        """

        if self._owns_registry:
            self._registry.reset()

    def _build(self, _key: Hashable) -> ValueT:
        return self._factory()


__all__ = ["SharedSlot"]
