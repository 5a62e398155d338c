# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Asyncio flavour of the shared-instance registry.

Coroutines sharing one event loop never interleave between awaits, so the
entry map itself needs no lock. Construction of an absent key is serialised by
a per-key :class:`asyncio.Lock`; coroutines waiting on that lock observe the
constructed value instead of building a second one.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass, field
from typing import Generic, TypeVar, cast

from ..errors import ConstructionFailedError, MissingConstructorError
from ..interfaces.registry import RegistryInfo
from .in_memory import ensure_hashable

KeyT = TypeVar("KeyT", bound=Hashable)
ValueT = TypeVar("ValueT")

AsyncConstructor = Callable[[KeyT], ValueT | Awaitable[ValueT]]

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class _PendingKey:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    waiters: int = 0


class AsyncSharedInstanceRegistry(Generic[KeyT, ValueT]):
    """Map keys to lazily constructed values for coroutine callers."""

    def __init__(
        self,
        constructor: AsyncConstructor[KeyT, ValueT] | None = None,
        *,
        name: str = "shared-async",
    ) -> None:
        self._constructor = constructor
        self._name = name
        self._entries: dict[KeyT, ValueT] = {}
        self._pending: dict[KeyT, _PendingKey] = {}
        self._hits = 0
        self._constructions = 0
        self._failures = 0

    @property
    def name(self) -> str:
        return self._name

    async def get(self, key: KeyT, constructor: AsyncConstructor[KeyT, ValueT] | None = None) -> ValueT:
        """Return the shared value for ``key``, awaiting construction on first use.

        Args:
            key: Hashable identifier of the shared value.
            constructor: Plain callable or coroutine function overriding the default.

        Returns:
            ValueT: The value stored for ``key``; identical for every caller.

        Raises:
            ConstructionFailedError: If the constructor fails. The key stays absent.
            MissingConstructorError: If the key is absent and no constructor is available.
            TypeError: If ``key`` is not hashable.
        """

        ensure_hashable(key, registry=self._name)
        if key in self._entries:
            return self._record_hit(key)
        factory = constructor if constructor is not None else self._constructor
        if factory is None:
            raise MissingConstructorError(key, registry=self._name)

        pending = self._pending.get(key)
        if pending is None:
            pending = self._pending[key] = _PendingKey()
        pending.waiters += 1
        try:
            async with pending.lock:
                if key in self._entries:
                    return self._record_hit(key)
                value = await self._construct(key, factory)
                self._entries[key] = value
                self._constructions += 1
        finally:
            pending.waiters -= 1
            if pending.waiters == 0 and self._pending.get(key) is pending:
                del self._pending[key]
        LOGGER.debug("registry=%s constructed key=%r", self._name, key)
        return value

    def reset(self) -> None:
        """Discard every entry and reset statistics."""

        self._entries.clear()
        self._pending.clear()
        self._hits = 0
        self._constructions = 0
        self._failures = 0

    def metadata(self) -> RegistryInfo:
        """Return a statistics snapshot for the registry.

        Returns:
            RegistryInfo: Current size together with hit, construction and failure counters.
        """

        return RegistryInfo(
            current_size=len(self._entries),
            hits=self._hits,
            constructions=self._constructions,
            failures=self._failures,
        )

    def __contains__(self, key: object) -> bool:
        try:
            return key in self._entries
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._entries)

    def _record_hit(self, key: KeyT) -> ValueT:
        self._hits += 1
        LOGGER.debug("registry=%s reuse key=%r", self._name, key)
        return self._entries[key]

    async def _construct(self, key: KeyT, factory: AsyncConstructor[KeyT, ValueT]) -> ValueT:
        try:
            result = factory(key)
            if inspect.isawaitable(result):
                result = await result
        except ConstructionFailedError:
            self._failures += 1
            raise
        except Exception as exc:
            self._failures += 1
            raise ConstructionFailedError(key, registry=self._name, reason=f"{type(exc).__name__}: {exc}") from exc
        if result is None:
            self._failures += 1
            raise ConstructionFailedError(key, registry=self._name, reason="constructor returned None")
        return cast(ValueT, result)


__all__ = ["AsyncConstructor", "AsyncSharedInstanceRegistry"]
