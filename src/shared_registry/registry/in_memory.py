# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Thread-safe in-memory registry of lazily constructed shared instances.

Two locking strategies are available. ``"per-key"`` keeps the map mutex short
and runs each constructor under a lock dedicated to its key, so a slow
constructor only delays callers waiting on the same key. ``"global"`` holds a
single re-entrant lock across the whole lookup-or-construct path and fully
serialises access.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from dataclasses import dataclass, field
from threading import Lock, RLock
from typing import Final, Generic, Literal, TypeVar

from ..errors import ConstructionFailedError, MissingConstructorError
from ..interfaces.registry import InstanceRegistry, RegistryInfo, ValueConstructor

KeyT = TypeVar("KeyT", bound=Hashable)
ValueT = TypeVar("ValueT")

LockingMode = Literal["per-key", "global"]
PER_KEY: Final[LockingMode] = "per-key"
GLOBAL: Final[LockingMode] = "global"

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class _KeyLock:
    """Lock serialising construction of one absent key plus its waiter count."""

    lock: Lock = field(default_factory=Lock)
    waiters: int = 0


def ensure_hashable(key: KeyT, *, registry: str) -> KeyT:
    """Return ``key`` ensuring it can be used as a registry key.

    Args:
        key: Candidate registry key.
        registry: Registry name used in the error message.

    Returns:
        KeyT: The original key when it supports hashing.

    Raises:
        TypeError: If ``key`` is not hashable.
    """

    try:
        hash(key)
    except TypeError as exc:
        raise TypeError(f"registry '{registry}' keys must be hashable, got {type(key).__name__}") from exc
    return key


def construct_value(
    key: KeyT,
    constructor: ValueConstructor[KeyT, ValueT],
    *,
    registry: str,
) -> ValueT:
    """Invoke ``constructor`` for ``key`` translating failures.

    Args:
        key: Key whose value is being constructed.
        constructor: Callable producing the value.
        registry: Registry name attached to raised errors.

    Returns:
        ValueT: Value produced by the constructor.

    Raises:
        ConstructionFailedError: If the constructor raises or returns ``None``.
    """

    try:
        value = constructor(key)
    except ConstructionFailedError:
        raise
    except Exception as exc:
        raise ConstructionFailedError(key, registry=registry, reason=f"{type(exc).__name__}: {exc}") from exc
    if value is None:
        raise ConstructionFailedError(key, registry=registry, reason="constructor returned None")
    return value


class SharedInstanceRegistry(InstanceRegistry[KeyT, ValueT], Generic[KeyT, ValueT]):
    """Map keys to lazily constructed values shared by every caller."""

    def __init__(
        self,
        constructor: ValueConstructor[KeyT, ValueT] | None = None,
        *,
        locking: LockingMode = PER_KEY,
        name: str = "shared",
    ) -> None:
        """Initialise an empty registry.

        Args:
            constructor: Default constructor used when :meth:`get` receives none.
            locking: Locking strategy, either ``"per-key"`` or ``"global"``.
            name: Label used in log records and raised errors.

        Raises:
            ValueError: If ``locking`` is not a supported strategy.
        """

        if locking not in (PER_KEY, GLOBAL):
            raise ValueError(f"unsupported locking mode {locking!r}")
        self._constructor = constructor
        self._locking: LockingMode = locking
        self._name = name
        self._entries: dict[KeyT, ValueT] = {}
        self._key_locks: dict[KeyT, _KeyLock] = {}
        self._lock = RLock()
        self._hits = 0
        self._constructions = 0
        self._failures = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def locking(self) -> LockingMode:
        return self._locking

    def get(self, key: KeyT, constructor: ValueConstructor[KeyT, ValueT] | None = None) -> ValueT:
        """Return the shared value for ``key``, constructing it on first use.

        Args:
            key: Hashable identifier of the shared value.
            constructor: Optional constructor overriding the registry default.

        Returns:
            ValueT: The value stored for ``key``; identical for every caller.

        Raises:
            ConstructionFailedError: If the constructor fails. The key stays absent.
            MissingConstructorError: If the key is absent and no constructor is available.
            TypeError: If ``key`` is not hashable.
        """

        ensure_hashable(key, registry=self._name)
        factory = constructor if constructor is not None else self._constructor
        if self._locking == GLOBAL:
            with self._lock:
                return self._lookup_or_construct(key, factory)

        with self._lock:
            if key in self._entries:
                return self._record_hit(key)
            key_lock = self._key_locks.get(key)
            if key_lock is None:
                key_lock = self._key_locks[key] = _KeyLock()
            key_lock.waiters += 1
        try:
            with key_lock.lock:
                with self._lock:
                    if key in self._entries:
                        return self._record_hit(key)
                value = self._construct(key, factory)
                with self._lock:
                    self._entries[key] = value
                    self._constructions += 1
                return value
        finally:
            self._release_key_lock(key, key_lock)

    def reset(self) -> None:
        """Discard every entry and reset statistics."""

        with self._lock:
            self._entries.clear()
            self._key_locks.clear()
            self._hits = 0
            self._constructions = 0
            self._failures = 0
        LOGGER.debug("registry=%s reset", self._name)

    def keys(self) -> tuple[KeyT, ...]:
        """Return a snapshot of the constructed keys in insertion order.

        Returns:
            tuple[KeyT, ...]: Keys currently holding a value.
        """

        with self._lock:
            return tuple(self._entries)

    def metadata(self) -> RegistryInfo:
        """Return a statistics snapshot for the registry.

        Returns:
            RegistryInfo: Current size together with hit, construction and failure counters.
        """

        with self._lock:
            return RegistryInfo(
                current_size=len(self._entries),
                hits=self._hits,
                constructions=self._constructions,
                failures=self._failures,
            )

    def __contains__(self, key: object) -> bool:
        try:
            hash(key)
        except TypeError:
            return False
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"SharedInstanceRegistry(name={self._name!r}, locking={self._locking!r}, size={len(self)})"

    def _release_key_lock(self, key: KeyT, key_lock: _KeyLock) -> None:
        # The last caller out drops the lock whether construction succeeded or not.
        with self._lock:
            key_lock.waiters -= 1
            if key_lock.waiters == 0 and self._key_locks.get(key) is key_lock:
                del self._key_locks[key]

    def _lookup_or_construct(self, key: KeyT, factory: ValueConstructor[KeyT, ValueT] | None) -> ValueT:
        # Caller holds ``self._lock``.
        if key in self._entries:
            return self._record_hit(key)
        value = self._construct(key, factory)
        self._entries[key] = value
        self._constructions += 1
        return value

    def _record_hit(self, key: KeyT) -> ValueT:
        # Caller holds ``self._lock``.
        self._hits += 1
        LOGGER.debug("registry=%s reuse key=%r", self._name, key)
        return self._entries[key]

    def _construct(self, key: KeyT, factory: ValueConstructor[KeyT, ValueT] | None) -> ValueT:
        if factory is None:
            raise MissingConstructorError(key, registry=self._name)
        try:
            value = construct_value(key, factory, registry=self._name)
        except ConstructionFailedError:
            with self._lock:
                self._failures += 1
            LOGGER.debug("registry=%s construction failed key=%r", self._name, key)
            raise
        LOGGER.debug("registry=%s constructed key=%r", self._name, key)
        return value


__all__ = [
    "GLOBAL",
    "PER_KEY",
    "LockingMode",
    "SharedInstanceRegistry",
    "construct_value",
    "ensure_hashable",
]
