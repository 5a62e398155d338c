# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Authentication session store shared through an injected registry."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from datetime import datetime, timedelta, timezone
from functools import partial
from threading import Lock
from typing import Any, Final

from pydantic import BaseModel, ConfigDict

from ..interfaces.registry import InstanceRegistry

DEFAULT_SESSION_TTL: Final[float] = 3600.0

LOGGER = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current timezone-aware UTC time."""

    return datetime.now(timezone.utc)


class UserSession(BaseModel):
    """Authenticated session issued to a user."""

    model_config = ConfigDict(frozen=True)

    token: str
    user_id: str
    expiry: datetime

    def is_valid(self, now: datetime) -> bool:
        """Return whether the session is still valid at ``now``."""

        return self.expiry > now


class AuthSessionStore:
    """Hold the current user session behind serialised access.

    One store is meant to exist per composing application; obtain it through
    :meth:`shared` so that every caller sees the same session state.
    """

    def __init__(self, *, ttl_seconds: float = DEFAULT_SESSION_TTL, clock: Clock | None = None) -> None:
        """Initialise an empty store.

        Args:
            ttl_seconds: Lifetime granted to new sessions in seconds.
            clock: Optional callable returning the current time, for tests.

        Raises:
            ValueError: If ``ttl_seconds`` is not positive.
        """

        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock: Clock = clock or utc_now
        self._session: UserSession | None = None
        self._lock = Lock()

    @classmethod
    def shared(
        cls,
        registry: InstanceRegistry[Hashable, Any],
        *,
        ttl_seconds: float = DEFAULT_SESSION_TTL,
    ) -> AuthSessionStore:
        """Return the store kept in ``registry``, keyed by the store class.

        ``ttl_seconds`` only applies when this call builds the store. An existing
        store keeps the lifetime it was built with; a differing request is logged
        at debug level.

        Args:
            registry: Registry owned by the composing application.
            ttl_seconds: Session lifetime applied when the store is first built.

        Returns:
            AuthSessionStore: The single store for ``registry``.
        """

        store = registry.get(cls, partial(_build_store, ttl_seconds=ttl_seconds))
        if store.ttl_seconds != ttl_seconds:
            LOGGER.debug(
                "shared session store keeps ttl_seconds=%s, ignoring requested ttl_seconds=%s",
                store.ttl_seconds,
                ttl_seconds,
            )
        return store

    @property
    def ttl_seconds(self) -> float:
        return self._ttl.total_seconds()

    @property
    def current_session(self) -> UserSession | None:
        with self._lock:
            return self._session

    def save_session(self, token: str, user_id: str) -> UserSession:
        """Store a new session for ``user_id`` replacing any previous one.

        Args:
            token: Bearer token issued for the session.
            user_id: Identifier of the authenticated user.

        Returns:
            UserSession: The newly stored session.
        """

        session = UserSession(token=token, user_id=user_id, expiry=self._clock() + self._ttl)
        with self._lock:
            self._session = session
        LOGGER.info("session saved for user %s", user_id)
        return session

    def valid_token(self) -> str | None:
        """Return the current token, or ``None`` when absent or expired."""

        now = self._clock()
        with self._lock:
            session = self._session
        if session is None or not session.is_valid(now):
            return None
        return session.token

    def logout(self) -> None:
        """Forget the current session."""

        with self._lock:
            self._session = None
        LOGGER.info("user logged out")


def _build_store(key: type[AuthSessionStore], *, ttl_seconds: float) -> AuthSessionStore:
    return key(ttl_seconds=ttl_seconds)


__all__ = ["DEFAULT_SESSION_TTL", "AuthSessionStore", "UserSession", "utc_now"]
