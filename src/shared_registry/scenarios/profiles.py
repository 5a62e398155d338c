# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Chat profile flyweights.

Thousands of chat messages reference a handful of senders. Each sender's
heavy, constant data (name and avatar) lives in one :class:`UserProfile`
shared through a registry, while every :class:`ChatMessage` only carries its
own text and timestamp.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from functools import partial

from ..registry.in_memory import SharedInstanceRegistry
from .sessions import utc_now

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Intrinsic sender state shared by every message from the same user.

    Attributes:
        username: Display name of the sender.
        avatar: Raw avatar image payload.
    """

    username: str
    avatar: bytes = field(repr=False)


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """Extrinsic per-message state plus a reference to the shared sender profile."""

    text: str
    timestamp: datetime
    sender: UserProfile

    def render(self) -> str:
        """Return the single-line transcript form of the message."""

        return f"[{self.timestamp.isoformat()}] {self.sender.username}: {self.text}"


def _build_profile(username: str, *, avatar: bytes) -> UserProfile:
    LOGGER.info("new flyweight created for user %s", username)
    return UserProfile(username=username, avatar=avatar)


class UserProfileFactory:
    """Hand out one shared :class:`UserProfile` per username."""

    def __init__(self, registry: SharedInstanceRegistry[str, UserProfile] | None = None) -> None:
        self._profiles: SharedInstanceRegistry[str, UserProfile] = (
            registry if registry is not None else SharedInstanceRegistry(name="profiles")
        )

    def profile(self, username: str, avatar: bytes) -> UserProfile:
        """Return the shared profile for ``username``.

        The avatar supplied with the first request for a username is the one
        kept; later avatars for the same username are ignored.

        Args:
            username: Display name identifying the profile.
            avatar: Avatar payload used when the profile is first created.

        Returns:
            UserProfile: Profile instance shared by every caller using ``username``.
        """

        return self._profiles.get(username, partial(_build_profile, avatar=avatar))

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, username: object) -> bool:
        return username in self._profiles


def build_chat_room(
    usernames: Sequence[str],
    count: int,
    avatar: bytes,
    *,
    factory: UserProfileFactory,
    clock: Callable[[], datetime] | None = None,
) -> list[ChatMessage]:
    """Create ``count`` messages alternating over ``usernames``.

    Args:
        usernames: Senders cycled through in order.
        count: Number of messages to create.
        avatar: Avatar payload shared by newly created profiles.
        factory: Profile factory supplying the shared sender flyweights.
        clock: Optional callable returning message timestamps.

    Returns:
        list[ChatMessage]: Messages numbered from ``1`` to ``count``.

    Raises:
        ValueError: If ``count`` is negative or ``usernames`` is empty.
    """

    if count < 0:
        raise ValueError("count must not be negative")
    if not usernames:
        raise ValueError("at least one username is required")
    now = clock or utc_now
    messages: list[ChatMessage] = []
    for index in range(1, count + 1):
        username = usernames[index % len(usernames)]
        sender = factory.profile(username, avatar)
        messages.append(ChatMessage(text=f"Message #{index}", timestamp=now(), sender=sender))
    return messages


__all__ = ["ChatMessage", "UserProfile", "UserProfileFactory", "build_chat_room"]
