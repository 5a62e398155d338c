# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Application scenarios composed on top of shared-instance registries."""

from __future__ import annotations

from .imaging import HighResolutionImage, ImageDisplay, ImageProxy
from .profiles import ChatMessage, UserProfile, UserProfileFactory, build_chat_room
from .sessions import AuthSessionStore, UserSession

__all__ = [
    "AuthSessionStore",
    "ChatMessage",
    "HighResolutionImage",
    "ImageDisplay",
    "ImageProxy",
    "UserProfile",
    "UserProfileFactory",
    "UserSession",
    "build_chat_room",
]
