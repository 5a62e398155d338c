# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Role-guarded proxy that defers loading heavy images until displayed."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from ..errors import AccessDeniedError
from ..registry.in_memory import SharedInstanceRegistry

DEFAULT_ALLOWED_ROLES: Final[frozenset[str]] = frozenset({"ADMIN"})

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class ImageDisplay(Protocol):
    """Anything able to present an image."""

    def display(self) -> str:
        """Display the image and return a description of what was shown."""
        ...


class HighResolutionImage:
    """Image whose pixels are read from disk as soon as it is constructed."""

    def __init__(self, path: Path) -> None:
        """Load ``path`` eagerly.

        Args:
            path: Image file to read.

        Raises:
            OSError: If the file cannot be read.
        """

        self.path = path
        LOGGER.info("loading heavy image from disk: %s", path.name)
        self.data = path.read_bytes()

    @property
    def size(self) -> int:
        return len(self.data)

    def display(self) -> str:
        return f"Displaying {self.path.name} ({self.size} bytes)"


class ImageProxy:
    """Check the caller's role, then load and display the real image lazily.

    Roles match exactly, so ``"admin"`` is not ``"ADMIN"``.

    Loaded images are stored in ``registry`` keyed by resolved path, so every
    proxy pointing at the same file shares one :class:`HighResolutionImage`.
    """

    def __init__(
        self,
        path: Path,
        user_role: str,
        *,
        registry: SharedInstanceRegistry[Path, HighResolutionImage] | None = None,
        allowed_roles: Iterable[str] = DEFAULT_ALLOWED_ROLES,
    ) -> None:
        self._path = path.resolve()
        self._role = user_role
        self._allowed_roles = frozenset(allowed_roles)
        self._images: SharedInstanceRegistry[Path, HighResolutionImage] = (
            registry if registry is not None else SharedInstanceRegistry(name="images")
        )
        self._image: HighResolutionImage | None = None

    @property
    def is_loaded(self) -> bool:
        return self._image is not None

    def display(self) -> str:
        """Display the image after checking access.

        Returns:
            str: Description of the displayed image.

        Raises:
            AccessDeniedError: If the proxy's role is not allowed to view the image.
            ConstructionFailedError: If the image file cannot be loaded.
        """

        if self._role not in self._allowed_roles:
            LOGGER.warning("role %s denied access to %s", self._role, self._path.name)
            raise AccessDeniedError(self._path.name, self._role)
        if self._image is None:
            self._image = self._images.get(self._path, HighResolutionImage)
        return self._image.display()


__all__ = ["DEFAULT_ALLOWED_ROLES", "HighResolutionImage", "ImageDisplay", "ImageProxy"]
