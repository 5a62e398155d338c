# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich console management utilities."""

from __future__ import annotations

import sys
from typing import Literal

from rich.console import Console

from .registry.in_memory import SharedInstanceRegistry
from .registry.slot import SharedSlot

ConsoleKey = tuple[bool, bool, bool]


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal.

    Returns:
        bool: ``True`` when ``sys.stdout`` reports TTY support, ``False`` otherwise.
    """

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _build_console(key: ConsoleKey) -> Console:
    """Construct a Rich console for the ``(color, emoji, tty)`` key.

    Args:
        key: Presentation flags the console should honour.

    Returns:
        Console: Console configured for the requested presentation flags.
    """

    color, emoji, tty = key
    color_system: Literal["auto", "standard", "256", "truecolor", "windows"] | None = (
        "auto" if color and tty else None
    )
    return Console(
        color_system=color_system,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
        highlight=False,
    )


class RichConsoleManager:
    """Provision Rich :class:`Console` instances keyed by colour and emoji settings."""

    def __init__(self, registry: SharedInstanceRegistry[ConsoleKey, Console] | None = None) -> None:
        """Initialise the manager with a registry keyed by presentation flags.

        Args:
            registry: Optional registry holding the consoles; a private one is created otherwise.
        """

        self._consoles: SharedInstanceRegistry[ConsoleKey, Console] = (
            registry if registry is not None else SharedInstanceRegistry(_build_console, name="consoles")
        )

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return a Rich console configured for ``color`` and ``emoji`` preferences.

        Args:
            color: ``True`` when ANSI colour output should be enabled.
            emoji: ``True`` when Rich should render emoji glyphs.

        Returns:
            Console: Shared console matching the preferences and current TTY state.
        """

        return self._consoles.get((color, emoji, detect_tty()))

    def __len__(self) -> int:
        return len(self._consoles)


_CONSOLE_MANAGER: SharedSlot[RichConsoleManager] = SharedSlot(RichConsoleManager)


def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager` instance.

    Returns:
        RichConsoleManager: Console manager shared by the logging helpers.
    """

    return _CONSOLE_MANAGER.get()


__all__ = ["RichConsoleManager", "detect_tty", "get_console_manager"]
