# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, registry wiring)."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from typing import Annotated, Any

import typer

from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import section as core_section
from ..logging import warn as core_warn
from ..console import detect_tty
from ..registry import SharedInstanceRegistry, create_registry

EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    use_emoji: bool

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        core_warn(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji)

    def info(self, message: str) -> None:
        core_info(message, use_emoji=self.use_emoji)

    def section(self, title: str) -> None:
        """Render a section header, drawing a coloured rule on a terminal."""

        core_section(title, use_color=detect_tty())

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)


def build_cli_logger(*, emoji: bool) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided emoji preference."""

    return CLILogger(use_emoji=emoji)


def build_registry() -> SharedInstanceRegistry[Hashable, Any]:
    """Return a fresh registry honouring ``SHARED_REGISTRY_LOCKING``.

    Returns:
        SharedInstanceRegistry[Hashable, Any]: Registry owned by the running command.

    Raises:
        CLIError: If the environment requests an unsupported locking mode.
    """

    try:
        return create_registry()
    except ValueError as exc:
        raise CLIError(str(exc), exit_code=2) from exc


def normalize_cli_values(values: Sequence[str] | None) -> tuple[str, ...]:
    """Return sanitized CLI values preserving order."""

    if not values:
        return ()
    return tuple(stripped for stripped in (entry.strip() for entry in values if entry) if stripped)


__all__ = [
    "EMOJI_OPTION",
    "CLIError",
    "CLILogger",
    "build_cli_logger",
    "build_registry",
    "normalize_cli_values",
]
