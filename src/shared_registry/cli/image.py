# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command displaying an image through role-guarded lazy proxies."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..errors import AccessDeniedError, ConstructionFailedError
from ..scenarios.imaging import ImageProxy
from .shared import EMOJI_OPTION, CLIError, build_cli_logger, build_registry


def _display_all(path: Path, role: str, repeat: int) -> tuple[list[str], int]:
    """Display ``path`` through ``repeat`` proxies sharing one registry.

    Returns:
        tuple[list[str], int]: Display descriptions and the number of loaded images.

    Raises:
        CLIError: If access is denied or the image cannot be loaded.
    """

    registry = build_registry()
    descriptions: list[str] = []
    for _ in range(repeat):
        proxy = ImageProxy(path, role, registry=registry)
        try:
            descriptions.append(proxy.display())
        except AccessDeniedError as exc:
            raise CLIError(f"You do not have permission to view this image ({exc}).") from exc
        except ConstructionFailedError as exc:
            raise CLIError(str(exc)) from exc
    return descriptions, len(registry)


def image_command(
    path: Annotated[Path, typer.Argument(help="Image file to display.")],
    role: Annotated[str, typer.Option("--role", "-r", help="Role of the requesting user.")],
    repeat: Annotated[int, typer.Option("--repeat", min=1, help="Number of proxies to display through.")] = 2,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Display an image, loading it from disk only once."""

    logger = build_cli_logger(emoji=emoji)
    try:
        descriptions, loaded = _display_all(path, role, repeat)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    logger.section(f"Image {path.name}")
    for description in descriptions:
        logger.echo(description)
    logger.ok(f"{repeat} proxies displayed, {loaded} image loaded from disk")


__all__ = ["image_command"]
