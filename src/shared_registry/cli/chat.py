# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command building a chat room on shared profile flyweights."""

from __future__ import annotations

from typing import Annotated, Final

import typer

from ..scenarios.profiles import UserProfileFactory, build_chat_room
from .shared import EMOJI_OPTION, CLIError, build_cli_logger, build_registry, normalize_cli_values

DEFAULT_USERS: Final[tuple[str, ...]] = ("Berke", "AI_Assistant")
PLACEHOLDER_AVATAR: Final[bytes] = bytes(64 * 1024)


def chat_command(
    messages: Annotated[int, typer.Option("--messages", "-n", min=0, help="Number of messages to create.")] = 5000,
    users: Annotated[
        list[str] | None,
        typer.Option("--user", "-u", help="Sender username (repeatable)."),
    ] = None,
    show: Annotated[int, typer.Option("--show", min=0, help="Print the first N messages.")] = 0,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Create many chat messages that share a few sender profiles."""

    logger = build_cli_logger(emoji=emoji)
    usernames = normalize_cli_values(users) or DEFAULT_USERS
    try:
        factory = UserProfileFactory(build_registry())
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    logger.section("Chat room")
    room = build_chat_room(usernames, messages, PLACEHOLDER_AVATAR, factory=factory)
    for message in room[:show]:
        logger.echo(message.render())
    logger.ok(f"Total messages: {len(room)}")
    logger.info(f"Shared profiles in memory: {len(factory)}")


__all__ = ["chat_command"]
