# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command exercising the shared authentication session store."""

from __future__ import annotations

from typing import Annotated

import typer

from ..scenarios.sessions import DEFAULT_SESSION_TTL, AuthSessionStore
from .shared import EMOJI_OPTION, CLIError, build_cli_logger, build_registry


def session_command(
    user_id: Annotated[str, typer.Option("--user-id", help="Identifier of the authenticated user.")],
    token: Annotated[str, typer.Option("--token", help="Bearer token issued at login.")],
    ttl: Annotated[
        float,
        typer.Option("--ttl", min=0.001, help="Session lifetime in seconds."),
    ] = DEFAULT_SESSION_TTL,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Save a session, make a call with it from another component, then log out."""

    logger = build_cli_logger(emoji=emoji)
    try:
        registry = build_registry()
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    logger.section("Session")
    login_store = AuthSessionStore.shared(registry, ttl_seconds=ttl)
    login_store.save_session(token, user_id)
    logger.ok(f"Session saved for user: {user_id}")

    api_store = AuthSessionStore.shared(registry)
    current = api_store.valid_token()
    if current is None:
        logger.warn("Token expired or not found. Redirecting to login.")
    else:
        logger.info(f"Sending request with token: {current}")

    api_store.logout()
    logger.ok("User logged out.")


__all__ = ["session_command"]
