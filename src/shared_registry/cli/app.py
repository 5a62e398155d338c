# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from typing import Annotated

import typer

from ..logging import configure_diagnostics
from .chat import chat_command
from .image import image_command
from .session import session_command

app = typer.Typer(
    help="Shared-instance registry demonstrations.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    debug: Annotated[bool, typer.Option("--debug", help="Emit registry diagnostics on stderr.")] = False,
) -> None:
    """Configure diagnostics shared by every command."""

    configure_diagnostics(debug=debug)


app.command("chat")(chat_command)
app.command("session")(session_command)
app.command("image")(image_command)

__all__ = ["app"]
