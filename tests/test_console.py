# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console management and user-facing logging helpers."""

from __future__ import annotations

import pytest

from shared_registry import logging as sr_logging
from shared_registry.console import RichConsoleManager, get_console_manager


def test_console_manager_reuses_console_per_preferences() -> None:
    manager = RichConsoleManager()

    plain = manager.get(color=False, emoji=False)

    assert manager.get(color=False, emoji=False) is plain
    assert manager.get(color=False, emoji=True) is not plain
    assert len(manager) == 2


def test_process_console_manager_is_shared() -> None:
    assert get_console_manager() is get_console_manager()


def test_helpers_respect_emoji_preference(capsys: pytest.CaptureFixture[str]) -> None:
    sr_logging.ok("done", use_emoji=False, use_color=False)
    sr_logging.warn("careful", use_emoji=True, use_color=False)

    out = capsys.readouterr().out
    assert "done" in out
    assert "✅" not in out
    assert "⚠️" in out


def test_emoji_is_blank_when_disabled() -> None:
    assert sr_logging.emoji("✅", False) == ""
    assert sr_logging.emoji("✅", True) == "✅"


def test_configure_diagnostics_sets_level() -> None:
    logger = sr_logging.configure_diagnostics(debug=True)
    try:
        assert logger.level == 10
        handlers = [handler for handler in logger.handlers if type(handler).__name__ == "RichHandler"]
        assert len(handlers) == 1
        sr_logging.configure_diagnostics(debug=True)
        assert len([h for h in logger.handlers if type(h).__name__ == "RichHandler"]) == 1
    finally:
        sr_logging.configure_diagnostics(debug=False)


def test_section_renders_plain_header(capsys: pytest.CaptureFixture[str]) -> None:
    sr_logging.section("Chat room", use_color=False)

    assert "--- Chat room ---" in capsys.readouterr().out
