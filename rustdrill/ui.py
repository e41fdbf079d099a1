"""Coloured status lines printed to the terminal."""

from __future__ import annotations

import os

from rich.console import Console
from rich.text import Text


def _emoji_enabled() -> bool:
    return "NO_EMOJI" not in os.environ


def _announce(emoji: str, fallback: str, message: str, style: str) -> None:
    marker = emoji if _emoji_enabled() else fallback
    line = Text.assemble((marker, style), " ", (message, style))
    Console(highlight=False).print(line, soft_wrap=True)


def warn(message: str) -> None:
    """Print a red warning line."""
    _announce("⚠️ ", "!", message, "red")


def success(message: str) -> None:
    """Print a green success line."""
    _announce("✅", "✓", message, "green")