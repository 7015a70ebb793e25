"""Small helpers shared by the command runner: time, browser, drinks, log colours."""

from __future__ import annotations

import logging
import os
import webbrowser
from datetime import datetime, timezone
from typing import IO, Optional

from rich.console import Console
from rich.text import Text

from . import DRINK_ENV

logger = logging.getLogger(__name__)

# Index matches the ANSI colour number; 0 and 7 are never picked.
_LOG_COLORS = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")
_CONTROLLER_CATEGORY = "INFO"


def drink_of_choice() -> str:
    return os.environ.get(DRINK_ENV) or "coffee"


def format_time(value: Optional[str]) -> str:
    """Render a controller timestamp as ``2006-01-02T15:04:05UTC``.

    Unparseable input is returned unchanged.
    """
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SUTC")


def open_browser(url: str) -> None:
    """Open ``url`` in the user's browser.

    Raises:
        OSError: No browser could be launched.
    """
    logger.debug("Opening %s", url)
    if not webbrowser.open(url):
        raise OSError("warning: Cannot open browser")


def choose_color(category: str) -> str:
    """Stable colour for a log category; magenta is reserved for the controller."""
    if category == _CONTROLLER_CATEGORY:
        return "magenta"
    color = sum(category.encode("utf-8")) % 256 % 6 + 1
    if color == 5:
        return "default"
    return _LOG_COLORS[color]


def print_log(out: IO[str], line: str) -> None:
    """Write one log line coloured by its leading category token."""
    category = line.split(" -- ")[0].split(" ")[0]
    console = Console(file=out, highlight=False, soft_wrap=True)
    console.print(Text(line, style=choose_color(category)))
