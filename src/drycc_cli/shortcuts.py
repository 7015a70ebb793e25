"""Short command names and the canonical ``group:verb`` they expand to."""

from __future__ import annotations

from typing import Dict

SHORTCUTS: Dict[str, str] = {
    "create": "apps:create",
    "destroy": "apps:destroy",
    "info": "apps:info",
    "login": "auth:login",
    "logout": "auth:logout",
    "logs": "apps:logs",
    "open": "apps:open",
    "pull": "builds:create",
    "rollback": "releases:rollback",
    "run": "apps:run",
    "scale": "ps:scale",
    "whoami": "auth:whoami",
}


def expand(command: str) -> str:
    """Return the canonical form of ``command``, or ``command`` unchanged."""
    return SHORTCUTS.get(command, command)
