"""Apps: create, list, inspect, run, logs, transfer, destroy."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..client import Client
from .models import App


def new(c: Client, app_id: str = "") -> App:
    body = {"id": app_id} if app_id else {}
    return App.model_validate(c.post("apps/", body))


def list_apps(c: Client, limit: Optional[int] = None) -> Tuple[List[App], int]:
    results, count = c.list("apps/", limit)
    return [App.model_validate(r) for r in results], count


def get(c: Client, app_id: str) -> App:
    return App.model_validate(c.get(f"apps/{app_id}/"))


def delete(c: Client, app_id: str) -> None:
    c.delete(f"apps/{app_id}/")


def transfer(c: Client, app_id: str, username: str) -> None:
    c.post(f"apps/{app_id}/", {"owner": username})


def run(
    c: Client,
    app_id: str,
    command: str,
    volumes: Optional[Dict[str, str]] = None,
    timeout: int = 3600,
    expires: int = 3600,
) -> Dict[str, Any]:
    """Start a one-off process; returns the controller's run record."""
    body: Dict[str, Any] = {"command": command, "timeout": timeout, "expires": expires}
    if volumes:
        body["volumes"] = volumes
    return c.post(f"apps/{app_id}/run/", body) or {}


def logs(
    c: Client, app_id: str, lines: int = 300, follow: bool = False, timeout: int = 300
) -> Iterator[str]:
    """Yield log lines; with ``follow`` the stream stays open until closed."""
    params = {"log_lines": lines}
    if follow:
        params["follow"] = "true"
        params["timeout"] = timeout
    read_timeout = None if follow else c.timeout
    return c.stream_lines(f"apps/{app_id}/logs/", params=params, timeout=read_timeout)
