"""Builds: list and create from a container image."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..client import Client
from .models import Build


def list_builds(c: Client, app_id: str, limit: Optional[int] = None) -> Tuple[List[Build], int]:
    results, count = c.list(f"apps/{app_id}/builds/", limit)
    return [Build.model_validate(r) for r in results], count


def new(
    c: Client,
    app_id: str,
    image: str,
    stack: str = "container",
    procfile: Optional[Dict[str, str]] = None,
    dryccfile: Optional[Dict[str, Any]] = None,
) -> Build:
    body: Dict[str, Any] = {"image": image, "stack": stack}
    if procfile:
        body["procfile"] = procfile
    if dryccfile:
        body["dryccfile"] = dryccfile
    return Build.model_validate(c.post(f"apps/{app_id}/builds/", body))


def latest(c: Client, app_id: str) -> Optional[Build]:
    """Most recent build, or None when the app has never been built."""
    results, _ = list_builds(c, app_id, limit=1)
    return results[0] if results else None
