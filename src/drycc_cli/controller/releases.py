"""Releases: history, inspection, deploy and rollback."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..client import Client
from .models import Release


def list_releases(c: Client, app_id: str, limit: Optional[int] = None) -> Tuple[List[Release], int]:
    results, count = c.list(f"apps/{app_id}/releases/", limit)
    return [Release.model_validate(r) for r in results], count


def get(c: Client, app_id: str, version: int) -> Release:
    return Release.model_validate(c.get(f"apps/{app_id}/releases/v{version}/"))


def rollback(c: Client, app_id: str, version: Optional[int] = None, ptypes: Optional[List[str]] = None) -> int:
    """Roll back to ``version`` (the previous release when None).

    Returns:
        int: The version number of the new release.
    """
    body: Dict[str, Any] = {}
    if version is not None:
        body["version"] = version
    if ptypes:
        body["ptypes"] = ",".join(ptypes)
    data = c.post(f"apps/{app_id}/releases/rollback/", body) or {}
    return int(data.get("version", 0))


def deploy(c: Client, app_id: str, ptypes: Optional[List[str]] = None, force: bool = False) -> None:
    body: Dict[str, Any] = {"force": force}
    if ptypes:
        body["ptypes"] = ",".join(ptypes)
    c.post(f"apps/{app_id}/releases/deploy/", body)
