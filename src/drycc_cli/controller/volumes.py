"""Persistent volumes and their mount paths."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..client import Client
from .models import Volume


def list_volumes(c: Client, app_id: str, limit: Optional[int] = None) -> Tuple[List[Volume], int]:
    results, count = c.list(f"apps/{app_id}/volumes/", limit)
    return [Volume.model_validate(r) for r in results], count


def get(c: Client, app_id: str, name: str) -> Volume:
    return Volume.model_validate(c.get(f"apps/{app_id}/volumes/{name}/"))


def create(
    c: Client,
    app_id: str,
    name: str,
    size: str,
    vtype: Optional[str] = None,
    parameters: Optional[Dict[str, Any]] = None,
) -> Volume:
    body: Dict[str, Any] = {"name": name, "size": size}
    if vtype:
        body["type"] = vtype
    if parameters:
        body["parameters"] = parameters
    return Volume.model_validate(c.post(f"apps/{app_id}/volumes/", body))


def expand(c: Client, app_id: str, name: str, size: str) -> Volume:
    return Volume.model_validate(c.patch(f"apps/{app_id}/volumes/{name}/", {"size": size}))


def delete(c: Client, app_id: str, name: str) -> None:
    c.delete(f"apps/{app_id}/volumes/{name}/")


def mount(c: Client, app_id: str, name: str, paths: Dict[str, Optional[str]]) -> Volume:
    """Set ``ptype -> path`` mounts; ``None`` unmounts that ptype."""
    return Volume.model_validate(c.patch(f"apps/{app_id}/volumes/{name}/path/", {"path": paths}))
