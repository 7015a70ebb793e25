"""App configuration (env values, limits, timeouts, healthchecks, registry, tags)."""

from __future__ import annotations

from typing import Any, Dict

from ..client import Client
from .models import Config


def get(c: Client, app_id: str) -> Config:
    return Config.model_validate(c.get(f"apps/{app_id}/config/"))


def set_config(c: Client, app_id: str, changes: Dict[str, Any]) -> Config:
    """POST a partial config; ``None`` values unset keys server-side."""
    return Config.model_validate(c.post(f"apps/{app_id}/config/", changes))
