"""Per-app settings (toggles, autoscale, labels, canaries) and TLS."""

from __future__ import annotations

from typing import Any, Dict, List

from ..client import Client
from .models import TLS, AppSettings


def get(c: Client, app_id: str) -> AppSettings:
    return AppSettings.model_validate(c.get(f"apps/{app_id}/settings/"))


def set_settings(c: Client, app_id: str, changes: Dict[str, Any]) -> AppSettings:
    return AppSettings.model_validate(c.post(f"apps/{app_id}/settings/", changes))


def canary_remove(c: Client, app_id: str, ptypes: List[str]) -> None:
    c.delete(f"apps/{app_id}/settings/", {"canaries": ptypes})


def canary_release(c: Client, app_id: str) -> None:
    c.post(f"apps/{app_id}/canary/release/", {})


def canary_rollback(c: Client, app_id: str) -> None:
    c.post(f"apps/{app_id}/canary/rollback/", {})


def tls_info(c: Client, app_id: str) -> TLS:
    return TLS.model_validate(c.get(f"apps/{app_id}/tls/"))


def tls_set(c: Client, app_id: str, changes: Dict[str, Any]) -> TLS:
    return TLS.model_validate(c.post(f"apps/{app_id}/tls/", changes))
