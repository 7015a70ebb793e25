"""Domains and per-ptype services."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..client import Client
from .models import Domain, Service


def list_domains(c: Client, app_id: str, limit: Optional[int] = None) -> Tuple[List[Domain], int]:
    results, count = c.list(f"apps/{app_id}/domains/", limit)
    return [Domain.model_validate(r) for r in results], count


def new_domain(c: Client, app_id: str, domain: str, ptype: str = "web") -> Domain:
    return Domain.model_validate(c.post(f"apps/{app_id}/domains/", {"domain": domain, "ptype": ptype}))


def delete_domain(c: Client, app_id: str, domain: str) -> None:
    c.delete(f"apps/{app_id}/domains/{domain}")


def list_services(c: Client, app_id: str) -> List[Service]:
    data = c.get(f"apps/{app_id}/services/") or {}
    return [Service.model_validate(s) for s in data.get("services", [])]


def new_service(c: Client, app_id: str, ptype: str, port: int, protocol: str, target_port: int) -> None:
    body = {"ptype": ptype, "port": port, "protocol": protocol, "target_port": target_port}
    c.post(f"apps/{app_id}/services/", body)


def delete_service(c: Client, app_id: str, ptype: str, protocol: str, port: int) -> None:
    c.delete(f"apps/{app_id}/services/", {"ptype": ptype, "protocol": protocol, "port": port})
