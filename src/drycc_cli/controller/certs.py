"""TLS certificates and their domain bindings."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..client import Client
from .models import Cert


def list_certs(c: Client, app_id: str, limit: Optional[int] = None) -> Tuple[List[Cert], int]:
    results, count = c.list(f"apps/{app_id}/certs/", limit)
    return [Cert.model_validate(r) for r in results], count


def new(c: Client, app_id: str, name: str, certificate: str, key: str) -> Cert:
    body = {"name": name, "certificate": certificate, "key": key}
    return Cert.model_validate(c.post(f"apps/{app_id}/certs/", body))


def get(c: Client, app_id: str, name: str) -> Cert:
    return Cert.model_validate(c.get(f"apps/{app_id}/certs/{name}"))


def delete(c: Client, app_id: str, name: str) -> None:
    c.delete(f"apps/{app_id}/certs/{name}")


def attach(c: Client, app_id: str, name: str, domain: str) -> None:
    c.post(f"apps/{app_id}/certs/{name}/domain/", {"domain": domain})


def detach(c: Client, app_id: str, name: str, domain: str) -> None:
    c.delete(f"apps/{app_id}/certs/{name}/domain/{domain}")
