"""Gateway API objects: gateways and routes."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..client import Client
from .models import Gateway, Route


def list_gateways(c: Client, app_id: str, limit: Optional[int] = None) -> Tuple[List[Gateway], int]:
    results, count = c.list(f"apps/{app_id}/gateways/", limit)
    return [Gateway.model_validate(r) for r in results], count


def new_gateway(c: Client, app_id: str, name: str, port: int, protocol: str) -> None:
    c.post(f"apps/{app_id}/gateways/", {"name": name, "port": port, "protocol": protocol})


def delete_gateway(c: Client, app_id: str, name: str, port: int, protocol: str) -> None:
    c.delete(f"apps/{app_id}/gateways/", {"name": name, "port": port, "protocol": protocol})


def list_routes(c: Client, app_id: str, limit: Optional[int] = None) -> Tuple[List[Route], int]:
    results, count = c.list(f"apps/{app_id}/routes/", limit)
    return [Route.model_validate(r) for r in results], count


def new_route(c: Client, app_id: str, name: str, kind: str, backend_refs: List[Dict[str, Any]]) -> None:
    body = {"name": name, "kind": kind, "backend_refs": backend_refs}
    c.post(f"apps/{app_id}/routes/", body)


def delete_route(c: Client, app_id: str, name: str) -> None:
    c.delete(f"apps/{app_id}/routes/{name}/")


def attach(c: Client, app_id: str, name: str, port: int, gateway: str) -> None:
    c.patch(f"apps/{app_id}/routes/{name}/attach/", {"port": port, "gateway": gateway})


def detach(c: Client, app_id: str, name: str, port: int, gateway: str) -> None:
    c.patch(f"apps/{app_id}/routes/{name}/detach/", {"port": port, "gateway": gateway})


def get_rules(c: Client, app_id: str, name: str) -> Any:
    return c.get(f"apps/{app_id}/routes/{name}/rules/")


def set_rules(c: Client, app_id: str, name: str, rules: Any) -> None:
    c.put(f"apps/{app_id}/routes/{name}/rules/", rules)
