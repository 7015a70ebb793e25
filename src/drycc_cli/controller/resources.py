"""Backing resources provisioned from a service catalogue."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..client import Client
from .models import ResourcePlan, ResourceService, ServiceInstance


def services(c: Client, limit: Optional[int] = None) -> Tuple[List[ResourceService], int]:
    results, count = c.list("resources/services/", limit)
    return [ResourceService.model_validate(r) for r in results], count


def plans(c: Client, service: str, limit: Optional[int] = None) -> Tuple[List[ResourcePlan], int]:
    results, count = c.list(f"resources/services/{service}/plans/", limit)
    return [ResourcePlan.model_validate(r) for r in results], count


def create(c: Client, app_id: str, name: str, plan: str, params: Dict[str, Any]) -> ServiceInstance:
    body: Dict[str, Any] = {"name": name, "plan": plan}
    if params:
        body["options"] = params
    return ServiceInstance.model_validate(c.post(f"apps/{app_id}/resources/", body))


def list_resources(c: Client, app_id: str, limit: Optional[int] = None) -> Tuple[List[ServiceInstance], int]:
    results, count = c.list(f"apps/{app_id}/resources/", limit)
    return [ServiceInstance.model_validate(r) for r in results], count


def get(c: Client, app_id: str, name: str) -> ServiceInstance:
    return ServiceInstance.model_validate(c.get(f"apps/{app_id}/resources/{name}/"))


def update(c: Client, app_id: str, name: str, plan: str, params: Dict[str, Any]) -> ServiceInstance:
    body: Dict[str, Any] = {"name": name}
    if plan:
        body["plan"] = plan
    if params:
        body["options"] = params
    return ServiceInstance.model_validate(c.put(f"apps/{app_id}/resources/{name}/", body))


def delete(c: Client, app_id: str, name: str) -> None:
    c.delete(f"apps/{app_id}/resources/{name}/")


def bind(c: Client, app_id: str, name: str) -> ServiceInstance:
    return ServiceInstance.model_validate(
        c.patch(f"apps/{app_id}/resources/{name}/binding/", {"bind_action": "bind"})
    )


def unbind(c: Client, app_id: str, name: str) -> ServiceInstance:
    return ServiceInstance.model_validate(
        c.patch(f"apps/{app_id}/resources/{name}/binding/", {"bind_action": "unbind"})
    )
