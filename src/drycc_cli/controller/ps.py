"""Processes (pods) and process types (ptypes)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..client import Client
from .models import Event, Pod, Ptype


def list_pods(c: Client, app_id: str, limit: Optional[int] = None) -> Tuple[List[Pod], int]:
    results, count = c.list(f"apps/{app_id}/pods/", limit)
    return [Pod.model_validate(r) for r in results], count


def describe_pod(c: Client, app_id: str, pod: str) -> List[Dict[str, Any]]:
    """Container states of one pod."""
    return _results(c.get(f"apps/{app_id}/pods/{pod}/describe/"))


def exec_pod(c: Client, app_id: str, pod: str, command: List[str], tty: bool = False) -> Dict[str, Any]:
    body = {"command": command, "tty": tty, "stdin": False}
    return c.post(f"apps/{app_id}/pods/{pod}/exec/", body) or {}


def list_ptypes(c: Client, app_id: str, limit: Optional[int] = None) -> Tuple[List[Ptype], int]:
    results, count = c.list(f"apps/{app_id}/ptypes/", limit)
    return [Ptype.model_validate(r) for r in results], count


def describe_ptype(c: Client, app_id: str, ptype: str) -> List[Dict[str, Any]]:
    return _results(c.get(f"apps/{app_id}/ptypes/{ptype}/describe/"))


def scale(c: Client, app_id: str, targets: Dict[str, int]) -> None:
    c.post(f"apps/{app_id}/ptypes/scale/", targets)


def restart(c: Client, app_id: str, ptypes: Optional[List[str]] = None) -> None:
    body = {"types": ",".join(ptypes)} if ptypes else {}
    c.post(f"apps/{app_id}/ptypes/restart/", body)


def start(c: Client, app_id: str, ptypes: List[str]) -> None:
    c.post(f"apps/{app_id}/ptypes/start/", {"types": ",".join(ptypes)})


def stop(c: Client, app_id: str, ptypes: List[str]) -> None:
    c.post(f"apps/{app_id}/ptypes/stop/", {"types": ",".join(ptypes)})


def clean(c: Client, app_id: str, ptypes: List[str]) -> None:
    c.post(f"apps/{app_id}/ptypes/clean/", {"ptypes": ",".join(ptypes)})


def list_events(c: Client, app_id: str, ptype: str = "", pod: str = "", limit: Optional[int] = None) -> List[Event]:
    params: Dict[str, Any] = {}
    if ptype:
        params["ptype_name"] = ptype
    if pod:
        params["pod_name"] = pod
    results, _ = c.list(f"apps/{app_id}/events/", limit, params=params)
    return [Event.model_validate(r) for r in results]


def _results(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, list):
        return data
    return (data or {}).get("results", [])
