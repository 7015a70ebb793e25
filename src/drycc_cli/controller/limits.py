"""Hardware specs and resource plans for ``limits``."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..client import Client
from .models import LimitPlan, LimitSpec


def specs(c: Client, keywords: str = "", limit: Optional[int] = None) -> Tuple[List[LimitSpec], int]:
    params = {"keywords": keywords} if keywords else None
    results, count = c.list("limits/specs/", limit, params=params)
    return [LimitSpec.model_validate(r) for r in results], count


def plans(
    c: Client, spec_id: str = "", cpu: int = 0, memory: int = 0, limit: Optional[int] = None
) -> Tuple[List[LimitPlan], int]:
    params: Dict[str, Any] = {}
    if spec_id:
        params["spec-id"] = spec_id
    if cpu:
        params["cpu"] = cpu
    if memory:
        params["memory"] = memory
    results, count = c.list("limits/plans/", limit, params=params)
    return [LimitPlan.model_validate(r) for r in results], count


def get_plan(c: Client, plan_id: str) -> LimitPlan:
    return LimitPlan.model_validate(c.get(f"limits/plans/{plan_id}/"))
