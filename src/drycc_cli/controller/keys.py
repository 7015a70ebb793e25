"""SSH public keys registered for the current user."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..client import Client
from .models import Key


def list_keys(c: Client, limit: Optional[int] = None) -> Tuple[List[Key], int]:
    results, count = c.list("keys/", limit)
    return [Key.model_validate(r) for r in results], count


def new(c: Client, key_id: str, public: str) -> Key:
    return Key.model_validate(c.post("keys/", {"id": key_id, "public": public}))


def delete(c: Client, key_id: str) -> None:
    c.delete(f"keys/{key_id}")
