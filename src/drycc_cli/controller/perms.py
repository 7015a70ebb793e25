"""App collaborators and system administrators."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..client import Client
from .models import Perm, User


def list_perms(c: Client, app_id: str, limit: Optional[int] = None) -> Tuple[List[Perm], int]:
    results, count = c.list(f"apps/{app_id}/perms/", limit)
    return [Perm.model_validate(r) for r in results], count


def new(c: Client, app_id: str, username: str, permissions: str) -> None:
    c.post(f"apps/{app_id}/perms/", {"username": username, "permissions": permissions})


def update(c: Client, app_id: str, username: str, permissions: str) -> None:
    c.put(f"apps/{app_id}/perms/{username}/", {"username": username, "permissions": permissions})


def delete(c: Client, app_id: str, username: str) -> None:
    c.delete(f"apps/{app_id}/perms/{username}/")


def list_admins(c: Client, limit: Optional[int] = None) -> Tuple[List[User], int]:
    results, count = c.list("admin/perms/", limit)
    return [User.model_validate(r) for r in results], count


def new_admin(c: Client, username: str) -> None:
    c.post("admin/perms/", {"username": username})


def delete_admin(c: Client, username: str) -> None:
    c.delete(f"admin/perms/{username}/")
