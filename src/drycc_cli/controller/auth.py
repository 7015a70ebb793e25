"""Authentication, API tokens and user administration."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..client import Client
from .models import Token, User


def login(c: Client, username: str = "", password: str = "") -> str:
    """Start a login and return the grant key.

    With credentials the key is issued directly; without, the controller
    answers a browser URL whose ``key`` query parameter names the grant.
    """
    body: Dict[str, Any] = {}
    if username and password:
        body = {"username": username, "password": password}
    data = c.post("auth/login/", body)
    if isinstance(data, dict):
        return str(data.get("key") or data.get("url") or "")
    return str(data or "")


def token(c: Client, key: str, alias: str = "") -> Dict[str, Any]:
    """Poll for the token issued against a browser ``key``."""
    params = {"alias": alias} if alias else None
    return c.get(f"auth/token/{key}/", params=params) or {}


def whoami(c: Client) -> User:
    return User.model_validate(c.get("auth/whoami/"))


def list_tokens(c: Client, limit: Optional[int] = None) -> Tuple[List[Token], int]:
    results, count = c.list("tokens/", limit)
    return [Token.model_validate(r) for r in results], count


def delete_token(c: Client, token_id: str) -> None:
    c.delete(f"tokens/{token_id}/")


def list_users(c: Client, limit: Optional[int] = None) -> Tuple[List[User], int]:
    results, count = c.list("users/", limit)
    return [User.model_validate(r) for r in results], count


def enable_user(c: Client, username: str) -> None:
    c.patch(f"users/{username}/enable/")


def disable_user(c: Client, username: str) -> None:
    c.patch(f"users/{username}/disable/")
