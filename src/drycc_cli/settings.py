"""
Profile store: the single on-disk session record.

A profile name is either a bare identifier (``client``, ``staging``),
resolved to ``~/.drycc/<name>.json``, or a filesystem path to a JSON
file. The file holds the controller URL, the bearer token, the
username, the SSL-verification flag and the default page size.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ValidationError as PydanticValidationError, field_validator

from . import CONFIG_DIR, DEFAULT_LIMIT, DEFAULT_PROFILE, PROFILE_ENV
from .errors import CorruptProfileError, NoSessionError

logger = logging.getLogger(__name__)

_PATH_RE = re.compile(r"[/\\]|\.json$")


class Profile(BaseModel):
    """Persisted session for one controller.

    Attributes:
        username: Display name of the logged-in user.
        ssl_verify: Whether TLS certificates are verified.
        controller: Absolute base URL of the controller.
        token: Opaque bearer token.
        response_limit: Default page size for list commands.
    """

    username: str
    ssl_verify: bool = True
    controller: str
    token: str
    response_limit: int = DEFAULT_LIMIT

    @field_validator("controller")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"controller must be an absolute URL, got {value!r}")
        return value.rstrip("/")

    @field_validator("response_limit", mode="before")
    @classmethod
    def _positive_limit(cls, value):
        if value is None:
            return DEFAULT_LIMIT
        try:
            value = int(value)
        except (TypeError, ValueError):
            return DEFAULT_LIMIT
        return value if value > 0 else DEFAULT_LIMIT

    @property
    def host(self) -> str:
        """Controller host including any port, e.g. ``drycc.example.com:8000``."""
        return urlparse(self.controller).netloc


def profile_name(name: Optional[str] = None) -> str:
    """Pick the profile identifier: explicit value, then environment, then default."""
    return name or os.environ.get(PROFILE_ENV) or DEFAULT_PROFILE


def resolve_path(name: Optional[str] = None) -> Path:
    """Resolve a profile identifier or path to the JSON file location.

    Args:
        name: ``--config`` value, if any.

    Returns:
        Path: Absolute-ish path of the profile file.
    """
    value = os.path.expandvars(os.path.expanduser(profile_name(name)))
    if _PATH_RE.search(value):
        return Path(value)
    return Path(os.path.expanduser(CONFIG_DIR)) / f"{value}.json"


def load(name: Optional[str] = None) -> Profile:
    """Load the active profile.

    Raises:
        NoSessionError: The profile file does not exist.
        CorruptProfileError: The file exists but is not a complete profile.
    """
    path = resolve_path(name)
    logger.debug("Loading profile from %s", path)
    if not path.exists():
        raise NoSessionError()
    try:
        return Profile.model_validate_json(path.read_text(encoding="utf-8"))
    except (PydanticValidationError, UnicodeDecodeError) as exc:
        raise CorruptProfileError(f"{path} is not a valid profile: {exc}") from exc


def save(profile: Profile, name: Optional[str] = None) -> Path:
    """Write the profile atomically with owner-only permissions.

    Returns:
        Path: The file that was written.
    """
    path = resolve_path(name)
    if not path.parent.exists():
        path.parent.mkdir(mode=0o700, parents=True)

    tmp_path = path.with_name(f".{path.name}.tmp")
    fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as fh:
        fh.write(profile.model_dump_json(indent=2))
    os.replace(tmp_path, path)
    os.chmod(path, 0o600)

    logger.debug("Profile written to %s", path)
    return path


def delete(name: Optional[str] = None) -> None:
    """Remove the profile file. A missing file is not an error."""
    path = resolve_path(name)
    try:
        path.unlink()
    except FileNotFoundError:
        return
    logger.debug("Profile %s removed", path)
