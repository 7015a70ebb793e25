"""Error taxonomy surfaced to the user.

Every error raised by the command runner derives from ``DryccError``;
the root entry point prints ``Error: <message>`` and exits 1.
"""

from __future__ import annotations

from typing import Any, Optional


class DryccError(Exception):
    """Base class for user-facing errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NoSessionError(DryccError):
    """No profile exists on disk."""

    def __init__(self, message: str = "") -> None:
        super().__init__(
            message or "Not logged in. Use 'drycc login' to get started."
        )


class CorruptProfileError(DryccError):
    """The profile file exists but cannot be parsed."""


class NetworkError(DryccError):
    """Transport failure talking to the controller."""


class ClientError(DryccError):
    """The controller answered with a 4xx status.

    Attributes:
        status: HTTP status code.
        body: Decoded response body (JSON value or raw text).
    """

    def __init__(self, message: str, status: int = 400, body: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class NotFoundError(ClientError):
    """404 from the controller."""

    def __init__(self, message: str, body: Any = None) -> None:
        super().__init__(message, status=404, body=body)


class ConflictError(ClientError):
    """409 from the controller."""

    def __init__(self, message: str, body: Any = None) -> None:
        super().__init__(message, status=409, body=body)


class ServerError(DryccError):
    """The controller answered with a 5xx status."""

    def __init__(self, message: str, status: int = 500) -> None:
        super().__init__(message)
        self.status = status


class APIMismatchError(DryccError):
    """Client and controller API versions differ. Only ever a warning."""

    def __init__(self, client_version: str, server_version: str) -> None:
        super().__init__(
            f"Client and server API versions do not match. "
            f"Client version: {client_version}, server version: {server_version}"
        )
        self.client_version = client_version
        self.server_version = server_version


class ValidationError(DryccError, ValueError):
    """Malformed user input rejected by a parser."""

    def __init__(self, message: str, token: Optional[str] = None) -> None:
        super().__init__(message)
        self.token = token


class CancelledError(DryccError):
    """The user declined a confirmation prompt."""


class GitError(DryccError):
    """A git subprocess failed."""


class RemoteNotFoundError(GitError):
    """No git remote matches the requested app or name."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or "Could not find remote matching app in 'git remote -v'")
