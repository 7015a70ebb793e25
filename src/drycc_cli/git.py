"""
Git remote helper.

Every operation shells out through a ``runner`` callable taking the git
argument list and returning stdout; tests pass a fake. The default
runner raises ``GitError`` carrying git's stderr and exit status.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Callable, List, Optional

from .errors import GitError, RemoteNotFoundError

logger = logging.getLogger(__name__)

BUILDER_PORT = 2222
DEFAULT_REMOTE = "drycc"

GitRunner = Callable[[List[str]], str]


class GitCommandError(GitError):
    """A git invocation exited non-zero."""

    def __init__(self, args: List[str], returncode: int, stderr: str) -> None:
        detail = stderr.strip() or f"git {' '.join(args)} exited with status {returncode}"
        super().__init__(detail)
        self.returncode = returncode
        self.stderr = stderr


def run_git(args: List[str]) -> str:
    """Run ``git <args>`` in the current directory and return stdout."""
    logger.debug("git %s", " ".join(args))
    try:
        proc = subprocess.run(["git"] + args, capture_output=True, text=True, check=False)
    except FileNotFoundError as exc:
        raise GitError("git is not installed or not on PATH") from exc
    if proc.returncode != 0:
        raise GitCommandError(args, proc.returncode, proc.stderr)
    return proc.stdout


def _strip_port(host: str) -> str:
    return host.split(":")[0]


def builder_hostname(host: str) -> str:
    """``drycc.example.com`` -> ``drycc-builder.example.com``."""
    labels = _strip_port(host).split(".")
    labels[0] = f"{labels[0]}-builder"
    return ".".join(labels)


def repository_url(host: str, app_id: str) -> str:
    """SSH URL of the app's repository on the builder."""
    return f"ssh://git@{builder_hostname(host)}:{BUILDER_PORT}/{app_id}.git"


def create_remote(host: str, remote: str, app_id: str, runner: GitRunner = run_git) -> None:
    runner(["remote", "add", remote, repository_url(host, app_id)])


def delete_remote(name: str, runner: GitRunner = run_git) -> None:
    runner(["remote", "remove", name])


def remote_names_for_app(host: str, app_id: str, runner: GitRunner = run_git) -> List[str]:
    """Names of every remote pointing at the app, in ``git remote -v`` order.

    Raises:
        RemoteNotFoundError: No remote points at the app.
    """
    url = repository_url(host, app_id)
    names: List[str] = []
    for line in runner(["remote", "-v"]).splitlines():
        if url in line:
            name = line.split("\t")[0]
            if name not in names:
                names.append(name)
    if not names:
        raise RemoteNotFoundError()
    return names


def delete_app_remotes(host: str, app_id: str, runner: GitRunner = run_git) -> None:
    for name in remote_names_for_app(host, app_id, runner):
        delete_remote(name, runner)


def find_remote(host: str, runner: GitRunner = run_git) -> str:
    """URL of the first remote on the controller or builder host."""
    host = _strip_port(host)
    builder = builder_hostname(host)
    for line in runner(["remote", "-v"]).splitlines():
        fields = line.split("\t", 1)
        if len(fields) != 2:
            continue
        url = fields[1].split(" ")[0]
        if host in url or builder in url:
            return url
    raise RemoteNotFoundError()


def detect_app_name(host: str, runner: GitRunner = run_git, cwd: Optional[str] = None) -> str:
    """App id from the git remote, else the lowercased directory name."""
    try:
        url = find_remote(host, runner)
    except GitError:
        return os.path.basename(os.path.abspath(cwd or os.getcwd())).lower()
    return url.rstrip("/").split("/")[-1].split(".")[0]


def remote_url(name: str, runner: GitRunner = run_git) -> str:
    """URL a named remote points at.

    Raises:
        RemoteNotFoundError: git reports the remote does not exist (exit 128).
    """
    try:
        return runner(["remote", "get-url", name]).strip()
    except GitCommandError as exc:
        if exc.returncode in (2, 128):
            raise RemoteNotFoundError(f"No such remote '{name}'") from exc
        raise
