"""
Shared state and helpers for every command family.

A command method follows one pattern: load the profile, resolve the
app, print an action sentence, run the controller call under a
spinner, then print ``done`` and render the result. Errors propagate
to the root entry point.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import IO, Any, Callable, Iterable, Optional, Sequence, Tuple

from .. import git, progress, settings
from ..client import Client
from ..errors import APIMismatchError
from ..settings import Profile
from ..table import print_kv, print_table
from ..utils import open_browser

logger = logging.getLogger(__name__)

MISMATCH_WARNING = (
    "!    WARNING: Client and server API versions do not match. Please consider upgrading.\n"
    "!    Client version: {client}\n"
    "!    Server version: {server}\n"
)


class BaseCommand:
    """Per-invocation runner state.

    Attributes:
        config_file: ``--config`` value (profile name or path), if given.
        w_out: Standard output stream.
        w_err: Standard error stream (API mismatch warnings).
        w_in: Standard input, read by confirmation prompts.
        warned: Set once the API mismatch warning has been printed.
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        w_out: Optional[IO[str]] = None,
        w_err: Optional[IO[str]] = None,
        w_in: Optional[IO[str]] = None,
        git_runner: git.GitRunner = git.run_git,
        browser: Callable[[str], None] = open_browser,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config_file = config_file
        self.w_out = w_out or sys.stdout
        self.w_err = w_err or sys.stderr
        self.w_in = w_in or sys.stdin
        self.git_runner = git_runner
        self.browser = browser
        self.sleep = sleep
        self.warned = False
        self.progress_interval = progress.TICK

    # -- output -------------------------------------------------------------

    def write(self, text: str) -> None:
        self.w_out.write(text)
        self.w_out.flush()

    def writeln(self, text: str = "") -> None:
        self.write(f"{text}\n")

    def print_table(self, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
        print_table(self.w_out, headers, rows)

    def print_kv(self, pairs: Iterable[Tuple[str, Any]], indent: str = "") -> None:
        print_kv(self.w_out, pairs, indent)

    def progress(self) -> progress.ProgressToken:
        """Spinner on standard output; use as a context manager."""
        return progress.ProgressToken(self.w_out, self.progress_interval)

    def confirm_prompt(self, message: str) -> str:
        """Print ``message`` and read one answer line from standard input."""
        self.write(message)
        return self.w_in.readline().strip()

    # -- session ------------------------------------------------------------

    def load_profile(self) -> Profile:
        return settings.load(self.config_file)

    def save_profile(self, profile: Profile) -> str:
        return str(settings.save(profile, self.config_file))

    def client(self, profile: Optional[Profile] = None) -> Client:
        profile = profile or self.load_profile()
        return self.new_client(profile.controller, profile.token, profile.ssl_verify, profile.response_limit)

    def new_client(
        self, controller: str, token: str = "", ssl_verify: bool = True, response_limit: int = 0
    ) -> Client:
        kwargs = {"response_limit": response_limit} if response_limit else {}
        return Client(
            controller, token=token, ssl_verify=ssl_verify, on_mismatch=self._warn_mismatch, **kwargs
        )

    def load_app(self, app_id: Optional[str] = None) -> Tuple[Client, str]:
        """Client plus the target app: ``--app`` if given, else detected from git."""
        c = self.client()
        if not app_id:
            app_id = git.detect_app_name(c.host, self.git_runner)
            logger.debug("Detected app %s from git", app_id)
        return c, app_id

    def _warn_mismatch(self, err: APIMismatchError) -> None:
        if self.warned:
            return
        self.w_err.write(MISMATCH_WARNING.format(client=err.client_version, server=err.server_version))
        self.w_err.flush()
        self.warned = True

    def elapsed(self, start: float) -> int:
        return int(time.time() - start)
