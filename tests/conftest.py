"""Shared test fixtures for drycc-cli.

The fake controller is a requests transport adapter: every ``Client``
built during a test mounts it instead of ``HTTPAdapter``, so commands
run end to end without a network.
"""

from __future__ import annotations

import io
import json
import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

import pytest
import requests
from requests.adapters import BaseAdapter

from drycc_cli import API_VERSION
from drycc_cli.commands import DryccCmd
from drycc_cli.progress import BACKSPACES, FRAMES

CONTROLLER = "http://drycc.example.com"

_SPINNER_RE = re.compile("(?:" + "|".join(re.escape(f) for f in FRAMES) + ")" + re.escape(BACKSPACES))


def strip_progress(text: str) -> str:
    """Remove spinner frames and their backspaces from captured output."""
    return _SPINNER_RE.sub("", text)


class Recorded:
    """One request seen by the fake controller."""

    def __init__(self, method: str, path: str, query: Dict[str, List[str]], body: Any, headers: Dict[str, str]):
        self.method = method
        self.path = path
        self.query = query
        self.body = body
        self.headers = headers

    def __repr__(self) -> str:
        return f"<{self.method} {self.path}>"


class FakeController(BaseAdapter):
    """Routes ``(method, path)`` to canned responses.

    A handler is either a JSON value (answered with 200), a
    ``(status, body)`` tuple, or a callable taking the ``Recorded``
    request and returning one of those.
    """

    def __init__(self, api_version: str = API_VERSION) -> None:
        super().__init__()
        self.api_version = api_version
        self.routes: Dict[Tuple[str, str], Any] = {}
        self.requests: List[Recorded] = []

    def on(self, method: str, path: str, handler: Any = None) -> "FakeController":
        self.routes[(method.upper(), path)] = handler
        return self

    def last(self, method: Optional[str] = None) -> Recorded:
        matching = [r for r in self.requests if method is None or r.method == method]
        return matching[-1]

    def send(self, request: requests.PreparedRequest, **kwargs) -> requests.Response:
        parsed = urlparse(request.url)
        raw = request.body
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        body = json.loads(raw) if raw else None
        record = Recorded(request.method, parsed.path, parse_qs(parsed.query), body, dict(request.headers))
        self.requests.append(record)

        key = (request.method, parsed.path)
        if key not in self.routes:
            return self._response(request, 404, {"detail": "Not found."})
        handler = self.routes[key]
        if callable(handler):
            handler = handler(record)
        status, payload = handler if isinstance(handler, tuple) else (200, handler)
        return self._response(request, status, payload)

    def _response(self, request: requests.PreparedRequest, status: int, payload: Any) -> requests.Response:
        if payload is None:
            content = b""
        elif isinstance(payload, str):
            content = payload.encode("utf-8")
        else:
            content = json.dumps(payload).encode("utf-8")
        resp = requests.Response()
        resp.status_code = status
        resp.reason = {200: "OK", 201: "Created", 204: "No Content", 404: "Not Found"}.get(status, "")
        resp.headers["DRYCC_API_VERSION"] = self.api_version
        resp.headers["Content-Type"] = "application/json"
        resp.url = request.url
        resp.request = request
        resp.encoding = "utf-8"
        resp.raw = io.BytesIO(content)
        resp._content = content
        resp._content_consumed = True
        return resp

    def close(self) -> None:
        pass


@pytest.fixture
def controller(monkeypatch) -> FakeController:
    """Fake controller mounted on every Client created during the test."""
    fake = FakeController()
    monkeypatch.setattr("drycc_cli.client.HTTPAdapter", lambda *args, **kwargs: fake)
    return fake


@pytest.fixture
def drycc_home(tmp_path: Path, monkeypatch) -> Path:
    """Isolated HOME so profiles never touch the real ~/.drycc."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("DRYCC_PROFILE", raising=False)
    monkeypatch.delenv("DRYCC_DEBUG", raising=False)
    return home


@pytest.fixture
def profile_path(tmp_path: Path) -> Path:
    """A logged-in profile for alice on the fake controller."""
    path = tmp_path / "profiles" / "client.json"
    path.parent.mkdir()
    path.write_text(
        json.dumps(
            {
                "username": "alice",
                "ssl_verify": False,
                "controller": CONTROLLER,
                "token": "abc",
                "response_limit": 100,
            }
        )
    )
    return path


class FakeGit:
    """Records git invocations and answers from a script of outputs."""

    def __init__(self, remotes: str = "") -> None:
        self.calls: List[List[str]] = []
        self.remotes = remotes
        self.errors: Dict[str, Exception] = {}

    def __call__(self, args: List[str]) -> str:
        self.calls.append(list(args))
        verb = " ".join(args[:2])
        if verb in self.errors:
            raise self.errors[verb]
        if args[:2] == ["remote", "-v"]:
            return self.remotes
        return ""


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def opened() -> List[str]:
    """URLs passed to the browser opener."""
    return []


@pytest.fixture
def make_cmdr(profile_path: Path, fake_git: FakeGit, opened: List[str]) -> Callable[..., DryccCmd]:
    """Build a DryccCmd writing to in-memory streams.

    ``stdin`` pre-loads the answers read by confirmation prompts.
    """

    def factory(stdin: str = "", config_file: Optional[str] = None) -> DryccCmd:
        cmdr = DryccCmd(
            config_file=config_file or str(profile_path),
            w_out=io.StringIO(),
            w_err=io.StringIO(),
            w_in=io.StringIO(stdin),
            git_runner=fake_git,
            browser=opened.append,
            sleep=lambda seconds: None,
        )
        cmdr.progress_interval = 0.01
        return cmdr

    return factory


@pytest.fixture
def cmdr(make_cmdr, controller) -> DryccCmd:
    return make_cmdr()


def output(cmdr: DryccCmd) -> str:
    """Standard output written so far, spinner removed."""
    return strip_progress(cmdr.w_out.getvalue())
