"""
HTTP client wrapper for the controller REST API.

One ``Client`` per command invocation. It prefixes relative paths with
``/v2/``, attaches the bearer token and user agent, records the API
version the controller announces, and maps status codes to the error
taxonomy in :mod:`drycc_cli.errors`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple
from urllib.parse import urljoin, urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from . import API_VERSION, DEFAULT_LIMIT, USER_AGENT
from .errors import (
    APIMismatchError,
    ClientError,
    ConflictError,
    NetworkError,
    NotFoundError,
    ServerError,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/v2/"
API_VERSION_HEADER = "DRYCC_API_VERSION"
DEFAULT_TIMEOUT = 30


def _retry_policy() -> Retry:
    return Retry(
        total=3,
        backoff_factor=0.3,
        status_forcelist=(502, 503, 504),
        allowed_methods=frozenset(["GET", "HEAD"]),
        raise_on_status=False,
    )


def format_body(body: Any) -> str:
    """Render a controller error body for humans."""
    if isinstance(body, dict):
        lines = []
        for key, value in body.items():
            if isinstance(value, list):
                value = " ".join(str(v) for v in value)
            lines.append(f"{key}: {value}")
        return "\n".join(lines)
    if isinstance(body, list):
        return "\n".join(str(v) for v in body)
    return str(body or "").strip()


class Client:
    """Authenticated handle on one controller.

    Args:
        controller: Absolute base URL, e.g. ``http://drycc.example.com``.
        token: Bearer token; requests go out unauthenticated when empty.
        ssl_verify: Verify TLS certificates. Disable for self-signed setups.
        response_limit: Default page size for list endpoints.
        on_mismatch: Called with an ``APIMismatchError`` whenever a response
            announces an API version different from ``API_VERSION``.
    """

    def __init__(
        self,
        controller: str,
        token: str = "",
        ssl_verify: bool = True,
        response_limit: int = DEFAULT_LIMIT,
        user_agent: str = USER_AGENT,
        timeout: int = DEFAULT_TIMEOUT,
        on_mismatch: Optional[Callable[[APIMismatchError], None]] = None,
    ) -> None:
        self.controller = controller.rstrip("/")
        self.token = token
        self.ssl_verify = ssl_verify
        self.response_limit = response_limit
        self.user_agent = user_agent
        self.timeout = timeout
        self.on_mismatch = on_mismatch
        self.api_version = ""

        self.session = requests.Session()
        adapter = HTTPAdapter(max_retries=_retry_policy())
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        if not ssl_verify:
            import urllib3

            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    @property
    def host(self) -> str:
        return urlparse(self.controller).netloc

    def url(self, path: str) -> str:
        """Build an absolute URL; relative paths land under ``/v2/``."""
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = API_PREFIX + path
        return urljoin(self.controller + "/", path.lstrip("/"))

    def headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        stream: bool = False,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> requests.Response:
        """Perform one request and classify the outcome.

        Returns:
            requests.Response: The 2xx response.

        Raises:
            NetworkError: Transport failure.
            ClientError: 4xx answer (``NotFoundError``/``ConflictError`` for 404/409).
            ServerError: 5xx answer.
        """
        url = self.url(path)
        data = json.dumps(body) if body is not None else None
        try:
            resp = self.session.request(
                method,
                url,
                data=data,
                params=params,
                headers=self.headers(),
                verify=self.ssl_verify,
                stream=stream,
                timeout=timeout,
            )
        except requests.RequestException as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            raise NetworkError(f"{method} {url}: {exc}") from exc

        server_version = resp.headers.get(API_VERSION_HEADER)
        logger.debug("%s %s -> %s (api %s)", method, url, resp.status_code, server_version)
        if server_version is not None:
            self.api_version = server_version
            if server_version != API_VERSION and self.on_mismatch is not None:
                self.on_mismatch(APIMismatchError(API_VERSION, server_version))

        self._raise_for_status(resp)
        return resp

    @staticmethod
    def _raise_for_status(resp: requests.Response) -> None:
        status = resp.status_code
        if status < 400:
            return
        try:
            body: Any = resp.json()
        except ValueError:
            body = resp.text
        detail = format_body(body)
        summary = f"{status} {resp.reason or ''}".strip()
        message = f"{summary}\n{detail}" if detail else summary
        if status == 404:
            raise NotFoundError(message, body=body)
        if status == 409:
            raise ConflictError(message, body=body)
        if status < 500:
            raise ClientError(message, status=status, body=body)
        raise ServerError(f"{summary}: the controller failed to handle the request, please try again later", status=status)

    # -- JSON helpers -------------------------------------------------------

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return _json(self.request("GET", path, params=params))

    def post(self, path: str, body: Any = None) -> Any:
        return _json(self.request("POST", path, body=body))

    def put(self, path: str, body: Any = None) -> Any:
        return _json(self.request("PUT", path, body=body))

    def patch(self, path: str, body: Any = None) -> Any:
        return _json(self.request("PATCH", path, body=body))

    def delete(self, path: str, body: Any = None) -> None:
        self.request("DELETE", path, body=body)

    def list(
        self, path: str, limit: Optional[int] = None, params: Optional[Dict[str, Any]] = None
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Fetch one page of a paginated list endpoint.

        Returns:
            tuple: ``(results, count)`` where count is the server-side total.
        """
        query = dict(params or {})
        query["limit"] = limit if limit and limit > 0 else self.response_limit
        data = self.get(path, params=query) or {}
        results = data.get("results", [])
        return results, int(data.get("count", len(results)))

    def healthcheck(self) -> None:
        """``GET /v2/``: verifies connectivity and refreshes ``api_version``."""
        self.request("GET", API_PREFIX)

    def stream_lines(
        self, path: str, params: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None
    ) -> Iterator[str]:
        """Yield decoded lines from a streaming GET."""
        resp = self.request("GET", path, params=params, stream=True, timeout=timeout)
        if resp.encoding is None:
            resp.encoding = "utf-8"
        with resp:
            for line in resp.iter_lines(decode_unicode=True):
                if line is not None:
                    yield line


def _json(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text
