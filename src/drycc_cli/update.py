"""
Self-update support.

The release manifest is a plain-text file with one download URL per
line; the line ending in ``-<os>-<arch>`` names the binary for this
platform and carries its version between ``drycc-`` and that suffix.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from pathlib import Path
from typing import Callable, Iterable, Tuple

import requests

from .errors import DryccError, NetworkError

logger = logging.getLogger(__name__)

MANIFEST_URL = "https://www.drycc.cc/workflow-cli.txt"
UPDATE_URL_ENV = "DRYCC_UPDATE_URL"
BINARY_PREFIX = "drycc-"

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "i386": "386",
    "i686": "386",
}

Replacer = Callable[[Iterable[bytes], Path], None]


def platform_suffix() -> str:
    """``-linux-amd64`` style suffix for the running interpreter."""
    system = sys.platform
    if system.startswith("linux"):
        os_name = "linux"
    elif system == "darwin":
        os_name = "darwin"
    elif system in ("win32", "cygwin"):
        os_name = "windows"
    else:
        os_name = system
    machine = platform.machine().lower()
    return f"-{os_name}-{_ARCH_ALIASES.get(machine, machine)}"


def manifest_url() -> str:
    return os.environ.get(UPDATE_URL_ENV) or MANIFEST_URL


def select_release(manifest: str, suffix: str) -> Tuple[str, str]:
    """Pick the manifest line for this platform.

    Returns:
        tuple: ``(version, download_url)``.

    Raises:
        DryccError: No line matches ``suffix``.
    """
    for line in manifest.splitlines():
        url = line.strip()
        if url.endswith(suffix):
            name = url.split("/")[-1]
            version = name[: -len(suffix)]
            if version.startswith(BINARY_PREFIX):
                version = version[len(BINARY_PREFIX):]
            return version, url
    raise DryccError(f"unable to obtain version: {suffix.lstrip('-')}")


def fetch_manifest(url: str, timeout: int = 30) -> str:
    logger.debug("Fetching release manifest %s", url)
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise NetworkError(f"could not fetch {url}: {exc}") from exc
    return resp.text


def download(url: str, timeout: int = 300) -> Iterable[bytes]:
    try:
        resp = requests.get(url, stream=True, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise NetworkError(f"could not download {url}: {exc}") from exc
    return resp.iter_content(chunk_size=64 * 1024)


def current_executable() -> Path:
    return Path(sys.argv[0]).resolve()


def replace_binary(chunks: Iterable[bytes], target: Path) -> None:
    """Write the new binary beside ``target`` and rename it into place."""
    tmp_path = target.with_name(f".{target.name}.new")
    with open(tmp_path, "wb") as fh:
        for chunk in chunks:
            fh.write(chunk)
    mode = target.stat().st_mode if target.exists() else 0o755
    os.chmod(tmp_path, mode)
    os.replace(tmp_path, target)
    logger.debug("Replaced %s", target)
