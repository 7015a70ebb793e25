"""
Pure input parsers.

Each parser rejects malformed input with a ``ValidationError`` whose
message quotes the offending token verbatim.
"""

from __future__ import annotations

import base64
import binascii
import os
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import yaml

from .errors import ValidationError

CONFIG_RE = re.compile(r"^([A-Za-z0-9_.-]+)=([\s\S]*)$")
LIMIT_RE = re.compile(r"^([a-z0-9]+(?:-[a-z0-9]+)*)=([0-9]+[bkmgBKMG]{1,2}|[0-9.]{1,5}m?)$")
PTYPE_COUNT_RE = re.compile(r"^([a-z0-9]+(?:-[a-z0-9]+)*)=([0-9]+)$")
MOUNT_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*):([\s\S]*)$")
VOLUME_SIZE_RE = re.compile(r"^[1-9][0-9]*[gG]$")
VOLUME_PATH_RE = re.compile(r"^([a-z0-9]+(?:-[a-z0-9]+)*)=(/([\w]+[\w-]*/?)+)$")
PORTS_RE = re.compile(r"^([1-9][0-9]*):([1-9][0-9]*)$")
BACKEND_RE = re.compile(r"^([a-z0-9]+(?:-[a-z0-9]+)*):([0-9]+),([0-9]+)$")
PARAM_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z0-9_]+)*)=([\s\S]*)$")
PUB_KEY_RE = re.compile(r"^(ssh-...|ecdsa-[^ ]+) ([^ ]+) ?(.*)")
PRIVATE_KEY_RE = re.compile(r"^-----BEGIN (DSA|RSA|EC|OPENSSH) PRIVATE KEY-----")
VERSION_RE = re.compile(r"^v?([0-9]+)$")


def parse_key_values(items: Iterable[str]) -> Dict[str, str]:
    """Parse ``KEY=value`` tokens; lines starting with ``#`` are skipped."""
    result: Dict[str, str] = {}
    for item in items:
        if item.startswith("#"):
            continue
        match = CONFIG_RE.match(item)
        if not match:
            raise ValidationError(
                f"'{item}' does not match the pattern 'key=var', ex: MODE=test", item
            )
        result[match.group(1)] = match.group(2)
    return result


def parse_limit(token: str) -> Tuple[str, str]:
    """``web=2G`` -> ``("web", "2G")``."""
    match = LIMIT_RE.match(token)
    if not match:
        raise ValidationError(
            f"{token} doesn't fit format type=#unit or type=#\n"
            "Examples: web=2G worker=500M web=300",
            token,
        )
    return match.group(1), match.group(2)


def parse_limits(tokens: Iterable[str]) -> Dict[str, str]:
    return dict(parse_limit(t) for t in tokens)


def parse_scale(token: str) -> Tuple[str, int]:
    """``web=2`` -> ``("web", 2)``."""
    match = PTYPE_COUNT_RE.match(token)
    if not match:
        raise ValidationError(
            f"'{token}' does not match the pattern 'type=num', ex: web=2", token
        )
    return match.group(1), int(match.group(2))


def parse_scales(tokens: Iterable[str]) -> Dict[str, int]:
    return dict(parse_scale(t) for t in tokens)


def parse_timeout(token: str) -> Tuple[str, int]:
    """``worker=300`` -> ``("worker", 300)``."""
    match = PTYPE_COUNT_RE.match(token)
    if not match:
        raise ValidationError(
            f"{token} doesn't fit format type=#\nExamples: web=30 worker=300", token
        )
    return match.group(1), int(match.group(2))


def parse_timeouts(tokens: Iterable[str]) -> Dict[str, int]:
    return dict(parse_timeout(t) for t in tokens)


def parse_procfile(content: str) -> Dict[str, str]:
    """Parse a Procfile (a YAML mapping of process type to command)."""
    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise ValidationError(f"could not parse Procfile: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError("Procfile must map process types to commands")
    return {str(k): str(v) for k, v in data.items()}


def parse_pub_key(content: str, backup_id: str) -> Tuple[str, str]:
    """Parse an SSH public key into ``(id, public)``.

    The id is the key's trailing comment, else ``backup_id``.
    """
    match = PUB_KEY_RE.match(content)
    if not match:
        raise ValidationError(f"invalid SSH public key {content}", content)
    key_id = match.group(3).strip()
    return (key_id or backup_id), content


def read_pub_key(filename: str) -> Tuple[str, str]:
    """Read and parse a public key file; the id falls back to the file stem."""
    path = Path(filename).expanduser()
    content = path.read_text(encoding="utf-8")
    backup_id = path.name.split(".")[0]
    try:
        return parse_pub_key(content, backup_id)
    except ValidationError:
        raise ValidationError(f"{filename} is not a valid ssh key", filename) from None


def parse_ssh_private_key(value: str) -> str:
    """Accept PEM text, base64 of PEM text, or a path to a PEM file.

    Returns:
        str: The PEM text base64-encoded, ready to store as config.
    """
    pem: Optional[str] = None
    if PRIVATE_KEY_RE.match(value):
        pem = value
    else:
        try:
            decoded = base64.b64decode(value, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError, ValueError):
            decoded = ""
        if PRIVATE_KEY_RE.match(decoded):
            pem = decoded
        elif os.path.isfile(value):
            contents = Path(value).read_text(encoding="utf-8")
            if PRIVATE_KEY_RE.match(contents):
                pem = contents
    if pem is None:
        raise ValidationError(f"could not parse SSH private key:\n {value}", value)
    return base64.b64encode(pem.encode("utf-8")).decode("ascii")


def parse_version(token: str) -> int:
    """``v3`` or ``3`` -> ``3``."""
    match = VERSION_RE.match(token)
    if not match:
        raise ValidationError(f"{token} is not in the form 'v#'", token)
    return int(match.group(1))


def parse_mounts(items: Iterable[str]) -> Dict[str, str]:
    """``apps:run --mount`` tokens, ``VOLUME:/path``."""
    result: Dict[str, str] = {}
    for item in items:
        match = MOUNT_RE.match(item)
        if not match:
            raise ValidationError(
                f"'{item}' does not match the pattern 'key:var', ex: MODE:test", item
            )
        result[match.group(1)] = match.group(2)
    return result


def check_volume_size(size: str) -> str:
    if not VOLUME_SIZE_RE.match(size):
        raise ValidationError(f"{size} doesn't fit format #unit\nExamples: 2G 2g", size)
    return size


def parse_volume_paths(items: Iterable[str]) -> Dict[str, str]:
    """``volumes:mount`` tokens, ``ptype=/abs/path``."""
    result: Dict[str, str] = {}
    for item in items:
        match = VOLUME_PATH_RE.match(item)
        if not match:
            raise ValidationError(
                f"'{item}' does not match the pattern 'ptype=path', ex: web=/data", item
            )
        result[match.group(1)] = match.group(2)
    return result


def parse_pairs(items: Iterable[str], example: str) -> Dict[str, str]:
    """Strict ``key=value`` pairs for labels and tags."""
    result: Dict[str, str] = {}
    for item in items:
        parts = item.split("=")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise ValidationError(
                f"{item} is invalid, Must be in format key=value\nExamples: {example}", item
            )
        result[parts[0]] = parts[1]
    return result


def parse_ports(token: str) -> Tuple[int, int]:
    """``80:8000`` -> ``(80, 8000)``."""
    match = PORTS_RE.match(token)
    if not match:
        raise ValidationError(
            f"'{token}' does not match the pattern 'port:targetPort', ex: 80:8000", token
        )
    return int(match.group(1)), int(match.group(2))


def parse_headers(items: Iterable[str]) -> List[Dict[str, str]]:
    """HTTP probe headers, ``"Name: value"``."""
    headers = []
    for item in items:
        name, sep, value = item.partition(":")
        if not sep:
            raise ValidationError(f"could not find separator in header ({item})", item)
        headers.append({"name": name.strip(), "value": value.strip()})
    return headers


def parse_backend_refs(items: Iterable[str]) -> List[Dict[str, object]]:
    """Route backends, ``ptype:port,weight``."""
    refs: List[Dict[str, object]] = []
    for item in items:
        match = BACKEND_RE.match(item)
        if not match:
            raise ValidationError(f"backend must be in 'service:port,weight' format, got {item}", item)
        refs.append(
            {
                "kind": "Service",
                "name": match.group(1),
                "port": int(match.group(2)),
                "weight": int(match.group(3)),
            }
        )
    return refs


def parse_params(items: Iterable[str]) -> Dict[str, str]:
    """Resource options, ``key=value`` with dotted keys allowed."""
    result: Dict[str, str] = {}
    for item in items:
        match = PARAM_RE.match(item)
        if not match:
            raise ValidationError(
                f"'{item}' does not match the pattern 'key=var', ex: MODE=test", item
            )
        result[match.group(1)] = match.group(2)
    return result
